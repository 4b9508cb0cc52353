from __future__ import annotations
import io
import numpy as np
import pytest

from gcscodec import UnpackedGcs, PackedGcs, GcsConfig
from gcscodec.bitstream import BitReader
from gcscodec.golomb import golomb_decode_all, golomb_encode_all
from gcscore.errors import DecodeError, LimitReached

def _build(n, p, items, digest="xxh64"):
    gcs = UnpackedGcs(n, p, digest)
    for x in items:
        gcs.insert(x)
    return gcs

def _items(k, seed=0):
    rng = np.random.default_rng(seed)
    return [rng.bytes(16) for _ in range(k)]

def test_scenario_alpha_bravo():
    gcs = UnpackedGcs(3, 5)
    gcs.insert(b"alpha")
    gcs.insert(b"bravo")
    assert gcs.contains(b"alpha") is True
    assert gcs.contains(b"bravo") is True

    packed = gcs.pack()
    assert packed.contains(b"alpha") and packed.contains(b"bravo")
    again = packed.unpack()
    assert again.contains(b"alpha") and again.contains(b"bravo")

    gcs.insert(b"charlie")
    with pytest.raises(LimitReached):
        gcs.insert(b"delta")
    assert len(gcs) == 3

@pytest.mark.parametrize("n,p,k", [(1, 1, 1), (10, 2, 7), (100, 5, 100), (1000, 10, 640), (50, 20, 50)])
def test_pack_unpack_roundtrip(n, p, k):
    gcs = _build(n, p, _items(k, seed=n + p))
    packed = gcs.pack()
    out = packed.unpack()
    assert (out.n, out.p, out.digest) == (gcs.n, gcs.p, gcs.digest)
    assert np.array_equal(out.fingerprints, gcs.fingerprints)
    # le set compacté n'est pas modifié
    assert np.array_equal(packed.fingerprints(), gcs.fingerprints)

def test_packed_bits_are_delta_golomb_codes():
    gcs = _build(100, 6, _items(40, seed=3))
    fps = [int(v) for v in gcs.fingerprints]
    deltas = [fps[0]] + [b - a for a, b in zip(fps, fps[1:])]
    w = golomb_encode_all(deltas, 6)
    packed = gcs.pack()
    assert packed.to_bytes() == w.to_bytes()
    assert packed.nbits == w.nbits

def test_packed_no_false_negatives():
    items = _items(500, seed=11)
    packed = _build(500, 8, items).pack()
    assert all(packed.contains(x) for x in items)

def test_packed_absent_element():
    gcs = _build(4, 12, [b"alpha", b"bravo"])
    packed = gcs.pack()
    # même réponse que la recherche binaire, faux positif compris
    for probe in (b"charlie", b"delta", b"echo"):
        assert packed.contains(probe) == gcs.contains(probe)

def test_empty_set():
    gcs = UnpackedGcs(5, 4)
    packed = gcs.pack()
    assert packed.nbits == 0 and packed.to_bytes() == b""
    assert packed.contains(b"x") is False
    assert len(packed.unpack()) == 0
    assert len(PackedGcs.from_reader(b"", 5, 4).unpack()) == 0

def test_duplicates_roundtrip_in_memory():
    gcs = _build(6, 3, [b"a", b"a", b"a", b"b"], digest="md5")
    out = gcs.pack().unpack()
    assert np.array_equal(out.fingerprints, gcs.fingerprints)

def test_write_from_reader_roundtrip():
    items = _items(200, seed=5)
    gcs = _build(200, 10, items)
    packed = gcs.pack()
    buf = io.BytesIO()
    assert packed.write(buf) == len(packed.to_bytes())
    raw = buf.getvalue()
    assert len(raw) == (packed.nbits + 7) // 8

    again = PackedGcs.from_reader(io.BytesIO(raw), 200, 10, "xxh64")
    assert all(again.contains(x) for x in items)
    assert np.array_equal(again.unpack().fingerprints, gcs.fingerprints)
    # bytes bruts acceptés aussi
    assert np.array_equal(PackedGcs.from_reader(raw, 200, 10, "xxh64").fingerprints(), gcs.fingerprints)

def test_from_reader_small_p_padding_not_decoded():
    # p=2 : le bourrage (< 8 bits nuls) pourrait se lire comme des deltas nuls
    gcs = _build(3, 2, [b"alpha"], digest="md5")
    packed = gcs.pack()
    again = PackedGcs.from_reader(packed.to_bytes(), 3, 2, "md5")
    assert again.contains(b"alpha")
    assert again.count() == 1

def test_file_roundtrip(tmp_path):
    items = _items(50, seed=8)
    packed = _build(64, 7, items).pack()
    out = tmp_path / "set.gcs"
    packed.write_file(out)
    again = PackedGcs.read_file(out, 64, 7, "xxh64")
    assert again.to_bytes() == packed.to_bytes()
    assert all(again.contains(x) for x in items)

def test_write_propagates_oserror():
    class Full(io.RawIOBase):
        def writable(self):
            return True
        def write(self, b):
            raise OSError("no space left")
    packed = _build(2, 4, [b"x"]).pack()
    with pytest.raises(OSError):
        packed.write(Full())

def test_all_ones_stream_raises_decode_error():
    packed = PackedGcs.from_reader(b"\xff\xff\xff", 10, 4, "md5")
    with pytest.raises(DecodeError):
        packed.contains(b"x")
    with pytest.raises(DecodeError):
        packed.unpack()

def test_truncated_stream_raises_decode_error():
    packed = _build(100, 12, _items(30, seed=2)).pack()
    cut = PackedGcs(packed.config, packed.to_bytes(), nbits=packed.nbits - 3)
    with pytest.raises(DecodeError):
        cut.unpack()
    # la requête d'un élément absent doit parcourir tout le flux → erreur
    with pytest.raises(DecodeError):
        cut.contains(b"definitely-not-inserted-" * 3)

def test_unpack_more_than_n_values_raises():
    gcs = _build(10, 4, _items(10, seed=4))
    raw = gcs.pack().to_bytes()
    with pytest.raises(DecodeError):
        PackedGcs.from_reader(raw, 5, 4, "xxh64").unpack()

def test_unpack_fingerprint_outside_domain_raises():
    # p=4, n=1 : domaine [0, 16) ; delta 100 hors domaine
    w = golomb_encode_all([100], 4)
    packed = PackedGcs(GcsConfig(1, 4), w.to_bytes(), nbits=w.nbits)
    with pytest.raises(DecodeError):
        packed.unpack()

def test_nbits_consistency_checked():
    with pytest.raises(ValueError):
        PackedGcs(GcsConfig(1, 4), b"\x00", nbits=9)

def test_decoded_stream_matches_codec():
    gcs = _build(20, 5, _items(20, seed=9))
    packed = gcs.pack()
    deltas = golomb_decode_all(BitReader(packed.to_bytes(), nbits=packed.nbits), 5)
    assert np.array_equal(np.cumsum(np.array(deltas, dtype=np.uint64)), gcs.fingerprints)

def test_write_resumes_partial_writes():
    class OneByte(io.RawIOBase):
        def __init__(self):
            self.buf = bytearray()
        def writable(self):
            return True
        def write(self, b):
            self.buf += bytes(b[:1])
            return 1
    packed = _build(64, 7, _items(50, seed=9)).pack()
    sink = OneByte()
    assert packed.write(sink) == len(packed.to_bytes())
    assert bytes(sink.buf) == packed.to_bytes()

def test_from_reader_drops_trailing_duplicate_in_padding():
    # [6, 6] avec p=2 : "1010" + "000" tient dans le dernier octet, relu comme bourrage
    cfg = GcsConfig(n=2, p=2, digest="md5")
    packed = UnpackedGcs._from_sorted(cfg, np.array([6, 6], dtype=np.uint64)).pack()
    assert packed.fingerprints().tolist() == [6, 6]
    again = PackedGcs.from_reader(packed.to_bytes(), 2, 2, "md5")
    assert again.fingerprints().tolist() == [6]
