from __future__ import annotations
import pytest

from gcscodec.bitstream import BitWriter, BitReader
from gcscore.errors import DecodeError

def test_writer_msb_first_and_zero_padding():
    w = BitWriter()
    w.write_bits(0b101, 3)
    assert w.nbits == 3
    assert w.to_bytes() == bytes([0b1010_0000])
    w.write_bits(0b11111, 5)
    w.write_bit(1)
    assert w.nbits == 9
    assert w.to_bytes() == bytes([0b1011_1111, 0b1000_0000])

def test_writer_unary_long_runs():
    w = BitWriter()
    w.write_unary(130)   # > un bloc de 56
    r = w.reader()
    assert w.nbits == 131
    assert r.read_unary() == 130
    assert r.exhausted

def test_reader_peek_advance_exhausted():
    r = BitReader(bytes([0b1000_0001]), nbits=8)
    assert r.peek() == 1
    assert r.position == 0          # peek n'avance pas
    r.advance(7)
    assert r.remaining == 1
    assert r.read_bit() == 1
    assert r.exhausted
    assert r.peek() is None
    with pytest.raises(DecodeError):
        r.read_bit()
    with pytest.raises(DecodeError):
        r.advance(1)

def test_reader_read_bits_across_bytes():
    r = BitReader(bytes([0x0F, 0xF0]))
    r.advance(4)
    assert r.read_bits(8) == 0xFF
    assert r.read_bits(4) == 0
    with pytest.raises(DecodeError):
        r.read_bits(1)

def test_reader_nbits_bounds():
    with pytest.raises(ValueError):
        BitReader(b"\x00", nbits=9)

def test_read_unary_without_terminator_raises():
    r = BitReader(b"\xff\xff")
    with pytest.raises(DecodeError):
        r.read_unary()

def test_at_end_padding_rule():
    # 3 bits de données "101", puis 5 bits de bourrage
    r = BitReader(bytes([0b1010_0000]), padded=True)
    assert not r.at_end()
    r.advance(3)
    assert r.at_end()
    # sans padded : les bits restants comptent comme données
    r2 = BitReader(bytes([0b1010_0000]))
    r2.advance(3)
    assert not r2.at_end()
    # bits non nuls dans la queue : pas du bourrage
    r3 = BitReader(bytes([0b1010_0001]), padded=True)
    r3.advance(3)
    assert not r3.at_end()
    assert r3.position == 3
