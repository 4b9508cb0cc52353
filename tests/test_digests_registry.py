from gcscore import digests
from gcscore.digests import Digest, register, get, list_digests, resolve
from gcscore.errors import UnknownDigestError, InvalidParamsError
import pytest

def test_builtin_digests_registered():
    names = list_digests()
    for n in ("md5", "sha1", "sha256", "sha512", "blake2b64", "md5_trunc32", "xxh64", "xxh3_64"):
        assert n in names
    assert len(set(names)) == len(names)

def test_builtin_sizes_match_output():
    for name in list_digests():
        d = get(name)
        assert len(d.digest(b"probe")) == d.digest_size

def test_unknown_digest_raises():
    with pytest.raises(UnknownDigestError):
        get("nope")
    with pytest.raises(KeyError):   # UnknownDigestError est une KeyError
        resolve("nope")

def test_register_custom_and_resolve(monkeypatch):
    monkeypatch.setattr(digests, "_REG", dict(digests._REG))
    d = Digest("const4", 4, lambda data: b"\x00\x00\x00\x2a")
    register(d)
    assert get("const4") is d
    assert resolve("const4") is d

def test_register_rejects_empty_size():
    with pytest.raises(InvalidParamsError):
        register(Digest("zero", 0, lambda data: b""))

def test_resolve_rejects_non_digest():
    with pytest.raises(TypeError):
        resolve(object())
