# packages/gcscodec/src/gcscodec/fingerprint.py
from __future__ import annotations
from typing import Iterable

import numpy as np

from gcscore.digests import DigestLike, resolve
from gcscore.errors import InvalidParamsError

__all__ = ["fingerprint", "fingerprint_many", "as_bytes"]


def as_bytes(data) -> bytes:
    """Frontière d'API : bytes / bytearray / memoryview uniquement (les str sont encodés par l'appelant)."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"expected a bytes-like element, got {type(data).__name__}")


def fingerprint(n: int, p: int, data: bytes, digest: str | DigestLike) -> int:
    """
    Empreinte 64 bits de `data` dans [0, n·2^p).

    - digest < 8 octets : aligné à droite dans 8 octets nuls, lu big-endian ;
    - digest >= 8 octets : 8 premiers octets, big-endian ;
    - puis réduction modulo n·2^p.
    """
    d = resolve(digest).digest(as_bytes(data))
    if len(d) == 0:
        raise InvalidParamsError("fingerprint: digest returned no bytes")
    if len(d) < 8:
        d = bytes(8 - len(d)) + d
    return int.from_bytes(d[:8], "big") % (int(n) << int(p))


def fingerprint_many(n: int, p: int, items: Iterable[bytes], digest: str | DigestLike) -> np.ndarray:
    """Empreintes d'une séquence d'éléments → tableau uint64 (ordre d'entrée conservé)."""
    h = resolve(digest)
    return np.fromiter((fingerprint(n, p, x, h) for x in items), dtype=np.uint64)
