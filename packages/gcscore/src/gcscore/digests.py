# packages/gcscore/src/gcscore/digests.py
# -----------------------------------------------------------------------------
# Registre des fonctions de hachage (empreintes GCS)

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Protocol
import hashlib

import xxhash

from .errors import UnknownDigestError, InvalidParamsError

"""
Fonctions de hachage "pluggables"
=================================

Le fingerprint GCS ne dépend que d'une capacité `digest(bytes) -> bytes` de
longueur fixe connue. Plutôt qu'un paramètre de type, l'algorithme est un
**objet** stocké comme champ (config / set) :

- soit un nom du registre (ex: "md5", "xxh64"),
- soit n'importe quel objet exposant `digest_size` et `digest(data)`.

Intégrés
--------
md5, sha1, sha256, sha512   → hashlib
blake2b64                   → hashlib.blake2b(digest_size=8)
xxh64, xxh3_64              → xxhash (8 octets big-endian)
md5_trunc32                 → 4 derniers octets du MD5 (compat. implémentation
                              Python de référence de G. Bajo)
"""

__all__ = [
    "DigestLike",
    "Digest",
    "DEFAULT_DIGEST",
    "register",
    "get",
    "resolve",
    "list_digests",
]

DEFAULT_DIGEST = "md5"


class DigestLike(Protocol):
    digest_size: int

    def digest(self, data: bytes) -> bytes: ...


@dataclass(frozen=True)
class Digest:
    """Algorithme nommé : `fn(data) -> bytes` de longueur `digest_size`."""
    name: str
    digest_size: int
    fn: Callable[[bytes], bytes]

    def digest(self, data: bytes) -> bytes:
        return self.fn(data)


_REG: dict[str, Digest] = {}


def register(d: Digest) -> None:
    if d.digest_size <= 0:
        raise InvalidParamsError(f"register: digest '{d.name}' must produce at least 1 byte")
    _REG[d.name] = d


def get(name: str) -> Digest:
    try:
        return _REG[name]
    except KeyError as exc:
        raise UnknownDigestError(f"Digest inconnu: {name}") from exc


def list_digests() -> list[str]:
    return sorted(_REG)


def resolve(digest: str | DigestLike) -> DigestLike:
    """Nom du registre → `Digest` ; objet déjà compatible → renvoyé tel quel."""
    if isinstance(digest, str):
        return get(digest)
    if not hasattr(digest, "digest") or not hasattr(digest, "digest_size"):
        raise TypeError("resolve: expected a digest name or an object with digest()/digest_size")
    if int(digest.digest_size) <= 0:
        raise InvalidParamsError("resolve: digest_size must be >= 1")
    return digest


def _hashlib(name: str) -> Callable[[bytes], bytes]:
    return lambda data: hashlib.new(name, data).digest()


def _md5_trunc32(data: bytes) -> bytes:
    return hashlib.md5(data).digest()[12:16]


def _blake2b64(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=8).digest()


for _name, _size in (("md5", 16), ("sha1", 20), ("sha256", 32), ("sha512", 64)):
    register(Digest(_name, _size, _hashlib(_name)))
register(Digest("blake2b64", 8, _blake2b64))
register(Digest("md5_trunc32", 4, _md5_trunc32))
register(Digest("xxh64", 8, lambda data: xxhash.xxh64(data).digest()))
register(Digest("xxh3_64", 8, lambda data: xxhash.xxh3_64(data).digest()))
