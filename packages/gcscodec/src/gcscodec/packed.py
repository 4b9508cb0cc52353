# packages/gcscodec/src/gcscodec/packed.py
# -----------------------------------------------------------------------------
# Set compacté : flux Golomb-Rice des deltas triés (format sans header)
# [STORE:OVERWRITE] - write/write_file produisent les octets stockés.

from __future__ import annotations
from itertools import accumulate
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Optional
import logging

import numpy as np

from gcscore.digests import DigestLike
from gcscore.errors import DecodeError
from .bitstream.bits import BitReader
from .bitstream.io import read_all, read_bitstream, write_all, write_bitstream
from .config import GcsConfig, default_digest_name
from .fingerprint import fingerprint
from .golomb import golomb_decode, golomb_decode_all

if TYPE_CHECKING:
    from .unpacked import UnpackedGcs

"""
Format du flux compacté
=======================

Suite d'octets, bits MSB-first dans chaque octet :

    GR(fp[0]) | GR(fp[1] - fp[0]) | ... | GR(fp[k-1] - fp[k-2]) | 0-padding

GR = Golomb-Rice de paramètre p. **Aucun header** : n, p et l'algorithme de
hachage sont des métadonnées externes qui doivent accompagner les octets.

Fin de flux
-----------
- Set issu de `pack()` : la longueur exacte en bits (`nbits`) est connue.
- Set relu depuis des octets : les < 8 derniers bits, s'ils sont tous nuls,
  sont du bourrage. Conséquence du format sans header : un delta nul (doublon)
  dont le code tient entièrement dans ce bourrage (p <= 6) n'est pas relu ;
  l'appartenance n'est pas affectée sauf pour un set dont toutes les
  empreintes valent 0.
"""

__all__ = ["PackedGcs"]

log = logging.getLogger("gcs.codec.packed")


class PackedGcs:
    """
    Représentation compacte et **immuable** d'un GCS.

    Créée uniquement par `UnpackedGcs.pack()` / `build()` ou depuis des octets
    (`from_reader`, `read_file`) avec (n, p, digest) fournis à part.
    Requête par décodage séquentiel : O(k) au lieu de O(log k).
    """

    def __init__(self, cfg: GcsConfig, data: bytes, nbits: Optional[int] = None) -> None:
        self._cfg = cfg
        self._hasher = cfg.hasher()
        self._data = bytes(data)
        self._padded = nbits is None
        self._nbits = len(self._data) * 8 if nbits is None else int(nbits)
        if not (0 <= self._nbits <= len(self._data) * 8):
            raise ValueError(f"PackedGcs: nbits={self._nbits} inconsistent with {len(self._data)} bytes")

    @classmethod
    def from_reader(
        cls,
        source: bytes | bytearray | memoryview | BinaryIO,
        n: int,
        p: int,
        digest: Optional[str | DigestLike] = None,
    ) -> "PackedGcs":
        """
        Reconstruit un set compacté depuis des octets bruts ou un flux binaire lu
        jusqu'à EOF. n, p et digest **doivent** être ceux de la construction.

        Notes
        -----
        La longueur exacte en bits n'est pas stockée : les < 8 derniers bits nuls
        sont lus comme du bourrage. Avec p <= 6, un doublon final (delta nul) peut
        donc disparaître : `unpack()` rend alors un set plus court que l'original
        (ex. [6, 6] avec p=2 relu comme [6]). L'appartenance reste exacte.
        """
        cfg = GcsConfig(n=n, p=p, digest=digest if digest is not None else default_digest_name())
        return cls(cfg, read_all(source))

    @classmethod
    def read_file(cls, path: str | Path, n: int, p: int, digest: Optional[str | DigestLike] = None) -> "PackedGcs":
        return cls.from_reader(read_bitstream(path), n, p, digest)

    # ------------------------------------------------------------------ props
    @property
    def config(self) -> GcsConfig:
        return self._cfg

    @property
    def n(self) -> int:
        return self._cfg.n

    @property
    def p(self) -> int:
        return self._cfg.p

    @property
    def digest(self) -> str | DigestLike:
        return self._cfg.digest

    @property
    def nbits(self) -> int:
        return self._nbits

    def __repr__(self) -> str:
        return (f"PackedGcs(n={self.n}, p={self.p}, digest={self._cfg.digest_name!r}, "
                f"nbits={self._nbits}, bytes={len(self._data)})")

    def _reader(self) -> BitReader:
        return BitReader(self._data, nbits=self._nbits, padded=self._padded)

    # ----------------------------------------------------------------- requête
    def contains(self, data: bytes) -> bool:
        """
        Décode les deltas depuis le début en cumulant ; True dès que le cumul
        égale l'empreinte de `data`, False en fin de flux.

        Exceptions
        ----------
        DecodeError si un code est tronqué (flux corrompu / mal apparié).
        """
        target = fingerprint(self.n, self.p, data, self._hasher)
        r = self._reader()
        acc = 0
        while not r.at_end():
            acc += golomb_decode(r, self.p)
            if acc == target:
                return True
        return False

    def __contains__(self, data) -> bool:
        return self.contains(data)

    def fingerprints(self) -> np.ndarray:
        """
        Empreintes absolues (triées) encodées dans le flux.

        Exceptions
        ----------
        DecodeError si un code est tronqué, si le flux contient plus de `n`
        valeurs ou si une empreinte sort de [0, n·2^p) : tout ou rien.
        """
        deltas = golomb_decode_all(self._reader(), self.p, limit=self.n)
        values = list(accumulate(deltas))
        if values and values[-1] >= self._cfg.modulus:
            raise DecodeError(
                f"PackedGcs: fingerprint {values[-1]} outside [0, n·2^p={self._cfg.modulus}) "
                "(stream does not match n/p)"
            )
        return np.array(values, dtype=np.uint64)

    def count(self) -> int:
        """Nombre d'empreintes (nécessite un décodage complet)."""
        return int(self.fingerprints().size)

    def unpack(self) -> "UnpackedGcs":
        """Nouveau `UnpackedGcs` (mêmes n, p, digest) ; ce set n'est pas modifié."""
        from .unpacked import UnpackedGcs  # import tardif pour éviter le cycle
        fps = self.fingerprints()
        log.debug("unpack: %d bits -> %d fingerprints (n=%d, p=%d)", self._nbits, fps.size, self.n, self.p)
        return UnpackedGcs._from_sorted(self._cfg, fps)

    # ----------------------------------------------------------- sérialisation
    def to_bytes(self) -> bytes:
        """Flux aligné sur l'octet, derniers bits à zéro, sans header."""
        return self._data

    def write(self, sink: BinaryIO) -> int:
        """Écrit le flux brut dans `sink` (OSError propagée) ; retourne le nombre d'octets."""
        return write_all(sink, self._data)

    def write_file(self, path: str | Path) -> None:
        """Écriture atomique du flux brut.  # [STORE:OVERWRITE]"""
        write_bitstream(self._data, path)
