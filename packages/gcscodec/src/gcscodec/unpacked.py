# packages/gcscodec/src/gcscodec/unpacked.py
# -----------------------------------------------------------------------------
# Set non compacté : empreintes triées (uint64), requête par recherche binaire

from __future__ import annotations
from typing import BinaryIO, Iterable, Optional
import logging

import numpy as np

from gcscore.digests import DigestLike
from gcscore.errors import ConsumedError, LimitReached
from .bitstream.io import read_all
from .config import GcsConfig, default_digest_name
from .fingerprint import fingerprint
from .golomb import golomb_encode_all
from .packed import PackedGcs

__all__ = ["UnpackedGcs"]

log = logging.getLogger("gcs.codec.unpacked")


class UnpackedGcs:
    """
    Représentation de construction / requête rapide d'un GCS.

    Les empreintes sont gardées **triées** dans un tableau `numpy.uint64` :
    insertion en une passe (`searchsorted` + `insert`), requête en O(log n).
    La taille ne dépasse jamais `n` : une insertion de trop lève `LimitReached`
    et laisse le set inchangé. Les doublons sont conservés.

    Paramètres
    ----------
    n : int
        Capacité (> 0).
    p : int
        Exposant de faux positif (>= 1).
    digest : str | DigestLike | None
        Algorithme de hachage (défaut : ENV `GCS_DIGEST`, sinon "md5").
    """

    def __init__(self, n: int, p: int, digest: Optional[str | DigestLike] = None) -> None:
        cfg = GcsConfig(n=n, p=p, digest=digest if digest is not None else default_digest_name())
        self._init(cfg, np.empty(0, dtype=np.uint64))

    def _init(self, cfg: GcsConfig, fps: np.ndarray) -> None:
        self._cfg = cfg
        self._hasher = cfg.hasher()
        self._fps: Optional[np.ndarray] = fps

    @classmethod
    def from_config(cls, cfg: GcsConfig) -> "UnpackedGcs":
        obj = cls.__new__(cls)
        obj._init(cfg, np.empty(0, dtype=np.uint64))
        return obj

    @classmethod
    def _from_sorted(cls, cfg: GcsConfig, fps: np.ndarray) -> "UnpackedGcs":
        obj = cls.__new__(cls)
        obj._init(cfg, np.asarray(fps, dtype=np.uint64))
        return obj

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

    def _storage(self) -> np.ndarray:
        if self._fps is None:
            raise ConsumedError("UnpackedGcs: set was consumed by build()")
        return self._fps

    @property
    def fingerprints(self) -> np.ndarray:
        """Copie (lecture seule) des empreintes triées."""
        out = self._storage().copy()
        out.setflags(write=False)
        return out

    def __len__(self) -> int:
        return int(self._storage().size)

    def __contains__(self, data) -> bool:
        return self.contains(data)

    def __repr__(self) -> str:
        size = "consumed" if self._fps is None else str(self._fps.size)
        return f"UnpackedGcs(n={self.n}, p={self.p}, digest={self._cfg.digest_name!r}, size={size})"

    # --------------------------------------------------------------- mutation
    def _fingerprint(self, data) -> np.uint64:
        return np.uint64(fingerprint(self.n, self.p, data, self._hasher))

    def insert(self, data: bytes) -> None:
        """
        Ajoute `data` au set.

        Exceptions
        ----------
        LimitReached si le set contient déjà `n` éléments (set inchangé).
        TypeError si `data` n'est pas bytes-like.
        """
        fps = self._storage()
        if fps.size >= self.n:
            raise LimitReached(self.n)
        v = self._fingerprint(data)
        i = int(np.searchsorted(fps, v, side="right"))
        self._fps = np.insert(fps, i, v)

    def insert_from_reader(self, reader: BinaryIO) -> None:
        """Lit tout le flux binaire `reader` et l'insère comme **un** élément (OSError propagée)."""
        self._storage()
        self.insert(read_all(reader))

    def extend(self, items: Iterable[bytes]) -> int:
        """
        Insère chaque élément dans l'ordre ; s'arrête au premier `LimitReached`
        (propagé), les éléments déjà insérés restent. Retourne le nombre inséré.
        """
        count = 0
        for x in items:
            self.insert(x)
            count += 1
        return count

    # ----------------------------------------------------------------- requête
    def contains(self, data: bytes) -> bool:
        """True si `data` est *probablement* présent ; False s'il est certainement absent."""
        fps = self._storage()
        v = self._fingerprint(data)
        i = int(np.searchsorted(fps, v, side="left"))
        return i < fps.size and bool(fps[i] == v)

    # -------------------------------------------------------------- conversion
    def pack(self) -> PackedGcs:
        """
        Compacte vers un `PackedGcs` **sans** modifier ce set :
        tri (ré-affirmé) → deltas → Golomb-Rice(p) concaténés.
        """
        fps = self._storage()
        if fps.size > 1 and not bool(np.all(fps[1:] >= fps[:-1])):
            raise AssertionError("UnpackedGcs.pack: fingerprints must be sorted")
        deltas = np.diff(fps, prepend=np.uint64(0)) if fps.size else fps
        w = golomb_encode_all(deltas.tolist(), self.p)
        log.debug("pack: %d fingerprints -> %d bits (n=%d, p=%d)", fps.size, w.nbits, self.n, self.p)
        return PackedGcs(self._cfg, w.to_bytes(), nbits=w.nbits)

    def build(self) -> PackedGcs:
        """
        Compacte puis **consomme** ce set : le stockage des empreintes est libéré
        et toute utilisation ultérieure lève `ConsumedError`.
        """
        packed = self.pack()
        self._fps = None
        return packed
