# packages/gcscore/src/gcscore/errors.py
from __future__ import annotations

__all__ = [
    "GcsError",
    "LimitReached",
    "DecodeError",
    "InvalidParamsError",
    "UnknownDigestError",
    "ConsumedError",
]


class GcsError(Exception):
    """Base de toutes les erreurs GCS."""


class LimitReached(GcsError):
    """Insertion refusée : le set contient déjà `n` éléments (set inchangé)."""

    def __init__(self, n: int):
        super().__init__(f"The limit for the number of elements has been reached (n={n})")
        self.n = n


class DecodeError(GcsError, ValueError):
    """Code Golomb-Rice tronqué : flux corrompu ou mal apparié à (n, p)."""


class InvalidParamsError(GcsError, ValueError):
    """Contrat appelant violé (p == 0, n <= 0, débordement n·2^p, ...)."""


class UnknownDigestError(GcsError, KeyError):
    """Nom d'algorithme de hachage inconnu du registre."""


class ConsumedError(GcsError, RuntimeError):
    """Le set non compacté a été consommé par `build()` et n'est plus utilisable."""
