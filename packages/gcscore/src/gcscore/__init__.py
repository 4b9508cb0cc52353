# packages/gcscore/src/gcscore/__init__.py
from __future__ import annotations

from .errors import (
    GcsError, LimitReached, DecodeError, InvalidParamsError, UnknownDigestError, ConsumedError,
)
from .digests import Digest, DEFAULT_DIGEST, register, get, resolve, list_digests

__all__ = [
    "GcsError", "LimitReached", "DecodeError", "InvalidParamsError",
    "UnknownDigestError", "ConsumedError",
    "Digest", "DEFAULT_DIGEST", "register", "get", "resolve", "list_digests",
]

__version__ = "0.3.0"
