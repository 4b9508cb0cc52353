# packages/gcswf/src/gcswf/__init__.py
from __future__ import annotations

from .api import atomic_write, gcs_name, read_elements

__all__ = [
    "atomic_write",
    "gcs_name",
    "read_elements",
    # on n'importe PAS le sous-module cli ici pour éviter les imports au top-level
]

__version__ = "0.3.0"
