# packages/gcscodec/src/gcscodec/bitstream/__init__.py
from __future__ import annotations

# Curseur de bits (écriture / lecture MSB-first)
from .bits import BitWriter, BitReader

# I/O bruts du flux compacté (sans header)
from .io import read_bitstream, write_bitstream, read_all, write_all   # [STORE:OVERWRITE]

__all__ = [
    "BitWriter", "BitReader",
    "read_bitstream", "write_bitstream", "read_all", "write_all",
]
