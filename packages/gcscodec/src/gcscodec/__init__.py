# packages/gcscodec/src/gcscodec/__init__.py
from __future__ import annotations

"""GCS codec - public surface.

Golomb-Coded Set : empreintes bornées, codage Golomb-Rice des deltas triés,
représentations non compactée (requête rapide) et compactée (taille minimale).
"""

__version__ = "0.3.0"

# API publique (stable)
from .config import GcsConfig, default_digest_name
from .fingerprint import fingerprint, fingerprint_many
from .golomb import golomb_encode, golomb_decode, golomb_encode_all, golomb_decode_all, code_length
from .bitstream import BitWriter, BitReader, read_bitstream, write_bitstream
from .packed import PackedGcs
from .unpacked import UnpackedGcs
from .stats import estimate_sizes, expected_false_positive_rate, measure_false_positive_rate

__all__ = [
    "__version__",
    "GcsConfig", "default_digest_name",
    "fingerprint", "fingerprint_many",
    "golomb_encode", "golomb_decode", "golomb_encode_all", "golomb_decode_all", "code_length",
    "BitWriter", "BitReader", "read_bitstream", "write_bitstream",
    "PackedGcs", "UnpackedGcs",
    "estimate_sizes", "expected_false_positive_rate", "measure_false_positive_rate",
]
