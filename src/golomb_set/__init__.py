"""golomb_set - unified API
Install once, import one namespace:

    pip install golomb-set

Usage:

    import golomb_set as gs
    s = gs.UnpackedGcs(3, 5)
    s.insert(b"alpha"); s.insert(b"bravo")
    packed = s.pack()
    assert packed.contains(b"alpha")

Or detailed modules:

    from golomb_set import codec, core, wf
"""

__version__ = "0.3.0"

# Sub-namespaces
import gcscore as core
import gcscodec as codec
import gcswf as wf

# High-level convenience re-exports (top-level names)
from gcscore import (
    GcsError, LimitReached, DecodeError, InvalidParamsError, UnknownDigestError, ConsumedError,
    Digest, register as register_digest, list_digests,
)
from gcscodec import (
    GcsConfig, UnpackedGcs, PackedGcs,
    fingerprint, golomb_encode, golomb_decode,
    read_bitstream, write_bitstream,
    estimate_sizes, measure_false_positive_rate,
)

__all__ = [
    # sub-namespaces
    "codec", "core", "wf",
    # convenience
    "GcsError", "LimitReached", "DecodeError", "InvalidParamsError", "UnknownDigestError", "ConsumedError",
    "Digest", "register_digest", "list_digests",
    "GcsConfig", "UnpackedGcs", "PackedGcs",
    "fingerprint", "golomb_encode", "golomb_decode",
    "read_bitstream", "write_bitstream",
    "estimate_sizes", "measure_false_positive_rate",
    "__version__",
]
