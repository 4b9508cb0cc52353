from __future__ import annotations
import os
from pathlib import Path
from typing import BinaryIO

__all__ = ["read_bitstream", "write_bitstream", "read_all", "write_all"]


def read_bitstream(path: str | Path) -> bytes:
    """Read a packed GCS stream from disk (raw bytes, no header)."""
    return Path(path).read_bytes()


def write_bitstream(payload: bytes, path: str | Path) -> None:
    """Atomic, fsync'ed write to target path.  # [STORE:OVERWRITE]"""
    p = Path(path)
    tmp = p.with_suffix(p.suffix + ".tmp")
    tmp.parent.mkdir(parents=True, exist_ok=True)
    with open(tmp, "wb") as f:
        write_all(f, payload)
        os.fsync(f.fileno())
    os.replace(tmp, p)


def read_all(source: bytes | bytearray | memoryview | BinaryIO) -> bytes:
    """Bytes-like → copie ; flux binaire → lu jusqu'à EOF (OSError propagée)."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    chunks = []
    while True:
        b = source.read(1 << 16)
        if not b:
            break
        chunks.append(bytes(b))
    return b"".join(chunks)


def write_all(sink: BinaryIO, payload: bytes) -> int:
    """
    Écrit tout `payload` dans `sink` (écritures partielles reprises) puis flush ;
    retourne le nombre d'octets.
    """
    view = memoryview(payload)
    while view:
        n = sink.write(view)
        # None : sink non bloquant sans place disponible
        view = view[n or 0:]
    flush = getattr(sink, "flush", None)
    if flush is not None:
        flush()
    return len(payload)
