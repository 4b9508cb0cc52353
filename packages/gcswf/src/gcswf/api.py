from __future__ import annotations
from pathlib import Path
from typing import Iterator

from gcscodec.bitstream import write_bitstream

def atomic_write(path: Path | str, data: bytes) -> None:
    # même chemin d'écriture que PackedGcs.write_file (tmp + fsync + replace)
    write_bitstream(data, path)

def gcs_name(stem: str, n: int, p: int, digest: str) -> str:
    # n, p et digest ne sont pas dans le flux : on les garde dans le nom de fichier
    return f"{stem}__n{n}__p{p}__{digest}.gcs"

def read_elements(path: Path | str) -> Iterator[bytes]:
    """Un élément par ligne (octets bruts, fin de ligne retirée) ; lignes vides ignorées."""
    with open(path, "rb") as f:
        for line in f:
            item = line.rstrip(b"\r\n")
            if item:
                yield item
