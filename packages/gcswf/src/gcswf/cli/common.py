from __future__ import annotations
import argparse, logging, sys
from pathlib import Path
from typing import Optional

from gcscore.digests import list_digests
from gcscodec.config import default_digest_name

def setup_logging(log_file: Optional[Path], verbose: bool = True) -> None:
    log_fmt = "[%(asctime)s] %(levelname)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(level=level, format=log_fmt, datefmt=datefmt, handlers=handlers, force=True)

def ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)

def add_set_params(p: argparse.ArgumentParser) -> None:
    """Paramètres (n, p, digest) : non stockés dans le flux, obligatoires à la relecture."""
    p.add_argument("--n", type=int, required=True, help="Capacité (nombre max d'éléments)")
    p.add_argument("--p", type=int, required=True, help="Exposant de faux positif (1/2^p)")
    p.add_argument("--digest", default=default_digest_name(), choices=list_digests(),
                   help="Algorithme de hachage (défaut: ENV GCS_DIGEST ou md5)")

def add_log_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--log-file", default=None)
    p.add_argument("--verbose", action="store_true")
