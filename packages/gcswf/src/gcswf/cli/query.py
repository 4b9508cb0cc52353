from __future__ import annotations
import argparse, logging, sys
from pathlib import Path

from gcscore.errors import DecodeError, GcsError
from gcscodec import PackedGcs

from .common import setup_logging, add_set_params, add_log_args
from ..api import read_elements

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="GCS - Interroge un set compacté (.gcs)")
    p.add_argument("gcs", help="Fichier .gcs (flux brut, sans header)")
    p.add_argument("elements", nargs="*", help="Éléments à tester (UTF-8)")
    p.add_argument("--from-file", default=None, help="Fichier d'éléments, un par ligne")
    p.add_argument("--unpack", action="store_true", help="Décompacter avant les requêtes (recherche binaire)")
    add_set_params(p)
    add_log_args(p)
    return p.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)

    items = [e.encode("utf-8") for e in args.elements]
    try:
        if args.from_file:
            items.extend(read_elements(args.from_file))
        gcs = PackedGcs.read_file(args.gcs, args.n, args.p, args.digest)
        if args.unpack:
            gcs = gcs.unpack()
        logging.info("Chargé: %r", gcs)
        for item in items:
            hit = gcs.contains(item)
            print(f"{item.decode('utf-8', errors='replace')}\t{'yes' if hit else 'no'}")
    except DecodeError as e:
        logging.error("Flux corrompu ou (n, p, digest) incorrects pour %s : %s", args.gcs, e)
        return 2
    except (GcsError, OSError) as e:
        logging.exception("Échec query %s: %s", args.gcs, e)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
