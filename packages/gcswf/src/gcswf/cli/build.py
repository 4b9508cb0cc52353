from __future__ import annotations
import argparse, logging, sys
from pathlib import Path

from gcscore.errors import GcsError, LimitReached
from gcscodec import UnpackedGcs, estimate_sizes
from gcscodec.stats import bits_per_element

from .common import setup_logging, ensure_dir, add_set_params, add_log_args
from ..api import atomic_write, gcs_name, read_elements

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="GCS - Construit un set compacté (.gcs) depuis des fichiers d'éléments")
    p.add_argument("inputs", nargs="+", help="Fichiers texte/binaires, un élément par ligne")
    p.add_argument("--out", required=True, help="Fichier .gcs ou dossier de sortie")
    add_set_params(p)
    add_log_args(p)
    return p.parse_args(argv)

def _out_path(out: Path, stem: str, args) -> Path:
    if out.suffix == ".gcs":
        ensure_dir(out.parent)
        return out
    ensure_dir(out)
    return out / gcs_name(stem, args.n, args.p, args.digest)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)

    try:
        gcs = UnpackedGcs(args.n, args.p, args.digest)
        for i, src in enumerate(args.inputs, 1):
            logging.info("[%d/%d] insert: %s", i, len(args.inputs), src)
            gcs.extend(read_elements(src))
        packed = gcs.pack()
        out = _out_path(Path(args.out), Path(args.inputs[0]).stem, args)
        atomic_write(out, packed.to_bytes())
    except LimitReached as e:
        logging.error("Capacité atteinte (n=%d) : %s", args.n, e)
        return 1
    except (GcsError, OSError) as e:
        logging.exception("Échec build: %s", e)
        return 1

    est = estimate_sizes(args.n, args.p)
    logging.info("→ OK %s (%d éléments, %d octets, %.2f bits/élément)",
                 out, len(gcs), len(packed.to_bytes()), bits_per_element(packed.nbits, len(gcs)))
    logging.debug("Estimations n=%d p=%d : liste=%d o, bloom=%d o, minimum=%d o",
                  args.n, args.p, est.plain_bytes, est.bloom_bytes, est.minimum_bytes)
    return 0

if __name__ == "__main__":
    sys.exit(main())
