# packages/gcscodec/src/gcscodec/stats.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol
import math

import numpy as np

__all__ = [
    "SizeEstimate",
    "expected_false_positive_rate",
    "estimate_sizes",
    "bits_per_element",
    "measure_false_positive_rate",
]


class _Queryable(Protocol):
    def contains(self, data: bytes) -> bool: ...


@dataclass(frozen=True)
class SizeEstimate:
    """Tailles comparées (octets) pour n éléments à probabilité 1/2^p."""
    plain_bytes: int     # liste brute d'empreintes 64 bits
    bloom_bytes: int     # Bloom filter optimal de même FPR
    minimum_bytes: int   # borne théorique n·p bits


def expected_false_positive_rate(p: int) -> float:
    return 1.0 / float(1 << int(p))


def estimate_sizes(n: int, p: int) -> SizeEstimate:
    """
    Bloom : n·log2(e)·log2(1/fpr) bits ; minimum : n·log2(1/fpr) = n·p bits.
    Un GCS se situe typiquement autour de n·(p + 1.5) bits.
    """
    n, p = int(n), int(p)
    return SizeEstimate(
        plain_bytes=n * 8,
        bloom_bytes=int(n * math.log2(math.e) * p) // 8,
        minimum_bytes=(n * p) // 8,
    )


def bits_per_element(nbits: int, count: int) -> float:
    return float(nbits) / count if count else 0.0


def measure_false_positive_rate(
    gcs: _Queryable,
    trials: int,
    probe_size: int = 4,
    seed: int = 0,
    exclude: frozenset[bytes] = frozenset(),
) -> float:
    """
    Taux de faux positifs observé sur `trials` sondes aléatoires de `probe_size`
    octets (numpy `default_rng(seed)`, déterministe). Les sondes présentes dans
    `exclude` (éléments réellement insérés) sont ignorées.
    """
    if trials <= 0:
        raise ValueError("measure_false_positive_rate: trials must be > 0")
    if sum(1 for e in exclude if len(e) == probe_size) >= 256 ** probe_size:
        raise ValueError(
            f"measure_false_positive_rate: exclude covers every {probe_size}-byte probe"
        )
    rng = np.random.default_rng(seed)
    hits = 0
    done = 0
    while done < trials:
        probe = rng.bytes(probe_size)
        if probe in exclude:
            continue
        done += 1
        if gcs.contains(probe):
            hits += 1
    return hits / trials
