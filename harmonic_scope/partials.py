import math
from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

DEFAULT_MAX_PARTIALS = 24
MIN_PARTIALS = 3


# ----------------------------
# Partial model
# ----------------------------
@dataclass(frozen=True)
class Partial:
    spatial_frequency: float
    temporal_frequency: float
    amplitude: float
    initial_phase: float  # radians
    term: int = 0
    index: int = 0


def partial_for_term(v: int, k: int) -> Partial:
    hv = (v % 17) + 1    # 1..17
    tv = (v % 29) + 3    # 3..31
    return Partial(
        spatial_frequency=0.5 + 0.12 * hv,
        temporal_frequency=0.6 + 0.07 * tv,
        amplitude=1.0 / (1.0 + k * 0.8),
        initial_phase=(v % 360) * math.pi / 180.0,
        term=v,
        index=k,
    )


def build_partials(sequence: Iterable[int], max_count: int = DEFAULT_MAX_PARTIALS) -> Tuple[Partial, ...]:
    limit = max(MIN_PARTIALS, int(max_count))
    out = []
    for k, v in enumerate(sequence):
        if k >= limit:
            break
        out.append(partial_for_term(int(v), k))
    return tuple(out)


def partial_arrays(partials: Iterable[Partial]) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Column vectors (K, 1) of spatial freq, temporal freq, amplitude and phase."""
    ps = list(partials)
    f = np.array([p.spatial_frequency for p in ps], dtype=np.float64).reshape(-1, 1)
    w = np.array([p.temporal_frequency for p in ps], dtype=np.float64).reshape(-1, 1)
    a = np.array([p.amplitude for p in ps], dtype=np.float64).reshape(-1, 1)
    phi = np.array([p.initial_phase for p in ps], dtype=np.float64).reshape(-1, 1)
    return f, w, a, phi
