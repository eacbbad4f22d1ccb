"""
Frame synthesis for the three display modes.

Every renderer sums the contribution of all partials and projects it onto a
width x height character grid:

  oscilloscope  one trace per column, soft-clipped with tanh
  lissajous     X-Y curve sampled along s in [0, 1]
  plasma        full-field interference mapped through a density ramp

Renderers are pure: same partials, size and t give the same frame.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np

from .partials import Partial, partial_arrays

TRACE = "*"
BASELINE = "-"
BLANK = " "
LISSAJOUS_CHARS = ".:oO@"   # early samples -> late samples
PLASMA_CHARS = " .:-=+*#%@"  # low -> high density

TWO_PI = 2.0 * math.pi


class RenderMode(Enum):
    OSCILLOSCOPE = "oscilloscope"
    LISSAJOUS = "lissajous"
    PLASMA = "plasma"

    @property
    def label(self) -> str:
        return self.value.upper()

    def next(self) -> "RenderMode":
        modes = list(RenderMode)
        return modes[(modes.index(self) + 1) % len(modes)]

    @classmethod
    def parse(cls, name) -> "RenderMode":
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise ValueError(f"unknown render mode {name!r}; choose from "
                             + ", ".join(m.value for m in cls)) from None


@dataclass
class Frame:
    mode: RenderMode
    rows: List[str]
    status: str
    levels: Optional[np.ndarray] = None  # (height, width) intensities in [0, 1]

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)

    def lines(self) -> List[str]:
        return list(self.rows) + [self.status]

    def text(self) -> str:
        return "\n".join(self.lines())


def status_line(mode: RenderMode, width: int, height: int, n_partials: int, t: float) -> str:
    return f"{mode.label}  {width}x{height}  partials={n_partials}  t={t:7.3f}s"


def _norm_axis(n: int) -> np.ndarray:
    # 0..1 inclusive; a single cell sits at 0
    return np.arange(n, dtype=np.float64) / max(1, n - 1)


def _check_size(width: int, height: int) -> None:
    if width < 1 or height < 1:
        raise ValueError(f"canvas must be at least 1x1, got {width}x{height}")


# ----------------------------
# Oscilloscope
# ----------------------------
def render_oscilloscope(partials: Sequence[Partial], width: int, height: int, t: float) -> Frame:
    _check_size(width, height)
    f, w, a, phi = partial_arrays(partials)
    xn = _norm_axis(width)
    y = np.tanh(np.sum(a * np.sin(TWO_PI * f * xn + w * t + phi), axis=0))

    mid = height // 2
    grid = [[BLANK] * width for _ in range(height)]
    levels = np.zeros((height, width), dtype=np.float32)
    for x in range(width):
        grid[mid][x] = BASELINE
    for x in range(width):
        row = int(round(mid - float(y[x]) * 0.4 * height))
        row = min(height - 1, max(0, row))
        grid[row][x] = TRACE
        levels[row, x] = 0.5 * (float(y[x]) + 1.0)

    rows = ["".join(r) for r in grid]
    return Frame(RenderMode.OSCILLOSCOPE, rows,
                 status_line(RenderMode.OSCILLOSCOPE, width, height, len(partials), t), levels)


# ----------------------------
# Lissajous (X-Y)
# ----------------------------
def render_lissajous(partials: Sequence[Partial], width: int, height: int, t: float) -> Frame:
    _check_size(width, height)
    f, w, a, phi = partial_arrays(partials)
    n = max(width, height) * 3
    s = np.linspace(0.0, 1.0, n)
    xs = np.tanh(np.sum(a * np.sin(TWO_PI * f * s + 0.9 * w * t + phi), axis=0))
    ys = np.tanh(np.sum(a * np.cos(TWO_PI * 0.7 * f * s + 1.1 * w * t + 1.3 * phi), axis=0))

    cx = (width - 1) / 2.0
    cy = (height - 1) / 2.0
    grid = [[BLANK] * width for _ in range(height)]
    levels = np.zeros((height, width), dtype=np.float32)
    nchars = len(LISSAJOUS_CHARS)
    for i in range(n):
        col = int(round(cx + float(xs[i]) * 0.45 * width))
        row = int(round(cy - float(ys[i]) * 0.45 * height))
        col = min(width - 1, max(0, col))
        row = min(height - 1, max(0, row))
        age = float(s[i])
        grid[row][col] = LISSAJOUS_CHARS[min(nchars - 1, int(age * nchars))]
        levels[row, col] = age

    rows = ["".join(r) for r in grid]
    return Frame(RenderMode.LISSAJOUS, rows,
                 status_line(RenderMode.LISSAJOUS, width, height, len(partials), t), levels)


# ----------------------------
# Plasma field
# ----------------------------
def plasma_field(partials: Sequence[Partial], width: int, height: int, t: float) -> np.ndarray:
    """tanh-clipped field in [-1, 1], shape (height, width)."""
    f, w, a, phi = partial_arrays(partials)
    xn = _norm_axis(width)
    yn = _norm_axis(height)
    # sin term depends only on x, cos term only on y: sum each separately
    sx = np.sum(a * np.sin(TWO_PI * f * xn + 0.8 * w * t + phi), axis=0)
    cy = np.sum(a * np.cos(TWO_PI * 0.6 * f * yn + 1.1 * w * t + 0.5 * phi), axis=0)
    total = cy.reshape(-1, 1) + sx.reshape(1, -1)
    return np.tanh(0.8 * total)


def ramp_index(v: np.ndarray, n_levels: int) -> np.ndarray:
    norm = (np.asarray(v, dtype=np.float64) + 1.0) * 0.5
    return np.clip(np.floor(norm * n_levels), 0, n_levels - 1).astype(int)


def render_plasma(partials: Sequence[Partial], width: int, height: int, t: float) -> Frame:
    _check_size(width, height)
    field = plasma_field(partials, width, height, t)
    idx = ramp_index(field, len(PLASMA_CHARS))
    rows = ["".join(PLASMA_CHARS[i] for i in row) for row in idx]
    levels = ((field + 1.0) * 0.5).astype(np.float32)
    return Frame(RenderMode.PLASMA, rows,
                 status_line(RenderMode.PLASMA, width, height, len(partials), t), levels)


RENDERERS = {
    RenderMode.OSCILLOSCOPE: render_oscilloscope,
    RenderMode.LISSAJOUS: render_lissajous,
    RenderMode.PLASMA: render_plasma,
}


def render(mode, partials: Sequence[Partial], width: int, height: int, t: float) -> Frame:
    return RENDERERS[RenderMode.parse(mode)](partials, width, height, t)
