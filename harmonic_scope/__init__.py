"""Modular exponentiation sequences rendered as terminal animations.

Modules:
- modarith: mulmod / modexp over 64-bit unsigned operands
- sequence: base^n mod m up to the first repeated residue
- partials: sequence terms -> harmonic partials
- render: oscilloscope, lissajous and plasma frames
- animation: threaded frame loop with cooperative stop
"""

__version__ = "0.1.0"

from .modarith import modexp, mulmod
from .partials import Partial, build_partials
from .render import Frame, RenderMode, render
from .sequence import Sequence, generate

__all__ = [
    "Frame", "Partial", "RenderMode", "Sequence",
    "build_partials", "generate", "modexp", "mulmod", "render",
]
