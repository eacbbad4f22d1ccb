from dataclasses import dataclass, replace
from typing import Tuple

from .errors import SettingsError
from .partials import DEFAULT_MAX_PARTIALS
from .render import RenderMode
from .sequence import DEFAULT_CAP

DEFAULT_BASE = 2
DEFAULT_MODULUS = 9

WIDTH_RANGE: Tuple[int, int] = (40, 400)
HEIGHT_RANGE: Tuple[int, int] = (16, 200)
DELAY_RANGE_MS: Tuple[int, int] = (10, 2000)
TERM_DELAY_RANGE_MS: Tuple[int, int] = (0, 2000)
PARTIALS_RANGE: Tuple[int, int] = (1, 64)
CAP_RANGE: Tuple[int, int] = (1, 1_000_000)


def _in_range(name: str, value: int, bounds: Tuple[int, int]) -> int:
    lo, hi = bounds
    if isinstance(value, bool) or not isinstance(value, int):
        raise SettingsError(f"{name} must be an integer, got {value!r}")
    if not lo <= value <= hi:
        raise SettingsError(f"{name} must be between {lo} and {hi}, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    width: int = 80
    height: int = 24
    frame_delay_ms: int = 50
    mode: RenderMode = RenderMode.OSCILLOSCOPE
    max_partials: int = DEFAULT_MAX_PARTIALS
    show_progress: bool = True
    term_delay_ms: int = 0
    color: bool = True
    cap: int = DEFAULT_CAP

    @property
    def frame_delay(self) -> float:
        return self.frame_delay_ms / 1000.0

    @property
    def term_delay(self) -> float:
        return self.term_delay_ms / 1000.0

    def validated(self) -> "Settings":
        _in_range("width", self.width, WIDTH_RANGE)
        _in_range("height", self.height, HEIGHT_RANGE)
        _in_range("frame delay (ms)", self.frame_delay_ms, DELAY_RANGE_MS)
        _in_range("term delay (ms)", self.term_delay_ms, TERM_DELAY_RANGE_MS)
        _in_range("max partials", self.max_partials, PARTIALS_RANGE)
        _in_range("cap", self.cap, CAP_RANGE)
        try:
            mode = RenderMode.parse(self.mode)
        except ValueError as e:
            raise SettingsError(str(e)) from None
        return self if mode is self.mode else replace(self, mode=mode)

    def update(self, **changes) -> "Settings":
        return replace(self, **changes).validated()

    @classmethod
    def from_args(cls, args) -> "Settings":
        d = cls()

        def opt(name, default):
            v = getattr(args, name, None)
            return default if v is None else v

        return cls(
            width=opt("width", d.width),
            height=opt("height", d.height),
            frame_delay_ms=opt("delay", d.frame_delay_ms),
            mode=opt("mode", d.mode),
            max_partials=opt("max_partials", d.max_partials),
            show_progress=not getattr(args, "no_progress", False),
            term_delay_ms=opt("term_delay", d.term_delay_ms),
            color=not getattr(args, "no_color", False),
            cap=opt("cap", d.cap),
        ).validated()
