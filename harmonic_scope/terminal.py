# terminal.py
#
# ANSI/VT output: screen control, an xterm-256 gradient for colored cells and
# progress bars, and a frame writer that serializes whole frames to a stream.

import colorsys
import sys
import threading
from typing import List, Optional, TextIO

from .render import BLANK, Frame

ESC = "\033["
CLEAR = ESC + "2J"
HOME = ESC + "H"
ERASE_DOWN = ESC + "0J"
CLEAR_LINE = ESC + "2K"
HIDE_CURSOR = ESC + "?25l"
SHOW_CURSOR = ESC + "?25h"
RESET = ESC + "0m"


# ----------------------------
# Color palette (256-color HSV gradient)
# ----------------------------
def rgb_to_xterm256(r: float, g: float, b: float) -> int:
    # 6x6x6 color cube (16..231)
    rq = min(5, max(0, int(round(r * 5))))
    gq = min(5, max(0, int(round(g * 5))))
    bq = min(5, max(0, int(round(b * 5))))
    return 16 + 36 * rq + 6 * gq + bq


def build_palette(n_levels: int) -> List[int]:
    cols = []
    for i in range(n_levels):
        # blue -> red, stopping short of wrapping back to red
        h = 0.66 * (1.0 - i / max(1, n_levels - 1))
        r, g, b = colorsys.hsv_to_rgb(h, 1.0, 1.0)
        cols.append(rgb_to_xterm256(r, g, b))
    return cols


PALETTE = build_palette(16)


def fg(color: int) -> str:
    return f"{ESC}38;5;{color}m"


def color_for_fraction(frac: float, palette: Optional[List[int]] = None) -> int:
    pal = palette or PALETTE
    frac = 0.0 if frac < 0 else (1.0 if frac > 1 else frac)
    return pal[int(round(frac * (len(pal) - 1)))]


def colorize(text: str, color: int) -> str:
    return f"{fg(color)}{text}{RESET}"


# ----------------------------
# Progress bar
# ----------------------------
def progress_bar(done: int, total: int, width: int = 30, color: bool = True) -> str:
    total = max(1, total)
    done = min(max(0, done), total)
    filled = int(width * done / total)
    if color:
        cells = [colorize("#", color_for_fraction(i / max(1, width - 1))) for i in range(filled)]
    else:
        cells = ["#"] * filled
    bar = "".join(cells) + "." * (width - filled)
    return f"[{bar}] {done}/{total}"


# ----------------------------
# Frame output
# ----------------------------
def colored_row(row: str, levels) -> str:
    out = []
    current = None
    for x, ch in enumerate(row):
        if ch == BLANK:
            if current is not None:
                out.append(RESET)
                current = None
            out.append(ch)
            continue
        c = color_for_fraction(float(levels[x]))
        if c != current:
            out.append(fg(c))
            current = c
        out.append(ch)
    if current is not None:
        out.append(RESET)
    return "".join(out)


def format_frame(frame: Frame, color: bool = True) -> List[str]:
    if color and frame.levels is not None:
        rows = [colored_row(r, frame.levels[y]) for y, r in enumerate(frame.rows)]
    else:
        rows = list(frame.rows)
    rows.append(frame.status)
    return rows


class FrameWriter:
    """Writes complete frames to a stream, one writer at a time."""

    def __init__(self, stream: Optional[TextIO] = None, color: bool = True, footer: str = ""):
        self.stream = stream or sys.stdout
        self.color = color
        self.footer = footer
        self._lock = threading.Lock()
        self._size = None  # (width, height) of the last frame written

    def begin(self) -> None:
        with self._lock:
            self.stream.write(HIDE_CURSOR + CLEAR + HOME)
            self.stream.flush()

    def end(self) -> None:
        with self._lock:
            self.stream.write(RESET + SHOW_CURSOR + "\n")
            self.stream.flush()

    def render_text(self, frame: Frame, clear: bool = False) -> str:
        rows = format_frame(frame, self.color)
        rows[-1] = CLEAR_LINE + rows[-1]
        if self.footer:
            rows.append(CLEAR_LINE + self.footer)
        return (CLEAR if clear else "") + HOME + "\n".join(rows) + ERASE_DOWN

    def __call__(self, frame: Frame) -> None:
        with self._lock:
            size = (frame.width, frame.height)
            text = self.render_text(frame, clear=self._size is not None and size != self._size)
            self._size = size
            self.stream.write(text)
            self.stream.flush()
