"""
Full-screen curses viewer for the harmonic renderers.

Keys
----
q quit • space pause/resume • m next mode • c color • r reset time
+/- more/fewer partials
"""

import curses
import time
from dataclasses import dataclass
from typing import Optional

from .config import PARTIALS_RANGE
from .errors import SettingsError
from .render import BLANK, Frame, render
from .session import Session


# --------------------------- Color management --------------------------- #
class ColorRamp:
    def __init__(self): self.enabled = False; self.pairs = []

    def setup(self):
        if not curses.has_colors(): self.enabled = False; return
        curses.start_color()
        try: curses.use_default_colors()
        except curses.error: pass
        if curses.COLORS and curses.COLORS >= 256:
            ramp = [21, 27, 33, 39, 45, 51, 50, 49, 48, 47, 46, 82, 118, 154, 190, 226, 220, 214, 208, 202, 196]
        else:
            ramp = [curses.COLOR_BLUE, curses.COLOR_CYAN, curses.COLOR_GREEN,
                    curses.COLOR_YELLOW, curses.COLOR_RED]
        for i, fg in enumerate(ramp[:curses.COLOR_PAIRS - 1], start=1):
            try: curses.init_pair(i, fg, -1); self.pairs.append(curses.color_pair(i))
            except curses.error: break
        self.enabled = len(self.pairs) >= 2

    def attr_for_fraction(self, frac: float):
        if not self.enabled: return 0
        frac = 0.0 if frac < 0 else (1.0 if frac > 1 else frac)
        idx = int(round(frac * (len(self.pairs) - 1)))
        return self.pairs[idx]


# ------------------------------ Viewer --------------------------------- #
@dataclass
class ViewState:
    t: float = 0.0
    paused: bool = False
    color_on: bool = True
    status_msg: str = ""


def canvas_size(session: Session, rows: int, cols: int):
    """Frame size that fits the terminal: one row is kept for the status line."""
    st = session.settings
    return max(1, min(st.width, cols - 1)), max(1, min(st.height, rows - 1))


def handle_key(session: Session, view: ViewState, key: int) -> bool:
    """Apply one key press; False means quit."""
    if key in (ord('q'), ord('Q')): return False
    if key == ord(' '): view.paused = not view.paused
    elif key in (ord('m'), ord('M')):
        session.update_settings(mode=session.settings.mode.next())
    elif key in (ord('c'), ord('C')): view.color_on = not view.color_on
    elif key in (ord('r'), ord('R')): view.t = 0.0
    elif key in (ord('+'), ord('='), ord('-'), ord('_')):
        step = 1 if key in (ord('+'), ord('=')) else -1
        lo, hi = PARTIALS_RANGE
        n = max(lo, min(hi, session.settings.max_partials + step))
        try:
            session.update_settings(max_partials=n)
            view.status_msg = f"max partials {n}"
        except SettingsError as e:
            view.status_msg = str(e)
    return True


def draw_frame(stdscr, frame: Frame, ramp: Optional[ColorRamp], view: ViewState) -> None:
    h, w = stdscr.getmaxyx()
    use_color = view.color_on and ramp is not None and ramp.enabled and frame.levels is not None
    for y, row in enumerate(frame.rows[:max(0, h - 1)]):
        for x, ch in enumerate(row[:max(0, w - 1)]):
            if ch == BLANK: continue
            attr = ramp.attr_for_fraction(float(frame.levels[y, x])) if use_color else 0
            try: stdscr.addch(y, x, ord(ch), attr)
            except curses.error: pass
    status = frame.status + ("  PAUSED" if view.paused else "")
    if view.status_msg: status += "  " + view.status_msg
    try: stdscr.addstr(h - 1, 0, status[:max(0, w - 1)])
    except curses.error: pass


def run_scope(stdscr, session: Session) -> None:
    stdscr.nodelay(True)
    try: curses.curs_set(0)
    except curses.error: pass
    ramp = ColorRamp(); ramp.setup()
    view = ViewState(color_on=session.settings.color)
    tick = time.perf_counter(); next_frame = tick
    while True:
        try: key = stdscr.getch()
        except curses.error: key = -1
        if key != -1 and not handle_key(session, view, key): break
        now = time.perf_counter()
        if now < next_frame: time.sleep(max(0.0, next_frame - now)); continue
        if not view.paused: view.t += now - tick
        tick = now; next_frame = now + session.settings.frame_delay
        h, w = stdscr.getmaxyx()
        width, height = canvas_size(session, h, w)
        frame = render(session.settings.mode, session.ensure_partials(), width, height, view.t)
        stdscr.erase()
        draw_frame(stdscr, frame, ramp, view)
        stdscr.refresh()


def main(session: Session) -> None:
    session.ensure_partials()
    try: curses.wrapper(run_scope, session)
    except KeyboardInterrupt: pass
