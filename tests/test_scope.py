from harmonic_scope.render import RenderMode, render
from harmonic_scope.scope import ViewState, canvas_size, draw_frame, handle_key
from harmonic_scope.session import Session


class FakeScreen:
    def __init__(self, rows, cols):
        self.rows, self.cols = rows, cols
        self.cells = {}
        self.strings = {}

    def getmaxyx(self):
        return self.rows, self.cols

    def addch(self, y, x, ch, attr=0):
        self.cells[(y, x)] = chr(ch)

    def addstr(self, y, x, s, attr=0):
        self.strings[y] = s


def test_keys():
    s = Session()
    view = ViewState(t=4.0)
    assert handle_key(s, view, ord(" "))
    assert view.paused
    handle_key(s, view, ord("m"))
    assert s.settings.mode is RenderMode.LISSAJOUS
    handle_key(s, view, ord("r"))
    assert view.t == 0.0
    handle_key(s, view, ord("-"))
    assert s.settings.max_partials == 23
    handle_key(s, view, ord("c"))
    assert not view.color_on
    assert not handle_key(s, view, ord("q"))


def test_partial_count_stays_in_range():
    s = Session()
    s.update_settings(max_partials=64)
    handle_key(s, ViewState(), ord("+"))
    assert s.settings.max_partials == 64


def test_canvas_fits_terminal():
    s = Session()
    assert canvas_size(s, 50, 200) == (80, 24)
    assert canvas_size(s, 10, 30) == (29, 9)


def test_draw_frame_writes_cells_and_status():
    frame = render("oscilloscope", (), 40, 16, 0.0)
    scr = FakeScreen(17, 41)
    draw_frame(scr, frame, None, ViewState(paused=True))
    assert scr.cells[(8, 0)] == "*"
    assert len(scr.cells) == 40
    assert scr.strings[16].startswith("OSCILLOSCOPE")
    assert "PAUSED" in scr.strings[16]
