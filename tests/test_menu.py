import io
import time

from harmonic_scope.menu import Menu
from harmonic_scope.render import RenderMode
from harmonic_scope.session import Session


class PacedInput(io.StringIO):
    """Holds a blank line back briefly so a started animation can draw."""

    def readline(self, *args):
        line = super().readline(*args)
        if line == "\n":
            time.sleep(0.2)
        return line


def run_menu(script, session=None):
    session = session or Session()
    out = io.StringIO()
    Menu(session, stdin=PacedInput(script), stdout=out, sleep=lambda s: None).run()
    return session, out.getvalue()


def test_exit():
    _, out = run_menu("7\n")
    assert "--- Control Menu ---" in out
    assert out.rstrip().endswith("Exiting program...")


def test_eof_exits_cleanly():
    _, out = run_menu("")
    assert "Exiting program..." in out


def test_set_base_and_modulus():
    s, out = run_menu("1\n3\n2\n61\n7\n")
    assert (s.base, s.modulus) == (3, 61)
    assert "Base updated to 3" in out
    assert "Modulo updated to 61" in out


def test_non_numeric_input_reprompts():
    s, out = run_menu("abc\n1\nxyz\n7\n")
    assert "Invalid input" in out
    assert s.base == 2
    assert out.count("--- Control Menu ---") == 3


def test_unknown_option():
    _, out = run_menu("42\n7\n")
    assert "Invalid option" in out


def test_modulus_zero_reported():
    s, out = run_menu("2\n0\n7\n")
    assert "invalid modulus" in out
    assert s.modulus == 9


def test_show_sequence_with_progress():
    s = Session()
    s.update_settings(color=False)
    _, out = run_menu("3\n7\n", s)
    for i, v in enumerate([2, 4, 8, 7, 5, 1], start=1):
        assert f"Term {i}: {v}" in out
    assert "6/6" in out
    assert "period 6" in out


def test_toggle_progress():
    s, out = run_menu("5\n3\n7\n")
    assert not s.settings.show_progress
    assert "Progress display OFF" in out
    assert "1/6" not in out


def test_settings_menu():
    s, out = run_menu("6\n1\n100\n2\n60\n20\n3\n3\n4\n5\n0\n7\n")
    st = s.settings
    assert st.frame_delay_ms == 100
    assert (st.width, st.height) == (60, 20)
    assert st.mode is RenderMode.PLASMA
    assert st.max_partials == 5


def test_settings_menu_rejects_small_canvas():
    s, out = run_menu("6\n2\n10\n10\n0\n7\n")
    assert "width must be between" in out
    assert s.settings.width == 80


def test_animation_runs_until_enter():
    s = Session()
    s.update_settings(frame_delay_ms=10, width=40, height=16, color=False)
    s, out = run_menu("4\n\n7\n", s)
    assert "OSCILLOSCOPE  40x16" in out
    assert "Animation stopped after" in out
    assert not s.running.is_set()


def test_term_delay_paces_sequence_display():
    s = Session()
    out = io.StringIO()
    pauses = []
    Menu(s, stdin=PacedInput("6\n5\n500\n0\n3\n7\n"), stdout=out, sleep=pauses.append).run()
    assert s.settings.term_delay_ms == 500
    assert "5. Term delay (current: 0 ms)" in out.getvalue()
    assert pauses == [0.5] * 6
