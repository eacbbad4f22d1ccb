"""Numbered text menu driving a Session: parameters, sequence display, animation, settings."""

import logging
import sys
import time
from typing import Callable, Dict, Optional, TextIO

from .animation import Animator
from .errors import HarmonicScopeError
from .render import RenderMode
from .session import Session
from .terminal import FrameWriter, progress_bar

logger = logging.getLogger(__name__)

STOP_HINT = "Press Enter to stop the animation"


class Menu:
    def __init__(self, session: Session, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.session = session
        self.inp = stdin or sys.stdin
        self.out = stdout or sys.stdout
        self.sleep = sleep
        self.actions: Dict[int, Callable[[], Optional[bool]]] = {
            1: self.set_base,
            2: self.set_modulus,
            3: self.show_sequence,
            4: self.animate,
            5: self.toggle_progress,
            6: self.settings_menu,
            7: self.exit,
        }

    # ----------------------------
    # I/O helpers
    # ----------------------------
    def say(self, msg: str = "") -> None:
        self.out.write(msg + "\n")
        self.out.flush()

    def read_line(self, prompt: str = "") -> str:
        if prompt:
            self.out.write(prompt)
            self.out.flush()
        line = self.inp.readline()
        if line == "":
            raise EOFError
        return line.strip()

    def read_int(self, prompt: str) -> int:
        s = self.read_line(prompt)
        try:
            return int(s)
        except ValueError:
            raise ValueError(f"not a whole number: {s!r}") from None

    # ----------------------------
    # Main loop
    # ----------------------------
    def show(self) -> None:
        s = self.session
        st = s.settings
        self.say()
        self.say("--- Control Menu ---")
        self.say(f"1. Set new base (current: {s.base})")
        self.say(f"2. Set new modulo (current: {s.modulus})")
        self.say("3. Show sequence")
        self.say(f"4. Start animation ({st.mode.value})")
        self.say(f"5. Toggle progress display ({'ON' if st.show_progress else 'OFF'})")
        self.say("6. Settings")
        self.say("7. Exit program")

    def run(self) -> None:
        while True:
            self.show()
            try:
                choice = self.read_int("Select an option: ")
            except EOFError:
                self.say()
                self.say("Exiting program...")
                return
            except ValueError as e:
                self.say(f"Invalid input: {e}")
                continue
            action = self.actions.get(choice)
            if action is None:
                self.say("Invalid option. Please try again.")
                continue
            try:
                if action() is False:
                    return
            except EOFError:
                self.say()
                self.say("Exiting program...")
                return
            except (HarmonicScopeError, ValueError) as e:
                logger.debug("menu action %d failed: %s", choice, e)
                self.say(f"Error: {e}")

    # ----------------------------
    # Actions
    # ----------------------------
    def set_base(self) -> None:
        n = self.read_int("Enter new base: ")
        self.session.set_base(n)
        self.say(f"Base updated to {n}")

    def set_modulus(self) -> None:
        n = self.read_int("Enter new modulo: ")
        self.session.set_modulus(n)
        self.say(f"Modulo updated to {n}")

    def show_sequence(self) -> None:
        seq = self.session.ensure_sequence()
        st = self.session.settings
        self.say(f"Sequence {seq.base}^n mod {seq.modulus}:")
        total = len(seq)
        for i, v in seq.terms():
            line = f"Term {i}: {v}"
            if st.show_progress:
                line = f"{line:<24} {progress_bar(i, total, color=st.color)}"
            self.say(line)
            if st.term_delay_ms:
                self.sleep(st.term_delay)
        if seq.capped:
            self.say(f"Stopped at the safety cap of {st.cap} terms before a repeat was found.")
        else:
            self.say(f"{total} terms; residue {seq.repeat_value} repeats next "
                     f"(tail {seq.tail_length}, period {seq.period}).")

    def animate(self) -> None:
        st = self.session.settings
        writer = FrameWriter(self.out, color=st.color, footer=STOP_HINT)
        animator = Animator(self.session, writer)
        writer.begin()
        try:
            animator.start()
            self.inp.readline()
        finally:
            animator.stop()
            writer.end()
        if animator.error is not None:
            self.say(f"Animation failed: {animator.error}")
        else:
            self.say(f"Animation stopped after {animator.frames} frames.")

    def toggle_progress(self) -> None:
        st = self.session.update_settings(show_progress=not self.session.settings.show_progress)
        self.say(f"Progress display {'ON' if st.show_progress else 'OFF'}")

    def exit(self) -> bool:
        self.say("Exiting program...")
        return False

    # ----------------------------
    # Settings
    # ----------------------------
    def settings_menu(self) -> None:
        while True:
            st = self.session.settings
            self.say()
            self.say("--- Settings ---")
            self.say(f"1. Frame delay (current: {st.frame_delay_ms} ms)")
            self.say(f"2. Canvas size (current: {st.width}x{st.height})")
            self.say(f"3. Render mode (current: {st.mode.value})")
            self.say(f"4. Max partials (current: {st.max_partials})")
            self.say(f"5. Term delay (current: {st.term_delay_ms} ms)")
            self.say("0. Back")
            try:
                choice = self.read_int("Select an option: ")
                if choice == 0:
                    return
                if choice == 1:
                    ms = self.read_int("Frame delay in ms: ")
                    self.session.update_settings(frame_delay_ms=ms)
                elif choice == 2:
                    w = self.read_int("Canvas width: ")
                    h = self.read_int("Canvas height: ")
                    self.session.update_settings(width=w, height=h)
                elif choice == 3:
                    modes = list(RenderMode)
                    for i, m in enumerate(modes, start=1):
                        self.say(f"  {i}. {m.value}")
                    k = self.read_int("Mode: ")
                    if not 1 <= k <= len(modes):
                        raise ValueError(f"choose a mode between 1 and {len(modes)}")
                    self.session.update_settings(mode=modes[k - 1])
                elif choice == 4:
                    n = self.read_int("Max partials: ")
                    self.session.update_settings(max_partials=n)
                elif choice == 5:
                    ms = self.read_int("Delay between terms in ms: ")
                    self.session.update_settings(term_delay_ms=ms)
                else:
                    self.say("Invalid option. Please try again.")
                    continue
                self.say("Settings updated.")
            except (HarmonicScopeError, ValueError) as e:
                self.say(f"Error: {e}")
