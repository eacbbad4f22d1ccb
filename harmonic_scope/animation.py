import logging
import threading
import time
from enum import Enum
from typing import Callable, Optional

from .errors import AnimationBusyError
from .render import Frame, render
from .session import Session

logger = logging.getLogger(__name__)


class AnimationState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"


class Animator:
    """Renders frames on a worker thread until asked to stop.

    The stop event is the only channel from the controlling thread to the
    worker. The per-frame sleep waits on that event, so a stop request wakes
    the worker at once instead of after the full frame delay.
    """

    def __init__(self, session: Session, sink: Callable[[Frame], None],
                 clock: Callable[[], float] = time.perf_counter):
        self.session = session
        self.sink = sink
        self.clock = clock
        self.frames = 0
        self.error: Optional[BaseException] = None
        self._state = AnimationState.STOPPED
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._t0 = 0.0

    @property
    def state(self) -> AnimationState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state is AnimationState.RUNNING

    @property
    def elapsed(self) -> float:
        return self.clock() - self._t0 if self.running else 0.0

    def start(self) -> None:
        with self._lock:
            if self._state is AnimationState.RUNNING or self.session.running.is_set():
                raise AnimationBusyError("an animation is already running")
            partials = self.session.ensure_partials()
            self._stop.clear()
            self.error = None
            self.frames = 0
            self._t0 = self.clock()
            self._state = AnimationState.RUNNING
            self.session.running.set()
            self._thread = threading.Thread(target=self._run, name="harmonic-animator", daemon=True)
            self._thread.start()
        logger.info("animation started: %s, %d partials", self.session.settings.mode.value, len(partials))

    def request_stop(self) -> None:
        self._stop.set()

    def join(self, timeout: Optional[float] = None) -> bool:
        th = self._thread
        if th is None or th is threading.current_thread():
            return True
        th.join(timeout)
        return not th.is_alive()

    def stop(self, timeout: Optional[float] = None) -> bool:
        self.request_stop()
        done = self.join(timeout)
        if done:
            logger.info("animation stopped after %d frames", self.frames)
        return done

    def _run(self) -> None:
        try:
            while not self._stop.is_set():
                st = self.session.settings
                partials = self.session.ensure_partials()
                t = self.clock() - self._t0
                frame = render(st.mode, partials, st.width, st.height, t)
                if self._stop.is_set():
                    break
                self.sink(frame)
                self.frames += 1
                self._stop.wait(st.frame_delay)
        except Exception as e:
            self.error = e
            logger.exception("animation aborted")
        finally:
            with self._lock:
                self._state = AnimationState.STOPPED
                self.session.running.clear()
