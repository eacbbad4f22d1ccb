import logging
import threading
from typing import Optional, Tuple

from .config import DEFAULT_BASE, DEFAULT_MODULUS, Settings
from .errors import AnimationBusyError, InvalidModulusError
from .modarith import is_u64
from .partials import Partial, build_partials
from .sequence import Sequence, generate

logger = logging.getLogger(__name__)


class Session:
    """Parameters, settings and derived data shared by the menu and the animator.

    The menu is the only writer of parameters and settings. Parameter changes
    are refused while an animation is running; settings changes are picked up
    by the animator on its next frame.
    """

    def __init__(self, base: int = DEFAULT_BASE, modulus: int = DEFAULT_MODULUS,
                 settings: Optional[Settings] = None):
        if not is_u64(base):
            raise ValueError(f"base must be an unsigned 64-bit integer, got {base!r}")
        if not is_u64(modulus) or modulus == 0:
            raise InvalidModulusError(modulus)
        self._lock = threading.RLock()
        self._base = base
        self._modulus = modulus
        self._settings = (settings or Settings()).validated()
        self._sequence: Optional[Sequence] = None
        self._partials: Optional[Tuple[Partial, ...]] = None
        self.running = threading.Event()

    # --- parameters ---
    @property
    def base(self) -> int:
        return self._base

    @property
    def modulus(self) -> int:
        return self._modulus

    def _guard(self, what: str) -> None:
        if self.running.is_set():
            raise AnimationBusyError(f"stop the animation before changing the {what}")

    def set_base(self, base: int) -> None:
        self._guard("base")
        if not is_u64(base):
            raise ValueError(f"base must be an unsigned 64-bit integer, got {base!r}")
        with self._lock:
            self._base = base
            self._invalidate()

    def set_modulus(self, modulus: int) -> None:
        self._guard("modulus")
        if not is_u64(modulus) or modulus == 0:
            raise InvalidModulusError(modulus)
        with self._lock:
            self._modulus = modulus
            self._invalidate()

    def _invalidate(self) -> None:
        self._sequence = None
        self._partials = None

    # --- settings ---
    @property
    def settings(self) -> Settings:
        return self._settings

    def update_settings(self, **changes) -> Settings:
        with self._lock:
            new = self._settings.update(**changes)
            if new.cap != self._settings.cap:
                self._guard("safety cap")
                self._invalidate()
            elif new.max_partials != self._settings.max_partials:
                # rebuilt lazily, also by a running animator on its next frame
                self._partials = None
            self._settings = new
            return new

    # --- derived data ---
    @property
    def sequence(self) -> Optional[Sequence]:
        return self._sequence

    @property
    def partials(self) -> Optional[Tuple[Partial, ...]]:
        return self._partials

    def regenerate(self) -> Sequence:
        with self._lock:
            seq = generate(self._base, self._modulus, self._settings.cap)
            self._sequence = seq
            self._partials = None
            return seq

    def ensure_sequence(self) -> Sequence:
        with self._lock:
            if self._sequence is None:
                return self.regenerate()
            return self._sequence

    def ensure_partials(self) -> Tuple[Partial, ...]:
        with self._lock:
            if self._partials is None:
                seq = self.ensure_sequence()
                self._partials = build_partials(seq, self._settings.max_partials)
                logger.debug("built %d partials from %d terms", len(self._partials), len(seq))
            return self._partials
