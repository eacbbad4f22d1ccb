class HarmonicScopeError(Exception):
    """Base class for every recoverable error raised by harmonic_scope."""


class InvalidModulusError(HarmonicScopeError, ValueError):
    def __init__(self, modulus: int):
        super().__init__(f"invalid modulus: {modulus} (must be a positive integer)")
        self.modulus = modulus


class SettingsError(HarmonicScopeError, ValueError):
    pass


class AnimationBusyError(HarmonicScopeError, RuntimeError):
    pass
