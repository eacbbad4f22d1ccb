import pytest

from harmonic_scope.errors import AnimationBusyError, InvalidModulusError
from harmonic_scope.session import Session


def test_defaults():
    s = Session()
    assert (s.base, s.modulus) == (2, 9)
    assert s.sequence is None and s.partials is None


def test_ensure_partials_generates_sequence_first():
    s = Session()
    ps = s.ensure_partials()
    assert list(s.sequence) == [2, 4, 8, 7, 5, 1]
    assert len(ps) == 6
    assert s.ensure_partials() is ps


def test_parameter_change_invalidates():
    s = Session()
    s.ensure_partials()
    s.set_modulus(11)
    assert s.sequence is None and s.partials is None
    assert len(s.ensure_sequence()) == 10
    s.set_base(3)
    assert s.sequence is None


def test_modulus_zero_rejected_and_state_kept():
    s = Session()
    seq = s.ensure_sequence()
    with pytest.raises(InvalidModulusError):
        s.set_modulus(0)
    assert s.modulus == 9
    assert s.sequence is seq


def test_negative_base_rejected():
    with pytest.raises(ValueError):
        Session().set_base(-2)


def test_changes_refused_while_running():
    s = Session()
    s.running.set()
    with pytest.raises(AnimationBusyError):
        s.set_base(5)
    with pytest.raises(AnimationBusyError):
        s.update_settings(cap=100)
    # canvas and mode changes are allowed mid-animation
    s.update_settings(width=50, mode="plasma")
    assert s.settings.width == 50


def test_max_partials_change_rebuilds_partials_only():
    s = Session(2, 61)
    s.ensure_partials()
    seq = s.sequence
    s.update_settings(max_partials=5)
    assert s.partials is None
    assert s.sequence is seq
    assert len(s.ensure_partials()) == 5
