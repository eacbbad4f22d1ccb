import math

from harmonic_scope.partials import build_partials, partial_arrays, partial_for_term
from harmonic_scope.sequence import generate


def test_formulas():
    p = partial_for_term(40, 2)
    assert math.isclose(p.spatial_frequency, 0.5 + 0.12 * (40 % 17 + 1))
    assert math.isclose(p.temporal_frequency, 0.6 + 0.07 * (40 % 29 + 3))
    assert math.isclose(p.amplitude, 1 / (1 + 2 * 0.8))
    assert math.isclose(p.initial_phase, math.radians(40))


def test_phase_wraps_at_360():
    assert math.isclose(partial_for_term(370, 0).initial_phase, math.radians(10))


def test_size_is_min_of_sequence_and_limit():
    seq = generate(2, 61)
    assert len(build_partials(seq, 24)) == 24
    assert len(build_partials(seq, 1)) == 3
    assert len(build_partials(generate(2, 9), 24)) == 6
    assert len(build_partials([], 24)) == 0


def test_amplitude_strictly_decreasing():
    ps = build_partials(generate(3, 61), 24)
    amps = [p.amplitude for p in ps]
    assert all(a > b for a, b in zip(amps, amps[1:]))
    assert amps[0] == 1.0


def test_deterministic():
    assert build_partials(generate(2, 13)) == build_partials(generate(2, 13))


def test_arrays_shape():
    f, w, a, phi = partial_arrays(build_partials([1, 2, 3, 4]))
    assert f.shape == w.shape == a.shape == phi.shape == (4, 1)
    f, _, _, _ = partial_arrays(())
    assert f.shape == (0, 1)
