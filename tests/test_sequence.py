import math

import pytest

from harmonic_scope.errors import InvalidModulusError
from harmonic_scope.sequence import generate


def multiplicative_order(b, m):
    x = b % m
    k = 1
    while x != 1:
        x = (x * b) % m
        k += 1
    return k


def test_base2_mod9():
    seq = generate(2, 9)
    assert list(seq) == [2, 4, 8, 7, 5, 1]
    assert seq.period == 6
    assert seq.tail_length == 0
    assert seq.repeat_value == 2
    assert not seq.capped
    assert seq.is_purely_periodic


@pytest.mark.parametrize("m,period", [(11, 10), (13, 12), (61, 60)])
def test_known_periods(m, period):
    assert len(generate(2, m)) == period


def test_coprime_length_equals_order():
    for m in range(2, 60):
        for b in range(1, m):
            if math.gcd(b, m) != 1:
                continue
            seq = generate(b, m)
            assert len(seq) == multiplicative_order(b, m)
            assert len(set(seq)) == len(seq)
            assert all(0 <= v < m for v in seq)


def test_modulus_one():
    seq = generate(5, 1)
    assert list(seq) == [0]


def test_modulus_zero_fails():
    with pytest.raises(InvalidModulusError):
        generate(2, 0)


def test_non_coprime_keeps_tail():
    # 2^n mod 12: 2, 4, 8, 4 -> tail [2], cycle [4, 8]
    seq = generate(2, 12)
    assert list(seq) == [2, 4, 8]
    assert seq.repeat_value == 4
    assert seq.tail_length == 1
    assert seq.period == 2
    assert not seq.is_purely_periodic


def test_base_zero():
    seq = generate(0, 7)
    assert list(seq) == [0]


def test_deterministic():
    assert generate(3, 61) == generate(3, 61)


def test_safety_cap_is_soft_stop():
    seq = generate(2, 1_000_003, cap=50)
    assert len(seq) == 50
    assert seq.capped
    assert seq.repeat_value is None


def test_terms_are_numbered_from_one():
    assert list(generate(2, 9).terms())[:2] == [(1, 2), (2, 4)]


def test_bad_cap():
    with pytest.raises(ValueError):
        generate(2, 9, cap=0)
