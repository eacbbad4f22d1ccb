"""
Modular arithmetic over 64-bit unsigned operands.

Python integers never overflow, so the product in ``mulmod`` is already the
double-width intermediate. The functions still refuse values that could not
be held in an unsigned 64-bit register.
"""

U64_MAX = (1 << 64) - 1


def is_u64(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= U64_MAX


def _check(name: str, value: int) -> None:
    if not is_u64(value):
        raise ValueError(f"{name} must be an unsigned 64-bit integer, got {value!r}")


def mulmod(a: int, b: int, m: int) -> int:
    _check("a", a); _check("b", b); _check("m", m)
    if m == 0:
        return 0
    return (a * b) % m


def modexp(base: int, exponent: int, modulus: int) -> int:
    """Square-and-multiply. Returns 0 for modulus 0 (undefined)."""
    _check("base", base); _check("exponent", exponent); _check("modulus", modulus)
    if modulus == 0:
        return 0
    result = 1 % modulus
    b = base % modulus
    e = exponent
    while e:
        if e & 1:
            result = mulmod(result, b, modulus)
        b = mulmod(b, b, modulus)
        e >>= 1
    return result
