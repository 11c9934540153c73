"""
Greatest common divisors.

Responsibility: Euclid's algorithm and what follows from it (Bézout
coefficients, lcm, modular inverse).
"""

import operator
from typing import Tuple

from .errors import InvalidArgument
from .modular import mod_reduce


def gcd(a: int, b: int) -> int:
    """
    Greatest common divisor by the Euclidean algorithm.

    Negative inputs are allowed; the result is always non-negative.

    Raises
    ------
    InvalidArgument
        If a and b are both zero.
    """
    a, b = operator.index(a), operator.index(b)
    if a == 0 and b == 0:
        raise InvalidArgument("gcd: a and b must not both be zero")

    a, b = abs(a), abs(b)
    while b != 0:
        a, b = b, a % b
    return a


def extended_gcd(a: int, b: int) -> Tuple[int, int, int]:
    """
    Extended Euclidean algorithm.

    Parameters
    ----------
    a : int
        First non-negative integer.
    b : int
        Second non-negative integer.

    Returns
    -------
    tuple
        (g, s, t) with a*s + b*t == g == gcd(a, b).

    Raises
    ------
    InvalidArgument
        If a and b are both zero, or either is negative.
    """
    a, b = operator.index(a), operator.index(b)
    if a == 0 and b == 0:
        raise InvalidArgument("extended_gcd: a and b must not both be zero")
    if a < 0 or b < 0:
        raise InvalidArgument(
            f"extended_gcd: a and b must be non-negative, got a={a}, b={b}")

    s0, s1 = 1, 0
    t0, t1 = 0, 1
    while b != 0:
        quotient, remainder = divmod(a, b)
        a, b = b, remainder
        s0, s1 = s1, s0 - quotient * s1
        t0, t1 = t1, t0 - quotient * t1

    return a, s0, t0


def lcm(a: int, b: int) -> int:
    """Least common multiple, non-negative; lcm(x, 0) == 0 for x != 0."""
    g = gcd(a, b)
    return abs(operator.index(a) * operator.index(b)) // g


def mod_inverse(a: int, m: int) -> int:
    """
    Modular multiplicative inverse of a modulo m.

    Returns
    -------
    int
        x in [0, m) with (a * x) % m == 1 (0 when m == 1).

    Raises
    ------
    InvalidArgument
        If m is not positive or a is not coprime to m.
    """
    m = operator.index(m)
    if m <= 0:
        raise InvalidArgument(f"mod_inverse: modulus must be positive, got {m}")

    a = mod_reduce(a, m)
    if m == 1:
        return 0

    # extended_gcd(0, m) gives g == m, rejected below
    g, s, _ = extended_gcd(a, m)
    if g != 1:
        raise InvalidArgument(f"mod_inverse: {a} is not invertible modulo {m} (gcd {g})")
    return s % m
