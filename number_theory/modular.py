"""
Modular arithmetic.

Responsibility: canonical reduction and fast exponentiation.

Python integers never overflow, but the compiled loop works in int64.
Products there go through mul_mod, which keeps every intermediate below
2**63 for moduli up to 2**62:
- m <= 2**31: a * b < 2**62, multiply directly
- m <= 2**62: double-and-add, partial sums stay below 2 * m
Larger moduli fall back to Python integers.
"""

import operator
from typing import Optional

from numba import njit

from .config import DEFAULT_CONFIG, get_config
from .errors import InvalidArgument

_DIRECT_PRODUCT_LIMIT = 1 << 31
_JIT_MODULUS_LIMIT = 1 << 62
_INT64_MAX = (1 << 63) - 1


def mod_reduce(a: int, b: int) -> int:
    """
    Reduce a modulo b into the canonical range [0, |b|).

    Satisfies a = q*b + r with 0 <= r < |b| for some integer q, whatever
    the signs of a and b.

    Raises
    ------
    InvalidArgument
        If b is zero.
    """
    a, b = operator.index(a), operator.index(b)
    if b == 0:
        raise InvalidArgument("mod_reduce: modulus cannot be zero")
    return a % abs(b)


@njit(cache=True)
def mul_mod(a, b, m):
    """(a * b) % m for 0 <= a, b < m <= 2**62, without leaving int64."""
    if m <= 2147483648:
        return (a * b) % m

    result = 0
    while b > 0:
        if b & 1:
            result += a
            if result >= m:
                result -= m
        a += a
        if a >= m:
            a -= m
        b >>= 1
    return result


@njit(cache=True)
def _mod_pow_kernel(a, b, m):
    result = 1
    while b > 0:
        if b & 1:
            result = mul_mod(result, a, m)
        a = mul_mod(a, a, m)
        b >>= 1
    return result


def _mod_pow_python(a: int, b: int, m: int) -> int:
    result = 1
    while b > 0:
        if b & 1:
            result = result * a % m
        a = a * a % m
        b >>= 1
    return result


def mod_pow(a: int, b: int, m: int, config: Optional[dict] = None) -> int:
    """
    Compute (a ** b) % m by square-and-multiply in O(log b) steps.

    Parameters
    ----------
    a : int
        Base (non-negative).
    b : int
        Exponent (non-negative).
    m : int
        Modulus (positive).
    config : dict, optional
        Overrides for the loaded configuration. With config['jit'] the loop
        runs compiled whenever m <= 2**62.

    Returns
    -------
    int
        The result in [0, m).

    Raises
    ------
    InvalidArgument
        If m is zero, any argument is negative, or a and b are both zero.

    Example
    -------
    >>> mod_pow(2, 10, 1000)
    24
    """
    a, b, m = operator.index(a), operator.index(b), operator.index(m)
    if m == 0:
        raise InvalidArgument("mod_pow: modulus must be positive, got 0")
    if a < 0 or b < 0 or m < 0:
        raise InvalidArgument(
            f"mod_pow: expected a >= 0, b >= 0, m > 0, got a={a}, b={b}, m={m}")
    if a == 0 and b == 0:
        raise InvalidArgument("mod_pow: 0^0 is undefined")

    if b == 0:
        return 1 % m

    a %= m
    # 0^b = 0 and 1^b = 1 for b > 0
    if a <= 1:
        return a

    config = get_config() if config is None else {**DEFAULT_CONFIG, **config}
    if config['jit'] and m <= _JIT_MODULUS_LIMIT and b <= _INT64_MAX:
        return int(_mod_pow_kernel(a, b, m))
    return _mod_pow_python(a, b, m)
