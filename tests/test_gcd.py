"""
Tests for gcd, extended_gcd, lcm and mod_inverse.

extended_gcd is checked through its defining identity a*s + b*t == g,
and g is cross-checked against gcd and sympy.
"""

import math

import numpy as np
import pytest
from sympy import igcd

from number_theory.errors import InvalidArgument
from number_theory.gcd import gcd, extended_gcd, lcm, mod_inverse

SEED = 20250708


class TestGcd:
    """Classical Euclid on absolute values."""

    def test_known_values(self):
        cases = [(12, 18, 6), (17, 5, 1), (0, 7, 7), (7, 0, 7), (270, 192, 6), (1, 1, 1)]
        for a, b, expected in cases:
            assert gcd(a, b) == expected, f"gcd({a}, {b}) should be {expected}"

    def test_negative_inputs(self):
        assert gcd(-12, 18) == 6
        assert gcd(12, -18) == 6
        assert gcd(-12, -18) == 6
        assert gcd(-5, 0) == 5

    def test_both_zero_fails(self):
        with pytest.raises(InvalidArgument):
            gcd(0, 0)

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            gcd(0, 0)

    def test_rejects_non_integers(self):
        with pytest.raises(TypeError):
            gcd(1.5, 3)

    def test_numpy_integers(self):
        assert gcd(np.int64(48), np.int32(36)) == 12

    def test_wide_integers(self):
        """No fixed width: values beyond 64 bits are exact."""
        a = 2**127 - 1
        assert gcd(a * 3, a * 5) == a

    def test_matches_math_gcd(self):
        rng = np.random.default_rng(SEED)
        for a, b in rng.integers(-10**12, 10**12, size=(500, 2)):
            a, b = int(a), int(b)
            if a == 0 and b == 0:
                continue
            assert gcd(a, b) == math.gcd(a, b)


class TestExtendedGcd:
    """Bézout coefficients from the iterative recurrence."""

    def test_identity_small_grid(self):
        for a in range(0, 60):
            for b in range(0, 60):
                if a == 0 and b == 0:
                    continue
                g, s, t = extended_gcd(a, b)
                assert a * s + b * t == g, f"Bézout identity fails for ({a}, {b})"
                assert g == gcd(a, b)

    def test_identity_random(self):
        rng = np.random.default_rng(SEED)
        for a, b in rng.integers(0, 2**62, size=(500, 2)):
            a, b = int(a), int(b)
            g, s, t = extended_gcd(a, b)
            assert a * s + b * t == g
            assert g == gcd(abs(a), abs(b)) == igcd(a, b)

    def test_known_coefficients(self):
        assert extended_gcd(240, 46) == (2, -9, 47)
        assert extended_gcd(1, 0) == (1, 1, 0)
        assert extended_gcd(0, 5) == (5, 0, 1)

    def test_wide_integers(self):
        """Coefficients near and past 64 bits do not overflow."""
        a, b = 2**89 - 1, 2**61 - 1
        g, s, t = extended_gcd(a, b)
        assert a * s + b * t == g == 1

    def test_returns_tuple(self):
        result = extended_gcd(10, 4)
        assert isinstance(result, tuple)
        assert len(result) == 3

    def test_both_zero_fails(self):
        with pytest.raises(InvalidArgument):
            extended_gcd(0, 0)

    @pytest.mark.parametrize("a, b", [(-1, 5), (5, -1), (-3, -3), (-4, 0)])
    def test_negative_fails(self, a, b):
        with pytest.raises(InvalidArgument):
            extended_gcd(a, b)


class TestLcm:

    def test_known_values(self):
        assert lcm(4, 6) == 12
        assert lcm(-4, 6) == 12
        assert lcm(7, 13) == 91
        assert lcm(5, 0) == 0

    def test_both_zero_fails(self):
        with pytest.raises(InvalidArgument):
            lcm(0, 0)

    def test_gcd_times_lcm(self):
        for a in range(1, 40):
            for b in range(1, 40):
                assert gcd(a, b) * lcm(a, b) == a * b


class TestModInverse:

    def test_known_values(self):
        assert mod_inverse(3, 11) == 4
        assert mod_inverse(10, 17) == 12
        assert mod_inverse(1, 1) == 0

    def test_negative_base(self):
        """a is reduced canonically first."""
        assert mod_inverse(-3, 11) == 7
        assert (-3 * 7) % 11 == 1

    def test_inverse_property(self):
        m = 101
        for a in range(1, m):
            assert (a * mod_inverse(a, m)) % m == 1

    def test_not_coprime_fails(self):
        with pytest.raises(InvalidArgument):
            mod_inverse(6, 9)
        with pytest.raises(InvalidArgument):
            mod_inverse(0, 7)

    @pytest.mark.parametrize("m", [0, -5])
    def test_non_positive_modulus_fails(self, m):
        with pytest.raises(InvalidArgument):
            mod_inverse(3, m)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
