"""Tests for exact fraction comparison."""

import pytest

from aggregate_ranker.errors import InvalidArgument
from aggregate_ranker.rational import Rational


class TestRationalComparison:

    def test_one_third_less_than_one_half(self) -> None:
        assert Rational(1, 3) < Rational(1, 2)
        assert Rational(1, 2) > Rational(1, 3)

    def test_unreduced_fractions_are_equal(self) -> None:
        assert Rational(2, 4) == Rational(1, 2)
        assert Rational(2, 4).compare(Rational(1, 2)) == 0

    def test_zero_less_than_one(self) -> None:
        assert Rational(0, 1) < Rational(1, 1)
        assert Rational(0, 1).compare(Rational(1, 1)) == -1

    def test_zero_denominator_fails(self) -> None:
        with pytest.raises(InvalidArgument):
            Rational(1, 0)

    def test_near_equal_ratios_are_not_merged(self) -> None:
        """Ratios that round to the same float still compare exactly."""
        a = Rational(10**17, 3 * 10**17 + 1)
        b = Rational(1, 3)
        assert a.to_float() == b.to_float()
        assert a < b
        assert a != b

    def test_large_equal_ratios(self) -> None:
        assert Rational(333333333333333333, 999999999999999999) == Rational(1, 3)

    def test_equal_fractions_hash_equally(self) -> None:
        assert hash(Rational(3, 9)) == hash(Rational(1, 3))
        assert len({Rational(1, 2), Rational(2, 4), Rational(3, 6)}) == 1

    def test_negative_denominator_normalized(self) -> None:
        r = Rational(1, -2)
        assert r.denominator == 2
        assert r < Rational(0, 1)

    def test_not_comparable_to_float(self) -> None:
        assert Rational(1, 2) != 0.5
        with pytest.raises(TypeError):
            Rational(1, 2) < 0.5

    def test_to_float(self) -> None:
        assert Rational(3, 4).to_float() == 0.75
