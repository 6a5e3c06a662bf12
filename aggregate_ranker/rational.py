"""
Exact fractions for comparing pairwise scores.

Scores are victories / (victories + defeats). Two subjects with nearly equal
ratios must never be misordered (or falsely separated) by floating point
rounding, so comparison is done by cross-multiplying integers only.
"""

from functools import total_ordering
from math import gcd

from .errors import InvalidArgument


@total_ordering
class Rational:
    """
    A fraction numerator/denominator with a positive denominator.

    The fraction is not reduced; (2, 4) and (1, 2) compare equal.
    """

    __slots__ = ("numerator", "denominator")

    def __init__(self, numerator: int, denominator: int):
        if denominator == 0:
            raise InvalidArgument("denominator can't be 0")
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        self.numerator = numerator
        self.denominator = denominator

    def _cross(self, other: "Rational") -> tuple[int, int]:
        return self.numerator * other.denominator, other.numerator * self.denominator

    def compare(self, other: "Rational") -> int:
        """Return -1, 0 or 1 as this fraction is less than, equal to or greater than other."""
        lhs, rhs = self._cross(other)
        if lhs == rhs:
            return 0
        return 1 if lhs > rhs else -1

    def __eq__(self, other):
        if not isinstance(other, Rational):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other):
        if not isinstance(other, Rational):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self):
        # Equal fractions must hash equally
        g = gcd(self.numerator, self.denominator)
        return hash((self.numerator // g, self.denominator // g))

    def to_float(self) -> float:
        """Approximate value, for display only."""
        return self.numerator / self.denominator

    def __repr__(self):
        return f"Rational({self.numerator}, {self.denominator})"
