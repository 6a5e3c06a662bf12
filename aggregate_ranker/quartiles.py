"""
Quartile boundaries using the "median goes up" rule.

The ranks 1..n are split into a top and a bottom half, and each half is
split again. Whenever a range has odd length its middle element goes to the
upper (better ranked) half. The boundary of a quartile is its last member,
i.e. its highest rank number.

Ties are not taken into account, only n. If 40 subjects are ranked the first
quartile ends at 10 even if five subjects are tied at 10; moving such a tie
into the neighbouring quartile is left to the reader.
"""

from typing import Optional

from .errors import InvalidArgument

# 1 when the median of an odd-length range goes into the upper half
MEDIAN_BIAS = 1


def quartiles(n: int) -> list[Optional[int]]:
    """
    Compute the last rank in each quartile of the ranks 1..n.

    For n < 4 some quartiles are empty (None).

    Args:
        n: Number of ranked positions

    Returns:
        Four slots, top quartile first

    Raises:
        InvalidArgument: If n < 1
    """
    if n < 1:
        raise InvalidArgument(f"n should be positive: n = {n}")

    if n < 4:
        slots = list(range(1, n + 1))
        return slots + [None] * (4 - n)

    k = MEDIAN_BIAS
    q4 = n
    q2 = (q4 + k) // 2
    q1 = (q2 + k) // 2
    q3 = q2 + (q4 - q2 + k) // 2
    return [q1, q2, q3, q4]


def format_quartiles(slots: list[Optional[int]]) -> str:
    """Join quartile slots with ", ", empty slots rendered as nothing."""
    return ", ".join("" if slot is None else str(slot) for slot in slots)
