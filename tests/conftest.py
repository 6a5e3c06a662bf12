"""Shared fixtures and table builders for the test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pytest

_TESTS_DIR = Path(__file__).parent
SAMPLE_TABLE = _TESTS_DIR / "sample_data" / "rankings_sample.csv"

NAMES = ["Alpha", "Bravo", "Charlie", "Delta", "Echo", "Foxtrot"]


def make_grid(
    polls: dict[str, list[str]],
    totals: Optional[list[str]] = None,
    aggregate: Optional[list[str]] = None,
    aggregate_total: str = "",
) -> list[list[str]]:
    """Build a raw table grid with one column per poll.

    Subjects are numbered 01, 02, ... and named from NAMES.
    """
    n_subjects = len(next(iter(polls.values())))
    header = ["No.", "President", "Political party"] + list(polls)
    if aggregate is not None:
        header.append("Aggr.")

    rows = [header]
    for i in range(n_subjects):
        row = [f"{i + 1:02d}", NAMES[i], "Independent"]
        row += [cells[i] for cells in polls.values()]
        if aggregate is not None:
            row.append(aggregate[i])
        rows.append(row)

    if totals is None:
        totals = ["" for _ in polls]
    footer = ["", "Total in survey", ""] + list(totals)
    if aggregate is not None:
        footer.append(aggregate_total)
    rows.append(footer)
    return rows


@pytest.fixture
def three_in_order() -> list[list[str]]:
    return make_grid({"Poll 1": ["1", "2", "3"]}, totals=["3"])


@pytest.fixture
def tie_at_top() -> list[list[str]]:
    return make_grid({"Poll 1": ["1 (tie)", "1 (tie)", "3", "4"]}, totals=["4"])


@pytest.fixture
def sample_table_path() -> Path:
    return SAMPLE_TABLE
