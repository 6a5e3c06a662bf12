"""
Pairwise tournament scoring.

Every poll is read as a ranked ballot. For each pair of subjects ranked in a
poll, the subject with the smaller rank number gets a victory and the other a
defeat. Equal ranks (ties) and pairs where either subject is unranked count
for nothing.
"""

import logging
from typing import Optional

import pandas as pd

from .table import PollTable, Subject

logger = logging.getLogger(__name__)


def compare_ranks(rank_a: Optional[int], rank_b: Optional[int]) -> int:
    """
    Compare two ranks from the same poll.

    Returns:
        1 if a beats b, -1 if b beats a, 0 if tied or either is unranked
    """
    if rank_a is None or rank_b is None or rank_a == rank_b:
        return 0
    return 1 if rank_a < rank_b else -1


def score_pairwise(table: PollTable) -> list[Subject]:
    """
    Count victories and defeats for every subject across all polls.

    Counts already on the subjects are reset first, so calling this twice
    gives the same result. An aggregate column in the input is not part of
    table.polls and so is never scored.

    Args:
        table: Validated poll table

    Returns:
        The table's subjects, in table order, with victories/defeats set
    """
    subjects = table.subjects
    for subject in subjects:
        subject.victories = 0
        subject.defeats = 0

    rank_lists = [poll.ranks for poll in table.polls]
    n_subjects = len(subjects)

    for i in range(n_subjects - 1):
        for j in range(i + 1, n_subjects):
            for ranks in rank_lists:
                outcome = compare_ranks(ranks[i], ranks[j])
                if outcome > 0:
                    subjects[i].victories += 1
                    subjects[j].defeats += 1
                elif outcome < 0:
                    subjects[i].defeats += 1
                    subjects[j].victories += 1

    logger.info(
        "Scored %d subjects over %d polls (%d decisive comparisons)",
        n_subjects, len(rank_lists), sum(s.victories for s in subjects)
    )
    return subjects


def build_matchup_matrix(table: PollTable) -> pd.DataFrame:
    """
    Build the pairwise matchup matrix.

    Entry (i, j) is the number of polls in which subject i is ranked above
    subject j. The diagonal is empty. Rows and columns are labelled with
    subject names in table order.

    Args:
        table: Validated poll table

    Returns:
        DataFrame of victory counts
    """
    names = [subject.name for subject in table.subjects]
    n_subjects = len(names)
    wins = [[0] * n_subjects for _ in range(n_subjects)]

    for poll in table.polls:
        ranks = poll.ranks
        for i in range(n_subjects - 1):
            for j in range(i + 1, n_subjects):
                outcome = compare_ranks(ranks[i], ranks[j])
                if outcome > 0:
                    wins[i][j] += 1
                elif outcome < 0:
                    wins[j][i] += 1

    matrix_data = []
    for i in range(n_subjects):
        matrix_data.append([None if i == j else wins[i][j] for j in range(n_subjects)])

    return pd.DataFrame(matrix_data, index=names, columns=names)
