"""
Aggregate rank assignment.

Subjects are ranked by score = victories / (victories + defeats), compared
exactly. Equal scores share a rank and the ranks after them are skipped
(competition ranking: 1, 2, 2, 4). Subjects that are in no decisive
comparison have no score, sort last and get no rank.
"""

import logging
from functools import cmp_to_key
from typing import Optional

from .rational import Rational
from .table import TIE_MARKER, Subject

logger = logging.getLogger(__name__)


def compute_score(subject: Subject) -> Optional[Rational]:
    """Return the subject's exact score, or None if it has no comparisons."""
    total = subject.victories + subject.defeats
    if total == 0:
        return None
    return Rational(subject.victories, total)


def compare_scores(a: Optional[Rational], b: Optional[Rational]) -> int:
    """
    Sort comparator putting higher scores first and missing scores last.

    Two missing scores compare equal for placement only.
    """
    if a is None:
        return 0 if b is None else 1
    if b is None:
        return -1
    return -a.compare(b)


def format_rank(position: int, tied: bool = False) -> str:
    """Zero-pad a rank to two digits, e.g. 5 -> "05", with a tie suffix if tied."""
    label = f"{position:02d}"
    if tied:
        label += TIE_MARKER
    return label


def assign_ranks(subjects: list[Subject]) -> list[Subject]:
    """
    Score and rank subjects.

    Sets score, rank, rank_label, unranked and tied on every subject. The
    sort is stable, so subjects with equal scores keep their input order.

    Args:
        subjects: Subjects with victories and defeats already counted

    Returns:
        New list of the same subjects, best first
    """
    for subject in subjects:
        subject.score = compute_score(subject)
        subject.unranked = subject.score is None
        subject.tied = False
        subject.rank = None
        subject.rank_label = None

    ranking = sorted(subjects, key=cmp_to_key(lambda a, b: compare_scores(a.score, b.score)))

    scored = [subject for subject in ranking if not subject.unranked]
    position = 0
    for index, subject in enumerate(scored):
        if index == 0 or scored[index - 1].score != subject.score:
            # Number of strictly better subjects + 1
            position = index + 1
        else:
            subject.tied = True
            scored[index - 1].tied = True
        subject.rank = position

    for subject in scored:
        subject.rank_label = format_rank(subject.rank, subject.tied)

    n_tied = sum(1 for subject in scored if subject.tied)
    logger.info(
        "Ranked %d subjects (%d tied, %d without score)",
        len(scored), n_tied, len(ranking) - len(scored)
    )
    return ranking
