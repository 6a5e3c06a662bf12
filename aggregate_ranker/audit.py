"""
Checks of the "Total in survey" row.

The totals in the table are typed in by hand and are sometimes wrong, or are
not numbers at all. The true total of a poll is the number of subjects it
ranks; for the aggregate, the number of subjects with a score.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .table import PollTable, Subject

logger = logging.getLogger(__name__)


@dataclass
class TotalCorrection:
    """A declared survey total that is missing or wrong."""
    poll_name: str
    declared: Optional[int]
    actual: int
    is_aggregate: bool = False
    # Aggregate column produced by this run, absent from the input table
    new_aggregate: bool = False

    @property
    def message(self) -> str:
        if self.new_aggregate:
            return f"Total in survey for \"{self.poll_name}\" (aggregate) is {self.actual}."
        return (
            f"Total in survey for poll \"{self.poll_name}\" is incorrect; "
            f"should be {self.actual}."
        )


@dataclass
class SurveyAudit:
    """True totals as (poll name, total) in column order, aggregate last."""
    totals: list[tuple[str, int]] = field(default_factory=list)
    corrections: list[TotalCorrection] = field(default_factory=list)

    @property
    def aggregate_total(self) -> int:
        return self.totals[-1][1]


def audit_survey_totals(table: PollTable, subjects: list[Subject]) -> SurveyAudit:
    """
    Recount the participants of every poll and the aggregate.

    Mismatches are returned and logged, never raised. The table is not
    modified.

    Args:
        table: Validated poll table
        subjects: Subjects after rank assignment (their unranked flags decide
            who counts in the aggregate)

    Returns:
        SurveyAudit with true totals and corrections
    """
    audit = SurveyAudit()

    checks = [(poll.name, poll.declared_total, poll.ranked_count, False) for poll in table.polls]
    aggregate_count = sum(1 for subject in subjects if not subject.unranked)
    checks.append((table.aggregate_name, table.aggregate_declared_total, aggregate_count, True))

    for name, declared, actual, is_aggregate in checks:
        audit.totals.append((name, actual))
        if declared is None or declared != actual:
            correction = TotalCorrection(
                poll_name=name,
                declared=declared,
                actual=actual,
                is_aggregate=is_aggregate,
                new_aggregate=is_aggregate and not table.has_aggregate
            )
            audit.corrections.append(correction)
            logger.warning(correction.message)

    return audit
