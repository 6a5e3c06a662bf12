"""
Aggregate ranking of ranked polls.

Ranks subjects (e.g. US presidents in historical rankings) by the share of
pairwise comparisons they win across all polls, with exact tie detection,
competition ranking, quartile boundaries and survey total checks.
"""

from .audit import SurveyAudit, TotalCorrection, audit_survey_totals
from .errors import (
    AggregateUndetermined,
    FormatError,
    InvalidArgument,
    RankerError,
    StructuralError,
)
from .pipeline import AggregateResults, process_table, rank_grid, rank_poll_table
from .quartiles import format_quartiles, quartiles
from .ranking import assign_ranks
from .rational import Rational
from .scoring import build_matchup_matrix, score_pairwise
from .table import Poll, PollTable, RankCell, Subject, extract_poll_table

__version__ = "1.0.0"
