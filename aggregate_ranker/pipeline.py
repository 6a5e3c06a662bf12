"""
End-to-end processing of a poll table.

Loads the table, validates it, scores every pair of subjects, assigns the
aggregate ranks, checks the survey totals and computes quartile boundaries
for every poll and the aggregate. Optionally writes the results to an Excel
workbook.
"""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import pandas as pd

from .audit import SurveyAudit, audit_survey_totals
from .errors import StructuralError
from .quartiles import format_quartiles, quartiles
from .ranking import assign_ranks
from .scoring import build_matchup_matrix, score_pairwise
from .table import PollTable, Subject, extract_poll_table

logger = logging.getLogger(__name__)

DEFAULT_TABLE_PATH = Path("US-president-rankings-table.csv")


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class AggregateResults:
    """Container for all results of one run."""
    table: PollTable
    ranking: list[Subject]
    subjects: list[Subject]
    audit: SurveyAudit
    quartiles: list[tuple[str, Optional[str]]]
    matchup_matrix: pd.DataFrame


# =============================================================================
# Table Loading
# =============================================================================

def read_table_csv(filepath: Path) -> list[list[str]]:
    """
    Read a CSV export of the rankings table as a grid of strings.

    Cells are kept exactly as written (no number conversion, no trimming),
    and rows keep their own length so the validator can reject ragged tables.

    Args:
        filepath: Path to the CSV file

    Returns:
        List of rows, each a list of cell strings

    Raises:
        FileNotFoundError: If the file doesn't exist
        StructuralError: If the file is empty
    """
    filepath = Path(filepath)
    if not filepath.is_file():
        raise FileNotFoundError(f"Table file not found: {filepath}")

    # Not pd.read_csv: it pads short rows, which would hide a ragged table
    with open(filepath, newline="", encoding="utf-8-sig") as handle:
        grid = [row for row in csv.reader(handle)]

    if not grid:
        raise StructuralError(f"Table file is empty: {filepath}")

    return grid


# =============================================================================
# Ranking
# =============================================================================

def compute_quartiles(audit: SurveyAudit) -> list[tuple[str, Optional[str]]]:
    """
    Quartile boundaries for every poll and the aggregate, from true totals.

    A poll that ranks nobody has no quartiles (None).
    """
    result = []
    for name, total in audit.totals:
        if total < 1:
            logger.warning("Poll \"%s\" ranks nobody; no quartiles", name)
            result.append((name, None))
        else:
            result.append((name, format_quartiles(quartiles(total))))
    return result


def rank_poll_table(table: PollTable) -> AggregateResults:
    """
    Compute the aggregate ranking of a validated table.

    Args:
        table: Validated poll table

    Returns:
        AggregateResults for the table
    """
    subjects = score_pairwise(table)
    ranking = assign_ranks(subjects)
    matchup_matrix = build_matchup_matrix(table)
    audit = audit_survey_totals(table, subjects)

    return AggregateResults(
        table=table,
        ranking=ranking,
        subjects=list(subjects),
        audit=audit,
        quartiles=compute_quartiles(audit),
        matchup_matrix=matchup_matrix
    )


def rank_grid(grid: list[list[str]], has_aggregate: Optional[bool] = None) -> AggregateResults:
    """Validate a raw grid and rank it. See extract_poll_table for the errors raised."""
    return rank_poll_table(extract_poll_table(grid, has_aggregate))


# =============================================================================
# Output Generation
# =============================================================================

def results_dataframe(results: AggregateResults) -> pd.DataFrame:
    """Subjects in aggregate order with rank, score and comparison counts."""
    rows = []
    for subject in results.ranking:
        rows.append({
            'No.': subject.number,
            'Name': subject.name,
            'Party': subject.party,
            'Rank': subject.rank_label or '',
            'Score': None if subject.score is None else subject.score.to_float(),
            'Victories': subject.victories,
            'Defeats': subject.defeats
        })
    return pd.DataFrame(rows, columns=['No.', 'Name', 'Party', 'Rank', 'Score', 'Victories', 'Defeats'])


def create_results_excel(results: AggregateResults, output_path: Path) -> None:
    """
    Create Excel file with the aggregate results.

    Sheets:
    - Results: Subjects in aggregate order
    - Matchups: Number of polls in which the row subject beats the column subject
    - Quartiles: True total and lowest rank in each quartile per poll
    - Notes: Total corrections and the not-ranked string, if any

    Args:
        results: AggregateResults object
        output_path: Where to save the Excel file
    """
    with pd.ExcelWriter(output_path) as writer:
        results_dataframe(results).to_excel(writer, sheet_name='Results', index=False)

        results.matchup_matrix.to_excel(writer, sheet_name='Matchups')

        quartile_rows = []
        for (name, total), (_, bounds) in zip(results.audit.totals, results.quartiles):
            quartile_rows.append({'Poll': name, 'Total in survey': total, 'Quartiles': bounds or ''})
        pd.DataFrame(quartile_rows).to_excel(writer, sheet_name='Quartiles', index=False)

        notes = []
        if results.table.not_ranked is not None:
            notes.append({
                'Type': 'INFO',
                'Message': f'String "{results.table.not_ranked}" in table interpreted to indicate \'not ranked\'.'
            })
        for correction in results.audit.corrections:
            notes.append({'Type': 'WARNING', 'Message': correction.message})

        if notes:
            pd.DataFrame(notes).to_excel(writer, sheet_name='Notes', index=False)


# =============================================================================
# Main Entry Point
# =============================================================================

def process_table(
    input_path: Path,
    has_aggregate: Optional[bool] = None,
    excel_path: Optional[Path] = None
) -> AggregateResults:
    """
    Process a rankings table file and compute the aggregate.

    Args:
        input_path: Path to the CSV table
        has_aggregate: Whether the table has an aggregate column, None if unknown
        excel_path: If given, write the results workbook there

    Returns:
        AggregateResults object with all computed data
    """
    logger.info("Loading table from %s", input_path)
    grid = read_table_csv(input_path)

    table = extract_poll_table(grid, has_aggregate)
    logger.info(
        "Found %d subjects and %d polls%s",
        len(table.subjects), len(table.polls),
        " (plus aggregate)" if table.has_aggregate else ""
    )
    if table.not_ranked is not None:
        logger.info("String \"%s\" in table interpreted to indicate 'not ranked'", table.not_ranked)

    results = rank_poll_table(table)

    if excel_path is not None:
        create_results_excel(results, excel_path)
        logger.info("Saved results to %s", excel_path)

    return results
