"""
Command-line interface.

Usage:
    python -m aggregate_ranker
    python -m aggregate_ranker US-president-rankings-table.csv
    python -m aggregate_ranker table.csv --no-aggregate --excel results.xlsx
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .errors import AggregateUndetermined
from .pipeline import DEFAULT_TABLE_PATH, AggregateResults, process_table
from .table import Subject

# Extra spaces after the widest value in each report column
COLUMN_PADDING = 5


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aggregate-ranker",
        description=(
            "Generate an aggregate of ranked polls (e.g. historical rankings of "
            "US presidents) by the ratio of favourable to total pairwise comparisons, "
            "and print quartile boundaries for every poll and the aggregate"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    aggregate-ranker
    aggregate-ranker US-president-rankings-table.csv
    aggregate-ranker table.csv --no-aggregate --excel results.xlsx --verbose

The table is read from a .csv export. If no path is given and the default
file is missing, you are asked for the path. If the last column is not an
"Aggr." column and neither --aggregate nor --no-aggregate is given, you are
asked whether the table has an aggregate.
        """
    )

    parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        default=None,
        help=f"Path to the .csv table (default: {DEFAULT_TABLE_PATH})"
    )

    aggregate = parser.add_mutually_exclusive_group()
    aggregate.add_argument(
        "--aggregate",
        dest="has_aggregate",
        action="store_const",
        const=True,
        default=None,
        help="The table has an aggregate column (must be last and titled \"Aggr.\")"
    )
    aggregate.add_argument(
        "--no-aggregate",
        dest="has_aggregate",
        action="store_const",
        const=False,
        help="The table has no aggregate column"
    )

    parser.add_argument(
        "--excel",
        type=Path,
        default=None,
        help="Also write the results to this Excel file"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print progress information"
    )

    return parser


def resolve_input_path(path: Optional[Path]) -> Path:
    """Use the default path if none given, prompting if the default is missing."""
    if path is not None:
        return path
    if DEFAULT_TABLE_PATH.exists():
        return DEFAULT_TABLE_PATH
    return Path(input("Enter path to .csv file: ").strip())


def ask_has_aggregate() -> bool:
    answer = input("Aggregate poll not found. Table has aggregate? If yes enter \"y\": ")
    return answer.strip().lower() == "y"


# =============================================================================
# Report
# =============================================================================

def _format_score(subject: Subject) -> str:
    return "None" if subject.score is None else repr(subject.score.to_float())


def format_subject_lines(subjects: list[Subject], widths: tuple[int, int, int]) -> list[str]:
    lines = []
    for subject in subjects:
        rank = subject.rank_label if subject.rank_label is not None else "None"
        lines.append(
            f"{subject.number:<{widths[0]}} {subject.name:<{widths[1]}} "
            f"{rank:<{widths[2]}} {_format_score(subject)}"
        )
    return lines


def format_report(results: AggregateResults) -> str:
    """Render the console report for a run."""
    subjects = results.subjects
    widths = (
        max(len(s.number) for s in subjects) + COLUMN_PADDING,
        max(len(s.name) for s in subjects) + COLUMN_PADDING,
        max(len(s.rank_label or "None") for s in subjects) + COLUMN_PADDING,
    )

    lines = []
    if results.table.not_ranked is not None:
        lines.append(f"String \"{results.table.not_ranked}\" in table interpreted to indicate 'not ranked'.")
        lines.append("")

    if results.audit.corrections:
        for correction in results.audit.corrections:
            lines.append(correction.message)
        lines.append("")

    lines.append("Presidents sorted by number: number - name - rank - score")
    lines.extend(format_subject_lines(subjects, widths))
    lines.append("")

    lines.append("Presidents sorted by rank: number - name - rank - score")
    lines.extend(format_subject_lines(results.ranking, widths))
    lines.append("")

    lines.append("Lowest rank in each quartile for each poll:")
    for name, bounds in results.quartiles:
        lines.append(f"\"{name}\": {bounds if bounds is not None else 'no subjects ranked'}")

    return "\n".join(lines)


# =============================================================================
# Main Entry Point
# =============================================================================

def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for command-line usage. Returns the exit status."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.ERROR,
        format="%(levelname)s: %(message)s"
    )

    try:
        input_path = resolve_input_path(args.input)
        has_aggregate = args.has_aggregate
        try:
            results = process_table(input_path, has_aggregate, args.excel)
        except AggregateUndetermined:
            has_aggregate = ask_has_aggregate()
            results = process_table(input_path, has_aggregate, args.excel)

    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except EOFError:
        print("Error: no answer given", file=sys.stderr)
        return 1

    print(format_report(results))
    return 0


if __name__ == "__main__":
    sys.exit(main())
