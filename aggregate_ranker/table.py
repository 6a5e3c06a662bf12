"""
Validation and extraction of a poll table.

The table is a rectangular grid of strings:

    No.  President          Political party  Poll 1  Poll 2  ...  [Aggr.]
    01   George Washington  Unaffiliated     3       2 (tie)
    ...
         Total in survey                     40      42

Rows between the header and the footer are subjects, columns after the
first three (and before the aggregate, if present) are polls. Poll cells
hold an integer rank, optionally followed by " (tie)" and/or " *", or a
single consistent string meaning "not ranked".
"""

import re
from dataclasses import dataclass
from typing import Optional

from .errors import AggregateUndetermined, FormatError, InvalidArgument, StructuralError
from .rational import Rational

NUMBER_LABEL = "No."
NAME_LABEL = "President"
PARTY_LABEL = "Political party"
TOTAL_LABEL = "Total in survey"
AGGREGATE_LABEL = "Aggr."

TIE_MARKER = " (tie)"
NOTE_MARKER = " *"

# Columns before the first poll: number, name, party
FIXED_COLUMNS = 3

_INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class Subject:
    """One ranked entity (one row of the table)."""
    number: str
    name: str
    party: str = ""
    victories: int = 0
    defeats: int = 0
    score: Optional[Rational] = None
    rank: Optional[int] = None
    rank_label: Optional[str] = None
    unranked: bool = False
    tied: bool = False


@dataclass(frozen=True)
class RankCell:
    """A parsed poll cell. rank is None when the subject is not ranked."""
    rank: Optional[int]
    tied: bool = False
    note: bool = False
    raw: str = ""

    @property
    def is_ranked(self) -> bool:
        return self.rank is not None


@dataclass
class Poll:
    name: str
    cells: list[RankCell]
    declared_total: Optional[int] = None

    @property
    def ranks(self) -> list[Optional[int]]:
        return [cell.rank for cell in self.cells]

    @property
    def ranked_count(self) -> int:
        """Number of subjects actually ranked in this poll."""
        return sum(1 for cell in self.cells if cell.is_ranked)


@dataclass
class PollTable:
    """
    Validated contents of a poll table.

    polls holds only the polls that are scored; an aggregate column found in
    the input is kept apart (aggregate_name, aggregate_declared_total) since
    the aggregate is recomputed, never used as input.
    """
    subjects: list[Subject]
    polls: list[Poll]
    has_aggregate: bool = False
    aggregate_name: str = AGGREGATE_LABEL
    aggregate_declared_total: Optional[int] = None
    not_ranked: Optional[str] = None

    def __post_init__(self):
        for poll in self.polls:
            if len(poll.cells) != len(self.subjects):
                raise StructuralError(
                    f"Poll \"{poll.name}\" has {len(poll.cells)} entries "
                    f"for {len(self.subjects)} subjects"
                )

    @property
    def poll_names(self) -> list[str]:
        return [poll.name for poll in self.polls]


# =============================================================================
# Cell Helpers
# =============================================================================

def cell_name(row: int, column: int) -> str:
    """
    Convert 0-based row and column indices to a spreadsheet cell name.

    (0, 0) is "A1"; columns go A ... Z, AA ... AZ, BA ... ZZ, AAA ...

    Raises:
        InvalidArgument: If row or column is negative
    """
    if row < 0:
        raise InvalidArgument(f"row should be nonnegative: {row}")
    if column < 0:
        raise InvalidArgument(f"column should be nonnegative: {column}")

    letters = []
    column += 1
    while column > 0:
        column, remainder = divmod(column - 1, 26)
        letters.append(chr(ord('A') + remainder))
    return "".join(reversed(letters)) + str(row + 1)


def parse_integer(text: str) -> Optional[int]:
    """Parse an optionally signed decimal integer; None if text is anything else."""
    if _INTEGER_PATTERN.fullmatch(text):
        return int(text)
    return None


def parse_rank_cell(text: str) -> RankCell:
    """
    Parse a poll cell.

    One tie marker and then one note marker are removed before the rest is
    read as an integer. A cell that is not an integer after that is returned
    unranked with its raw text; whether that text is the table's not-ranked
    string is decided by the caller.
    """
    stripped = text
    tied = TIE_MARKER in stripped
    if tied:
        stripped = stripped.replace(TIE_MARKER, "", 1)
    note = NOTE_MARKER in stripped
    if note:
        stripped = stripped.replace(NOTE_MARKER, "", 1)

    rank = parse_integer(stripped)
    if rank is None:
        return RankCell(rank=None, raw=text)
    return RankCell(rank=rank, tied=tied, note=note, raw=text)


def _starts_with(grid: list[list[str]], row: int, column: int, label: str) -> None:
    value = grid[row][column]
    if not value.startswith(label):
        name = cell_name(row, column)
        raise StructuralError(
            f"Cell {name} has value \"{value}\", should be or start with \"{label}\"",
            cell=name,
            value=value,
            expected=label
        )


# =============================================================================
# Validation
# =============================================================================

def check_shape(grid: list[list[str]]) -> tuple[int, int]:
    """
    Check that the grid is rectangular and large enough to hold a header,
    a footer and the fixed columns.

    Returns:
        Tuple of (height, width)
    """
    if not grid or not grid[0]:
        raise StructuralError("Table is empty")

    width = len(grid[0])
    for index, row in enumerate(grid):
        if len(row) != width:
            raise StructuralError(
                f"Table is not rectangle-shaped: row {index + 1} has {len(row)} "
                f"cells, row 1 has {width}"
            )

    height = len(grid)
    if height < 2:
        raise StructuralError("Table needs at least a header row and a total row")
    if width < FIXED_COLUMNS:
        raise StructuralError(
            f"Table needs at least {FIXED_COLUMNS} columns "
            f"(\"{NUMBER_LABEL}\", \"{NAME_LABEL}\", \"{PARTY_LABEL}\"), found {width}"
        )
    return height, width


def check_labels(grid: list[list[str]]) -> None:
    """Check the fixed header labels and the footer's total label."""
    _starts_with(grid, 0, 0, NUMBER_LABEL)
    _starts_with(grid, 0, 1, NAME_LABEL)
    _starts_with(grid, 0, 2, PARTY_LABEL)
    _starts_with(grid, len(grid) - 1, 1, TOTAL_LABEL)


def detect_aggregate(grid: list[list[str]], has_aggregate: Optional[bool] = None) -> bool:
    """
    Decide whether the last column of the table is an aggregate poll.

    A last header starting with "Aggr." settles it. Otherwise the caller's
    knowledge is used: None means unknown, in which case the caller is asked
    to decide; True contradicts the header.

    Raises:
        AggregateUndetermined: If the header has no aggregate and has_aggregate is None
        StructuralError: If has_aggregate is True but the last column is not "Aggr."
    """
    last = len(grid[0]) - 1
    if grid[0][last].startswith(AGGREGATE_LABEL):
        return True
    if has_aggregate is None:
        raise AggregateUndetermined(grid[0][last])
    if has_aggregate:
        # Aggregate present but not in the last column (or oddly titled)
        _starts_with(grid, 0, last, AGGREGATE_LABEL)
    return False


def discover_not_ranked(grid: list[list[str]], poll_columns: range) -> Optional[str]:
    """
    Find the string the table uses to mean "not ranked".

    Every poll cell that is not an integer (with optional markers) must be
    this one string.

    Returns:
        The not-ranked string, or None if every poll cell holds a rank

    Raises:
        FormatError: If two different non-integer strings are found
    """
    not_ranked = None
    for row in range(1, len(grid) - 1):
        for column in poll_columns:
            entry = grid[row][column]
            if parse_rank_cell(entry).is_ranked:
                continue
            if not_ranked is None:
                not_ranked = entry
            elif entry != not_ranked:
                raise FormatError(
                    f"Poll ranks that are not integer, optionally followed by "
                    f"\"{TIE_MARKER}\" or \"{NOTE_MARKER}\" or both, should all be "
                    f"identical (the value indicating 'not ranked'); two different "
                    f"values found: \"{not_ranked}\", \"{entry}\" "
                    f"(cell {cell_name(row, column)})",
                    first=not_ranked,
                    second=entry,
                    cell=cell_name(row, column)
                )
    return not_ranked


# =============================================================================
# Extraction
# =============================================================================

def extract_poll_table(
    grid: list[list[str]],
    has_aggregate: Optional[bool] = None
) -> PollTable:
    """
    Validate a raw grid of strings and extract a PollTable from it.

    The grid is not modified.

    Args:
        grid: Rows of cells, header first and "Total in survey" row last
        has_aggregate: Whether the caller knows the table has an aggregate
            column (True/False), or None if unknown

    Returns:
        The validated PollTable

    Raises:
        StructuralError: Non-rectangular grid, wrong labels, contradictory
            aggregate, or no subjects/polls
        FormatError: Inconsistent not-ranked strings
        AggregateUndetermined: The aggregate question must be answered first
    """
    height, width = check_shape(grid)
    check_labels(grid)
    table_has_aggregate = detect_aggregate(grid, has_aggregate)

    n_subjects = height - 2
    n_polls = width - FIXED_COLUMNS - (1 if table_has_aggregate else 0)
    if n_subjects == 0:
        raise StructuralError("No presidents found in the table.")
    if n_polls == 0:
        raise StructuralError("No polls found in the table.")

    poll_columns = range(FIXED_COLUMNS, FIXED_COLUMNS + n_polls)
    not_ranked = discover_not_ranked(grid, poll_columns)

    header = grid[0]
    footer = grid[-1]
    body = grid[1:-1]

    subjects = [Subject(number=row[0], name=row[1], party=row[2]) for row in body]

    polls = []
    for column in poll_columns:
        polls.append(Poll(
            name=header[column],
            cells=[parse_rank_cell(row[column]) for row in body],
            declared_total=parse_integer(footer[column])
        ))

    aggregate_name = AGGREGATE_LABEL
    aggregate_declared = None
    if table_has_aggregate:
        aggregate_name = header[-1]
        aggregate_declared = parse_integer(footer[-1])

    return PollTable(
        subjects=subjects,
        polls=polls,
        has_aggregate=table_has_aggregate,
        aggregate_name=aggregate_name,
        aggregate_declared_total=aggregate_declared,
        not_ranked=not_ranked
    )
