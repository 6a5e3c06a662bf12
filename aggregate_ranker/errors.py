"""
Exceptions raised while validating and ranking a poll table.

All of them derive from ValueError so that callers catching
(FileNotFoundError, ValueError) around a run keep working.
"""

from typing import Optional


class RankerError(ValueError):
    """Base class for all poll table errors."""


class InvalidArgument(RankerError):
    """A function was called with an argument outside its domain."""


class StructuralError(RankerError):
    """
    The table does not have the expected shape or fixed labels.

    Args:
        message: Human readable description
        cell: Spreadsheet-style cell name (e.g. "B1") if a cell is at fault
        value: The value found in that cell
        expected: The label the cell should be or start with
    """

    def __init__(
        self,
        message: str,
        cell: Optional[str] = None,
        value: Optional[str] = None,
        expected: Optional[str] = None
    ):
        super().__init__(message)
        self.cell = cell
        self.value = value
        self.expected = expected


class FormatError(RankerError):
    """Two different strings were used to mean 'not ranked'."""

    def __init__(self, message: str, first: str, second: str, cell: Optional[str] = None):
        super().__init__(message)
        self.first = first
        self.second = second
        self.cell = cell


class AggregateUndetermined(RankerError):
    """
    The last column is not labelled as an aggregate and the caller did not
    say whether the table has one. The caller has to decide (usually by
    asking the user) and extract again.
    """

    def __init__(self, last_header: str):
        super().__init__(
            f"Aggregate poll not found (last column is \"{last_header}\") "
            f"and it is not known whether the table has one"
        )
        self.last_header = last_header
