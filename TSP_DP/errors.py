# TSP_DP/errors.py
"""Error kinds raised before the DP recurrence runs.

Every kind is its own class and keeps the offending detail (row, line number,
expected/actual size, path) as attributes, so callers can report or test on
them without parsing the message.
"""

from __future__ import annotations

from typing import Optional


class TSPError(Exception):
    """Base class of every error raised by TSP_DP."""


# ---------------------------------------------------------------------------
#  Input format
# ---------------------------------------------------------------------------

class InputFormatError(TSPError, ValueError):
    """The input text cannot be turned into (cities, matrix)."""


class EmptyInputError(InputFormatError):
    def __init__(self) -> None:
        super().__init__("Empty input file (no non-comment, non-blank lines)")


class InputReadError(InputFormatError):
    """The file exists but its text cannot be read (bad encoding, I/O error)."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read file: {path} ({reason})")


class MalformedLayoutError(InputFormatError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class InvalidNumberError(InputFormatError):
    def __init__(self, row: int, line_no: int, token: str) -> None:
        self.row = row
        self.line_no = line_no
        self.token = token
        super().__init__(
            f"Invalid number {token!r} in matrix row {row} (line {line_no})"
        )


class DimensionMismatchError(InputFormatError):
    """A row width or the row count disagrees with the number of cities."""

    def __init__(
        self,
        what: str,
        expected: int,
        actual: int,
        row: Optional[int] = None,
        line_no: Optional[int] = None,
    ) -> None:
        self.what = what
        self.expected = expected
        self.actual = actual
        self.row = row
        self.line_no = line_no
        if what == "columns":
            where = f"Matrix row {row}"
            if line_no is not None:
                where += f" (line {line_no})"
            msg = f"{where} has {actual} columns, expected {expected}"
        else:
            msg = f"Matrix has {actual} rows, expected {expected}"
        super().__init__(msg)


# ---------------------------------------------------------------------------
#  Graph validation
# ---------------------------------------------------------------------------

class GraphValidationError(TSPError, ValueError):
    """The matrix parsed fine but violates the solver's preconditions."""


class TooFewCitiesError(GraphValidationError):
    def __init__(self, n: int, minimum: int) -> None:
        self.n = n
        self.minimum = minimum
        super().__init__(f"At least {minimum} cities are required, got {n}")


class TooManyCitiesError(GraphValidationError):
    def __init__(self, n: int, maximum: int) -> None:
        self.n = n
        self.maximum = maximum
        super().__init__(
            f"Maximum {maximum} cities supported (due to exponential complexity), got {n}"
        )


class NonZeroDiagonalError(GraphValidationError):
    def __init__(self, city: int, value: float) -> None:
        self.city = city
        self.value = value
        super().__init__(f"Distance from city {city} to itself should be 0, got {value}")


class NegativeDistanceError(GraphValidationError):
    def __init__(self, i: int, j: int, value: float) -> None:
        self.i = i
        self.j = j
        self.value = value
        super().__init__(f"Negative distance found between cities {i} and {j}: {value}")


class NonFiniteDistanceError(GraphValidationError):
    def __init__(self, i: int, j: int, value: float) -> None:
        self.i = i
        self.j = j
        self.value = value
        super().__init__(f"Non-finite distance found between cities {i} and {j}: {value}")


# ---------------------------------------------------------------------------
#  Files
# ---------------------------------------------------------------------------

class TSPFileNotFoundError(TSPError, FileNotFoundError):
    def __init__(self, path: str, hint: str = "") -> None:
        self.path = path
        self.hint = hint
        msg = f"File not found: {path}"
        if hint:
            msg += f". {hint}"
        super().__init__(msg)


class TooManyOutputAttemptsError(TSPError):
    def __init__(self, base: str, limit: int) -> None:
        self.base = base
        self.limit = limit
        super().__init__(
            f"Too many output files for '{base}' (tried {limit} suffixes), "
            "please clean up the output directory"
        )
