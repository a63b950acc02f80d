"""Reading numeric regression data from delimited text files."""

import logging
import math
import os
import re

_log = logging.getLogger(__name__)

_WHITESPACE = " \t\n\r\f\v"

_NUMBER = re.compile(
    r"""
    [+-]?
    (?:
        (?P<hex>0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?\d+)?)
      | (?P<dec>(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?)
      | (?P<inf>inf(?:inity)?)
      | (?P<nan>nan(?:\([0-9a-z_]*\))?)
    )
    """,
    re.VERBOSE | re.IGNORECASE,
)


class CSVReadError(RuntimeError):
    """Raised when a data file cannot be read or holds malformed data."""


def _parse_number(text: str) -> float:
    """Parse the leading number of ``text`` the way ``strtod`` does.

    Raises ``ValueError`` if no number starts the text and
    ``OverflowError`` if it does not fit in a float.
    """
    match = _NUMBER.match(text)
    if match is None:
        raise ValueError(text)
    token = match.group(0)
    negative = token.startswith("-")
    if match.group("nan") is not None:
        return -math.nan if negative else math.nan
    if match.group("inf") is not None:
        return -math.inf if negative else math.inf
    value = float.fromhex(token) if match.group("hex") is not None else float(token)
    if math.isinf(value):
        raise OverflowError(text)
    return value


def _split_cells(line: str, delimiter: str) -> list[str]:
    cells = line.split(delimiter)
    # A trailing delimiter does not open another field.
    if len(cells) > 1 and cells[-1] == "":
        cells.pop()
    return cells


def read_regression_data(
    path: str | os.PathLike,
    target_column_index: int,
    delimiter: str = ",",
) -> tuple[list[list[float]], list[float]]:
    """Read a headed numeric file into ``(features, targets)``.

    The first line is a header and is skipped; blank lines are ignored.
    The column at ``target_column_index`` becomes the target, the others
    form the feature row. Raises :class:`CSVReadError` on any problem.
    """
    if len(delimiter) != 1:
        raise ValueError("delimiter must be a single character")
    try:
        with open(path, encoding="utf-8", errors="surrogateescape", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise CSVReadError(f"Failed to open file: {path}") from exc

    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    if not lines:
        raise CSVReadError(f"File is empty or header missing in {path}")

    features: list[list[float]] = []
    targets: list[float] = []
    expected_columns = 0

    for line_number, line in enumerate(lines[1:], start=2):
        if not line.strip(_WHITESPACE):
            continue

        row = []
        for cell in _split_cells(line, delimiter):
            try:
                row.append(_parse_number(cell.strip(_WHITESPACE)))
            except ValueError:
                raise CSVReadError(
                    f"Invalid number format '{cell}' at line {line_number} in file: {path}"
                ) from None
            except OverflowError:
                raise CSVReadError(
                    f"Number out of range '{cell}' at line {line_number} in file: {path}"
                ) from None

        if not row:
            _log.warning("Skipped an effectively empty data row at line %d", line_number)
            continue

        if expected_columns == 0:
            expected_columns = len(row)
            if not 0 <= target_column_index < expected_columns:
                raise CSVReadError(
                    f"target_column_index ({target_column_index}) is out of bounds "
                    f"for {expected_columns} columns."
                )
        elif len(row) != expected_columns:
            raise CSVReadError(
                f"Inconsistent number of columns at line {line_number}. "
                f"Expected {expected_columns}, got {len(row)}."
            )

        targets.append(row[target_column_index])
        features.append(
            [value for index, value in enumerate(row) if index != target_column_index]
        )

    if not features:
        raise CSVReadError(f"No valid data rows read from file: {path}")
    return features, targets