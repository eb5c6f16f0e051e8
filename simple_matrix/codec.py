# simple_matrix/codec.py
"""
TEXT CODEC: Matrix <-> String
=============================

A TextRule says how a matrix is laid out as text. The same rule object is
used in both directions, so for well-formed contents

    from_string(m.to_string(rule), rule)

gives back a matrix with the same shape and values.

LAYOUT:
-------
    TextRule()                                   ->  1, 2
                                                     3, 4

    TextRule(row_separator=RowSeparator.SEMICOLON,
             column_separator=ColumnSeparator.SPACE,
             brackets=Brackets.SQUARE)           ->  [1 2;3 4]

GRAMMARS:
---------
- numeric: every cell must parse as int, else float
- generic: cells are kept as (stripped) strings, or converted with the
  element type of a specialization such as Matrix[int]
"""

from dataclasses import dataclass
from enum import Enum
from numbers import Integral, Real
from typing import Any, List, Optional


class MatrixParseError(ValueError):
    """Raised when text does not describe a rectangular matrix."""
    pass


class ColumnSeparator(Enum):
    COMMA = ','
    SEMICOLON = ';'
    TAB = '\t'
    SPACE = ' '


class RowSeparator(Enum):
    NEWLINE = '\n'
    SEMICOLON = ';'
    PIPE = '|'


class Brackets(Enum):
    NONE = 'none'
    SQUARE = 'square'


# What the writer puts between cells (the reader strips padding)
_COLUMN_JOINERS = {
    ColumnSeparator.COMMA: ', ',
    ColumnSeparator.SEMICOLON: '; ',
    ColumnSeparator.TAB: '\t',
    ColumnSeparator.SPACE: ' ',
}


@dataclass(frozen=True)
class TextRule:
    """
    Text layout for a matrix.

    Attributes:
    -----------
    column_separator : ColumnSeparator
        Between cells of a row (default COMMA, written as ", ")
    row_separator : RowSeparator
        Between rows (default NEWLINE)
    brackets : Brackets
        SQUARE wraps the whole matrix in [...] (default NONE)
    precision : int, optional
        Fixed number of decimals for real, non-integer numbers when
        formatting. None writes str(value).
    """
    column_separator: ColumnSeparator = ColumnSeparator.COMMA
    row_separator: RowSeparator = RowSeparator.NEWLINE
    brackets: Brackets = Brackets.NONE
    precision: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.column_separator, ColumnSeparator):
            raise ValueError(f"Unknown column separator: {self.column_separator!r}")
        if not isinstance(self.row_separator, RowSeparator):
            raise ValueError(f"Unknown row separator: {self.row_separator!r}")
        if not isinstance(self.brackets, Brackets):
            raise ValueError(f"Unknown brackets option: {self.brackets!r}")
        if self.column_separator.value == self.row_separator.value:
            raise ValueError(
                f"Column and row separators must differ, both are "
                f"{self.column_separator.value!r}"
            )
        if self.precision is not None and self.precision < 0:
            raise ValueError(f"precision must be >= 0, got {self.precision}")


DEFAULT_TEXT_RULE = TextRule()


# =============================================================================
# FORMAT
# =============================================================================

def _format_cell(value: Any, rule: TextRule) -> str:
    if (
        rule.precision is not None
        and isinstance(value, Real)
        and not isinstance(value, (Integral, bool))
    ):
        return f"{float(value):.{rule.precision}f}"
    return str(value)


def format_matrix(matrix, rule: Optional[TextRule] = None) -> str:
    """
    Render a matrix as text.

    Parameters:
    -----------
    matrix : Matrix
        Anything exposing rows, columns and get(r, c)
    rule : TextRule, optional
        Layout (default DEFAULT_TEXT_RULE)

    Returns:
    --------
    str
    """
    if rule is None:
        rule = DEFAULT_TEXT_RULE

    joiner = _COLUMN_JOINERS[rule.column_separator]
    lines = []
    for r in range(matrix.rows):
        cells = [_format_cell(matrix.get(r, c), rule) for c in range(matrix.columns)]
        lines.append(joiner.join(cells))

    body = rule.row_separator.value.join(lines)
    if rule.brackets is Brackets.SQUARE:
        return f"[{body}]"
    return body


# =============================================================================
# PARSE
# =============================================================================

def _parse_number(cell: str, row: int, col: int):
    try:
        return int(cell)
    except ValueError:
        pass
    try:
        return float(cell)
    except ValueError:
        raise MatrixParseError(
            f"Cell ({row}, {col}) is not a number: {cell!r}"
        ) from None


def _convert_cell(cell: str, element_type: type, row: int, col: int):
    if element_type is bool:
        if cell not in ('True', 'False'):
            raise MatrixParseError(f"Cell ({row}, {col}) is not a bool: {cell!r}")
        return cell == 'True'
    try:
        return element_type(cell)
    except (TypeError, ValueError):
        raise MatrixParseError(
            f"Cell ({row}, {col}) cannot be read as {element_type.__name__}: {cell!r}"
        ) from None


def _split_cells(line: str, rule: TextRule) -> List[str]:
    if rule.column_separator is ColumnSeparator.SPACE:
        return line.split()
    return [cell.strip() for cell in line.split(rule.column_separator.value)]


def parse_cells(
    text: str,
    rule: Optional[TextRule] = None,
    numeric: bool = False,
    element_type: Optional[type] = None,
) -> List[List[Any]]:
    """
    Parse text into a rectangular list of rows.

    Parameters:
    -----------
    text : str
        Matrix text laid out according to rule
    rule : TextRule, optional
        Layout (default DEFAULT_TEXT_RULE)
    numeric : bool
        Use the numeric grammar (int/float cells) instead of strings
    element_type : type, optional
        Generic grammar only: convert each cell with element_type(cell).
        None, str and object keep strings.

    Returns:
    --------
    List[List]
        rows x columns cells

    Raises:
    -------
    MatrixParseError
        Empty text, missing brackets, empty or unconvertible cells,
        rows of different lengths
    """
    if rule is None:
        rule = DEFAULT_TEXT_RULE

    body = text.strip()
    if rule.brackets is Brackets.SQUARE:
        if not (body.startswith('[') and body.endswith(']')):
            raise MatrixParseError("Expected matrix text wrapped in [...]")
        body = body[1:-1].strip()

    lines = [line for line in body.split(rule.row_separator.value) if line.strip()]
    if not lines:
        raise MatrixParseError("Matrix text contains no rows")

    rows = []
    for r, line in enumerate(lines):
        cells = _split_cells(line, rule)
        if any(cell == '' for cell in cells):
            raise MatrixParseError(f"Row {r} contains an empty cell: {line!r}")
        if rows and len(cells) != len(rows[0]):
            raise MatrixParseError(
                f"Row {r} has {len(cells)} cells, expected {len(rows[0])}"
            )
        if numeric:
            cells = [_parse_number(cell, r, c) for c, cell in enumerate(cells)]
        elif element_type not in (None, str, object):
            cells = [_convert_cell(cell, element_type, r, c) for c, cell in enumerate(cells)]
        rows.append(cells)

    return rows
