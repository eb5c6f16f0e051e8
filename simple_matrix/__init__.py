# simple_matrix - Generic 2D containers and their concatenation algebra
"""
SIMPLE_MATRIX: Shape, Storage and Concatenation for 2D Data
===========================================================

This package provides:
- Matrix, a rectangular container over any element type (numpy-backed)
- Whole-matrix operations: stacking, joining, linear extraction
- Text conversion with a configurable layout (TextRule)
- Per-class capability tags (GENERIC / NUMERIC)

It is NOT a linear-algebra engine: there is no addition, multiplication or
transposition here.

ARCHITECTURE:
-------------
    kernel/         Bulk index-generated writes (fill_range)
    tags.py         ContentsType capability tags
    codec.py        TextRule, parse/format
    algebra.py      Stateless whole-matrix operations
    matrix.py       Matrix, NumericMatrix
    config.py       Library defaults (CONFIG)
"""

from .algebra import (
    DimensionError,
    MatrixCalcError,
    extract_linear,
    from_string,
    is_numeric,
    join_horizontally,
    stack_vertically,
)
from .codec import (
    DEFAULT_TEXT_RULE,
    Brackets,
    ColumnSeparator,
    MatrixParseError,
    RowSeparator,
    TextRule,
)
from .config import CONFIG, MatrixConfig
from .kernel import fill_range
from .matrix import Matrix, MatrixIndexError, NumericMatrix
from .tags import ContentsType, contents_type, get_contents_type

__version__ = "0.1.0"

__all__ = [
    'Matrix', 'NumericMatrix', 'MatrixIndexError',
    'DimensionError', 'MatrixCalcError', 'MatrixParseError',
    'extract_linear', 'from_string', 'is_numeric',
    'join_horizontally', 'stack_vertically',
    'TextRule', 'ColumnSeparator', 'RowSeparator', 'Brackets', 'DEFAULT_TEXT_RULE',
    'CONFIG', 'MatrixConfig',
    'fill_range',
    'ContentsType', 'contents_type', 'get_contents_type',
]
