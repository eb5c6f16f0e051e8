# simple_matrix/algebra.py
"""Whole-matrix operations: capability query, linear extraction, parsing and concatenation."""

import logging
from typing import Optional, get_args

import numpy as np

from .codec import TextRule, parse_cells
from .kernel.fill import fill_range
from .tags import ContentsType, get_contents_type

logger = logging.getLogger(__name__)


class MatrixCalcError(ValueError):
    """Raised when two matrices cannot be combined because their shapes disagree."""
    pass


class DimensionError(ValueError):
    """Raised when a matrix is not one-dimensional (single row or single column)."""
    pass


# bool, int, uint, float, complex
_NUMERIC_KINDS = 'biufc'


def _result_dtype(a: np.ndarray, b: np.ndarray) -> np.dtype:
    """Store dtype for a concatenation: shared, numerically promoted, or object."""
    if a.dtype == b.dtype:
        return a.dtype
    if a.dtype.kind in _NUMERIC_KINDS and b.dtype.kind in _NUMERIC_KINDS:
        return np.result_type(a.dtype, b.dtype)
    return np.dtype(object)


def _result_class(a, b):
    """Most derived matrix class both operands are instances of."""
    for cls in type(a).__mro__:
        if isinstance(b, cls):
            return cls


def _element_type(matrix_type):
    args = get_args(matrix_type)
    if args and isinstance(args[0], type):
        return args[0]
    return getattr(matrix_type, 'element_type', None)


def is_numeric(matrix_type) -> bool:
    """
    True if the matrix class is tagged NUMERIC.

    The tag belongs to the class, not the element type: Matrix[int] and
    Matrix[str] give the same answer.
    """
    return get_contents_type(matrix_type) is ContentsType.NUMERIC


def extract_linear(matrix) -> np.ndarray:
    """
    Flatten a single-row or single-column matrix.

    Args:
        matrix: Matrix with rows == 1 or columns == 1

    Returns:
        1D array of matrix.length elements: row 0 in column order when
        rows == 1, otherwise column 0 in row order

    Raises:
        DimensionError: If rows != 1 and columns != 1
    """
    if matrix.rows != 1 and matrix.columns != 1:
        raise DimensionError(
            f"The matrix's dimension is not one ({matrix.rows}x{matrix.columns})."
        )

    result = np.empty(matrix.length, dtype=matrix.store.dtype)

    if matrix.rows == 1:
        fill_range(result, lambda i: matrix.get(0, i))
    else:
        fill_range(result, lambda i: matrix.get(i, 0))

    return result


def from_string(matrix_type, text: str, rule: Optional[TextRule] = None):
    """
    Parse text into a new, independently owned matrix of matrix_type.

    The numeric grammar is used when matrix_type is tagged NUMERIC. Otherwise
    cells are converted with the element type of a specialization
    (Matrix[int] -> int(cell)); a plain Matrix keeps strings.

    Raises:
        MatrixParseError: If the text is not a well-formed matrix
    """
    cells = parse_cells(
        text, rule,
        numeric=is_numeric(matrix_type),
        element_type=_element_type(matrix_type),
    )
    store = np.empty((len(cells), len(cells[0])), dtype=matrix_type.dtype)
    fill_range(store, lambda i, j: cells[i][j])
    return matrix_type(store)


def stack_vertically(top, bottom):
    """
    New matrix with bottom's rows placed under top's rows.

    Args:
        top: Matrix with the same number of columns as bottom
        bottom: Matrix

    Returns:
        Matrix of the most derived class shared by both operands,
        (top.rows + bottom.rows) x top.columns, with its own store. Mixed
        non-numeric dtypes give an object store, so element values are
        kept as they are

    Raises:
        MatrixCalcError: If the column counts differ (nothing is allocated)
    """
    if top.columns != bottom.columns:
        raise MatrixCalcError(
            f"Failed to concat the two matrices due to the mismatch of the "
            f"columns numbers ({top.columns} vs {bottom.columns})."
        )

    rows = top.rows + bottom.rows
    columns = top.columns
    offset = top.rows

    store = np.empty((rows, columns), dtype=_result_dtype(top.store, bottom.store))
    logger.debug("Stacking %s over %s into %dx%d", top.shape, bottom.shape, rows, columns)

    # Disjoint regions: [0, offset) and [offset, rows)
    fill_range(store, lambda i, j: top.get(i, j), (0, 0), (offset, columns))
    fill_range(store, lambda i, j: bottom.get(i - offset, j), (offset, 0), (rows, columns))

    return _result_class(top, bottom)(store)


def join_horizontally(left, right):
    """
    New matrix with right's columns placed after left's columns.

    Args:
        left: Matrix with the same number of rows as right
        right: Matrix

    Returns:
        Matrix of the most derived class shared by both operands,
        left.rows x (left.columns + right.columns), with its own store
        (dtype chosen as in stack_vertically)

    Raises:
        MatrixCalcError: If the row counts differ (nothing is allocated)
    """
    if left.rows != right.rows:
        raise MatrixCalcError(
            f"Failed to concat the two matrices due to the mismatch of the "
            f"rows numbers ({left.rows} vs {right.rows})."
        )

    rows = left.rows
    columns = left.columns + right.columns
    offset = left.columns

    store = np.empty((rows, columns), dtype=_result_dtype(left.store, right.store))
    logger.debug("Joining %s beside %s into %dx%d", left.shape, right.shape, rows, columns)

    # Disjoint regions: columns [0, offset) and [offset, columns)
    fill_range(store, lambda i, j: left.get(i, j), (0, 0), (rows, offset))
    fill_range(store, lambda i, j: right.get(i, j - offset), (0, offset), (rows, columns))

    return _result_class(left, right)(store)
