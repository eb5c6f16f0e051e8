# simple_matrix/matrix.py
"""
MATRIX: A Rectangular Container Over Any Element Type
=====================================================

A Matrix wraps a 2D numpy array (the backing store). Shape is never cached:
rows/columns/length are read from the store every time.

OWNERSHIP:
----------
Some construction paths SHARE the caller's store, others allocate a new one.

    Matrix(ndarray_2d)           shares ndarray_2d
    Matrix(other_matrix)         shares other_matrix's store
    m.duplicate()                shares m's store (same as m.shared_view())

    Matrix([1, 2, 3])            new 1 x 3 store
    Matrix([[1, 2], [3, 4]])     new 2 x 2 store
    Matrix.of_shape(2, 3)        new store filled with default_value
    m.copy()                     new store, element-wise copy

Writing through one handle of a shared store is visible through every other
handle. Use copy() when independence is needed.

SPECIALIZATIONS:
----------------
    Matrix          object store, default None, GENERIC
    NumericMatrix   float64 store, default 0.0, NUMERIC, numeric dtypes only
    Matrix[int]     cached subclass of Matrix with element_type = int
"""

import logging
from typing import Any, Callable, Generic, Iterator, List, Optional, Sequence, TypeVar

import numpy as np

from . import algebra
from .codec import TextRule, format_matrix
from .config import CONFIG
from .kernel.fill import fill_range
from .tags import ContentsType, contents_type

logger = logging.getLogger(__name__)

T = TypeVar('T')


class MatrixIndexError(IndexError):
    """Raised when element coordinates fall outside [0, rows) x [0, columns)."""
    pass


# (container class, element type) -> concrete specialization
_SPECIALIZATIONS = {}


def _check_store(store: np.ndarray, matrix_type) -> np.ndarray:
    if store.ndim != 2:
        raise ValueError(f"Backing store must be 2D, got {store.ndim}D")
    rows, columns = store.shape
    if rows < 1 or columns < 1:
        raise ValueError(f"Matrix dimensions must be positive, got {rows}x{columns}")
    kinds = matrix_type.dtype_kinds
    if kinds is not None and store.dtype.kind not in kinds:
        raise ValueError(
            f"{matrix_type.__name__} cannot hold a store of dtype {store.dtype}"
        )
    return store


@contents_type(ContentsType.GENERIC)
class Matrix(Generic[T]):
    """
    Generic 2D container.

    Parameters:
    -----------
    source : Matrix, np.ndarray or sequence
        - Matrix or 2D ndarray: shared (aliased) store
        - 1D ndarray or flat sequence: new 1 x n store
        - sequence of equal-length rows: new rows x columns store

    Examples:
    ---------
    >>> m = Matrix([[1, 2], [3, 4]])
    >>> m.rows, m.columns, m.length
    (2, 2, 4)
    >>> m[1, 0]
    3
    >>> (m | Matrix([5, 6])).to_list()
    [[1, 2], [3, 4], [5, 6]]

    Subscripting with a class gives a cached subclass that remembers the
    element type, so parsing can convert cells:

    >>> Matrix[int].from_string("1, 2").to_list()
    [[1, 2]]
    """

    dtype = np.dtype(object)
    default_value: Any = None
    # Set on specializations such as Matrix[int]
    element_type: Optional[type] = None
    # Accepted store dtype kinds (None: any)
    dtype_kinds: Optional[str] = None

    def __class_getitem__(cls, params):
        if not isinstance(params, type):
            return super().__class_getitem__(params)
        key = (cls, params)
        if key not in _SPECIALIZATIONS:
            name = f"{cls.__name__}[{params.__name__}]"
            specialization = type(name, (cls,), {
                'element_type': params,
                '__module__': cls.__module__,
                '__qualname__': name,
            })
            _SPECIALIZATIONS.setdefault(key, specialization)
        return _SPECIALIZATIONS[key]

    def __init__(self, source):
        if isinstance(source, Matrix):
            store = source._store
        elif isinstance(source, np.ndarray) and source.ndim == 2:
            store = source
        elif isinstance(source, np.ndarray) and source.ndim == 1:
            store = self._row_store(source)
        elif isinstance(source, np.ndarray):
            raise ValueError(f"Cannot build a matrix from a {source.ndim}D array")
        else:
            items = list(source)
            if items and all(isinstance(item, (list, tuple, np.ndarray)) for item in items):
                store = self._rows_store(items)
            else:
                store = self._row_store(items)

        self._store = _check_store(store, type(self))

    # -------------------------------------------------------------------------
    # Construction helpers
    # -------------------------------------------------------------------------

    @classmethod
    def _row_store(cls, items: Sequence) -> np.ndarray:
        n = len(items)
        if n == 0:
            raise ValueError("Cannot build a matrix from an empty sequence")
        store = np.empty((1, n), dtype=cls.dtype)
        fill_range(store, lambda _, j: items[j])
        return store

    @classmethod
    def _rows_store(cls, rows: List[Sequence]) -> np.ndarray:
        n_rows = len(rows)
        n_columns = len(rows[0])
        for r, row in enumerate(rows):
            if len(row) != n_columns:
                raise ValueError(
                    f"Rows must have equal length: row {r} has {len(row)}, "
                    f"expected {n_columns}"
                )
        if n_columns == 0:
            raise ValueError("Cannot build a matrix from empty rows")
        store = np.empty((n_rows, n_columns), dtype=cls.dtype)
        fill_range(store, lambda i, j: rows[i][j])
        return store

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'Matrix[T]':
        """Wrap an existing 2D array. The array is shared, not copied."""
        if not isinstance(array, np.ndarray) or array.ndim != 2:
            raise ValueError("from_array expects a 2D numpy array")
        return cls(array)

    @classmethod
    def from_sequence(cls, items: Sequence) -> 'Matrix[T]':
        """Copy a flat sequence into a new 1 x n matrix."""
        return cls.from_array(cls._row_store(items))

    @classmethod
    def of_shape(cls, rows: int, columns: int) -> 'Matrix[T]':
        """New rows x columns matrix with every element set to default_value."""
        if rows < 1 or columns < 1:
            raise ValueError(f"Matrix dimensions must be positive, got {rows}x{columns}")
        logger.debug("Allocating %dx%d %s", rows, columns, cls.__name__)
        return cls(np.full((rows, columns), cls.default_value, dtype=cls.dtype))

    @classmethod
    def from_string(cls, text: str, rule: Optional[TextRule] = None) -> 'Matrix[T]':
        """Parse text into a new matrix of this class."""
        return algebra.from_string(cls, text, rule)

    # -------------------------------------------------------------------------
    # Dimensions
    # -------------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._store.shape[0]

    @property
    def columns(self) -> int:
        return self._store.shape[1]

    @property
    def length(self) -> int:
        return self.rows * self.columns

    @property
    def shape(self) -> tuple:
        return (self.rows, self.columns)

    @property
    def store(self) -> np.ndarray:
        """The backing array (shared, not a copy)."""
        return self._store

    # -------------------------------------------------------------------------
    # Element access
    # -------------------------------------------------------------------------

    def _check_index(self, r: int, c: int) -> None:
        for value in (r, c):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise TypeError(f"Matrix indices must be integers, got {value!r}")
        if not (0 <= r < self.rows and 0 <= c < self.columns):
            raise MatrixIndexError(
                f"Index ({r}, {c}) out of range for {self.rows}x{self.columns} matrix"
            )

    def get(self, r: int, c: int) -> T:
        self._check_index(r, c)
        return self._store[r, c]

    def set(self, r: int, c: int, value: T) -> None:
        self._check_index(r, c)
        self._store[r, c] = value

    def __getitem__(self, key) -> T:
        r, c = self._unpack_key(key)
        return self.get(r, c)

    def __setitem__(self, key, value: T) -> None:
        r, c = self._unpack_key(key)
        self.set(r, c, value)

    @staticmethod
    def _unpack_key(key):
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError(f"Matrix index must be a (row, column) pair, got {key!r}")
        return key

    # -------------------------------------------------------------------------
    # Iteration (row-major)
    # -------------------------------------------------------------------------

    def for_each_indexed(self, fn: Callable[[T, int, int], Any]) -> None:
        """
        Call fn(value, r, c) for every element, rows ascending, then columns
        ascending within a row.

        fn may write through set(); later reads see the new values.
        """
        for r in range(self.rows):
            for c in range(self.columns):
                fn(self._store[r, c], r, c)

    def for_each(self, fn: Callable[[T], Any]) -> None:
        self.for_each_indexed(lambda value, _r, _c: fn(value))

    def __iter__(self) -> Iterator[T]:
        for r in range(self.rows):
            for c in range(self.columns):
                yield self._store[r, c]

    def to_list(self) -> List[List[T]]:
        """Nested Python lists, numpy scalars converted to Python values."""
        return [
            [value.item() if isinstance(value, np.generic) else value for value in row]
            for row in self._store.tolist()
        ]

    # -------------------------------------------------------------------------
    # Capability, copies, text
    # -------------------------------------------------------------------------

    def is_numeric(self) -> bool:
        return algebra.is_numeric(type(self))

    def duplicate(self) -> 'Matrix[T]':
        """
        Second handle to the SAME store (not a deep copy).

        Writes through either handle are visible through both. Use copy()
        for an independent matrix.
        """
        return type(self)(self)

    shared_view = duplicate

    def copy(self) -> 'Matrix[T]':
        """Independent matrix: new store, element-wise copy."""
        return type(self)(self._store.copy())

    def to_string(self, rule: Optional[TextRule] = None) -> str:
        if rule is None:
            rule = CONFIG.text_rule
        return format_matrix(self, rule)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rows={self.rows}, columns={self.columns})"

    # -------------------------------------------------------------------------
    # Concatenation operators
    # -------------------------------------------------------------------------

    def __or__(self, other):
        """top | bottom: stack vertically."""
        if not isinstance(other, Matrix):
            return NotImplemented
        return algebra.stack_vertically(self, other)

    def __and__(self, other):
        """left & right: join horizontally."""
        if not isinstance(other, Matrix):
            return NotImplemented
        return algebra.join_horizontally(self, other)


@contents_type(ContentsType.NUMERIC)
class NumericMatrix(Matrix[float]):
    """
    Matrix with a float64 store, zero-initialized, tagged NUMERIC.

    Aliased stores must have a numeric dtype (bool, int, uint, float or
    complex); anything else raises ValueError.
    """

    dtype = np.dtype(np.float64)
    default_value = 0.0
    dtype_kinds = 'biufc'
