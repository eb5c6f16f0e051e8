# File: tests/test_matrix.py
"""
Test the matrix.py module (Matrix container).

WHY THESE TESTS?
---------------
1. Each construction path shares or owns its store exactly as documented
2. Dimensions always follow the store
3. Element access rejects anything outside [0, rows) x [0, columns)
4. Iteration is row-major
"""

import numpy as np
import pytest

from simple_matrix.matrix import Matrix, MatrixIndexError, NumericMatrix


# =============================================================================
# Construction and ownership
# =============================================================================

def test_wraps_2d_array_without_copy():
    """
    A 2D array is aliased: writes to the array show up in the matrix.
    """
    array = np.array([[1, 2, 3], [4, 5, 6]])
    m = Matrix(array)

    assert m.store is array
    assert (m.rows, m.columns, m.length) == (2, 3, 6)

    array[1, 2] = 60
    assert m[1, 2] == 60


def test_flat_sequence_becomes_single_row():
    """
    A flat sequence is copied into a new 1 x n store.
    """
    items = [7, 8, 9]
    m = Matrix(items)

    assert m.shape == (1, 3)
    assert m.to_list() == [[7, 8, 9]]

    items[0] = 70
    assert m[0, 0] == 7


def test_from_sequence_copies_1d_array():
    source = np.array([1.5, 2.5])
    m = NumericMatrix.from_sequence(source)

    assert m.shape == (1, 2)
    source[0] = 0.0
    assert m[0, 0] == 1.5


def test_nested_rows_are_copied():
    rows = [[1, 2], [3, 4]]
    m = Matrix(rows)

    assert m.shape == (2, 2)
    rows[0][0] = 100
    assert m[0, 0] == 1


def test_ragged_rows_rejected():
    with pytest.raises(ValueError, match="equal length"):
        Matrix([[1, 2], [3]])


def test_empty_inputs_rejected():
    with pytest.raises(ValueError):
        Matrix([])
    with pytest.raises(ValueError):
        Matrix(np.zeros((0, 3)))
    with pytest.raises(ValueError):
        Matrix.of_shape(0, 2)


def test_3d_array_rejected():
    with pytest.raises(ValueError, match="3D"):
        Matrix(np.zeros((2, 2, 2)))


def test_of_shape_uses_default_value():
    """
    Generic matrices start with None, numeric matrices with 0.0.
    """
    generic = Matrix.of_shape(2, 3)
    numeric = NumericMatrix.of_shape(3, 2)

    assert generic.shape == (2, 3)
    assert all(value is None for value in generic)

    assert numeric.shape == (3, 2)
    assert numeric.store.dtype == np.float64
    np.testing.assert_array_equal(numeric.store, np.zeros((3, 2)))


def test_of_shape_stores_are_independent():
    a = Matrix.of_shape(2, 2)
    b = Matrix.of_shape(2, 2)
    a[0, 0] = 'x'
    assert b[0, 0] is None


def test_from_array_requires_2d():
    with pytest.raises(ValueError):
        Matrix.from_array(np.zeros(3))


def test_dimensions_follow_store():
    """
    rows/columns are read from the store, never cached.
    """
    m = Matrix(np.zeros((2, 3)))
    m._store = np.zeros((4, 5))
    assert (m.rows, m.columns, m.length) == (4, 5, 20)


# =============================================================================
# Element access
# =============================================================================

def test_get_and_set():
    m = Matrix.of_shape(2, 2)
    m.set(1, 0, 'a')
    m[0, 1] = 'b'

    assert m.get(1, 0) == 'a'
    assert m[0, 1] == 'b'


@pytest.mark.parametrize("r, c", [(2, 0), (0, 3), (-1, 0), (0, -1)])
def test_out_of_bounds_access(r, c):
    """
    Indices outside [0, rows) x [0, columns) fail, including negative ones.
    """
    m = Matrix([[1, 2, 3], [4, 5, 6]])

    with pytest.raises(MatrixIndexError):
        m.get(r, c)
    with pytest.raises(MatrixIndexError):
        m[r, c] = 0
    with pytest.raises(IndexError):
        m[r, c]


def test_non_integer_index():
    m = Matrix([1, 2])
    with pytest.raises(TypeError):
        m[0]
    with pytest.raises(TypeError):
        m.get(0, 1.0)


# =============================================================================
# Iteration
# =============================================================================

def test_for_each_indexed_is_row_major():
    m = Matrix([['a', 'b', 'c'], ['d', 'e', 'f']])
    visited = []
    m.for_each_indexed(lambda value, r, c: visited.append((value, r, c)))

    assert visited == [
        ('a', 0, 0), ('b', 0, 1), ('c', 0, 2),
        ('d', 1, 0), ('e', 1, 1), ('f', 1, 2),
    ]


def test_for_each_and_iter_share_order():
    m = Matrix([[1, 2], [3, 4]])
    seen = []
    m.for_each(seen.append)

    assert seen == [1, 2, 3, 4]
    assert list(m) == seen


def test_mutation_during_traversal_is_visible():
    """
    Writing ahead of the cursor changes what the traversal sees next.
    """
    m = Matrix([[1, 2], [3, 4]])
    seen = []

    def visit(value, r, c):
        seen.append(value)
        if (r, c) == (0, 0):
            m.set(1, 1, 40)

    m.for_each_indexed(visit)
    assert seen == [1, 2, 3, 40]


# =============================================================================
# Duplication and copies
# =============================================================================

def test_duplicate_shares_store():
    """
    duplicate() is a second handle to the same data, in both directions.
    """
    a = Matrix([[1, 2], [3, 4]])
    b = a.duplicate()

    assert b is not a
    assert b.store is a.store

    a[0, 0] = 10
    assert b[0, 0] == 10

    b[1, 1] = 40
    assert a[1, 1] == 40


def test_shared_view_and_matrix_constructor_alias():
    a = NumericMatrix([[1.0, 2.0]])

    view = a.shared_view()
    wrapped = NumericMatrix(a)
    assert isinstance(view, NumericMatrix)
    assert view.store is a.store
    assert wrapped.store is a.store


def test_copy_is_independent():
    a = Matrix([[1, 2], [3, 4]])
    b = a.copy()

    assert b.store is not a.store
    assert b.to_list() == a.to_list()

    a[0, 0] = 10
    assert b[0, 0] == 1


# =============================================================================
# Text and operators
# =============================================================================

def test_str_uses_default_rule():
    m = Matrix([[1, 2], [3, 4]])
    assert str(m) == "1, 2\n3, 4"
    assert m.to_string() == str(m)


def test_repr():
    assert repr(NumericMatrix.of_shape(2, 3)) == "NumericMatrix(rows=2, columns=3)"


def test_operators_delegate_to_algebra():
    a = Matrix([[1, 2], [3, 4]])

    assert (a | Matrix([5, 6])).to_list() == [[1, 2], [3, 4], [5, 6]]
    assert (a & Matrix([[5], [6]])).to_list() == [[1, 2, 5], [3, 4, 6]]


def test_operators_reject_non_matrices():
    with pytest.raises(TypeError):
        Matrix([1]) | [2]
    with pytest.raises(TypeError):
        Matrix([1]) & 2


def test_to_list_returns_python_values():
    """
    Numpy scalars held in an object store come back as plain Python values.
    """
    store = np.empty((1, 3), dtype=object)
    store[0, 0] = np.int64(7)
    store[0, 1] = np.bool_(True)
    store[0, 2] = np.str_('a')

    values = Matrix(store).to_list()[0]

    assert values == [7, True, 'a']
    assert type(values[0]) is int
    assert type(values[1]) is bool
    assert type(values[2]) is str


def test_to_list_of_numeric_store():
    values = NumericMatrix([[1.5, 2.0]]).to_list()[0]
    assert all(type(value) is float for value in values)


# =============================================================================
# Specializations and store dtypes
# =============================================================================

def test_specialization_is_cached_subclass():
    assert Matrix[int] is Matrix[int]
    assert Matrix[int] is not Matrix[str]
    assert issubclass(Matrix[int], Matrix)
    assert Matrix[int].element_type is int
    assert Matrix.element_type is None
    assert Matrix[int].__name__ == "Matrix[int]"


def test_specialization_keeps_container_behaviour():
    m = Matrix[int]([[1, 2], [3, 4]])

    assert isinstance(m, Matrix)
    assert m.store.dtype == object
    assert type(m.copy()) is Matrix[int]
    assert type(m.duplicate()) is Matrix[int]


def test_numeric_matrix_rejects_non_numeric_store():
    with pytest.raises(ValueError, match="cannot hold"):
        NumericMatrix(np.array([['a', 'b']]))

    with pytest.raises(ValueError, match="cannot hold"):
        NumericMatrix(Matrix([['x']]))

    with pytest.raises(ValueError, match="cannot hold"):
        NumericMatrix(np.array([['2020-01-01']], dtype='datetime64[D]'))


def test_numeric_matrix_aliases_numeric_store():
    ints = np.array([[1, 2], [3, 4]])
    m = NumericMatrix(ints)

    assert m.store is ints
    ints[0, 0] = 10
    assert m[0, 0] == 10
    assert NumericMatrix(np.array([[True, False]])).store.dtype == np.bool_
