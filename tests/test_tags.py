# File: tests/test_tags.py
"""
Test capability tagging (tags.py) and the is_numeric() query built on it.
"""

import pytest

from simple_matrix.algebra import is_numeric
from simple_matrix.matrix import Matrix, NumericMatrix
from simple_matrix.tags import ContentsType, contents_type, get_contents_type


def test_builtin_tags():
    assert get_contents_type(Matrix) is ContentsType.GENERIC
    assert get_contents_type(NumericMatrix) is ContentsType.NUMERIC

    assert is_numeric(Matrix) is False
    assert is_numeric(NumericMatrix) is True


def test_tag_is_per_class_not_per_element_type():
    """
    Matrix[int] and Matrix[str] are subclasses of Matrix and inherit its
    tag, whatever the element type.
    """
    assert is_numeric(Matrix[int]) == is_numeric(Matrix[str])
    assert get_contents_type(Matrix[int]) is ContentsType.GENERIC


def test_instance_query_matches_class_query():
    assert Matrix([1, 2]).is_numeric() is False
    assert NumericMatrix([1, 2]).is_numeric() is True


def test_untagged_subclass_inherits():
    class PlainSubclass(NumericMatrix):
        pass

    assert is_numeric(PlainSubclass) is True


def test_subclass_can_override_tag():
    @contents_type(ContentsType.GENERIC)
    class LabelMatrix(NumericMatrix):
        pass

    assert is_numeric(LabelMatrix) is False
    # The parent keeps its own tag
    assert is_numeric(NumericMatrix) is True


def test_untagged_class_defaults_to_generic():
    class NotAMatrix:
        pass

    assert get_contents_type(NotAMatrix) is ContentsType.GENERIC


def test_invalid_arguments():
    with pytest.raises(TypeError):
        contents_type('numeric')

    with pytest.raises(TypeError):
        get_contents_type(Matrix([1]))
