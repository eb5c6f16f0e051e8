# simple_matrix/tags.py
"""
Capability tags for matrix classes.

A matrix class declares, once, what kind of contents it holds:

    @contents_type(ContentsType.NUMERIC)
    class NumericMatrix(Matrix[float]):
        ...

The tag is read from the CLASS, never from an instance, and is inherited by
subclasses unless they declare their own. Matrix[int] and Matrix[str] are
subclasses of Matrix (typing aliases resolve to their origin), so they
always carry the same tag.
"""

from enum import Enum
from typing import get_origin

_TAG_ATTR = '__contents_type__'


class ContentsType(Enum):
    """What a matrix class holds."""
    GENERIC = 'generic'
    NUMERIC = 'numeric'


def contents_type(kind: ContentsType):
    """Class decorator attaching a ContentsType tag at declaration time."""
    if not isinstance(kind, ContentsType):
        raise TypeError(f"kind must be a ContentsType, got {kind!r}")

    def decorate(cls):
        setattr(cls, _TAG_ATTR, kind)
        return cls

    return decorate


def get_contents_type(matrix_type) -> ContentsType:
    """
    Return the tag declared for a matrix class.

    Accepts a class or a parametrised alias (e.g. Matrix[int]). Untagged
    classes are GENERIC.
    """
    origin = get_origin(matrix_type) or matrix_type
    if not isinstance(origin, type):
        raise TypeError(f"Expected a matrix class, got {matrix_type!r}")
    return getattr(origin, _TAG_ATTR, ContentsType.GENERIC)
