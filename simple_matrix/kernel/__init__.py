# simple_matrix/kernel - Storage-level primitives
"""
KERNEL: BULK WRITES INTO BACKING STORES
=======================================

The matrix layer never writes elements one by one from its own loops when
building a new store. It hands a target array, a region and a generator
function to fill_range(), which owns the iteration (and optional threading).
"""

from .fill import fill_range

__all__ = ['fill_range']
