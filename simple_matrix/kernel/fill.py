# simple_matrix/kernel/fill.py
"""
RANGE FILL: Index-Generated Bulk Writes
=======================================

PURPOSE:
--------
This module fills a rectangular region of a numpy array by calling a
generator function once per index:

    target[i]    = fn(i)       # 1D target
    target[i, j] = fn(i, j)    # 2D target

Every matrix construction that copies data (flat sequence -> 1 x n row,
concatenation, linear extraction) goes through here.

CONTRACT:
---------
- Every index in the half-open region [start, stop) is written exactly once.
- No ordering is guaranteed between indices.
- The call is synchronous: when it returns, every write is visible.

Because of the second point, two fills over DISJOINT regions of the same
target give the same result in any order, or concurrently.

PARALLELISM:
------------
With workers > 1 and a region of at least CONFIG.parallel_threshold
elements, the region's rows are split into contiguous chunks and written
from a ThreadPoolExecutor. Chunks never overlap, so no locking is needed.

USAGE:
------
    store = np.empty((3, 2), dtype=object)

    # Top two rows from matrix a, bottom row from matrix b
    fill_range(store, lambda i, j: a[i, j], (0, 0), (2, 2))
    fill_range(store, lambda i, j: b[i - 2, j], (2, 0), (3, 2))
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Tuple, Union

import numpy as np

from ..config import CONFIG

logger = logging.getLogger(__name__)

Index = Union[int, Tuple[int, int]]


def _normalize_region(
    shape: Tuple[int, ...],
    start: Optional[Index],
    stop: Optional[Index],
) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
    """Turn start/stop arguments into per-axis tuples and check bounds."""
    ndim = len(shape)

    if start is None:
        start = (0,) * ndim
    elif isinstance(start, (int, np.integer)):
        start = (int(start),)
    if stop is None:
        stop = tuple(shape)
    elif isinstance(stop, (int, np.integer)):
        stop = (int(stop),)

    start = tuple(start)
    stop = tuple(stop)

    if len(start) != ndim or len(stop) != ndim:
        raise ValueError(
            f"Region {start}..{stop} does not match a {ndim}D target"
        )

    for axis, (lo, hi, size) in enumerate(zip(start, stop, shape)):
        if lo < 0 or hi > size:
            raise ValueError(
                f"Region {start}..{stop} is outside target of shape {shape} "
                f"(axis {axis})"
            )
        if hi < lo:
            raise ValueError(f"Region {start}..{stop} has stop < start on axis {axis}")

    return start, stop


def _row_chunks(lo: int, hi: int, n_chunks: int) -> List[Tuple[int, int]]:
    """Split [lo, hi) into at most n_chunks contiguous, non-empty pieces."""
    count = hi - lo
    n_chunks = max(1, min(n_chunks, count))
    size, extra = divmod(count, n_chunks)

    chunks = []
    begin = lo
    for k in range(n_chunks):
        end = begin + size + (1 if k < extra else 0)
        chunks.append((begin, end))
        begin = end
    return chunks


def _fill_rows_1d(target: np.ndarray, fn: Callable, lo: int, hi: int) -> None:
    for i in range(lo, hi):
        target[i] = fn(i)


def _fill_rows_2d(
    target: np.ndarray, fn: Callable, r0: int, r1: int, c0: int, c1: int
) -> None:
    for i in range(r0, r1):
        for j in range(c0, c1):
            target[i, j] = fn(i, j)


def fill_range(
    target: np.ndarray,
    fn: Callable,
    start: Optional[Index] = None,
    stop: Optional[Index] = None,
    *,
    workers: Optional[int] = None,
) -> np.ndarray:
    """
    Fill target[start:stop] with fn(index), once per index.

    Parameters:
    -----------
    target : np.ndarray
        1D or 2D array, written in place
    fn : Callable
        fn(i) for a 1D target, fn(i, j) for a 2D target
    start, stop : int or (int, int), optional
        Half-open region. Defaults to the whole target.
    workers : int, optional
        Thread count for large regions (default CONFIG.fill_workers)

    Returns:
    --------
    np.ndarray
        The same target, for chaining

    Raises:
    -------
    ValueError
        If target is not 1D/2D or the region is out of bounds.
        Exceptions raised by fn propagate unchanged.
    """
    if target.ndim not in (1, 2):
        raise ValueError(f"fill_range supports 1D or 2D targets, got {target.ndim}D")

    start, stop = _normalize_region(target.shape, start, stop)

    n_elements = 1
    for lo, hi in zip(start, stop):
        n_elements *= hi - lo
    if n_elements == 0:
        return target

    if workers is None:
        workers = CONFIG.fill_workers

    if target.ndim == 1:
        def run(lo, hi):
            _fill_rows_1d(target, fn, lo, hi)
    else:
        def run(lo, hi):
            _fill_rows_2d(target, fn, lo, hi, start[1], stop[1])

    if workers <= 1 or n_elements < CONFIG.parallel_threshold:
        run(start[0], stop[0])
        return target

    chunks = _row_chunks(start[0], stop[0], workers)
    logger.debug(
        "Filling %d elements of %s target in %d chunks",
        n_elements, target.shape, len(chunks),
    )

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(run, lo, hi) for lo, hi in chunks]
        for future in futures:
            # re-raises any exception from fn
            future.result()

    return target
