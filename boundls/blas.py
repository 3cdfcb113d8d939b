"""Level-1 BLAS routines and a dense matrix-vector product on Python sequences.

Vectors are mutable sequences of floats. Routines that write a result
update the given sequence in place and return it. The number of
elements processed is taken from the strided length of ``x``.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, MutableSequence, Sequence
from enum import IntEnum

__all__ = [
    "Order",
    "Transpose",
    "daxpy",
    "dcopy",
    "ddot",
    "dnrm2",
    "dscal",
    "dgemv",
]


class Order(IntEnum):
    """Storage order of a dense matrix."""

    ROW_MAJOR = 101
    COL_MAJOR = 102


class Transpose(IntEnum):
    """Whether a matrix operand is used as is or transposed."""

    NO_TRANS = 111
    TRANS = 112
    CONJ_TRANS = 113


def _count(length: int, inc: int) -> int:
    """Number of strided elements available in a sequence of ``length``."""
    if inc == 0:
        raise ValueError("increment must be non-zero")
    step = abs(inc)
    return (length + step - 1) // step


def _offset(n: int, inc: int) -> int:
    return 0 if inc > 0 else (n - 1) * (-inc)


def _positions(n: int, inc: int) -> Iterator[int]:
    start = _offset(n, inc)
    return (start + k * inc for k in range(n))


def _require_length(seq: Sequence[float], n: int, inc: int, name: str) -> None:
    needed = 1 + (n - 1) * abs(inc) if n > 0 else 0
    if len(seq) < needed:
        raise ValueError(
            f"{name} holds {len(seq)} elements; {needed} are needed"
        )


def daxpy(
    alpha: float,
    x: Sequence[float],
    y: MutableSequence[float],
    incx: int = 1,
    incy: int = 1,
) -> MutableSequence[float]:
    """Compute ``y <- alpha * x + y``."""
    n = _count(len(x), incx)
    if n <= 0 or alpha == 0.0:
        return y
    _require_length(y, n, incy, "y")
    for ix, iy in zip(_positions(n, incx), _positions(n, incy)):
        y[iy] += alpha * x[ix]
    return y


def dcopy(
    x: Sequence[float],
    y: MutableSequence[float],
    incx: int = 1,
    incy: int = 1,
) -> MutableSequence[float]:
    """Copy ``x`` into ``y``."""
    n = _count(len(x), incx)
    _require_length(y, n, incy, "y")
    for ix, iy in zip(_positions(n, incx), _positions(n, incy)):
        y[iy] = x[ix]
    return y


def ddot(
    x: Sequence[float],
    y: Sequence[float],
    incx: int = 1,
    incy: int = 1,
) -> float:
    """Return the dot product of ``x`` and ``y``."""
    n = _count(len(x), incx)
    _require_length(y, n, incy, "y")
    return sum(
        (x[ix] * y[iy] for ix, iy in zip(_positions(n, incx), _positions(n, incy))),
        0.0,
    )


def dnrm2(x: Sequence[float], incx: int = 1) -> float:
    """Return the Euclidean norm of ``x``, guarding against overflow."""
    if incx <= 0:
        return 0.0
    n = _count(len(x), incx)
    if n <= 0:
        return 0.0
    if n == 1:
        return abs(x[0])

    scale = 0.0
    ssq = 1.0
    for value in x[::incx]:
        if value != 0.0:
            ax = abs(value)
            if scale < ax:
                ssq = 1.0 + ssq * (scale / ax) * (scale / ax)
                scale = ax
            else:
                ssq += (ax / scale) * (ax / scale)
    return scale * math.sqrt(ssq)


def dscal(
    alpha: float, x: MutableSequence[float], incx: int = 1
) -> MutableSequence[float]:
    """Compute ``x <- alpha * x``; a non-positive increment leaves ``x`` alone."""
    if incx <= 0:
        return x
    n = _count(len(x), incx)
    for ix in _positions(n, incx):
        x[ix] *= alpha
    return x


def dgemv(
    order: Order,
    trans: Transpose,
    m: int,
    n: int,
    alpha: float,
    a: Sequence[float],
    lda: int,
    x: Sequence[float],
    beta: float,
    y: MutableSequence[float],
) -> MutableSequence[float]:
    """Compute ``y <- alpha * op(A) x + beta * y`` for an m-by-n matrix A.

    ``a`` is stored in the given order with leading dimension ``lda``.
    """
    order = Order(order)
    trans = Transpose(trans)
    if m < 0 or n < 0:
        raise ValueError("matrix dimensions must be non-negative")

    # Reduce to a column-major problem with `rows` x `cols` storage.
    if order is Order.COL_MAJOR:
        transposed = trans is not Transpose.NO_TRANS
        rows, cols = m, n
    else:
        transposed = trans is Transpose.NO_TRANS
        rows, cols = n, m

    if lda < max(1, rows):
        raise ValueError(f"lda must be at least {max(1, rows)}, got {lda}")

    len_y = cols if transposed else rows
    len_x = rows if transposed else cols

    if rows == 0 or cols == 0 or (alpha == 0.0 and beta == 1.0):
        return y

    if len(x) < len_x:
        raise ValueError(f"x holds {len(x)} elements; {len_x} are needed")
    if len(y) < len_y:
        raise ValueError(f"y holds {len(y)} elements; {len_y} are needed")
    if len(a) < lda * (cols - 1) + rows:
        raise ValueError("matrix storage is too short for the given dimensions")

    if beta != 1.0:
        if beta == 0.0:
            y[:len_y] = [0.0] * len_y
        else:
            y[:len_y] = [beta * value for value in y[:len_y]]

    if alpha == 0.0:
        return y

    columns = (a[j * lda : j * lda + rows] for j in range(cols))
    if not transposed:
        for xj, column in zip(x[:cols], columns):
            if xj != 0.0:
                temp = alpha * xj
                for i, aij in enumerate(column):
                    y[i] += temp * aij
    else:
        for j, column in enumerate(columns):
            temp = sum((aij * xi for aij, xi in zip(column, x)), 0.0)
            y[j] += alpha * temp
    return y