"""Writing a bound-constrained least-squares problem to data files.

The matrix A and right-hand side b go to ``<basename>.hbf`` in
Harwell-Boeing format. The lower and upper bounds, the linear term c and
the starting point x go to ``<basename>.opt``, one value per line, in
that order. Infinite values are written as plus or minus 1e20.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from pathlib import Path

from .hbwrite import write_matrix
from .sparse import CscMatrix

__all__ = ["write_problem"]

BOUND_INFINITY = 1e20
MATRIX_TYPE = "RRA"
PTR_FORMAT = "(13I6)"
IND_FORMAT = "(16I5)"
VAL_FORMAT = "(3E26.18)"
RHS_FORMAT = "(3E26.18)"


def _checked(values: Sequence[float], length: int, name: str) -> list[float]:
    result = [float(v) for v in values]
    if len(result) != length:
        raise ValueError(f"{name} has {len(result)} elements; expected {length}")
    return result


def _optional_values(values: Sequence[float], n: int, name: str) -> list[float]:
    result = []
    for position, value in enumerate(_checked(values, n, name), start=1):
        if math.isnan(value):
            raise ValueError(f"NaN detected in position {position} of {name}")
        if math.isinf(value):
            value = -BOUND_INFINITY if value < 0 else BOUND_INFINITY
        result.append(value)
    return result


def write_problem(
    basename,
    a: CscMatrix,
    b: Sequence[float],
    bl: Sequence[float],
    bu: Sequence[float],
    c: Sequence[float],
    x: Sequence[float],
    title: str = "",
    key: str = "",
) -> tuple[Path, Path]:
    """Write the problem files and return the paths of the two files."""
    if not a.is_csc():
        raise ValueError("the matrix must be in compressed-column form")
    if a.x is None:
        raise ValueError("the matrix must hold numerical values")
    m, n = a.m, a.n
    nnz = a.p[n]
    rhs = _checked(b, m, "b")
    optional = [
        _optional_values(vector, n, name)
        for vector, name in ((bl, "bl"), (bu, "bu"), (c, "c"), (x, "x"))
    ]

    hbf_path = Path(f"{basename}.hbf")
    opt_path = Path(f"{basename}.opt")

    write_matrix(
        hbf_path, m, n, a.p[: n + 1], a.i[:nnz], a.x[:nnz],
        title=title, key=key, mat_type=MATRIX_TYPE,
        nrhs=1, rhs=rhs,
        ptrfmt=PTR_FORMAT, indfmt=IND_FORMAT, valfmt=VAL_FORMAT, rhsfmt=RHS_FORMAT,
        rhstype="F",
    )

    with open(opt_path, "w", encoding="ascii") as out:
        for vector in optional:
            for value in vector:
                out.write("%23.16e\n" % value)

    return hbf_path, opt_path