"""Conjugate gradients for damped least-squares normal equations (CGLS)."""

from __future__ import annotations

import math
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import TextIO

from .blas import daxpy, dnrm2, dscal

__all__ = ["CglsStatus", "CglsResult", "cgls", "newton_step_cgls"]

Operator = Callable[[Sequence[float]], Sequence[float]]

_EPS = sys.float_info.epsilon


class CglsStatus(IntEnum):
    """Why CGLS stopped."""

    CONVERGED = 0
    ITERATION_LIMIT = 1
    SINGULAR = 2


@dataclass
class CglsResult:
    """Outcome of a CGLS solve.

    ``optimality`` is the relative residual of the normal equations,
    ``norm(N'r + c - damp x) / norm(N'r0 + c)``.
    """

    x: list[float]
    residual: list[float]
    status: CglsStatus
    iterations: int
    optimality: float


def _vector(values: Sequence[float], length: int, name: str) -> list[float]:
    result = [float(v) for v in values]
    if len(result) != length:
        raise ValueError(f"{name} has {len(result)} elements; expected {length}")
    return result


def cgls(
    matvec: Operator,
    rmatvec: Operator,
    m: int,
    n: int,
    r: Sequence[float],
    kmax: int,
    tol: float,
    damp: float = 0.0,
    c: Sequence[float] | None = None,
    log: TextIO | None = None,
) -> CglsResult:
    """Solve ``(N'N + damp I) x = N'r + c`` by conjugate gradients.

    ``matvec(p)`` returns ``N p`` (length ``m``) and ``rmatvec(y)`` returns
    ``N' y`` (length ``n``). ``r`` is the starting residual; the final
    residual is returned in the result and ``r`` itself is left unchanged.
    """
    r = _vector(r, m, "r")
    if c is not None:
        c = _vector(c, n, "c")
    damped = damp > 0.0

    x = [0.0] * n
    s = _vector(rmatvec(r), n, "rmatvec result")
    if c is not None:
        daxpy(1.0, c, s)
    p = list(s)
    arnorm0 = dnrm2(s)
    gamma = arnorm0 * arnorm0

    k = 0
    xmax = 0.0
    normx = 0.0
    res_ne = 1.0
    converged = False
    unstable = False
    if arnorm0 == 0.0:
        # x = 0 already satisfies the normal equations.
        converged = True
        res_ne = 0.0

    if log is not None:
        log.write("\n CGLS:\n")
        log.write("  Rows............. %8d\t" % m)
        log.write("  Columns.......... %8d\n" % n)
        log.write("  Optimality tol... %8.1e\t" % tol)
        log.write("  Iteration limit.. %8d\n" % kmax)
        log.write("  Damp............. %8.1e\t" % damp)
        log.write("  Linear term...... %8s\n" % ("yes" if c is not None else "no"))
        log.write("\n\n%5s %17s %17s %9s %10s\n" % ("k", "x(1)", "x(n)", "normx", "resNE"))
        if n > 0:
            log.write(
                "%5d %17.10e %17.10e %9.2e %10.2e\n" % (k, x[0], x[-1], normx, 1.0)
            )

    while k < kmax and not converged and not unstable:
        k += 1

        s = _vector(matvec(p), m, "matvec result")
        norms = dnrm2(s)
        delta = norms * norms
        if damped:
            normp = dnrm2(p)
            delta += damp * normp * normp
        if delta <= _EPS:
            delta = _EPS

        alpha = gamma / delta
        daxpy(alpha, p, x)
        daxpy(-alpha, s, r)
        s = _vector(rmatvec(r), n, "rmatvec result")
        if damped:
            daxpy(-damp, x, s)
        if c is not None:
            daxpy(1.0, c, s)

        arnorm = dnrm2(s)
        gamma1 = gamma
        gamma = arnorm * arnorm
        beta = gamma / gamma1

        dscal(beta, p)
        daxpy(1.0, s, p)

        normx = dnrm2(x)
        xmax = max(xmax, normx)
        converged = arnorm <= arnorm0 * tol
        unstable = normx * tol >= 1.0

        res_ne = arnorm / arnorm0
        if log is not None:
            log.write(
                "%5d %17.10e %17.10e %9.2e %10.2e\n" % (k, x[0], x[-1], normx, res_ne)
            )

    shrink = normx / xmax if xmax > 0.0 else math.nan
    if converged:
        status = CglsStatus.CONVERGED
    elif k >= kmax:
        status = CglsStatus.ITERATION_LIMIT
    elif shrink <= math.sqrt(tol):
        status = CglsStatus.SINGULAR
    else:
        status = CglsStatus.CONVERGED

    if log is not None:
        log.write("\n")
    return CglsResult(x=x, residual=r, status=status, iterations=k, optimality=res_ne)


def newton_step_cgls(
    matvec: Operator,
    rmatvec: Operator,
    m: int,
    free: Sequence[int],
    x: Sequence[float],
    r: Sequence[float],
    damp: float = 0.0,
    itn_limit: int = 100,
    tol: float = 1e-6,
    c: Sequence[float] | None = None,
    log: TextIO | None = None,
) -> CglsResult:
    """Compute a Newton step in the free variables with CGLS.

    ``matvec`` and ``rmatvec`` are products with the full matrix A
    (``A v`` for a vector of length ``len(x)``, and ``A' y``). The step
    restricted to the columns listed in ``free`` solves
    ``(N'N + damp^2 I) dx = N'r - c(free) - damp^2 x(free)``, where the
    linear and damping terms are present only when ``c`` is given.
    """
    n = len(x)
    free = list(free)
    for j in free:
        if not 0 <= j < n:
            raise IndexError(f"free index {j} out of range for {n} variables")
    damp2 = damp * damp

    u: list[float] | None = None
    if c is not None:
        if len(c) != n:
            raise ValueError(f"c has {len(c)} elements; expected {n}")
        u = [-float(c[j]) for j in free]
        if damp > 0.0:
            u = [uj - damp2 * x[j] for uj, j in zip(u, free)]

    def free_matvec(dx_free: Sequence[float]) -> list[float]:
        full = [0.0] * n
        for j, value in zip(free, dx_free):
            full[j] = value
        return list(matvec(full))

    def free_rmatvec(y: Sequence[float]) -> list[float]:
        full = rmatvec(y)
        return [full[j] for j in free]

    return cgls(
        free_matvec, free_rmatvec, m, len(free), r, itn_limit, tol, damp2, u, log
    )