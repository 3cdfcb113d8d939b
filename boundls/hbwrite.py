"""Writing sparse matrices and auxiliary vectors in Harwell-Boeing format.

Column pointers and row indices are taken zero-based and written
one-based. Values are written with the Fortran-style formats named in
the header; ``D`` exponents are written as ``E``.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from contextlib import contextmanager, nullcontext
from typing import Iterator, TextIO

from .fortran_format import IntFormat, RealFormat, parse_int_format, parse_real_format

__all__ = ["write_matrix"]

DEFAULT_INT_FORMAT = "(8I10)"
DEFAULT_REAL_FORMAT = "(4E20.13)"


def _cards(fields: list[str], per_line: int) -> list[str]:
    """Group formatted fields into lines of at most ``per_line`` fields."""
    return [
        "".join(fields[start : start + per_line])
        for start in range(0, len(fields), per_line)
    ]


def _card_count(entries: int, per_line: int) -> int:
    return -(-entries // per_line)


def _int_format(fmt: str) -> tuple[str, IntFormat]:
    text = fmt.upper()
    parsed = parse_int_format(text)
    if parsed.per_line <= 0 or parsed.width <= 0:
        raise ValueError(f"unusable integer format {fmt!r}")
    return text, parsed


def _real_format(fmt: str) -> tuple[str, RealFormat]:
    text = fmt.upper()
    parsed = parse_real_format(text)
    if parsed.per_line <= 0 or parsed.width <= 0:
        raise ValueError(f"unusable real format {fmt!r}")
    if parsed.flag == "D":
        text = text.replace("D", "E", 1)
    return text, parsed


def _floats(values: Sequence[float] | None, length: int, name: str) -> list[float]:
    if values is None:
        raise ValueError(f"{name} is required")
    result = [float(v) for v in values]
    if len(result) != length:
        raise ValueError(f"{name} has {len(result)} elements; expected {length}")
    return result


@contextmanager
def _output(target) -> Iterator[TextIO]:
    if target is None:
        with nullcontext(sys.stdout) as stream:
            yield stream
    elif hasattr(target, "write"):
        with nullcontext(target) as stream:
            yield stream
    else:
        with open(target, "w", encoding="ascii") as stream:
            yield stream


def write_matrix(
    target,
    m: int,
    n: int,
    colptr: Sequence[int],
    rowind: Sequence[int],
    values: Sequence[float] | None = None,
    title: str = "",
    key: str = "",
    mat_type: str = "RUA",
    nrhs: int = 0,
    rhs: Sequence[float] | None = None,
    guess: Sequence[float] | None = None,
    exact: Sequence[float] | None = None,
    ptrfmt: str | None = None,
    indfmt: str | None = None,
    valfmt: str | None = None,
    rhsfmt: str | None = None,
    rhstype: str = "F",
) -> None:
    """Write an m-by-n compressed-column matrix in Harwell-Boeing format.

    ``target`` is a path, a writable text stream, or ``None`` for standard
    output. Complex matrices (type starting with ``C``) take interleaved
    real and imaginary parts in ``values`` and in the auxiliary vectors.
    When ``nrhs`` is positive, ``rhs`` holds ``nrhs`` vectors one after
    another; ``guess`` and ``exact`` are needed when ``rhstype`` has ``G``
    in its second or ``X`` in its third position.
    """
    colptr = [int(v) for v in colptr]
    rowind = [int(v) for v in rowind]
    if len(colptr) != n + 1:
        raise ValueError(f"colptr has {len(colptr)} elements; expected {n + 1}")
    if nrhs < 0:
        raise ValueError("nrhs must be non-negative")
    nz = len(rowind)

    pattern = mat_type.startswith("P")
    is_complex = mat_type.startswith("C")
    nvalentries = 2 * nz if is_complex else nz
    nrhsentries = 2 * m if is_complex else m

    ptr_text, ptr = _int_format(ptrfmt or DEFAULT_INT_FORMAT)
    ind_text, ind = _int_format(indfmt or ptr_text)
    ptr_cards = _cards([ptr.format(v + 1) for v in colptr], ptr.per_line)
    ind_cards = _cards([ind.format(v + 1) for v in rowind], ind.per_line)

    val_cards: list[str] = []
    if pattern:
        val_text = (valfmt or "").upper()
    else:
        val_text, val = _real_format(valfmt or DEFAULT_REAL_FORMAT)
        data = _floats(values, nvalentries, "values")
        val_cards = _cards([val.format(v) for v in data], val.per_line)

    padded_type = rhstype.ljust(3)
    rhs_text = ""
    aux_cards: list[str] = []
    rhscrd = 0
    if nrhs > 0:
        source_fmt = rhsfmt or val_text
        if not source_fmt:
            raise ValueError("an auxiliary vector format is required")
        rhs_text, aux = _real_format(source_fmt)
        total = nrhs * nrhsentries
        kinds = [_floats(rhs, total, "rhs")]
        if padded_type[1] == "G":
            kinds.append(_floats(guess, total, "guess"))
        if padded_type[2] == "X":
            kinds.append(_floats(exact, total, "exact"))
        for start in range(0, total, nrhsentries):
            for vectors in kinds:
                block = vectors[start : start + nrhsentries]
                aux_cards.extend(
                    _cards([aux.format(v) for v in block], aux.per_line)
                )
        rhscrd = _card_count(nrhsentries, aux.per_line) * len(kinds) * nrhs

    ptrcrd, indcrd, valcrd = len(ptr_cards), len(ind_cards), len(val_cards)
    totcrd = 4 + ptrcrd + indcrd + valcrd + rhscrd

    with _output(target) as out:
        out.write("%-72s%-8s\n" % (title, key))
        out.write("%14d%14d%14d%14d%14d\n" % (totcrd, ptrcrd, indcrd, valcrd, rhscrd))
        out.write("%3s%11s%14d%14d%14d\n" % (mat_type, " " * 10, m, n, nz))
        out.write("%-16s%-16s%-20s" % (ptr_text, ind_text, val_text))
        if nrhs > 0:
            out.write("%-20s\n%-14s%d\n" % (rhs_text, rhstype, nrhs))
        else:
            out.write("\n")
        for line in (*ptr_cards, *ind_cards, *val_cards, *aux_cards):
            out.write(line + "\n")