"""Harwell-Boeing matrices whose values are kept as text.

Values are neither parsed nor reformatted. They are kept as the strings
found in the file, so they can be copied into another file exactly. On
reading, ``D`` exponents become ``E``. A field written without an
exponent letter, such as ``1.5+003``, gets the format's letter inserted
in front of its exponent sign.
"""

from __future__ import annotations

import dataclasses
import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager, nullcontext
from itertools import islice
from typing import TextIO

from .fortran_format import IntFormat, RealFormat, parse_int_format, parse_real_format
from .hbread import HBError, HBMatrix, read_header

__all__ = ["read_matrix_text", "read_aux_text", "write_matrix_text"]

DEFAULT_INT_FORMAT = "(8I10)"
DEFAULT_REAL_FORMAT = "(4E20.13)"


def _atoi(text: str) -> int:
    text = text.strip()
    digits = ""
    for at, char in enumerate(text):
        if char.isdigit() or (at == 0 and char in "+-"):
            digits += char
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return 0


def _open(path) -> TextIO:
    try:
        return open(path, encoding="ascii", errors="replace")
    except OSError as exc:
        raise HBError(f"cannot open file: {path}") from exc


def _data_line(stream: TextIO, region: str) -> str:
    line = stream.readline()
    if not line.strip():
        raise HBError(f"null (or blank) line in {region} data region of HB file")
    return line.rstrip("\r\n")


def _with_exponent_letter(field: str, flag: str) -> str:
    """Strip a field and insert ``flag`` before a bare exponent sign."""
    body = field.strip()
    if flag == "F" or "E" in body:
        return body
    for at in range(len(body) - 1, 0, -1):
        if body[at] in "+-":
            before = body[at - 1]
            if before.isdigit() or before == ".":
                return body[:at] + flag + body[at:]
            break
    return body


def _usable(fmt: IntFormat | RealFormat, region: str) -> None:
    if fmt.per_line <= 0 or fmt.width <= 0:
        raise HBError(f"unusable {region} format in HB file")


def _read_indices(
    stream: TextIO, cards: int, fmt: IntFormat, limit: int, region: str
) -> list[int]:
    _usable(fmt, region)
    values: list[int] = []
    for _ in range(cards):
        line = _data_line(stream, region)
        for k in range(fmt.per_line):
            if len(values) >= limit:
                break
            start = k * fmt.width
            values.append(_atoi(line[start : start + fmt.width]) - 1)
    if len(values) < limit:
        raise HBError(f"{region} data region holds {len(values)} of {limit} entries")
    return values


def _read_text_values(
    stream: TextIO, cards: int, fmt: RealFormat, limit: int
) -> list[str]:
    _usable(fmt, "value")
    values: list[str] = []
    for _ in range(cards):
        line = _data_line(stream, "value")
        if fmt.flag == "D":
            line = line.replace("D", "E")
        for k in range(fmt.per_line):
            if len(values) >= limit:
                break
            start = k * fmt.width
            values.append(
                _with_exponent_letter(line[start : start + fmt.width], fmt.flag)
            )
    if len(values) < limit:
        raise HBError(f"value data region holds {len(values)} of {limit} entries")
    return values


def read_matrix_text(path) -> HBMatrix:
    """Read the matrix at ``path``, keeping its values as strings.

    The returned header's value format has its ``D`` replaced by ``E``,
    matching the strings in ``values``.
    """
    with _open(path) as stream:
        header = read_header(stream)
        colptr = _read_indices(
            stream, header.ptrcrd, parse_int_format(header.ptrfmt),
            header.ncol + 1, "pointer",
        )
        rowind = _read_indices(
            stream, header.indcrd, parse_int_format(header.indfmt),
            header.nnzero, "index",
        )
        values = None
        if not header.is_pattern:
            fmt = parse_real_format(header.valfmt)
            nentries = 2 * header.nnzero if header.is_complex else header.nnzero
            values = _read_text_values(stream, header.valcrd, fmt, nentries)
            valfmt = header.valfmt.upper()
            if fmt.flag == "D":
                valfmt = valfmt.replace("D", "E", 1)
            header = dataclasses.replace(header, valfmt=valfmt)
    return HBMatrix(header=header, colptr=colptr, rowind=rowind, values=values)


def _aux_fields(stream: TextIO, fmt: RealFormat) -> Iterator[str]:
    """Yield the fixed-width fields of the auxiliary region."""
    maxcol = fmt.per_line * fmt.width
    while True:
        line = stream.readline()
        if not line:
            return
        if not line.strip():
            raise HBError(
                "null (or blank) line in auxiliary vector data region of HB file"
            )
        if fmt.flag == "D":
            line = line.replace("D", "E")
        text = line.rstrip("\r\n")
        for col in range(0, min(maxcol, len(text)), fmt.width):
            yield text[col : col + fmt.width]


def _skip(fields: Iterator[str], count: int) -> None:
    next(islice(fields, count, count), None)


def read_aux_text(path, aux_type: str = "F") -> list[str]:
    """Read auxiliary vectors of one kind as strings, one vector after another.

    ``aux_type`` is ``"F"`` (right-hand sides), ``"G"`` (initial guesses)
    or ``"X"`` (exact solutions).
    """
    if aux_type not in ("F", "G", "X"):
        raise ValueError(f"auxiliary type must be 'F', 'G' or 'X', not {aux_type!r}")
    with _open(path) as stream:
        header = read_header(stream)
        if header.nrhs <= 0:
            raise HBError("attempt to read auxiliary vector(s) when none are present")
        rhstype = header.rhstype
        if rhstype[0] != "F":
            raise HBError("auxiliary vector(s) are not stored in full form")
        has_guess = rhstype[1] == "G"
        has_exact = rhstype[2] == "X"
        if aux_type == "G" and not has_guess:
            raise HBError("attempt to read guess vector(s) when none are present")
        if aux_type == "X" and not has_exact:
            raise HBError(
                "attempt to read exact solution vector(s) when none are present"
            )

        nentries = 2 * header.nrow if header.is_complex else header.nrow
        nvecs = 1 + int(has_guess) + int(has_exact)
        fmt = parse_real_format(header.rhsfmt)
        _usable(fmt, "auxiliary")

        for _ in range(header.ptrcrd + header.indcrd + header.valcrd):
            stream.readline()

        if aux_type == "F":
            start = 0
        elif aux_type == "G":
            start = nentries
        else:
            start = (nvecs - 1) * nentries
        stride = (nvecs - 1) * nentries

        fields = _aux_fields(stream, fmt)
        _skip(fields, start)
        result: list[str] = []
        for vector in range(header.nrhs):
            if vector:
                _skip(fields, stride)
            chunk = list(islice(fields, nentries))
            if len(chunk) < nentries:
                raise HBError("auxiliary vector data region is truncated")
            result.extend(_with_exponent_letter(f, fmt.flag) for f in chunk)
    return result


def _cards(fields: list[str], per_line: int) -> list[str]:
    return [
        "".join(fields[start : start + per_line])
        for start in range(0, len(fields), per_line)
    ]


def _field(value, width: int) -> str:
    text = str(value).strip()
    if len(text) > width:
        raise ValueError(f"value {text!r} does not fit in a field of width {width}")
    return text.rjust(width)


def _texts(values: Sequence | None, length: int, name: str) -> list:
    if values is None:
        raise ValueError(f"{name} is required")
    result = list(values)
    if len(result) != length:
        raise ValueError(f"{name} has {len(result)} elements; expected {length}")
    return result


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
    return text, parsed


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


def write_matrix_text(
    target,
    m: int,
    n: int,
    colptr: Sequence[int],
    rowind: Sequence[int],
    values: Sequence[str] | None = None,
    title: str = "",
    key: str = "",
    mat_type: str = "RUA",
    nrhs: int = 0,
    rhs: Sequence[str] | None = None,
    guess: Sequence[str] | None = None,
    exact: Sequence[str] | None = None,
    ptrfmt: str | None = None,
    indfmt: str | None = None,
    valfmt: str | None = None,
    rhsfmt: str | None = None,
    rhstype: str = "F",
) -> None:
    """Write a matrix whose values are given as strings in Harwell-Boeing format.

    Each value is written right-aligned in a field as wide as its format
    says. The formats must describe the strings, which are not converted.
    ``target`` is a path, a writable text stream, or ``None`` for
    standard output.
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
        data = _texts(values, nvalentries, "values")
        val_cards = _cards([_field(v, val.width) for v in data], val.per_line)

    padded_type = rhstype.ljust(3)
    rhs_text = ""
    aux_cards: list[str] = []
    if nrhs > 0:
        source_fmt = rhsfmt or val_text
        if not source_fmt:
            raise ValueError("an auxiliary vector format is required")
        rhs_text, aux = _real_format(source_fmt)
        total = nrhs * nrhsentries
        kinds = [_texts(rhs, total, "rhs")]
        if padded_type[1] == "G":
            kinds.append(_texts(guess, total, "guess"))
        if padded_type[2] == "X":
            kinds.append(_texts(exact, total, "exact"))
        for start in range(0, total, nrhsentries):
            for vectors in kinds:
                block = vectors[start : start + nrhsentries]
                aux_cards.extend(
                    _cards([_field(v, aux.width) for v in block], aux.per_line)
                )

    ptrcrd, indcrd, valcrd = len(ptr_cards), len(ind_cards), len(val_cards)
    rhscrd = len(aux_cards)
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