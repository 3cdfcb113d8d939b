"""Reading sparse matrices and auxiliary vectors from Harwell-Boeing files.

Indices are returned zero-based. Values are read as floats; complex
matrices yield interleaved real and imaginary parts.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from itertools import islice
from typing import TextIO

from .fortran_format import IntFormat, RealFormat, parse_int_format, parse_real_format

__all__ = [
    "HBError",
    "HBHeader",
    "HBMatrix",
    "read_header",
    "read_info",
    "read_matrix",
    "read_aux",
]

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class HBError(ValueError):
    """Raised when a Harwell-Boeing file cannot be read."""


@dataclass
class HBHeader:
    """The header cards of a Harwell-Boeing file."""

    title: str
    key: str
    totcrd: int
    ptrcrd: int
    indcrd: int
    valcrd: int
    rhscrd: int
    mat_type: str
    nrow: int
    ncol: int
    nnzero: int
    neltvl: int
    ptrfmt: str
    indfmt: str
    valfmt: str
    rhsfmt: str
    rhstype: str = ""
    nrhs: int = 0
    nrhsix: int = 0

    @property
    def is_pattern(self) -> bool:
        """True when only the sparsity pattern is stored."""
        return self.mat_type.startswith("P")

    @property
    def is_complex(self) -> bool:
        """True when values are complex (interleaved real and imaginary)."""
        return self.mat_type.startswith("C")


@dataclass
class HBMatrix:
    """A matrix in compressed-column form with zero-based indices."""

    header: HBHeader
    colptr: list[int]
    rowind: list[int]
    values: list[float] | None


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _atof(text: str) -> float:
    try:
        return float(text.strip())
    except ValueError:
        match = _FLOAT_PREFIX.match(text)
        return float(match.group(1)) if match else 0.0


def _leading_ints(text: str, count: int) -> list[int]:
    """Read up to ``count`` consecutive integers; missing ones are 0."""
    values: list[int] = []
    pos = 0
    for _ in range(count):
        match = _INT_PREFIX.match(text, pos)
        if not match:
            break
        values.append(int(match.group(1)))
        pos = match.end()
    return values + [0] * (count - len(values))


def _header_line(stream: TextIO, which: str) -> str:
    line = stream.readline()
    if not line.strip():
        raise HBError(f"null (or blank) {which} line of HB file")
    return line.rstrip("\r\n")


def read_header(stream: TextIO) -> HBHeader:
    """Read the header cards from an open Harwell-Boeing text stream."""
    line = _header_line(stream, "first")
    title = line[:72].rstrip()
    key = line[72:80].rstrip()

    line = _header_line(stream, "second")
    totcrd, ptrcrd, indcrd, valcrd, rhscrd = _leading_ints(line, 5)

    line = _header_line(stream, "third")
    mat_type = line[:3].ljust(3).upper()
    nrow, ncol, nnzero, neltvl = _leading_ints(line[3:], 4)

    line = _header_line(stream, "fourth")
    ptrfmt = line[0:16].strip()
    indfmt = line[16:32].strip()
    valfmt = line[32:52].strip()
    rhsfmt = line[52:72].strip()
    if not ptrfmt or not indfmt:
        raise HBError("invalid format info, line 4 of Harwell-Boeing file")

    rhstype = ""
    nrhs = nrhsix = 0
    if rhscrd != 0:
        line = _header_line(stream, "fifth")
        rhstype = line[:3].ljust(3)
        nrhs, nrhsix = _leading_ints(line[3:], 2)

    return HBHeader(
        title=title,
        key=key,
        totcrd=totcrd,
        ptrcrd=ptrcrd,
        indcrd=indcrd,
        valcrd=valcrd,
        rhscrd=rhscrd,
        mat_type=mat_type,
        nrow=nrow,
        ncol=ncol,
        nnzero=nnzero,
        neltvl=neltvl,
        ptrfmt=ptrfmt,
        indfmt=indfmt,
        valfmt=valfmt,
        rhsfmt=rhsfmt,
        rhstype=rhstype,
        nrhs=nrhs,
        nrhsix=nrhsix,
    )


def _open(path) -> TextIO:
    try:
        return open(path, encoding="ascii", errors="replace")
    except OSError as exc:
        raise HBError(f"cannot open file: {path}") from exc


def read_info(path) -> HBHeader:
    """Return the header of the Harwell-Boeing file at ``path``."""
    with _open(path) as stream:
        return read_header(stream)


def _data_line(stream: TextIO, region: str) -> str:
    line = stream.readline()
    if not line.strip():
        raise HBError(f"null (or blank) line in {region} data region of HB file")
    return line.rstrip("\r\n")


def _insert_exponent(field: str) -> str:
    """Turn ``1.5+002`` into ``1.5E+002``; fields with a letter are left alone."""
    body = field.rstrip()
    for at in range(len(body) - 1, 0, -1):
        if body[at] in "+-":
            before = body[at - 1]
            if before.isdigit() or before == ".":
                return body[:at] + "E" + body[at:]
            break
    return body


def _real_value(field: str, flag: str) -> float:
    if flag != "F" and "E" not in field:
        field = _insert_exponent(field)
    return _atof(field)


def _check_int_format(fmt: IntFormat, region: str) -> None:
    if fmt.per_line <= 0 or fmt.width <= 0:
        raise HBError(f"unusable {region} format in HB file")


def _check_real_format(fmt: RealFormat, region: str) -> None:
    if fmt.per_line <= 0 or fmt.width <= 0:
        raise HBError(f"unusable {region} format in HB file")


def _read_indices(
    stream: TextIO, cards: int, fmt: IntFormat, limit: int, region: str
) -> list[int]:
    _check_int_format(fmt, region)
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


def _read_reals(
    stream: TextIO, cards: int, fmt: RealFormat, limit: int, region: str
) -> list[float]:
    _check_real_format(fmt, region)
    values: list[float] = []
    for _ in range(cards):
        line = _data_line(stream, region)
        if fmt.flag == "D":
            line = line.replace("D", "E")
        for k in range(fmt.per_line):
            if len(values) >= limit:
                break
            start = k * fmt.width
            values.append(_real_value(line[start : start + fmt.width], fmt.flag))
    if len(values) < limit:
        raise HBError(f"{region} data region holds {len(values)} of {limit} entries")
    return values


def read_matrix(path) -> HBMatrix:
    """Read the matrix stored in the Harwell-Boeing file at ``path``."""
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
            nentries = 2 * header.nnzero if header.is_complex else header.nnzero
            values = _read_reals(
                stream, header.valcrd, parse_real_format(header.valfmt),
                nentries, "value",
            )
    return HBMatrix(header=header, colptr=colptr, rowind=rowind, values=values)


def _aux_fields(stream: TextIO, fmt: RealFormat) -> Iterator[str]:
    """Yield the fixed-width fields of the auxiliary region, line by line."""
    maxcol = fmt.per_line * fmt.width
    for line in stream:
        if fmt.flag == "D":
            line = line.replace("D", "E")
        text = line.rstrip("\r\n")
        for col in range(0, min(maxcol, len(text)), fmt.width):
            yield text[col : col + fmt.width]


def _skip(fields: Iterator[str], count: int) -> None:
    next(islice(fields, count, count), None)


def read_aux(path, aux_type: str = "F") -> list[float]:
    """Read the auxiliary vectors of one kind, stored one after another.

    ``aux_type`` is ``"F"`` (right-hand sides), ``"G"`` (initial guesses)
    or ``"X"`` (exact solutions). All ``nrhs`` vectors are returned in
    column-major order.
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
        _check_real_format(fmt, "auxiliary")

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
        result: list[float] = []
        for _ in range(header.nrhs):
            chunk = list(islice(fields, nentries))
            if len(chunk) < nentries:
                raise HBError("auxiliary vector data region is truncated")
            result.extend(_real_value(field, fmt.flag) for field in chunk)
            _skip(fields, stride)
    return result