"""Fortran edit descriptors as used in Harwell-Boeing file headers.

Integer fields look like ``(8I10)``: eight values per line, each ten
characters wide. Real fields look like ``(4E20.13)``, ``(1P,4D25.16)`` or
``(5F16.8)``. A leading ``kP`` scale factor affects output only and is
dropped when parsing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = [
    "FormatError",
    "IntFormat",
    "RealFormat",
    "parse_int_format",
    "parse_real_format",
]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class FormatError(ValueError):
    """Raised when a Fortran format descriptor cannot be understood."""


def _atoi(text: str) -> int:
    """Read a leading integer the way C's ``atoi`` does; 0 if there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _between(fmt: str, start: int, stop: int, original: str) -> str:
    if start < 0 or stop < start or stop > len(fmt):
        raise FormatError(f"malformed format descriptor {original!r}")
    return fmt[start:stop]


@dataclass(frozen=True)
class IntFormat:
    """An integer field descriptor: ``per_line`` values of ``width`` characters."""

    per_line: int
    width: int

    def printf_spec(self) -> str:
        """The ``%``-style conversion that writes one field."""
        return f"%{self.width}d"

    def format(self, value: int) -> str:
        """Render one integer in this field."""
        return self.printf_spec() % value


@dataclass(frozen=True)
class RealFormat:
    """A real field descriptor with its exponent flag ``E``, ``D`` or ``F``."""

    per_line: int
    width: int
    precision: int
    flag: str

    def printf_spec(self) -> str:
        """The ``%``-style conversion that writes one field.

        ``D`` fields are written with an ``E`` exponent.
        """
        kind = "f" if self.flag == "F" else "E"
        return f"% {self.width}.{self.precision}{kind}"

    def format(self, value: float) -> str:
        """Render one real number in this field."""
        return self.printf_spec() % value


def parse_int_format(fmt: str) -> IntFormat:
    """Parse an integer descriptor such as ``(8I10)``."""
    text = fmt.upper()
    open_at = text.find("(")
    letter_at = text.find("I")
    close_at = text.find(")")
    if open_at < 0 or letter_at < 0 or close_at < 0:
        raise FormatError(f"integer format {fmt!r} not supported")
    per_line = _atoi(_between(text, open_at + 1, letter_at, fmt))
    width = _atoi(_between(text, letter_at + 1, close_at, fmt))
    return IntFormat(per_line=per_line, width=width)


def _strip_scale_factor(text: str) -> str:
    """Remove a ``kP`` (or ``kP,``) scale factor that follows the parenthesis."""
    p_at = text.find("P")
    if p_at < 0 or "(" not in text:
        return text
    cut = p_at + 1
    if cut < len(text) and text[cut] == ",":
        cut += 1
    body_at = text.find("(") + 1
    if cut <= body_at:
        return text
    text = text[:body_at] + text[cut:]
    close_at = text.find(")")
    return text[: close_at + 1] if close_at >= 0 else text


def parse_real_format(fmt: str) -> RealFormat:
    """Parse a real descriptor such as ``(4E20.13)`` or ``(1P,5D16.8)``."""
    text = fmt.upper()
    open_at = text.find("(")
    if open_at >= 0:
        text = text[open_at:]
    last_close = text.rfind(")")
    if last_close >= 0:
        text = text[: last_close + 1]
    text = _strip_scale_factor(text)

    for flag in ("E", "D", "F"):
        if flag in text:
            break
    else:
        raise FormatError(f"real format {fmt!r} not supported")

    open_at = text.find("(")
    close_at = text.find(")")
    flag_at = text.find(flag)
    if open_at < 0 or close_at < 0:
        raise FormatError(f"malformed format descriptor {fmt!r}")

    per_line = _atoi(_between(text, open_at + 1, flag_at, fmt))
    dot_at = text.find(".")
    if dot_at >= 0:
        precision = _atoi(_between(text, dot_at + 1, close_at, fmt))
        width = _atoi(_between(text, flag_at + 1, dot_at, fmt))
    else:
        precision = 0
        width = _atoi(_between(text, flag_at + 1, close_at, fmt))
    return RealFormat(per_line=per_line, width=width, precision=precision, flag=flag)