"""Sparse matrices in compressed-column or triplet form."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

__all__ = ["CscMatrix", "flip", "unflip"]


def flip(i: int) -> int:
    """Map an index to a negative marker value and back (an involution)."""
    return -i - 2


def unflip(i: int) -> int:
    """Return the original index whether or not ``i`` is flipped."""
    return flip(i) if i < 0 else i


def _resized(values: list, size: int, fill):
    size = max(size, 1)
    if size <= len(values):
        return values[:size]
    return values + [fill] * (size - len(values))


@dataclass
class CscMatrix:
    """A sparse matrix in compressed-column (``nz == -1``) or triplet form.

    In compressed-column form ``p`` holds ``n + 1`` column pointers; in
    triplet form it holds the column index of each entry.
    """

    m: int
    n: int
    nzmax: int
    p: list[int]
    i: list[int]
    x: list[float] | None = None
    nz: int = -1
    _extra: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def allocate(
        cls, m: int, n: int, nzmax: int, values: bool = True, triplet: bool = False
    ) -> "CscMatrix":
        """Create an empty matrix with room for ``nzmax`` entries (at least 1)."""
        nzmax = max(nzmax, 1)
        return cls(
            m=m,
            n=n,
            nzmax=nzmax,
            p=[0] * (nzmax if triplet else n + 1),
            i=[0] * nzmax,
            x=[0.0] * nzmax if values else None,
            nz=0 if triplet else -1,
        )

    @classmethod
    def from_dense(cls, rows: Sequence[Sequence[float]]) -> "CscMatrix":
        """Build a compressed-column matrix from a list of rows, dropping zeros."""
        m = len(rows)
        n = len(rows[0]) if rows else 0
        if any(len(row) != n for row in rows):
            raise ValueError("all rows must have the same length")

        row_index: list[int] = []
        data: list[float] = []
        pointers = [0]
        for column in zip(*rows):
            for r, value in enumerate(column):
                if value != 0.0:
                    row_index.append(r)
                    data.append(float(value))
            pointers.append(len(row_index))
        if n == 0:
            pointers = [0]

        matrix = cls.allocate(m, n, len(data), values=True, triplet=False)
        matrix.p = pointers
        if data:
            matrix.i = row_index
            matrix.x = data
        return matrix

    def resize(self, nzmax: int) -> "CscMatrix":
        """Change the capacity; a non-positive ``nzmax`` shrinks to the entries in use."""
        if nzmax <= 0:
            nzmax = self.nz if self.is_triplet() else self.p[self.n]
        self.i = _resized(self.i, nzmax, 0)
        if self.is_triplet():
            self.p = _resized(self.p, nzmax, 0)
        if self.x is not None:
            self.x = _resized(self.x, nzmax, 0.0)
        self.nzmax = nzmax
        return self

    def is_csc(self) -> bool:
        """True when the matrix is in compressed-column form."""
        return self.nz == -1

    def is_triplet(self) -> bool:
        """True when the matrix is in triplet form."""
        return self.nz >= 0