"""Connectivity matrix between named pixels or blocks."""

from __future__ import annotations

import sys
from typing import Iterable, TextIO


class ConnectivityMat:
    """A symmetric matrix telling whether two named pixels are connected.

    Every pixel is connected to itself.
    """

    def __init__(self, names: Iterable[str]) -> None:
        self.names: list[str] = list(names)
        n = len(self.names)
        self.data: list[list[int]] = [[0] * n for _ in range(n)]
        self.pos: dict[str, int] = {}
        for i, name in enumerate(self.names):
            self.data[i][i] = 1
            self.pos[name] = i

    def __len__(self) -> int:
        return len(self.names)

    def __call__(self, row: str, col: str) -> bool:
        """Tell whether pixels ``row`` and ``col`` are connected."""
        return bool(self.data[self.pos[row]][self.pos[col]])

    def set(self, row: str, col: str, value: bool) -> None:
        """Set, in both directions, whether two pixels are connected."""
        r, c = self.pos[row], self.pos[col]
        self.data[r][c] = self.data[c][r] = int(bool(value))

    def header(self, i: int) -> str:
        """Name of row/column ``i``."""
        if not 0 <= i < len(self.names):
            raise IndexError(f"header index {i} out of range")
        return self.names[i]

    def display_cond_names(self, stream: TextIO | None = None) -> None:
        """Write the pixel names without separators, then a newline."""
        out = sys.stdout if stream is None else stream
        out.write("".join(self.names) + "\n")

    def display_map(self, stream: TextIO | None = None) -> None:
        """Write a tab separated table of the matrix."""
        out = sys.stdout if stream is None else stream
        out.write("".join(f"\t{name}" for name in self.names) + "\n")
        for name, row in zip(self.names, self.data):
            out.write(name + "".join(f"\t{v}" for v in row) + "\n")