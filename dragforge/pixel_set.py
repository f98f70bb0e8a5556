"""Pixels with relative coordinates and the masks built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator


@dataclass(eq=False)
class Pixel:
    """A named pixel at coordinates relative to the mask centre."""

    name: str = ""
    coords: list[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.coords)

    def __getitem__(self, i: int) -> int:
        return self.coords[i]

    def __setitem__(self, i: int, value: int) -> None:
        self.coords[i] = value

    @property
    def dx(self) -> int:
        return self.coords[0]

    @property
    def dy(self) -> int:
        return self.coords[1]

    def __eq__(self, other: object) -> bool:
        """Compare coordinates only."""
        if not isinstance(other, Pixel):
            return NotImplemented
        if len(self.coords) != len(other.coords):
            raise ValueError("pixels have a different number of coordinates")
        return self.coords == other.coords

    def shift_x(self, s: int) -> None:
        """Move the pixel horizontally by ``s``."""
        self.coords[0] += s

    def serialize(self) -> dict[str, Any]:
        """Return a YAML-ready mapping; coordinates are written as strings."""
        return {"name": self.name, "coords": [str(c) for c in self.coords]}

    @classmethod
    def deserialize(cls, node: dict[str, Any]) -> "Pixel":
        """Build a pixel from a mapping produced by :meth:`serialize`."""
        return cls(str(node["name"]), [int(c) for c in node.get("coords") or []])


def chebyshev_distance(p1: Pixel, p2: Pixel) -> int:
    """Greatest coordinate difference between two pixels."""
    if len(p1) != len(p2):
        raise ValueError("pixels have a different number of coordinates")
    return max((abs(a - b) for a, b in zip(p1.coords, p2.coords)), default=0)


class PixelSet:
    """An ordered set of pixels forming a mask, with its per-axis shifts."""

    def __init__(self, pixels=(), shifts=None) -> None:
        self.pixels: list[Pixel] = list(pixels)
        if shifts is None:
            dims = len(self.pixels[0]) if self.pixels else 0
            shifts = [1] * dims
        self.shifts: list[int] = list(shifts)

    def set_shifts(self, shifts) -> None:
        """Replace the shifts; their number cannot change."""
        shifts = list(shifts)
        if len(shifts) != len(self.shifts):
            raise ValueError("'shifts' vector size cannot be changed")
        self.shifts = shifts

    @property
    def shift_x(self) -> int:
        return self.shifts[0]

    def __getitem__(self, key: int | str) -> Pixel:
        if isinstance(key, str):
            for p in self.pixels:
                if p.name == key:
                    return p
            raise KeyError(key)
        return self.pixels[key]

    def __len__(self) -> int:
        return len(self.pixels)

    def __iter__(self) -> Iterator[Pixel]:
        return iter(self.pixels)

    def serialize(self) -> dict[str, Any]:
        """Return a YAML-ready mapping of pixels and shifts."""
        return {
            "pixels": [p.serialize() for p in self.pixels],
            "shifts": [int(s) for s in self.shifts],
        }

    @classmethod
    def deserialize(cls, node: dict[str, Any]) -> "PixelSet":
        """Build a pixel set from a mapping produced by :meth:`serialize`."""
        shifts = [int(s) for s in node.get("shifts") or []]
        pixels = [Pixel.deserialize(p) for p in node.get("pixels") or []]
        return cls(pixels, shifts)