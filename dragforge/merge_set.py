"""Enumeration of the sets of labels that have to be merged."""

from __future__ import annotations

from typing import Callable, Iterable

from dragforge.connectivity_mat import ConnectivityMat


def _reduce(con: ConnectivityMat, ms: Iterable[str]) -> list[str]:
    kept: list[str] = []
    for name in ms:
        if not any(con(k, name) for k in kept):
            kept.append(name)
    return kept


def _expand(con: ConnectivityMat, mergesets: set[tuple[str, ...]],
            ms: Iterable[str], pos: int,
            excluded: Callable[[str], bool]) -> None:
    ms = list(ms)
    if pos >= len(ms):
        mergesets.add(tuple(sorted(ms)))
        return
    cur = ms[pos]
    for h in con.names:
        if not excluded(h) and con(cur, h):
            ms[pos] = h
            _expand(con, mergesets, ms, pos + 1, excluded)


def _initial(con: ConnectivityMat, centre: str,
             excluded: Callable[[str], bool]) -> list[str]:
    return [h for h in con.names if not excluded(h) and con(centre, h)]


class MergeSet:
    """Merge sets for a mask whose single pixel to label is ``x``."""

    def __init__(self, con: ConnectivityMat) -> None:
        self.con = con
        self.mergesets: set[tuple[str, ...]] = set()

    @staticmethod
    def _excluded(name: str) -> bool:
        return name == "x"

    def reduce_merge_set(self, ms: Iterable[str]) -> list[str]:
        """Drop every entry connected to an earlier kept entry."""
        return _reduce(self.con, ms)

    def expand_all_equivalences(self, ms: Iterable[str], pos: int = 0) -> None:
        """Add every merge set obtained by replacing entries from ``pos`` on
        with pixels connected to them."""
        _expand(self.con, self.mergesets, ms, pos, self._excluded)

    def build_merge_set(self) -> None:
        """Fill :attr:`mergesets` starting from the pixels connected to ``x``."""
        ms = _initial(self.con, "x", self._excluded)
        self.expand_all_equivalences(self.reduce_merge_set(ms), 0)


class MultiMergeSet:
    """Merge sets for a mask with several pixels to label."""

    def __init__(self, con: ConnectivityMat, pixel_list: Iterable[str],
                 x_pixel: str) -> None:
        self.con = con
        self.mergesets: set[tuple[str, ...]] = set()
        self.pixel_list: list[str] = list(pixel_list)
        self.x_pixel = x_pixel

    def is_in_pixel_list(self, name: str) -> bool:
        """Tell whether ``name`` is one of the pixels to be labelled."""
        return name in self.pixel_list

    def reduce_merge_set(self, ms: Iterable[str]) -> list[str]:
        """Drop every entry connected to an earlier kept entry."""
        return _reduce(self.con, ms)

    def expand_all_equivalences(self, ms: Iterable[str], pos: int = 0) -> None:
        """Add every merge set obtained by replacing entries from ``pos`` on
        with pixels connected to them."""
        _expand(self.con, self.mergesets, ms, pos, self.is_in_pixel_list)

    def build_merge_set(self) -> None:
        """Fill :attr:`mergesets` starting from the pixels connected to the centre."""
        ms = _initial(self.con, self.x_pixel, self.is_in_pixel_list)
        self.expand_all_equivalences(self.reduce_merge_set(ms), 0)