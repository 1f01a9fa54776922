"""Sorted style annotations over text ranges."""

from __future__ import annotations

from bisect import bisect_left, bisect_right, insort
from typing import Callable, Iterator, List, Sequence, Tuple

from .range import PositionLike, TextPosition, TextRange

StyleEntry = Tuple[TextRange, int]


class StyleMap:
    """Keeps ``(range, style_id)`` pairs sorted by range.

    Alongside the entries the map keeps the running maximum of range ends.
    That list is sorted too, so the first entry that can still reach a
    position is found by binary search even when a long range starts early.
    """

    def __init__(self) -> None:
        self._styles: List[StyleEntry] = []
        self._reach: List[TextPosition] = []

    def __len__(self) -> int:
        return len(self._styles)

    def __iter__(self) -> Iterator[StyleEntry]:
        return iter(self._styles)

    def _reindex(self) -> None:
        reach: List[TextPosition] = []
        for span, _ in self._styles:
            reach.append(max(reach[-1], span.end) if reach else span.end)
        self._reach = reach

    def styles(self) -> Sequence[StyleEntry]:
        return tuple(self._styles)

    def clear_styles(self) -> None:
        self._styles.clear()
        self._reach.clear()

    def add_style(self, range: TextRange, style: int) -> bool:
        """Insert ``(range, style)``; returns False if it was already present."""

        entry = (range, style)
        index = bisect_left(self._styles, entry)
        if index < len(self._styles) and self._styles[index] == entry:
            return False
        insort(self._styles, entry, lo=index)
        self._reindex()
        return True

    def remove_style(self, range: TextRange, style: int) -> bool:
        entry = (range, style)
        index = bisect_left(self._styles, entry)
        if index < len(self._styles) and self._styles[index] == entry:
            del self._styles[index]
            self._reindex()
            return True
        return False

    def _first_reaching(self, pos: TextPosition) -> int:
        return bisect_left(self._reach, pos)

    def styles_at(self, pos: PositionLike) -> List[int]:
        """Style ids of every range containing ``pos``, sorted."""

        pos = TextPosition.of(pos)
        first = bisect_right(self._reach, pos)
        last = bisect_right(self._styles, pos, key=lambda entry: entry[0].start)
        found = {
            style
            for span, style in self._styles[first:last]
            if span.contains_pos(pos)
        }
        return sorted(found)

    def styles_at_range(self, range: TextRange) -> List[StyleEntry]:
        """Entries whose range intersects ``range``."""

        first = bisect_right(self._reach, range.start)
        return [
            entry
            for entry in self._styles[first:]
            if entry[0].start < range.end and entry[0].end > range.start
        ]

    def styles_after_mut(self, pos: PositionLike) -> "StyleTail":
        """Mutable view of every entry not strictly before ``pos``."""

        return StyleTail(self, self._first_reaching(TextPosition.of(pos)))

    def expand(self, inserted: TextRange) -> None:
        """Move every entry across an insertion."""

        tail = self.styles_after_mut(inserted.start)
        tail.remap(inserted.expand)

    def shrink(self, removed: TextRange) -> None:
        """Move every entry across a removal."""

        tail = self.styles_after_mut(removed.start)
        tail.remap(removed.shrink)

    def drop_contained(self, removed: TextRange) -> int:
        """Remove entries lying entirely inside ``removed``; returns the count."""

        kept = [entry for entry in self._styles if not removed.contains(entry[0])]
        dropped = len(self._styles) - len(kept)
        if dropped:
            self._styles = kept
            self._reindex()
        return dropped


class StyleTail:
    """The entries of a StyleMap from some index on, open for remapping."""

    def __init__(self, owner: StyleMap, start: int) -> None:
        self._owner = owner
        self.start = start

    def __iter__(self) -> Iterator[StyleEntry]:
        return iter(self._owner._styles[self.start :])

    def __len__(self) -> int:
        return max(len(self._owner._styles) - self.start, 0)

    def remap(self, fn: Callable[[TextRange], TextRange]) -> None:
        styles = self._owner._styles
        for index in range(self.start, len(styles)):
            span, style = styles[index]
            styles[index] = (fn(span), style)
        styles.sort()
        styles[:] = [
            entry for i, entry in enumerate(styles) if i == 0 or entry != styles[i - 1]
        ]
        self._owner._reindex()


__all__ = ["StyleEntry", "StyleMap", "StyleTail"]
