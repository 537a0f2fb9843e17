from bisect import bisect_right

from dfaregex.utils import repr_range


__all__ = ('CharSet', 'MIN_CHAR', 'MAX_CHAR')


MIN_CHAR = '\0'
MAX_CHAR = '\U0010ffff'

MIN_CODE = ord(MIN_CHAR)
MAX_CODE = ord(MAX_CHAR)


def _normalize(ranges):
    """Sort code point ranges and merge the overlapping or adjacent ones."""
    merged = []
    for lo, hi in sorted(ranges):
        assert MIN_CODE <= lo <= hi <= MAX_CODE
        if merged and lo <= merged[-1][1] + 1:
            if hi > merged[-1][1]:
                merged[-1] = (merged[-1][0], hi)
        else:
            merged.append((lo, hi))
    return tuple(merged)


class CharSet:
    """
    An immutable set of characters, kept as inclusive code point ranges.

    This is the label of every non-epsilon transition. A literal is a
    set of one character.
    """

    __slots__ = ('ranges', '_starts')

    def __init__(self, ranges=()):
        """
        :type ranges: iterable[tuple[int, int]]
        """
        self.ranges = _normalize(ranges)
        self._starts = [lo for lo, _ in self.ranges]

    @classmethod
    def from_char(cls, char: str) -> 'CharSet':
        return cls.from_range(char, char)

    @classmethod
    def from_range(cls, start: str, end: str) -> 'CharSet':
        return cls([(ord(start), ord(end))])

    @classmethod
    def all(cls) -> 'CharSet':
        return cls([(MIN_CODE, MAX_CODE)])

    def __contains__(self, char: str):
        code = ord(char)
        idx = bisect_right(self._starts, code) - 1
        return idx >= 0 and code <= self.ranges[idx][1]

    def __bool__(self):
        return bool(self.ranges)

    def __eq__(self, other):
        if not isinstance(other, CharSet):
            return NotImplemented
        return self.ranges == other.ranges

    def __hash__(self):
        return hash(self.ranges)

    def __or__(self, other: 'CharSet') -> 'CharSet':
        return self.union(other)

    def union(self, other: 'CharSet') -> 'CharSet':
        return CharSet(self.ranges + other.ranges)

    def complement(self) -> 'CharSet':
        ranges = []
        start = MIN_CODE
        for lo, hi in self.ranges:
            if lo > start:
                ranges.append((start, lo - 1))
            start = hi + 1
        if start <= MAX_CODE:
            ranges.append((start, MAX_CODE))
        return CharSet(ranges)

    def get_ranges(self):
        for lo, hi in self.ranges:
            yield chr(lo), chr(hi)

    def boundaries(self):
        """Code points where membership changes: the start and one past the end of each range."""
        for lo, hi in self.ranges:
            yield lo
            yield hi + 1

    def __str__(self):
        if self.ranges == ((MIN_CODE, MAX_CODE),):
            return 'ANY'
        inverted = self.complement()
        if len(inverted.ranges) < len(self.ranges):
            return '^' + ''.join(repr_range(s, e) for s, e in inverted.get_ranges())
        return ''.join(repr_range(s, e) for s, e in self.get_ranges())

    def __repr__(self):
        return '<{cls} {ranges}>'.format(cls=self.__class__.__name__, ranges=str(self))
