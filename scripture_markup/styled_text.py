"""
Styled text: plain text with style attributes attached to runs of it.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Iterator, List, Sequence, Union

from .models import Style


@dataclass(frozen=True, slots=True)
class Run:
    """A slice of text carrying a set of styles."""

    text: str
    styles: FrozenSet[Style] = frozenset()


class StyledText:
    """An immutable sequence of runs.

    Slicing keeps the styles of every character that survives, and
    concatenation only ever appends runs, so annotations attached by an
    earlier pass are never lost.

    Example:
        >>> from scripture_markup.models import StyleAttribute
        >>> bold = StyledText.styled("Intro", StyleAttribute.BOLD)
        >>> text = bold + " and more"
        >>> text.text
        'Intro and more'
        >>> [run.text for run in text[3:8].runs]
        ['ro', ' an']
    """

    __slots__ = ("_runs", "_text", "_starts")

    def __init__(self, runs: Iterable[Run] = ()) -> None:
        merged: List[Run] = []
        for run in runs:
            if not run.text:
                continue
            if merged and merged[-1].styles == run.styles:
                merged[-1] = Run(merged[-1].text + run.text, run.styles)
            else:
                merged.append(run)
        self._runs = tuple(merged)
        self._text = "".join(run.text for run in merged)
        starts: List[int] = []
        offset = 0
        for run in merged:
            starts.append(offset)
            offset += len(run.text)
        self._starts = starts

    @classmethod
    def plain(cls, text: str) -> "StyledText":
        return cls([Run(text)])

    @classmethod
    def styled(cls, text: str, *styles: Style) -> "StyledText":
        return cls([Run(text, frozenset(styles))])

    @classmethod
    def coerce(cls, value: "StyledText | str") -> "StyledText":
        if isinstance(value, StyledText):
            return value
        return cls.plain(value)

    @property
    def text(self) -> str:
        """The plain text with all styling dropped."""

        return self._text

    @property
    def runs(self) -> Sequence[Run]:
        return self._runs

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"StyledText({list(self._runs)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, StyledText):
            return self._runs == other._runs
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._runs)

    def __iter__(self) -> Iterator[Run]:
        return iter(self._runs)

    def __add__(self, other: "StyledText | str") -> "StyledText":
        return StyledText(self._runs + StyledText.coerce(other)._runs)

    def __radd__(self, other: str) -> "StyledText":
        return StyledText.coerce(other) + self

    def __getitem__(self, key: slice) -> "StyledText":
        if not isinstance(key, slice) or key.step not in (None, 1):
            raise TypeError("StyledText only supports contiguous slices")
        start, stop, _ = key.indices(len(self._text))
        return self.subsequence(start, stop)

    def subsequence(self, start: int, stop: int) -> "StyledText":
        """Return the styled characters between two offsets."""

        if stop <= start:
            return StyledText()
        pieces: List[Run] = []
        index = max(bisect_right(self._starts, start) - 1, 0)
        while index < len(self._runs):
            run = self._runs[index]
            run_start = self._starts[index]
            if run_start >= stop:
                break
            lo = max(start - run_start, 0)
            hi = min(stop - run_start, len(run.text))
            if hi > lo:
                pieces.append(Run(run.text[lo:hi], run.styles))
            index += 1
        return StyledText(pieces)

    def with_styles(self, *styles: Style) -> "StyledText":
        """Return a copy with ``styles`` added to every run."""

        extra = frozenset(styles)
        return StyledText(Run(run.text, run.styles | extra) for run in self._runs)

    def upper(self) -> "StyledText":
        return StyledText(Run(run.text.upper(), run.styles) for run in self._runs)

    def styles_at(self, offset: int) -> FrozenSet[Style]:
        """Return the styles applied to the character at ``offset``."""

        if not 0 <= offset < len(self._text):
            raise IndexError(offset)
        return self._runs[bisect_right(self._starts, offset) - 1].styles


Piece = Union[StyledText, str]


class StyledTextBuilder:
    """Append-only accumulator used by the rewrite passes."""

    def __init__(self) -> None:
        self._runs: List[Run] = []

    def append(self, *pieces: Piece) -> "StyledTextBuilder":
        for piece in pieces:
            if isinstance(piece, StyledText):
                self._runs.extend(piece.runs)
            elif piece:
                self._runs.append(Run(piece))
        return self

    def prepend(self, piece: Piece) -> "StyledTextBuilder":
        self._runs[:0] = StyledText.coerce(piece).runs
        return self

    def build(self) -> StyledText:
        return StyledText(self._runs)
