"""
Verse markers and the verse rendering pass.

The pass guarantees that a rendered chunk exposes each verse number at most
once, drops verses outside the expected range and synthesizes markers for
expected verses the document never mentions.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Set

from .errors import VerseParseError
from .models import Anchor, ClickableRegion, ClickHandler, RenderConfig, StyleAttribute
from .styled_text import Piece, StyledText, StyledTextBuilder
from .tags import VERSE, ScanCancelled, StopCheck, TagMatch, never_stop, scan

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"^\s*(\d+)(?:\s*-\s*(\d+))?\s*$")

_DEFAULT_CONFIG = RenderConfig()


@dataclass(frozen=True, slots=True)
class VerseMarker:
    """A single verse or an inclusive range of verses.

    Attributes:
        start: First verse number.
        end: Last verse number; equal to ``start`` for a single verse.

    Example:
        >>> VerseMarker.parse("4-6").label
        '4-6'
        >>> sorted(VerseMarker.parse("4-6").verses())
        [4, 5, 6]
    """

    start: int
    end: int

    @classmethod
    def parse(cls, content: str) -> "VerseMarker":
        """Read a verse tag's number attribute.

        Raises:
            VerseParseError: when the content is not ``N`` or ``N-M`` with
                ``M >= N``.
        """

        match = _NUMBER_RE.match(content)
        if not match:
            raise VerseParseError(f"malformed verse number {content!r}")
        start = int(match.group(1))
        end = int(match.group(2)) if match.group(2) else start
        if end < start:
            raise VerseParseError(f"verse range runs backwards: {content!r}")
        return cls(start=start, end=end)

    @classmethod
    def for_verse(cls, number: int) -> "VerseMarker":
        return cls(start=number, end=number)

    @property
    def is_range(self) -> bool:
        return self.end > self.start

    @property
    def label(self) -> str:
        if self.is_range:
            return f"{self.start}-{self.end}"
        return str(self.start)

    def verses(self) -> Set[int]:
        return set(range(self.start, self.end + 1))


class VerseStyle(Enum):
    """How a verse marker is shown."""

    PLAIN = "plain"
    PIN = "pin"

    @classmethod
    def for_handler(cls, handler: ClickHandler | None) -> "VerseStyle":
        return cls.PLAIN if handler is None else cls.PIN


def render_verse_marker(
    marker: VerseMarker,
    style: VerseStyle,
    handler: ClickHandler | None = None,
) -> StyledText:
    """Return the styled span for a verse marker.

    Plain markers carry an :class:`Anchor` in place of a clickable region.

    Example:
        >>> span = render_verse_marker(VerseMarker.for_verse(3), VerseStyle.PLAIN)
        >>> span.text, Anchor("verse", VerseMarker(3, 3)) in span.runs[0].styles
        ('3', True)
    """

    if style is VerseStyle.PIN:
        region = ClickableRegion("verse", marker, handler=handler)
        return StyledText.styled(marker.label, StyleAttribute.BOLD, region)
    return StyledText.styled(marker.label, StyleAttribute.BOLD, Anchor("verse", marker))


def _in_bounds(marker: VerseMarker, config: RenderConfig) -> bool:
    bounds = config.verse_bounds()
    if bounds is None:
        return True
    low, high = bounds
    return low <= marker.start <= high and low <= marker.end <= high


def _missing_verses(found: Set[int], config: RenderConfig) -> List[int]:
    """Return expected verses never seen, in descending order."""

    expected = config.expected_verse_range
    if len(expected) == 1:
        candidates = [expected[0]]
    elif len(expected) == 2:
        candidates = list(range(expected[1], expected[0] - 1, -1))
    else:
        candidates = []
    return [number for number in candidates if number not in found]


def render_verse(
    source: StyledText | str,
    *,
    config: RenderConfig = _DEFAULT_CONFIG,
    should_stop: StopCheck = never_stop,
) -> StyledText:
    """Render verse tags, dropping duplicates and out-of-range verses.

    Expected verses that never appear are prepended in ascending order.

    Example:
        >>> out = render_verse('<verse number="2" style="v"/>b', config=RenderConfig(expected_verse_range=(1, 2)))
        >>> out.text
        '12b'
    """

    styled = StyledText.coerce(source)
    handler = config.verse_click_handler
    style = VerseStyle.for_handler(handler)
    found: Set[int] = set()

    def replace(tag: TagMatch) -> Sequence[Piece]:
        if not config.render_verses:
            return ()
        try:
            marker = VerseMarker.parse(tag.content.text)
        except VerseParseError as exc:
            logger.warning("Keeping unparsable verse tag %r: %s", tag.raw.text, exc)
            return (tag.raw,)
        covered = marker.verses()
        if covered & found:
            logger.debug("Dropping duplicate verse %s", marker.label)
            return ()
        found.update(covered)
        if not _in_bounds(marker, config):
            logger.debug(
                "Dropping verse %s outside %s", marker.label, config.expected_verse_range
            )
            return ()
        span = render_verse_marker(marker, style, handler)
        if config.break_before_verses:
            return "\n", span
        return (span,)

    try:
        out = scan(styled, VERSE, replace, should_stop=should_stop)
    except ScanCancelled:
        return styled

    if not config.render_verses:
        return out
    builder = StyledTextBuilder().append(out)
    for number in _missing_verses(found, config):
        logger.debug("Synthesizing missing verse %d", number)
        builder.prepend(render_verse_marker(VerseMarker.for_verse(number), style, handler))
    return builder.build()
