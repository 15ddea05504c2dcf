"""
Precompiled tag patterns and the scan-and-rewrite loop shared by every pass.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Pattern, Sequence

from .styled_text import Piece, StyledText, StyledTextBuilder


StopCheck = Callable[[], bool]

VERSE_TAG_START = "<verse number"
BLOCK_TAG_START = "<para"


def never_stop() -> bool:
    return False


def para_pattern(style: str) -> Pattern[str]:
    """Return a pattern for a para tag pair, e.g. ``<para style="p">..</para>``.

    Args:
        style: Literal style key or a regular expression fragment.
    Returns:
        Compiled pattern whose ``content`` group holds the inner markup.

    Example:
        >>> para_pattern("s").search('<para style="s"> Intro</para>').group("content")
        'Intro'
    """

    return re.compile(
        rf'<para\s+style="{style}"\s*>\s*(?P<content>(?:(?!</para>).)*)</para>',
        re.DOTALL,
    )


def para_short_pattern(style: str) -> Pattern[str]:
    """Return a pattern for a self-closing para tag, e.g. ``<para style="b"/>``."""

    return re.compile(rf'<para\s+style="{style}"\s*/>', re.DOTALL)


MAJOR_SECTION_HEADING = para_pattern("ms")
SECTION_HEADING = para_pattern("s")
PARAGRAPH = para_pattern("p")
BLANK_LINE = para_short_pattern("b")
CHAPTER_LABEL = para_pattern("cl")
POETIC_LINE = para_pattern(r"q(?P<level>\d+)")
RIGHT_ALIGNED_POETIC_LINE = para_pattern("qr")
VERSE = re.compile(r'<verse\s+number="(?P<content>[^"]*)"[^>]*/>')
NOTE = re.compile(r"<note\s+(?P<attributes>[^>]*)>(?P<content>.*?)</note>", re.DOTALL)
SELAH = re.compile(r'<char\s+style="qs"\s*>(?P<content>.*?)</char>', re.DOTALL)

# ASCII whitespace only; no-break spaces in the text are kept.
TRIM = re.compile(r"\A\s+|\s+\Z", re.ASCII)
LINE_BREAKS = re.compile(r"\s*\n+\s*", re.ASCII)
WHITESPACE = re.compile(r"\s+", re.ASCII)


@dataclass(frozen=True, slots=True)
class TagMatch:
    """One occurrence of a tag in a styled buffer.

    Attributes:
        start: Offset of the first character of the tag.
        end: Offset just past the tag.
        raw: The whole tag, styles included.
        content: The captured inner content, styles included.
        groups: Any other named groups as plain strings.
    """

    start: int
    end: int
    raw: StyledText
    content: StyledText
    groups: Dict[str, str]


def find_tags(pattern: Pattern[str], source: StyledText) -> Iterator[TagMatch]:
    """Yield every match of ``pattern`` in ``source``, left to right."""

    for match in pattern.finditer(source.text):
        if "content" in pattern.groupindex and match.start("content") >= 0:
            content = source.subsequence(match.start("content"), match.end("content"))
        else:
            content = StyledText()
        groups = {
            name: value
            for name, value in match.groupdict().items()
            if name != "content" and value is not None
        }
        yield TagMatch(
            start=match.start(),
            end=match.end(),
            raw=source.subsequence(match.start(), match.end()),
            content=content,
            groups=groups,
        )


class ScanCancelled(Exception):
    """Raised inside a scan when the stop signal was observed."""


Replacement = Callable[[TagMatch], Sequence[Piece]]


def scan(
    source: StyledText,
    pattern: Pattern[str],
    replace: Replacement,
    *,
    should_stop: StopCheck = never_stop,
) -> StyledText:
    """Rewrite every match of ``pattern`` with the pieces ``replace`` returns.

    Text between matches is copied over with its styles intact.

    Raises:
        ScanCancelled: when ``should_stop`` reports True before a match is
            rewritten.
    """

    builder = StyledTextBuilder()
    last_index = 0
    for tag in find_tags(pattern, source):
        if should_stop():
            raise ScanCancelled(pattern.pattern)
        builder.append(source.subsequence(last_index, tag.start))
        builder.append(*replace(tag))
        last_index = tag.end
    builder.append(source.subsequence(last_index, len(source)))
    return builder.build()


def rewrite(
    source: StyledText,
    pattern: Pattern[str],
    replace: Replacement,
    *,
    should_stop: StopCheck = never_stop,
) -> StyledText:
    """Like :func:`scan`, but a cancelled pass returns ``source`` unchanged.

    Example:
        >>> out = rewrite(StyledText.plain("a  b"), WHITESPACE, lambda tag: [" "])
        >>> out.text
        'a b'
    """

    try:
        return scan(source, pattern, replace, should_stop=should_stop)
    except ScanCancelled:
        return source
