"""
Rewrite passes for the block and heading tag families.

Every pass takes the styled output of the previous one, scans it once from
left to right and returns a new styled buffer. A cancelled pass returns its
input untouched.
"""

from __future__ import annotations

from typing import Sequence

from .models import RenderConfig, StyleAttribute
from .styled_text import Piece, StyledText
from .tags import (
    BLANK_LINE,
    BLOCK_TAG_START,
    CHAPTER_LABEL,
    MAJOR_SECTION_HEADING,
    PARAGRAPH,
    POETIC_LINE,
    RIGHT_ALIGNED_POETIC_LINE,
    SECTION_HEADING,
    SELAH,
    VERSE_TAG_START,
    StopCheck,
    TagMatch,
    find_tags,
    never_stop,
    rewrite,
)

INDENT = "    "
LINE_BREAK = "\n"

_DEFAULT_CONFIG = RenderConfig()


def _heading(content: StyledText) -> StyledText:
    return content.with_styles(StyleAttribute.BOLD, StyleAttribute.ALIGN_CENTER)


def _opposite(content: StyledText) -> StyledText:
    return content.with_styles(StyleAttribute.ITALIC, StyleAttribute.ALIGN_OPPOSITE)


def render_major_section_heading(
    source: StyledText | str,
    *,
    config: RenderConfig = _DEFAULT_CONFIG,
    should_stop: StopCheck = never_stop,
) -> StyledText:
    """Render ``ms`` headings upper-cased, bold and centered.

    A heading that opens the buffer is dropped entirely when
    ``config.suppress_leading_major_section_headings`` is set.
    """

    def replace(tag: TagMatch) -> Sequence[Piece]:
        if config.suppress_leading_major_section_headings and tag.start == 0:
            return ()
        return _heading(tag.content.upper()), LINE_BREAK

    return rewrite(
        StyledText.coerce(source), MAJOR_SECTION_HEADING, replace, should_stop=should_stop
    )


def render_section_heading(
    source: StyledText | str,
    *,
    config: RenderConfig = _DEFAULT_CONFIG,
    should_stop: StopCheck = never_stop,
) -> StyledText:
    """Render ``s`` headings bold and centered, followed by a line break."""

    return rewrite(
        StyledText.coerce(source),
        SECTION_HEADING,
        lambda tag: (_heading(tag.content), LINE_BREAK),
        should_stop=should_stop,
    )


def render_paragraph(
    source: StyledText | str,
    *,
    config: RenderConfig = _DEFAULT_CONFIG,
    should_stop: StopCheck = never_stop,
) -> StyledText:
    """Render ``p`` paragraphs as an indented block.

    Example:
        >>> render_paragraph('a<para style="p">b</para>').text
        'a\\n    b\\n'
    """

    def replace(tag: TagMatch) -> Sequence[Piece]:
        leading = LINE_BREAK if tag.start > 0 else ""
        return leading, INDENT, tag.content, LINE_BREAK

    return rewrite(StyledText.coerce(source), PARAGRAPH, replace, should_stop=should_stop)


def render_blank_line(
    source: StyledText | str,
    *,
    config: RenderConfig = _DEFAULT_CONFIG,
    should_stop: StopCheck = never_stop,
) -> StyledText:
    """Replace each ``b`` tag with an empty line."""

    return rewrite(
        StyledText.coerce(source),
        BLANK_LINE,
        lambda tag: (LINE_BREAK * 2,),
        should_stop=should_stop,
    )


def _ends_with_line_break(text: str, index: int) -> bool:
    """Return True when the text before ``index``, spaces ignored, ends a line.

    An empty prefix counts as already broken.
    """

    cursor = index - 1
    while cursor >= 0 and text[cursor] == " ":
        cursor -= 1
    return cursor < 0 or text[cursor] == LINE_BREAK


def _breaks_before_next_block(text: str, index: int) -> bool:
    """Return True when a line break follows ``index`` ahead of a later block tag.

    The break must be preceded by something other than spaces. With no
    block tag left in the text there is no line to break towards.
    """

    line_break = text.find(LINE_BREAK, index)
    if line_break < 0 or not text[index:line_break].strip(" "):
        return False
    next_block = text.find(BLOCK_TAG_START, index)
    return next_block >= 0 and line_break < next_block


def render_poetic_line(
    source: StyledText | str,
    *,
    config: RenderConfig = _DEFAULT_CONFIG,
    should_stop: StopCheck = never_stop,
) -> StyledText:
    """Render ``qN`` poetic lines indented by N levels.

    Lines that open with a verse tag are outdented by two spaces so the
    verse number hangs in the margin. Line breaks are added around the line
    only where they would not stack on existing ones.

    Example:
        >>> render_poetic_line('x<para style="q2">sing</para>').text
        'x\\n        sing'
    """

    styled = StyledText.coerce(source)
    text = styled.text

    def replace(tag: TagMatch) -> Sequence[Piece]:
        level = int(tag.groups["level"])
        padding = INDENT * level
        if level > 0 and tag.content.text.startswith(VERSE_TAG_START):
            padding = padding[:-2]
        leading = "" if _ends_with_line_break(text, tag.start) else LINE_BREAK
        trailing = LINE_BREAK if _breaks_before_next_block(text, tag.end) else ""
        return (
            leading,
            padding,
            tag.content.with_styles(StyleAttribute.NORMAL),
            trailing,
        )

    return rewrite(styled, POETIC_LINE, replace, should_stop=should_stop)


def render_right_aligned_poetic_line(
    source: StyledText | str,
    *,
    config: RenderConfig = _DEFAULT_CONFIG,
    should_stop: StopCheck = never_stop,
) -> StyledText:
    """Render ``qr`` lines italic and aligned to the trailing edge."""

    return rewrite(
        StyledText.coerce(source),
        RIGHT_ALIGNED_POETIC_LINE,
        lambda tag: (LINE_BREAK, _opposite(tag.content)),
        should_stop=should_stop,
    )


def render_chapter_label(
    source: StyledText | str,
    *,
    config: RenderConfig = _DEFAULT_CONFIG,
    should_stop: StopCheck = never_stop,
) -> StyledText:
    """Render ``cl`` chapter labels in bold, in place."""

    return rewrite(
        StyledText.coerce(source),
        CHAPTER_LABEL,
        lambda tag: (tag.content.with_styles(StyleAttribute.BOLD),),
        should_stop=should_stop,
    )


def render_selah(
    source: StyledText | str,
    *,
    config: RenderConfig = _DEFAULT_CONFIG,
    should_stop: StopCheck = never_stop,
) -> StyledText:
    """Render ``qs`` (Selah) markers on their own trailing-aligned line."""

    return rewrite(
        StyledText.coerce(source),
        SELAH,
        lambda tag: (LINE_BREAK, _opposite(tag.content)),
        should_stop=should_stop,
    )


def get_leading_major_section_heading(source: StyledText | str) -> StyledText:
    """Return the content of a major section heading that opens ``source``.

    Only the first ``ms`` heading is considered and only when it starts at
    offset 0; anything else yields empty text. No render configuration is
    consulted.

    Example:
        >>> get_leading_major_section_heading('<para style="ms">Book One</para>rest').text
        'Book One'
        >>> get_leading_major_section_heading('x<para style="ms">Book One</para>').text
        ''
    """

    styled = StyledText.coerce(source)
    for tag in find_tags(MAJOR_SECTION_HEADING, styled):
        if tag.start == 0:
            return tag.content
        break
    return StyledText()
