"""
Whitespace normalization passes run before any tag is rendered.
"""

from __future__ import annotations

from typing import Callable, Tuple

from .models import RenderConfig
from .styled_text import StyledText
from .tags import LINE_BREAKS, TRIM, WHITESPACE, StopCheck, never_stop, rewrite


_DEFAULT_CONFIG = RenderConfig()


def trim_whitespace(
    source: StyledText | str,
    *,
    config: RenderConfig = _DEFAULT_CONFIG,
    should_stop: StopCheck = never_stop,
) -> StyledText:
    """Remove whitespace anchored at the start or end of the text.

    Example:
        >>> trim_whitespace("  a  b \\n").text
        'a  b'
    """

    return rewrite(StyledText.coerce(source), TRIM, lambda tag: (), should_stop=should_stop)


def collapse_line_breaks(
    source: StyledText | str,
    *,
    config: RenderConfig = _DEFAULT_CONFIG,
    should_stop: StopCheck = never_stop,
) -> StyledText:
    """Replace each line break, with any whitespace around it, by one space.

    Example:
        >>> collapse_line_breaks("a \\n\\n  b").text
        'a b'
    """

    return rewrite(
        StyledText.coerce(source), LINE_BREAKS, lambda tag: (" ",), should_stop=should_stop
    )


def collapse_whitespace(
    source: StyledText | str,
    *,
    config: RenderConfig = _DEFAULT_CONFIG,
    should_stop: StopCheck = never_stop,
) -> StyledText:
    """Collapse every run of whitespace into a single space.

    Example:
        >>> collapse_whitespace("a \\t  b").text
        'a b'
    """

    return rewrite(
        StyledText.coerce(source), WHITESPACE, lambda tag: (" ",), should_stop=should_stop
    )


# Line breaks collapse before generic whitespace.
NORMALIZERS: Tuple[Callable[..., StyledText], ...] = (
    trim_whitespace,
    collapse_line_breaks,
    collapse_whitespace,
)


def normalize(source: StyledText | str) -> StyledText:
    """Run all normalizers in their fixed order."""

    result = StyledText.coerce(source)
    for normalizer in NORMALIZERS:
        result = normalizer(result)
    return result
