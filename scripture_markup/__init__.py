"""
Render USX-style scripture markup into styled, clickable text.

Example:
    >>> from scripture_markup import Renderer, RenderConfig
    >>> Renderer(RenderConfig(render_verses=False)).render('<verse number="1" style="v"/>In the beginning').text
    'In the beginning'
"""

from .errors import ConfigurationError, VerseParseError
from .models import Anchor, ClickableRegion, RenderConfig, StyleAttribute
from .notes import NoteMarker, parse_note
from .renderer import Renderer, render
from .stages import get_leading_major_section_heading
from .styled_text import Run, StyledText
from .verses import VerseMarker, VerseStyle

__all__ = [
    "Anchor",
    "ClickableRegion",
    "ConfigurationError",
    "NoteMarker",
    "RenderConfig",
    "Renderer",
    "Run",
    "StyleAttribute",
    "StyledText",
    "VerseMarker",
    "VerseParseError",
    "VerseStyle",
    "get_leading_major_section_heading",
    "parse_note",
    "render",
]
