"""
Footnote and cross-reference notes.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Sequence

from bs4 import BeautifulSoup

from .models import ClickableRegion, ClickHandler, RenderConfig, StyleAttribute
from .styled_text import Piece, StyledText
from .tags import NOTE, StopCheck, TagMatch, never_stop, rewrite

logger = logging.getLogger(__name__)

_NOTE_KINDS = {
    "f": "footnote",
    "fe": "endnote",
    "x": "cross-reference",
}
_REFERENCE_STYLES = {"fr", "xo"}
_AUTOMATIC_CALLERS = {"+", "-"}
_SPACES = re.compile(r"\s+")

_DEFAULT_CONFIG = RenderConfig()


def _squash(value: str) -> str:
    return _SPACES.sub(" ", value).strip()


@dataclass(frozen=True, slots=True)
class NoteMarker:
    """A parsed note.

    Attributes:
        style: USX note style (``f``, ``fe`` or ``x``).
        caller: The caller attribute; ``+`` asks for an automatic one.
        reference: Origin reference such as ``1.2``, if the note has one.
        text: Visible note text with markup removed.
    """

    style: str
    caller: str
    reference: str
    text: str

    @property
    def kind(self) -> str:
        return _NOTE_KINDS[self.style]

    @property
    def display_caller(self) -> str:
        return "*" if self.caller in _AUTOMATIC_CALLERS else self.caller


def parse_note(attributes: str, body: str) -> NoteMarker | None:
    """Parse a note tag's attributes and body.

    Args:
        attributes: Raw attribute text of the opening ``<note>`` tag.
        body: Markup between the opening and closing tags.
    Returns:
        NoteMarker, or None when the note lacks a known style, a caller or
        any visible text.

    Example:
        >>> parse_note('caller="+" style="f"', '<char style="fr">1.2 </char><char style="ft">Or, wind</char>')
        NoteMarker(style='f', caller='+', reference='1.2', text='Or, wind')
        >>> parse_note('style="f"', 'no caller') is None
        True
    """

    soup = BeautifulSoup(f"<note {attributes}>{body}</note>", "html.parser")
    note = soup.find("note")
    if note is None:
        return None
    style = note.get("style")
    caller = note.get("caller")
    if style not in _NOTE_KINDS or not caller:
        return None

    reference = ""
    for char in note.find_all("char"):
        if char.get("style") in _REFERENCE_STYLES:
            if not reference:
                reference = _squash(char.get_text())
            char.decompose()
    text = _squash(note.get_text())
    if not text:
        return None
    return NoteMarker(style=style, caller=caller.strip(), reference=reference, text=text)


def render_note_marker(note: NoteMarker, handler: ClickHandler | None = None) -> StyledText:
    """Return the clickable span shown in place of a note."""

    region = ClickableRegion("note", note, handler=handler)
    return StyledText.styled(note.display_caller, StyleAttribute.ITALIC, region)


def render_note(
    source: StyledText | str,
    *,
    config: RenderConfig = _DEFAULT_CONFIG,
    should_stop: StopCheck = never_stop,
) -> StyledText:
    """Replace parsable notes with clickable callers.

    A note that cannot be parsed stays in the output exactly as written.
    """

    def replace(tag: TagMatch) -> Sequence[Piece]:
        note = parse_note(tag.groups.get("attributes", ""), tag.content.text)
        if note is None:
            logger.debug("Leaving unparsable note as text: %r", tag.raw.text)
            return (tag.raw,)
        return (render_note_marker(note, config.note_click_handler),)

    return rewrite(StyledText.coerce(source), NOTE, replace, should_stop=should_stop)
