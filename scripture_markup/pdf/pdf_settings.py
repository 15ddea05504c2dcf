"""Fonts, styles, and page geometry for the PDF preview."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch


@dataclass(slots=True)
class PageSettings:
    """Geometry and font settings used by the preview builder.

    Example:
        >>> settings = PageSettings()
        >>> settings.body_width > 0
        True
    """

    page_width: float = letter[0]
    page_height: float = letter[1]
    margin_left: float = 0.9 * inch
    margin_right: float = 0.9 * inch
    margin_top: float = 0.8 * inch
    margin_bottom: float = 0.8 * inch
    font_name: str = "Times-Roman"
    font_size: float = 11.0
    leading: float = 14.0
    title_font_size: float = 9.0

    @property
    def body_width(self) -> float:
        """Return the width available for content inside margins."""

        return self.page_width - self.margin_left - self.margin_right


def build_styles(settings: PageSettings) -> Dict[str, ParagraphStyle]:
    """Create paragraph styles keyed by line alignment.

    Args:
        settings: Page settings carrying the base font.
    Returns:
        Mapping with ``body``, ``center``, ``opposite`` and ``title`` keys.

    Example:
        >>> styles = build_styles(PageSettings())
        >>> sorted(styles)
        ['body', 'center', 'opposite', 'title']
    """

    base = getSampleStyleSheet()
    body = ParagraphStyle(
        "body",
        parent=base["BodyText"],
        fontName=settings.font_name,
        fontSize=settings.font_size,
        leading=settings.leading,
        alignment=TA_LEFT,
        spaceBefore=0,
        spaceAfter=0,
    )
    center = ParagraphStyle("center", parent=body, alignment=TA_CENTER)
    opposite = ParagraphStyle("opposite", parent=body, alignment=TA_RIGHT)
    title = ParagraphStyle(
        "title",
        parent=body,
        fontSize=settings.title_font_size,
        leading=settings.title_font_size + 2,
        textColor="grey",
        spaceBefore=settings.leading,
        spaceAfter=settings.leading / 2,
    )
    return {"body": body, "center": center, "opposite": opposite, "title": title}
