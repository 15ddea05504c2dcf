"""PDF preview of rendered documents."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

from pyphen import Pyphen
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import Flowable, Paragraph, SimpleDocTemplate, Spacer
from tqdm import tqdm

from ..styled_text import StyledText
from ..text import hyphenate_markup
from .pdf_markup import NBSP, leading_indent, line_alignment, line_markup, styled_to_lines
from .pdf_settings import PageSettings, build_styles

logger = logging.getLogger(__name__)

__all__ = ["PageSettings", "build_pdf", "story_for_document"]


def story_for_document(
    *,
    title: str,
    styled: StyledText,
    styles: Dict[str, ParagraphStyle],
    hyphenator: Pyphen | None = None,
) -> List[Flowable]:
    """Return flowables for one rendered document.

    Args:
        title: Caption printed above the document; skipped when empty.
        styled: Rendered document.
        styles: Style map from :func:`build_styles`.
        hyphenator: Optional hyphenation dictionary.
    Returns:
        One paragraph per line; blank lines become spacers.
    """

    story: List[Flowable] = []
    if title:
        story.append(Paragraph(title, styles["title"]))
    for runs in styled_to_lines(styled):
        indent, rest = leading_indent(runs)
        if not rest:
            story.append(Spacer(1, styles["body"].leading))
            continue
        markup = line_markup(rest)
        if hyphenator is not None:
            markup = hyphenate_markup(markup, hyphenator)
        story.append(Paragraph(NBSP * indent + markup, styles[line_alignment(rest)]))
    return story


def _build_doc(*, output_path: Path, settings: PageSettings) -> SimpleDocTemplate:
    """Return a document template sized from ``settings``."""

    return SimpleDocTemplate(
        str(output_path),
        pagesize=(settings.page_width, settings.page_height),
        leftMargin=settings.margin_left,
        rightMargin=settings.margin_right,
        topMargin=settings.margin_top,
        bottomMargin=settings.margin_bottom,
    )


def build_pdf(
    *,
    documents: Sequence[Tuple[str, StyledText]],
    output_path: Path,
    settings: PageSettings | None = None,
    hyphenator: Pyphen | None = None,
) -> None:
    """Typeset rendered documents into a PDF.

    Args:
        documents: ``(title, styled)`` pairs in output order.
        output_path: Destination file for the generated PDF.
        settings: Optional ``PageSettings`` override.
        hyphenator: Optional hyphenation dictionary for long words.
    Returns:
        None. Writes the generated PDF to ``output_path``.

    Example:
        >>> build_pdf(
        ...     documents=[("01/01", StyledText.plain("In the beginning"))],
        ...     output_path=Path("output/preview.pdf"),
        ... )  # doctest: +SKIP
    """

    resolved = settings or PageSettings()
    styles = build_styles(resolved)
    story: List[Flowable] = []
    progress = (
        tqdm(total=len(documents), desc="Typesetting", unit="doc")
        if len(documents) > 1
        else None
    )
    try:
        for title, styled in documents:
            story.extend(
                story_for_document(
                    title=title, styled=styled, styles=styles, hyphenator=hyphenator
                )
            )
            if progress is not None:
                progress.update(1)
    finally:
        if progress is not None:
            progress.close()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    doc = _build_doc(output_path=output_path, settings=resolved)
    doc.build(story or [Spacer(1, 1)])
    logger.debug("Wrote %d flowables to %s", len(story), output_path)
