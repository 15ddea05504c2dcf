"""Conversion of styled runs into ReportLab inline markup."""

from __future__ import annotations

import html as htmllib
from typing import List, Sequence
from urllib.parse import quote

from ..models import ClickableRegion, StyleAttribute
from ..styled_text import Run, StyledText

NBSP = "&nbsp;"


def styled_to_lines(styled: StyledText) -> List[List[Run]]:
    """Split styled text into lines of runs at every line break.

    Args:
        styled: Rendered document.
    Returns:
        One list of runs per line; empty lines give empty lists.

    Example:
        >>> lines = styled_to_lines(StyledText.plain("a\\n\\nb"))
        >>> [[run.text for run in line] for line in lines]
        [['a'], [], ['b']]
    """

    lines: List[List[Run]] = [[]]
    for run in styled.runs:
        parts = run.text.split("\n")
        for index, part in enumerate(parts):
            if index > 0:
                lines.append([])
            if part:
                lines[-1].append(Run(part, run.styles))
    return lines


def line_alignment(runs: Sequence[Run]) -> str:
    """Return the style key matching the alignment attributes on a line.

    Centering wins over trailing alignment when both are present.
    """

    styles = set()
    for run in runs:
        styles.update(run.styles)
    if StyleAttribute.ALIGN_CENTER in styles:
        return "center"
    if StyleAttribute.ALIGN_OPPOSITE in styles:
        return "opposite"
    return "body"


def _link_target(region: ClickableRegion) -> str:
    payload = region.payload
    label = getattr(payload, "label", None) or getattr(payload, "reference", None)
    if not label:
        label = getattr(payload, "caller", "") or str(payload)
    return f"{region.kind}:{quote(str(label))}"


def run_markup(run: Run) -> str:
    """Return ReportLab markup for a single run.

    Example:
        >>> run_markup(Run("a<b", frozenset({StyleAttribute.BOLD})))
        '<b>a&lt;b</b>'
    """

    markup = htmllib.escape(run.text, quote=False)
    if StyleAttribute.ITALIC in run.styles:
        markup = f"<i>{markup}</i>"
    if StyleAttribute.BOLD in run.styles:
        markup = f"<b>{markup}</b>"
    for style in run.styles:
        if isinstance(style, ClickableRegion):
            markup = f'<a href="{_link_target(style)}">{markup}</a>'
            break
    return markup


def leading_indent(runs: Sequence[Run]) -> tuple[int, List[Run]]:
    """Strip leading spaces from a line and return how many there were.

    Example:
        >>> count, rest = leading_indent([Run("    "), Run("  hi")])
        >>> count, [run.text for run in rest]
        (6, ['hi'])
    """

    count = 0
    remaining = list(runs)
    while remaining:
        first = remaining[0]
        stripped = first.text.lstrip(" ")
        count += len(first.text) - len(stripped)
        if stripped:
            remaining[0] = Run(stripped, first.styles)
            break
        remaining.pop(0)
    return count, remaining


def line_markup(runs: Sequence[Run]) -> str:
    """Return the inline markup for a line, without its indentation."""

    return "".join(run_markup(run) for run in runs)
