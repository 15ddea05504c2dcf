import pytest

from scripture_markup.models import ClickableRegion, StyleAttribute
from scripture_markup.styled_text import Run, StyledText, StyledTextBuilder


BOLD = StyleAttribute.BOLD
ITALIC = StyleAttribute.ITALIC


def _runs(styled):
    return [(run.text, set(run.styles)) for run in styled.runs]


def test_concatenation_keeps_existing_styles():
    text = StyledText.styled("Intro", BOLD) + " plain " + StyledText.styled("end", ITALIC)

    assert text.text == "Intro plain end"
    assert _runs(text) == [("Intro", {BOLD}), (" plain ", set()), ("end", {ITALIC})]


def test_adjacent_runs_with_same_styles_merge():
    text = StyledText([Run("a", frozenset({BOLD})), Run("b", frozenset({BOLD})), Run("")])

    assert _runs(text) == [("ab", {BOLD})]


def test_slice_spanning_runs_keeps_each_character_style():
    text = StyledText.styled("abc", BOLD) + "def" + StyledText.styled("ghi", ITALIC)

    assert _runs(text[2:7]) == [("c", {BOLD}), ("def", set()), ("g", {ITALIC})]
    assert text[4:4].text == ""
    assert text[7:].text == "hi"


def test_slice_rejects_steps():
    with pytest.raises(TypeError):
        StyledText.plain("abc")[::2]


def test_with_styles_adds_to_every_run():
    text = (StyledText.styled("a", BOLD) + "b").with_styles(StyleAttribute.ALIGN_CENTER)

    assert _runs(text) == [
        ("a", {BOLD, StyleAttribute.ALIGN_CENTER}),
        ("b", {StyleAttribute.ALIGN_CENTER}),
    ]


def test_upper_keeps_styles():
    text = (StyledText.styled("ab", BOLD) + "c").upper()

    assert _runs(text) == [("AB", {BOLD}), ("C", set())]


def test_styles_at_reports_the_run_under_an_offset():
    region = ClickableRegion("verse", 1)
    text = StyledText.plain("ab") + StyledText.styled("1", BOLD, region)

    assert text.styles_at(0) == frozenset()
    assert text.styles_at(2) == frozenset({BOLD, region})
    with pytest.raises(IndexError):
        text.styles_at(3)


def test_builder_appends_and_prepends_without_losing_styles():
    builder = StyledTextBuilder()
    builder.append("b", StyledText.styled("c", ITALIC), "")
    builder.prepend(StyledText.styled("a", BOLD))

    assert _runs(builder.build()) == [("a", {BOLD}), ("b", set()), ("c", {ITALIC})]


def test_clickable_regions_compare_without_handlers():
    assert ClickableRegion("note", "x", handler=print) == ClickableRegion("note", "x")
    assert len({ClickableRegion("note", "x", handler=print), ClickableRegion("note", "x")}) == 1
