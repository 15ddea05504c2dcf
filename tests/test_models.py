import dataclasses

import pytest

from scripture_markup.errors import ConfigurationError
from scripture_markup.models import ClickableRegion, RenderConfig


def test_defaults():
    config = RenderConfig()

    assert config.render_verses
    assert config.expected_verse_range == ()
    assert config.verse_bounds() is None
    assert not config.suppress_leading_major_section_headings
    assert not config.break_before_verses


@pytest.mark.parametrize(
    "values",
    [[1, 2, 3], [-1], [True], ["1"], [1.5], [5, 3]],
)
def test_malformed_verse_ranges_are_rejected(values):
    with pytest.raises(ConfigurationError):
        RenderConfig(expected_verse_range=values)


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        RenderConfig().with_expected_verse_range([4, 2])


def test_with_methods_return_new_configs():
    base = RenderConfig()

    changed = (
        base.with_verses_enabled(False)
        .with_expected_verse_range([2, 4])
        .with_suppressed_leading_headings(True)
        .with_break_before_verses(True)
    )

    assert base == RenderConfig()
    assert not changed.render_verses
    assert changed.verse_bounds() == (2, 4)
    assert changed.suppress_leading_major_section_headings
    assert changed.break_before_verses


def test_config_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        RenderConfig().render_verses = False


def test_handlers_do_not_affect_equality():
    with_handlers = RenderConfig().with_handlers(verse=print, note=print)

    assert with_handlers == RenderConfig()
    assert with_handlers.verse_click_handler is print


def test_from_mapping():
    config = RenderConfig.from_mapping(
        {"render_verses": False, "expected_verse_range": [3], "break_before_verses": True}
    )

    assert config == RenderConfig(
        render_verses=False, expected_verse_range=(3,), break_before_verses=True
    )


def test_from_mapping_rejects_unknown_keys():
    with pytest.raises(ConfigurationError, match="render_verse"):
        RenderConfig.from_mapping({"render_verse": True})


def test_from_mapping_rejects_scalar_range():
    with pytest.raises(ConfigurationError):
        RenderConfig.from_mapping({"expected_verse_range": 3})


def test_region_click_without_handler_is_a_no_op():
    ClickableRegion("note", "x").click()
