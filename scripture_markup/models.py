"""
Typed containers shared by the rendering stages.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Tuple, Union

from .errors import ConfigurationError


ClickHandler = Callable[["ClickableRegion"], None]


class StyleAttribute(Enum):
    """Presentation attributes a display layer maps to fonts and alignment."""

    BOLD = "bold"
    ITALIC = "italic"
    NORMAL = "normal"
    ALIGN_CENTER = "align-center"
    ALIGN_OPPOSITE = "align-opposite"


@dataclass(frozen=True, slots=True)
class ClickableRegion:
    """A tap target attached to a run of text.

    Attributes:
        kind: Either ``"verse"`` or ``"note"``.
        payload: The parsed marker behind the region.
        handler: Callback invoked by :meth:`click`; ignored for equality.

    Example:
        >>> seen = []
        >>> region = ClickableRegion("verse", 3, handler=seen.append)
        >>> region.click()
        >>> seen[0].payload
        3
    """

    kind: str
    payload: Any
    handler: ClickHandler | None = field(default=None, compare=False, repr=False)

    def click(self) -> None:
        """Dispatch the region to its handler, if one was configured."""

        if self.handler is not None:
            self.handler(self)


@dataclass(frozen=True, slots=True)
class Anchor:
    """A non-interactive marker tying a run of text to the object it shows.

    Two anchored spans never share a style set unless they show the same
    payload, so neighbouring verse numbers stay separate runs.

    Example:
        >>> Anchor("verse", 1) == Anchor("verse", 2)
        False
    """

    kind: str
    payload: Any


Style = Union[StyleAttribute, ClickableRegion, Anchor]


def _coerce_range(values: Iterable[int] | None) -> Tuple[int, ...]:
    """Validate and freeze an expected verse range.

    Args:
        values: Zero, one or two inclusive verse numbers.
    Returns:
        The values as a tuple.
    Raises:
        ConfigurationError: when the range is malformed.
    """

    if values is None:
        return ()
    result = tuple(values)
    if len(result) > 2:
        raise ConfigurationError(
            f"expected verse range takes at most two values, got {len(result)}"
        )
    for value in result:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"verse numbers must be integers, got {value!r}")
        if value < 0:
            raise ConfigurationError(f"verse numbers must not be negative, got {value}")
    if len(result) == 2 and result[0] > result[1]:
        raise ConfigurationError(
            f"expected verse range is inverted: {result[0]} > {result[1]}"
        )
    return result


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Settings read by a single render call.

    Attributes:
        render_verses: When False verse tags are stripped from the output.
        expected_verse_range: Empty, a single required verse, or an
            inclusive ``(min, max)`` pair.
        suppress_leading_major_section_headings: Drop a major section
            heading that starts the document.
        verse_click_handler: Makes verse numbers clickable pins.
        note_click_handler: Attached to every rendered note.
        break_before_verses: Insert a line break ahead of each verse taken
            from the document.

    Example:
        >>> RenderConfig(expected_verse_range=[3, 5]).verse_bounds()
        (3, 5)
        >>> RenderConfig(expected_verse_range=[7]).verse_bounds()
        (7, 7)
    """

    render_verses: bool = True
    expected_verse_range: Tuple[int, ...] = ()
    suppress_leading_major_section_headings: bool = False
    verse_click_handler: ClickHandler | None = field(default=None, compare=False)
    note_click_handler: ClickHandler | None = field(default=None, compare=False)
    break_before_verses: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "expected_verse_range", _coerce_range(self.expected_verse_range)
        )

    def verse_bounds(self) -> Tuple[int, int] | None:
        """Return the inclusive ``(min, max)`` verse bounds, or None."""

        if not self.expected_verse_range:
            return None
        low = self.expected_verse_range[0]
        high = self.expected_verse_range[-1]
        return low, high

    def with_verses_enabled(self, enable: bool) -> "RenderConfig":
        return replace(self, render_verses=enable)

    def with_expected_verse_range(self, values: Iterable[int] | None) -> "RenderConfig":
        return replace(self, expected_verse_range=_coerce_range(values))

    def with_suppressed_leading_headings(self, suppress: bool) -> "RenderConfig":
        return replace(self, suppress_leading_major_section_headings=suppress)

    def with_break_before_verses(self, enable: bool) -> "RenderConfig":
        return replace(self, break_before_verses=enable)

    def with_handlers(
        self,
        *,
        verse: ClickHandler | None = None,
        note: ClickHandler | None = None,
    ) -> "RenderConfig":
        """Return a copy with the given click handlers attached."""

        return replace(self, verse_click_handler=verse, note_click_handler=note)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RenderConfig":
        """Build a config from JSON-style data.

        Unknown keys are rejected so that typos surface immediately.

        Example:
            >>> RenderConfig.from_mapping({"render_verses": False}).render_verses
            False
        """

        allowed = {
            "render_verses",
            "expected_verse_range",
            "suppress_leading_major_section_headings",
            "break_before_verses",
        }
        unknown = sorted(set(data) - allowed)
        if unknown:
            raise ConfigurationError(f"unknown configuration keys: {', '.join(unknown)}")
        values = data.get("expected_verse_range") or ()
        if not isinstance(values, (list, tuple)):
            raise ConfigurationError(
                f"expected_verse_range must be a list, got {values!r}"
            )
        return cls(
            render_verses=bool(data.get("render_verses", True)),
            expected_verse_range=tuple(values),
            suppress_leading_major_section_headings=bool(
                data.get("suppress_leading_major_section_headings", False)
            ),
            break_before_verses=bool(data.get("break_before_verses", False)),
        )
