"""
The markup rendering pipeline.

Example:
    >>> renderer = Renderer()
    >>> out = renderer.render('<para style="s">Intro</para><para style="p">Hello</para>')
    >>> out.text
    'Intro\\n\\n    Hello\\n'
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Tuple

from .cleaning import collapse_line_breaks, collapse_whitespace, trim_whitespace
from .models import RenderConfig
from .notes import render_note
from .stages import (
    get_leading_major_section_heading,
    render_blank_line,
    render_chapter_label,
    render_major_section_heading,
    render_paragraph,
    render_poetic_line,
    render_right_aligned_poetic_line,
    render_section_heading,
    render_selah,
)
from .styled_text import StyledText
from .verses import render_verse

logger = logging.getLogger(__name__)

Stage = Callable[..., StyledText]

PIPELINE: Tuple[Stage, ...] = (
    trim_whitespace,
    collapse_line_breaks,
    collapse_whitespace,
    render_major_section_heading,
    render_section_heading,
    render_paragraph,
    render_blank_line,
    render_poetic_line,
    render_right_aligned_poetic_line,
    render_verse,
    render_note,
    render_chapter_label,
    render_selah,
)


class _StopWatch:
    """Stop check handed to one pass; remembers whether the pass gave up."""

    def __init__(self, stopped: threading.Event) -> None:
        self._stopped = stopped
        self.tripped = False

    def __call__(self) -> bool:
        if self._stopped.is_set():
            self.tripped = True
        return self.tripped


class Renderer:
    """Runs the rendering passes in order over a document.

    The renderer holds a default :class:`RenderConfig` and a stop signal.
    The signal may be set from any thread. Every pass checks it before
    each rewrite; a pass that gives up is discarded and the render returns
    the output of the last pass that ran to completion.
    """

    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config if config is not None else RenderConfig()
        self._stopped = threading.Event()

    def stop(self) -> None:
        """Ask any render in progress to stop."""

        self._stopped.set()

    def reset(self) -> None:
        """Clear the stop signal so the renderer can be used again."""

        self._stopped.clear()

    def is_stopped(self) -> bool:
        return self._stopped.is_set()

    def render(
        self, source: StyledText | str, config: RenderConfig | None = None
    ) -> StyledText:
        """Render ``source`` into styled text.

        Args:
            source: Raw markup or the styled output of an earlier render.
            config: Overrides the renderer's default configuration for this
                call only.
        Returns:
            The styled document. When stopped, the input of the interrupted
            pass is returned instead.
        """

        active = config if config is not None else self.config
        out = StyledText.coerce(source)
        for stage in PIPELINE:
            if self.is_stopped():
                logger.info("Render stopped before %s", stage.__name__)
                return out
            watch = _StopWatch(self._stopped)
            result = stage(out, config=active, should_stop=watch)
            if watch.tripped:
                logger.info("Render stopped during %s; keeping previous pass", stage.__name__)
                return out
            out = result
        return out

    get_leading_major_section_heading = staticmethod(get_leading_major_section_heading)


def render(source: StyledText | str, config: RenderConfig | None = None) -> StyledText:
    """Render ``source`` with a throwaway :class:`Renderer`."""

    return Renderer(config).render(source)
