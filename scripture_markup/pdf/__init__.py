"""PDF preview of rendered scripture markup."""

from .builder import PageSettings, build_pdf, story_for_document

__all__ = ["PageSettings", "build_pdf", "story_for_document"]
