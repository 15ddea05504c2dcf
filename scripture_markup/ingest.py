"""
Helpers that load translation chunks from disk.

A project is laid out as ``<root>/<chapter>/<chunk>.txt`` where numeric
chunk names give the first verse of the chunk (``01.txt``, ``04.txt``).
Non-numeric names such as ``title.txt`` hold front matter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

from .models import RenderConfig

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Chunk:
    """A slice of a chapter stored in its own file.

    Attributes:
        chapter: Chapter folder name, e.g. ``01`` or ``front``.
        chunk: Chunk file stem, e.g. ``04`` or ``title``.
        text: Raw markup.
        source_path: File the markup was read from.
        expected_verse_range: Verses the chunk should contain.
    """

    chapter: str
    chunk: str
    text: str
    source_path: Path
    expected_verse_range: Tuple[int, ...] = ()

    def render_config(self, base: RenderConfig | None = None) -> RenderConfig:
        """Return ``base`` narrowed to this chunk's expected verses.

        Example:
            >>> chunk = Chunk("01", "04", "", Path("01/04.txt"), (4, 6))
            >>> chunk.render_config().expected_verse_range
            (4, 6)
        """

        base = base if base is not None else RenderConfig()
        return base.with_expected_verse_range(self.expected_verse_range)


def _sort_key(name: str) -> Tuple[int, int, str]:
    """Order numeric names numerically, ahead of everything else.

    Example:
        >>> sorted(["10", "front", "2"], key=_sort_key)
        ['2', '10', 'front']
    """

    if name.isdigit():
        return 0, int(name), name
    return 1, 0, name


def chunk_ranges(stems: List[str]) -> Dict[str, Tuple[int, ...]]:
    """Derive the expected verses of each numeric chunk in a chapter.

    Each chunk runs up to the verse before the next chunk starts; the last
    chunk only promises its first verse.

    Example:
        >>> chunk_ranges(["01", "04", "title", "09"])
        {'01': (1, 3), '04': (4, 8), '09': (9,)}
    """

    starts = sorted(
        ((int(stem), stem) for stem in stems if stem.isdigit() and int(stem) > 0),
        key=lambda item: item[0],
    )
    ranges: Dict[str, Tuple[int, ...]] = {}
    for index, (first, stem) in enumerate(starts):
        if index + 1 < len(starts):
            ranges[stem] = (first, starts[index + 1][0] - 1)
        else:
            ranges[stem] = (first,)
    return ranges


def load_chunks(root: Path) -> List[Chunk]:
    """Load every chunk under ``root`` in reading order.

    Args:
        root: Project directory holding one folder per chapter.
    Returns:
        Chunks sorted by chapter then chunk.
    Raises:
        FileNotFoundError: when ``root`` is not a directory.
    """

    if not root.is_dir():
        raise FileNotFoundError(f"Missing project directory: {root}")
    chunks: List[Chunk] = []
    chapter_dirs = sorted(
        (path for path in root.iterdir() if path.is_dir()),
        key=lambda path: _sort_key(path.name),
    )
    for chapter_dir in chapter_dirs:
        files = sorted(chapter_dir.glob("*.txt"), key=lambda path: _sort_key(path.stem))
        ranges = chunk_ranges([path.stem for path in files])
        for path in files:
            chunks.append(
                Chunk(
                    chapter=chapter_dir.name,
                    chunk=path.stem,
                    text=path.read_text(encoding="utf-8"),
                    source_path=path,
                    expected_verse_range=ranges.get(path.stem, ()),
                )
            )
    logger.debug("Loaded %d chunks from %s", len(chunks), root)
    return chunks
