from pathlib import Path

import pytest

from scripture_markup.ingest import chunk_ranges, load_chunks
from scripture_markup.models import RenderConfig


def _write(root: Path, relative: str, text: str) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_chunk_ranges_ignore_front_matter_and_zero():
    assert chunk_ranges(["title", "00", "05", "01"]) == {"01": (1, 4), "05": (5,)}


def test_load_chunks_in_reading_order(tmp_path):
    _write(tmp_path, "10/01.txt", "ten")
    _write(tmp_path, "02/04.txt", "four")
    _write(tmp_path, "02/01.txt", "one")
    _write(tmp_path, "02/title.txt", "Chapter 2")
    _write(tmp_path, "02/notes.md", "ignored")

    chunks = load_chunks(tmp_path)

    assert [(chunk.chapter, chunk.chunk) for chunk in chunks] == [
        ("02", "01"),
        ("02", "04"),
        ("02", "title"),
        ("10", "01"),
    ]
    assert [chunk.expected_verse_range for chunk in chunks] == [(1, 3), (4,), (), (1,)]
    assert chunks[2].text == "Chapter 2"
    assert chunks[0].source_path == tmp_path / "02" / "01.txt"


def test_render_config_keeps_base_settings(tmp_path):
    _write(tmp_path, "01/03.txt", "x")
    chunk = load_chunks(tmp_path)[0]

    config = chunk.render_config(RenderConfig(render_verses=False))

    assert not config.render_verses
    assert config.expected_verse_range == (3,)


def test_missing_root_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_chunks(tmp_path / "missing")
