import json

from scripture_markup import cli


PARAGRAPH = '<para style="p"><verse number="1" style="v"/>Hello</para>'


def test_text_output(tmp_path, capsys):
    source = tmp_path / "chunk.txt"
    source.write_text(PARAGRAPH, encoding="utf-8")

    assert cli.main([str(source)]) == 0

    assert capsys.readouterr().out == "    1Hello\n\n"


def test_runs_output(tmp_path):
    source = tmp_path / "chunk.txt"
    source.write_text(PARAGRAPH, encoding="utf-8")
    output = tmp_path / "runs.jsonl"

    assert cli.main([str(source), "--format", "runs", "-o", str(output)]) == 0

    payloads = [json.loads(line) for line in output.read_text(encoding="utf-8").splitlines()]
    assert payloads == [
        {"text": "    ", "styles": []},
        {"text": "1", "styles": ["anchor:verse:1", "bold"]},
        {"text": "Hello\n", "styles": []},
    ]


def test_flags_and_config_file_are_merged(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"render_verses": False}), encoding="utf-8")
    args = cli._parse_args(
        ["in.txt", "--config", str(config_path), "--verse-range", "2", "4", "--break-before-verses"]
    )

    config = cli.build_config(args)

    assert not config.render_verses
    assert config.expected_verse_range == (2, 4)
    assert config.break_before_verses


def test_invalid_range_exits_with_code_2(tmp_path, capsys):
    source = tmp_path / "chunk.txt"
    source.write_text(PARAGRAPH, encoding="utf-8")

    assert cli.main([str(source), "--verse-range", "5", "3"]) == 2
    assert "Invalid configuration" in capsys.readouterr().out


def test_chunked_project(tmp_path):
    (tmp_path / "01").mkdir()
    (tmp_path / "01" / "01.txt").write_text("text one", encoding="utf-8")
    (tmp_path / "01" / "02.txt").write_text("text two", encoding="utf-8")
    output = tmp_path / "out.txt"

    assert cli.main([str(tmp_path), "--chunks", "-o", str(output)]) == 0

    assert output.read_text(encoding="utf-8") == "# 01/01\n1text one\n\n# 01/02\n2text two"


def test_pdf_output(tmp_path):
    source = tmp_path / "chunk.txt"
    source.write_text(PARAGRAPH, encoding="utf-8")
    output = tmp_path / "preview.pdf"

    assert cli.main([str(source), "--format", "pdf", "-o", str(output)]) == 0

    assert output.exists()
