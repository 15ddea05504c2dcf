from scripture_markup.models import ClickableRegion, RenderConfig, StyleAttribute
from scripture_markup.notes import NoteMarker, parse_note, render_note


FOOTNOTE = (
    '<note caller="+" style="f"><char style="fr">1.2 </char>'
    '<char style="ft">Or, wind</char></note>'
)


def _region(styled):
    for run in styled.runs:
        for style in run.styles:
            if isinstance(style, ClickableRegion):
                return style
    return None


def test_parse_footnote():
    note = parse_note('caller="+" style="f"', '<char style="fr">1.2</char> Or, <char style="fq">wind</char>')

    assert note == NoteMarker(style="f", caller="+", reference="1.2", text="Or, wind")
    assert note.kind == "footnote"
    assert note.display_caller == "*"


def test_parse_cross_reference_keeps_explicit_caller():
    note = parse_note('style="x" caller="a"', '<char style="xo">3.4 </char><char style="xt">Gen 1.1</char>')

    assert note.kind == "cross-reference"
    assert note.reference == "3.4"
    assert note.display_caller == "a"


def test_parse_rejects_incomplete_notes():
    assert parse_note('style="f"', "text") is None
    assert parse_note('caller="+" style="zz"', "text") is None
    assert parse_note('caller="+" style="f"', '<char style="fr">1.2</char>') is None


def test_note_becomes_italic_clickable_caller():
    out = render_note(f"wind{FOOTNOTE} blew")

    assert out.text == "wind* blew"
    styles = out.styles_at(4)
    assert StyleAttribute.ITALIC in styles
    assert _region(out).payload.text == "Or, wind"


def test_malformed_note_is_left_verbatim():
    source = 'a<note style="f">lost</note>b'

    out = render_note(source)

    assert out.text == source
    assert [set(run.styles) for run in out.runs] == [set()]


def test_note_handler_receives_region():
    seen = []
    config = RenderConfig(note_click_handler=seen.append)

    _region(render_note(FOOTNOTE, config=config)).click()

    assert seen[0].kind == "note"
    assert seen[0].payload.reference == "1.2"
