from scripture_markup import Renderer, RenderConfig, StyleAttribute, StyledText, render


BOLD = StyleAttribute.BOLD
CENTER = StyleAttribute.ALIGN_CENTER


def _runs(styled):
    return [(run.text, set(run.styles)) for run in styled.runs]


def test_heading_then_paragraph():
    out = Renderer().render('<para style="s">Intro</para><para style="p">Hello</para>')

    assert _runs(out) == [("Intro", {BOLD, CENTER}), ("\n\n    Hello\n", set())]


def test_full_paragraph_with_verse_and_note():
    source = (
        '  <para style="p"><verse number="1" style="v"/>In the\n   beginning'
        '<note caller="+" style="f"><char style="fr">1.1 </char>'
        '<char style="ft">Or, first</char></note> God</para>\n'
    )

    out = render(source)

    assert out.text == "    1In the beginning* God\n"
    assert StyleAttribute.ITALIC in out.styles_at(out.text.index("*"))


def test_stop_before_render_returns_input():
    renderer = Renderer()
    renderer.stop()

    out = renderer.render("  a  ")

    assert out.text == "  a  "
    renderer.reset()
    assert renderer.render("  a  ").text == "a"


def test_stop_during_a_pass_keeps_previous_output(monkeypatch):
    renderer = Renderer()

    def first(source, *, config, should_stop):
        return source + "1"

    def interrupted(source, *, config, should_stop):
        renderer.stop()
        assert should_stop()
        return source + "partial"

    def never_reached(source, *, config, should_stop):
        raise AssertionError("pass ran after stop")

    monkeypatch.setattr("scripture_markup.renderer.PIPELINE", (first, interrupted, never_reached))

    assert renderer.render(StyledText.plain("x")).text == "x1"


def test_per_call_config_overrides_default():
    renderer = Renderer(RenderConfig(render_verses=False))
    source = '<verse number="1" style="v"/>a'

    assert renderer.render(source).text == "a"
    assert renderer.render(source, RenderConfig()).text == "1a"


def test_suppressed_heading_still_queryable():
    source = '<para style="ms">Psalms</para><para style="p">Blessed</para>'
    config = RenderConfig(suppress_leading_major_section_headings=True)

    assert render(source, config).text == "    Blessed\n"
    assert Renderer.get_leading_major_section_heading(source).text == "Psalms"


def test_poetry_chapter():
    source = (
        '<para style="cl">Psalm 1</para>\n'
        '<para style="q1"><verse number="1" style="v"/>Blessed is the man</para>\n'
        '<para style="q2">that walketh not</para>'
    )

    out = render(source)

    assert out.text == "Psalm 1 \n  1Blessed is the man \n        that walketh not"


def test_pass_finished_before_stop_is_kept(monkeypatch):
    renderer = Renderer()

    def first(source, *, config, should_stop):
        return source + "1"

    def finished_then_stopped(source, *, config, should_stop):
        assert not should_stop()
        renderer.stop()
        return source + "2"

    def never_reached(source, *, config, should_stop):
        raise AssertionError("pass ran after stop")

    monkeypatch.setattr(
        "scripture_markup.renderer.PIPELINE", (first, finished_then_stopped, never_reached)
    )

    assert renderer.render(StyledText.plain("x")).text == "x12"


def test_no_break_space_survives_render():
    assert render("a\u00a0: b").text == "a\u00a0: b"
