"""
Command-line front end: render a markup file or a chunked project.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

from pyphen import Pyphen
from tqdm import tqdm

from .errors import ConfigurationError
from .ingest import load_chunks
from .models import Anchor, ClickableRegion, RenderConfig, Style
from .pdf.builder import build_pdf
from .renderer import Renderer
from .styled_text import StyledText

DEBUG_RENDER = os.getenv("SCRIPTURE_MARKUP_DEBUG", "0") not in {
    "",
    "0",
    "false",
    "False",
}

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return CLI arguments for the render command."""

    parser = argparse.ArgumentParser(
        description="Render USX-style scripture markup into styled text."
    )
    parser.add_argument("input", type=Path, help="Markup file, or project directory with --chunks.")
    parser.add_argument(
        "--chunks",
        action="store_true",
        help="Treat INPUT as a <chapter>/<chunk>.txt project and render every chunk.",
    )
    parser.add_argument("--no-verses", action="store_true", help="Strip verse markers from the output.")
    parser.add_argument(
        "--verse-range",
        nargs="+",
        type=int,
        metavar="N",
        help="One required verse, or an inclusive MIN MAX pair (ignored with --chunks).",
    )
    parser.add_argument(
        "--suppress-leading-headings",
        action="store_true",
        help="Drop a major section heading that opens the document.",
    )
    parser.add_argument(
        "--break-before-verses",
        action="store_true",
        help="Start every verse from the document on a new line.",
    )
    parser.add_argument("--config", type=Path, help="JSON file with render settings.")
    parser.add_argument(
        "--format",
        choices=("text", "runs", "pdf"),
        default="text",
        help="Plain text, one JSON object per styled run, or a PDF preview.",
    )
    parser.add_argument("--output", "-o", type=Path, help="Output file (required for pdf).")
    parser.add_argument("--hyphenate", action="store_true", help="Hyphenate long words in the PDF.")
    parser.add_argument("--verbose", "-v", action="store_true", default=DEBUG_RENDER)
    args = parser.parse_args(argv)
    if args.format == "pdf" and args.output is None:
        parser.error("--format pdf needs --output")
    return args


def build_config(args: argparse.Namespace) -> RenderConfig:
    """Merge the optional JSON config with command-line flags.

    Command-line flags take precedence over values from the file.
    """

    config = RenderConfig()
    if args.config is not None:
        config = RenderConfig.from_mapping(json.loads(args.config.read_text(encoding="utf-8")))
    if args.no_verses:
        config = config.with_verses_enabled(False)
    if args.verse_range:
        config = config.with_expected_verse_range(args.verse_range)
    if args.suppress_leading_headings:
        config = config.with_suppressed_leading_headings(True)
    if args.break_before_verses:
        config = config.with_break_before_verses(True)
    return config


def render_documents(
    *, args: argparse.Namespace, config: RenderConfig
) -> List[Tuple[str, StyledText]]:
    """Render the input into ``(title, styled)`` pairs."""

    renderer = Renderer(config)
    if not args.chunks:
        text = args.input.read_text(encoding="utf-8")
        return [("", renderer.render(text))]

    chunks = load_chunks(args.input)
    documents: List[Tuple[str, StyledText]] = []
    for chunk in tqdm(chunks, desc="Rendering chunks", unit="chunk", disable=len(chunks) < 2):
        styled = renderer.render(chunk.text, chunk.render_config(config))
        documents.append((f"{chunk.chapter}/{chunk.chunk}", styled))
    return documents


def describe_style(style: Style) -> str:
    """Return a short, stable name for a style.

    Example:
        >>> from scripture_markup.models import StyleAttribute
        >>> describe_style(StyleAttribute.ALIGN_CENTER)
        'align-center'
        >>> describe_style(ClickableRegion("verse", 3))
        'verse:3'
        >>> describe_style(Anchor("verse", 3))
        'anchor:verse:3'
    """

    if isinstance(style, (ClickableRegion, Anchor)):
        label = getattr(style.payload, "label", None) or getattr(
            style.payload, "display_caller", None
        )
        name = f"{style.kind}:{label if label is not None else style.payload}"
        return f"anchor:{name}" if isinstance(style, Anchor) else name
    return style.value


def runs_payload(styled: StyledText) -> List[Dict[str, object]]:
    """Return JSON-ready dictionaries, one per run."""

    return [
        {"text": run.text, "styles": sorted(describe_style(style) for style in run.styles)}
        for run in styled.runs
    ]


def _write(output: Path | None, content: str) -> None:
    if output is None:
        print(content)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING, format=LOG_FORMAT
    )
    try:
        config = build_config(args)
    except ConfigurationError as exc:
        print(f"Invalid configuration: {exc}")
        return 2

    documents = render_documents(args=args, config=config)

    if args.format == "pdf":
        hyphenator = Pyphen(lang="en_US") if args.hyphenate else None
        build_pdf(documents=documents, output_path=args.output, hyphenator=hyphenator)
        print(f"Wrote PDF to {args.output}")
    elif args.format == "runs":
        lines = []
        for title, styled in documents:
            for payload in runs_payload(styled):
                if title:
                    payload["document"] = title
                lines.append(json.dumps(payload, ensure_ascii=False))
        _write(args.output, "\n".join(lines))
    else:
        blocks = [f"# {title}\n{styled.text}" if title else styled.text for title, styled in documents]
        _write(args.output, "\n\n".join(blocks))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
