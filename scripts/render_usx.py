"""
Render a markup file or a chunked translation project.

Run directly:
    python scripts/render_usx.py chapter.usx --format runs
    python scripts/render_usx.py project/ --chunks --format pdf -o output/preview.pdf
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from scripture_markup.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
