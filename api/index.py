"""Vercel serverless entrypoint."""

from __future__ import annotations

import sys
from pathlib import Path

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from villa_gallery.api.app import create_app  # noqa: E402
from villa_gallery.containers import build_container  # noqa: E402

app = create_app(build_container())

__all__ = ["app"]
