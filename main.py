"""ASGI entrypoint for running the News Reader API with Uvicorn."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

# Ensure the src directory is on the Python path so the newsreader package can be imported
SRC_PATH = Path(__file__).resolve().parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from newsreader.api.app import app  # noqa: E402  (import after path setup)

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

__all__ = ("app",)
