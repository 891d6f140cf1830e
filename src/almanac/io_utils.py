"""I/O utilities for puzzle input text and JSON run reports.

JSON goes through orjson; puzzle input is read as UTF-8 text.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson


def read_puzzle_text(path: Path) -> str:
    """Read a puzzle input file and return its contents as text."""
    return path.read_text(encoding="utf-8")


def load_json(path: Path) -> Any:
    """Load JSON from a file."""
    return orjson.loads(path.read_bytes())


def save_json(obj: Any, path: Path, *, pretty: bool = True) -> None:
    """Save an object as JSON, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    opts = orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS if pretty else orjson.OPT_SORT_KEYS
    path.write_bytes(orjson.dumps(obj, option=opts))
