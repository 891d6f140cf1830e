"""Run-manifest utilities for recording one solve run."""
from __future__ import annotations

import platform
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

from almanac.io_utils import load_json, save_json
from almanac.types import Pipeline

MANIFEST_VERSION = "1.0"


def utc_now_iso() -> str:
    """Return current UTC timestamp in ISO-8601 format."""
    return datetime.now(UTC).isoformat()


def generate_run_id(prefix: str = "almanac_solve") -> str:
    """Generate a compact run id suitable for artifact naming."""
    ts = datetime.now(UTC).strftime("%Y%m%dT%H%M%SZ")
    return f"{prefix}_{ts}_{uuid4().hex[:8]}"


def pipeline_summary(pipeline: Pipeline) -> list[dict[str, Any]]:
    """One row per stage: name and number of interval maps."""
    return [
        {"stage": stage.name, "maps": len(stage.maps)}
        for stage in pipeline.stages
    ]


def build_manifest(
    *,
    run_id: str,
    input_path: Path,
    pipeline: Pipeline,
    seed_count: int,
    answers: dict[str, int],
    timings_sec: dict[str, float],
    settings: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the manifest payload for a solve run."""
    return {
        "manifest_version": MANIFEST_VERSION,
        "created_at": utc_now_iso(),
        "run_id": run_id,
        "input": {
            "path": str(input_path),
            "seed_count": seed_count,
            "stages": pipeline_summary(pipeline),
            "labels": list(pipeline.labels),
        },
        "answers": dict(answers),
        "timings_sec": {k: float(v) for k, v in timings_sec.items()},
        "settings": dict(settings or {}),
        "host": {
            "python": platform.python_version(),
            "platform": platform.platform(),
        },
    }


def write_manifest(manifest: dict[str, Any], path: Path) -> Path:
    """Persist manifest JSON to disk."""
    save_json(manifest, path)
    return path


def load_manifest(path: Path) -> dict[str, Any]:
    """Load manifest JSON from disk."""
    payload = load_json(path)
    if not isinstance(payload, dict):
        raise ValueError(f"Manifest payload is not an object: {path}")
    return payload
