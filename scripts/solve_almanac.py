#!/usr/bin/env python3
"""Solve an almanac puzzle input: lowest location for seeds and seed ranges.

Reads the puzzle text, parses seeds and the seed-to-location stage chain,
then reports:

* part one — lowest location over the listed seeds;
* part two — lowest location over every seed in the ``(start, length)``
  seed ranges, evaluated on a process pool.

Answers are written to stdout as JSON. Progress and timings go to stderr.

Usage:
    python3 scripts/solve_almanac.py data/05.txt

    # Brute-force part two on 8 processes, with a run manifest:
    python3 scripts/solve_almanac.py data/05.txt \
        --part 2 --strategy enumerate --workers 8 \
        --manifest runs/day05_manifest.json
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from time import perf_counter

import orjson

from almanac.evaluator import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_STRATEGY,
    STRATEGIES,
    resolve_workers,
    solve_ranged,
    solve_single,
)
from almanac.grammar import AlmanacParseError, parse_almanac
from almanac.io_utils import read_puzzle_text
from almanac.run_manifest import build_manifest, generate_run_id, write_manifest
from almanac.seeds import SeedShapeError

log = logging.getLogger("solve_almanac")


def _dump_json(obj: object) -> None:
    sys.stdout.buffer.write(orjson.dumps(obj, option=orjson.OPT_INDENT_2))
    sys.stdout.buffer.write(b"\n")


def main() -> None:
    run_id = generate_run_id()

    parser = argparse.ArgumentParser(
        description="Find the lowest location number for almanac seeds.",
    )
    parser.add_argument(
        "input",
        type=Path,
        help="Puzzle input text file",
    )
    parser.add_argument(
        "--part",
        choices=("1", "2", "both"),
        default="both",
        help="Which answer to compute (default: both)",
    )
    parser.add_argument(
        "--strategy",
        choices=STRATEGIES,
        default=DEFAULT_STRATEGY,
        help=f"Seed-range evaluation strategy (default: {DEFAULT_STRATEGY})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of worker processes (default: CPU count)",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"Seeds per work unit for --strategy enumerate (default: {DEFAULT_CHUNK_SIZE})",
    )
    parser.add_argument(
        "--manifest",
        type=Path,
        default=None,
        help="Optional path for a JSON run manifest",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging to stderr",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    if args.chunk_size <= 0:
        print("ERROR: --chunk-size must be positive.", file=sys.stderr)
        sys.exit(1)

    input_path: Path = args.input.resolve()
    if not input_path.is_file():
        print(f"ERROR: input file not found: {input_path}", file=sys.stderr)
        sys.exit(1)

    timings: dict[str, float] = {}
    answers: dict[str, int] = {}
    try:
        t0 = perf_counter()
        almanac = parse_almanac(read_puzzle_text(input_path))
        timings["parse"] = round(perf_counter() - t0, 6)
        log.info(
            "Parsed %d seeds and %d stages (%s)",
            len(almanac.seeds),
            len(almanac.pipeline),
            " -> ".join(almanac.pipeline.labels),
        )
        for left, right in almanac.pipeline.label_chain_breaks():
            log.warning(
                "Stage %s is followed by %s; labels do not chain",
                left.name, right.name,
            )

        if args.part in ("1", "both"):
            t0 = perf_counter()
            answers["part_one"] = solve_single(almanac.seeds, almanac.pipeline)
            timings["part_one"] = round(perf_counter() - t0, 6)
            log.info("Part one: %d (%.3fs)", answers["part_one"], timings["part_one"])

        if args.part in ("2", "both"):
            t0 = perf_counter()
            answers["part_two"] = solve_ranged(
                almanac.seeds,
                almanac.pipeline,
                strategy=args.strategy,
                workers=args.workers,
                chunk_size=args.chunk_size,
            )
            timings["part_two"] = round(perf_counter() - t0, 6)
            log.info("Part two: %d (%.3fs)", answers["part_two"], timings["part_two"])
    except (AlmanacParseError, SeedShapeError, OSError, UnicodeDecodeError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.manifest is not None:
        manifest = build_manifest(
            run_id=run_id,
            input_path=input_path,
            pipeline=almanac.pipeline,
            seed_count=len(almanac.seeds),
            answers=answers,
            timings_sec=timings,
            settings={
                "part": args.part,
                "strategy": args.strategy,
                "workers": resolve_workers(args.workers),
                "chunk_size": args.chunk_size,
            },
        )
        path = write_manifest(manifest, args.manifest.resolve())
        log.info("Wrote run manifest to %s", path)

    _dump_json(answers)


if __name__ == "__main__":
    main()
