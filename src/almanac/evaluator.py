"""Evaluate seeds through a pipeline and reduce to the lowest location.

Two modes:

* single seeds (``solve_single``): every listed seed is resolved on its own.
* seed ranges (``solve_ranged``): the seed list is read as
  ``(start, length)`` pairs and every seed inside every range counts.

Range evaluation is split into independent units of work which run on a
``multiprocessing.Pool``; each unit reports its local minimum and the
partial minima are folded with ``min``. Two unit strategies exist:

* ``"enumerate"`` — brute force, each unit is a chunk of at most
  ``chunk_size`` consecutive seeds resolved one by one.
* ``"split"`` — each seed range is one unit, resolved as whole intervals
  via :meth:`Pipeline.resolve_range`. Gives the same answer as
  ``"enumerate"`` without visiting individual seeds.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from multiprocessing import Pool
from time import perf_counter
from typing import TypeAlias

from almanac.grammar import parse_almanac
from almanac.seeds import SeedShapeError, chunk_ranges, seed_ranges, total_seed_count
from almanac.types import Pipeline, SeedRange

log = logging.getLogger(__name__)

STRATEGIES: tuple[str, ...] = ("split", "enumerate")
DEFAULT_STRATEGY = "split"
DEFAULT_CHUNK_SIZE = 1_000_000

_WorkUnit: TypeAlias = tuple[Pipeline, int, int]


@dataclass(frozen=True, slots=True)
class Answers:
    """Both puzzle answers plus wall-clock timings in seconds."""

    part_one: int
    part_two: int
    timings_sec: dict[str, float]


def resolve_workers(workers: int | None) -> int:
    """Pool size: explicit value, else the machine's CPU count."""
    if workers is None:
        return os.cpu_count() or 1
    return max(1, workers)


# ---------------------------------------------------------------------------
# Work units (module level so the pool can pickle them)
# ---------------------------------------------------------------------------


def _min_over_chunk(unit: _WorkUnit) -> int:
    pipeline, start, stop = unit
    resolve = pipeline.resolve
    return min(resolve(value) for value in range(start, stop))


def _min_over_split_range(unit: _WorkUnit) -> int:
    pipeline, start, stop = unit
    return min(lo for lo, _hi in pipeline.resolve_range(start, stop))


def _reduce_min(
    func: Callable[[_WorkUnit], int],
    units: list[_WorkUnit],
    workers: int,
) -> int:
    if not units:
        raise SeedShapeError("No seeds to evaluate: every seed range is empty")
    if workers <= 1 or len(units) == 1:
        return min(func(unit) for unit in units)

    processes = min(workers, len(units))
    log.debug("Dispatching %d units to %d worker processes", len(units), processes)
    with Pool(processes=processes) as pool:
        return min(pool.imap_unordered(func, units))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def solve_single(seeds: Sequence[int], pipeline: Pipeline) -> int:
    """Lowest pipeline output over individual seeds."""
    if not seeds:
        raise ValueError("No seeds to evaluate")
    return min(pipeline.resolve(seed) for seed in seeds)


def solve_seed_ranges(
    ranges: Sequence[SeedRange],
    pipeline: Pipeline,
    *,
    strategy: str = DEFAULT_STRATEGY,
    workers: int | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Lowest pipeline output over every seed contained in ``ranges``."""
    if strategy not in STRATEGIES:
        raise ValueError(
            f"Unknown strategy {strategy!r}; expected one of {', '.join(STRATEGIES)}",
        )
    pool_size = resolve_workers(workers)
    if strategy == "enumerate":
        units = [
            (pipeline, lo, hi) for lo, hi in chunk_ranges(ranges, chunk_size)
        ]
        func = _min_over_chunk
    else:
        units = [
            (pipeline, r.start, r.stop) for r in ranges if r.length > 0
        ]
        func = _min_over_split_range

    log.debug(
        "Evaluating %d seeds in %d ranges (strategy=%s, units=%d, workers=%d)",
        total_seed_count(ranges), len(ranges), strategy, len(units), pool_size,
    )
    return _reduce_min(func, units, pool_size)


def solve_ranged(
    seeds: Sequence[int],
    pipeline: Pipeline,
    *,
    strategy: str = DEFAULT_STRATEGY,
    workers: int | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Lowest pipeline output with ``seeds`` read as ``(start, length)`` pairs.

    Raises SeedShapeError for an odd-length seed list, a range past the
    u64 domain, or ranges that are all empty.
    """
    return solve_seed_ranges(
        seed_ranges(seeds),
        pipeline,
        strategy=strategy,
        workers=workers,
        chunk_size=chunk_size,
    )


def solve_almanac(
    text: str,
    *,
    strategy: str = DEFAULT_STRATEGY,
    workers: int | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Answers:
    """Parse ``text`` once and compute both answers."""
    t0 = perf_counter()
    almanac = parse_almanac(text)
    t1 = perf_counter()
    part_one = solve_single(almanac.seeds, almanac.pipeline)
    t2 = perf_counter()
    part_two = solve_ranged(
        almanac.seeds,
        almanac.pipeline,
        strategy=strategy,
        workers=workers,
        chunk_size=chunk_size,
    )
    t3 = perf_counter()
    return Answers(
        part_one=part_one,
        part_two=part_two,
        timings_sec={
            "parse": round(t1 - t0, 6),
            "part_one": round(t2 - t1, 6),
            "part_two": round(t3 - t2, 6),
        },
    )
