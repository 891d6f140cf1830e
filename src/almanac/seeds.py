"""Seed-set construction for single-seed and seed-range evaluation."""
from __future__ import annotations

from collections.abc import Iterator, Sequence

from almanac.types import SeedRange


class SeedShapeError(ValueError):
    """Raised when a seed list cannot be read as (start, length) pairs."""


def seed_ranges(seeds: Sequence[int]) -> list[SeedRange]:
    """Pair consecutive seeds as ``(start, length)`` ranges.

    Ranges are kept in input order; overlapping ranges are not merged.
    Raises SeedShapeError when the list has an odd number of entries or a
    range runs past the u64 domain.
    """
    if len(seeds) % 2 != 0:
        raise SeedShapeError(
            f"Seed list must hold (start, length) pairs, got {len(seeds)} values",
        )
    ranges: list[SeedRange] = []
    for idx in range(0, len(seeds), 2):
        try:
            ranges.append(SeedRange(start=seeds[idx], length=seeds[idx + 1]))
        except ValueError as exc:
            raise SeedShapeError(f"Invalid seed range at position {idx}: {exc}") from exc
    return ranges


def singleton_ranges(seeds: Sequence[int]) -> list[SeedRange]:
    """Express every seed as its own length-1 range."""
    return [SeedRange(start=seed, length=1) for seed in seeds]


def total_seed_count(ranges: Sequence[SeedRange]) -> int:
    return sum(r.length for r in ranges)


def chunk_ranges(
    ranges: Sequence[SeedRange],
    chunk_size: int,
) -> Iterator[tuple[int, int]]:
    """Cut ranges into half-open ``(start, stop)`` chunks of at most ``chunk_size`` seeds.

    Every seed of every range lands in exactly one chunk. Empty ranges
    produce no chunks.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be > 0, got {chunk_size}")
    for seed_range in ranges:
        lo = seed_range.start
        stop = seed_range.stop
        while lo < stop:
            hi = min(lo + chunk_size, stop)
            yield lo, hi
            lo = hi
