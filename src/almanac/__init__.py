"""Almanac seed-to-location translation: parser, pipeline and evaluator."""

from almanac.evaluator import (
    Answers,
    solve_almanac,
    solve_ranged,
    solve_seed_ranges,
    solve_single,
)
from almanac.grammar import (
    Almanac,
    AlmanacParseError,
    parse_almanac,
    parse_interval_map,
    parse_seeds,
    parse_stage,
)
from almanac.seeds import SeedShapeError, chunk_ranges, seed_ranges, singleton_ranges
from almanac.types import U64_MAX, IntervalMap, Pipeline, SeedRange, Stage

__all__ = [
    "Almanac",
    "AlmanacParseError",
    "Answers",
    "IntervalMap",
    "Pipeline",
    "SeedRange",
    "SeedShapeError",
    "Stage",
    "U64_MAX",
    "chunk_ranges",
    "parse_almanac",
    "parse_interval_map",
    "parse_seeds",
    "parse_stage",
    "seed_ranges",
    "singleton_ranges",
    "solve_almanac",
    "solve_ranged",
    "solve_seed_ranges",
    "solve_single",
]
