"""Core value types for almanac translation: interval maps, stages, pipelines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


# Identifiers are unsigned 64-bit. Every interval end (exclusive) must stay
# within this bound so that no translated value can leave the u64 domain.
U64_MAX = 2**64 - 1
U64_LIMIT = 2**64

HalfOpenRange: TypeAlias = tuple[int, int]


def _check_u64(name: str, value: int) -> None:
    if value < 0 or value > U64_MAX:
        raise ValueError(f"{name} must be an unsigned 64-bit integer, got {value}")


@dataclass(frozen=True, slots=True)
class IntervalMap:
    """One translation rule: ``[source_start, source_start + length)`` shifted
    onto ``[dest_start, dest_start + length)``."""

    source_start: int
    dest_start: int
    length: int

    def __post_init__(self) -> None:
        _check_u64("source_start", self.source_start)
        _check_u64("dest_start", self.dest_start)
        _check_u64("length", self.length)
        if self.length <= 0:
            raise ValueError(f"length must be > 0, got {self.length}")
        if self.source_start + self.length > U64_LIMIT:
            raise ValueError(
                f"source interval overflows u64: {self.source_start} + {self.length}",
            )
        if self.dest_start + self.length > U64_LIMIT:
            raise ValueError(
                f"destination interval overflows u64: {self.dest_start} + {self.length}",
            )

    @property
    def source_end(self) -> int:
        return self.source_start + self.length

    @property
    def offset(self) -> int:
        return self.dest_start - self.source_start

    def resolve(self, value: int) -> int | None:
        """Return the translated value, or None when ``value`` is outside the source interval."""
        if self.source_start <= value < self.source_start + self.length:
            return value - self.source_start + self.dest_start
        return None


@dataclass(frozen=True, slots=True)
class Stage:
    """One category-to-category table, e.g. ``seed-to-soil``.

    Maps are kept in parse order. Overlapping maps are allowed; the first
    one that matches wins and values no map covers pass through unchanged.
    """

    source_label: str
    dest_label: str
    maps: tuple[IntervalMap, ...]

    def __post_init__(self) -> None:
        if not self.source_label or not self.dest_label:
            raise ValueError("stage labels cannot be empty")
        if not self.maps:
            raise ValueError(
                f"stage {self.name!r} must contain at least one interval map",
            )

    @property
    def name(self) -> str:
        return f"{self.source_label}-to-{self.dest_label}"

    def resolve(self, value: int) -> int:
        for interval_map in self.maps:
            mapped = interval_map.resolve(value)
            if mapped is not None:
                return mapped
        return value

    def resolve_range(self, start: int, stop: int) -> list[HalfOpenRange]:
        """Translate the half-open range ``[start, stop)`` into destination ranges.

        The range is split at every map boundary it crosses. Each map only
        claims the pieces no earlier map has claimed, which keeps the result
        identical to calling :meth:`resolve` on every member.
        """
        if stop <= start:
            return []
        pending: list[HalfOpenRange] = [(start, stop)]
        resolved: list[HalfOpenRange] = []
        for interval_map in self.maps:
            if not pending:
                break
            src_lo = interval_map.source_start
            src_hi = interval_map.source_end
            remaining: list[HalfOpenRange] = []
            for lo, hi in pending:
                overlap_lo = max(lo, src_lo)
                overlap_hi = min(hi, src_hi)
                if overlap_lo >= overlap_hi:
                    remaining.append((lo, hi))
                    continue
                shift = interval_map.offset
                resolved.append((overlap_lo + shift, overlap_hi + shift))
                if lo < overlap_lo:
                    remaining.append((lo, overlap_lo))
                if overlap_hi < hi:
                    remaining.append((overlap_hi, hi))
            pending = remaining
        # Identity fallback for whatever no map claimed.
        resolved.extend(pending)
        return resolved


@dataclass(frozen=True, slots=True)
class Pipeline:
    """Ordered chain of stages applied one after another."""

    stages: tuple[Stage, ...]

    def __post_init__(self) -> None:
        if not self.stages:
            raise ValueError("pipeline must contain at least one stage")

    def __len__(self) -> int:
        return len(self.stages)

    @property
    def labels(self) -> tuple[str, ...]:
        """Category chain as declared, e.g. ``("seed", "soil", ..., "location")``."""
        chain = [self.stages[0].source_label]
        chain.extend(stage.dest_label for stage in self.stages)
        return tuple(chain)

    def label_chain_breaks(self) -> list[tuple[Stage, Stage]]:
        """Adjacent stage pairs whose labels do not chain. Diagnostic only."""
        return [
            (left, right)
            for left, right in zip(self.stages, self.stages[1:])
            if left.dest_label != right.source_label
        ]

    def resolve(self, value: int) -> int:
        for stage in self.stages:
            value = stage.resolve(value)
        return value

    def resolve_range(self, start: int, stop: int) -> list[HalfOpenRange]:
        ranges: list[HalfOpenRange] = [(start, stop)]
        for stage in self.stages:
            ranges = [
                piece
                for lo, hi in ranges
                for piece in stage.resolve_range(lo, hi)
            ]
        return ranges


@dataclass(frozen=True, slots=True)
class SeedRange:
    """Contiguous block of seeds ``[start, start + length)``."""

    start: int
    length: int

    def __post_init__(self) -> None:
        _check_u64("start", self.start)
        _check_u64("length", self.length)
        if self.start + self.length > U64_LIMIT:
            raise ValueError(
                f"seed range overflows u64: {self.start} + {self.length}",
            )

    @property
    def stop(self) -> int:
        return self.start + self.length
