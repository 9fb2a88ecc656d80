"""Closed integer interval used for stable index bookkeeping."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class IndexRange:
    """Inclusive ``[start, end]`` range of issuable indices.

    Index 0 is reserved, so ranges handed to the partitioner normally start at 1.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"index range must not start below 0 (got {self.start})")
        if self.end < self.start:
            raise ValueError(f"index range end {self.end} is before start {self.start}")

    def contains(self, value: int) -> bool:
        return self.start <= value <= self.end

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and self.contains(value)

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end + 1))

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __str__(self) -> str:
        return f"[{self.start}, {self.end}]"
