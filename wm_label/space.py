"""Stable indices for spaces.

The daemon renumbers spaces whenever one is moved across displays or
reordered. The stable index lives in the space label instead, as its prefix.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ClassVar, Optional, Tuple, Type

from wm_label.index_range import IndexRange
from wm_label.labelable import (
    IndexOutOfRangeError,
    LabelDialect,
    LabelParseError,
    format_label,
    normalize_label,
    parse_label_index,
)

SPACE_INDEX_RANGE = IndexRange(1, 10)


class StableSpaceIndex(int):
    """Space index that stays the same when the space moves."""

    def __new__(cls, value: int, index_range: IndexRange = SPACE_INDEX_RANGE) -> "StableSpaceIndex":
        number = int(value)
        if not index_range.contains(number):
            raise IndexOutOfRangeError(str(value), str(value), number, index_range)
        return super().__new__(cls, number)

    def __repr__(self) -> str:
        return f"StableSpaceIndex({int(self)})"


@dataclass(slots=True)
class Space:
    """Snapshot of a daemon space; only the fields the helpers need."""

    parse_errors: ClassVar[Tuple[Type[Exception], ...]] = (LabelParseError,)

    index: int
    label: Optional[str] = None
    display_index: int = 1
    has_focus: bool = False
    is_visible: bool = False

    def __post_init__(self) -> None:
        self.label = normalize_label(self.label)

    @classmethod
    def parse_index(cls, label: str) -> StableSpaceIndex:
        """Parse with the default range and strict dialect; see :func:`space_index_parser`."""
        return StableSpaceIndex(parse_label_index(label, SPACE_INDEX_RANGE))

    @staticmethod
    def make_label(
        stable_index: int,
        description: Optional[str] = None,
        *,
        index_range: IndexRange = SPACE_INDEX_RANGE,
    ) -> str:
        return format_label(StableSpaceIndex(stable_index, index_range), description)


def space_index_parser(
    index_range: IndexRange = SPACE_INDEX_RANGE,
    dialect: LabelDialect = LabelDialect.STRICT,
) -> Callable[[str], StableSpaceIndex]:
    """Build a label parser for configured ranges, for ``partition_labelables(parse_index=...)``."""

    def _parse(label: str) -> StableSpaceIndex:
        return StableSpaceIndex(parse_label_index(label, index_range, dialect=dialect), index_range)

    return _parse
