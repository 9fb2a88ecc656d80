"""Plan the space moves that restore stable-index order on every display."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from wm_label.index_range import IndexRange
from wm_label.labelable import LabelDialect, LabelParseError, parse_label_index
from wm_label.space import SPACE_INDEX_RANGE, Space
from wm_reorder.move_list import Move, generate_move_list

_LOGGER_NAME = "WMStableLayout.Reorder"
_LOGGER = logging.getLogger(_LOGGER_NAME)


class ReorderPlanError(RuntimeError):
    """Raised when some space labels cannot be parsed, so no order can be derived."""

    def __init__(self, failures: List[Tuple[Space, LabelParseError]]) -> None:
        details = ", ".join(f"{space.label!r}: {exc}" for space, exc in failures)
        super().__init__(f"Spaces stable index cannot be parsed: {details}")
        self.failures = failures


@dataclass(frozen=True)
class LabeledSpace:
    stable_index: int
    label: str
    space: Space = field(compare=False, repr=False)


@dataclass
class ReorderPlan:
    moves_by_display: Dict[int, List[Move[LabeledSpace]]] = field(default_factory=dict)

    @property
    def move_count(self) -> int:
        return sum(len(moves) for moves in self.moves_by_display.values())

    def label_moves(self) -> Iterator[Tuple[str, str]]:
        """Yield ``(source_label, target_label)`` pairs in application order."""
        for moves in self.moves_by_display.values():
            for move in moves:
                yield move.source.label, move.target.label


def plan_space_reorder(
    spaces: Iterable[Space],
    *,
    index_range: Optional[IndexRange] = None,
    dialect: Optional[LabelDialect] = None,
) -> ReorderPlan:
    """Compute per-display move lists that sort labeled spaces by stable index.

    Unlabeled spaces are ignored. Any unparsable label aborts planning with
    :class:`ReorderPlanError`, since moving around a broken label could scramble
    the order further.
    """

    resolved_range = index_range or SPACE_INDEX_RANGE
    resolved_dialect = dialect or LabelDialect.STRICT
    failures: List[Tuple[Space, LabelParseError]] = []
    by_display: Dict[int, List[LabeledSpace]] = {}
    for space in spaces:
        if space.label is None:
            continue
        try:
            stable_index = parse_label_index(space.label, resolved_range, dialect=resolved_dialect)
        except LabelParseError as exc:
            failures.append((space, exc))
            continue
        by_display.setdefault(space.display_index, []).append(
            LabeledSpace(stable_index=stable_index, label=space.label, space=space)
        )
    if failures:
        raise ReorderPlanError(failures)

    plan = ReorderPlan()
    for display_index, labeled in by_display.items():
        moves = generate_move_list(labeled, key=lambda item: item.stable_index)
        plan.moves_by_display[display_index] = moves
        _LOGGER.debug("Display %d needs %d space moves", display_index, len(moves))
    return plan
