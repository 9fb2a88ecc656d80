"""Minimal "move before" instruction lists for sorting a sequence in place."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, List, Optional, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Move(Generic[T]):
    """Relocate ``source`` immediately before ``target``.

    This matches the daemon's space ``--move`` semantics.
    """

    source: T
    target: T


def generate_move_list(items: Iterable[T], *, key: Optional[Callable[[T], Any]] = None) -> List[Move[T]]:
    """Return the fewest moves that sort ``items`` ascending.

    Items that are at least as large as everything before them stay put. Every
    other item is moved before the smallest preceding item that is strictly
    greater, so each item moves at most once. Equal keys never move relative to
    each other. The moves are meant to be applied in order.
    """

    values = list(items)
    if len(values) < 2:
        return []
    keys = [key(value) for value in values] if key is not None else list(values)

    moves: List[Move[T]] = []
    running_max = keys[0]
    for position in range(len(values)):
        current = keys[position]
        if current >= running_max:
            running_max = current
            continue
        # running_max precedes this item and is greater, so the candidates are never empty.
        target_position = min(
            (candidate for candidate in range(position) if keys[candidate] > current),
            key=keys.__getitem__,
        )
        moves.append(Move(source=values[position], target=values[target_position]))
    return moves


def apply_moves(
    items: Sequence[T],
    moves: Iterable[Move[T]],
    *,
    key: Optional[Callable[[T], Any]] = None,
) -> List[T]:
    """Apply ``moves`` from :func:`generate_move_list` to a copy of ``items``.

    Equal items are told apart by position: the moved one is the first match
    that sits after a strictly larger item, so a duplicate already placed in
    the sorted prefix is never picked up again. Pass the same ``key`` that
    generated the moves.
    """

    key_of = key if key is not None else (lambda value: value)
    result = list(items)
    for move in moves:
        source_key = key_of(move.source)
        source_position = None
        largest: Any = None
        for position, value in enumerate(result):
            if value == move.source and largest is not None and largest > source_key:
                source_position = position
                break
            current = key_of(value)
            if largest is None or current > largest:
                largest = current
        if source_position is None:
            raise ValueError(f"move source {move.source!r} is not out of order in the sequence")
        item = result.pop(source_position)
        try:
            target_position = result.index(move.target)
        except ValueError:
            raise ValueError(f"move target {move.target!r} is not in the sequence") from None
        result.insert(target_position, item)
    return result
