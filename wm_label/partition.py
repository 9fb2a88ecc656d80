"""Split labelable entities by label state and hand out free stable indices."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Generic, Iterable, Iterator, List, Optional, Tuple, Type, TypeVar

from wm_label.index_range import IndexRange
from wm_label.labelable import IndexOutOfRangeError, format_label, label_parse_errors

_LOGGER_NAME = "WMStableLayout.Label"
_LOGGER = logging.getLogger(_LOGGER_NAME)

T = TypeVar("T")
IndexParser = Callable[[str], int]
ParseErrors = Tuple[Type[Exception], ...]


@dataclass
class PartitionResult(Generic[T]):
    """Outcome of :func:`partition_labelables`.

    ``duplicates`` lists every entity whose index was already claimed by an
    earlier entity. Both keep the slot occupied; the list is informational.
    """

    incorrectly_labeled: List[Tuple[T, Exception]] = field(default_factory=list)
    unused_indices: List[int] = field(default_factory=list)
    needs_label: List[T] = field(default_factory=list)
    labeled: List[Tuple[T, int]] = field(default_factory=list)
    duplicates: List[Tuple[T, int]] = field(default_factory=list)

    def into_assigned_indices(self) -> "AssignedIndices[T]":
        return assign_indices(self)


@dataclass
class AssignedIndices(Generic[T]):
    assigned: List[Tuple[T, int]] = field(default_factory=list)
    # Entities that could not be labeled because no free index was left.
    leftovers: List[T] = field(default_factory=list)


def _resolve_parser(entity: object, parse_index: Optional[IndexParser]) -> IndexParser:
    if parse_index is not None:
        return parse_index
    parser = getattr(type(entity), "parse_index", None)
    if parser is None:
        raise TypeError(f"{type(entity).__name__} does not provide parse_index")
    return parser


def _resolve_errors(entity: object, parse_errors: Optional[ParseErrors]) -> ParseErrors:
    if parse_errors is not None:
        return parse_errors
    return label_parse_errors(type(entity))


def partition_labelables(
    entities: Iterable[T],
    index_range: IndexRange,
    *,
    parse_index: Optional[IndexParser] = None,
    parse_errors: Optional[ParseErrors] = None,
) -> PartitionResult[T]:
    """Partition ``entities`` into labeled, incorrectly labeled and unlabeled groups.

    Entities without a label go to ``needs_label``. A label whose parser raises
    one of ``parse_errors`` (default: the entity's declared ``parse_errors``, else
    :class:`LabelParseError`) is recorded with its error and neither consumes an
    index nor asks for a new label. Parsed indices outside ``index_range`` are
    recorded the same way. ``unused_indices`` holds the in-range indices nobody
    claimed, ascending.
    """

    result: PartitionResult[T] = PartitionResult()
    used: set[int] = set()
    for entity in entities:
        label = getattr(entity, "label", None)
        if label is None:
            result.needs_label.append(entity)
            continue
        parser = _resolve_parser(entity, parse_index)
        try:
            index = int(parser(label))
        except _resolve_errors(entity, parse_errors) as exc:
            result.incorrectly_labeled.append((entity, exc))
            continue
        if not index_range.contains(index):
            result.incorrectly_labeled.append((entity, IndexOutOfRangeError(label, str(index), index, index_range)))
            continue
        if index in used:
            result.duplicates.append((entity, index))
        used.add(index)
        result.labeled.append((entity, index))

    result.unused_indices = [index for index in index_range if index not in used]

    if result.incorrectly_labeled:
        _LOGGER.warning(
            "Detected %d entities with incorrect labels: %s",
            len(result.incorrectly_labeled),
            ", ".join(f"{getattr(entity, 'label', None)!r} ({exc})" for entity, exc in result.incorrectly_labeled),
        )
    if result.duplicates:
        _LOGGER.warning(
            "Stable indices claimed more than once: %s",
            ", ".join(str(index) for _, index in result.duplicates),
        )
    _LOGGER.debug(
        "Partitioned labelables: labeled=%d invalid=%d unlabeled=%d unused=%s",
        len(result.labeled),
        len(result.incorrectly_labeled),
        len(result.needs_label),
        result.unused_indices,
    )
    return result


def assign_indices(result: PartitionResult[T]) -> AssignedIndices[T]:
    """Pair entities needing a label with free indices, both in their original order."""

    count = min(len(result.needs_label), len(result.unused_indices))
    assigned = list(zip(result.needs_label[:count], result.unused_indices[:count]))
    leftovers = list(result.needs_label[count:])
    if leftovers:
        _LOGGER.warning("Cannot label %d entities because there are no free indices left", len(leftovers))
    return AssignedIndices(assigned=assigned, leftovers=leftovers)


def labels_for_assignment(
    assigned: AssignedIndices[T],
    description: Optional[str] = None,
) -> Iterator[Tuple[T, str]]:
    for entity, index in assigned.assigned:
        yield entity, format_label(index, description)


def find_index_conflict(
    entities: Iterable[T],
    index: int,
    *,
    exclude: Optional[T] = None,
    parse_index: Optional[IndexParser] = None,
    parse_errors: Optional[ParseErrors] = None,
) -> Optional[T]:
    """Return the first entity other than ``exclude`` whose label already holds ``index``."""

    for entity in entities:
        if exclude is not None and entity is exclude:
            continue
        label = getattr(entity, "label", None)
        if label is None:
            continue
        try:
            parsed = int(_resolve_parser(entity, parse_index)(label))
        except _resolve_errors(entity, parse_errors):
            continue
        if parsed == int(index):
            return entity
    return None
