from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple, Type

import pytest

from wm_label.index_range import IndexRange
from wm_label.labelable import (
    IndexOutOfRangeError,
    Labelable,
    LabelParseError,
    MissingSeparatorError,
    label_parse_errors,
    parse_label_index,
)
from wm_label.partition import (
    AssignedIndices,
    PartitionResult,
    assign_indices,
    find_index_conflict,
    labels_for_assignment,
    partition_labelables,
)

RANGE = IndexRange(1, 6)


@dataclass
class _Item:
    ident: int
    label: Optional[str] = None

    @classmethod
    def parse_index(cls, label: str) -> int:
        return parse_label_index(label, RANGE)


@dataclass
class _IntItem:
    """Labels are bare integers; a bad label raises a plain ``ValueError``."""

    parse_errors: ClassVar[Tuple[Type[Exception], ...]] = (ValueError,)

    ident: int
    label: Optional[str] = None

    @classmethod
    def parse_index(cls, label: str) -> int:
        return int(label)


def test_items_satisfy_labelable_protocol():
    assert isinstance(_Item(1), Labelable)


def test_partitions_items():
    items = [
        _Item(1, "1:"),
        _Item(2, "2: code"),
        _Item(3),
        _Item(4),
        _Item(5, "invalid"),
    ]

    result = partition_labelables(items, RANGE)

    assert result.needs_label == [_Item(3), _Item(4)]
    assert result.unused_indices == [3, 4, 5, 6]
    assert len(result.incorrectly_labeled) == 1
    entity, error = result.incorrectly_labeled[0]
    assert entity == _Item(5, "invalid")
    assert isinstance(error, MissingSeparatorError)
    assert [index for _, index in result.labeled] == [1, 2]
    assert result.duplicates == []


def test_out_of_range_labels_do_not_consume_indices():
    result = partition_labelables([_Item(1, "9: far")], RANGE)
    assert result.unused_indices == [1, 2, 3, 4, 5, 6]
    assert result.needs_label == []
    assert len(result.incorrectly_labeled) == 1


def test_duplicates_are_reported_without_changing_partition(caplog):
    items = [_Item(1, "2:"), _Item(2, "2: again"), _Item(3)]
    with caplog.at_level(logging.WARNING, logger="WMStableLayout.Label"):
        result = partition_labelables(items, RANGE)

    assert result.unused_indices == [1, 3, 4, 5, 6]
    assert result.duplicates == [(_Item(2, "2: again"), 2)]
    assert result.incorrectly_labeled == []
    assert result.needs_label == [_Item(3)]
    assert "claimed more than once" in caplog.text


def test_explicit_parser_overrides_entity_parser():
    def _whole_label(label: str) -> int:
        return int(label)

    result = partition_labelables([_Item(1, "4")], RANGE, parse_index=_whole_label)
    assert result.unused_indices == [1, 2, 3, 5, 6]


def test_entity_without_parser_raises():
    class _NoParser:
        label = "1:"

    with pytest.raises(TypeError):
        partition_labelables([_NoParser()], RANGE)


def test_incorrect_labels_are_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="WMStableLayout.Label"):
        partition_labelables([_Item(1, "oops")], RANGE)
    assert "1 entities with incorrect labels" in caplog.text


def test_assign_indices_for_all_items():
    result = PartitionResult(unused_indices=[4, 5, 6], needs_label=[_Item(3), _Item(7)])

    assigned = assign_indices(result)

    assert assigned == AssignedIndices(assigned=[(_Item(3), 4), (_Item(7), 5)], leftovers=[])


def test_assign_indices_when_more_items_than_indices(caplog):
    result = PartitionResult(unused_indices=[6], needs_label=[_Item(3), _Item(4), _Item(5)])

    with caplog.at_level(logging.WARNING, logger="WMStableLayout.Label"):
        assigned = result.into_assigned_indices()

    assert assigned.assigned == [(_Item(3), 6)]
    assert assigned.leftovers == [_Item(4), _Item(5)]
    assert "Cannot label 2 entities" in caplog.text


def test_assign_indices_with_nothing_to_label():
    assigned = assign_indices(PartitionResult(unused_indices=[1, 2]))
    assert assigned.assigned == []
    assert assigned.leftovers == []


def test_labels_for_assignment_formats_labels():
    assigned = AssignedIndices(assigned=[(_Item(3), 4), (_Item(7), 5)])
    assert list(labels_for_assignment(assigned)) == [(_Item(3), "4:"), (_Item(7), "5:")]
    assert list(labels_for_assignment(assigned, "web"))[0][1] == "4: web"


def test_find_index_conflict():
    active = _Item(1, "3: current")
    other = _Item(2, "3: other")
    broken = _Item(3, "broken")
    items = [active, broken, other, _Item(4)]

    assert find_index_conflict(items, 3, exclude=active) is other
    assert find_index_conflict(items, 5) is None
    assert find_index_conflict([active], 3, exclude=active) is None


def test_parse_errors_carry_the_label():
    result = partition_labelables([_Item(1, "x: y")], RANGE)
    _, error = result.incorrectly_labeled[0]
    assert isinstance(error, LabelParseError)
    assert error.label == "x: y"


def test_partitions_items_with_their_own_parse_errors():
    items = [
        _IntItem(1, "1"),
        _IntItem(2, "2"),
        _IntItem(3),
        _IntItem(4),
        _IntItem(5, "invalid one"),
    ]

    result = partition_labelables(items, RANGE)

    assert result.unused_indices == [3, 4, 5, 6]
    assert result.needs_label == [_IntItem(3), _IntItem(4)]
    assert len(result.incorrectly_labeled) == 1
    entity, error = result.incorrectly_labeled[0]
    assert entity == _IntItem(5, "invalid one")
    assert isinstance(error, ValueError)
    assert not isinstance(error, LabelParseError)


def test_parsed_index_outside_range_is_incorrect():
    result = partition_labelables([_IntItem(1, "9"), _IntItem(2, "0")], RANGE)

    assert result.unused_indices == [1, 2, 3, 4, 5, 6]
    assert result.labeled == []
    errors = [error for _, error in result.incorrectly_labeled]
    assert all(isinstance(error, IndexOutOfRangeError) for error in errors)
    assert [error.index for error in errors] == [9, 0]


def test_explicit_parse_errors_override_entity_errors():
    def _whole_label(label: str) -> int:
        return int(label)

    result = partition_labelables(
        [_Item(1, "3"), _Item(2, "three")],
        RANGE,
        parse_index=_whole_label,
        parse_errors=(ValueError,),
    )

    assert [index for _, index in result.labeled] == [3]
    assert [entity.ident for entity, _ in result.incorrectly_labeled] == [2]


def test_undeclared_errors_still_propagate():
    def _whole_label(label: str) -> int:
        return int(label)

    with pytest.raises(ValueError):
        partition_labelables([_Item(1, "three")], RANGE, parse_index=_whole_label)


def test_find_index_conflict_skips_labels_failing_entity_errors():
    broken = _IntItem(1, "not a number")
    holder = _IntItem(2, "4")

    assert find_index_conflict([broken, holder], 4) is holder
    assert find_index_conflict([broken], 4) is None


def test_label_parse_errors_defaults_and_declarations():
    class _Single:
        parse_errors = KeyError

    assert label_parse_errors(_Item) == (LabelParseError,)
    assert label_parse_errors(_IntItem) == (ValueError,)
    assert label_parse_errors(_Single) == (KeyError,)
