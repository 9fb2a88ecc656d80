from .index_range import IndexRange
from .labelable import (
    IndexOutOfRangeError,
    Labelable,
    LabelDialect,
    LabelParseError,
    MissingSeparatorError,
    NonNumericPrefixError,
    format_label,
    label_parse_errors,
    normalize_label,
    parse_label_index,
)
from .partition import AssignedIndices, PartitionResult, assign_indices, find_index_conflict, labels_for_assignment, partition_labelables
from .space import SPACE_INDEX_RANGE, Space, StableSpaceIndex, space_index_parser

__all__ = [
    "AssignedIndices",
    "IndexOutOfRangeError",
    "IndexRange",
    "LabelDialect",
    "LabelParseError",
    "Labelable",
    "MissingSeparatorError",
    "NonNumericPrefixError",
    "PartitionResult",
    "SPACE_INDEX_RANGE",
    "Space",
    "StableSpaceIndex",
    "assign_indices",
    "find_index_conflict",
    "format_label",
    "label_parse_errors",
    "labels_for_assignment",
    "normalize_label",
    "parse_label_index",
    "partition_labelables",
    "space_index_parser",
]
