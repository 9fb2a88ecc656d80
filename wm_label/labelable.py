"""Label parsing and formatting for entities that carry a stable index prefix.

Labels look like ``"<index>:<optional text>"``. The daemon persists the text,
so the index survives the entity being renumbered or moved between displays.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Optional, Protocol, Tuple, Type, TypeVar, runtime_checkable

from wm_label.index_range import IndexRange

LABEL_SEPARATOR = ":"
_DIGITS = re.compile(r"[0-9]+")


class LabelDialect(str, Enum):
    STRICT = "strict"  # separator required
    LEGACY = "legacy"  # no separator: whole label is the index

    @classmethod
    def parse(cls, value: str) -> "LabelDialect":
        token = (value or "").strip().lower()
        for member in cls:
            if member.value == token:
                return member
        raise ValueError(f"{value} is not a valid label dialect")


class LabelParseError(ValueError):
    """Base class for labels whose index prefix cannot be used."""

    def __init__(self, label: str, message: str) -> None:
        super().__init__(message)
        self.label = label


class MissingSeparatorError(LabelParseError):
    def __init__(self, label: str) -> None:
        super().__init__(label, f"Separator '{LABEL_SEPARATOR}' is missing in label {label!r}")


class NonNumericPrefixError(LabelParseError):
    def __init__(self, label: str, prefix: str) -> None:
        super().__init__(label, f"Cannot parse stable index from label prefix {prefix!r}")
        self.prefix = prefix


class IndexOutOfRangeError(LabelParseError):
    def __init__(self, label: str, prefix: str, index: int, index_range: IndexRange) -> None:
        super().__init__(label, f"Stable index {index} must be within the range {index_range}")
        self.prefix = prefix
        self.index = index
        self.index_range = index_range


E_co = TypeVar("E_co", bound=Exception, covariant=True)


@runtime_checkable
class Labelable(Protocol[E_co]):
    """Entity exposing an optional label that may encode a stable index.

    ``parse_errors`` names the exception types ``parse_index`` raises for a bad
    label; entities that do not declare it are expected to raise
    :class:`LabelParseError`.
    """

    @property
    def label(self) -> Optional[str]:
        ...

    @classmethod
    def parse_index(cls, label: str) -> int:
        """Return the stable index encoded in ``label`` or raise one of the entity's parse errors."""
        ...


def label_parse_errors(entity_type: type) -> Tuple[Type[Exception], ...]:
    """Exception types that mark a label of ``entity_type`` as unusable."""
    declared = getattr(entity_type, "parse_errors", None)
    if declared is None:
        return (LabelParseError,)
    if isinstance(declared, type):
        return (declared,)
    return tuple(declared)


def normalize_label(raw: Optional[str]) -> Optional[str]:
    """Map the daemon's empty label to ``None``."""
    if raw is None or raw == "":
        return None
    return raw


def split_label(label: str, *, dialect: LabelDialect = LabelDialect.STRICT) -> tuple[str, Optional[str]]:
    """Split ``label`` into its index prefix and the text after the separator."""

    prefix, separator, rest = label.partition(LABEL_SEPARATOR)
    if not separator:
        if dialect is LabelDialect.LEGACY:
            return label, None
        raise MissingSeparatorError(label)
    description = rest.strip() or None
    return prefix, description


def parse_label_index(
    label: str,
    index_range: IndexRange,
    *,
    dialect: LabelDialect = LabelDialect.STRICT,
) -> int:
    prefix, _ = split_label(label, dialect=dialect)
    token = prefix.strip()
    if not _DIGITS.fullmatch(token):
        raise NonNumericPrefixError(label, prefix)
    index = int(token)
    if not index_range.contains(index):
        raise IndexOutOfRangeError(label, prefix, index, index_range)
    return index


def format_label(index: int, description: Optional[str] = None) -> str:
    """Build a label; the separator is always emitted so the label parses in strict mode."""
    text = f"{int(index)}{LABEL_SEPARATOR}"
    if description is not None and description.strip():
        text += f" {description}"
    return text
