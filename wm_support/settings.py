"""Settings loader for the stable layout helpers."""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from wm_label.index_range import IndexRange
from wm_label.labelable import LabelDialect
from wm_label.space import StableSpaceIndex, space_index_parser

SETTINGS_FILENAME = "wm_stable_layout.json"
ENV_PREFIX = "WM_STABLE_LAYOUT_"
MAX_SPACE_INDEX_MIN = 1
MAX_SPACE_INDEX_MAX = 99
LOG_RETENTION_MIN = 1
LOG_RETENTION_MAX = 20

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class LayoutSettings:
    label_dialect: LabelDialect = LabelDialect.STRICT
    max_space_index: int = 10
    debug: bool = False
    log_retention: int = 5

    @property
    def space_index_range(self) -> IndexRange:
        return IndexRange(1, self.max_space_index)

    def space_index_parser(self) -> Callable[[str], StableSpaceIndex]:
        """Label parser bound to the configured range and dialect."""
        return space_index_parser(self.space_index_range, self.label_dialect)


def _coerce_bounded_int(value: Any, fallback: int, minimum: int, maximum: int) -> int:
    if value is None or isinstance(value, bool):
        return fallback
    try:
        numeric = int(value)
    except (TypeError, ValueError):
        return fallback
    if numeric < minimum:
        return minimum
    if numeric > maximum:
        return maximum
    return numeric


def _coerce_bool(value: Any, fallback: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        token = value.strip().lower()
        if token in _TRUTHY:
            return True
        if token in _FALSY:
            return False
    return fallback


def _coerce_dialect(value: Any, fallback: LabelDialect) -> LabelDialect:
    if isinstance(value, LabelDialect):
        return value
    if not isinstance(value, str):
        return fallback
    try:
        return LabelDialect.parse(value)
    except ValueError:
        return fallback


def settings_from_mapping(data: Mapping[str, Any], base: Optional[LayoutSettings] = None) -> LayoutSettings:
    """Build settings from a decoded JSON object, keeping ``base`` values for bad entries."""

    current = base or LayoutSettings()
    return LayoutSettings(
        label_dialect=_coerce_dialect(data.get("label_dialect"), current.label_dialect),
        max_space_index=_coerce_bounded_int(
            data.get("max_space_index"),
            current.max_space_index,
            MAX_SPACE_INDEX_MIN,
            MAX_SPACE_INDEX_MAX,
        ),
        debug=_coerce_bool(data.get("debug"), current.debug),
        log_retention=_coerce_bounded_int(
            data.get("log_retention"),
            current.log_retention,
            LOG_RETENTION_MIN,
            LOG_RETENTION_MAX,
        ),
    )


def load_settings(path: Path) -> LayoutSettings:
    """Read settings from JSON, returning defaults when the file is missing or invalid."""

    try:
        raw_text = path.read_text(encoding="utf-8")
        data = json.loads(raw_text)
    except (FileNotFoundError, OSError, json.JSONDecodeError):
        data = {}
    if not isinstance(data, dict):
        data = {}
    return settings_from_mapping(data)


def apply_env_overrides(settings: LayoutSettings, env: Optional[Mapping[str, str]] = None) -> LayoutSettings:
    """Let ``WM_STABLE_LAYOUT_*`` variables win over file values."""

    source = os.environ if env is None else env
    overrides: dict[str, Any] = {}
    for field_name in ("label_dialect", "max_space_index", "debug", "log_retention"):
        value = source.get(ENV_PREFIX + field_name.upper())
        if value is not None and value != "":
            overrides[field_name] = value
    if not overrides:
        return settings
    merged = settings_from_mapping(overrides, base=settings)
    return replace(settings, **{name: getattr(merged, name) for name in overrides})


def resolve_settings(root: Path, env: Optional[Mapping[str, str]] = None) -> LayoutSettings:
    source = os.environ if env is None else env
    path = Path(source.get(ENV_PREFIX + "SETTINGS_PATH") or root / SETTINGS_FILENAME)
    return apply_env_overrides(load_settings(path), source)

