from __future__ import annotations

import logging
import os
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from wm_support.settings import LayoutSettings

ROOT_LOGGER_NAME = "WMStableLayout"
LOG_FILENAME = "wm_stable_layout.log"
PROPAGATE_ENV_VAR = "WM_STABLE_LAYOUT_PROPAGATE_LOGS"
_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_logs_dir(base_path: Path, log_dir_name: str = "WMStableLayout") -> Path:
    """
    Resolve the directory to store helper logs.

    Strategy:
    - Use WM_STABLE_LAYOUT_LOG_DIR if set.
    - Fall back to XDG state/cache locations, then `cwd/logs/<log_dir_name>`.
    - Final fallback: tempdir/<log_dir_name>.
    `base_path` is only used when it already contains a `logs` directory.
    """
    candidates = []

    env_override = os.environ.get("WM_STABLE_LAYOUT_LOG_DIR")
    if env_override:
        candidates.append(Path(env_override).expanduser())

    local_logs = base_path.resolve() / "logs"
    if local_logs.is_dir():
        candidates.append(local_logs)

    state_home = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
    cache_home = Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))
    candidates.append(state_home / "wm-stable-layout" / "logs")
    candidates.append(cache_home / "wm-stable-layout" / "logs")
    candidates.append(Path.cwd() / "logs")

    for base in candidates:
        try:
            target = base / log_dir_name
            target.mkdir(parents=True, exist_ok=True)
            return target
        except OSError:
            continue

    temp_fallback = Path(tempfile.gettempdir()) / log_dir_name
    temp_fallback.mkdir(parents=True, exist_ok=True)
    return temp_fallback


def build_rotating_file_handler(
    log_dir: Path,
    filename: str,
    *,
    retention: int = 5,
    max_bytes: int = 512 * 1024,
    formatter: Optional[logging.Formatter] = None,
) -> logging.Handler:
    """Construct a rotating file handler with sane defaults."""
    retention = max(1, retention)
    backup_count = max(0, retention - 1)
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / filename,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    if formatter is not None:
        handler.setFormatter(formatter)
    return handler


def resolve_log_level(debug_enabled: bool) -> int:
    return logging.DEBUG if debug_enabled else logging.INFO


def configure_logging(settings: LayoutSettings, base_path: Path) -> logging.Logger:
    """Attach a rotating file handler to the package loggers; safe to call repeatedly."""

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(resolve_log_level(settings.debug))
    logger.propagate = os.environ.get(PROPAGATE_ENV_VAR, "").lower() in {"1", "true", "yes", "on"}
    for existing in list(logger.handlers):
        if getattr(existing, "_wm_stable_layout", False):
            logger.removeHandler(existing)
            existing.close()
    handler = build_rotating_file_handler(
        resolve_logs_dir(base_path),
        LOG_FILENAME,
        retention=settings.log_retention,
        formatter=logging.Formatter(_LOG_FORMAT, _DATE_FORMAT),
    )
    handler._wm_stable_layout = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.debug("Logging configured: level=%s retention=%d", logging.getLevelName(logger.level), settings.log_retention)
    return logger
