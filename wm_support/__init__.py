from .logging_utils import build_rotating_file_handler, configure_logging, resolve_log_level, resolve_logs_dir
from .settings import LayoutSettings, apply_env_overrides, load_settings, resolve_settings, settings_from_mapping

__all__ = [
    "LayoutSettings",
    "apply_env_overrides",
    "build_rotating_file_handler",
    "configure_logging",
    "load_settings",
    "resolve_log_level",
    "resolve_logs_dir",
    "resolve_settings",
    "settings_from_mapping",
]
