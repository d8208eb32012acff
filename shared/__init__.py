"""Shared logging and settings utilities."""

from shared.structured_logging import (
    configure_structured_logging,
    get_run_id,
    phase_scope,
    set_run_id,
    source_scope,
)
from shared.settings import (
    ConfigValidationError,
    TagSettings,
    apply_env_overrides,
    load_settings_file,
    resolve_settings,
    resolve_strict_config_validation,
    settings_from_mapping,
)

__all__ = [
    "configure_structured_logging",
    "get_run_id",
    "phase_scope",
    "set_run_id",
    "source_scope",
    "ConfigValidationError",
    "TagSettings",
    "apply_env_overrides",
    "load_settings_file",
    "resolve_settings",
    "resolve_strict_config_validation",
    "settings_from_mapping",
]
