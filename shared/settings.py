"""Tag run settings.

Settings come from three layers, later ones winning: built-in defaults, an
optional YAML settings file, and ``GOTAGS_*`` environment variables.  The
command line applies its own flags on top of the result.

A settings file looks like::

    members: false
    delegate_program: "etags --declarations"
    delegate_timeout: 30
    native_extensions: [".go"]
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_MEMBERS: bool = True
DEFAULT_DELEGATE_PROGRAM: str = "etags"
GO_EXTENSIONS: tuple[str, ...] = (".go",)


class ConfigValidationError(RuntimeError):
    """Raised when strict settings validation fails."""


@dataclass(frozen=True)
class TagSettings:
    """Options that shape one tag run.

    Attributes:
        members: Tag struct field names, and let the delegate tag members.
        delegate_program: Command line of the delegate; empty disables delegation.
        native_extensions: File suffixes handled by the Go extractors.
        delegate_timeout: Seconds to wait for the delegate, None for no limit.
    """

    members: bool = DEFAULT_MEMBERS
    delegate_program: str = DEFAULT_DELEGATE_PROGRAM
    native_extensions: tuple[str, ...] = GO_EXTENSIONS
    delegate_timeout: Optional[float] = None

    @property
    def delegation_enabled(self) -> bool:
        return bool(self.delegate_program.strip())


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``GOTAGS_STRICT_CONFIG`` env."""
    return _env_flag("GOTAGS_STRICT_CONFIG", default=default)


def _fail(msg: str, strict: bool) -> None:
    if strict:
        raise ConfigValidationError(msg)
    logger.warning("%s; ignoring it", msg)


_INVALID = object()


def _coerce(key: str, value: Any) -> Any:
    """Validate one settings value; returns ``_INVALID`` when it is unusable."""
    if key == "members":
        return value if isinstance(value, bool) else _INVALID
    if key == "delegate_program":
        if value is None:
            return ""
        return value if isinstance(value, str) else _INVALID
    if key == "native_extensions":
        if isinstance(value, str):
            value = [value]
        if isinstance(value, list) and value and all(
            isinstance(ext, str) and ext.startswith(".") for ext in value
        ):
            return tuple(value)
        return _INVALID
    if key == "delegate_timeout":
        if value is None:
            return None
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
            return float(value)
        return _INVALID
    return _INVALID


def settings_from_mapping(
    payload: Mapping[str, Any],
    base: TagSettings | None = None,
    strict: bool = False,
) -> TagSettings:
    """Apply a mapping of settings onto ``base``.

    Unknown keys and invalid values raise ``ConfigValidationError`` in strict
    mode and are logged and ignored otherwise.
    """
    settings = base or TagSettings()
    known = {f.name for f in fields(TagSettings)}
    updates: dict[str, Any] = {}
    for key, value in payload.items():
        if key not in known:
            _fail(f"Unknown setting '{key}'", strict)
            continue
        coerced = _coerce(key, value)
        if coerced is _INVALID:
            _fail(f"Invalid value for setting '{key}': {value!r}", strict)
            continue
        updates[key] = coerced
    return replace(settings, **updates)


def load_settings_file(
    path: str,
    base: TagSettings | None = None,
    strict: bool = False,
) -> TagSettings:
    """Load settings from a YAML file.

    In non-strict mode read/parse failures keep ``base`` (or the defaults).
    In strict mode they raise ``ConfigValidationError``.
    """
    settings = base or TagSettings()
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except FileNotFoundError as exc:
        msg = f"Settings file not found: {path}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return settings
    except OSError as exc:
        msg = f"Cannot read settings file {path}: {exc}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return settings
    except yaml.YAMLError as exc:
        msg = f"Failed to parse settings YAML at {path}: {exc}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return settings

    if payload is None:
        logger.debug("Settings file is empty: %s", path)
        return settings

    if not isinstance(payload, dict):
        msg = f"Unexpected settings payload type: {type(payload).__name__}"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; continuing with defaults", msg)
        return settings

    return settings_from_mapping(payload, base=settings, strict=strict)


def apply_env_overrides(settings: TagSettings) -> TagSettings:
    """Apply ``GOTAGS_DELEGATE`` and ``GOTAGS_MEMBERS`` overrides."""
    updates: dict[str, Any] = {}
    delegate = os.getenv("GOTAGS_DELEGATE")
    if delegate is not None:
        updates["delegate_program"] = delegate.strip()
    if os.getenv("GOTAGS_MEMBERS") is not None:
        updates["members"] = _env_flag("GOTAGS_MEMBERS", default=settings.members)
    return replace(settings, **updates)


def resolve_settings(
    config_path: str | None = None,
    strict: bool | None = None,
) -> TagSettings:
    """Resolve settings from defaults, an optional file and the environment."""
    if strict is None:
        strict = resolve_strict_config_validation()
    settings = TagSettings()
    if config_path:
        settings = load_settings_file(config_path, base=settings, strict=strict)
    return apply_env_overrides(settings)
