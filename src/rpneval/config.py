"""Engine configuration: defaults merged with ``rpneval.yaml`` and overrides.

Settings are installed once at startup with ``configure()`` and read with
``get_setting()``.  Example ``rpneval.yaml``::

    var_name_max_len: 16
    max_expression_length: 4096
    logging_dir: ./logs
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "rpneval.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "var_name_max_len": 32,
    "error_message_max_len": 64,
    "max_expression_length": 65_536,
    "logging_dir": None,
    "logging_fsync": False,
    "logging_tail_bytes": 2_097_152,  # 2 MB
}

_INT_KEYS = ("var_name_max_len", "error_message_max_len", "max_expression_length", "logging_tail_bytes")

_active: dict[str, Any] = dict(DEFAULT_CONFIG)


def load_config(config_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from ``rpneval.yaml``, with defaults.

    Args:
        config_dir: Directory holding ``rpneval.yaml``.  ``None`` or a
            directory without the file yields the defaults.

    Returns:
        Merged configuration dict.

    Raises:
        ValueError: On unknown keys or non-positive limits.
    """
    config = dict(DEFAULT_CONFIG)
    if config_dir is not None:
        config_path = Path(config_dir) / CONFIG_FILENAME
        if config_path.exists():
            user_config = yaml.safe_load(config_path.read_text()) or {}
            if not isinstance(user_config, dict):
                raise ValueError(f"{config_path} must contain a mapping")
            config.update(_validate(user_config))
    return config


def _validate(overrides: dict[str, Any]) -> dict[str, Any]:
    unknown = sorted(set(overrides) - set(DEFAULT_CONFIG))
    if unknown:
        raise ValueError(f"Unknown config keys: {unknown}")
    for key in _INT_KEYS:
        if key in overrides and int(overrides[key]) <= 0:
            raise ValueError(f"{key} must be positive, got {overrides[key]!r}")
    return overrides


def configure(config_dir: Path | None = None, **overrides: Any) -> dict[str, Any]:
    """Install the active settings.

    Call once at startup, before evaluating expressions.  When
    ``logging_dir`` is set the event log sink is enabled there.

    Returns:
        The installed configuration.
    """
    global _active
    config = load_config(config_dir)
    config.update(_validate(overrides))
    _active = config

    from rpneval.logging import set_log_dir

    log_dir = config.get("logging_dir")
    if log_dir is None:
        set_log_dir(None)
    else:
        base = Path(log_dir)
        if not base.is_absolute() and config_dir is not None:
            base = Path(config_dir) / base
        set_log_dir(base)
    return dict(config)


def get_setting(key: str) -> Any:
    """Return one active setting.

    Raises:
        KeyError: If *key* is not a known setting.
    """
    if key not in _active:
        raise KeyError(f"Unknown setting: {key!r}")
    return _active[key]


def reset_config() -> None:
    """Restore the defaults and detach the event log sink."""
    global _active
    from rpneval.logging import set_log_dir

    _active = dict(DEFAULT_CONFIG)
    set_log_dir(None)
