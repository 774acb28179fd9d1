"""Library configuration: BeautConfig, init() and environment detection."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from beaut._logging import configure_logging

__all__ = [
    'BeautConfig',
    'get_config',
    'init',
    'reset',
]

_TRUTHY = frozenset({'1', 'true', 'yes', 'on'})
_FALSY = frozenset({'0', 'false', 'no', 'off', ''})


@dataclass(frozen=True, slots=True)
class BeautConfig:
    """Configuration for beaut.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging alone.
        track_consumption: Record where each container was consumed, so
            ownership violations can point at the earlier consuming call.
        json_logs: Render logs as JSON (True) or colored console output (False).
    """

    log_level: str | None = None
    track_consumption: bool = False
    json_logs: bool = True


# Global configuration (set by init(), or lazily by get_config())
_config: BeautConfig | None = None


def _detect_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment.

    Unknown values fall back to the default with a warning.
    """
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    logging.warning("Unknown %s value '%s', defaulting to %s", name, raw, default)
    return default


def _detect_log_level() -> str | None:
    """Read BEAUT_LOG_LEVEL, ignoring names stdlib logging doesn't know."""
    raw = os.environ.get('BEAUT_LOG_LEVEL', '').strip().upper()
    if not raw:
        return None
    if not isinstance(logging.getLevelName(raw), int):
        logging.warning("Unknown BEAUT_LOG_LEVEL value '%s', ignoring", raw)
        return None
    return raw


def _resolve(
    log_level: str | None,
    track_consumption: bool | None,
    json_logs: bool | None,
) -> BeautConfig:
    """Fill values left as None from the environment."""
    return BeautConfig(
        log_level=log_level.upper() if log_level is not None else _detect_log_level(),
        track_consumption=(
            track_consumption if track_consumption is not None else _detect_flag('BEAUT_TRACK_CONSUMPTION', False)
        ),
        json_logs=json_logs if json_logs is not None else _detect_flag('BEAUT_JSON_LOGS', True),
    )


def init(
    log_level: str | None = None,
    track_consumption: bool | None = None,
    json_logs: bool | None = None,
) -> BeautConfig:
    """Initialize beaut with the specified configuration.

    Values left as None are read from the environment:
    ``BEAUT_LOG_LEVEL``, ``BEAUT_TRACK_CONSUMPTION`` and ``BEAUT_JSON_LOGS``.

    Args:
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.
        track_consumption: Record consumption sites for ownership errors.
        json_logs: Emit JSON logs instead of console output.

    Returns:
        The BeautConfig that was set.

    Example:
        ```python
        from beaut import init

        init(log_level='DEBUG', track_consumption=True)
        ```
    """
    global _config  # noqa: PLW0603

    _config = _resolve(log_level, track_consumption, json_logs)

    if _config.log_level is not None:
        configure_logging(_config.log_level, json_output=_config.json_logs)

    return _config


def get_config() -> BeautConfig:
    """Get the current configuration, reading the environment on first use.

    Unlike init(), this never configures logging: only an explicit init()
    touches the logging setup.

    Returns:
        The current BeautConfig.
    """
    global _config  # noqa: PLW0603

    if _config is None:
        _config = _resolve(None, None, None)
    return _config


def reset() -> None:
    """Forget the current configuration; the next get_config() re-reads the environment."""
    global _config  # noqa: PLW0603
    _config = None
