from __future__ import annotations

import logging
import os
from typing import Mapping, Optional, TextIO

PACKAGE_LOGGER = "uixml"
_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DEFAULT_DATEFMT = "%H:%M:%S"
_LEVEL_ENV_VAR = "UIXML_LOG_LEVEL"
_DEBUG_FLAGS = ("UIXML_DEBUG", "UIXML_DEBUG_LOGGING")


def _coerce_level(value: Optional[str], fallback: int) -> int:
    text = (value or "").strip()
    if not text:
        return fallback
    if text.isdigit():
        return int(text)
    candidate = logging.getLevelName(text.upper())
    return candidate if isinstance(candidate, int) else fallback


def _env_truthy(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in {"1", "true", "yes", "on"}


def resolve_env_level(env: Optional[Mapping[str, str]] = None) -> Optional[int]:
    """Return the level forced by the environment, or ``None``.

    ``UIXML_LOG_LEVEL`` wins over the truthy debug flags.
    """
    environ = os.environ if env is None else env
    value = environ.get(_LEVEL_ENV_VAR)
    if value:
        return _coerce_level(value, logging.INFO)
    if any(_env_truthy(environ.get(flag)) for flag in _DEBUG_FLAGS):
        return logging.DEBUG
    return None


def configure_logging(
    default_level: int | str = logging.INFO,
    *,
    env: Optional[Mapping[str, str]] = None,
    stream: Optional[TextIO] = None,
) -> int:
    """
    Attach a compact handler to the ``uixml`` logger and set its level.

    The root logger is left alone so embedding applications keep control of
    their own handlers. Calling this twice does not add a second handler.
    Returns the effective level.
    """
    fallback = (
        _coerce_level(default_level, logging.INFO)
        if isinstance(default_level, str)
        else int(default_level)
    )
    env_level = resolve_env_level(env)
    effective = env_level if env_level is not None else fallback

    logger = logging.getLogger(PACKAGE_LOGGER)
    if not any(getattr(h, "_uixml_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT, datefmt=_DEFAULT_DATEFMT))
        handler._uixml_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    logger.setLevel(effective)
    return effective


def env_requests_debug(env: Optional[Mapping[str, str]] = None) -> bool:
    """Return True if environment variables force DEBUG logging."""
    level = resolve_env_level(env)
    return level is not None and level <= logging.DEBUG


__all__ = ["PACKAGE_LOGGER", "configure_logging", "env_requests_debug", "resolve_env_level"]
