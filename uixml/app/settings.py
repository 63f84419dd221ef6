from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..domain.coercion import DEFAULT_PACKAGE_SCHEME

_log = logging.getLogger(__name__)

_ENV_PREFIX = "UIXML_"


@dataclass
class EngineSettings:
    """Typed runtime settings for :class:`uixml.app.engine.UixmlEngine`."""

    case_sensitive: bool = False
    package_scheme: str = DEFAULT_PACKAGE_SCHEME
    request_timeout_s: int = 10
    retries: int = 2
    max_workers: int = 2
    base_dir: str = "."

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EngineSettings":
        """Build settings from ``UIXML_*`` variables.

        Invalid values are logged and replaced by the default.
        """
        environ = os.environ if env is None else env
        defaults = cls()

        def _get(name: str) -> Optional[str]:
            value = environ.get(_ENV_PREFIX + name)
            if value is None or not value.strip():
                return None
            return value.strip()

        def _int(name: str, default: int, *, minimum: int) -> int:
            raw = _get(name)
            if raw is None:
                return default
            try:
                return _coerce_int(name, raw, minimum=minimum)
            except ValueError as exc:
                _log.warning("Ignoring %s%s: %s", _ENV_PREFIX, name, exc)
                return default

        case_raw = _get("CASE_SENSITIVE")
        return cls(
            case_sensitive=defaults.case_sensitive if case_raw is None else _coerce_bool(case_raw),
            package_scheme=_get("PACKAGE_SCHEME") or defaults.package_scheme,
            request_timeout_s=_int("REQUEST_TIMEOUT_S", defaults.request_timeout_s, minimum=1),
            retries=_int("RETRIES", defaults.retries, minimum=0),
            max_workers=_int("MAX_WORKERS", defaults.max_workers, minimum=1),
            base_dir=_get("BASE_DIR") or defaults.base_dir,
        )


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _coerce_int(name: str, value: Any, *, minimum: int = 0) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer.")
    try:
        coerced = int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be an integer.") from exc
    if coerced < minimum:
        raise ValueError(f"{name} must be at least {minimum}.")
    return coerced


__all__ = ["EngineSettings"]
