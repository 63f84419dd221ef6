"""Typed conversion of raw markup attribute strings."""

from __future__ import annotations

import math
import re
from typing import Any, Optional

from .errors import UixmlError, UnableToRender
from .ports import PackagePort

DEFAULT_PACKAGE_SCHEME = "pkx:///"

_INT_PATTERN = re.compile(r"\s*([+-]?)(?:0[xX]([0-9a-fA-F]*)|(\d+))")
_FLOAT_PATTERN = re.compile(
    r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)
_TRUE_VALUES = ("1", "true", "True")


def parse_int(raw: str) -> float | int:
    """Parse the leading integer of ``raw``; ``math.nan`` when there is none.

    A ``0x`` prefix reads the digits as hexadecimal (``"0x10"`` -> 16).
    """
    match = _INT_PATTERN.match(raw or "")
    if not match:
        return math.nan
    sign, hex_digits, digits = match.groups()
    if digits is None:
        if not hex_digits:
            return math.nan
        value = int(hex_digits, 16)
    else:
        value = int(digits)
    return -value if sign == "-" else value


def parse_float(raw: str) -> float:
    """Parse the leading float of ``raw``; ``math.nan`` when there is none.

    ``Infinity`` with an optional sign parses to an infinite float.
    """
    match = _FLOAT_PATTERN.match(raw or "")
    if not match:
        return math.nan
    return float(match.group(1))


class AttributeCoercer:
    """Converts attribute strings per declared value type.

    Supported types: ``boolean``, ``int``, ``float``, ``url``, ``resource``,
    ``resource-url``. Anything else passes the string through unchanged.
    """

    def __init__(
        self,
        package: Optional[PackagePort] = None,
        *,
        package_scheme: str = DEFAULT_PACKAGE_SCHEME,
    ) -> None:
        self.package = package
        self.package_scheme = package_scheme

    def coerce(self, raw: str, value_type: Optional[str]) -> Any:
        if value_type == "boolean":
            return raw in _TRUE_VALUES
        if value_type == "int":
            return parse_int(raw)
        if value_type == "float":
            return parse_float(raw)
        if value_type == "url":
            scheme = self.package_scheme
            if len(raw) > len(scheme) and raw.startswith(scheme):
                # package URLs resolve to an object URL of the packaged resource
                return self._resource(raw[len(scheme):], as_url=True)
            return raw
        if value_type == "resource":
            return self._resource(raw, as_url=False)
        if value_type == "resource-url":
            return self._resource(raw, as_url=True)
        return raw

    def _resource(self, path: str, *, as_url: bool) -> Any:
        if self.package is None:
            raise UnableToRender("Can't get resource. The app has no package.")
        try:
            module = self.package.require(path)
        except UixmlError:
            raise
        except Exception as exc:
            raise UnableToRender(
                f"Resource '{path}' in package '{self.package.full_name}' failed to load: {exc}"
            ) from exc
        if module is None:
            raise UnableToRender(
                f"Resource '{path}' does not exist in package '{self.package.full_name}'."
            )
        if not as_url:
            return module
        factory = getattr(module, "create_object_url", None)
        if not callable(factory):
            raise UnableToRender(f"Invalid resource '{path}': it cannot provide an object URL.")
        return factory()


__all__ = ["AttributeCoercer", "DEFAULT_PACKAGE_SCHEME", "parse_float", "parse_int"]
