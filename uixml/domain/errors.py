"""Engine-level error types shared by the registry, renderer, and loaders.

Every failure carries a stable ``code`` next to the message so hosts can map
errors without parsing message text.
"""
from __future__ import annotations

from typing import Optional

ERROR_INVALID_UIXML = "uixml-error-invalid-uixml"
ERROR_UNSUPPORTED_RUNTIME = "uixml-error-unsupported-runtime"
ERROR_UNABLE_TO_RENDER = "uixml-error-unable-to-render"
ERROR_INVALID_CONTROL = "uixml-error-invalid-control"
ERROR_DUPLICATE_CONTROL = "uixml-error-duplicate-control"
ERROR_LOAD_FAILED = "uixml-error-load-failed"


class UixmlError(Exception):
    """Base class for engine errors (user-presentable)."""

    code = "uixml-error"

    def __init__(self, message: str, *, code: Optional[str] = None):
        super().__init__(message)
        self.code = code or type(self).code
        self.message = message


class InvalidMarkup(UixmlError):
    """The document has no ``ui`` node or is not well-formed XML."""

    code = ERROR_INVALID_UIXML


class UnsupportedRuntime(UixmlError):
    """No XML parsing capability is available in this interpreter."""

    code = ERROR_UNSUPPORTED_RUNTIME


class UnableToRender(UixmlError):
    """A markup node could not be turned into a control instance."""

    code = ERROR_UNABLE_TO_RENDER


class InvalidControl(UixmlError):
    """A control definition or control instance is unusable."""

    code = ERROR_INVALID_CONTROL


class DuplicateControl(InvalidControl):
    """A control type tag is registered twice."""

    code = ERROR_DUPLICATE_CONTROL


class LoadError(UixmlError):
    """Markup could not be fetched or read from its URI."""

    code = ERROR_LOAD_FAILED

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.context = context


__all__ = [
    "ERROR_DUPLICATE_CONTROL",
    "ERROR_INVALID_CONTROL",
    "ERROR_INVALID_UIXML",
    "ERROR_LOAD_FAILED",
    "ERROR_UNABLE_TO_RENDER",
    "ERROR_UNSUPPORTED_RUNTIME",
    "DuplicateControl",
    "InvalidControl",
    "InvalidMarkup",
    "LoadError",
    "UixmlError",
    "UnableToRender",
    "UnsupportedRuntime",
]
