from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..domain.errors import LoadError, UixmlError
from ..domain.models import AppDescriptor
from ..domain.ports import UriOpenerPort
from .render_markup import RenderMarkup

_log = logging.getLogger(__name__)

Dispatch = Callable[[Callable[[], None]], Any]


@dataclass
class LoadMarkup:
    """Fetch markup from a URI off the calling thread and render it.

    Open and read always run on ``executor``. Rendering runs through
    ``dispatch`` when one is set (for example ``lambda fn: root.after(0, fn)``
    for Tk), otherwise on the executor thread right after the read.

    The returned future resolves to the :class:`AppDescriptor` or carries the
    first failure of open, read or render. Nothing of a failed render is
    exposed.
    """

    opener: UriOpenerPort
    render: RenderMarkup
    executor: Executor = field(repr=False)
    dispatch: Optional[Dispatch] = field(default=None, repr=False)

    def __call__(self, uri: str, controller: Any = None) -> "Future[AppDescriptor]":
        if self.dispatch is None:
            return self.executor.submit(self._load, uri, controller)

        result: "Future[AppDescriptor]" = Future()
        result.set_running_or_notify_cancel()

        def _fetched(text_future: "Future[str]") -> None:
            error = text_future.exception()
            if error is not None:
                result.set_exception(error)
                return
            self.dispatch(lambda: self._settle(result, uri, text_future.result(), controller))

        self.fetch(uri).add_done_callback(_fetched)
        return result

    def fetch(self, uri: str) -> "Future[str]":
        """Return a future for the markup text at ``uri`` without rendering it."""
        return self.executor.submit(self._read, uri)

    def _read(self, uri: str) -> str:
        try:
            return self.opener.open(uri).read_as_string()
        except UixmlError as exc:
            _log.warning("Loading %s failed: %s", uri, exc)
            raise
        except Exception as exc:
            _log.warning("Loading %s failed: %s", uri, exc)
            raise LoadError(f"Could not load '{uri}': {exc}", context=uri) from exc

    def _render(self, uri: str, text: str, controller: Any) -> AppDescriptor:
        try:
            return self.render(text, controller)
        except UixmlError as exc:
            _log.warning("Rendering %s failed: %s", uri, exc)
            raise

    def _load(self, uri: str, controller: Any) -> AppDescriptor:
        return self._render(uri, self._read(uri), controller)

    def _settle(
        self, result: "Future[AppDescriptor]", uri: str, text: str, controller: Any
    ) -> None:
        try:
            result.set_result(self._render(uri, text, controller))
        except Exception as exc:
            result.set_exception(exc)


__all__ = ["LoadMarkup"]
