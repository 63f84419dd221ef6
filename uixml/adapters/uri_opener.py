"""URI opening adapter used by the load use case.

Supported URIs:
    - ``http://`` / ``https://`` through :class:`RetryingSession`.
    - ``file://`` URLs and plain paths (relative paths resolve against
      ``base_dir``).
    - The package scheme (``pkx:///path``) read through a package collaborator.
"""

from __future__ import annotations

import os
from typing import Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

from uixml.adapters.http_client import HttpConfig, RetryingSession, response_text
from uixml.domain.coercion import DEFAULT_PACKAGE_SCHEME
from uixml.domain.errors import LoadError
from uixml.domain.ports import PackagePort, StreamPort, UriOpenerPort


class FileStream(StreamPort):
    def __init__(self, path: str, encoding: str = "utf-8") -> None:
        self.path = path
        self.encoding = encoding

    def read_as_string(self) -> str:
        try:
            with open(self.path, "r", encoding=self.encoding) as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise LoadError(f"Could not read '{self.path}': {exc}", context=self.path) from exc


class HttpStream(StreamPort):
    def __init__(self, response, url: str) -> None:
        self.response = response
        self.url = url

    def read_as_string(self) -> str:
        return response_text(self.response, self.url)


class PackageStream(StreamPort):
    def __init__(self, package: PackagePort, path: str) -> None:
        self.package = package
        self.path = path

    def read_as_string(self) -> str:
        try:
            return self.package.read_text(self.path)
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            raise LoadError(
                f"Could not read '{self.path}' from package '{self.package.full_name}': {exc}",
                context=self.path,
            ) from exc


class UriOpener(UriOpenerPort):
    """Open markup URIs by scheme."""

    def __init__(
        self,
        *,
        base_dir: str = ".",
        package: Optional[PackagePort] = None,
        package_scheme: str = DEFAULT_PACKAGE_SCHEME,
        http: Optional[RetryingSession] = None,
        http_config: Optional[HttpConfig] = None,
    ) -> None:
        self.base_dir = base_dir
        self.package = package
        self.package_scheme = package_scheme
        self._http = http
        self._http_config = http_config

    @property
    def http(self) -> RetryingSession:
        if self._http is None:
            self._http = RetryingSession(self._http_config)
        return self._http

    def open(self, uri: str) -> StreamPort:
        """Open ``uri`` and return a stream for its text.

        Raises:
            LoadError: If the resource does not exist or cannot be reached.
        """
        if not uri:
            raise LoadError("No URI given.")
        if uri.startswith(self.package_scheme):
            if self.package is None:
                raise LoadError(f"Can't open '{uri}'. No package is configured.", context=uri)
            return PackageStream(self.package, uri[len(self.package_scheme):])

        scheme = urlparse(uri).scheme.lower()
        if scheme in ("http", "https"):
            return HttpStream(self.http.get(uri), uri)
        if scheme == "file":
            path = url2pathname(urlparse(uri).path)
        elif len(scheme) > 1:
            raise LoadError(f"Unsupported URI scheme '{scheme}' in '{uri}'.", context=uri)
        else:
            # no scheme, or a drive letter on Windows
            path = uri if os.path.isabs(uri) else os.path.join(self.base_dir, uri)

        if not os.path.isfile(path):
            raise LoadError(f"File '{path}' does not exist.", context=uri)
        return FileStream(path)


__all__ = ["FileStream", "HttpStream", "PackageStream", "UriOpener"]
