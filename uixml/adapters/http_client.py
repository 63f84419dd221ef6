"""Shared HTTP transport for fetching markup over ``http(s)``.

This module provides a thin wrapper around ``requests.Session`` so the URI
opener can share timeout policy and retry behavior.

Dependencies:
    - ``requests`` for network I/O.
    - ``uixml.domain.errors.LoadError`` for typed transport failures.

Call context:
    - Constructed by ``uixml.adapters.uri_opener.UriOpener`` for http(s) URIs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import requests
from requests import exceptions as req_exc

from uixml.domain.errors import LoadError


@dataclass
class HttpConfig:
    """Timeout and retry configuration for markup downloads.

    Attributes:
        request_timeout_s: Timeout in seconds per attempt.
        retries: Number of retry attempts after the initial request.
    """
    request_timeout_s: int = 10
    retries: int = 2


class RetryingSession:
    """Requests wrapper with a retry loop for transport failures.

    Only timeouts and connection errors are retried; HTTP status handling is
    left to the caller.
    """

    def __init__(self, cfg: Optional[HttpConfig] = None) -> None:
        self.session = requests.Session()
        self.cfg = cfg or HttpConfig()

    def get(
        self,
        url: str,
        *,
        accept: str = "application/xml, text/xml, */*",
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a GET request with retries on timeout/connectivity failures.

        Raises:
            LoadError: If all attempts fail with timeout/connection errors.
        """
        context = f"GET {url}"
        last_err: LoadError | None = None
        attempts = self.cfg.retries + 1
        for _ in range(attempts):
            try:
                return self.session.get(
                    url,
                    headers={"Accept": accept},
                    timeout=timeout or self.cfg.request_timeout_s,
                )
            except (req_exc.Timeout, req_exc.ConnectionError):
                last_err = LoadError(f"Timeout contacting {url}", context=context)
        raise last_err


def build_error_message(ctx: str, status: int, payload: Any) -> str:
    detail = payload.strip()[:200] if isinstance(payload, str) else ""
    if detail:
        return f"{ctx}: {detail} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


def response_text(resp: Any, url: str) -> str:
    """Return the body of a 2xx response as text.

    Raises:
        LoadError: For non-2xx responses.
    """
    status = int(getattr(resp, "status_code", 0) or 0)
    if not 200 <= status < 300:
        context = f"GET {url}"
        raise LoadError(
            build_error_message(context, status, getattr(resp, "text", "")),
            status=status,
            context=context,
        )
    return resp.text


__all__ = ["HttpConfig", "RetryingSession", "build_error_message", "response_text"]
