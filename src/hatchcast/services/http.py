"""
Shared HTTP client with automatic retry and backoff.

Provides a pre-configured ``requests.Session`` that retries on transient
network errors (timeouts, connection resets, 429/502/503/504) with
exponential backoff. Datasource modules should use this instead of bare
``requests.get``.

Retries stay short: a ranking request fans out to every stream, and a
slow station only holds up its own worker slot, so giving up quickly and
letting that one location drop out is better than stalling the batch.

Usage::

    from hatchcast.services.http import session

    resp = session.get("https://waterservices.usgs.gov/nwis/iv/", params={...})
    resp.raise_for_status()
"""

from __future__ import annotations

import threading
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from hatchcast import __version__

#: Default retry strategy for USGS and Open-Meteo.
DEFAULT_RETRY = Retry(
    total=2,
    backoff_factor=0.5,  # 0s, 0.5s between retries
    status_forcelist=[429, 502, 503, 504],
    allowed_methods=["GET", "HEAD"],
    raise_on_status=False,  # let resp.raise_for_status() handle it
)

DEFAULT_TIMEOUT = 10  # seconds

USER_AGENT = f"hatchcast/{__version__} (trout stream conditions)"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    accept: str = "application/json",
) -> requests.Session:
    """
    Build a ``requests.Session`` with retry adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Default timeout applied to every request.
        accept: Value of the ``Accept`` header.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT
    s.headers["Accept"] = accept

    # Wrap send so callers get a timeout even when they forget ``timeout=``.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = timeout
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


#: Module-level session, import and use directly.
session: requests.Session = create_session()


class ThreadLocalSession:
    """
    One :func:`create_session` session per thread, built on first use.

    ``requests.Session`` is not guaranteed thread-safe. The ranker calls
    its sources from ``asyncio.to_thread`` workers, so each worker thread
    gets a private session and connection pool through this wrapper.
    """

    def __init__(self, retry: Retry | None = None, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.retry = retry
        self.timeout = timeout
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        """The calling thread's session."""
        s: requests.Session | None = getattr(self._local, "session", None)
        if s is None:
            s = create_session(self.retry, timeout=self.timeout)
            self._local.session = s
        return s

    def get(self, url: str, **kwargs: Any) -> requests.Response:
        return self.session.get(url, **kwargs)


#: Anything the datasources can issue GET requests through.
HttpClient = requests.Session | ThreadLocalSession
