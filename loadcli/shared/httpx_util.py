"""HTTP utilities for loadcli."""

import httpx

from loadcli.const import ALLOWED_SCHEMES, DEFAULT_REQUEST_TIMEOUT


class HTTPX_Util:

    @staticmethod
    def create_async_client(timeout: float = DEFAULT_REQUEST_TIMEOUT) -> httpx.AsyncClient:
        """Create an async client that models one logical connection.

        The pool holds at most one connection so requests issued through the
        client are serialized over a single keep-alive socket.
        """
        client_timeout = httpx.Timeout(
            connect=timeout,
            read=timeout,
            write=timeout,
            pool=timeout
        )
        limits = httpx.Limits(max_connections=1, max_keepalive_connections=1)
        return httpx.AsyncClient(timeout=client_timeout, limits=limits)

    @staticmethod
    def is_absolute_http_url(uri: str) -> bool:
        """Return True when uri parses as an absolute http or https URL."""
        try:
            url = httpx.URL(uri)
        except (httpx.InvalidURL, TypeError):
            return False
        return url.scheme in ALLOWED_SCHEMES and bool(url.host)
