"""Requesters: perform one request and report its HTTP status."""
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

import httpx
import numpy as np

from loadcli.const import (
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SIMULATE_MEAN_DELAY_MS,
    DEFAULT_SIMULATE_STD_DELAY_MS,
    HTTP_SUCCESS,
    SIMULATE_SEED,
)
from loadcli.shared.httpx_util import HTTPX_Util

from .constants import BenchmarkConstants
from .exceptions import TransportError


# Configure logging
logger = logging.getLogger(__name__)


class Requester(ABC):
    """Capability that issues one GET request and returns the status code."""

    @abstractmethod
    async def get(self, uri: str) -> int:
        """Issue one request against uri.

        Returns:
            The HTTP status code of the response.

        Raises:
            TransportError: If the request could not complete.
        """
        pass

    async def aclose(self) -> None:
        """Release any resources held by the requester."""
        return None


class HttpxRequester(Requester):
    """Live requester backed by one httpx.AsyncClient per logical connection."""

    def __init__(self, timeout: float = DEFAULT_REQUEST_TIMEOUT, client: Optional[httpx.AsyncClient] = None):
        self._client = client if client is not None else HTTPX_Util.create_async_client(timeout)

    async def get(self, uri: str) -> int:
        try:
            response = await self._client.get(uri)
        except httpx.HTTPError as e:
            logger.error(f"Request to {uri} failed: {e}")
            raise TransportError(f"Request to {uri} failed: {e}", uri=uri) from e
        return response.status_code

    async def aclose(self) -> None:
        await self._client.aclose()


class SimulatedRequester(Requester):
    """Requester that never touches the network.

    Each call sleeps for a normally distributed delay and returns a status
    drawn uniformly from ``statuses``.
    """

    def __init__(
        self,
        mean_delay_ms: float = DEFAULT_SIMULATE_MEAN_DELAY_MS,
        std_delay_ms: float = DEFAULT_SIMULATE_STD_DELAY_MS,
        statuses: Sequence[int] = (HTTP_SUCCESS,),
        seed: Optional[int] = SIMULATE_SEED,
    ):
        if not statuses:
            raise ValueError("statuses must not be empty")
        self.mean_delay_ms = mean_delay_ms
        self.std_delay_ms = std_delay_ms
        self.statuses = list(statuses)
        self._rng = np.random.default_rng(seed)

    async def get(self, uri: str) -> int:
        delay_ms = max(0.0, float(self._rng.normal(self.mean_delay_ms, self.std_delay_ms)))
        await asyncio.sleep(delay_ms / BenchmarkConstants.SECONDS_TO_MS)
        return int(self._rng.choice(self.statuses))
