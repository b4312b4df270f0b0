"""Request issuers: the only component performing network I/O"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Protocol

import httpx

from loadpulse.runtime.outcome import RequestOutcome

if TYPE_CHECKING:
    from loadpulse.core.targets import Target

logger = logging.getLogger(__name__)


class RequestIssuer(Protocol):
    """Perform one outbound call and describe how it went."""

    async def issue(self, target: Target) -> RequestOutcome:
        """
        Call *target* once.

        Implementations should convert transport problems into a failed
        :class:`RequestOutcome`; the caller also bounds the call with its own
        timeout and treats any exception as a failure.
        """
        ...


class HttpxRequestIssuer:
    """Issue ``GET`` requests with a shared :class:`httpx.AsyncClient`."""

    def __init__(
        self,
        *,
        timeout_s: float,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            timeout_s: per-request timeout handed to httpx.
            client: optional preconfigured client (e.g. with a mock
                transport), closed by :meth:`aclose` only when owned.

        """
        self.timeout_s = timeout_s
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_s),
            follow_redirects=True,
        )

    async def issue(self, target: Target) -> RequestOutcome:
        """GET the target, non-2xx answers count as failures"""
        start = time.perf_counter()
        try:
            response = await self._client.get(
                target.url,
                headers=target.headers,
                timeout=self.timeout_s,
            )
            response.raise_for_status()
        except httpx.TimeoutException:
            elapsed = (time.perf_counter() - start) * 1000
            return RequestOutcome.failed("timeout", elapsed)
        except httpx.HTTPStatusError as exc:
            elapsed = (time.perf_counter() - start) * 1000
            return RequestOutcome.failed(f"HTTP {exc.response.status_code}", elapsed)
        except httpx.HTTPError as exc:
            elapsed = (time.perf_counter() - start) * 1000
            return RequestOutcome.failed(type(exc).__name__, elapsed)

        return RequestOutcome.ok((time.perf_counter() - start) * 1000)

    async def aclose(self) -> None:
        """Release the connection pool if this issuer created it."""
        if self._owns_client:
            await self._client.aclose()
            logger.debug("httpx client closed")
