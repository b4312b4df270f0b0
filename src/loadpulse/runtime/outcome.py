"""
defining the result of a single outbound request, the only
piece of data an actor hands over to the shared aggregate
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RequestOutcome:
    """
    Result of one request issued by an actor.

    Attributes:
        success: True when the target answered within the timeout.
        latency_ms: Elapsed wall-clock time of the call in milliseconds.
        reason: Short description of the failure, None on success.

    """

    success: bool
    latency_ms: float
    reason: str | None = None

    @classmethod
    def ok(cls, latency_ms: float) -> RequestOutcome:
        """Successful call answered after *latency_ms*."""
        return cls(success=True, latency_ms=latency_ms)

    @classmethod
    def failed(cls, reason: str, latency_ms: float = 0.0) -> RequestOutcome:
        """Timeout or transport error, *latency_ms* is informative only."""
        return cls(success=False, latency_ms=latency_ms, reason=reason)
