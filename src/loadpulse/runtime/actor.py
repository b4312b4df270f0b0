"""defining the simulated actor of a load test run"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

import numpy as np

from loadpulse.runtime.outcome import RequestOutcome

if TYPE_CHECKING:
    from collections.abc import Callable

    from loadpulse.core.issuer import RequestIssuer
    from loadpulse.core.targets import TargetSelector
    from loadpulse.metrics.aggregate import StatsAggregate
    from loadpulse.schemas.run_config import RunConfig

logger = logging.getLogger(__name__)


class ActorRuntime:
    """One simulated participant issuing a bounded sequence of requests."""

    def __init__(  # noqa: PLR0913
        self,
        *,
        actor_id: int,
        config: RunConfig,
        stats: StatsAggregate,
        cancel_event: asyncio.Event,
        issuer: RequestIssuer,
        selector: TargetSelector,
        request_timeout_s: float,
        on_outcome: Callable[[], None] | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        """
        Args:
            actor_id: identity of the actor, used in the logs.
            config: immutable parameters of the run.
            stats: aggregate shared by every actor of the run.
            cancel_event: run-wide cancellation signal.
            issuer: collaborator performing the outbound call.
            selector: strategy choosing the target of each request.
            request_timeout_s: fixed timeout of a single request.
            on_outcome: callback invoked after each recorded outcome.
            rng: generator used for the inter-request delays.

        """
        self.actor_id = actor_id
        self.config = config
        self.stats = stats
        self.cancel_event = cancel_event
        self.issuer = issuer
        self.selector = selector
        self.request_timeout_s = request_timeout_s
        self.on_outcome = on_outcome
        self.rng = rng or np.random.default_rng()
        self.issued = 0

    @property
    def cancelled(self) -> bool:
        """True once the run-wide stop signal has been raised"""
        return self.cancel_event.is_set()

    def sample_delay_s(self) -> float:
        """Think time drawn uniformly from [min_delay_ms, max_delay_ms]."""
        low = self.config.min_delay_ms
        high = self.config.max_delay_ms
        delay_ms = int(self.rng.integers(low=low, high=high + 1))
        return delay_ms / 1000

    async def _issue_once(self) -> RequestOutcome:
        """Issue one request bounded by the fixed timeout, never raise."""
        target = self.selector.select(self.config.target_profile)
        start = time.perf_counter()
        try:
            return await asyncio.wait_for(
                self.issuer.issue(target),
                timeout=self.request_timeout_s,
            )
        except TimeoutError:
            elapsed = (time.perf_counter() - start) * 1000
            return RequestOutcome.failed("timeout", elapsed)
        except Exception as exc:  # noqa: BLE001
            # request failures are data: the issuer is a black box
            elapsed = (time.perf_counter() - start) * 1000
            return RequestOutcome.failed(f"{type(exc).__name__}: {exc}", elapsed)

    async def _pause(self, delay_s: float) -> bool:
        """
        Sleep for *delay_s* or until the run is cancelled.

        Returns True when the wait ended because of the cancellation.
        """
        if delay_s <= 0:
            return self.cancelled
        try:
            await asyncio.wait_for(self.cancel_event.wait(), timeout=delay_s)
        except TimeoutError:
            return False
        return True

    async def run(self) -> int:
        """Execute the request sequence, return how many requests were issued."""
        total = self.config.requests_per_actor

        for i in range(total):
            if self.cancelled:
                logger.info("actor %d interrupted after %d/%d", self.actor_id, i, total)
                break

            outcome = await self._issue_once()
            self.issued += 1
            # recorded before any cancellation check: an issued request is
            # never dropped
            self.stats.record_outcome(outcome)
            if outcome.success:
                logger.debug(
                    "actor %d request %d/%d ok (%.0f ms)",
                    self.actor_id, i + 1, total, outcome.latency_ms,
                )
            else:
                logger.debug(
                    "actor %d request %d/%d failed after %.0f ms: %s",
                    self.actor_id, i + 1, total, outcome.latency_ms, outcome.reason,
                )
            if self.on_outcome is not None:
                self.on_outcome()

            if i < total - 1 and await self._pause(self.sample_delay_s()):
                logger.info(
                    "actor %d interrupted after %d/%d",
                    self.actor_id, i + 1, total,
                )
                break

        return self.issued
