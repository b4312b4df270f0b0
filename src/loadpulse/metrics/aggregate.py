"""
Shared, concurrently updated statistics of a single run.

Every actor of a run writes into the same :class:`StatsAggregate` through
:meth:`StatsAggregate.record_outcome`; subscribers only ever see immutable
:class:`~loadpulse.schemas.stats.StatsSnapshot` copies.  All reads and writes
go through one lock so that a snapshot can never observe ``total_requests``
incremented without the matching success/error count and latency sample.
"""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING

from loadpulse.config.constants import TERMINAL_STATUSES, RunStatus
from loadpulse.exceptions import AggregateFrozenError
from loadpulse.metrics.latency import LatencyKey, summarize_latencies, throughput_rps
from loadpulse.schemas.stats import StatsSnapshot

if TYPE_CHECKING:
    from collections.abc import Callable

    from loadpulse.runtime.outcome import RequestOutcome


class StatsAggregate:
    """Cumulative counters and latency samples of one run."""

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        """
        Args:
            clock: monotonic clock used for elapsed time and throughput.

        """
        self._lock = threading.Lock()
        self._clock = clock
        self._started_at = time.time()
        self._t0 = clock()
        self._finished_at: float | None = None

        self._total_requests = 0
        self._success_count = 0
        self._error_count = 0
        self._latency_samples: list[float] = []
        self._latency_sum = 0.0
        # None until the first successful sample, never exposed as such
        self._min_latency: float | None = None
        self._max_latency = 0.0
        self._status = RunStatus.RUNNING
        self._error: str | None = None

    # ------------------------------------------------------------------ #
    # Writers                                                            #
    # ------------------------------------------------------------------ #

    def record_outcome(self, outcome: RequestOutcome) -> int:
        """
        Account for one finished request and return the new total.

        The whole read-modify-write runs inside the lock: concurrent callers
        are serialized and each call is counted exactly once.
        """
        with self._lock:
            if self._status in TERMINAL_STATUSES:
                msg = f"cannot record an outcome on a {self._status} run"
                raise AggregateFrozenError(msg)

            self._total_requests += 1
            if outcome.success:
                latency = outcome.latency_ms
                self._success_count += 1
                self._latency_samples.append(latency)
                self._latency_sum += latency
                if self._min_latency is None or latency < self._min_latency:
                    self._min_latency = latency
                self._max_latency = max(self._max_latency, latency)
            else:
                self._error_count += 1
            return self._total_requests

    def finalize(self, status: RunStatus, error: str | None = None) -> StatsSnapshot:
        """Tag the aggregate with a terminal *status* and freeze it."""
        if status not in TERMINAL_STATUSES:
            msg = f"{status} is not a terminal status"
            raise ValueError(msg)
        with self._lock:
            if self._status not in TERMINAL_STATUSES:
                self._status = status
                self._error = error
                self._finished_at = self._clock()
            return self._snapshot_locked()

    # ------------------------------------------------------------------ #
    # Readers                                                            #
    # ------------------------------------------------------------------ #

    def snapshot(self) -> StatsSnapshot:
        """Consistent point-in-time copy, safe while writers are active."""
        with self._lock:
            return self._snapshot_locked()

    @property
    def total_requests(self) -> int:
        """Number of outcomes recorded so far."""
        with self._lock:
            return self._total_requests

    @property
    def status(self) -> RunStatus:
        """Current status of the run."""
        with self._lock:
            return self._status

    def _snapshot_locked(self) -> StatsSnapshot:
        """
        Build the snapshot, the caller holds the lock.

        Every value is computed here from already-checked data, so the model
        is constructed without re-validating the whole sample tuple.
        """
        samples = tuple(self._latency_samples)
        count = len(samples)
        now = self._finished_at if self._finished_at is not None else self._clock()
        elapsed_s = max(0.0, now - self._t0)
        percentiles = summarize_latencies(samples)

        return StatsSnapshot.model_construct(
            total_requests=self._total_requests,
            success_count=self._success_count,
            error_count=self._error_count,
            average_latency_ms=self._latency_sum / count if count else 0.0,
            min_latency_ms=self._min_latency if self._min_latency is not None else 0.0,
            max_latency_ms=self._max_latency,
            p50_latency_ms=percentiles[LatencyKey.MEDIAN],
            p95_latency_ms=percentiles[LatencyKey.P95],
            p99_latency_ms=percentiles[LatencyKey.P99],
            latency_samples=samples,
            throughput_rps=throughput_rps(self._total_requests, elapsed_s),
            elapsed_ms=elapsed_s * 1000,
            started_at=self._started_at,
            status=self._status,
            error=self._error,
        )
