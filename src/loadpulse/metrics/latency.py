"""Latency distribution summary computed from the raw samples."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Sequence


class LatencyKey(StrEnum):
    """Keys of the dictionary returned by :func:`summarize_latencies`."""

    MEDIAN = "p50"
    P95    = "p95"
    P99    = "p99"


def summarize_latencies(samples: Sequence[float]) -> dict[LatencyKey, float]:
    """
    Return median, p95 and p99 of *samples* (milliseconds).

    Every key is reported as 0.0 when no sample has been collected yet, the
    snapshot never carries NaN or sentinel values.
    """
    if not samples:
        return dict.fromkeys(LatencyKey, 0.0)

    arr = np.asarray(samples, dtype=float)
    p50, p95, p99 = np.percentile(arr, [50, 95, 99])
    return {
        LatencyKey.MEDIAN: float(p50),
        LatencyKey.P95: float(p95),
        LatencyKey.P99: float(p99),
    }


def throughput_rps(completed: int, elapsed_s: float) -> float:
    """Completed requests per second over *elapsed_s*."""
    if elapsed_s <= 0:
        return 0.0
    return completed / elapsed_s
