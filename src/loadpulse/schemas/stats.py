"""Define the statistics pushed to the subscribers"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from loadpulse.config.constants import RunPhase, RunStatus
from loadpulse.schemas.run_config import RunConfig


class StatsSnapshot(BaseModel):
    """
    Immutable copy of the aggregate statistics at one point in time.

    Serialized with ``by_alias=True`` the payload matches the shape the
    dashboard expects: ``totalRequests``, ``successCount``, ``errorCount``,
    ``averageLatencyMs``, ``minLatencyMs``, ``maxLatencyMs``,
    ``latencySamples`` and ``status``, plus throughput and percentiles.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    total_requests: int = Field(ge=0)
    success_count: int = Field(ge=0)
    error_count: int = Field(ge=0)
    average_latency_ms: float = Field(default=0.0, ge=0)
    min_latency_ms: float = Field(default=0.0, ge=0)
    max_latency_ms: float = Field(default=0.0, ge=0)
    p50_latency_ms: float = Field(default=0.0, ge=0)
    p95_latency_ms: float = Field(default=0.0, ge=0)
    p99_latency_ms: float = Field(default=0.0, ge=0)
    latency_samples: tuple[float, ...] = ()
    throughput_rps: float = Field(default=0.0, ge=0)
    elapsed_ms: float = Field(default=0.0, ge=0)
    started_at: float = Field(description="Unix timestamp of the run start.")
    status: RunStatus
    error: str | None = None

    def to_wire(self) -> dict[str, Any]:
        """camelCase JSON-ready dictionary"""
        return self.model_dump(by_alias=True, mode="json")


class OrchestratorStatus(BaseModel):
    """Answer of ``GET /status``: current phase plus the freshest snapshot."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    phase: RunPhase
    config: RunConfig | None = None
    stats: StatsSnapshot | None = None
