"""Public modules"""
from .core.issuer import HttpxRequestIssuer, RequestIssuer
from .core.targets import SearchTargetSelector, Target, TargetSelector
from .metrics.aggregate import StatsAggregate
from .runtime.channel import Subscription, UpdateChannel
from .runtime.orchestrator import LoadTestOrchestrator
from .runtime.outcome import RequestOutcome
from .schemas.events import RunEvent
from .schemas.run_config import RunConfig
from .schemas.stats import StatsSnapshot

__all__ = [
    "HttpxRequestIssuer",
    "LoadTestOrchestrator",
    "RequestIssuer",
    "RequestOutcome",
    "RunConfig",
    "RunEvent",
    "SearchTargetSelector",
    "StatsAggregate",
    "StatsSnapshot",
    "Subscription",
    "Target",
    "TargetSelector",
    "UpdateChannel",
]
