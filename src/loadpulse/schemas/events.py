"""Messages exchanged on the update channel and on the WebSocket"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from loadpulse.config.constants import (
    REJECTED_EVENT,
    TERMINAL_EVENTS,
    CommandKind,
    EventKind,
)
from loadpulse.schemas.stats import StatsSnapshot


class RunEvent(BaseModel):
    """One event pushed from the orchestrator to the subscribers."""

    model_config = ConfigDict(frozen=True)

    event: EventKind
    stats: StatsSnapshot | None = None
    error: str | None = None

    @property
    def is_terminal(self) -> bool:
        """True for the single event closing a run"""
        return self.event in TERMINAL_EVENTS.values()

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dictionary, the snapshot is serialized in camelCase"""
        payload: dict[str, Any] = {"event": self.event.value}
        if self.stats is not None:
            payload["stats"] = self.stats.to_wire()
        if self.error is not None:
            payload["error"] = self.error
        return payload


class Command(BaseModel):
    """
    Inbound command received on the WebSocket.

    ``config`` is kept as a raw mapping: it is validated by the orchestrator
    so that an invalid configuration is reported as a rejection of the
    ``start_test`` command instead of a malformed message.
    """

    model_config = ConfigDict(extra="ignore")

    type: CommandKind
    config: dict[str, Any] = Field(default_factory=dict)


def rejection(reason: str) -> dict[str, str]:
    """Reply sent to a single client whose command was refused"""
    return {"event": REJECTED_EVENT, "error": reason}
