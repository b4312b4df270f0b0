"""
Application-wide constants and configuration values.

This module groups all the *static* enumerations used by the loadpulse
service so that:

* JSON payloads exchanged over the WebSocket can be strictly validated with
  Pydantic.
* The orchestrator, the actors and the transport layer share a single source
  of truth for statuses and event names.
* Ruff, mypy and IDEs can leverage the strong typing provided by Enum classes.

**IMPORTANT:** Changing any enum *value* is a breaking-change for every
connected front-end.  Add new members whenever possible instead of renaming
existing ones.
"""

from enum import IntEnum, StrEnum

# ======================================================================
# CONSTANTS FOR THE RUN CONFIGURATION
# ======================================================================


class TimeDefaults(IntEnum):
    """
    Default time-related constants.

    Unless the name says otherwise values are expressed in **milliseconds**.
    """

    REQUEST_TIMEOUT_S = 10          # fixed timeout for every outbound call
    MIN_DELAY_MS = 1_000            # default lower bound of the think time
    MAX_DELAY_MS = 3_000            # default upper bound of the think time
    UPDATE_INTERVAL_MS = 250        # min gap between updates, 0 → every outcome


class RunLimits(IntEnum):
    """Lower / upper bounds used to validate a :class:`RunConfig`."""

    MIN_ACTORS = 1
    MAX_ACTORS = 500
    MIN_REQUESTS_PER_ACTOR = 1
    MAX_REQUESTS_PER_ACTOR = 10_000
    MIN_DELAY_MS = 0


class TargetProfile(StrEnum):
    """
    Device category the simulated actors pretend to be.

    The *string value* is exactly the identifier that must appear in the
    ``targetProfile`` field of a ``start_test`` command.
    """

    DESKTOP = "Desktop"
    MOBILE  = "Mobile"

# ======================================================================
# CONSTANTS FOR THE RUN LIFECYCLE
# ======================================================================


class RunPhase(StrEnum):
    """
    Phase of the process-wide run state machine.

    ``IDLE → RUNNING → IDLE``; the terminal outcome of a run is described by
    :class:`RunStatus`, the phase only says whether a run is in flight.
    """

    IDLE    = "idle"
    RUNNING = "running"


class RunStatus(StrEnum):
    """Status carried by every statistics snapshot."""

    RUNNING   = "running"
    COMPLETED = "completed"
    STOPPED   = "stopped"
    FAILED    = "failed"


TERMINAL_STATUSES = frozenset(
    {RunStatus.COMPLETED, RunStatus.STOPPED, RunStatus.FAILED},
)

# ======================================================================
# CONSTANTS FOR THE UPDATE CHANNEL
# ======================================================================


class EventKind(StrEnum):
    """
    Events pushed from the orchestrator to the subscribers.

    .. list-table::
       :header-rows: 1

       * - Constant
         - Meaning
       * - ``STARTED``
         - Emitted once when a run is accepted.
       * - ``UPDATE``
         - Emitted zero or more times, carries a running snapshot.
       * - ``COMPLETED``
         - Terminal: every actor exhausted its requests.
       * - ``STOPPED``
         - Terminal: the run was cancelled through ``stop_test``.
       * - ``FAILED``
         - Terminal: an internal fault aborted the run.
    """

    STARTED   = "started"
    UPDATE    = "update"
    COMPLETED = "completed"
    STOPPED   = "stopped"
    FAILED    = "failed"


# terminal status → terminal event
TERMINAL_EVENTS = {
    RunStatus.COMPLETED: EventKind.COMPLETED,
    RunStatus.STOPPED:   EventKind.STOPPED,
    RunStatus.FAILED:    EventKind.FAILED,
}


class CommandKind(StrEnum):
    """Inbound commands accepted on the WebSocket."""

    START_TEST = "start_test"
    STOP_TEST  = "stop_test"


# Reply sent only to the client whose command was refused
REJECTED_EVENT = "rejected"

# ======================================================================
# CONSTANTS FOR THE DEFAULT TARGET SELECTOR
# ======================================================================

SEARCH_KEYWORDS: tuple[str, ...] = (
    "latest tech news",
    "weather today",
    "best pizza near me",
    "how to learn react",
    "javascript async await",
    "world news headlines",
    "stock market summary",
    "healthy recipes",
    "upcoming movies",
    "coding best practices",
    "travel destinations",
    "fitness tips",
)

USER_AGENTS: dict[TargetProfile, tuple[str, ...]] = {
    TargetProfile.DESKTOP: (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_5) AppleWebKit/605.1.15 "
        "(KHTML, like Gecko) Version/17.5 Safari/605.1.15",
        "Mozilla/5.0 (X11; Linux x86_64; rv:127.0) Gecko/20100101 Firefox/127.0",
    ),
    TargetProfile.MOBILE: (
        "Mozilla/5.0 (iPhone; CPU iPhone OS 17_5 like Mac OS X) "
        "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.5 "
        "Mobile/15E148 Safari/604.1",
        "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/126.0.0.0 Mobile Safari/537.36",
    ),
}
