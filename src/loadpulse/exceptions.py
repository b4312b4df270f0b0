"""Exceptions raised at the orchestrator seam."""


class LoadTestError(Exception):
    """Base class for every error raised by loadpulse."""


class InvalidRunConfigError(LoadTestError):
    """The ``start_test`` configuration did not pass validation."""


class RunInProgressError(LoadTestError):
    """A run is already in flight, the new ``start_test`` is refused."""

    def __init__(self) -> None:
        """Fixed message, the in-flight run is left untouched."""
        super().__init__("a load test is already running")


class AggregateFrozenError(LoadTestError):
    """An outcome was recorded after the run reached a terminal status."""
