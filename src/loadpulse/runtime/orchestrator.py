"""
Run lifecycle of the load test.

The :class:`LoadTestOrchestrator` is the single owner of the process-wide
run state.  It accepts ``start`` / ``stop`` commands, fans out one
:class:`~loadpulse.runtime.actor.ActorRuntime` task per actor, republishes
aggregate snapshots on the :class:`~loadpulse.runtime.channel.UpdateChannel`
and emits exactly one terminal event per run before going back to idle.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np
from pydantic import ValidationError

from loadpulse.config.constants import (
    TERMINAL_EVENTS,
    EventKind,
    RunLimits,
    RunPhase,
    RunStatus,
    TimeDefaults,
)
from loadpulse.exceptions import InvalidRunConfigError, RunInProgressError
from loadpulse.metrics.aggregate import StatsAggregate
from loadpulse.runtime.actor import ActorRuntime
from loadpulse.runtime.channel import UpdateChannel
from loadpulse.schemas.events import RunEvent
from loadpulse.schemas.run_config import RunConfig
from loadpulse.schemas.stats import OrchestratorStatus

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from loadpulse.core.issuer import RequestIssuer
    from loadpulse.core.targets import TargetSelector
    from loadpulse.schemas.stats import StatsSnapshot

logger = logging.getLogger(__name__)


@dataclass
class ActiveRun:
    """Everything that only exists while a run is in flight."""

    config: RunConfig
    stats: StatsAggregate
    cancel_event: asyncio.Event = field(default_factory=asyncio.Event)
    task: asyncio.Task[None] | None = None


class LoadTestOrchestrator:
    """Owns the ``IDLE → RUNNING → IDLE`` state machine of the load test."""

    def __init__(  # noqa: PLR0913
        self,
        *,
        issuer: RequestIssuer,
        selector: TargetSelector,
        channel: UpdateChannel | None = None,
        request_timeout_s: float = float(TimeDefaults.REQUEST_TIMEOUT_S),
        update_interval_s: float = TimeDefaults.UPDATE_INTERVAL_MS / 1000,
        max_actors: int = RunLimits.MAX_ACTORS,
        max_requests_per_actor: int = RunLimits.MAX_REQUESTS_PER_ACTOR,
        rng: np.random.Generator | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Args:
            issuer: collaborator performing the outbound calls.
            selector: strategy choosing each request target.
            channel: push channel towards the subscribers.
            request_timeout_s: fixed timeout of every request.
            update_interval_s: minimum gap between two ``update`` events,
                0 publishes after every recorded outcome.  Updates are only
                built while the channel has at least one subscriber.
            max_actors: largest accepted ``actor_count``.
            max_requests_per_actor: largest accepted ``requests_per_actor``.
            rng: generator shared by the actors for their delays.
            clock: monotonic clock, injectable for tests.

        """
        self.issuer = issuer
        self.selector = selector
        self.channel = channel or UpdateChannel()
        self.request_timeout_s = request_timeout_s
        self.update_interval_s = update_interval_s
        self.max_actors = max_actors
        self.max_requests_per_actor = max_requests_per_actor
        self.rng = rng or np.random.default_rng()
        self._clock = clock

        self._phase = RunPhase.IDLE
        self._active: ActiveRun | None = None
        self._last_snapshot: StatsSnapshot | None = None
        self._last_publish: float | None = None

    # ------------------------------------------------------------------ #
    # State accessors                                                    #
    # ------------------------------------------------------------------ #

    @property
    def phase(self) -> RunPhase:
        """Current phase of the run state machine."""
        return self._phase

    @property
    def is_running(self) -> bool:
        """True while a run is in flight"""
        return self._phase is RunPhase.RUNNING

    def status(self) -> OrchestratorStatus:
        """Phase plus the live snapshot, or the last terminal one when idle."""
        if self._active is not None:
            return OrchestratorStatus(
                phase=self._phase,
                config=self._active.config,
                stats=self._active.stats.snapshot(),
            )
        return OrchestratorStatus(phase=self._phase, stats=self._last_snapshot)

    # ------------------------------------------------------------------ #
    # Commands                                                           #
    # ------------------------------------------------------------------ #

    def _validate(self, config: RunConfig | Mapping[str, Any]) -> RunConfig:
        """Turn the raw command payload into a :class:`RunConfig`."""
        if not isinstance(config, RunConfig):
            try:
                config = RunConfig.model_validate(config)
            except ValidationError as exc:
                raise InvalidRunConfigError(str(exc)) from exc

        if config.actor_count > self.max_actors:
            msg = f"actorCount must be at most {self.max_actors}"
            raise InvalidRunConfigError(msg)
        if config.requests_per_actor > self.max_requests_per_actor:
            msg = f"requestsPerActor must be at most {self.max_requests_per_actor}"
            raise InvalidRunConfigError(msg)
        return config

    def start(self, config: RunConfig | Mapping[str, Any]) -> RunConfig:
        """
        Launch a new run and return its validated configuration.

        Must be called from a running event loop.  Raises
        :class:`RunInProgressError` while another run is in flight (the
        in-flight run is left untouched) and :class:`InvalidRunConfigError`
        when *config* is not acceptable; in both cases nothing is published.
        """
        if self.is_running:
            logger.info("start refused: a run is already in flight")
            raise RunInProgressError
        run_config = self._validate(config)
        asyncio.get_running_loop()  # RuntimeError outside of an event loop

        run = ActiveRun(config=run_config, stats=StatsAggregate(clock=self._clock))
        self._active = run
        self._phase = RunPhase.RUNNING
        self._last_snapshot = None
        self._last_publish = None

        logger.info(
            "load test started: %d actor(s), %d request(s) each, delay %d-%d ms, %s",
            run_config.actor_count,
            run_config.requests_per_actor,
            run_config.min_delay_ms,
            run_config.max_delay_ms,
            run_config.target_profile,
        )
        self.channel.publish(
            RunEvent(event=EventKind.STARTED, stats=run.stats.snapshot()),
        )
        run.task = asyncio.create_task(self._supervise(run), name="loadpulse-run")
        run.task.add_done_callback(lambda _task: self._release(run))
        return run_config

    def stop(self) -> bool:
        """
        Raise the cancellation signal of the in-flight run.

        Idempotent and non blocking: returns whether a run was signalled, the
        terminal event follows asynchronously once every actor has exited.
        """
        run = self._active
        if run is None:
            return False
        if not run.cancel_event.is_set():
            logger.info("manual stop received")
            run.cancel_event.set()
        return True

    async def wait(self) -> StatsSnapshot | None:
        """Wait for the in-flight run (if any) and return its final snapshot."""
        run = self._active
        if run is not None and run.task is not None:
            # asyncio.wait neither cancels the task nor re-raises its outcome
            await asyncio.wait({run.task})
        return self._last_snapshot

    async def shutdown(self) -> None:
        """Stop the in-flight run and wait until the orchestrator is idle."""
        self.stop()
        await self.wait()

    # ------------------------------------------------------------------ #
    # Run execution                                                      #
    # ------------------------------------------------------------------ #

    def _publish_update(self, run: ActiveRun) -> None:
        """Publish a running snapshot, honouring the update throttle."""
        if self._active is not run or self.channel.subscriber_count == 0:
            return
        now = self._clock()
        if (
            self.update_interval_s > 0
            and self._last_publish is not None
            and now - self._last_publish < self.update_interval_s
        ):
            return
        self._last_publish = now
        self.channel.publish(RunEvent(event=EventKind.UPDATE, stats=run.stats.snapshot()))

    async def _run_actor(self, run: ActiveRun, actor: ActorRuntime) -> int:
        """Run one actor; a fault aborts the whole run through cancellation"""
        try:
            return await actor.run()
        except Exception:
            run.cancel_event.set()
            raise

    async def _supervise(self, run: ActiveRun) -> None:
        """Fan out the actors, join them and close the run."""
        status = RunStatus.COMPLETED
        error: str | None = None
        try:
            actors = [
                ActorRuntime(
                    actor_id=actor_id,
                    config=run.config,
                    stats=run.stats,
                    cancel_event=run.cancel_event,
                    issuer=self.issuer,
                    selector=self.selector,
                    request_timeout_s=self.request_timeout_s,
                    on_outcome=lambda: self._publish_update(run),
                    rng=self.rng,
                )
                for actor_id in range(run.config.actor_count)
            ]
            results = await asyncio.gather(
                *(self._run_actor(run, actor) for actor in actors),
                return_exceptions=True,
            )
            faults = [res for res in results if isinstance(res, BaseException)]
            if faults:
                status = RunStatus.FAILED
                error = f"{type(faults[0]).__name__}: {faults[0]}"
                logger.error("actor fault aborted the run", exc_info=faults[0])
            elif run.cancel_event.is_set():
                status = RunStatus.STOPPED
        except asyncio.CancelledError:
            run.cancel_event.set()
            status = RunStatus.STOPPED
            raise
        except Exception as exc:
            logger.exception("load test aborted by an internal fault")
            status = RunStatus.FAILED
            error = f"{type(exc).__name__}: {exc}"
        finally:
            self._finish(run, status, error)

    def _release(self, run: ActiveRun) -> None:
        """Close a run whose supervisor was cancelled before its first step."""
        if self._active is run:
            self._finish(run, RunStatus.STOPPED, None)

    def _finish(self, run: ActiveRun, status: RunStatus, error: str | None) -> None:
        """Freeze the aggregate, go back to idle and emit the terminal event."""
        final: StatsSnapshot | None
        try:
            final = run.stats.finalize(status, error)
        except Exception as exc:
            logger.exception("could not finalize the statistics")
            status = RunStatus.FAILED
            error = f"{type(exc).__name__}: {exc}"
            final = None

        self._last_snapshot = final
        self._active = None
        self._phase = RunPhase.IDLE

        total = final.total_requests if final is not None else 0
        logger.info("load test %s, total requests: %d", status, total)
        self.channel.publish(
            RunEvent(event=TERMINAL_EVENTS[status], stats=final, error=error),
        )
