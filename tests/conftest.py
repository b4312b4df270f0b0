"""Pytest configuration file for setting up test fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from numpy.random import Generator as NpGenerator
from numpy.random import default_rng

from loadpulse.config.settings import Settings
from loadpulse.main import create_app
from loadpulse.runtime.orchestrator import LoadTestOrchestrator
from loadpulse.schemas.run_config import RunConfig
from tests.stubs import FixedSelector, RecordingChannel, StubIssuer


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture(scope="session")
def rng() -> NpGenerator:
    """Deterministic NumPy RNG shared across tests (seed=0)."""
    return default_rng(0)


@pytest.fixture
def stub_issuer() -> StubIssuer:
    """Issuer that always succeeds instantly."""
    return StubIssuer()


@pytest.fixture
def selector() -> FixedSelector:
    """Constant target selector."""
    return FixedSelector()


@pytest.fixture
def channel() -> RecordingChannel:
    """Channel logging every published event."""
    return RecordingChannel()


@pytest.fixture
def quick_config() -> RunConfig:
    """Three actors, five requests each, no think time."""
    return RunConfig(
        actor_count=3,
        requests_per_actor=5,
        min_delay_ms=0,
        max_delay_ms=0,
    )


@pytest.fixture
def slow_config() -> RunConfig:
    """Two actors with a think time far longer than any test."""
    return RunConfig(
        actor_count=2,
        requests_per_actor=50,
        min_delay_ms=60_000,
        max_delay_ms=60_000,
    )


@pytest.fixture
def orchestrator(
    stub_issuer: StubIssuer,
    selector: FixedSelector,
    channel: RecordingChannel,
) -> LoadTestOrchestrator:
    """
    Orchestrator wired to the stub collaborators.

    The request timeout is kept short so that tests exercising hanging
    issuers stay fast, and every outcome publishes an update.
    """
    return LoadTestOrchestrator(
        issuer=stub_issuer,
        selector=selector,
        channel=channel,
        request_timeout_s=0.2,
        update_interval_s=0.0,
        rng=default_rng(0),
    )


# --------------------------------------------------------------------------- #
# FastAPI application                                                         #
# --------------------------------------------------------------------------- #


@pytest.fixture
def test_settings() -> Settings:
    """Settings for the test environment, updates on every outcome."""
    return Settings(environment="test", update_interval_ms=0, request_timeout_s=1.0)


@pytest.fixture
def app(
    test_settings: Settings,
    stub_issuer: StubIssuer,
    selector: FixedSelector,
) -> FastAPI:
    """Application wired to the stub collaborators."""
    return create_app(app_settings=test_settings, issuer=stub_issuer, selector=selector)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """TestClient running the lifespan (orchestrator built on startup)."""
    with TestClient(app) as test_client:
        yield test_client
