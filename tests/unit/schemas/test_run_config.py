"""Validation tests for :class:`RunConfig`."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from loadpulse.config.constants import RunLimits, TargetProfile, TimeDefaults
from loadpulse.schemas.run_config import RunConfig

# --------------------------------------------------------------------------- #
# Helpers                                                                     #
# --------------------------------------------------------------------------- #


def _wire(**overrides: Any) -> dict[str, Any]:
    """camelCase payload as sent by the dashboard"""
    payload: dict[str, Any] = {
        "actorCount": 2,
        "requestsPerActor": 3,
        "minDelayMs": 100,
        "maxDelayMs": 200,
        "targetProfile": "Mobile",
    }
    payload.update(overrides)
    return payload


# --------------------------------------------------------------------------- #
# Accepted payloads                                                           #
# --------------------------------------------------------------------------- #


def test_camel_case_payload_is_accepted() -> None:
    """Wire names map onto the snake_case attributes."""
    cfg = RunConfig.model_validate(_wire())
    assert cfg.actor_count == 2
    assert cfg.requests_per_actor == 3
    assert cfg.min_delay_ms == 100
    assert cfg.max_delay_ms == 200
    assert cfg.target_profile is TargetProfile.MOBILE
    assert cfg.max_total_requests == 6


def test_snake_case_construction_and_defaults() -> None:
    """Delays and profile fall back to their defaults."""
    cfg = RunConfig(actor_count=1, requests_per_actor=1)
    assert cfg.min_delay_ms == TimeDefaults.MIN_DELAY_MS
    assert cfg.max_delay_ms == TimeDefaults.MAX_DELAY_MS
    assert cfg.target_profile is TargetProfile.DESKTOP


def test_equal_delay_bounds_are_allowed() -> None:
    """min == max means a fixed delay."""
    cfg = RunConfig.model_validate(_wire(minDelayMs=500, maxDelayMs=500))
    assert cfg.min_delay_ms == cfg.max_delay_ms == 500


def test_dump_by_alias_round_trips_wire_names() -> None:
    """Serialized with aliases the config keeps the wire names."""
    dumped = RunConfig.model_validate(_wire()).model_dump(by_alias=True)
    assert set(dumped) == {
        "actorCount",
        "requestsPerActor",
        "minDelayMs",
        "maxDelayMs",
        "targetProfile",
    }


# --------------------------------------------------------------------------- #
# Rejected payloads                                                           #
# --------------------------------------------------------------------------- #


@pytest.mark.parametrize(
    "overrides",
    [
        {"actorCount": 0},
        {"requestsPerActor": 0},
        {"actorCount": RunLimits.MAX_ACTORS + 1},
        {"requestsPerActor": RunLimits.MAX_REQUESTS_PER_ACTOR + 1},
        {"minDelayMs": -1},
        {"maxDelayMs": -5, "minDelayMs": 0},
        {"targetProfile": "Tablet"},
        {"actorCount": "many"},
    ],
)
def test_out_of_range_values_are_rejected(overrides: dict[str, Any]) -> None:
    """Every bound of the configuration is enforced."""
    with pytest.raises(ValidationError):
        RunConfig.model_validate(_wire(**overrides))


def test_inverted_delay_window_is_rejected() -> None:
    """minDelayMs greater than maxDelayMs is an empty window."""
    with pytest.raises(ValidationError, match="minDelayMs"):
        RunConfig.model_validate(_wire(minDelayMs=300, maxDelayMs=100))


def test_unknown_fields_are_rejected() -> None:
    """Typos in the payload are not silently ignored."""
    with pytest.raises(ValidationError):
        RunConfig.model_validate(_wire(actors=4))


def test_missing_required_fields_are_rejected() -> None:
    """actorCount and requestsPerActor have no default."""
    with pytest.raises(ValidationError):
        RunConfig.model_validate({"minDelayMs": 0, "maxDelayMs": 0})


def test_config_is_immutable() -> None:
    """A run configuration cannot change once built."""
    cfg = RunConfig.model_validate(_wire())
    with pytest.raises(ValidationError):
        cfg.actor_count = 10  # type: ignore[misc]
