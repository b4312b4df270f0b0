"""Define the configuration accepted by a ``start_test`` command"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from loadpulse.config.constants import RunLimits, TargetProfile, TimeDefaults


class RunConfig(BaseModel):
    """
    Immutable parameters of a single run.

    The wire format uses camelCase (``actorCount``, ``requestsPerActor``,
    ``minDelayMs``, ``maxDelayMs``, ``targetProfile``); snake_case names are
    accepted as well so the model is comfortable to build from Python.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    actor_count: int = Field(
        ge=RunLimits.MIN_ACTORS,
        le=RunLimits.MAX_ACTORS,
        description="Number of concurrent simulated actors.",
    )
    requests_per_actor: int = Field(
        ge=RunLimits.MIN_REQUESTS_PER_ACTOR,
        le=RunLimits.MAX_REQUESTS_PER_ACTOR,
        description="Bounded number of requests issued by each actor.",
    )
    min_delay_ms: int = Field(
        default=TimeDefaults.MIN_DELAY_MS,
        ge=RunLimits.MIN_DELAY_MS,
        description="Lower bound (inclusive) of the inter-request delay.",
    )
    max_delay_ms: int = Field(
        default=TimeDefaults.MAX_DELAY_MS,
        ge=RunLimits.MIN_DELAY_MS,
        description="Upper bound (inclusive) of the inter-request delay.",
    )
    target_profile: TargetProfile = TargetProfile.DESKTOP

    @model_validator(mode="after")
    def ensure_delay_bounds_are_ordered(self) -> "RunConfig":
        """The delay window must not be empty"""
        if self.min_delay_ms > self.max_delay_ms:
            msg = (
                f"minDelayMs ({self.min_delay_ms}) must be lower than or "
                f"equal to maxDelayMs ({self.max_delay_ms})"
            )
            raise ValueError(msg)
        return self

    @property
    def max_total_requests(self) -> int:
        """Upper bound of the number of requests issued by the whole run."""
        return self.actor_count * self.requests_per_actor
