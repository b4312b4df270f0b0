"""Target selection strategies used by the actors"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol
from urllib.parse import urlencode

import numpy as np

from loadpulse.config.constants import SEARCH_KEYWORDS, USER_AGENTS, TargetProfile


@dataclass(frozen=True)
class Target:
    """Opaque descriptor handed to the request issuer."""

    url: str
    headers: dict[str, str] = field(default_factory=dict)
    label: str = ""


class TargetSelector(Protocol):
    """Strategy picking the target of the next request."""

    def select(self, profile: TargetProfile) -> Target:
        """Return the target for an actor running with *profile*."""
        ...


class SearchTargetSelector:
    """
    Random search query against a search endpoint.

    The keyword is drawn uniformly from *keywords* and the ``User-Agent``
    header uniformly from the strings registered for the device profile.
    """

    def __init__(
        self,
        base_url: str,
        *,
        keywords: tuple[str, ...] = SEARCH_KEYWORDS,
        user_agents: dict[TargetProfile, tuple[str, ...]] | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        """Keep the pools and the generator used for the draws"""
        if not keywords:
            msg = "at least one keyword is required"
            raise ValueError(msg)
        self.base_url = base_url
        self.keywords = keywords
        self.user_agents = user_agents or USER_AGENTS
        self.rng = rng or np.random.default_rng()

    def _pick(self, pool: tuple[str, ...]) -> str:
        return pool[int(self.rng.integers(low=0, high=len(pool)))]

    def select(self, profile: TargetProfile) -> Target:
        """Build a search URL for a random keyword"""
        keyword = self._pick(self.keywords)
        headers = {}
        agents = self.user_agents.get(profile, ())
        if agents:
            headers["User-Agent"] = self._pick(agents)
        query = urlencode({"q": keyword})
        return Target(url=f"{self.base_url}?{query}", headers=headers, label=keyword)
