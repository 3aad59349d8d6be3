"""Picking the first installed theme, icon or cursor set from a preference list."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

from services.capabilities import CapabilityProber

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceCandidateList:
    category: str
    names: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.names:
            raise ValueError(f"Candidate list for {self.category} needs at least a fallback")
        if any(not name for name in self.names):
            raise ValueError(f"Empty resource name in {self.category} candidates")

    @property
    def fallback(self) -> str:
        return self.names[-1]


class ResourceSelector:
    def __init__(self, prober: CapabilityProber) -> None:
        self._prober = prober

    def select(self, candidates: ResourceCandidateList) -> str:
        for name in candidates.names:
            if self._prober.has_directory(candidates.category, name):
                return name
        logger.warning(
            "No %s candidate found among %s; using %s",
            candidates.category,
            ", ".join(candidates.names),
            candidates.fallback,
        )
        return candidates.fallback
