"""Applying individual preference assignments with capability checks."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from services.capabilities import CapabilityProber
from services.gsettings import PreferenceStore, PreferenceValue
from services.runner import TOOL_FAILURES, failure_detail

logger = logging.getLogger(__name__)


class ApplicationResult(Enum):
    APPLIED = "applied"
    SKIPPED_CAPABILITY_MISSING = "skipped"
    FAILED_EXTERNAL_TOOL = "failed"


@dataclass(frozen=True)
class PreferenceAssignment:
    schema: str
    key: str
    value: PreferenceValue


@dataclass
class StepResult:
    name: str
    result: ApplicationResult
    detail: str = ""

    @property
    def success(self) -> bool:
        return self.result is not ApplicationResult.FAILED_EXTERNAL_TOOL


class PreferenceApplier:
    def __init__(self, store: PreferenceStore, prober: CapabilityProber) -> None:
        self._store = store
        self._prober = prober

    def apply(self, assignment: PreferenceAssignment) -> ApplicationResult:
        if not self._prober.has_schema(assignment.schema):
            logger.warning("Schema %s not found; skipping %s", assignment.schema, assignment.key)
            return ApplicationResult.SKIPPED_CAPABILITY_MISSING
        if not self._prober.has_key(assignment.schema, assignment.key):
            logger.warning("Key %s missing from %s; skipping", assignment.key, assignment.schema)
            return ApplicationResult.SKIPPED_CAPABILITY_MISSING
        return self.apply_unconditional(assignment)

    def apply_unconditional(self, assignment: PreferenceAssignment) -> ApplicationResult:
        try:
            self._store.set(assignment.schema, assignment.key, assignment.value)
        except TOOL_FAILURES as exc:
            logger.warning("Could not set %s %s: %s", assignment.schema, assignment.key, failure_detail(exc))
            return ApplicationResult.FAILED_EXTERNAL_TOOL
        logger.debug("Set %s %s = %r", assignment.schema, assignment.key, assignment.value)
        return ApplicationResult.APPLIED

    def apply_all(
        self, assignments: Iterable[PreferenceAssignment], *, checked: bool = True
    ) -> list[ApplicationResult]:
        apply = self.apply if checked else self.apply_unconditional
        return [apply(assignment) for assignment in assignments]


def combine_results(results: Iterable[ApplicationResult]) -> ApplicationResult:
    """Collapse per-key outcomes into one step outcome.

    Any failure wins, then any applied key, otherwise the step was skipped.
    """
    collected = list(results)
    if ApplicationResult.FAILED_EXTERNAL_TOOL in collected:
        return ApplicationResult.FAILED_EXTERNAL_TOOL
    if ApplicationResult.APPLIED in collected:
        return ApplicationResult.APPLIED
    return ApplicationResult.SKIPPED_CAPABILITY_MISSING
