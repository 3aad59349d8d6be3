"""Enable/disable toggles for installed GNOME Shell extensions."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable

from services.capabilities import CapabilityProber
from services.gnome_extensions import ExtensionManager
from services.preferences import ApplicationResult
from services.runner import TOOL_FAILURES, failure_detail

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtensionToggleSet:
    to_enable: FrozenSet[str]
    to_disable: FrozenSet[str]

    def __post_init__(self) -> None:
        overlap = self.to_enable & self.to_disable
        if overlap:
            raise ValueError(f"Extensions both enabled and disabled: {', '.join(sorted(overlap))}")

    @classmethod
    def build(cls, to_enable: Iterable[str], to_disable: Iterable[str]) -> ExtensionToggleSet:
        return cls(frozenset(to_enable), frozenset(to_disable))


class ExtensionToggler:
    def __init__(
        self,
        manager: ExtensionManager,
        prober: CapabilityProber,
        *,
        sleep: Callable[[float], None] = time.sleep,
        reload_delay: float = 1.0,
    ) -> None:
        self._manager = manager
        self._prober = prober
        self._sleep = sleep
        self._reload_delay = reload_delay

    def toggle(self, toggle_set: ExtensionToggleSet) -> dict[str, ApplicationResult]:
        results: dict[str, ApplicationResult] = {}
        for uuid in sorted(toggle_set.to_enable):
            results[uuid] = self._toggle(uuid, self._manager.enable, "enable")
        for uuid in sorted(toggle_set.to_disable):
            results[uuid] = self._toggle(uuid, self._manager.disable, "disable")
        return results

    def reload(self, uuid: str) -> ApplicationResult:
        """Disable and re-enable ``uuid`` so GNOME Shell picks up changed sources."""
        result = self._toggle(uuid, self._manager.disable, "disable")
        if result is not ApplicationResult.APPLIED:
            return result
        self._sleep(self._reload_delay)
        return self._toggle(uuid, self._manager.enable, "enable")

    def _toggle(self, uuid: str, action: Callable[[str], None], verb: str) -> ApplicationResult:
        if not self._prober.has_extension(uuid):
            logger.debug("Extension %s not installed; cannot %s", uuid, verb)
            return ApplicationResult.SKIPPED_CAPABILITY_MISSING
        try:
            action(uuid)
        except TOOL_FAILURES as exc:
            logger.warning("Failed to %s extension %s: %s", verb, uuid, failure_detail(exc))
            return ApplicationResult.FAILED_EXTERNAL_TOOL
        logger.info("Extension %s: %sd", uuid, verb)
        return ApplicationResult.APPLIED
