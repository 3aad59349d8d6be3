"""Best-effort apt package installation."""
from __future__ import annotations

import logging
from typing import Sequence

from services.capabilities import CapabilityProber
from services.preferences import ApplicationResult, StepResult
from services.runner import CommandRunner, format_command_detail

logger = logging.getLogger(__name__)

STEP_NAME = "Packages"


class AptInstaller:
    """Runs ``apt update`` and one ``apt install -y`` for the whole package list."""

    def __init__(self, runner: CommandRunner, prober: CapabilityProber) -> None:
        self._runner = runner
        self._prober = prober

    def is_available(self) -> bool:
        return self._prober.has_command("apt") and self._prober.has_command("sudo")

    def install(self, packages: Sequence[str]) -> StepResult:
        if not packages:
            return StepResult(STEP_NAME, ApplicationResult.SKIPPED_CAPABILITY_MISSING, "nothing to install")
        if not self.is_available():
            logger.warning("apt or sudo not available; skipping package installation.")
            return StepResult(STEP_NAME, ApplicationResult.SKIPPED_CAPABILITY_MISSING, "apt unavailable")
        logger.info("Installing packages: %s", " ".join(packages))
        update = self._runner.run(self._build_command("update"))
        if update.returncode != 0:
            logger.warning("apt update failed (%s); continuing with install", format_command_detail(update))
        completed = self._runner.run(self._build_command("install", "-y", *packages))
        detail = format_command_detail(completed)
        if completed.returncode != 0:
            logger.warning("apt install failed: %s", detail)
            return StepResult(STEP_NAME, ApplicationResult.FAILED_EXTERNAL_TOOL, detail)
        return StepResult(STEP_NAME, ApplicationResult.APPLIED, f"{len(packages)} package(s)")

    def _build_command(self, verb: str, *args: str) -> list[str]:
        return ["sudo", "apt", verb, *args]
