"""Keeping power-profiles-daemon enabled unless it was masked on purpose."""
from __future__ import annotations

import logging

from services.capabilities import CapabilityProber
from services.preferences import ApplicationResult, StepResult
from services.runner import CommandRunner, format_command_detail

logger = logging.getLogger(__name__)

POWER_PROFILES_UNIT = "power-profiles-daemon"


def ensure_power_profiles(runner: CommandRunner, prober: CapabilityProber) -> StepResult:
    name = "Power Profiles"
    if not prober.has_command("systemctl"):
        logger.warning("Missing command: systemctl")
        return StepResult(name, ApplicationResult.SKIPPED_CAPABILITY_MISSING, "systemctl unavailable")

    state = runner.run(["systemctl", "show", "-p", "UnitFileState", POWER_PROFILES_UNIT])
    if "masked" in (state.stdout or ""):
        logger.warning("%s is masked; leaving it unchanged (could be intentional).", POWER_PROFILES_UNIT)
        return StepResult(name, ApplicationResult.SKIPPED_CAPABILITY_MISSING, "unit masked")

    completed = runner.run(["sudo", "systemctl", "enable", "--now", POWER_PROFILES_UNIT])
    detail = format_command_detail(completed)
    if completed.returncode != 0:
        logger.warning("Could not enable %s: %s", POWER_PROFILES_UNIT, detail)
        return StepResult(name, ApplicationResult.FAILED_EXTERNAL_TOOL, detail)
    return StepResult(name, ApplicationResult.APPLIED, detail)
