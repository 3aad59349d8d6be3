"""Custom keybinding that opens a Spotlight-like launcher."""
from __future__ import annotations

import logging

from macosify_ubuntu.constants import (
    CUSTOM_KEYBINDING_PATH,
    CUSTOM_KEYBINDING_SCHEMA,
    CUSTOM_KEYBINDING_SLOTS,
    MEDIA_KEYS_SCHEMA,
    LauncherShortcut,
)
from services.capabilities import CapabilityProber
from services.gsettings import PreferenceStore
from services.preferences import (
    ApplicationResult,
    PreferenceApplier,
    PreferenceAssignment,
    StepResult,
    combine_results,
)
from services.runner import TOOL_FAILURES, failure_detail

logger = logging.getLogger(__name__)

LIST_KEY = "custom-keybindings"


class LauncherShortcutService:
    def __init__(self, store: PreferenceStore, prober: CapabilityProber, applier: PreferenceApplier) -> None:
        self._store = store
        self._prober = prober
        self._applier = applier

    def apply(self, shortcut: LauncherShortcut) -> StepResult:
        name = "Launcher Shortcut"
        if not self._prober.has_command(shortcut.command):
            logger.warning("%s not found; skipping Spotlight shortcut.", shortcut.command)
            return StepResult(name, ApplicationResult.SKIPPED_CAPABILITY_MISSING, f"{shortcut.command} missing")

        logger.info("Setting %s to open %s", shortcut.binding, shortcut.command)
        try:
            current = self._current_paths()
        except TOOL_FAILURES as exc:
            detail = failure_detail(exc)
            logger.warning("Could not read %s %s: %s", MEDIA_KEYS_SCHEMA, LIST_KEY, detail)
            return StepResult(name, ApplicationResult.FAILED_EXTERNAL_TOOL, detail)

        path = self._existing_slot(current, shortcut) or self._free_slot(current)
        if path is None:
            logger.warning("Could not allocate a custom keybinding slot.")
            return StepResult(name, ApplicationResult.SKIPPED_CAPABILITY_MISSING, "no free slot")

        results = []
        if path not in current:
            results.append(
                self._applier.apply_unconditional(
                    PreferenceAssignment(MEDIA_KEYS_SCHEMA, LIST_KEY, tuple(current) + (path,))
                )
            )
        entry = f"{CUSTOM_KEYBINDING_SCHEMA}:{path}"
        results.extend(
            self._applier.apply_all(
                [
                    PreferenceAssignment(entry, "name", shortcut.name),
                    PreferenceAssignment(entry, "command", shortcut.command),
                    PreferenceAssignment(entry, "binding", shortcut.binding),
                ],
                checked=False,
            )
        )
        return StepResult(name, combine_results(results), path)

    def _current_paths(self) -> list[str]:
        value = self._store.get(MEDIA_KEYS_SCHEMA, LIST_KEY)
        if isinstance(value, str):
            return []
        return [str(item) for item in value]

    def _existing_slot(self, paths: list[str], shortcut: LauncherShortcut) -> str | None:
        for path in paths:
            try:
                command = self._store.get(f"{CUSTOM_KEYBINDING_SCHEMA}:{path}", "command")
            except TOOL_FAILURES:
                continue
            if command == shortcut.command:
                return path
        return None

    def _free_slot(self, paths: list[str]) -> str | None:
        for index in range(CUSTOM_KEYBINDING_SLOTS):
            candidate = CUSTOM_KEYBINDING_PATH.format(index=index)
            if candidate not in paths:
                return candidate
        return None
