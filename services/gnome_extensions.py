"""GNOME Shell extension manager adapter."""
from __future__ import annotations

from typing import Protocol

from services.runner import CommandRunner, SubprocessRunner, run_checked


class ExtensionManager(Protocol):
    def list(self) -> set[str]:  # pragma: no cover - protocol
        ...

    def enable(self, uuid: str) -> None:  # pragma: no cover - protocol
        ...

    def disable(self, uuid: str) -> None:  # pragma: no cover - protocol
        ...


class GnomeExtensionsManager:
    def __init__(self, runner: CommandRunner | None = None) -> None:
        self._runner = runner or SubprocessRunner()

    def list(self) -> set[str]:
        output = run_checked(self._runner, ["gnome-extensions", "list"])
        return {line.strip() for line in output.splitlines() if line.strip()}

    def enable(self, uuid: str) -> None:
        run_checked(self._runner, ["gnome-extensions", "enable", uuid])

    def disable(self, uuid: str) -> None:
        run_checked(self._runner, ["gnome-extensions", "disable", uuid])
