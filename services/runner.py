"""Command execution seam shared by every external-tool adapter."""
from __future__ import annotations

import logging
import subprocess
from typing import Protocol, Sequence

logger = logging.getLogger(__name__)


class MissingToolError(RuntimeError):
    """A required executable is not installed at all."""

    def __init__(self, tool: str) -> None:
        super().__init__(f"Missing command: {tool}")
        self.tool = tool


class ExternalToolError(RuntimeError):
    def __init__(self, command: Sequence[str], detail: str) -> None:
        super().__init__(f"{' '.join(command)} failed: {detail}")
        self.command = tuple(command)
        self.detail = detail


TOOL_FAILURES = (ExternalToolError, MissingToolError, OSError)


def failure_detail(exc: Exception) -> str:
    return exc.detail if isinstance(exc, ExternalToolError) else str(exc)


class CommandRunner(Protocol):
    def run(self, command: Sequence[str]) -> subprocess.CompletedProcess[str]:  # pragma: no cover - protocol
        ...


class SubprocessRunner:
    def run(self, command: Sequence[str]) -> subprocess.CompletedProcess[str]:
        logger.debug("$ %s", " ".join(command))
        try:
            return subprocess.run(list(command), capture_output=True, text=True, check=False)
        except FileNotFoundError as exc:
            raise MissingToolError(command[0]) from exc


def format_command_detail(completed: subprocess.CompletedProcess[str]) -> str:
    detail_parts = [f"exit={completed.returncode}"]
    stdout = (completed.stdout or "").strip()
    stderr = (completed.stderr or "").strip()
    if stdout:
        detail_parts.append(f"stdout: {stdout}")
    if stderr:
        detail_parts.append(f"stderr: {stderr}")
    return ", ".join(detail_parts)


def run_checked(runner: CommandRunner, command: Sequence[str]) -> str:
    """Run ``command`` and return its stripped stdout, raising on a non-zero exit."""
    completed = runner.run(command)
    if completed.returncode != 0:
        raise ExternalToolError(command, format_command_detail(completed))
    return (completed.stdout or "").strip()
