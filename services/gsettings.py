"""GSettings-backed preference store."""
from __future__ import annotations

import ast
import re
from typing import Protocol, Sequence, Union

from services.runner import CommandRunner, SubprocessRunner, run_checked

PreferenceValue = Union[bool, int, float, str, Sequence[str]]

GVARIANT_TYPE_PREFIX = re.compile(r"^(?:@[a-z]+|u?int(?:16|32|64)|byte|double|int)\s+")


class PreferenceStore(Protocol):
    def list_schemas(self) -> set[str]:  # pragma: no cover - protocol
        ...

    def list_keys(self, schema: str) -> set[str]:  # pragma: no cover - protocol
        ...

    def get(self, schema: str, key: str) -> PreferenceValue:  # pragma: no cover - protocol
        ...

    def set(self, schema: str, key: str, value: PreferenceValue) -> None:  # pragma: no cover - protocol
        ...


class GSettingsStore:
    """Thin wrapper around the gsettings CLI."""

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self._runner = runner or SubprocessRunner()

    def list_schemas(self) -> set[str]:
        output = run_checked(self._runner, ["gsettings", "list-schemas"])
        return {line.strip() for line in output.splitlines() if line.strip()}

    def list_keys(self, schema: str) -> set[str]:
        output = run_checked(self._runner, ["gsettings", "list-keys", schema])
        return {line.strip() for line in output.splitlines() if line.strip()}

    def get(self, schema: str, key: str) -> PreferenceValue:
        return parse_gvariant(run_checked(self._runner, ["gsettings", "get", schema, key]))

    def set(self, schema: str, key: str, value: PreferenceValue) -> None:
        run_checked(self._runner, ["gsettings", "set", schema, key, format_gvariant(value)])


def format_gvariant(value: PreferenceValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return _quote(value)
    items = list(value)
    if not items:
        return "@as []"
    return "[" + ", ".join(_quote(str(item)) for item in items) + "]"


def parse_gvariant(text: str) -> PreferenceValue:
    """Parse the text form printed by ``gsettings get``.

    Handles booleans, (typed) numbers, quoted strings and string arrays.
    Anything else is returned verbatim.
    """
    raw = text.strip()
    if raw == "true":
        return True
    if raw == "false":
        return False
    raw = GVARIANT_TYPE_PREFIX.sub("", raw)
    try:
        parsed = ast.literal_eval(raw)
    except (ValueError, SyntaxError):
        return raw
    if isinstance(parsed, (list, tuple)):
        return [str(item) for item in parsed]
    if isinstance(parsed, (bool, int, float, str)):
        return parsed
    return raw


def _quote(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"
