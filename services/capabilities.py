"""Read-only probes that decide which settings and resources exist on this machine."""
from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable, Protocol

from services.gnome_extensions import ExtensionManager
from services.gsettings import PreferenceStore
from services.runner import ExternalToolError

logger = logging.getLogger(__name__)

THEME_CATEGORY = "theme"
ICON_CATEGORY = "icon"
SYSTEM_THEME_ROOT = Path("/usr/share/themes")
SYSTEM_ICON_ROOT = Path("/usr/share/icons")


class CapabilityProber(Protocol):
    def has_schema(self, schema: str) -> bool:  # pragma: no cover - protocol
        ...

    def has_key(self, schema: str, key: str) -> bool:  # pragma: no cover - protocol
        ...

    def has_directory(self, category: str, name: str) -> bool:  # pragma: no cover - protocol
        ...

    def has_extension(self, uuid: str) -> bool:  # pragma: no cover - protocol
        ...

    def has_command(self, name: str) -> bool:  # pragma: no cover - protocol
        ...


def search_roots(category: str, home: Path) -> tuple[Path, ...]:
    if category == THEME_CATEGORY:
        return (home / ".themes", home / ".local" / "share" / "themes", SYSTEM_THEME_ROOT)
    if category == ICON_CATEGORY:
        return (home / ".icons", home / ".local" / "share" / "icons", SYSTEM_ICON_ROOT)
    raise ValueError(f"Unknown resource category: {category}")


class SystemCapabilityProber:
    """Answers capability questions from gsettings, gnome-extensions, the filesystem and PATH.

    A failing listing call counts as "not present"; only a missing tool
    (``MissingToolError``) escapes.
    """

    def __init__(
        self,
        store: PreferenceStore,
        extensions: ExtensionManager,
        *,
        home: Path | None = None,
        which: Callable[[str], str | None] = shutil.which,
    ) -> None:
        self._store = store
        self._extensions = extensions
        self._home = home or Path.home()
        self._which = which

    def has_schema(self, schema: str) -> bool:
        try:
            return schema in self._store.list_schemas()
        except ExternalToolError as exc:
            logger.debug("Schema listing failed: %s", exc)
            return False

    def has_key(self, schema: str, key: str) -> bool:
        try:
            return key in self._store.list_keys(schema)
        except ExternalToolError as exc:
            logger.debug("Key listing for %s failed: %s", schema, exc)
            return False

    def has_directory(self, category: str, name: str) -> bool:
        return any((root / name).is_dir() for root in search_roots(category, self._home))

    def has_extension(self, uuid: str) -> bool:
        try:
            return uuid in self._extensions.list()
        except ExternalToolError as exc:
            logger.debug("Extension listing failed: %s", exc)
            return False

    def has_command(self, name: str) -> bool:
        return self._which(name) is not None
