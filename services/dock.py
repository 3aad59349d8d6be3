"""Dash2Dock Lite: fetching, tuning and the coloured Show Apps icon."""
from __future__ import annotations

import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Callable

from macosify_ubuntu.constants import DASH2DOCK_REPO_URL, DASH2DOCK_SCHEMA, DASH2DOCK_UUID
from services.capabilities import CapabilityProber
from services.extensions import ExtensionToggler
from services.preferences import (
    ApplicationResult,
    PreferenceApplier,
    PreferenceAssignment,
    StepResult,
    combine_results,
)
from services.runner import CommandRunner, format_command_detail

logger = logging.getLogger(__name__)

SCHEMA_FILE = f"{DASH2DOCK_SCHEMA}.gschema.xml"
DOCK_PATCH_MARKER = "Prefer full-color app grid icon"
DOCK_PATCH_NEEDLE = "c._icon = c.icon.icon;"
DOCK_PATCH_LINES = (
    f"        // {DOCK_PATCH_MARKER} for Show Apps (Launchpad-like)\n",
    "        try { c._icon.icon_name = 'view-app-grid'; } catch (e) {}\n",
)
SHOW_APPS_ICON_NAME = "view-app-grid.svg"
SHOW_APPS_ICON_SVG = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="128" height="128" viewBox="0 0 128 128">
  <g>
    <rect x="18" y="18" width="24" height="24" rx="7" fill="#60a5fa"/>
    <rect x="52" y="18" width="24" height="24" rx="7" fill="#93c5fd"/>
    <rect x="86" y="18" width="24" height="24" rx="7" fill="#a78bfa"/>

    <rect x="18" y="52" width="24" height="24" rx="7" fill="#34d399"/>
    <rect x="52" y="52" width="24" height="24" rx="7" fill="#fbbf24"/>
    <rect x="86" y="52" width="24" height="24" rx="7" fill="#fb7185"/>

    <rect x="18" y="86" width="24" height="24" rx="7" fill="#22d3ee"/>
    <rect x="52" y="86" width="24" height="24" rx="7" fill="#f472b6"/>
    <rect x="86" y="86" width="24" height="24" rx="7" fill="#94a3b8"/>
  </g>
</svg>
"""


def extension_dir(home: Path) -> Path:
    return home / ".local" / "share" / "gnome-shell" / "extensions" / DASH2DOCK_UUID


def backup_path(path: Path, now: datetime) -> Path:
    return path.with_name(f"{path.name}.backup.{now:%Y%m%d-%H%M%S}")


class DockService:
    def __init__(
        self,
        runner: CommandRunner,
        prober: CapabilityProber,
        applier: PreferenceApplier,
        toggler: ExtensionToggler,
        *,
        home: Path,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._runner = runner
        self._prober = prober
        self._applier = applier
        self._toggler = toggler
        self._home = home
        self._clock = clock

    def fetch_extension(self) -> StepResult:
        name = "Dock Install"
        target = extension_dir(self._home)
        if target.is_dir():
            return StepResult(name, ApplicationResult.APPLIED, f"already installed at {target}")
        if not self._prober.has_command("git"):
            logger.warning("Skipping Dash2Dock Lite install (git not available).")
            return StepResult(name, ApplicationResult.SKIPPED_CAPABILITY_MISSING, "git unavailable")

        logger.info("Installing Dash2Dock Lite extension from GitHub")
        target.parent.mkdir(parents=True, exist_ok=True)
        completed = self._runner.run(["git", "clone", "--depth", "1", DASH2DOCK_REPO_URL, str(target)])
        if completed.returncode != 0:
            detail = format_command_detail(completed)
            logger.warning("Failed to clone dash2dock-lite: %s", detail)
            return StepResult(name, ApplicationResult.FAILED_EXTERNAL_TOOL, detail)
        detail = f"cloned to {target}"
        compiled = self._install_schema(target)
        if compiled:
            detail = f"{detail}; {compiled}"
        return StepResult(name, ApplicationResult.APPLIED, detail)

    def tune(self, indicator_style: int, indicator_size: int, animate_icons: bool = True) -> StepResult:
        name = "Dock Tuning"
        if not self._prober.has_schema(DASH2DOCK_SCHEMA):
            logger.warning("Dash2Dock Lite schema not found in gsettings; skipping dock tuning.")
            return StepResult(name, ApplicationResult.SKIPPED_CAPABILITY_MISSING, "schema missing")
        logger.info("Configuring dock (Dash2Dock Lite)")
        results = self._applier.apply_all(
            [
                PreferenceAssignment(DASH2DOCK_SCHEMA, "running-indicator-style", indicator_style),
                PreferenceAssignment(DASH2DOCK_SCHEMA, "running-indicator-size", indicator_size),
                PreferenceAssignment(DASH2DOCK_SCHEMA, "animate-icons", animate_icons),
            ]
        )
        return StepResult(name, combine_results(results), f"style={indicator_style}, size={indicator_size}")

    def install_show_apps_icon(self, icon_theme: str) -> StepResult:
        name = "Show Apps Icon"
        theme_dir = self._home / ".local" / "share" / "icons" / icon_theme
        icon_file = theme_dir / "apps" / "scalable" / SHOW_APPS_ICON_NAME
        logger.info("Installing custom Show Apps icon into %s", theme_dir)
        detail_parts = [self._write_icon(icon_file)]

        if self._prober.has_command("gtk-update-icon-cache"):
            completed = self._runner.run(["gtk-update-icon-cache", "-f", "-t", str(theme_dir)])
            if completed.returncode != 0:
                logger.warning("Icon cache refresh failed: %s", format_command_detail(completed))

        dock_js = extension_dir(self._home) / "dock.js"
        if not dock_js.is_file():
            logger.warning("dash2dock-lite dock.js not found; icon override installed but dock patch skipped.")
            detail_parts.append("dock patch skipped")
            return StepResult(name, ApplicationResult.APPLIED, "; ".join(detail_parts))

        patched = self._patch_dock(dock_js)
        detail_parts.append(patched)
        if patched == "dock patched":
            self._toggler.reload(DASH2DOCK_UUID)
        return StepResult(name, ApplicationResult.APPLIED, "; ".join(detail_parts))

    def _install_schema(self, target: Path) -> str:
        source = target / "schemas" / SCHEMA_FILE
        if not source.is_file():
            return ""
        schema_dir = self._home / ".local" / "share" / "glib-2.0" / "schemas"
        schema_dir.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, schema_dir / SCHEMA_FILE)
        if not self._prober.has_command("glib-compile-schemas"):
            return "schema copied"
        completed = self._runner.run(["glib-compile-schemas", str(schema_dir)])
        if completed.returncode != 0:
            logger.warning("glib-compile-schemas failed: %s", format_command_detail(completed))
            return "schema copied, compile failed"
        return "schema compiled"

    def _write_icon(self, icon_file: Path) -> str:
        if icon_file.is_file():
            if icon_file.read_text(encoding="utf-8", errors="ignore") == SHOW_APPS_ICON_SVG:
                return "icon already installed"
            shutil.copyfile(icon_file, backup_path(icon_file, self._clock()))
        icon_file.parent.mkdir(parents=True, exist_ok=True)
        icon_file.write_text(SHOW_APPS_ICON_SVG, encoding="utf-8")
        return "icon written"

    def _patch_dock(self, dock_js: Path) -> str:
        text = dock_js.read_text(encoding="utf-8", errors="ignore")
        if DOCK_PATCH_MARKER in text:
            return "dock already patched"
        lines = text.splitlines(keepends=True)
        index = next((i for i, line in enumerate(lines) if DOCK_PATCH_NEEDLE in line), None)
        if index is None:
            logger.warning("Insertion point not found in %s; dock patch skipped.", dock_js)
            return "dock patch insertion point not found"
        shutil.copyfile(dock_js, backup_path(dock_js, self._clock()))
        lines[index + 1 : index + 1] = list(DOCK_PATCH_LINES)
        dock_js.write_text("".join(lines), encoding="utf-8")
        return "dock patched"
