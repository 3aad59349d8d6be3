"""Ordered, failure-isolated application of the whole macOS-like configuration."""
from __future__ import annotations

import logging
import time
from collections import Counter
from pathlib import Path
from typing import Callable, Iterable, Sequence

from macosify_ubuntu.config import Configuration
from macosify_ubuntu.constants import (
    BACKGROUND_SCHEMA,
    BASE_PACKAGES,
    COLOR_SCHEME_VALUES,
    CORE_DEFAULTS,
    CURSOR_THEME_CANDIDATES,
    DESKTOP_ICONS_UUID,
    DOCK_TUNING_DEFAULTS,
    EXTENSIONS_TO_DISABLE,
    EXTENSIONS_TO_ENABLE,
    FILE_MANAGER_SETTINGS,
    GTK_THEME_CANDIDATES,
    ICON_THEME_CANDIDATES,
    INTERFACE_SCHEMA,
    NOTIFICATION_SETTINGS,
    REQUIRED_COMMANDS,
    SHORTCUT_SETTINGS,
    SPOTLIGHT_SHORTCUT,
    TOP_BAR_SETTINGS,
    TOUCHPAD_SETTINGS,
    TYPOGRAPHY_PACKAGES,
    TYPOGRAPHY_SETTINGS,
    USER_THEME_SCHEMA,
)
from services.capabilities import ICON_CATEGORY, THEME_CATEGORY, CapabilityProber, SystemCapabilityProber
from services.dock import DockService
from services.extensions import ExtensionToggler, ExtensionToggleSet
from services.gnome_extensions import ExtensionManager, GnomeExtensionsManager
from services.gsettings import GSettingsStore, PreferenceStore
from services.packages import AptInstaller
from services.power import ensure_power_profiles
from services.preferences import (
    ApplicationResult,
    PreferenceApplier,
    PreferenceAssignment,
    StepResult,
    combine_results,
)
from services.resources import ResourceCandidateList, ResourceSelector
from services.runner import CommandRunner, MissingToolError, SubprocessRunner
from services.shortcuts import LauncherShortcutService

logger = logging.getLogger(__name__)

Step = Callable[[], StepResult]


class MacosifyService:
    def __init__(
        self,
        config: Configuration,
        *,
        command_runner: CommandRunner | None = None,
        store: PreferenceStore | None = None,
        extensions: ExtensionManager | None = None,
        prober: CapabilityProber | None = None,
        home: Path | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._config = config
        self._home = home or Path.home()
        self._runner = command_runner or SubprocessRunner()
        self._store = store or GSettingsStore(self._runner)
        self._extensions = extensions or GnomeExtensionsManager(self._runner)
        self._prober = prober or SystemCapabilityProber(self._store, self._extensions, home=self._home)
        self._applier = PreferenceApplier(self._store, self._prober)
        self._selector = ResourceSelector(self._prober)
        self._toggler = ExtensionToggler(self._extensions, self._prober, sleep=sleep)
        self._dock = DockService(self._runner, self._prober, self._applier, self._toggler, home=self._home)
        self._launcher = LauncherShortcutService(self._store, self._prober, self._applier)
        self._apt = AptInstaller(self._runner, self._prober)

    def ensure_prerequisites(self) -> None:
        """Raise ``MissingToolError`` before any mutation if GNOME tooling is absent."""
        for command in REQUIRED_COMMANDS:
            if not self._prober.has_command(command):
                raise MissingToolError(command)

    def available_steps(self) -> list[str]:
        return [name for name, enabled, _ in self._plan() if enabled]

    def run(self) -> list[StepResult]:
        logger.info("macosify-ubuntu starting (scheme=%s)", self._config.color_scheme)
        results = [self._run_step(name, step) for name, enabled, step in self._plan() if enabled]
        logger.debug("Completed %d step(s)", len(results))
        return results

    def _plan(self) -> list[tuple[str, bool, Step]]:
        config = self._config
        return [
            ("Packages", config.install_packages, self._apply_packages),
            ("Dock Install", config.fetch_dock, self._dock.fetch_extension),
            ("Core Defaults", True, self._apply_core_defaults),
            ("Typography", config.typography, lambda: self._apply_table("Typography", TYPOGRAPHY_SETTINGS)),
            ("Cursor Size", config.cursor_size is not None, self._apply_cursor_size),
            ("File Manager", config.file_manager, lambda: self._apply_table("File Manager", FILE_MANAGER_SETTINGS)),
            ("Top Bar", config.top_bar, lambda: self._apply_table("Top Bar", TOP_BAR_SETTINGS)),
            ("Wallpaper", config.wallpaper is not None, lambda: self._apply_wallpaper("Wallpaper", config.wallpaper, "picture-uri")),
            (
                "Dark Wallpaper",
                config.wallpaper_dark is not None,
                lambda: self._apply_wallpaper("Dark Wallpaper", config.wallpaper_dark, "picture-uri-dark"),
            ),
            ("Touchpad", config.touchpad, lambda: self._apply_table("Touchpad", TOUCHPAD_SETTINGS)),
            ("Keyboard Shortcuts", config.shortcuts, lambda: self._apply_table("Keyboard Shortcuts", SHORTCUT_SETTINGS)),
            ("Notifications", config.notifications, lambda: self._apply_table("Notifications", NOTIFICATION_SETTINGS)),
            ("Extensions", config.toggle_extensions, self._apply_extensions),
            ("Themes", True, self._apply_themes),
            ("Dock Tuning", config.tune_dock, self._apply_dock_tuning),
            ("Launcher Shortcut", config.launcher_shortcut, lambda: self._launcher.apply(SPOTLIGHT_SHORTCUT)),
            ("Show Apps Icon", config.show_apps_colored, self._apply_show_apps_icon),
            ("Power Profiles", config.power_profiles, lambda: ensure_power_profiles(self._runner, self._prober)),
        ]

    def _run_step(self, name: str, step: Step) -> StepResult:
        logger.info("Step: %s", name)
        try:
            return step()
        except (RuntimeError, OSError, ValueError) as exc:
            logger.warning("%s failed: %s", name, exc)
            return StepResult(name, ApplicationResult.FAILED_EXTERNAL_TOOL, str(exc))

    def _apply_packages(self) -> StepResult:
        packages = list(BASE_PACKAGES)
        if self._config.typography:
            packages.extend(TYPOGRAPHY_PACKAGES)
        return self._apt.install(packages)

    def _apply_core_defaults(self) -> StepResult:
        logger.info("Applying GNOME macOS-like defaults")
        color_scheme = COLOR_SCHEME_VALUES[self._config.color_scheme]
        assignments = list(CORE_DEFAULTS) + [PreferenceAssignment(INTERFACE_SCHEMA, "color-scheme", color_scheme)]
        results = self._applier.apply_all(assignments, checked=False)
        return StepResult("Core Defaults", combine_results(results), f"color-scheme={color_scheme}")

    def _apply_table(self, name: str, assignments: Iterable[PreferenceAssignment]) -> StepResult:
        results = self._applier.apply_all(assignments)
        return StepResult(name, combine_results(results), _count_detail(results))

    def _apply_cursor_size(self) -> StepResult:
        size = parse_positive_int(self._config.cursor_size)
        if size is None:
            logger.warning("Invalid cursor size %r; skipping cursor size.", self._config.cursor_size)
            return StepResult("Cursor Size", ApplicationResult.SKIPPED_CAPABILITY_MISSING, "invalid value")
        result = self._applier.apply(PreferenceAssignment(INTERFACE_SCHEMA, "cursor-size", size))
        return StepResult("Cursor Size", result, str(size))

    def _apply_wallpaper(self, name: str, raw_path: str | None, key: str) -> StepResult:
        path = Path(raw_path or "").expanduser()
        if not raw_path or not path.is_file():
            logger.warning("Wallpaper file not found: %s; skipping %s.", raw_path, key)
            return StepResult(name, ApplicationResult.SKIPPED_CAPABILITY_MISSING, f"{raw_path} not found")
        uri = path.resolve().as_uri()
        results = self._applier.apply_all(
            [
                PreferenceAssignment(BACKGROUND_SCHEMA, key, uri),
                PreferenceAssignment(BACKGROUND_SCHEMA, "picture-options", "zoom"),
            ]
        )
        return StepResult(name, combine_results(results), uri)

    def _apply_extensions(self) -> StepResult:
        logger.info("Enabling/disabling extensions for macOS-like UI")
        to_disable = list(EXTENSIONS_TO_DISABLE)
        if not self._config.keep_desktop_icons:
            to_disable.append(DESKTOP_ICONS_UUID)
        outcomes = self._toggler.toggle(ExtensionToggleSet.build(EXTENSIONS_TO_ENABLE, to_disable))
        return StepResult("Extensions", combine_results(outcomes.values()), _count_detail(outcomes.values()))

    def _apply_themes(self) -> StepResult:
        logger.info("Applying themes/icons (if available)")
        scheme = self._config.color_scheme
        gtk_theme = self._selector.select(ResourceCandidateList(THEME_CATEGORY, GTK_THEME_CANDIDATES.for_scheme(scheme)))
        shell_theme = gtk_theme
        icon_theme = self._select_icons()
        cursor_theme = self._selector.select(
            ResourceCandidateList(ICON_CATEGORY, CURSOR_THEME_CANDIDATES.for_scheme(scheme))
        )
        results = self._applier.apply_all(
            [
                PreferenceAssignment(INTERFACE_SCHEMA, "gtk-theme", gtk_theme),
                PreferenceAssignment(INTERFACE_SCHEMA, "icon-theme", icon_theme),
                PreferenceAssignment(INTERFACE_SCHEMA, "cursor-theme", cursor_theme),
            ],
            checked=False,
        )
        if self._prober.has_schema(USER_THEME_SCHEMA):
            results.append(self._applier.apply(PreferenceAssignment(USER_THEME_SCHEMA, "name", shell_theme)))
        else:
            logger.warning("User Themes schema not found; install/enable the user-theme extension to theme GNOME Shell.")
        detail = f"GTK={gtk_theme} Shell={shell_theme} Icons={icon_theme} Cursor={cursor_theme}"
        logger.info("Selected: %s", detail)
        return StepResult("Themes", combine_results(results), detail)

    def _apply_dock_tuning(self) -> StepResult:
        style = parse_positive_int(self._config.dock_indicator_style, allow_zero=True)
        size = parse_positive_int(self._config.dock_indicator_size, allow_zero=True)
        if style is None or size is None:
            logger.warning(
                "Invalid dock indicator values (style=%r, size=%r); skipping dock tuning.",
                self._config.dock_indicator_style,
                self._config.dock_indicator_size,
            )
            return StepResult("Dock Tuning", ApplicationResult.SKIPPED_CAPABILITY_MISSING, "invalid value")
        return self._dock.tune(style, size, DOCK_TUNING_DEFAULTS.animate_icons)

    def _apply_show_apps_icon(self) -> StepResult:
        return self._dock.install_show_apps_icon(self._select_icons())

    def _select_icons(self) -> str:
        candidates = ICON_THEME_CANDIDATES.for_scheme(self._config.color_scheme)
        return self._selector.select(ResourceCandidateList(ICON_CATEGORY, candidates))


def parse_positive_int(value: str | int | None, *, allow_zero: bool = False) -> int | None:
    if value is None:
        return None
    try:
        number = int(str(value).strip())
    except ValueError:
        return None
    if number < 0 or (number == 0 and not allow_zero):
        return None
    return number


def summarize(results: Sequence[StepResult]) -> dict[ApplicationResult, int]:
    counts = Counter(result.result for result in results)
    return {outcome: counts.get(outcome, 0) for outcome in ApplicationResult}


def _count_detail(results: Iterable[ApplicationResult]) -> str:
    counts = Counter(results)
    return ", ".join(f"{outcome.value}={counts[outcome]}" for outcome in ApplicationResult if counts[outcome])
