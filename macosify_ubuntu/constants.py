"""Fixed tables of keys, candidates, extensions and packages for the macOS-like layout."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from services.preferences import PreferenceAssignment

LIGHT = "light"
DARK = "dark"
COLOR_SCHEMES = (LIGHT, DARK)

INTERFACE_SCHEMA = "org.gnome.desktop.interface"
BACKGROUND_SCHEMA = "org.gnome.desktop.background"
USER_THEME_SCHEMA = "org.gnome.shell.extensions.user-theme"
DASH2DOCK_SCHEMA = "org.gnome.shell.extensions.dash2dock-lite"
MEDIA_KEYS_SCHEMA = "org.gnome.settings-daemon.plugins.media-keys"
CUSTOM_KEYBINDING_SCHEMA = "org.gnome.settings-daemon.plugins.media-keys.custom-keybinding"
CUSTOM_KEYBINDING_PATH = "/org/gnome/settings-daemon/plugins/media-keys/custom-keybindings/custom{index}/"
CUSTOM_KEYBINDING_SLOTS = 50

DASH2DOCK_UUID = "dash2dock-lite@icedman.github.com"
DASH2DOCK_REPO_URL = "https://github.com/icedman/dash2dock-lite.git"
DESKTOP_ICONS_UUID = "ding@rastersoft.com"

FALLBACK_RESOURCE = "Yaru"

REQUIRED_COMMANDS = ("gsettings", "gnome-extensions")


@dataclass(frozen=True)
class SchemeCandidates:
    light: Tuple[str, ...]
    dark: Tuple[str, ...]

    def for_scheme(self, scheme: str) -> Tuple[str, ...]:
        return self.dark if scheme == DARK else self.light


@dataclass(frozen=True)
class LauncherShortcut:
    name: str
    command: str
    binding: str


@dataclass(frozen=True)
class DockTuningDefaults:
    running_indicator_style: int
    running_indicator_size: int
    animate_icons: bool


GTK_THEME_CANDIDATES = SchemeCandidates(
    light=("Tahoe-Light", "WhiteSur-Light", FALLBACK_RESOURCE),
    dark=("Tahoe-Dark", "WhiteSur-Dark", "Yaru-dark", FALLBACK_RESOURCE),
)
ICON_THEME_CANDIDATES = SchemeCandidates(
    light=("MacTahoe-light", "MacTahoe", "WhiteSur-light", FALLBACK_RESOURCE),
    dark=("MacTahoe-dark", "MacTahoe", "WhiteSur-dark", "Yaru-dark", FALLBACK_RESOURCE),
)
CURSOR_THEME_CANDIDATES = SchemeCandidates(
    light=("MacTahoe-light", "MacTahoe", "WhiteSur-cursors", FALLBACK_RESOURCE),
    dark=("MacTahoe-dark", "MacTahoe", "WhiteSur-cursors", FALLBACK_RESOURCE),
)

EXTENSIONS_TO_ENABLE = (
    "user-theme@gnome-shell-extensions.gcampax.github.com",
    DASH2DOCK_UUID,
    "blur-my-shell@aunetx",
    "compiz-alike-magic-lamp-effect@hermes83.github.com",
)
EXTENSIONS_TO_DISABLE = (
    "arcmenu@arcmenu.com",
    "apps-menu@gnome-shell-extensions.gcampax.github.com",
    "places-menu@gnome-shell-extensions.gcampax.github.com",
    "window-list@gnome-shell-extensions.gcampax.github.com",
    "tiling-assistant@ubuntu.com",
    "tilingshell@ferrarodomenico.com",
    "space-bar@luchrioh",
)

BASE_PACKAGES = (
    "gnome-tweaks",
    "gnome-shell-extensions",
    "dconf-editor",
    "git",
    "curl",
    "unzip",
    "ulauncher",
    "power-profiles-daemon",
)
TYPOGRAPHY_PACKAGES = ("fonts-inter",)

SPOTLIGHT_SHORTCUT = LauncherShortcut(name="Spotlight", command="ulauncher-toggle", binding="<Super>space")

DOCK_TUNING_DEFAULTS = DockTuningDefaults(
    running_indicator_style=1,
    running_indicator_size=6,
    animate_icons=True,
)

COLOR_SCHEME_VALUES = {LIGHT: "prefer-light", DARK: "prefer-dark"}

CORE_DEFAULTS = (
    PreferenceAssignment("org.gnome.desktop.wm.preferences", "button-layout", "close,minimize,maximize:"),
    PreferenceAssignment("org.gnome.desktop.peripherals.mouse", "natural-scroll", True),
    PreferenceAssignment("org.gnome.desktop.peripherals.touchpad", "natural-scroll", True),
    PreferenceAssignment(INTERFACE_SCHEMA, "enable-hot-corners", True),
)

TYPOGRAPHY_SETTINGS = (
    PreferenceAssignment(INTERFACE_SCHEMA, "font-name", "Inter 11"),
    PreferenceAssignment(INTERFACE_SCHEMA, "document-font-name", "Inter 11"),
    PreferenceAssignment(INTERFACE_SCHEMA, "monospace-font-name", "Monospace 11"),
    PreferenceAssignment(INTERFACE_SCHEMA, "font-hinting", "slight"),
    PreferenceAssignment(INTERFACE_SCHEMA, "font-antialiasing", "rgba"),
    PreferenceAssignment("org.gnome.desktop.wm.preferences", "titlebar-font", "Inter Bold 11"),
)

FILE_MANAGER_SETTINGS = (
    PreferenceAssignment("org.gnome.nautilus.preferences", "default-folder-viewer", "icon-view"),
    PreferenceAssignment("org.gnome.nautilus.preferences", "show-create-link", True),
    PreferenceAssignment("org.gnome.nautilus.icon-view", "default-zoom-level", "small"),
    PreferenceAssignment("org.gtk.gtk4.Settings.FileChooser", "sort-directories-first", True),
)

TOP_BAR_SETTINGS = (
    PreferenceAssignment(INTERFACE_SCHEMA, "clock-show-weekday", True),
    PreferenceAssignment(INTERFACE_SCHEMA, "clock-show-date", True),
    PreferenceAssignment(INTERFACE_SCHEMA, "show-battery-percentage", True),
)

TOUCHPAD_SETTINGS = (
    PreferenceAssignment("org.gnome.desktop.peripherals.touchpad", "tap-to-click", True),
    PreferenceAssignment("org.gnome.desktop.peripherals.touchpad", "two-finger-scrolling-enabled", True),
    PreferenceAssignment("org.gnome.desktop.peripherals.touchpad", "disable-while-typing", True),
)

SHORTCUT_SETTINGS = (
    PreferenceAssignment("org.gnome.desktop.wm.keybindings", "close", ("<Super>q", "<Alt>F4")),
    PreferenceAssignment("org.gnome.desktop.wm.keybindings", "switch-applications", ("<Super>Tab", "<Alt>Tab")),
    PreferenceAssignment("org.gnome.desktop.wm.keybindings", "switch-windows", ("<Super>grave",)),
    PreferenceAssignment("org.gnome.shell.keybindings", "show-screenshot-ui", ("<Shift><Super>5",)),
)

NOTIFICATION_SETTINGS = (
    PreferenceAssignment("org.gnome.desktop.notifications", "show-in-lock-screen", False),
    PreferenceAssignment("org.gnome.desktop.notifications", "show-banners", True),
)
