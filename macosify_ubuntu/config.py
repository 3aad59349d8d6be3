"""Run options, built once from the command line and never mutated."""
from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Sequence

from macosify_ubuntu.constants import DARK, DOCK_TUNING_DEFAULTS, LIGHT


@dataclass(frozen=True)
class Configuration:
    color_scheme: str = LIGHT
    keep_desktop_icons: bool = False
    install_packages: bool = True
    toggle_extensions: bool = True
    fetch_dock: bool = True
    tune_dock: bool = True
    dock_indicator_style: str = str(DOCK_TUNING_DEFAULTS.running_indicator_style)
    dock_indicator_size: str = str(DOCK_TUNING_DEFAULTS.running_indicator_size)
    launcher_shortcut: bool = True
    show_apps_colored: bool = False
    power_profiles: bool = True
    typography: bool = False
    cursor_size: str | None = None
    file_manager: bool = False
    top_bar: bool = False
    wallpaper: str | None = None
    wallpaper_dark: str | None = None
    touchpad: bool = False
    shortcuts: bool = False
    notifications: bool = False
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.color_scheme not in (LIGHT, DARK):
            raise ValueError(f"Unknown color scheme: {self.color_scheme}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="macosify-ubuntu",
        description="Make Ubuntu GNOME look and feel macOS-like using GNOME settings, themes and extensions.",
    )
    scheme = parser.add_mutually_exclusive_group()
    scheme.add_argument("--light", dest="color_scheme", action="store_const", const=LIGHT, help="light appearance (default)")
    scheme.add_argument("--dark", dest="color_scheme", action="store_const", const=DARK, help="dark appearance")
    parser.set_defaults(color_scheme=LIGHT)

    parser.add_argument("--keep-desktop-icons", action="store_true", help="leave the desktop icons extension enabled")
    parser.add_argument("--no-packages", dest="install_packages", action="store_false", help="skip apt installation")
    parser.add_argument("--no-extensions", dest="toggle_extensions", action="store_false", help="leave extensions as they are")
    parser.add_argument("--no-dock-install", dest="fetch_dock", action="store_false", help="do not clone Dash2Dock Lite")
    parser.add_argument("--no-dock-tuning", dest="tune_dock", action="store_false", help="skip Dash2Dock Lite tuning")
    parser.add_argument(
        "--dock-indicator-style",
        default=str(DOCK_TUNING_DEFAULTS.running_indicator_style),
        metavar="N",
        help="Dash2Dock Lite running-indicator-style value",
    )
    parser.add_argument(
        "--dock-indicator-size",
        default=str(DOCK_TUNING_DEFAULTS.running_indicator_size),
        metavar="N",
        help="Dash2Dock Lite running-indicator-size value",
    )
    parser.add_argument(
        "--no-launcher-shortcut",
        dest="launcher_shortcut",
        action="store_false",
        help="do not bind Super+Space to Ulauncher",
    )
    parser.add_argument("--show-apps-colored", action="store_true", help="install a coloured Show Apps icon")
    parser.add_argument("--no-power-profiles", dest="power_profiles", action="store_false", help="leave power-profiles-daemon alone")

    tweaks = parser.add_argument_group("optional tweaks")
    tweaks.add_argument("--mac-fonts", dest="typography", action="store_true", help="Inter interface fonts")
    tweaks.add_argument("--cursor-size", metavar="VALUE", help="cursor size in pixels")
    tweaks.add_argument("--finder-tweaks", dest="file_manager", action="store_true", help="Finder-like Nautilus defaults")
    tweaks.add_argument("--top-bar", action="store_true", help="menu-bar style clock and battery percentage")
    tweaks.add_argument("--wallpaper", metavar="PATH", help="wallpaper for the light appearance")
    tweaks.add_argument("--wallpaper-dark", metavar="PATH", help="wallpaper for the dark appearance")
    tweaks.add_argument("--touchpad", action="store_true", help="tap to click and two-finger scrolling")
    tweaks.add_argument("--mac-shortcuts", dest="shortcuts", action="store_true", help="Super+Q, Super+Tab and screenshot keys")
    tweaks.add_argument("--quiet-notifications", dest="notifications", action="store_true", help="hide notifications on the lock screen")

    parser.add_argument("-v", "--verbose", action="store_true", help="log every external command")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> Configuration:
    """Parse ``argv``; unknown flags print usage and exit non-zero via argparse."""
    namespace = build_parser().parse_args(argv)
    return Configuration(**vars(namespace))
