from __future__ import annotations

from pathlib import Path

import pytest

from fakes import FakeExtensionManager, FakePreferenceStore, FakeRunner, make_prober
from services.extensions import ExtensionToggler, ExtensionToggleSet
from services.gnome_extensions import GnomeExtensionsManager
from services.preferences import ApplicationResult

BLUR = "blur-my-shell@aunetx"
DOCK = "dash2dock-lite@icedman.github.com"
ARCMENU = "arcmenu@arcmenu.com"
WINDOW_LIST = "window-list@gnome-shell-extensions.gcampax.github.com"


def _toggler(manager: FakeExtensionManager, tmp_path: Path) -> ExtensionToggler:
    prober = make_prober(FakePreferenceStore(), manager, home=tmp_path)
    return ExtensionToggler(manager, prober, sleep=lambda _: None)


def test_toggle_set_rejects_overlap() -> None:
    with pytest.raises(ValueError):
        ExtensionToggleSet.build([BLUR, DOCK], [DOCK])


def test_only_installed_extensions_are_toggled(tmp_path: Path) -> None:
    manager = FakeExtensionManager(installed={BLUR, ARCMENU}, enabled={ARCMENU})
    toggler = _toggler(manager, tmp_path)

    results = toggler.toggle(ExtensionToggleSet.build([BLUR, DOCK], [ARCMENU, WINDOW_LIST]))

    assert results == {
        BLUR: ApplicationResult.APPLIED,
        DOCK: ApplicationResult.SKIPPED_CAPABILITY_MISSING,
        ARCMENU: ApplicationResult.APPLIED,
        WINDOW_LIST: ApplicationResult.SKIPPED_CAPABILITY_MISSING,
    }
    assert manager.enabled == {BLUR}
    assert ("enable", DOCK) not in manager.calls


def test_failure_is_reported_per_extension(tmp_path: Path) -> None:
    manager = FakeExtensionManager(installed={BLUR, ARCMENU}, failing={BLUR})
    results = _toggler(manager, tmp_path).toggle(ExtensionToggleSet.build([BLUR], [ARCMENU]))

    assert results[BLUR] is ApplicationResult.FAILED_EXTERNAL_TOOL
    assert results[ARCMENU] is ApplicationResult.APPLIED


def test_os_error_from_extension_tool_is_absorbed(tmp_path: Path, caplog) -> None:
    class BrokenManager(FakeExtensionManager):
        def enable(self, uuid: str) -> None:
            self.calls.append(("enable", uuid))
            raise OSError("gnome-extensions: permission denied")

    manager = BrokenManager(installed={BLUR, ARCMENU}, enabled={ARCMENU})
    results = _toggler(manager, tmp_path).toggle(ExtensionToggleSet.build([BLUR], [ARCMENU]))

    assert results == {BLUR: ApplicationResult.FAILED_EXTERNAL_TOOL, ARCMENU: ApplicationResult.APPLIED}
    assert manager.enabled == set()
    assert "permission denied" in caplog.text


def test_processing_order_does_not_change_final_state(tmp_path: Path) -> None:
    installed = {BLUR, DOCK, ARCMENU, WINDOW_LIST}
    forward = FakeExtensionManager(installed=installed, enabled={ARCMENU})
    backward = FakeExtensionManager(installed=installed, enabled={ARCMENU})

    _toggler(forward, tmp_path).toggle(ExtensionToggleSet.build([BLUR, DOCK], [ARCMENU, WINDOW_LIST]))
    reverse = _toggler(backward, tmp_path)
    reverse.toggle(ExtensionToggleSet.build([], [ARCMENU, WINDOW_LIST]))
    reverse.toggle(ExtensionToggleSet.build([BLUR, DOCK], []))

    assert forward.enabled == backward.enabled == {BLUR, DOCK}


def test_second_toggle_keeps_state(tmp_path: Path) -> None:
    manager = FakeExtensionManager(installed={BLUR, ARCMENU}, enabled={ARCMENU})
    toggler = _toggler(manager, tmp_path)
    toggle_set = ExtensionToggleSet.build([BLUR], [ARCMENU])

    toggler.toggle(toggle_set)
    state = set(manager.enabled)
    toggler.toggle(toggle_set)

    assert manager.enabled == state


def test_reload_disables_then_enables(tmp_path: Path) -> None:
    manager = FakeExtensionManager(installed={DOCK}, enabled={DOCK})
    delays: list[float] = []
    prober = make_prober(FakePreferenceStore(), manager, home=tmp_path)
    toggler = ExtensionToggler(manager, prober, sleep=delays.append, reload_delay=0.5)

    assert toggler.reload(DOCK) is ApplicationResult.APPLIED
    assert manager.calls == [("disable", DOCK), ("enable", DOCK)]
    assert delays == [0.5]


def test_gnome_extensions_manager_commands() -> None:
    runner = FakeRunner({("gnome-extensions", "list"): f"{BLUR}\n{DOCK}\n"})
    manager = GnomeExtensionsManager(runner)

    assert manager.list() == {BLUR, DOCK}
    manager.enable(BLUR)
    manager.disable(DOCK)
    assert runner.commands[1:] == [("gnome-extensions", "enable", BLUR), ("gnome-extensions", "disable", DOCK)]
