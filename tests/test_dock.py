from __future__ import annotations

from datetime import datetime
from pathlib import Path

from fakes import FakeExtensionManager, FakePreferenceStore, FakeRunner, make_prober
from macosify_ubuntu.constants import DASH2DOCK_REPO_URL, DASH2DOCK_SCHEMA, DASH2DOCK_UUID
from services.dock import (
    DOCK_PATCH_MARKER,
    SCHEMA_FILE,
    SHOW_APPS_ICON_SVG,
    DockService,
    extension_dir,
)
from services.extensions import ExtensionToggler
from services.preferences import ApplicationResult, PreferenceApplier

FIXED_NOW = datetime(2024, 5, 17, 9, 30, 0)
DOCK_JS = "function update(c) {\n    c._icon = c.icon.icon;\n    c.show();\n}\n"


def _service(
    tmp_path: Path,
    *,
    runner: FakeRunner | None = None,
    store: FakePreferenceStore | None = None,
    extensions: FakeExtensionManager | None = None,
    commands: set[str] | None = None,
) -> DockService:
    runner = runner or FakeRunner()
    store = store or FakePreferenceStore()
    extensions = extensions or FakeExtensionManager()
    prober = make_prober(store, extensions, home=tmp_path, commands=commands or set())
    return DockService(
        runner,
        prober,
        PreferenceApplier(store, prober),
        ExtensionToggler(extensions, prober, sleep=lambda _: None),
        home=tmp_path,
        clock=lambda: FIXED_NOW,
    )


def test_fetch_skips_clone_when_already_installed(tmp_path: Path) -> None:
    extension_dir(tmp_path).mkdir(parents=True)
    runner = FakeRunner()

    result = _service(tmp_path, runner=runner, commands={"git"}).fetch_extension()

    assert result.result is ApplicationResult.APPLIED
    assert runner.commands == []


def test_fetch_without_git_is_skipped(tmp_path: Path) -> None:
    result = _service(tmp_path).fetch_extension()
    assert result.result is ApplicationResult.SKIPPED_CAPABILITY_MISSING


def test_fetch_clones_and_compiles_schema(tmp_path: Path) -> None:
    target = extension_dir(tmp_path)

    def fake_clone(command: tuple[str, ...]) -> None:
        if command[:2] == ("git", "clone"):
            (target / "schemas").mkdir(parents=True)
            (target / "schemas" / SCHEMA_FILE).write_text("<schemalist/>")

    runner = FakeRunner(on_run=fake_clone)
    result = _service(tmp_path, runner=runner, commands={"git", "glib-compile-schemas"}).fetch_extension()

    schema_dir = tmp_path / ".local" / "share" / "glib-2.0" / "schemas"
    assert result.result is ApplicationResult.APPLIED
    assert runner.commands[0] == ("git", "clone", "--depth", "1", DASH2DOCK_REPO_URL, str(target))
    assert (schema_dir / SCHEMA_FILE).read_text() == "<schemalist/>"
    assert ("glib-compile-schemas", str(schema_dir)) in runner.commands


def test_fetch_clone_failure_is_not_fatal(tmp_path: Path) -> None:
    target = extension_dir(tmp_path)
    clone = ("git", "clone", "--depth", "1", DASH2DOCK_REPO_URL, str(target))
    runner = FakeRunner(returncodes={clone: 128})

    result = _service(tmp_path, runner=runner, commands={"git"}).fetch_extension()

    assert result.result is ApplicationResult.FAILED_EXTERNAL_TOOL
    assert "exit=128" in result.detail


def test_tune_skips_without_schema(tmp_path: Path) -> None:
    store = FakePreferenceStore()
    result = _service(tmp_path, store=store).tune(1, 6)

    assert result.result is ApplicationResult.SKIPPED_CAPABILITY_MISSING
    assert store.set_calls == []


def test_tune_sets_caller_supplied_values(tmp_path: Path) -> None:
    store = FakePreferenceStore(
        {DASH2DOCK_SCHEMA: {"running-indicator-style": 0, "running-indicator-size": 0, "animate-icons": False}}
    )
    result = _service(tmp_path, store=store).tune(3, 8)

    assert result.result is ApplicationResult.APPLIED
    assert store.values[DASH2DOCK_SCHEMA] == {
        "running-indicator-style": 3,
        "running-indicator-size": 8,
        "animate-icons": True,
    }


def test_show_apps_icon_writes_svg_and_patches_dock(tmp_path: Path) -> None:
    dock_js = extension_dir(tmp_path) / "dock.js"
    dock_js.parent.mkdir(parents=True)
    dock_js.write_text(DOCK_JS)
    extensions = FakeExtensionManager(installed={DASH2DOCK_UUID}, enabled={DASH2DOCK_UUID})
    runner = FakeRunner()

    service = _service(tmp_path, runner=runner, extensions=extensions, commands={"gtk-update-icon-cache"})
    result = service.install_show_apps_icon("MacTahoe")

    theme_dir = tmp_path / ".local" / "share" / "icons" / "MacTahoe"
    icon = theme_dir / "apps" / "scalable" / "view-app-grid.svg"
    patched = dock_js.read_text().splitlines()
    assert result.result is ApplicationResult.APPLIED
    assert icon.read_text() == SHOW_APPS_ICON_SVG
    assert ("gtk-update-icon-cache", "-f", "-t", str(theme_dir)) in runner.commands
    assert patched[1].strip() == "c._icon = c.icon.icon;"
    assert DOCK_PATCH_MARKER in patched[2]
    assert "view-app-grid" in patched[3]
    assert dock_js.with_name("dock.js.backup.20240517-093000").read_text() == DOCK_JS
    assert extensions.calls == [("disable", DASH2DOCK_UUID), ("enable", DASH2DOCK_UUID)]


def test_show_apps_icon_second_run_changes_nothing(tmp_path: Path) -> None:
    dock_js = extension_dir(tmp_path) / "dock.js"
    dock_js.parent.mkdir(parents=True)
    dock_js.write_text(DOCK_JS)
    extensions = FakeExtensionManager(installed={DASH2DOCK_UUID}, enabled={DASH2DOCK_UUID})
    service = _service(tmp_path, extensions=extensions)

    service.install_show_apps_icon("Yaru")
    patched = dock_js.read_text()
    files_after_first = sorted(p.name for p in tmp_path.rglob("*"))
    extensions.calls.clear()
    service.install_show_apps_icon("Yaru")

    assert dock_js.read_text() == patched
    assert sorted(p.name for p in tmp_path.rglob("*")) == files_after_first
    assert extensions.calls == []


def test_show_apps_icon_backs_up_a_different_icon(tmp_path: Path) -> None:
    icon = tmp_path / ".local" / "share" / "icons" / "Yaru" / "apps" / "scalable" / "view-app-grid.svg"
    icon.parent.mkdir(parents=True)
    icon.write_text("<svg/>")

    result = _service(tmp_path).install_show_apps_icon("Yaru")

    assert result.result is ApplicationResult.APPLIED
    assert "dock patch skipped" in result.detail
    assert icon.read_text() == SHOW_APPS_ICON_SVG
    assert icon.with_name("view-app-grid.svg.backup.20240517-093000").read_text() == "<svg/>"


def test_dock_patch_without_insertion_point_leaves_file(tmp_path: Path) -> None:
    dock_js = extension_dir(tmp_path) / "dock.js"
    dock_js.parent.mkdir(parents=True)
    dock_js.write_text("// nothing to patch\n")

    result = _service(tmp_path).install_show_apps_icon("Yaru")

    assert "insertion point not found" in result.detail
    assert dock_js.read_text() == "// nothing to patch\n"
