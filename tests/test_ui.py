from __future__ import annotations

import logging
import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PySide6.QtWidgets")

from macosify_ubuntu.config import Configuration  # noqa: E402
from ui.log_handler import QtLogHandler  # noqa: E402
from ui.main_window import TOGGLES, MacosifyWindow  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


@pytest.fixture
def window(qapp):
    window = MacosifyWindow()
    yield window
    window.close()
    logging.getLogger().removeHandler(window._log_handler)


def test_window_defaults_match_command_line_defaults(window) -> None:
    assert window._build_configuration() == Configuration()


def test_window_builds_configuration_from_widgets(window) -> None:
    window._scheme.setCurrentText("dark")
    window._cursor_size.setText(" 32 ")
    window._wallpaper_dark.setText("/tmp/night.jpg")
    window._checks["install_packages"].setChecked(False)
    window._checks["keep_desktop_icons"].setChecked(True)

    config = window._build_configuration()

    assert config.color_scheme == "dark"
    assert config.cursor_size == "32"
    assert config.wallpaper is None
    assert config.wallpaper_dark == "/tmp/night.jpg"
    assert not config.install_packages
    assert config.keep_desktop_icons
    assert set(TOGGLES) <= set(Configuration.__dataclass_fields__)


def test_log_handler_forwards_formatted_records(qapp) -> None:
    handler = QtLogHandler()
    received: list[str] = []
    handler.signals.message.connect(received.append)

    record = logging.LogRecord("services.dock", logging.WARNING, __file__, 1, "schema %s missing", ("x",), None)
    handler.emit(record)

    assert received == ["[WARNING] schema x missing"]


def test_window_leaves_root_logger_level_alone(qapp) -> None:
    root = logging.getLogger()
    previous = root.level
    root.setLevel(logging.WARNING)
    try:
        window = MacosifyWindow()
        window.close()
        root.removeHandler(window._log_handler)
        assert root.level == logging.WARNING
    finally:
        root.setLevel(previous)
