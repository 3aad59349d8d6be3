"""Options window that drives the same run as the command line."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

from PySide6.QtCore import QThreadPool
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFileDialog,
    QFormLayout,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from macosify_ubuntu.cli import format_result
from macosify_ubuntu.config import Configuration
from macosify_ubuntu.constants import COLOR_SCHEMES, LIGHT
from services.orchestrator import MacosifyService
from services.preferences import StepResult
from services.runner import MissingToolError
from ui.log_handler import QtLogHandler
from ui.theme import apply_palette
from ui.workers import ServiceWorker

TOGGLES = {
    "install_packages": ("Install packages with apt", True),
    "fetch_dock": ("Install Dash2Dock Lite from GitHub", True),
    "toggle_extensions": ("Enable/disable shell extensions", True),
    "keep_desktop_icons": ("Keep desktop icons", False),
    "tune_dock": ("Tune dock running indicators", True),
    "launcher_shortcut": ("Super+Space opens Ulauncher", True),
    "show_apps_colored": ("Coloured Show Apps icon", False),
    "power_profiles": ("Enable power profiles", True),
    "typography": ("Inter interface fonts", False),
    "file_manager": ("Finder-like file manager", False),
    "top_bar": ("Weekday, date and battery in top bar", False),
    "touchpad": ("Tap to click and two-finger scrolling", False),
    "shortcuts": ("macOS keyboard shortcuts", False),
    "notifications": ("Hide notifications on lock screen", False),
}


class MacosifyWindow(QWidget):
    def __init__(self, thread_pool: QThreadPool | None = None) -> None:
        super().__init__()
        self.setWindowTitle("macOS-like Ubuntu")
        self.setMinimumWidth(620)
        self._thread_pool = thread_pool or QThreadPool.globalInstance()
        self._checks: Dict[str, QCheckBox] = {}
        self._workers: set[ServiceWorker] = set()
        self._busy = False
        self._log_handler = QtLogHandler()
        self._log_handler.signals.message.connect(self._log)
        logging.getLogger().addHandler(self._log_handler)
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.addWidget(QLabel("Select the changes to apply to this GNOME session"))

        form = QFormLayout()
        self._scheme = QComboBox()
        self._scheme.addItems(list(COLOR_SCHEMES))
        self._scheme.setCurrentText(LIGHT)
        self._scheme.currentTextChanged.connect(apply_palette)
        form.addRow("Appearance", self._scheme)

        self._cursor_size = QLineEdit()
        self._cursor_size.setPlaceholderText("Leave empty to keep current size")
        form.addRow("Cursor size", self._cursor_size)

        defaults = Configuration()
        self._indicator_style = QLineEdit(defaults.dock_indicator_style)
        form.addRow("Dock indicator style", self._indicator_style)
        self._indicator_size = QLineEdit(defaults.dock_indicator_size)
        form.addRow("Dock indicator size", self._indicator_size)

        self._wallpaper = QLineEdit()
        form.addRow("Wallpaper", self._make_file_picker(self._wallpaper, "Select Wallpaper"))
        self._wallpaper_dark = QLineEdit()
        form.addRow("Dark wallpaper", self._make_file_picker(self._wallpaper_dark, "Select Dark Wallpaper"))
        layout.addLayout(form)

        grid = QGridLayout()
        for index, (field, (caption, checked)) in enumerate(TOGGLES.items()):
            checkbox = QCheckBox(caption)
            checkbox.setChecked(checked)
            grid.addWidget(checkbox, index // 2, index % 2)
            self._checks[field] = checkbox
        layout.addLayout(grid)

        button_row = QHBoxLayout()
        button_row.addStretch()
        self._btn_apply = QPushButton("Apply")
        self._btn_apply.clicked.connect(self._start_apply)
        button_row.addWidget(self._btn_apply)
        layout.addLayout(button_row)

        self._log_view = QPlainTextEdit()
        self._log_view.setReadOnly(True)
        self._log_view.setMinimumHeight(220)
        layout.addWidget(self._log_view)

    def _make_file_picker(self, field: QLineEdit, title: str) -> QWidget:
        container = QWidget()
        row = QHBoxLayout(container)
        row.setContentsMargins(0, 0, 0, 0)
        row.addWidget(field)
        browse = QPushButton("Browse")
        browse.clicked.connect(lambda: self._browse_for_file(field, title))
        row.addWidget(browse)
        return container

    def _browse_for_file(self, field: QLineEdit, title: str) -> None:
        current = field.text().strip()
        start_dir = str(Path(current).parent) if current else str(Path.home())
        path, _ = QFileDialog.getOpenFileName(self, title, start_dir, "Images (*.png *.jpg *.jpeg *.svg *.webp);;All Files (*)")
        if path:
            field.setText(path)

    def _build_configuration(self) -> Configuration:
        values = {field: checkbox.isChecked() for field, checkbox in self._checks.items()}
        return Configuration(
            color_scheme=self._scheme.currentText(),
            cursor_size=self._cursor_size.text().strip() or None,
            dock_indicator_style=self._indicator_style.text().strip(),
            dock_indicator_size=self._indicator_size.text().strip(),
            wallpaper=self._wallpaper.text().strip() or None,
            wallpaper_dark=self._wallpaper_dark.text().strip() or None,
            **values,
        )

    def _start_apply(self) -> None:
        if self._busy:
            QMessageBox.information(self, "In Progress", "Please wait for the current run to finish.")
            return
        service = MacosifyService(self._build_configuration())
        try:
            service.ensure_prerequisites()
        except MissingToolError as exc:
            QMessageBox.critical(self, "GNOME Tools Missing", f"{exc}. This tool requires gsettings and gnome-extensions.")
            return
        self._busy = True
        self._btn_apply.setEnabled(False)
        self._log(f"Applying: {', '.join(service.available_steps())}")
        worker = ServiceWorker(service.run)
        worker.signals.finished.connect(self._handle_apply_finished)
        worker.signals.error.connect(self._handle_error)
        self._track_worker(worker)
        self._thread_pool.start(worker)

    def _track_worker(self, worker: ServiceWorker) -> None:
        self._workers.add(worker)
        worker.signals.finished.connect(lambda *_: self._workers.discard(worker))
        worker.signals.error.connect(lambda *_: self._workers.discard(worker))

    def _handle_apply_finished(self, results: list[StepResult] | None) -> None:
        for result in results or []:
            self._log(format_result(result))
        failed = [result.name for result in results or [] if not result.success]
        if failed:
            self._log(f"{len(failed)} step(s) failed: {', '.join(failed)}")
        self._log("Done. On Wayland, log out/in if shell/icons don't refresh.")
        self._busy = False
        self._btn_apply.setEnabled(True)

    def _handle_error(self, message: str) -> None:
        self._log(f"[ERROR] {message}")
        self._busy = False
        self._btn_apply.setEnabled(True)

    def _log(self, message: str) -> None:
        self._log_view.appendPlainText(message)

    def closeEvent(self, event: QCloseEvent) -> None:
        logging.getLogger().removeHandler(self._log_handler)
        super().closeEvent(event)
