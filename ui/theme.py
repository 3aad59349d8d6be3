"""Window palette that follows the chosen appearance."""
from __future__ import annotations

from PySide6.QtGui import QColor, QPalette
from PySide6.QtWidgets import QApplication, QStyleFactory

from macosify_ubuntu.constants import DARK

ACCENT = QColor("#0a84ff")


def apply_palette(scheme: str) -> None:
    app = QApplication.instance()
    if app is None:
        return

    app.setStyle(QStyleFactory.create("Fusion"))
    if scheme != DARK:
        palette = app.style().standardPalette()
        palette.setColor(QPalette.Highlight, ACCENT)
        app.setPalette(palette)
        return

    window = QColor("#1e1e1e")
    surface = QColor("#2c2c2e")
    text = QColor("#f2f2f7")
    disabled_text = QColor("#8e8e93")

    palette = QPalette()
    palette.setColor(QPalette.Window, window)
    palette.setColor(QPalette.WindowText, text)
    palette.setColor(QPalette.Base, QColor("#161618"))
    palette.setColor(QPalette.AlternateBase, surface)
    palette.setColor(QPalette.ToolTipBase, surface)
    palette.setColor(QPalette.ToolTipText, text)
    palette.setColor(QPalette.Text, text)
    palette.setColor(QPalette.Button, surface)
    palette.setColor(QPalette.ButtonText, text)
    palette.setColor(QPalette.Highlight, ACCENT)
    palette.setColor(QPalette.HighlightedText, QColor("#ffffff"))
    palette.setColor(QPalette.Disabled, QPalette.Text, disabled_text)
    palette.setColor(QPalette.Disabled, QPalette.ButtonText, disabled_text)
    palette.setColor(QPalette.Disabled, QPalette.WindowText, disabled_text)
    app.setPalette(palette)
