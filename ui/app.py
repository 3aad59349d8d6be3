"""GUI entry point."""
from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from macosify_ubuntu.cli import configure_logging
from macosify_ubuntu.constants import LIGHT
from ui.main_window import MacosifyWindow
from ui.theme import apply_palette


def main() -> int:
    configure_logging(verbose=False)
    app = QApplication.instance() or QApplication(sys.argv)
    apply_palette(LIGHT)
    window = MacosifyWindow()
    window.show()
    return app.exec()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
