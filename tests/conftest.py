from __future__ import annotations

import pytest

from services import capabilities


@pytest.fixture(autouse=True)
def isolated_system_roots(tmp_path_factory, monkeypatch):
    """Keep resource probes away from the real /usr/share of the test machine."""
    root = tmp_path_factory.mktemp("usr-share")
    monkeypatch.setattr(capabilities, "SYSTEM_THEME_ROOT", root / "themes")
    monkeypatch.setattr(capabilities, "SYSTEM_ICON_ROOT", root / "icons")
    return root
