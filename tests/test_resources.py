from __future__ import annotations

from pathlib import Path

import pytest

from fakes import FakePreferenceStore, make_prober
from macosify_ubuntu.constants import (
    CURSOR_THEME_CANDIDATES,
    DARK,
    FALLBACK_RESOURCE,
    GTK_THEME_CANDIDATES,
    ICON_THEME_CANDIDATES,
    LIGHT,
)
from services.resources import ResourceCandidateList, ResourceSelector


def _selector(home: Path) -> ResourceSelector:
    return ResourceSelector(make_prober(FakePreferenceStore(), home=home))


def test_first_available_candidate_wins(tmp_path: Path) -> None:
    (tmp_path / ".themes" / "WhiteSur-Dark").mkdir(parents=True)
    (tmp_path / ".local" / "share" / "themes" / "Yaru-dark").mkdir(parents=True)
    selector = _selector(tmp_path)

    candidates = ResourceCandidateList("theme", GTK_THEME_CANDIDATES.for_scheme(DARK))

    assert selector.select(candidates) == "WhiteSur-Dark"


@pytest.mark.parametrize("scheme", [LIGHT, DARK])
@pytest.mark.parametrize(
    "category, table",
    [("theme", GTK_THEME_CANDIDATES), ("icon", ICON_THEME_CANDIDATES), ("icon", CURSOR_THEME_CANDIDATES)],
)
def test_fallback_returned_when_nothing_installed(tmp_path: Path, scheme: str, category: str, table) -> None:
    candidates = ResourceCandidateList(category, table.for_scheme(scheme))

    assert candidates.fallback == FALLBACK_RESOURCE
    assert _selector(tmp_path).select(candidates) == FALLBACK_RESOURCE


def test_selection_is_repeatable(tmp_path: Path) -> None:
    (tmp_path / ".icons" / "MacTahoe").mkdir(parents=True)
    selector = _selector(tmp_path)
    candidates = ResourceCandidateList("icon", ICON_THEME_CANDIDATES.for_scheme(LIGHT))

    assert selector.select(candidates) == selector.select(candidates) == "MacTahoe"


def test_candidate_list_requires_a_fallback() -> None:
    with pytest.raises(ValueError):
        ResourceCandidateList("theme", ())
    with pytest.raises(ValueError):
        ResourceCandidateList("theme", ("WhiteSur-Light", ""))
