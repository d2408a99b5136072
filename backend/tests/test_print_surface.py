from __future__ import annotations

import webbrowser

import pytest

from services.document import PresentationUnavailableError
from services.print_surface import BrowserPrintSurface


def test_writes_document_and_opens_it(tmp_path) -> None:
    opened: list[str] = []

    def opener(url: str) -> bool:
        opened.append(url)
        return True

    surface = BrowserPrintSurface(tmp_path / "exports", opener=opener)
    surface.present("<html></html>", filename="Timetable_CS_PhD.html")

    path = tmp_path / "exports" / "Timetable_CS_PhD.html"
    assert path.read_text(encoding="utf-8") == "<html></html>"
    assert opened == [path.resolve().as_uri()]


def test_no_browser_is_presentation_unavailable(tmp_path) -> None:
    surface = BrowserPrintSurface(tmp_path, opener=lambda url: False)

    with pytest.raises(PresentationUnavailableError):
        surface.present("<html></html>", filename="t.html")
    assert list(tmp_path.iterdir()) == []


def test_browser_error_is_presentation_unavailable(tmp_path) -> None:
    def opener(url: str) -> bool:
        raise webbrowser.Error("could not locate runnable browser")

    with pytest.raises(PresentationUnavailableError):
        BrowserPrintSurface(tmp_path, opener=opener).present("<html></html>", filename="t.html")
    assert list(tmp_path.iterdir()) == []


def test_unwritable_export_dir_is_presentation_unavailable(tmp_path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(PresentationUnavailableError):
        BrowserPrintSurface(blocker / "exports", opener=lambda url: True).present("<html></html>", filename="t.html")
