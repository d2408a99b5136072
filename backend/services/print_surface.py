from __future__ import annotations

import logging
import webbrowser
from pathlib import Path
from typing import Protocol

from services.document import PresentationUnavailableError


logger = logging.getLogger(__name__)


class PrintSurface(Protocol):
    def present(self, document: str, *, filename: str) -> None:
        ...


class BrowserPrintSurface:
    """Write the document into ``export_dir`` and open it in the system browser.

    The page prints itself on load; whether the user prints, saves or closes
    the dialog is not tracked.
    """

    def __init__(self, export_dir: Path, *, opener=webbrowser.open) -> None:
        self.export_dir = Path(export_dir)
        self._opener = opener

    def present(self, document: str, *, filename: str) -> None:
        path = self.export_dir / filename
        try:
            self.export_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(document, encoding="utf-8")
        except OSError as exc:
            raise PresentationUnavailableError(f"Could not write {filename}: {exc}") from exc

        # A failed hand-off leaves nothing behind in export_dir.
        try:
            opened = self._opener(path.resolve().as_uri())
        except webbrowser.Error as exc:
            path.unlink(missing_ok=True)
            raise PresentationUnavailableError(f"No browser available: {exc}") from exc
        if not opened:
            path.unlink(missing_ok=True)
            raise PresentationUnavailableError("No browser available to open the print window")

        logger.info("Opened print window for %s", path)
