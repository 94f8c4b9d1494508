from __future__ import annotations

from pathlib import Path
from urllib.parse import unquote, urlparse

from drive_migration.domain.errors import DocumentError
from drive_migration.domain.models import FileContent
from drive_migration.ports.document_port import DocumentPort


class LocalDocumentAdapter(DocumentPort):
    """Reads picker selections that resolve to files on the local filesystem."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def open_document(self, locator: str) -> FileContent:
        path = self.resolve_locator(locator)
        if not path.is_file():
            raise DocumentError(f"No document found at {locator}.")
        try:
            content = path.read_bytes().decode(self._encoding)
        except UnicodeDecodeError as exc:
            raise DocumentError(f"Document at {locator} is not {self._encoding} text.") from exc
        except OSError as exc:
            raise DocumentError(f"Unable to read document at {locator}: {exc}") from exc
        return FileContent(name=path.name, content=content)

    @staticmethod
    def resolve_locator(locator: str) -> Path:
        trimmed = (locator or "").strip()
        if not trimmed:
            raise DocumentError("Empty document locator.")
        parsed = urlparse(trimmed)
        if parsed.scheme == "file":
            return Path(unquote(parsed.path))
        if parsed.scheme and len(parsed.scheme) > 1:
            raise DocumentError(f"Unsupported locator scheme: {parsed.scheme}")
        return Path(trimmed)
