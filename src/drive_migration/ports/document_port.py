from __future__ import annotations

from typing import Protocol, runtime_checkable

from drive_migration.domain.models import FileContent


@runtime_checkable
class DocumentPort(Protocol):
    def open_document(self, locator: str) -> FileContent:
        """Read the display name and text body behind a picker locator."""
