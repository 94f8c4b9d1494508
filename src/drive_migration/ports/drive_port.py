from __future__ import annotations

from typing import Protocol, runtime_checkable

from drive_migration.domain.models import DriveFile, FileContent


@runtime_checkable
class DrivePort(Protocol):
    def create_file(self, name: str, mime_type: str, parent_id: str) -> str:
        """Create an empty file and return its id."""

    def read_file(self, file_id: str) -> FileContent:
        """Return the display name and text body of a file."""

    def save_file(self, file_id: str, name: str, content: str) -> None:
        """Replace the name and text body of a file."""

    def list_files(self) -> list[DriveFile]:
        """Return the first page of files visible to this application."""
