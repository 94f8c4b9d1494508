from __future__ import annotations

from concurrent.futures import Executor, Future

from drive_migration.domain.models import DriveFile, FileContent, PickerRequest
from drive_migration.ports.document_port import DocumentPort
from drive_migration.ports.drive_port import DrivePort

TEXT_MIME_TYPE = "text/plain"
UNTITLED_FILE_NAME = "Untitled file"
ROOT_FOLDER_ID = "root"


class DriveService:
    """Runs Drive REST and picker reads off the UI context.

    Every call except ``create_picker_request`` returns a ``Future`` that
    resolves with the result or raises the adapter's error.
    """

    def __init__(self, drive: DrivePort, documents: DocumentPort, executor: Executor) -> None:
        self._drive = drive
        self._documents = documents
        self._executor = executor

    def create_picker_request(self) -> PickerRequest:
        return PickerRequest(mime_types=(TEXT_MIME_TYPE,))

    def open_via_picker(self, locator: str) -> Future[FileContent]:
        return self._executor.submit(self._documents.open_document, locator)

    def create_file(self) -> Future[str]:
        return self._executor.submit(
            self._drive.create_file, UNTITLED_FILE_NAME, TEXT_MIME_TYPE, ROOT_FOLDER_ID
        )

    def read_file(self, file_id: str) -> Future[FileContent]:
        return self._executor.submit(self._drive.read_file, file_id)

    def save_file(self, file_id: str, name: str, content: str) -> Future[None]:
        return self._executor.submit(self._save, file_id, name, content)

    def query_files(self) -> Future[list[DriveFile]]:
        return self._executor.submit(self._drive.list_files)

    def _save(self, file_id: str, name: str, content: str) -> None:
        self._drive.save_file(file_id, name, content)
