from __future__ import annotations

import json
from uuid import uuid4

import requests

from drive_migration.domain.errors import DriveServiceError
from drive_migration.domain.models import DriveFile, FileContent
from drive_migration.ports.drive_port import DrivePort


class GoogleDriveAdapter(DrivePort):
    _BASE_URL = "https://www.googleapis.com/drive/v3"
    _UPLOAD_URL = "https://www.googleapis.com/upload/drive/v3"

    def __init__(
        self,
        access_token: str,
        timeout: float = 20,
        application_name: str | None = None,
    ) -> None:
        self._access_token = access_token
        self._timeout = timeout
        self._application_name = application_name

    def create_file(self, name: str, mime_type: str, parent_id: str) -> str:
        response = self._request(
            "post",
            f"{self._BASE_URL}/files",
            context="create file",
            headers={"Content-Type": "application/json"},
            params={"fields": "id"},
            json={"parents": [parent_id], "mimeType": mime_type, "name": name},
        )
        file_id = response.json().get("id")
        if not file_id:
            raise DriveServiceError("Null result when requesting file creation.")
        return file_id

    def read_file(self, file_id: str) -> FileContent:
        metadata = self._request(
            "get",
            f"{self._BASE_URL}/files/{file_id}",
            context="read file metadata",
            params={"fields": "name"},
        ).json()
        body = self._request(
            "get",
            f"{self._BASE_URL}/files/{file_id}",
            context="read file content",
            params={"alt": "media"},
        )
        return FileContent(
            name=metadata.get("name", ""),
            content=body.content.decode("utf-8", errors="replace"),
        )

    def save_file(self, file_id: str, name: str, content: str) -> None:
        boundary = f"drive-migration-{uuid4().hex}"
        metadata = json.dumps({"name": name})
        body = (
            f"--{boundary}\r\n"
            "Content-Type: application/json; charset=UTF-8\r\n\r\n"
            f"{metadata}\r\n"
            f"--{boundary}\r\n"
            "Content-Type: text/plain; charset=UTF-8\r\n\r\n"
            f"{content}\r\n"
            f"--{boundary}--\r\n"
        )
        self._request(
            "patch",
            f"{self._UPLOAD_URL}/files/{file_id}",
            context="save file",
            headers={"Content-Type": f"multipart/related; boundary={boundary}"},
            params={"uploadType": "multipart"},
            data=body.encode("utf-8"),
        )

    def list_files(self) -> list[DriveFile]:
        payload = self._request(
            "get",
            f"{self._BASE_URL}/files",
            context="query files",
            params={"spaces": "drive", "fields": "files(id, name, mimeType)"},
        ).json()
        return [
            DriveFile(
                file_id=item.get("id", ""),
                name=item.get("name", ""),
                mime_type=item.get("mimeType", ""),
            )
            for item in payload.get("files", [])
        ]

    def _request(
        self,
        method: str,
        url: str,
        context: str,
        headers: dict[str, str] | None = None,
        **kwargs,
    ) -> requests.Response:
        try:
            response = requests.request(
                method,
                url,
                headers={**self._auth_header(), **(headers or {})},
                timeout=self._timeout,
                **kwargs,
            )
        except requests.RequestException as exc:
            raise DriveServiceError(
                f"Transport error while attempting to {context}: {exc}"
            ) from exc
        self._raise_for_status(response, context=context)
        return response

    def _auth_header(self) -> dict[str, str]:
        header = {"Authorization": f"Bearer {self._access_token}"}
        if self._application_name:
            header["User-Agent"] = self._application_name
        return header

    @staticmethod
    def _raise_for_status(response: requests.Response, context: str) -> None:
        if response.status_code in (401, 403):
            raise DriveServiceError(f"Auth failed while attempting to {context}.")
        if response.status_code == 404:
            raise DriveServiceError(
                f"Resource not found or no access while attempting to {context}."
            )
        if response.status_code >= 400:
            raise DriveServiceError(
                f"Drive API error {response.status_code} while attempting to {context}."
            )
