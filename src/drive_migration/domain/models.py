from dataclasses import dataclass
from enum import Enum


class EditorMode(str, Enum):
    READ_ONLY = "read_only"
    READ_WRITE = "read_write"


@dataclass(frozen=True)
class Account:
    email: str
    access_token: str
    refresh_token: str | None = None
    expires_at: float | None = None
    scopes: tuple[str, ...] = ()


@dataclass(frozen=True)
class FileContent:
    name: str
    content: str


@dataclass(frozen=True)
class DriveFile:
    file_id: str
    name: str
    mime_type: str = ""


@dataclass(frozen=True)
class PickerRequest:
    mime_types: tuple[str, ...]
    title: str = "Open file"


@dataclass(frozen=True)
class SignInRequest:
    auth_url: str
    state: str


@dataclass(frozen=True)
class SignInResult:
    code: str | None
    state: str | None
    error: str | None = None


@dataclass
class EditorSession:
    open_file_id: str | None = None
    title: str = ""
    content: str = ""
    revision: int = 0

    @property
    def mode(self) -> EditorMode:
        if self.open_file_id is None:
            return EditorMode.READ_ONLY
        return EditorMode.READ_WRITE

    def load(self, name: str, content: str) -> None:
        """Replace both fields with values delivered by a completion."""
        self.title = name
        self.content = content
        self.revision += 1

    def set_read_only(self) -> None:
        self.open_file_id = None

    def set_read_write(self, file_id: str) -> None:
        self.open_file_id = file_id
