from .errors import AuthError, DocumentError, DriveServiceError
from .models import (
    Account,
    DriveFile,
    EditorMode,
    EditorSession,
    FileContent,
    PickerRequest,
    SignInRequest,
    SignInResult,
)

__all__ = [
    "Account",
    "AuthError",
    "DocumentError",
    "DriveFile",
    "DriveServiceError",
    "EditorMode",
    "EditorSession",
    "FileContent",
    "PickerRequest",
    "SignInRequest",
    "SignInResult",
]
