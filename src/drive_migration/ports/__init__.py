from .auth_port import AuthPort
from .document_port import DocumentPort
from .drive_port import DrivePort

__all__ = ["AuthPort", "DocumentPort", "DrivePort"]
