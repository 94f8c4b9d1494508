from .drive_service import DriveService
from .editor_controller import FILE_LIST_LABEL, EditorController
from .tasks import UiDispatcher

__all__ = ["DriveService", "EditorController", "FILE_LIST_LABEL", "UiDispatcher"]
