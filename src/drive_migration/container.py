from __future__ import annotations

from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Callable

from drive_migration.adapters.google_drive_adapter import GoogleDriveAdapter
from drive_migration.adapters.google_oauth_adapter import GoogleOAuthAdapter
from drive_migration.adapters.local_document_adapter import LocalDocumentAdapter
from drive_migration.domain.models import Account, PickerRequest, SignInRequest
from drive_migration.services.drive_service import DriveService
from drive_migration.services.editor_controller import EditorController
from drive_migration.services.tasks import UiDispatcher
from drive_migration.settings import (
    DRIVE_APPLICATION_NAME,
    DRIVE_REQUEST_TIMEOUT,
    DRIVE_SERVICE_WORKERS,
    OAUTH_CLIENT_ID,
    OAUTH_CLIENT_SECRET,
    OAUTH_REDIRECT_URI,
)


def build_drive_service(account: Account, executor: Executor) -> DriveService:
    drive = GoogleDriveAdapter(
        account.access_token,
        timeout=DRIVE_REQUEST_TIMEOUT,
        application_name=DRIVE_APPLICATION_NAME,
    )
    return DriveService(drive, LocalDocumentAdapter(), executor)


def build_controller(
    dispatcher: UiDispatcher,
    client_id: str = OAUTH_CLIENT_ID,
    client_secret: str = OAUTH_CLIENT_SECRET,
    launch_sign_in: Callable[[SignInRequest], None] | None = None,
    launch_picker: Callable[[PickerRequest], None] | None = None,
    executor: Executor | None = None,
) -> EditorController:
    executor = executor or ThreadPoolExecutor(
        max_workers=DRIVE_SERVICE_WORKERS, thread_name_prefix="drive-service"
    )
    auth = GoogleOAuthAdapter(
        client_id=client_id,
        client_secret=client_secret,
        redirect_uri=OAUTH_REDIRECT_URI,
        timeout=DRIVE_REQUEST_TIMEOUT,
    )
    return EditorController(
        auth=auth,
        service_factory=lambda account: build_drive_service(account, executor),
        dispatcher=dispatcher,
        executor=executor,
        launch_sign_in=launch_sign_in,
        launch_picker=launch_picker,
    )
