from __future__ import annotations

import tempfile
from concurrent.futures import Executor, ThreadPoolExecutor
from pathlib import Path
from typing import Callable

from drive_migration.adapters.oauth_callback_server import OAuthCallbackServer
from drive_migration.container import build_controller
from drive_migration.domain.models import PickerRequest, SignInRequest, SignInResult
from drive_migration.services.editor_controller import EditorController
from drive_migration.services.tasks import UiDispatcher
from drive_migration.settings import DRIVE_SERVICE_WORKERS


class SessionRuntime:
    """Everything one browser session owns across script reruns.

    The dispatcher, the executor, the loopback callback server and the
    upload scratch directory are created once per session. The controller
    is rebuilt only when the OAuth client credentials change, and a sign-in
    redirect is always delivered to the current controller.
    """

    def __init__(
        self,
        redirect_uri: str,
        launch_browser: Callable[[str], None] | None = None,
        launch_picker: Callable[[PickerRequest], None] | None = None,
        executor: Executor | None = None,
        callback_server: OAuthCallbackServer | None = None,
        controller_factory: Callable[..., EditorController] = build_controller,
    ) -> None:
        self.dispatcher = UiDispatcher()
        self._executor = executor or ThreadPoolExecutor(
            max_workers=DRIVE_SERVICE_WORKERS, thread_name_prefix="drive-service"
        )
        self._callback_server = callback_server or OAuthCallbackServer(redirect_uri)
        self._launch_browser = launch_browser
        self._launch_picker = launch_picker
        self._controller_factory = controller_factory
        self._credentials: tuple[str, str] | None = None
        self._upload_dir: tempfile.TemporaryDirectory | None = None
        self.controller: EditorController | None = None
        self.sign_in_url: str | None = None

    def ensure_controller(self, client_id: str, client_secret: str) -> EditorController:
        credentials = (client_id, client_secret)
        if self.controller is not None and self._credentials == credentials:
            return self.controller
        self.controller = self._controller_factory(
            self.dispatcher,
            client_id=client_id,
            client_secret=client_secret,
            launch_sign_in=self._start_sign_in,
            launch_picker=self._launch_picker,
            executor=self._executor,
        )
        self._credentials = credentials
        return self.controller

    def store_upload(self, name: str, data: bytes) -> str:
        """Write an uploaded document to the session's scratch dir and return its locator."""
        if self._upload_dir is None:
            self._upload_dir = tempfile.TemporaryDirectory(prefix="drive-migration-")
        target = Path(self._upload_dir.name) / Path(name).name
        target.write_bytes(data)
        return target.resolve().as_uri()

    def close(self) -> None:
        self._executor.shutdown(wait=False)
        if self._upload_dir is not None:
            self._upload_dir.cleanup()
            self._upload_dir = None

    def _start_sign_in(self, request: SignInRequest) -> None:
        self.sign_in_url = request.auth_url
        # A server still waiting from an earlier request keeps the port.
        self._callback_server.start(self._deliver_sign_in_result)
        if self._launch_browser is not None:
            self._launch_browser(request.auth_url)

    def _deliver_sign_in_result(self, result: SignInResult) -> None:
        self.dispatcher.post(lambda: self._handle_sign_in_result(result))

    def _handle_sign_in_result(self, result: SignInResult) -> None:
        if self.controller is not None:
            self.controller.handle_sign_in_result(result)
