from __future__ import annotations

import logging
from concurrent.futures import Executor
from typing import Callable

from drive_migration.domain.errors import AuthError
from drive_migration.domain.models import (
    Account,
    DriveFile,
    EditorMode,
    EditorSession,
    FileContent,
    PickerRequest,
    SignInRequest,
    SignInResult,
)
from drive_migration.ports.auth_port import AuthPort
from drive_migration.services.drive_service import DriveService
from drive_migration.services.tasks import UiDispatcher

LOGGER = logging.getLogger(__name__)

FILE_LIST_LABEL = "File List"

ServiceFactory = Callable[[Account], DriveService]


class EditorController:
    """Turns the editor's user actions into facade calls.

    Completions are applied to the session only when the dispatcher is
    drained on the UI context. Every action other than sign-in is a no-op
    until sign-in has produced a service.
    """

    def __init__(
        self,
        auth: AuthPort,
        service_factory: ServiceFactory,
        dispatcher: UiDispatcher,
        executor: Executor,
        launch_sign_in: Callable[[SignInRequest], None] | None = None,
        launch_picker: Callable[[PickerRequest], None] | None = None,
    ) -> None:
        self._auth = auth
        self._service_factory = service_factory
        self._dispatcher = dispatcher
        self._executor = executor
        self._launch_sign_in = launch_sign_in
        self._launch_picker = launch_picker
        self._service: DriveService | None = None
        self._account: Account | None = None
        self.session = EditorSession()

    @property
    def signed_in(self) -> bool:
        return self._service is not None

    @property
    def account(self) -> Account | None:
        return self._account

    @property
    def mode(self) -> EditorMode:
        return self.session.mode

    @property
    def open_file_id(self) -> str | None:
        return self.session.open_file_id

    def request_sign_in(self) -> SignInRequest | None:
        LOGGER.debug("Requesting sign-in")
        try:
            request = self._auth.begin_sign_in()
        except AuthError as exc:
            LOGGER.error("Unable to sign in.", exc_info=exc)
            return None
        if self._launch_sign_in is not None:
            self._launch_sign_in(request)
        return request

    def handle_sign_in_result(self, result: SignInResult) -> None:
        future = self._executor.submit(self._auth.complete_sign_in, result)
        self._dispatcher.watch(
            future,
            on_success=self._on_signed_in,
            on_failure=lambda exc: LOGGER.error("Unable to sign in.", exc_info=exc),
        )

    def _on_signed_in(self, account: Account) -> None:
        LOGGER.debug("Signed in as %s", account.email)
        self._account = account
        self._service = self._service_factory(account)

    def open_file_picker(self) -> PickerRequest | None:
        if self._service is None:
            return None
        LOGGER.debug("Opening file picker.")
        request = self._service.create_picker_request()
        if self._launch_picker is not None:
            self._launch_picker(request)
        return request

    def open_file_from_picker(self, locator: str) -> None:
        if self._service is None:
            return
        LOGGER.debug("Opening %s", locator)

        def _opened(file: FileContent) -> None:
            self.session.load(file.name, file.content)
            # Files opened through the picker cannot be modified.
            self.session.set_read_only()

        self._dispatcher.watch(
            self._service.open_via_picker(locator),
            on_success=_opened,
            on_failure=lambda exc: LOGGER.error("Unable to open file from picker.", exc_info=exc),
        )

    def create_file(self) -> None:
        if self._service is None:
            return
        LOGGER.debug("Creating a file.")
        self._dispatcher.watch(
            self._service.create_file(),
            on_success=self.read_file,
            on_failure=lambda exc: LOGGER.error("Couldn't create file.", exc_info=exc),
        )

    def read_file(self, file_id: str) -> None:
        if self._service is None:
            return
        LOGGER.debug("Reading file %s", file_id)

        def _read(file: FileContent) -> None:
            self.session.load(file.name, file.content)
            self.session.set_read_write(file_id)

        self._dispatcher.watch(
            self._service.read_file(file_id),
            on_success=_read,
            on_failure=lambda exc: LOGGER.error("Couldn't read file.", exc_info=exc),
        )

    def save_file(self) -> None:
        file_id = self.session.open_file_id
        if self._service is None or file_id is None:
            return
        LOGGER.debug("Saving %s", file_id)
        self._dispatcher.watch(
            self._service.save_file(file_id, self.session.title, self.session.content),
            on_failure=lambda exc: LOGGER.error("Unable to save file via REST.", exc_info=exc),
        )

    def query(self) -> None:
        if self._service is None:
            return
        LOGGER.debug("Querying for files.")

        def _listed(files: list[DriveFile]) -> None:
            self.session.load(FILE_LIST_LABEL, "\n".join(file.name for file in files))
            self.session.set_read_only()

        self._dispatcher.watch(
            self._service.query_files(),
            on_success=_listed,
            on_failure=lambda exc: LOGGER.error("Unable to query files.", exc_info=exc),
        )

    def edit(self, title: str | None = None, content: str | None = None) -> None:
        """Record user edits; ignored while the editor is read-only."""
        if self.session.mode is not EditorMode.READ_WRITE:
            return
        if title is not None:
            self.session.title = title
        if content is not None:
            self.session.content = content
