from concurrent.futures import Executor, Future
from pathlib import Path
from unittest.mock import Mock
from urllib.parse import unquote, urlparse

from drive_migration.domain.models import Account, SignInRequest, SignInResult
from drive_migration.services.editor_controller import EditorController
from drive_migration.ui_streamlit.session import SessionRuntime


class ImmediateExecutor(Executor):
    def submit(self, fn, /, *args, **kwargs):
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future


class FakeCallbackServer:
    """Holds the port until a result is delivered, like the loopback server."""

    def __init__(self) -> None:
        self.start_calls = 0
        self.on_result = None

    def start(self, on_result) -> bool:
        self.start_calls += 1
        if self.on_result is not None:
            return False
        self.on_result = on_result
        return True

    def deliver(self, result: SignInResult) -> None:
        on_result, self.on_result = self.on_result, None
        on_result(result)


class ControllerFactory:
    def __init__(self) -> None:
        self.built: list[dict] = []
        self.auths: list[Mock] = []

    def __call__(self, dispatcher, **kwargs) -> EditorController:
        auth = Mock()
        auth.begin_sign_in.return_value = SignInRequest(
            auth_url=f"https://accounts.example/auth?n={len(self.built)}", state="s"
        )
        auth.complete_sign_in.return_value = Account(email="user@example.com", access_token="t")
        self.built.append(kwargs)
        self.auths.append(auth)
        return EditorController(
            auth=auth,
            service_factory=lambda account: Mock(),
            dispatcher=dispatcher,
            executor=kwargs["executor"],
            launch_sign_in=kwargs["launch_sign_in"],
            launch_picker=kwargs["launch_picker"],
        )


def _runtime(**kwargs) -> tuple[SessionRuntime, FakeCallbackServer, ControllerFactory]:
    server = FakeCallbackServer()
    factory = ControllerFactory()
    runtime = SessionRuntime(
        "http://localhost:8080/",
        executor=kwargs.pop("executor", ImmediateExecutor()),
        callback_server=server,
        controller_factory=factory,
        **kwargs,
    )
    return runtime, server, factory


def test_repeated_sign_in_request_reaches_kept_controller() -> None:
    opened: list[str] = []
    runtime, server, factory = _runtime(launch_browser=opened.append)

    controller = runtime.ensure_controller("id", "secret")
    controller.request_sign_in()
    again = runtime.ensure_controller("id", "secret")
    again.request_sign_in()

    assert again is controller
    assert len(factory.built) == 1
    assert server.start_calls == 2
    assert opened == [runtime.sign_in_url, runtime.sign_in_url]

    result = SignInResult(code="abc", state="s")
    server.deliver(result)
    runtime.dispatcher.drain()

    assert controller.signed_in
    factory.auths[0].complete_sign_in.assert_called_once_with(result)


def test_changed_credentials_rebuild_controller_on_shared_executor() -> None:
    executor = ImmediateExecutor()
    runtime, server, factory = _runtime(executor=executor)

    first = runtime.ensure_controller("id", "secret")
    first.request_sign_in()
    second = runtime.ensure_controller("other-id", "other-secret")
    second.request_sign_in()
    server.deliver(SignInResult(code="abc", state="s"))
    runtime.dispatcher.drain()

    assert second is not first
    assert [built["executor"] for built in factory.built] == [executor, executor]
    assert second.signed_in
    assert not first.signed_in


def test_redirect_before_any_controller_is_dropped() -> None:
    runtime, _, _ = _runtime()

    runtime._deliver_sign_in_result(SignInResult(code="abc", state="s"))

    assert runtime.dispatcher.drain() == 1
    assert runtime.controller is None


def test_uploads_share_one_directory_removed_on_close() -> None:
    executor = Mock()
    runtime, _, _ = _runtime(executor=executor)

    first = Path(unquote(urlparse(runtime.store_upload("a.txt", b"one")).path))
    second = Path(unquote(urlparse(runtime.store_upload("../b.txt", b"two")).path))

    assert first.read_bytes() == b"one"
    assert second.name == "b.txt"
    assert first.parent == second.parent

    runtime.close()

    assert not first.parent.exists()
    executor.shutdown.assert_called_once_with(wait=False)
