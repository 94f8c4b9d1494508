from __future__ import annotations

import logging
import time
import webbrowser
from pathlib import Path

import streamlit as st
from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[3]
load_dotenv(_REPO_ROOT / ".env", override=False)

from drive_migration import settings
from drive_migration.adapters.google_oauth_adapter import GoogleOAuthAdapter
from drive_migration.domain.models import EditorMode, PickerRequest
from drive_migration.services.editor_controller import EditorController
from drive_migration.ui_streamlit.helpers import (
    CONTENT_WIDGET_KEY,
    TITLE_WIDGET_KEY,
    _collect_editor_widgets,
    _init_state,
    _picker_extensions,
    _sync_editor_widgets,
    _trigger_rerun,
)
from drive_migration.ui_streamlit.session import SessionRuntime

LOGGER = logging.getLogger(__name__)
_POLL_INTERVAL_SECONDS = 0.3


def _configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _open_browser(url: str) -> None:
    try:
        webbrowser.open(url, new=2)
    except webbrowser.Error:
        LOGGER.debug("Unable to open a browser for sign-in")


def _launch_picker(request: PickerRequest) -> None:
    st.session_state["picker_request"] = request


def _get_runtime() -> SessionRuntime:
    runtime = st.session_state["runtime"]
    if runtime is None:
        runtime = SessionRuntime(
            settings.OAUTH_REDIRECT_URI,
            launch_browser=_open_browser,
            launch_picker=_launch_picker,
        )
        st.session_state["runtime"] = runtime
    return runtime


def _render_sign_in(runtime: SessionRuntime) -> EditorController | None:
    controller = runtime.controller
    if controller is not None and controller.signed_in:
        email = controller.account.email if controller.account else ""
        st.caption(f"Signed in as {email}" if email else "Signed in.")
        return controller

    st.subheader("Google Sign-in")
    st.caption(f"OAuth redirect URI: `{settings.OAUTH_REDIRECT_URI}`")
    client_id = st.text_input("OAuth Client ID", value=settings.OAUTH_CLIENT_ID)
    client_secret = st.text_input(
        "OAuth Client Secret", value=settings.OAUTH_CLIENT_SECRET, type="password"
    )
    if client_id and client_secret:
        controller = runtime.ensure_controller(client_id, client_secret)
        if not st.session_state["sign_in_requested"]:
            st.session_state["sign_in_requested"] = True
            controller.request_sign_in()
    if st.button("Sign in with Google"):
        if not client_id or not client_secret:
            st.error("Client ID and Client Secret are required for OAuth.")
        else:
            controller = runtime.ensure_controller(client_id, client_secret)
            st.session_state["sign_in_requested"] = True
            controller.request_sign_in()

    if runtime.sign_in_url:
        st.markdown(f"[Authorize Google Drive]({runtime.sign_in_url})")
        if st.button("Check sign-in"):
            _trigger_rerun()
        with st.expander("Troubleshooting (manual redirect)", expanded=False):
            redirect_url = st.text_input(
                "Redirect URL",
                help="Paste the full redirect URL after consent.",
            )
            if st.button("Complete sign-in") and controller is not None:
                controller.handle_sign_in_result(
                    GoogleOAuthAdapter.parse_redirect_url(redirect_url)
                )
    return controller


def _render_picker(runtime: SessionRuntime, controller: EditorController) -> None:
    request = st.session_state.get("picker_request")
    if request is None:
        return
    uploaded = st.file_uploader(
        request.title,
        type=_picker_extensions(request),
        key=f"picker_{st.session_state['picker_generation']}",
    )
    if st.button("Cancel"):
        st.session_state["picker_request"] = None
        st.session_state["picker_generation"] += 1
        _trigger_rerun()
    if uploaded is not None:
        locator = runtime.store_upload(uploaded.name, uploaded.getvalue())
        st.session_state["picker_request"] = None
        st.session_state["picker_generation"] += 1
        controller.open_file_from_picker(locator)


def _render_editor(runtime: SessionRuntime, controller: EditorController) -> None:
    _sync_editor_widgets(controller)
    read_only = controller.mode is EditorMode.READ_ONLY
    st.text_input(
        "Title",
        key=TITLE_WIDGET_KEY,
        disabled=read_only,
        on_change=_collect_editor_widgets,
        args=(controller,),
    )
    st.text_area(
        "Content",
        key=CONTENT_WIDGET_KEY,
        height=320,
        disabled=read_only,
        on_change=_collect_editor_widgets,
        args=(controller,),
    )

    open_col, create_col, save_col, query_col = st.columns(4)
    if open_col.button("Open", disabled=not controller.signed_in):
        controller.open_file_picker()
    if create_col.button("Create", disabled=not controller.signed_in):
        controller.create_file()
    if save_col.button("Save", disabled=not controller.signed_in):
        _collect_editor_widgets(controller)
        controller.save_file()
    if query_col.button("Query", disabled=not controller.signed_in):
        controller.query()
    _render_picker(runtime, controller)


def main() -> None:
    _configure_logging()
    st.title(settings.DRIVE_APPLICATION_NAME)
    _init_state()

    runtime = _get_runtime()
    runtime.dispatcher.drain()

    controller = _render_sign_in(runtime)
    if controller is None:
        st.info("Enter OAuth client credentials to sign in.")
        return
    _render_editor(runtime, controller)

    if runtime.dispatcher.busy:
        time.sleep(_POLL_INTERVAL_SECONDS)
        _trigger_rerun()


if __name__ == "__main__":
    main()
