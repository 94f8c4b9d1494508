from __future__ import annotations

import streamlit as st

from drive_migration.domain.models import PickerRequest
from drive_migration.services.editor_controller import EditorController

TITLE_WIDGET_KEY = "file_title_input"
CONTENT_WIDGET_KEY = "doc_content_input"
_PICKER_EXTENSIONS = {
    "text/plain": ["txt"],
    "text/markdown": ["md"],
    "text/csv": ["csv"],
}


def _init_state() -> None:
    st.session_state.setdefault("runtime", None)
    st.session_state.setdefault("sign_in_requested", False)
    st.session_state.setdefault("picker_request", None)
    st.session_state.setdefault("picker_generation", 0)
    st.session_state.setdefault("rendered_revision", -1)


def _trigger_rerun() -> None:
    if hasattr(st, "rerun"):
        st.rerun()
    else:
        st.experimental_rerun()


def _sync_editor_widgets(controller: EditorController) -> None:
    """Push field values delivered by completions into the text widgets."""
    session = controller.session
    if st.session_state.get("rendered_revision") == session.revision:
        return
    st.session_state[TITLE_WIDGET_KEY] = session.title
    st.session_state[CONTENT_WIDGET_KEY] = session.content
    st.session_state["rendered_revision"] = session.revision


def _collect_editor_widgets(controller: EditorController) -> None:
    controller.edit(
        title=st.session_state.get(TITLE_WIDGET_KEY, controller.session.title),
        content=st.session_state.get(CONTENT_WIDGET_KEY, controller.session.content),
    )


def _picker_extensions(request: PickerRequest) -> list[str] | None:
    extensions: list[str] = []
    for mime_type in request.mime_types:
        extensions.extend(_PICKER_EXTENSIONS.get(mime_type, []))
    return extensions or None

