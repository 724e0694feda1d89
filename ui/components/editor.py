"""Editor page: article fields, markdown input and live preview."""

from __future__ import annotations

import streamlit as st

from ui import state as ops
from ui.components import banner
from ui.state import EditorState

# EditorState field -> widget key
_WIDGETS: dict[str, str] = {
    "title": "title_input",
    "tags": "tags_input",
    "markdown": "markdown_input",
    "is_private": "private_input",
}


def load(state: EditorState) -> None:
    """Replace the editor contents on the next render."""
    st.session_state.pending_editor = state


def _sync_widgets() -> None:
    """Push the editor state into the widgets before they are drawn.

    A pending state replaces everything; otherwise only widget values that
    Streamlit dropped (e.g. while another page was shown) are refilled.
    """
    pending = st.session_state.pop("pending_editor", None)
    if pending is not None:
        st.session_state.editor = pending
    for field, key in _WIDGETS.items():
        if pending is not None or key not in st.session_state:
            st.session_state[key] = getattr(st.session_state.editor, field)


def _ensure_session() -> None:
    """Restore the most recent draft on first load."""
    if "editor" not in st.session_state and "pending_editor" not in st.session_state:
        restored = banner.guarded(ops.restore_latest)
        load(restored or EditorState())
    _sync_widgets()


def _current() -> EditorState:
    """Editor state with the latest widget values folded in."""
    return st.session_state.editor.edit(
        **{field: st.session_state[key] for field, key in _WIDGETS.items()}
    )


def _render_actions() -> None:
    col_private, col_new, col_save, col_publish = st.columns([2, 1, 1, 1])
    with col_private:
        st.checkbox("Private", key=_WIDGETS["is_private"])

    with col_new:
        if st.button("New article", use_container_width=True):
            load(EditorState())
            banner.clear()
            st.rerun()

    with col_save:
        if st.button("Save draft", use_container_width=True):
            result = banner.guarded(ops.save_draft, _current())
            if result:
                st.session_state.editor, message = result
                banner.show("success", message)
            st.rerun()

    with col_publish:
        if st.button("Publish", type="primary", use_container_width=True):
            with st.spinner("Publishing..."):
                result = banner.guarded(ops.publish, _current())
            if result:
                st.session_state.editor, message = result
                banner.show("success", message)
            st.rerun()


def render() -> None:
    """Render the editor page."""
    _ensure_session()

    st.title("📝 Write a Qiita article")
    _render_actions()
    banner.render()

    col_edit, col_preview = st.columns(2)
    with col_edit:
        st.subheader("Article")
        st.text_input(
            "Title",
            key=_WIDGETS["title"],
            placeholder="Enter the article title...",
        )
        st.text_input(
            "Tags",
            key=_WIDGETS["tags"],
            placeholder="Comma-separated, e.g. Python,FastAPI,Streamlit",
        )
        st.text_area(
            "Markdown",
            key=_WIDGETS["markdown"],
            height=520,
            placeholder="Write your markdown here...",
        )

    with col_preview:
        st.subheader("Preview")
        with st.container(border=True):
            st.markdown(st.session_state[_WIDGETS["markdown"]])

    current = st.session_state.editor = _current()
    if current.draft_id:
        st.caption(f"Editing draft `{current.draft_id}`")
