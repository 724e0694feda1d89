"""Drafts page: every saved draft with open and delete actions."""

from __future__ import annotations

from typing import Any

import pandas as pd
import streamlit as st

from ui import api
from ui import state as ops
from ui.components import banner, editor
from ui.state import EditorState


def _render_table(drafts: list[dict[str, Any]]) -> None:
    """Overview table, newest-updated first as returned by the backend."""
    df = pd.DataFrame(drafts)
    df["isPrivate"] = df["isPrivate"].map({True: "🔒", False: ""})
    df["updatedAt"] = pd.to_datetime(df["updatedAt"], utc=True).dt.strftime(
        "%Y-%m-%d %H:%M"
    )
    df = df.rename(
        columns={
            "title": "Title",
            "tags": "Tags",
            "isPrivate": "Private",
            "updatedAt": "Updated",
            "id": "ID",
        }
    )
    st.dataframe(
        df[["Title", "Tags", "Private", "Updated", "ID"]],
        use_container_width=True,
        hide_index=True,
    )


def _render_row(draft: dict[str, Any]) -> None:
    col_title, col_open, col_delete = st.columns([6, 1, 1])
    with col_title:
        st.markdown(f"**{draft.get('title') or '(untitled)'}**")
        st.caption(f"{draft['id']} · {draft.get('tags') or 'no tags'}")

    with col_open:
        if st.button("Open", key=f"open_{draft['id']}", use_container_width=True):
            opened = banner.guarded(ops.open_draft, draft["id"])
            if opened:
                editor.load(opened)
                st.switch_page(st.session_state.editor_page)

    with col_delete:
        if st.button("Delete", key=f"delete_{draft['id']}", use_container_width=True):
            current = st.session_state.get("editor", EditorState())
            result = banner.guarded(ops.delete_draft, current, draft["id"])
            if result:
                updated, message = result
                if "editor" in st.session_state:
                    st.session_state.editor = updated
                banner.show("success", message)
            st.rerun()


def render() -> None:
    """Render the drafts page."""
    st.title("🗂️ Drafts")

    drafts = banner.guarded(api.list_drafts)
    banner.render()
    if drafts is None:
        return
    if not drafts:
        st.info("No drafts saved yet.")
        return

    _render_table(drafts)
    st.divider()
    for draft in drafts:
        _render_row(draft)
