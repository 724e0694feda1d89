"""Qiita Markdown Editor — Streamlit interface.

Run with:
    streamlit run ui/app.py
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so `ui.*` imports resolve
# regardless of the working directory Streamlit uses.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

st.set_page_config(
    page_title="Qiita Markdown Editor",
    page_icon="📝",
    layout="wide",
    initial_sidebar_state="expanded",
)

from ui.components import drafts, editor, sidebar  # noqa: E402

# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------

editor_page = st.Page(
    editor.render, title="Editor", icon="📝", default=True, url_path="editor"
)
# Drafts page jumps back here after opening a draft
st.session_state.editor_page = editor_page

page = st.navigation(
    [
        editor_page,
        st.Page(drafts.render, title="Drafts", icon="🗂️", url_path="drafts"),
    ]
)

# Sidebar is shared across all pages
sidebar.render()

# Render the selected page
page.run()

st.divider()
st.caption("Publishes through the Qiita API v2")
