"""Sidebar: backend connection status and editor tips."""

from __future__ import annotations

import requests
import streamlit as st

from ui import api


def render() -> None:
    with st.sidebar:
        st.header("Backend")
        try:
            api.get_health()
            st.success("Connected", icon="🟢")
        except (requests.RequestException, api.APIError):
            st.error("Unreachable", icon="🔴")
        st.caption(f"`{api.BASE_URL}`")

        st.divider()
        st.markdown(
            "**Tips**\n\n"
            "- Separate tags with commas.\n"
            "- *Save draft* keeps your work on the server.\n"
            "- Publishing removes the draft you were editing."
        )
