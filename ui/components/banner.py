"""Dismissible message banner shared by the editor and drafts pages."""

from __future__ import annotations

from typing import Any, Callable

import requests
import streamlit as st

from ui.api import APIError

_BANNER_KEY = "banner"


def show(kind: str, text: str) -> None:
    """Queue a banner ("error" or "success") for the next render."""
    st.session_state[_BANNER_KEY] = (kind, text)


def clear() -> None:
    st.session_state.pop(_BANNER_KEY, None)


def render() -> None:
    """Draw the queued banner with a dismiss button."""
    banner = st.session_state.get(_BANNER_KEY)
    if not banner:
        return
    kind, text = banner
    col_msg, col_close = st.columns([20, 1])
    with col_msg:
        if kind == "error":
            st.error(f"❌ {text}")
        else:
            st.success(f"✅ {text}")
    with col_close:
        if st.button("×", key="dismiss_banner"):
            clear()
            st.rerun()


def guarded(fn: Callable[..., Any], *args: Any) -> Any | None:
    """Call a backend operation, turning failures into an error banner.

    Returns the operation's result, or None when it failed.
    """
    try:
        return fn(*args)
    except requests.ConnectionError:
        show(
            "error",
            "Cannot reach the backend API. "
            "Make sure the FastAPI server is running on port 3001.",
        )
    except requests.Timeout:
        show("error", "Request timed out. The server may be overloaded.")
    except APIError as e:
        show("error", e.message)
    except requests.RequestException as e:
        show("error", f"Request failed: {e}")
    return None
