"""Thin HTTP client for the editor backend.

All functions return parsed JSON (dicts/lists) or raise APIError carrying
the backend's ``message`` so it can be shown to the user as-is.
Uses requests (synchronous) since Streamlit reruns are synchronous.
"""

from __future__ import annotations

import os
from typing import Any

import requests

BASE_URL = os.getenv("EDITOR_API_URL", "http://localhost:3001")
_TIMEOUT = 30  # seconds


class APIError(Exception):
    """Backend answered with an error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _json(resp: requests.Response) -> Any:
    """Return the response body, raising APIError for error statuses."""
    if not resp.ok:
        try:
            message = resp.json().get("message")
        except (ValueError, AttributeError):
            message = None
        raise APIError(message or f"Request failed ({resp.status_code})", resp.status_code)
    return resp.json()


def publish(article: dict[str, Any]) -> dict[str, Any]:
    """POST /api/articles — publish to Qiita, returns {url, id, ...}."""
    resp = requests.post(f"{BASE_URL}/api/articles", json=article, timeout=_TIMEOUT)
    return _json(resp)


def create_draft(fields: dict[str, Any]) -> dict[str, Any]:
    """POST /api/drafts — save a new draft, returns {id, ...}."""
    resp = requests.post(f"{BASE_URL}/api/drafts", json=fields, timeout=10)
    return _json(resp)


def get_latest_draft() -> dict[str, Any] | None:
    """GET /api/drafts — most recently modified draft or None."""
    resp = requests.get(f"{BASE_URL}/api/drafts", timeout=10)
    return _json(resp)


def list_drafts() -> list[dict[str, Any]]:
    """GET /api/drafts/list — all drafts, newest first."""
    resp = requests.get(f"{BASE_URL}/api/drafts/list", timeout=10)
    return _json(resp)


def get_draft(draft_id: str) -> dict[str, Any]:
    """GET /api/drafts/{id} — a single draft."""
    resp = requests.get(f"{BASE_URL}/api/drafts/{draft_id}", timeout=10)
    return _json(resp)


def update_draft(draft_id: str, fields: dict[str, Any]) -> dict[str, Any]:
    """PUT /api/drafts/{id} — merge fields into an existing draft."""
    resp = requests.put(f"{BASE_URL}/api/drafts/{draft_id}", json=fields, timeout=10)
    return _json(resp)


def delete_draft(draft_id: str) -> dict[str, Any]:
    """DELETE /api/drafts/{id}."""
    resp = requests.delete(f"{BASE_URL}/api/drafts/{draft_id}", timeout=10)
    return _json(resp)


def get_health() -> dict[str, Any]:
    """GET /api/health — backend liveness."""
    resp = requests.get(f"{BASE_URL}/api/health", timeout=5)
    return _json(resp)
