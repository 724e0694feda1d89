"""Unit tests for the editor state and the UI's backend client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from ui import api
from ui import state as ops
from ui.state import SAMPLE_MARKDOWN, EditorState

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _response(status: int, body) -> MagicMock:
    """Fake requests.Response."""
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status
    resp.ok = status < 400
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body
    return resp


DRAFT = {
    "id": "draft-1700000000000",
    "title": "Saved",
    "tags": "python, web",
    "markdown": "# saved",
    "isPrivate": True,
    "createdAt": "2026-01-01T00:00:00.000000+00:00",
    "updatedAt": "2026-01-01T00:00:00.000000+00:00",
}


# ---------------------------------------------------------------------------
# EditorState
# ---------------------------------------------------------------------------


class TestEditorState:
    def test_defaults(self) -> None:
        state = EditorState()
        assert state.markdown == SAMPLE_MARKDOWN
        assert state.draft_id is None

    def test_from_draft(self) -> None:
        state = EditorState.from_draft(DRAFT)
        assert state == EditorState(
            title="Saved",
            tags="python, web",
            markdown="# saved",
            is_private=True,
            draft_id="draft-1700000000000",
        )

    def test_edit_returns_new_value(self) -> None:
        state = EditorState(title="a")
        edited = state.edit(title="b")
        assert state.title == "a"
        assert edited.title == "b"

    def test_validation(self) -> None:
        assert EditorState(title=" ", markdown="x").validation_error()
        assert EditorState(title="x", markdown="\n").validation_error()
        assert EditorState(title="x", markdown="y").validation_error() is None

    def test_to_article(self) -> None:
        state = EditorState(title="  Hi ", tags="a, ,b,", markdown="body", is_private=True)
        assert state.to_article() == {
            "title": "Hi",
            "body": "body",
            "tags": [{"name": "a", "versions": []}, {"name": "b", "versions": []}],
            "private": True,
        }

    def test_to_draft_fields_camel_case(self) -> None:
        fields = EditorState(title="t", is_private=True).to_draft_fields()
        assert fields["isPrivate"] is True
        assert "draft_id" not in fields


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


class TestSaveDraft:
    def test_first_save_creates_and_records_id(self) -> None:
        with patch("ui.api.create_draft", return_value={"id": "draft-9", "message": "Draft saved"}) as create:
            state, message = ops.save_draft(EditorState(title="t"))
        create.assert_called_once()
        assert state.draft_id == "draft-9"
        assert message == "Draft saved"

    def test_later_save_updates(self) -> None:
        with (
            patch("ui.api.update_draft", return_value={"message": "Draft updated"}) as update,
            patch("ui.api.create_draft") as create,
        ):
            state, _ = ops.save_draft(EditorState(title="t", draft_id="draft-9"))
        update.assert_called_once_with("draft-9", EditorState(title="t").to_draft_fields())
        create.assert_not_called()
        assert state.draft_id == "draft-9"


class TestPublish:
    def test_invalid_state_not_sent(self) -> None:
        with patch("ui.api.publish") as publish:
            with pytest.raises(api.APIError):
                ops.publish(EditorState(title="", markdown="x"))
        publish.assert_not_called()

    def test_success_deletes_current_draft(self) -> None:
        with (
            patch("ui.api.publish", return_value={"url": "https://qiita.com/x"}),
            patch("ui.api.delete_draft") as delete,
        ):
            state, message = ops.publish(
                EditorState(title="t", markdown="b", draft_id="draft-1")
            )
        delete.assert_called_once_with("draft-1")
        assert state.draft_id is None
        assert "https://qiita.com/x" in message

    def test_success_without_draft_skips_delete(self) -> None:
        with (
            patch("ui.api.publish", return_value={"url": "u"}),
            patch("ui.api.delete_draft") as delete,
        ):
            ops.publish(EditorState(title="t", markdown="b"))
        delete.assert_not_called()

    def test_missing_draft_does_not_fail_publish(self) -> None:
        with (
            patch("ui.api.publish", return_value={"url": "u"}),
            patch("ui.api.delete_draft", side_effect=api.APIError("Draft not found", 404)),
        ):
            state, _ = ops.publish(EditorState(title="t", markdown="b", draft_id="d"))
        assert state.draft_id is None

    def test_backend_error_keeps_draft(self) -> None:
        with (
            patch("ui.api.publish", side_effect=api.APIError("Qiita API error: Forbidden", 403)),
            patch("ui.api.delete_draft") as delete,
        ):
            with pytest.raises(api.APIError):
                ops.publish(EditorState(title="t", markdown="b", draft_id="d"))
        delete.assert_not_called()


class TestDraftNavigation:
    def test_restore_latest(self) -> None:
        with patch("ui.api.get_latest_draft", return_value=DRAFT):
            assert ops.restore_latest().draft_id == DRAFT["id"]

    def test_restore_latest_empty(self) -> None:
        with patch("ui.api.get_latest_draft", return_value=None):
            assert ops.restore_latest() == EditorState()

    def test_delete_open_draft_detaches(self) -> None:
        with patch("ui.api.delete_draft", return_value={"message": "Draft deleted"}):
            state, message = ops.delete_draft(EditorState(draft_id="d1"), "d1")
        assert state.draft_id is None
        assert message == "Draft deleted"

    def test_delete_other_draft_keeps_id(self) -> None:
        with patch("ui.api.delete_draft", return_value={}):
            state, _ = ops.delete_draft(EditorState(draft_id="d1"), "d2")
        assert state.draft_id == "d1"


# ---------------------------------------------------------------------------
# ui.api
# ---------------------------------------------------------------------------


class TestApiClient:
    def test_success_returns_json(self) -> None:
        with patch("ui.api.requests.get", return_value=_response(200, [DRAFT])) as get:
            assert api.list_drafts() == [DRAFT]
        assert get.call_args.args[0].endswith("/api/drafts/list")

    def test_error_carries_backend_message(self) -> None:
        with patch(
            "ui.api.requests.post",
            return_value=_response(400, {"message": "Title and body are required"}),
        ):
            with pytest.raises(api.APIError) as exc_info:
                api.publish({"title": "", "body": ""})
        assert exc_info.value.message == "Title and body are required"
        assert exc_info.value.status_code == 400

    def test_error_without_json_body(self) -> None:
        with patch(
            "ui.api.requests.delete",
            return_value=_response(502, ValueError("no json")),
        ):
            with pytest.raises(api.APIError) as exc_info:
                api.delete_draft("d")
        assert "502" in exc_info.value.message
