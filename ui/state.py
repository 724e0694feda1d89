"""Editor state and the operations that move it between backend calls.

The state is an immutable value: every operation takes the current state
and returns the next one together with a message for the user, so the
identity of the draft being edited is always part of the state itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any

from ui import api

logger = logging.getLogger(__name__)

SAMPLE_MARKDOWN = """# Title

## Heading 2

### Heading 3

Write your markdown here.

- List item 1
- List item 2
- List item 3

You can use **bold** and *italic* too.

```python
code = "code block"
```

> Quote

[Link](https://example.com)

| Table | Sample |
|-------|--------|
| Cell1 | Cell2  |
"""


@dataclass(frozen=True)
class EditorState:
    """Everything the editor holds for the article being written."""

    title: str = ""
    tags: str = ""
    markdown: str = SAMPLE_MARKDOWN
    is_private: bool = False
    draft_id: str | None = None

    @classmethod
    def from_draft(cls, draft: dict[str, Any]) -> EditorState:
        return cls(
            title=draft.get("title", ""),
            tags=draft.get("tags", ""),
            markdown=draft.get("markdown", ""),
            is_private=bool(draft.get("isPrivate", False)),
            draft_id=draft.get("id"),
        )

    def edit(self, **changes: Any) -> EditorState:
        """Return a copy with the given content fields replaced."""
        return replace(self, **changes)

    def validation_error(self) -> str | None:
        """Message for the first blank required field, or None."""
        if not self.title.strip():
            return "Please enter a title"
        if not self.markdown.strip():
            return "Please enter the article body"
        return None

    def tag_list(self) -> list[dict[str, Any]]:
        """Qiita tag objects from the comma-separated tag string."""
        names = (t.strip() for t in self.tags.split(","))
        return [{"name": name, "versions": []} for name in names if name]

    def to_article(self) -> dict[str, Any]:
        return {
            "title": self.title.strip(),
            "body": self.markdown,
            "tags": self.tag_list(),
            "private": self.is_private,
        }

    def to_draft_fields(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "tags": self.tags,
            "markdown": self.markdown,
            "isPrivate": self.is_private,
        }


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


def save_draft(state: EditorState) -> tuple[EditorState, str]:
    """Create the draft on first save, update it afterwards."""
    fields = state.to_draft_fields()
    if state.draft_id:
        result = api.update_draft(state.draft_id, fields)
        return state, result.get("message", "Draft updated")

    result = api.create_draft(fields)
    return state.edit(draft_id=result["id"]), result.get("message", "Draft saved")


def publish(state: EditorState) -> tuple[EditorState, str]:
    """Publish to Qiita, then drop the draft the article came from.

    Raises:
        api.APIError: validation failed locally or the backend refused.
    """
    error = state.validation_error()
    if error:
        raise api.APIError(error)

    result = api.publish(state.to_article())
    message = f"Article published! URL: {result.get('url', '')}"

    if state.draft_id:
        try:
            api.delete_draft(state.draft_id)
        except api.APIError as e:
            # The article is live; a missing draft is not worth failing over
            logger.warning("Could not delete draft %s: %s", state.draft_id, e)
    return state.edit(draft_id=None), message


def restore_latest() -> EditorState:
    """State seeded from the most recent draft, or a blank editor."""
    draft = api.get_latest_draft()
    return EditorState.from_draft(draft) if draft else EditorState()


def open_draft(draft_id: str) -> EditorState:
    return EditorState.from_draft(api.get_draft(draft_id))


def delete_draft(state: EditorState, draft_id: str) -> tuple[EditorState, str]:
    """Delete a draft; detach the editor from it if it was the open one."""
    result = api.delete_draft(draft_id)
    if state.draft_id == draft_id:
        state = state.edit(draft_id=None)
    return state, result.get("message", "Draft deleted")
