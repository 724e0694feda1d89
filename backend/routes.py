"""HTTP routes: the Qiita publish proxy and the draft CRUD surface."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from backend.dependencies import get_qiita_client, get_storage
from backend.errors import SubmissionError
from backend.models import (
    ArticleSubmission,
    Draft,
    DraftCreatedResponse,
    DraftFields,
    DraftMutationResponse,
    PublishResponse,
)
from backend.qiita import QiitaClient
from backend.storage import DraftStorage

logger = logging.getLogger(__name__)

articles_router = APIRouter(prefix="/api/articles", tags=["articles"])
drafts_router = APIRouter(prefix="/api/drafts", tags=["drafts"])


# ---------------------------------------------------------------------------
# Publish proxy
# ---------------------------------------------------------------------------


@articles_router.post("", response_model=PublishResponse)
async def publish_article(
    submission: ArticleSubmission,
    qiita: QiitaClient = Depends(get_qiita_client),
) -> PublishResponse:
    """Validate and forward an article to Qiita."""
    if submission.missing_fields():
        raise SubmissionError("Title and body are required")

    logger.info(
        "Publishing '%s' (%d tags, private=%s)",
        submission.title,
        len(submission.tags),
        submission.private,
    )
    item = await qiita.create_item(submission)
    return PublishResponse(
        url=item.get("url", ""),
        id=str(item.get("id", "")),
        message="Article published",
    )


# ---------------------------------------------------------------------------
# Drafts
# ---------------------------------------------------------------------------


@drafts_router.post("", response_model=DraftCreatedResponse)
def create_draft(
    fields: DraftFields | None = None,
    storage: DraftStorage = Depends(get_storage),
) -> DraftCreatedResponse:
    """Save a new draft. A missing body saves an empty one."""
    draft = storage.create(fields or DraftFields())
    return DraftCreatedResponse(id=draft.id, message="Draft saved")


@drafts_router.get("", response_model=Draft | None)
def latest_draft(storage: DraftStorage = Depends(get_storage)) -> Draft | None:
    """Most recently modified draft, or null when there are none."""
    return storage.latest()


@drafts_router.get("/list", response_model=list[Draft])
def list_drafts(storage: DraftStorage = Depends(get_storage)) -> list[Draft]:
    """All drafts, newest-updated first."""
    return storage.get_all()


@drafts_router.get("/{draft_id}", response_model=Draft)
def get_draft(draft_id: str, storage: DraftStorage = Depends(get_storage)) -> Draft:
    return storage.get(draft_id)


@drafts_router.put("/{draft_id}", response_model=DraftMutationResponse)
def update_draft(
    draft_id: str,
    fields: DraftFields | None = None,
    storage: DraftStorage = Depends(get_storage),
) -> DraftMutationResponse:
    """Merge the supplied fields into an existing draft."""
    storage.update(draft_id, fields or DraftFields())
    return DraftMutationResponse(message="Draft updated")


@drafts_router.delete("/{draft_id}", response_model=DraftMutationResponse)
def delete_draft(
    draft_id: str, storage: DraftStorage = Depends(get_storage)
) -> DraftMutationResponse:
    storage.delete(draft_id)
    return DraftMutationResponse(message="Draft deleted")
