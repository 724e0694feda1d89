"""FastAPI dependency providers for the shared storage and Qiita client."""

from __future__ import annotations

from functools import lru_cache

from backend.config import settings
from backend.qiita import QiitaClient
from backend.storage import DraftStorage


@lru_cache
def get_storage() -> DraftStorage:
    return DraftStorage(settings.drafts_dir)


@lru_cache
def get_qiita_client() -> QiitaClient:
    return QiitaClient(settings)
