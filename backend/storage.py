"""JSON file-per-draft storage layer.

Each draft lives in ``<drafts_dir>/<id>.json``. Writes are full-file
overwrites without locking; a single interactive client is assumed.
"""

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from backend.errors import DraftNotFoundError
from backend.metrics import DRAFT_OPERATIONS
from backend.models import Draft, DraftFields

logger = logging.getLogger(__name__)

DRAFT_ID_PREFIX = "draft-"
_SAFE_ID = re.compile(r"[A-Za-z0-9_-]+")
_EPOCH = datetime.min.replace(tzinfo=UTC)


def utc_now() -> datetime:
    return datetime.now(UTC)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 with a fixed microsecond width so values sort consistently."""
    return moment.isoformat(timespec="microseconds")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; unparseable values sort oldest."""
    try:
        moment = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return _EPOCH
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment


class DraftStorage:
    """Manages drafts as individual JSON files in a directory."""

    def __init__(
        self, drafts_dir: Path, clock: Callable[[], datetime] = utc_now
    ) -> None:
        self._dir = Path(drafts_dir)
        self._clock = clock

    @property
    def directory(self) -> Path:
        return self._dir

    # ------------------------------------------------------------------
    # File helpers
    # ------------------------------------------------------------------

    def _ensure_dir(self) -> None:
        """Create the drafts directory on first use."""
        if not self._dir.exists():
            self._dir.mkdir(parents=True, exist_ok=True)
            logger.info("Created drafts directory %s", self._dir)

    def _path_for(self, draft_id: str) -> Path:
        """Map an identifier to its file. Unsafe identifiers never resolve."""
        if not _SAFE_ID.fullmatch(draft_id):
            raise DraftNotFoundError(draft_id)
        return self._dir / f"{draft_id}.json"

    def _json_files(self) -> list[Path]:
        self._ensure_dir()
        return [p for p in self._dir.iterdir() if p.suffix == ".json" and p.is_file()]

    @staticmethod
    def _read(path: Path) -> Draft:
        return Draft.model_validate_json(path.read_text(encoding="utf-8"))

    @staticmethod
    def _serialise(draft: Draft) -> str:
        return draft.model_dump_json(by_alias=True, indent=2)

    def _load(self, draft_id: str) -> tuple[Path, Draft]:
        """Read one draft; a missing or unreadable file counts as not found."""
        path = self._path_for(draft_id)
        try:
            return path, self._read(path)
        except FileNotFoundError:
            raise DraftNotFoundError(draft_id) from None
        except (IsADirectoryError, UnicodeDecodeError, ValidationError) as exc:
            logger.warning("Unreadable draft %s: %s", path.name, exc)
            raise DraftNotFoundError(draft_id) from None

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def create(self, fields: DraftFields) -> Draft:
        """Persist a new draft under a fresh time-based identifier."""
        self._ensure_dir()
        now = self._clock()
        stamp = format_timestamp(now)
        millis = int(now.timestamp() * 1000)

        while True:
            draft = Draft(
                id=f"{DRAFT_ID_PREFIX}{millis}",
                title=fields.title or "",
                tags=fields.tags or "",
                markdown=fields.markdown or "",
                is_private=fields.is_private or False,
                created_at=stamp,
                updated_at=stamp,
            )
            try:
                # "x" claims the name atomically; a clash means another draft
                # was created in the same millisecond.
                with self._path_for(draft.id).open("x", encoding="utf-8") as fh:
                    fh.write(self._serialise(draft))
                break
            except FileExistsError:
                millis += 1

        DRAFT_OPERATIONS.labels(operation="create").inc()
        logger.info("Created draft %s — '%s'", draft.id, draft.title)
        return draft

    def latest(self) -> Draft | None:
        """Most recently modified draft by file mtime, or None.

        Equal mtimes are broken by identifier, lexically greatest first.
        """
        candidates: list[tuple[int, str, Path]] = []
        for path in self._json_files():
            try:
                candidates.append((path.stat().st_mtime_ns, path.stem, path))
            except FileNotFoundError:
                continue

        for _, _, path in sorted(candidates, reverse=True):
            try:
                return self._read(path)
            except (OSError, UnicodeDecodeError, ValidationError) as exc:
                logger.warning("Skipping unreadable draft %s: %s", path.name, exc)
        return None

    def get_all(self) -> list[Draft]:
        """Every draft, newest ``updatedAt`` first (ties by identifier)."""
        drafts: list[Draft] = []
        for path in self._json_files():
            try:
                drafts.append(self._read(path))
            except (OSError, UnicodeDecodeError, ValidationError) as exc:
                logger.warning("Skipping unreadable draft %s: %s", path.name, exc)

        drafts.sort(key=lambda d: (parse_timestamp(d.updated_at), d.id), reverse=True)
        return drafts

    def get(self, draft_id: str) -> Draft:
        """Return a single draft or raise DraftNotFoundError."""
        return self._load(draft_id)[1]

    def update(self, draft_id: str, fields: DraftFields) -> Draft:
        """Merge supplied fields into an existing draft and refresh updatedAt."""
        path, draft = self._load(draft_id)

        now = self._clock()
        previous = parse_timestamp(draft.updated_at)
        if now <= previous:
            now = previous + timedelta(microseconds=1)

        updated = draft.model_copy(
            update={**fields.supplied(), "updated_at": format_timestamp(now)}
        )
        path.write_text(self._serialise(updated), encoding="utf-8")

        DRAFT_OPERATIONS.labels(operation="update").inc()
        logger.info("Updated draft %s", draft_id)
        return updated

    def delete(self, draft_id: str) -> None:
        """Remove a draft's backing file."""
        path = self._path_for(draft_id)
        try:
            path.unlink()
        except FileNotFoundError:
            raise DraftNotFoundError(draft_id) from None

        DRAFT_OPERATIONS.labels(operation="delete").inc()
        logger.info("Deleted draft %s", draft_id)

    @property
    def count(self) -> int:
        """Number of stored drafts."""
        return len(self._json_files())
