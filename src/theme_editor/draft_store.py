from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Dict, Mapping, Protocol

from .models.draft import DraftRecord, draft_id_for


class DraftRepository(Protocol):
    def save_draft(
        self, *, user_id: str, theme_slug: str, content: Mapping[str, str], site_id: str | None = None
    ) -> DraftRecord:
        ...

    def get_draft(self, *, user_id: str, theme_slug: str, site_id: str | None = None) -> DraftRecord | None:
        ...

    def list_drafts(self, *, user_id: str) -> list[DraftRecord]:
        ...


class DraftStore:
    def __init__(self) -> None:
        self._drafts: Dict[str, DraftRecord] = {}
        self._lock = threading.Lock()

    def save_draft(
        self, *, user_id: str, theme_slug: str, content: Mapping[str, str], site_id: str | None = None
    ) -> DraftRecord:
        draft_id = draft_id_for(user_id=user_id, theme_slug=theme_slug, site_id=site_id)
        with self._lock:
            existing = self._drafts.get(draft_id)
            if existing is None:
                draft = DraftRecord(
                    id=draft_id,
                    user_id=user_id,
                    theme_slug=theme_slug,
                    site_id=site_id,
                    content=dict(content),
                )
            else:
                draft = existing.model_copy(
                    update={"content": dict(content), "updated_at": datetime.now(timezone.utc)}
                )
            self._drafts[draft_id] = draft
            return draft

    def get_draft(self, *, user_id: str, theme_slug: str, site_id: str | None = None) -> DraftRecord | None:
        draft_id = draft_id_for(user_id=user_id, theme_slug=theme_slug, site_id=site_id)
        with self._lock:
            return self._drafts.get(draft_id)

    def list_drafts(self, *, user_id: str) -> list[DraftRecord]:
        with self._lock:
            drafts = [draft for draft in self._drafts.values() if draft.user_id == user_id]
        return sorted(drafts, key=lambda draft: draft.updated_at, reverse=True)


__all__ = ["DraftRepository", "DraftStore"]
