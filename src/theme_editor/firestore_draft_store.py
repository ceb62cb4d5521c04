from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Mapping

from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from .models.draft import DraftRecord, draft_id_for

logger = logging.getLogger(__name__)


class FirestoreDraftStore:
    """Firestore-backed draft store for production use."""

    COLLECTION_NAME = "drafts"

    def __init__(self, project_id: str | None = None, *, client: firestore.Client | None = None) -> None:
        self._db = client or firestore.Client(project=project_id)
        self._collection = self._db.collection(self.COLLECTION_NAME)

    def save_draft(
        self,
        *,
        user_id: str,
        theme_slug: str,
        content: Mapping[str, str],
        site_id: str | None = None,
    ) -> DraftRecord:
        """Create or overwrite the draft for a user, site and theme."""
        draft_id = draft_id_for(user_id=user_id, theme_slug=theme_slug, site_id=site_id)
        doc_ref = self._collection.document(draft_id)
        now = datetime.now(timezone.utc)

        existing = doc_ref.get()
        created_at = existing.to_dict().get("created_at", now) if existing.exists else now

        draft = DraftRecord(
            id=draft_id,
            user_id=user_id,
            theme_slug=theme_slug,
            site_id=site_id,
            content=dict(content),
            created_at=created_at,
            updated_at=now,
        )
        doc_ref.set(self._to_firestore_dict(draft))

        logger.info(
            "Saved draft",
            extra={
                "draft_id": draft_id,
                "user_id": user_id,
                "theme_slug": theme_slug,
                "site_id": site_id,
                "sections": len(draft.content),
            },
        )

        return draft

    def get_draft(self, *, user_id: str, theme_slug: str, site_id: str | None = None) -> DraftRecord | None:
        """Retrieve a draft, or None if the user has not saved one."""
        draft_id = draft_id_for(user_id=user_id, theme_slug=theme_slug, site_id=site_id)
        doc = self._collection.document(draft_id).get()

        if not doc.exists:
            return None

        return self._from_firestore_dict(doc.id, doc.to_dict())

    def list_drafts(self, *, user_id: str, limit: int = 100) -> list[DraftRecord]:
        """List a user's drafts, most recently updated first."""
        query = (
            self._collection.where(filter=FieldFilter("user_id", "==", user_id))
            .order_by("updated_at", direction=firestore.Query.DESCENDING)
            .limit(limit)
        )

        return [self._from_firestore_dict(doc.id, doc.to_dict()) for doc in query.stream()]

    def _to_firestore_dict(self, draft: DraftRecord) -> dict:
        return {
            "user_id": draft.user_id,
            "theme_slug": draft.theme_slug,
            "site_id": draft.site_id,
            "content": dict(draft.content),
            "created_at": draft.created_at,
            "updated_at": draft.updated_at,
        }

    def _from_firestore_dict(self, draft_id: str, data: dict) -> DraftRecord:
        return DraftRecord(
            id=draft_id,
            user_id=data["user_id"],
            theme_slug=data["theme_slug"],
            site_id=data.get("site_id"),
            content=data.get("content") or {},
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )


__all__ = ["FirestoreDraftStore"]
