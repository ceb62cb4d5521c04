from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DraftRecord(BaseModel):
    id: str
    user_id: str
    theme_slug: str
    site_id: str | None = None
    content: Dict[str, str] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


def draft_id_for(*, user_id: str, theme_slug: str, site_id: str | None = None) -> str:
    parts = [user_id, site_id or "default", theme_slug]
    safe = "_".join(part.replace("/", "-") for part in parts)
    return f"draft_{safe}"


__all__ = ["DraftRecord", "draft_id_for"]
