from __future__ import annotations

import logging
import os
import uuid
from datetime import datetime
from pathlib import Path
from typing import Dict

from fastapi import Depends, FastAPI, Header, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from theme_editor.content import get_default_content_from_schema, get_sections_by_type, merge_content
from theme_editor.draft_store import DraftRepository, DraftStore
from theme_editor.errors import InvalidThemeSlugError
from theme_editor.firestore_draft_store import FirestoreDraftStore
from theme_editor.firestore_schema_store import FirestoreSchemaStore
from theme_editor.logging_config import set_trace_id, setup_logging
from theme_editor.models.draft import DraftRecord
from theme_editor.models.editor import EditableSection, SectionType
from theme_editor.schema_loader import load_theme_schema
from theme_editor.schema_store import BUNDLED_THEMES_PATH, LocalSchemaStore, SchemaStore, validate_slug


class SaveDraftRequest(BaseModel):
    theme_slug: str = Field(alias="themeSlug")
    draft_content: Dict[str, str] = Field(alias="draftContent")
    site_id: str | None = Field(default=None, alias="siteId")

    class Config:
        populate_by_name = True


class DraftResponse(BaseModel):
    id: str
    theme_slug: str = Field(serialization_alias="themeSlug")
    site_id: str | None = Field(default=None, serialization_alias="siteId")
    content: Dict[str, str]
    updated_at: datetime = Field(serialization_alias="updatedAt")

    @staticmethod
    def from_record(record: DraftRecord) -> "DraftResponse":
        return DraftResponse(
            id=record.id,
            theme_slug=record.theme_slug,
            site_id=record.site_id,
            content=dict(record.content),
            updated_at=record.updated_at,
        )


# Environment configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
PROJECT_ID = os.getenv("PROJECT_ID")
SCHEMA_STORE = os.getenv("SCHEMA_STORE", "local")
THEMES_DIR = os.getenv("THEMES_DIR")

# Setup logging
setup_logging(environment=ENVIRONMENT, project_id=PROJECT_ID)
logger = logging.getLogger(__name__)

app = FastAPI(title="Theme Editor API", version="0.1.0")

if SCHEMA_STORE == "firestore":
    schema_store: SchemaStore = FirestoreSchemaStore(project_id=PROJECT_ID)
else:
    schema_store = LocalSchemaStore(base_path=Path(THEMES_DIR) if THEMES_DIR else BUNDLED_THEMES_PATH)

# Use Firestore in production, in-memory for dev
if ENVIRONMENT == "dev":
    draft_store: DraftRepository = DraftStore()
else:
    draft_store = FirestoreDraftStore(project_id=PROJECT_ID)


def get_schema_store() -> SchemaStore:
    return schema_store


def get_draft_store() -> DraftRepository:
    return draft_store


def require_user_id(x_user_id: str | None = Header(default=None)) -> str:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="User not authenticated. Please login.")
    return x_user_id


def _checked_slug(theme_slug: str) -> str:
    try:
        return validate_slug(theme_slug)
    except InvalidThemeSlugError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _section_payload(section: EditableSection) -> dict:
    return section.model_dump(mode="json", exclude_none=True)


@app.middleware("http")
async def assign_trace_id(request: Request, call_next):
    set_trace_id(request.headers.get("x-cloud-trace-context") or str(uuid.uuid4()))
    return await call_next(request)


@app.get("/v1/themes/{theme_slug}/schema")
async def get_theme_schema(theme_slug: str, store: SchemaStore = Depends(get_schema_store)) -> JSONResponse:
    resolution = await load_theme_schema(theme_slug, store)
    return JSONResponse(resolution.to_wire())


@app.get("/v1/themes/{theme_slug}/default-content")
async def get_theme_default_content(
    theme_slug: str, store: SchemaStore = Depends(get_schema_store)
) -> JSONResponse:
    resolution = await load_theme_schema(theme_slug, store)
    content = get_default_content_from_schema(resolution.schema)
    return JSONResponse({"themeSlug": theme_slug, "status": resolution.status.value, "content": content})


@app.get("/v1/themes/{theme_slug}/sections")
async def get_theme_sections(
    theme_slug: str,
    kind: SectionType = Query(alias="type"),
    store: SchemaStore = Depends(get_schema_store),
) -> JSONResponse:
    resolution = await load_theme_schema(theme_slug, store)
    sections = get_sections_by_type(resolution.schema, kind)
    return JSONResponse(
        {
            "themeSlug": theme_slug,
            "status": resolution.status.value,
            "type": kind.value,
            "sections": [_section_payload(section) for section in sections],
        }
    )


@app.post("/v1/drafts")
async def save_draft(
    request: SaveDraftRequest,
    user_id: str = Depends(require_user_id),
    drafts: DraftRepository = Depends(get_draft_store),
) -> JSONResponse:
    theme_slug = _checked_slug(request.theme_slug)
    if not request.draft_content:
        raise HTTPException(status_code=400, detail="Missing themeSlug or draftContent")

    record = drafts.save_draft(
        user_id=user_id,
        theme_slug=theme_slug,
        content=request.draft_content,
        site_id=request.site_id,
    )
    logger.info("Draft saved", extra={"draft_id": record.id, "theme_slug": theme_slug})
    draft = DraftResponse.from_record(record).model_dump(mode="json", by_alias=True)
    return JSONResponse({"success": True, "draft": draft})


@app.get("/v1/drafts/{theme_slug}")
async def load_draft(
    theme_slug: str,
    site_id: str | None = Query(default=None, alias="siteId"),
    user_id: str = Depends(require_user_id),
    drafts: DraftRepository = Depends(get_draft_store),
) -> JSONResponse:
    record = drafts.get_draft(user_id=user_id, theme_slug=_checked_slug(theme_slug), site_id=site_id)
    if record is None:
        # No draft yet; the editor falls back to schema defaults
        return JSONResponse({"success": True, "content": {}, "lastUpdated": None})
    return JSONResponse(
        {
            "success": True,
            "content": dict(record.content),
            "lastUpdated": record.updated_at.isoformat(),
        }
    )


@app.get("/v1/drafts/{theme_slug}/content")
async def load_merged_content(
    theme_slug: str,
    site_id: str | None = Query(default=None, alias="siteId"),
    user_id: str = Depends(require_user_id),
    store: SchemaStore = Depends(get_schema_store),
    drafts: DraftRepository = Depends(get_draft_store),
) -> JSONResponse:
    theme_slug = _checked_slug(theme_slug)
    resolution = await load_theme_schema(theme_slug, store)
    defaults = get_default_content_from_schema(resolution.schema)
    record = drafts.get_draft(user_id=user_id, theme_slug=theme_slug, site_id=site_id)
    content = merge_content(defaults, record.content) if record else defaults
    return JSONResponse({"themeSlug": theme_slug, "status": resolution.status.value, "content": content})


@app.get("/health")
async def healthcheck() -> JSONResponse:
    return JSONResponse({"status": "ok"})
