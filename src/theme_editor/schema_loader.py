from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum

from .models.editor import ThemeEditableSchema
from .schema_store import SchemaStore

logger = logging.getLogger(__name__)


class ResolutionStatus(str, Enum):
    resolved = "resolved"
    missing = "missing"
    failed = "failed"


@dataclass(frozen=True)
class SchemaResolution:
    """Outcome of a schema lookup.

    A theme without a stored schema (``missing``) and a lookup that blew up
    (``failed``) both carry the empty fallback schema, but stay distinguishable
    through ``status``.
    """

    status: ResolutionStatus
    schema: ThemeEditableSchema
    error: str | None = None

    @property
    def resolved(self) -> bool:
        return self.status is ResolutionStatus.resolved

    @property
    def defaulted(self) -> bool:
        return not self.resolved

    @classmethod
    def from_schema(cls, schema: ThemeEditableSchema) -> "SchemaResolution":
        return cls(status=ResolutionStatus.resolved, schema=schema)

    @classmethod
    def defaulted_missing(cls, theme_slug: str) -> "SchemaResolution":
        return cls(status=ResolutionStatus.missing, schema=ThemeEditableSchema.empty(theme_slug))

    @classmethod
    def defaulted_failed(cls, theme_slug: str, error: str) -> "SchemaResolution":
        return cls(
            status=ResolutionStatus.failed,
            schema=ThemeEditableSchema.empty(theme_slug),
            error=error,
        )

    def to_wire(self) -> dict:
        return {**self.schema.to_wire(), "status": self.status.value, "error": self.error}


def resolve_theme_schema(theme_slug: str, store: SchemaStore) -> SchemaResolution:
    """Resolve a theme's editable schema, degrading to an empty one on any failure.

    Never raises. A missing document or a failing store both produce the
    ``{themeSlug, sections: []}`` fallback plus a warning log entry.
    """
    try:
        schema = store.resolve(theme_slug)
    except Exception as exc:
        logger.warning(
            "Theme schema lookup failed, using defaults",
            exc_info=True,
            extra={"theme_slug": theme_slug, "error_type": type(exc).__name__},
        )
        return SchemaResolution.defaulted_failed(theme_slug, str(exc))

    if schema is None:
        logger.warning(
            "Theme schema not found, using defaults",
            extra={"theme_slug": theme_slug},
        )
        return SchemaResolution.defaulted_missing(theme_slug)

    return SchemaResolution.from_schema(schema)


async def load_theme_schema(theme_slug: str, store: SchemaStore) -> SchemaResolution:
    """Run :func:`resolve_theme_schema` off the event loop, once, without retries."""
    return await asyncio.to_thread(resolve_theme_schema, theme_slug, store)


async def load_theme_editable_schema(theme_slug: str, store: SchemaStore) -> ThemeEditableSchema:
    resolution = await load_theme_schema(theme_slug, store)
    return resolution.schema


__all__ = [
    "ResolutionStatus",
    "SchemaResolution",
    "resolve_theme_schema",
    "load_theme_schema",
    "load_theme_editable_schema",
]
