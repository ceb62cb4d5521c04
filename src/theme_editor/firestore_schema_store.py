from __future__ import annotations

import logging

from google.cloud import firestore

from .models.editor import ThemeEditableSchema
from .schema_store import parse_schema_document, validate_slug

logger = logging.getLogger(__name__)


class FirestoreSchemaStore:
    """Firestore-backed schema store; one document per theme slug."""

    COLLECTION_NAME = "theme_schemas"

    def __init__(self, project_id: str | None = None, *, client: firestore.Client | None = None) -> None:
        self._db = client or firestore.Client(project=project_id)
        self._collection = self._db.collection(self.COLLECTION_NAME)

    def resolve(self, theme_slug: str) -> ThemeEditableSchema | None:
        """Fetch the editable schema document for a theme, or None when absent."""
        validate_slug(theme_slug)
        doc = self._collection.document(theme_slug).get()

        if not doc.exists:
            return None

        logger.debug("Fetched theme schema", extra={"theme_slug": theme_slug})
        return parse_schema_document(theme_slug, doc.to_dict())

    def put(self, schema: ThemeEditableSchema) -> None:
        """Write a schema document, replacing any existing one."""
        doc_ref = self._collection.document(validate_slug(schema.theme_slug))
        doc_ref.set(schema.to_wire())

        logger.info(
            "Stored theme schema",
            extra={"theme_slug": schema.theme_slug, "sections": len(schema.sections)},
        )


__all__ = ["FirestoreSchemaStore"]
