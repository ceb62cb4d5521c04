from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Iterable, Mapping, Protocol

from pydantic import ValidationError

from .errors import InvalidThemeSlugError, SchemaDocumentError
from .models.editor import ThemeEditableSchema

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
SCHEMA_FILENAME = "editable-schema.json"
BUNDLED_THEMES_PATH = Path(__file__).resolve().parent / "themes"


class SchemaStore(Protocol):
    def resolve(self, theme_slug: str) -> ThemeEditableSchema | None:
        ...


def validate_slug(theme_slug: str) -> str:
    if not isinstance(theme_slug, str) or not SLUG_PATTERN.match(theme_slug):
        raise InvalidThemeSlugError(theme_slug)
    return theme_slug


def parse_schema_document(theme_slug: str, data: Any) -> ThemeEditableSchema:
    if not isinstance(data, Mapping):
        raise SchemaDocumentError(theme_slug, f"expected an object, got {type(data).__name__}")
    # Documents may omit the slug when it is implied by their location.
    payload = dict(data)
    payload.setdefault("themeSlug", theme_slug)
    try:
        return ThemeEditableSchema.model_validate(payload)
    except ValidationError as exc:
        raise SchemaDocumentError(theme_slug, str(exc)) from exc


class LocalSchemaStore:
    """Reads `<base_path>/<slug>/editable-schema.json` documents."""

    def __init__(self, *, base_path: Path = BUNDLED_THEMES_PATH) -> None:
        self._base_path = Path(base_path)

    def resolve(self, theme_slug: str) -> ThemeEditableSchema | None:
        validate_slug(theme_slug)
        file_path = self._base_path / theme_slug / SCHEMA_FILENAME
        if not file_path.exists():
            return None
        with file_path.open("r", encoding="utf-8") as fp:
            try:
                data = json.load(fp)
            except json.JSONDecodeError as exc:
                raise SchemaDocumentError(theme_slug, f"invalid JSON ({exc})") from exc
        return parse_schema_document(theme_slug, data)

    def list_slugs(self) -> list[str]:
        if not self._base_path.is_dir():
            return []
        return sorted(
            entry.name
            for entry in self._base_path.iterdir()
            if (entry / SCHEMA_FILENAME).is_file() and SLUG_PATTERN.match(entry.name)
        )


class InMemorySchemaStore:
    def __init__(self, schemas: Iterable[ThemeEditableSchema] = ()) -> None:
        self._schemas = {schema.theme_slug: schema for schema in schemas}

    def resolve(self, theme_slug: str) -> ThemeEditableSchema | None:
        return self._schemas.get(theme_slug)

    def add(self, schema: ThemeEditableSchema) -> None:
        self._schemas[schema.theme_slug] = schema

    def list_slugs(self) -> list[str]:
        return sorted(self._schemas)


__all__ = [
    "SchemaStore",
    "LocalSchemaStore",
    "InMemorySchemaStore",
    "BUNDLED_THEMES_PATH",
    "parse_schema_document",
    "validate_slug",
]
