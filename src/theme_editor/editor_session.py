from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Mapping

from .content import get_default_content_from_schema, get_sections_by_type, resolve_section_content
from .models.editor import DraftContent, EditableSection, SectionType, ThemeEditableSchema


@dataclass
class EditorSession:
    """Editing state for one theme: the live draft plus unsaved-change tracking."""

    schema: ThemeEditableSchema
    content: DraftContent = field(default_factory=dict)
    is_edit_mode: bool = False
    has_unsaved_changes: bool = False
    last_saved: datetime | None = None

    @classmethod
    def start(cls, schema: ThemeEditableSchema, saved: Mapping[str, str] | None = None) -> "EditorSession":
        content = get_default_content_from_schema(schema)
        if saved:
            content.update(saved)
        return cls(schema=schema, content=content)

    @property
    def theme_slug(self) -> str:
        return self.schema.theme_slug

    def set_edit_mode(self, enabled: bool) -> None:
        self.is_edit_mode = enabled

    def update_content(self, section_id: str, value: str) -> None:
        self.content = {**self.content, section_id: value}
        self.has_unsaved_changes = True

    def set_content(self, content: Mapping[str, str]) -> None:
        self.content = dict(content)
        self.has_unsaved_changes = False

    def mark_saved(self, when: datetime | None = None) -> None:
        self.last_saved = when or datetime.now(timezone.utc)
        self.has_unsaved_changes = False

    def content_for(self, section_id: str) -> str:
        return resolve_section_content(self.schema, self.content, section_id)

    def editable_sections(self, kind: SectionType | str) -> list[EditableSection]:
        return get_sections_by_type(self.schema, kind)


__all__ = ["EditorSession"]
