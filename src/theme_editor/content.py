from __future__ import annotations

from typing import Any, Mapping

from .models.editor import DraftContent, EditableSection, SectionType, ThemeEditableSchema


def get_default_content_from_schema(schema: ThemeEditableSchema) -> DraftContent:
    """Seed draft content from section defaults.

    Empty defaults are left out rather than stored as ``""``. The ``editable``
    flag is not consulted here.
    """
    content: DraftContent = {}
    for section in schema.sections:
        if section.default:
            content[section.id] = section.default
    return content


def get_sections_by_type(schema: ThemeEditableSchema, kind: SectionType | str) -> list[EditableSection]:
    """Editable sections of the given kind, in schema order."""
    section_type = SectionType(kind)
    return [
        section
        for section in schema.sections
        if section.type is section_type and section.editable
    ]


def resolve_section_content(schema: ThemeEditableSchema, content: Mapping[str, str], section_id: str) -> str:
    if section_id in content:
        return content[section_id]
    section = schema.get_section(section_id)
    if section is None:
        return ""
    return section.default


def merge_content(default_content: Mapping[str, Any], user_content: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge user content over defaults; user values win, lists replace.

    Section drafts are flat, so the nested branch only matters for library
    callers holding structured boilerplate content.
    """
    merged: dict[str, Any] = dict(default_content)
    for key, value in user_content.items():
        if isinstance(value, Mapping):
            base = merged.get(key)
            merged[key] = merge_content(base if isinstance(base, Mapping) else {}, value)
        else:
            merged[key] = value
    return merged


__all__ = [
    "get_default_content_from_schema",
    "get_sections_by_type",
    "resolve_section_content",
    "merge_content",
]
