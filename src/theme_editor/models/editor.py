from __future__ import annotations

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field, field_validator, model_validator


class SectionType(str, Enum):
    text = "text"
    image = "image"


class SectionTag(str, Enum):
    h1 = "h1"
    h2 = "h2"
    h3 = "h3"
    h4 = "h4"
    p = "p"
    span = "span"
    div = "div"


class EditableSection(BaseModel):
    id: str
    type: SectionType
    default: str = ""
    editable: bool = False
    tag: SectionTag | None = Field(default=None, description="Markup hint for the editor, not enforced")
    placeholder: str | None = None

    @field_validator("default", mode="before")
    @classmethod
    def _null_default_is_empty(cls, value):
        return "" if value is None else value


class ThemeEditableSchema(BaseModel):
    theme_slug: str = Field(alias="themeSlug")
    sections: List[EditableSection] = Field(default_factory=list)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "themeSlug": "modern",
                "sections": [
                    {"id": "hero_title", "type": "text", "default": "Welcome", "editable": True, "tag": "h1"},
                    {"id": "hero_bg", "type": "image", "default": "", "editable": True},
                ],
            }
        }

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "ThemeEditableSchema":
        seen: set[str] = set()
        for section in self.sections:
            if section.id in seen:
                raise ValueError(f"Duplicate section id in schema {self.theme_slug!r}: {section.id}")
            seen.add(section.id)
        return self

    @classmethod
    def empty(cls, theme_slug: str) -> "ThemeEditableSchema":
        return cls(theme_slug=theme_slug, sections=[])

    def get_section(self, section_id: str) -> EditableSection | None:
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


DraftContent = Dict[str, str]


__all__ = ["DraftContent", "EditableSection", "SectionTag", "SectionType", "ThemeEditableSchema"]
