from __future__ import annotations


class ThemeEditorError(Exception):
    """Base error for the theme editor package."""


class InvalidThemeSlugError(ThemeEditorError, ValueError):
    def __init__(self, theme_slug: str) -> None:
        super().__init__(f"Invalid theme slug: {theme_slug!r}")
        self.theme_slug = theme_slug


class SchemaDocumentError(ThemeEditorError):
    """Raised when a stored schema document cannot be parsed or validated."""

    def __init__(self, theme_slug: str, reason: str) -> None:
        super().__init__(f"Malformed editable schema for {theme_slug}: {reason}")
        self.theme_slug = theme_slug
        self.reason = reason


__all__ = ["ThemeEditorError", "InvalidThemeSlugError", "SchemaDocumentError"]
