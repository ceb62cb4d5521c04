import json

import pytest

from theme_editor.errors import InvalidThemeSlugError, SchemaDocumentError
from theme_editor.firestore_schema_store import FirestoreSchemaStore
from theme_editor.models.editor import SectionTag, SectionType, ThemeEditableSchema
from theme_editor.schema_store import InMemorySchemaStore, LocalSchemaStore


def write_schema(base, slug, payload):
    theme_dir = base / slug
    theme_dir.mkdir(parents=True)
    (theme_dir / "editable-schema.json").write_text(json.dumps(payload), encoding="utf-8")


def test_bundled_minimal_creative_schema_loads():
    store = LocalSchemaStore()
    schema = store.resolve("minimal-creative")

    assert schema is not None
    assert schema.theme_slug == "minimal-creative"
    assert schema.sections[0].id == "hero-title"
    assert schema.sections[0].tag is SectionTag.h1
    assert schema.get_section("hero-image").type is SectionType.image
    assert "minimal-creative" in store.list_slugs()
    assert "tech-personal" in store.list_slugs()


def test_local_store_returns_none_for_missing_theme(tmp_path):
    assert LocalSchemaStore(base_path=tmp_path).resolve("ghost-theme") is None


def test_local_store_fills_slug_from_location(tmp_path):
    write_schema(tmp_path, "modern", {"sections": [{"id": "hero_title", "type": "text", "default": "Hi"}]})

    schema = LocalSchemaStore(base_path=tmp_path).resolve("modern")

    assert schema.theme_slug == "modern"
    assert schema.sections[0].editable is False


@pytest.mark.parametrize("slug", ["", "../secrets", "Modern", "a/b", "trailing-"])
def test_local_store_rejects_unsafe_slugs(tmp_path, slug):
    with pytest.raises(InvalidThemeSlugError):
        LocalSchemaStore(base_path=tmp_path).resolve(slug)


def test_local_store_rejects_unknown_section_type(tmp_path):
    write_schema(tmp_path, "odd", {"themeSlug": "odd", "sections": [{"id": "x", "type": "video"}]})

    with pytest.raises(SchemaDocumentError):
        LocalSchemaStore(base_path=tmp_path).resolve("odd")


def test_duplicate_section_ids_are_rejected(tmp_path):
    sections = [{"id": "dup", "type": "text"}, {"id": "dup", "type": "image"}]
    write_schema(tmp_path, "dupes", {"themeSlug": "dupes", "sections": sections})

    with pytest.raises(SchemaDocumentError, match="dup"):
        LocalSchemaStore(base_path=tmp_path).resolve("dupes")


def test_in_memory_store_is_a_static_table(modern_schema):
    store = InMemorySchemaStore()
    assert store.resolve("modern") is None

    store.add(modern_schema)

    assert store.resolve("modern") is modern_schema
    assert store.list_slugs() == ["modern"]


def test_firestore_store_round_trip(firestore_client, modern_schema):
    store = FirestoreSchemaStore(client=firestore_client)

    assert store.resolve("modern") is None

    store.put(modern_schema)
    stored = firestore_client.collection("theme_schemas").docs["modern"]

    assert stored["themeSlug"] == "modern"
    assert store.resolve("modern") == modern_schema


def test_firestore_store_validates_documents(firestore_client):
    firestore_client.collection("theme_schemas").document("broken").set({"sections": "nope"})

    with pytest.raises(SchemaDocumentError):
        FirestoreSchemaStore(client=firestore_client).resolve("broken")


def test_schema_wire_format_uses_camel_case_slug(modern_schema):
    wire = modern_schema.to_wire()

    assert set(wire) == {"themeSlug", "sections"}
    assert wire["sections"][0] == {"id": "hero_title", "type": "text", "default": "Welcome", "editable": True}
    assert ThemeEditableSchema.model_validate(wire) == modern_schema
