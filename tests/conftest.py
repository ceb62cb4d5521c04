from __future__ import annotations

from typing import Any

import pytest

from theme_editor.models.editor import ThemeEditableSchema


@pytest.fixture
def modern_schema() -> ThemeEditableSchema:
    return ThemeEditableSchema.model_validate(
        {
            "themeSlug": "modern",
            "sections": [
                {"id": "hero_title", "type": "text", "default": "Welcome", "editable": True},
                {"id": "hero_bg", "type": "image", "default": "", "editable": True},
                {"id": "internal_note", "type": "text", "default": "x", "editable": False},
            ],
        }
    )


class FakeSnapshot:
    def __init__(self, doc_id: str, data: dict | None) -> None:
        self.id = doc_id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> dict | None:
        return dict(self._data) if self._data is not None else None


class FakeDocument:
    def __init__(self, collection: "FakeCollection", doc_id: str) -> None:
        self._collection = collection
        self.id = doc_id

    def get(self) -> FakeSnapshot:
        return FakeSnapshot(self.id, self._collection.docs.get(self.id))

    def set(self, data: dict) -> None:
        self._collection.docs[self.id] = dict(data)


class FakeQuery:
    def __init__(self, docs: dict[str, dict]) -> None:
        self._items = list(docs.items())

    def where(self, *, filter: Any) -> "FakeQuery":
        assert filter.op_string == "=="
        self._items = [(k, v) for k, v in self._items if v.get(filter.field_path) == filter.value]
        return self

    def order_by(self, field: str, direction: str = "ASCENDING") -> "FakeQuery":
        self._items.sort(key=lambda item: item[1][field], reverse=direction == "DESCENDING")
        return self

    def limit(self, count: int) -> "FakeQuery":
        self._items = self._items[:count]
        return self

    def stream(self):
        return [FakeSnapshot(doc_id, data) for doc_id, data in self._items]


class FakeCollection:
    def __init__(self) -> None:
        self.docs: dict[str, dict] = {}

    def document(self, doc_id: str) -> FakeDocument:
        return FakeDocument(self, doc_id)

    def where(self, *, filter: Any) -> FakeQuery:
        return FakeQuery(self.docs).where(filter=filter)


class FakeFirestoreClient:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}

    def collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


@pytest.fixture
def firestore_client() -> FakeFirestoreClient:
    return FakeFirestoreClient()
