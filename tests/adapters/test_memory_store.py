from __future__ import annotations

import pytest

from daybook.adapters.memory import InMemoryStore
from daybook.adapters.records import CategoryCodec, record_name
from daybook.domain.model import Category, EntityType
from daybook.domain.ports import DeleteRejected, RemoteUnavailable, Store
from tests.helpers.entities import at, entity_id, make_category


@pytest.fixture
def store() -> InMemoryStore[Category]:
    return InMemoryStore(CategoryCodec())


def test_memory_store_satisfies_store_protocol(store: InMemoryStore[Category]) -> None:
    assert isinstance(store, Store)


def test_save_returns_copy_with_remote_ref(store: InMemoryStore[Category]) -> None:
    category = make_category("work", modified=3)

    saved = store.save(category)

    assert saved is not category
    assert saved.id == category.id
    assert saved.remote_ref == record_name(EntityType.CATEGORY, category.id)
    assert category.remote_ref is None


def test_save_is_idempotent_by_id(store: InMemoryStore[Category]) -> None:
    category = make_category("work")
    store.save(category)
    category.name = "office"
    category.last_modified = at(5)

    store.save(category)
    fetched = store.fetch_all()

    assert len(store) == 1
    assert fetched[0].name == "office"
    assert fetched[0].last_modified == at(5)


def test_fetch_all_skips_undecodable_records(
    store: InMemoryStore[Category], caplog: pytest.LogCaptureFixture
) -> None:
    store.save(make_category("work"))
    store.put_record("category/broken", {"id": "not-a-uuid"})

    with caplog.at_level("WARNING"):
        fetched = store.fetch_all()

    assert [entity.id for entity in fetched] == [entity_id("work")]
    assert "category/broken" in caplog.text


def test_delete_removes_record(store: InMemoryStore[Category]) -> None:
    saved = store.save(make_category("work"))
    assert saved.remote_ref is not None

    store.delete(saved.remote_ref)

    assert store.fetch_all() == []
    with pytest.raises(DeleteRejected):
        store.delete(saved.remote_ref)


def test_offline_store_raises_remote_unavailable(store: InMemoryStore[Category]) -> None:
    store.online = False

    with pytest.raises(RemoteUnavailable):
        store.fetch_all()
    with pytest.raises(RemoteUnavailable):
        store.save(make_category("work"))
    with pytest.raises(RemoteUnavailable):
        store.delete("category/anything")
