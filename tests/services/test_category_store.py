"""
Tests for the category store.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DuplicateKeyError, NotFoundError
from app.schemas.categories import CategoryFields
from app.services.category_store import CategoryStore

pytestmark = pytest.mark.asyncio


def fields(name: str = "Bank Transfer", provider: str = "p1") -> CategoryFields:
    return CategoryFields(
        category_name=name,
        provider_id=provider,
        main_image=f"/uploads/method-icons/{name}-main.png",
        icon_image=f"/uploads/method-icons/{name}-icon.png",
    )


async def test_insert_assigns_id_and_timestamps(db_session: AsyncSession) -> None:
    store = CategoryStore(db_session)

    category = await store.insert(fields())

    assert category.id
    assert category.created_at is not None
    assert category.updated_at is not None
    assert category.category_name == "Bank Transfer"


async def test_get_by_id(db_session: AsyncSession) -> None:
    store = CategoryStore(db_session)
    category = await store.insert(fields())

    fetched = await store.get_by_id(category.id)

    assert fetched is not None
    assert fetched.provider_id == "p1"
    assert fetched.main_image == "/uploads/method-icons/Bank Transfer-main.png"
    assert await store.get_by_id("unknown") is None


async def test_insert_duplicate_name(db_session: AsyncSession) -> None:
    store = CategoryStore(db_session)
    await store.insert(fields())

    with pytest.raises(DuplicateKeyError) as exc:
        await store.insert(fields(provider="p2"))

    assert exc.value.message == "Category name already exists"
    assert len(await store.list_all()) == 1


async def test_list_all_newest_first(db_session: AsyncSession) -> None:
    store = CategoryStore(db_session)
    for name in ("a", "b", "c"):
        await store.insert(fields(name=name))

    names = [c.category_name for c in await store.list_all()]

    assert names == ["c", "b", "a"]


async def test_update_by_id_applies_given_fields(db_session: AsyncSession) -> None:
    store = CategoryStore(db_session)
    category = await store.insert(fields())
    created_at = category.created_at

    updated = await store.update_by_id(category.id, CategoryFields(provider_id="p7"))

    assert updated.provider_id == "p7"
    assert updated.category_name == "Bank Transfer"
    assert updated.created_at == created_at
    assert updated.updated_at >= created_at


async def test_update_by_id_missing(db_session: AsyncSession) -> None:
    store = CategoryStore(db_session)
    await store.insert(fields())

    with pytest.raises(NotFoundError):
        await store.update_by_id("unknown", CategoryFields(category_name="Other"))

    assert [c.category_name for c in await store.list_all()] == ["Bank Transfer"]


async def test_update_by_id_duplicate_name(db_session: AsyncSession) -> None:
    store = CategoryStore(db_session)
    await store.insert(fields(name="Taken"))
    mine_id = (await store.insert(fields(name="Mine"))).id

    with pytest.raises(DuplicateKeyError):
        await store.update_by_id(mine_id, CategoryFields(category_name="Taken"))

    reloaded = await store.get_by_id(mine_id)
    assert reloaded is not None
    assert reloaded.category_name == "Mine"


async def test_delete_by_id(db_session: AsyncSession) -> None:
    store = CategoryStore(db_session)
    category = await store.insert(fields())

    assert await store.delete_by_id(category.id) is True
    assert await store.get_by_id(category.id) is None
    assert await store.delete_by_id(category.id) is False
