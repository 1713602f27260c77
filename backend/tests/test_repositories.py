"""Repository layer tests for the attribute service.

Tests focus on document mapping and write semantics:
- Store-assigned ids and absent optional fields
- Partial update ($set / $unset) without upsert
- Delete returning the pre-deletion state
- Malformed ids behaving like unknown ids
"""

import pytest
from bson import ObjectId

from formattr.models.attribute import AttributeCreate, AttributeUpdate
from formattr.repositories.attribute import AttributeRepository, to_object_id


@pytest.fixture
def repo(collection):
    return AttributeRepository(collection)


def test_to_object_id():
    object_id = ObjectId()

    assert to_object_id(str(object_id)) == object_id
    assert to_object_id("not-an-object-id") is None


@pytest.mark.asyncio
async def test_add_assigns_id_and_get_returns_equal(repo, collection):
    """Created attribute gets a store id; get_by_id returns the same representation."""
    created = await repo.add(AttributeCreate(name="Email", type="T", placeholder="Enter your email"))

    assert created.id
    assert created.name == "Email"
    assert created.type == "T"
    assert created.options is None

    found = await repo.get_by_id(created.id)
    assert found == created

    # Optional fields left unset are not stored as nulls
    document = await collection.find_one({"_id": ObjectId(created.id)})
    assert "options" not in document


@pytest.mark.asyncio
async def test_get_by_id_unknown_and_malformed_return_none(repo):
    assert await repo.get_by_id(str(ObjectId())) is None
    assert await repo.get_by_id("nope") is None


@pytest.mark.asyncio
async def test_partial_update_leaves_other_fields(repo):
    """Updating only name keeps type, placeholder and options."""
    created = await repo.add(
        AttributeCreate(name="Size", type="select", placeholder="Pick one", options=["S", "M"])
    )

    updated = await repo.update(AttributeUpdate(id=created.id, name="X"))

    assert updated.name == "X"
    assert updated.type == "select"
    assert updated.placeholder == "Pick one"
    assert updated.options == ["S", "M"]
    assert await repo.get_by_id(created.id) == updated


@pytest.mark.asyncio
async def test_update_null_clears_placeholder(repo, collection):
    created = await repo.add(AttributeCreate(name="Email", type="T", placeholder="hint"))

    updated = await repo.update(
        AttributeUpdate.model_validate({"id": created.id, "placeholder": None, "type": "email"})
    )

    assert updated.placeholder is None
    assert updated.type == "email"
    document = await collection.find_one({"_id": ObjectId(created.id)})
    assert "placeholder" not in document


@pytest.mark.asyncio
async def test_update_unknown_id_does_not_upsert(repo, collection):
    await repo.add(AttributeCreate(name="Email", type="T"))

    result = await repo.update(AttributeUpdate(id=str(ObjectId()), name="X"))

    assert result is None
    assert await collection.count_documents({}) == 1
    assert await collection.count_documents({"name": "X"}) == 0


@pytest.mark.asyncio
async def test_update_without_changes_returns_current_state(repo):
    created = await repo.add(AttributeCreate(name="Email", type="T"))

    assert await repo.update(AttributeUpdate(id=created.id)) == created
    assert await repo.update(AttributeUpdate(id=str(ObjectId()))) is None


@pytest.mark.asyncio
async def test_delete_returns_pre_deletion_state(repo):
    created = await repo.add(AttributeCreate(name="Email", type="T", options=["a@b.com"]))

    deleted = await repo.delete(created.id)

    assert deleted == created
    assert await repo.get_by_id(created.id) is None
    assert await repo.delete(created.id) is None


@pytest.mark.asyncio
async def test_list_all_after_creates_and_deletes(repo):
    """N creates and M deletes leave exactly N-M attributes with their last state."""
    assert await repo.list_all() == []

    created = [await repo.add(AttributeCreate(name=f"Field {i}", type="T")) for i in range(5)]
    await repo.delete(created[1].id)
    await repo.delete(created[3].id)
    updated = await repo.update(AttributeUpdate(id=created[0].id, placeholder="first"))

    attributes = await repo.list_all()

    assert len(attributes) == 3
    assert {a.id for a in attributes} == {created[0].id, created[2].id, created[4].id}
    assert updated in attributes
