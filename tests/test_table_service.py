"""Floor plan tables: creation rules, listing and clearing."""

import pytest
from bson import ObjectId

from core.exceptions import ConflictError, ValidationError
from models.table import TableCreate
from services.table_service import clear_tables, create_table, list_tables


async def _owner(register, name="Bistro") -> ObjectId:
    registered = await register(name=name)
    return ObjectId(registered["id"])


class TestCreateTable:
    @pytest.mark.asyncio
    async def test_create_and_list(self, mongo, register, add_table):
        owner = await _owner(register)
        table_id = await add_table(owner, name="T1", pos_x=10, pos_y=20, size_x=80, size_y=60)

        tables = await list_tables(mongo, owner)

        assert len(tables) == 1
        table = tables[0]
        assert table["id"] == table_id
        assert table["restaurant_id"] == str(owner)
        assert table["name"] == "T1"
        assert table["shape"] == "square"
        assert (table["pos_x"], table["pos_y"], table["size_x"], table["size_y"]) == (10, 20, 80, 60)
        assert (table["min_people"], table["max_people"]) == (2, 4)

    @pytest.mark.asyncio
    async def test_duplicate_name_in_same_restaurant_conflicts(self, register, add_table):
        owner = await _owner(register)
        await add_table(owner, name="T1")

        with pytest.raises(ConflictError):
            await add_table(owner, name="T1")

    @pytest.mark.asyncio
    async def test_same_name_in_other_restaurant_is_allowed(self, mongo, register, add_table):
        bistro = await _owner(register, "Bistro")
        trattoria = await _owner(register, "Trattoria")
        await add_table(bistro, name="T1")

        await add_table(trattoria, name="T1")

        assert len(await list_tables(mongo, bistro)) == 1
        assert len(await list_tables(mongo, trattoria)) == 1

    @pytest.mark.asyncio
    async def test_bounds_are_optional(self, mongo, register, add_table):
        owner = await _owner(register)

        await add_table(owner, name="Round", shape="circle", min_people=None, max_people=None)

        [table] = await list_tables(mongo, owner)
        assert table["min_people"] is None and table["max_people"] is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": ""},
            {"name": "   "},
            {"shape": "triangle"},
            {"min_people": 5, "max_people": 4},
            {"min_people": 0},
        ],
    )
    async def test_invalid_table_is_rejected(self, mongo, register, overrides):
        owner = await _owner(register)
        fields = {"restaurant_id": str(owner), "name": "T1", "shape": "square", "min_people": 2, "max_people": 4}
        fields.update(overrides)

        with pytest.raises(ValidationError):
            await create_table(mongo, owner, TableCreate(**fields))

        assert await mongo.tables_collection.count_documents({}) == 0


class TestClearTables:
    @pytest.mark.asyncio
    async def test_clear_only_removes_own_tables(self, mongo, register, add_table):
        bistro = await _owner(register, "Bistro")
        trattoria = await _owner(register, "Trattoria")
        await add_table(bistro, name="T1")
        await add_table(bistro, name="T2")
        await add_table(trattoria, name="T1")

        deleted = await clear_tables(mongo, bistro)

        assert deleted == 2
        assert await list_tables(mongo, bistro) == []
        assert len(await list_tables(mongo, trattoria)) == 1

    @pytest.mark.asyncio
    async def test_clear_empty_plan_returns_zero(self, mongo, register):
        owner = await _owner(register)

        assert await clear_tables(mongo, owner) == 0
