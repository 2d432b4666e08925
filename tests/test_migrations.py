import pytest
from sqlalchemy import text

from foodtruck.db.database import engine
from foodtruck.db.migrations import add_missing_columns


async def _columns(table: str) -> dict:
    async with engine.connect() as conn:
        rows = (await conn.execute(text(f'PRAGMA table_info("{table}")'))).mappings().all()
    return {row["name"]: row for row in rows}


@pytest.mark.asyncio
async def test_adds_columns_missing_from_old_database(create_test_database):
    # an ingredients table as early versions created it
    async with engine.begin() as conn:
        await conn.execute(text("DROP TABLE recipes"))
        await conn.execute(text("DROP TABLE ingredients"))
        await conn.execute(
            text(
                "CREATE TABLE ingredients (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL, "
                "cost REAL NOT NULL, unit TEXT NOT NULL)"
            )
        )
        await conn.execute(text("INSERT INTO ingredients (name, cost, unit) VALUES ('Beef', 40, 'lb')"))

    added = await add_missing_columns(engine)
    assert "ingredients.servings" in added
    assert "ingredients.is_compound" in added

    columns = await _columns("ingredients")
    assert columns["servings"]["dflt_value"] == "1"
    async with engine.connect() as conn:
        row = (await conn.execute(text("SELECT servings, is_compound FROM ingredients"))).one()
    assert tuple(row) == (1, 0)

    assert await add_missing_columns(engine) == []
