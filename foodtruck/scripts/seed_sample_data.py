"""
Seed sample data (admin user, menu with recipes, inventory, events, catering,
menu specials) into the SQLite database.

Run from the repo root:
    python -m foodtruck.scripts.seed_sample_data [--force] [--admin-email ... --admin-password ...]

Refuses to touch a database that already has events, catering orders or menu
items unless --force is given.
"""

import argparse
import asyncio
import datetime as dt
import json

from sqlalchemy import func, select

from foodtruck.core.auth import password_helper
from foodtruck.db.database import (
    async_session_maker,
    create_db_and_tables,
    CateringOrder,
    Event,
    Ingredient,
    InventoryItem,
    MenuItem,
    MenuSpecial,
)
from foodtruck.db.users import User
from foodtruck.schemas.menu import RecipeLineIn
from foodtruck.services import costing, stock_ledger


INGREDIENTS = [
    # name, cost per purchase unit, unit, servings per unit
    ("Beef chuck", 42.0, "5 lb", 20),
    ("Corn tortillas", 6.0, "pack of 60", 60),
    ("Oaxaca cheese", 12.0, "2 lb", 16),
    ("Consommé", 8.0, "gallon", 32),
    ("Onion & cilantro", 4.0, "batch", 40),
]

MENU = [
    # name, price, recipe_type, [(ingredient name, servings)]
    ("Birria Tacos (3)", 13.0, "Food", [("Beef chuck", 3), ("Corn tortillas", 3), ("Consommé", 1), ("Onion & cilantro", 1)]),
    ("Quesabirria", 15.0, "Food", [("Beef chuck", 3), ("Corn tortillas", 3), ("Oaxaca cheese", 2), ("Consommé", 1)]),
]

INVENTORY = [
    # ingredient name, category, opening stock, min stock, cost per unit
    ("Beef chuck", "Meat", 6, 2, 42.0),
    ("Corn tortillas", "Dry Goods", 10, 3, 6.0),
    ("Oaxaca cheese", "Dairy", 4, 1, 12.0),
]


def sample_events(today: dt.date) -> list[dict]:
    return [
        dict(name="Downtown Food Festival", type="Festival", location="Main Street",
             date=today + dt.timedelta(days=7), time="10am-6pm", fee=150.0, status="Applied",
             notes="Popular festival with good foot traffic"),
        dict(name="Farmers Market", type="Farmers Market", location="City Park",
             date=today + dt.timedelta(days=11), time="8am-2pm", fee=75.0, status="Accepted",
             notes="Weekly market, regular customers"),
    ]


def sample_catering(today: dt.date) -> list[dict]:
    return [
        dict(client="ABC Corp", date=today + dt.timedelta(days=5), guests=50, price=2500.0,
             status="Booked", deposit=500.0, setup_time="2", notes="Corporate lunch event"),
        dict(client="Johnson Wedding", date=today + dt.timedelta(days=10), guests=120, price=4800.0,
             status="Quote Sent", deposit=0, setup_time="3", notes="Outdoor wedding reception"),
    ]


def sample_specials() -> list[dict]:
    return [
        dict(name="Taco Tuesday", description="Three birria tacos and a drink", price=12.0,
             days_of_week=json.dumps([2]), status="active", category="weekly"),
        dict(name="Weekend Quesabirria Combo", description="Quesabirria with consommé", price=16.0,
             days_of_week=json.dumps([0, 6]), status="active", category="weekly"),
    ]


async def database_has_data(session) -> bool:
    for model in (Event, CateringOrder, MenuItem):
        count = (await session.execute(select(func.count()).select_from(model))).scalar_one()
        if count:
            return True
    return False


async def get_or_create_admin(session, email: str, password: str) -> User:
    result = await session.execute(select(User).where(func.lower(User.email) == email.lower()))
    user = result.scalar_one_or_none()
    if user:
        return user

    user = User(
        email=email,
        username=email.split("@", 1)[0],
        role="owner",
        hashed_password=password_helper.hash(password),
        is_active=True,
        is_superuser=True,
        is_verified=True,
    )
    session.add(user)
    await session.flush()
    return user


async def seed_session(session, today: dt.date) -> dict:
    """Insert the sample rows; the caller commits."""
    ingredients = {}
    for name, cost, unit, servings in INGREDIENTS:
        ingredient = Ingredient(name=name, cost=cost, unit=unit, servings=servings)
        session.add(ingredient)
        ingredients[name] = ingredient
    await session.flush()

    for name, price, recipe_type, lines in MENU:
        item = MenuItem(name=name, price=price, recipe_type=recipe_type)
        session.add(item)
        await session.flush()
        await costing.replace_recipe(
            session,
            item.id,
            [RecipeLineIn(ingredient_id=ingredients[i].id, quantity=q) for i, q in lines],
        )

    for name, category, stock, min_stock, unit_cost in INVENTORY:
        ingredient = ingredients[name]
        inventory = InventoryItem(
            ingredient_id=ingredient.id,
            name=name,
            unit=ingredient.unit,
            category=category,
            current_stock=stock,
            min_stock=min_stock,
            cost_per_unit=unit_cost,
        )
        session.add(inventory)
        await session.flush()
        await stock_ledger.record_initial_stock(session, inventory)

    events = [Event(**row) for row in sample_events(today)]
    catering = [CateringOrder(**row) for row in sample_catering(today)]
    specials = [MenuSpecial(**row) for row in sample_specials()]
    session.add_all(events + catering + specials)
    await session.flush()

    return {
        "ingredients": len(ingredients),
        "menu": len(MENU),
        "inventory": len(INVENTORY),
        "events": len(events),
        "catering": len(catering),
        "specials": len(specials),
    }


async def seed(force: bool = False, admin_email: str | None = None, admin_password: str | None = None) -> None:
    await create_db_and_tables()
    async with async_session_maker() as session:
        if await database_has_data(session) and not force:
            print("[seed_sample_data] database already has data; re-run with --force to add samples anyway")
            return

        if admin_email and admin_password:
            admin = await get_or_create_admin(session, admin_email, admin_password)
            print(f"[seed_sample_data] admin user: {admin.email}")

        counts = await seed_session(session, dt.date.today())
        await session.commit()
    print("[seed_sample_data] done. " + ", ".join(f"{k}: {v}" for k, v in counts.items()))


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Seed sample food truck data")
    parser.add_argument("--force", action="store_true", help="seed even when the database already has data")
    parser.add_argument("--admin-email", help="create a superuser with this email")
    parser.add_argument("--admin-password", help="password for --admin-email")
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()
    asyncio.run(seed(force=args.force, admin_email=args.admin_email, admin_password=args.admin_password))
