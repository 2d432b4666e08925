"""Recipe costing for menu items.

A recipe line costs `quantity * cost_per_serving` of its ingredient. A compound
ingredient has no price of its own: one serving of it costs one portion of the
menu item named by `sub_recipe_id`.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from foodtruck.core.errors import NotFoundError, ValidationFailed
from foodtruck.db.database import Ingredient, MenuItem, RecipeLine


async def _recipe_rows(db: AsyncSession, menu_id: int):
    res = await db.execute(
        select(RecipeLine, Ingredient)
        .join(Ingredient, RecipeLine.ingredient_id == Ingredient.id)
        .where(RecipeLine.menu_id == menu_id)
        .order_by(RecipeLine.id)
    )
    return res.all()


async def _serving_cost(db: AsyncSession, ingredient: Ingredient, seen: frozenset) -> float:
    if not ingredient.is_compound or ingredient.sub_recipe_id is None:
        return ingredient.cost_per_serving
    sub_menu = await db.get(MenuItem, ingredient.sub_recipe_id)
    if sub_menu is None:
        raise ValidationFailed(
            f"Compound ingredient {ingredient.name!r} points to missing menu item {ingredient.sub_recipe_id}"
        )
    total = await _recipe_total(db, sub_menu.id, seen)
    return total / (sub_menu.portions or 1)


async def _recipe_total(db: AsyncSession, menu_id: int, seen: frozenset) -> float:
    if menu_id in seen:
        raise ValidationFailed(f"Recipe cycle detected through menu item {menu_id}")
    seen = seen | {menu_id}
    total = 0.0
    for line, ingredient in await _recipe_rows(db, menu_id):
        total += line.quantity * await _serving_cost(db, ingredient, seen)
    return total


async def cost_breakdown(db: AsyncSession, menu_id: int) -> dict:
    """Per-line costs and the total for one menu item."""
    menu_item = await db.get(MenuItem, menu_id)
    if menu_item is None:
        raise NotFoundError(f"Menu item {menu_id} not found")

    seen = frozenset({menu_id})
    lines = []
    total = 0.0
    for line, ingredient in await _recipe_rows(db, menu_id):
        per_serving = await _serving_cost(db, ingredient, seen)
        line_cost = line.quantity * per_serving
        total += line_cost
        lines.append(
            {
                "id": line.id,
                "ingredient_id": ingredient.id,
                "ingredient_name": ingredient.name,
                "unit": ingredient.unit,
                "is_compound": ingredient.is_compound,
                "quantity": line.quantity,
                "cost_per_serving": round(per_serving, 4),
                "line_cost": round(line_cost, 2),
                "notes": line.notes,
            }
        )

    total = round(total, 2)
    price = menu_item.price or 0
    return {
        "menu_id": menu_item.id,
        "name": menu_item.name,
        "price": price,
        "total_cost": total,
        "cost_per_portion": round(total / (menu_item.portions or 1), 2),
        "profit_margin": round((price - total) / price * 100, 2) if price else None,
        "ingredients": lines,
    }


async def replace_recipe(db: AsyncSession, menu_id: int, lines: list) -> dict:
    """Replace a menu item's recipe and store the recomputed cost on the menu row."""
    menu_item = await db.get(MenuItem, menu_id)
    if menu_item is None:
        raise NotFoundError(f"Menu item {menu_id} not found")

    ingredient_ids = {line.ingredient_id for line in lines}
    if ingredient_ids:
        found = set(
            (await db.execute(select(Ingredient.id).where(Ingredient.id.in_(ingredient_ids)))).scalars()
        )
        missing = sorted(ingredient_ids - found)
        if missing:
            raise NotFoundError(f"Ingredients not found: {missing}")

    existing = (await db.execute(select(RecipeLine).where(RecipeLine.menu_id == menu_id))).scalars().all()
    for row in existing:
        await db.delete(row)
    await db.flush()

    for line in lines:
        db.add(RecipeLine(menu_id=menu_id, ingredient_id=line.ingredient_id, quantity=line.quantity, notes=line.notes))
    await db.flush()

    breakdown = await cost_breakdown(db, menu_id)
    menu_item.cost = breakdown["total_cost"]
    await db.flush()
    # recipes using this item as a sub-recipe
    await refresh_menu_costs(db, changed_recipes=[menu_id])
    return breakdown


async def menus_using(db: AsyncSession, ingredient_ids) -> set:
    if not ingredient_ids:
        return set()
    res = await db.execute(select(RecipeLine.menu_id).where(RecipeLine.ingredient_id.in_(ingredient_ids)).distinct())
    return set(res.scalars())


async def refresh_menu_costs(db: AsyncSession, *, ingredient_ids=(), menu_ids=(), changed_recipes=()) -> list:
    """Rewrite the stored cost of every menu item whose recipe depends on the given rows.

    Menu items named in `menu_ids` are recomputed only when they have a recipe, so a
    hand-entered cost survives; those in `changed_recipes` always are. Menu items
    used as the sub-recipe of a compound ingredient pass the change on to the
    recipes that use that ingredient.
    Returns the ids of the menu items that were recomputed.
    """
    menu_ids = set(menu_ids)
    stale = set(changed_recipes)
    if menu_ids:
        res = await db.execute(select(RecipeLine.menu_id).where(RecipeLine.menu_id.in_(menu_ids)).distinct())
        stale |= set(res.scalars())

    seen = menu_ids | stale
    frontier_menus = set(seen)
    frontier_ingredients = set(ingredient_ids)
    while frontier_menus or frontier_ingredients:
        if frontier_menus:
            res = await db.execute(
                select(Ingredient.id).where(Ingredient.is_compound.is_(True), Ingredient.sub_recipe_id.in_(frontier_menus))
            )
            frontier_ingredients |= set(res.scalars())
        users = await menus_using(db, frontier_ingredients)
        stale |= users
        frontier_menus = users - seen
        seen |= users
        frontier_ingredients = set()

    for menu_id in sorted(stale):
        menu_item = await db.get(MenuItem, menu_id)
        menu_item.cost = (await cost_breakdown(db, menu_id))["total_cost"]
    await db.flush()
    return sorted(stale)
