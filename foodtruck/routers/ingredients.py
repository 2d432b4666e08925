import logging

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from foodtruck.db.database import (
    Ingredient as IngredientModel,
    InventoryItem as InventoryItemModel,
    RecipeLine as RecipeLineModel,
)
from foodtruck.routers.crud import build_crud_router
from foodtruck.schemas.ingredient import IngredientCreate, IngredientUpdate
from foodtruck.services import costing

logger = logging.getLogger(__name__)


async def delete_dependents(db: AsyncSession, ingredient: IngredientModel):
    """Remove everything that references the ingredient, in the caller's transaction.

    Linked inventory rows go too; their history and waste entries stay, detached
    from the deleted row. Menu items that used the ingredient are re-costed.
    """
    menu_ids = await costing.menus_using(db, [ingredient.id])
    removed = await db.execute(delete(InventoryItemModel).where(InventoryItemModel.ingredient_id == ingredient.id))
    lines = await db.execute(delete(RecipeLineModel).where(RecipeLineModel.ingredient_id == ingredient.id))
    await costing.refresh_menu_costs(db, changed_recipes=menu_ids)
    logger.info(
        "Deleting ingredient %s with %s inventory rows and %s recipe lines",
        ingredient.id,
        removed.rowcount,
        lines.rowcount,
    )


async def recost_menus(db: AsyncSession, ingredient: IngredientModel):
    await costing.refresh_menu_costs(db, ingredient_ids=[ingredient.id])


router = build_crud_router(
    IngredientModel,
    IngredientCreate,
    IngredientUpdate,
    label="Ingredient",
    search_fields=("name",),
    order_by=(func.lower(IngredientModel.name).asc(),),
    on_delete=delete_dependents,
    on_change=recost_menus,
)
