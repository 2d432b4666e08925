import logging
from typing import Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from foodtruck.db.database import get_async_session, Ingredient as IngredientModel, MenuItem as MenuItemModel
from foodtruck.routers.crud import build_crud_router
from foodtruck.schemas.menu import MenuItemCreate, MenuItemUpdate, RecipeSave
from foodtruck.services import costing

logger = logging.getLogger(__name__)

router = APIRouter()
recipes_router = APIRouter()


@router.get("/{menu_id}/cost", response_model=Dict)
async def get_menu_cost(menu_id: int, db: AsyncSession = Depends(get_async_session)):
    """Recipe cost breakdown; compound ingredients are costed through their sub-recipe."""
    return await costing.cost_breakdown(db, menu_id)


async def recost_menu(db: AsyncSession, menu_item: MenuItemModel):
    """A recipe-backed cost always comes from the recipe, whatever the body said."""
    await costing.refresh_menu_costs(db, menu_ids=[menu_item.id])


async def detach_sub_recipe(db: AsyncSession, menu_item: MenuItemModel):
    """Compound ingredients built on this item fall back to their own purchase cost."""
    res = await db.execute(select(IngredientModel.id).where(IngredientModel.sub_recipe_id == menu_item.id))
    ingredient_ids = list(res.scalars())
    if not ingredient_ids:
        return
    await db.execute(
        update(IngredientModel)
        .where(IngredientModel.id.in_(ingredient_ids))
        .values(sub_recipe_id=None, is_compound=False)
    )
    logger.info("Menu item %s removed; ingredients %s are no longer compound", menu_item.id, ingredient_ids)
    await costing.refresh_menu_costs(db, ingredient_ids=ingredient_ids)


build_crud_router(
    MenuItemModel,
    MenuItemCreate,
    MenuItemUpdate,
    label="Menu item",
    search_fields=("name",),
    order_by=(MenuItemModel.recipe_type.asc(), func.lower(MenuItemModel.name).asc()),
    on_change=recost_menu,
    on_delete=detach_sub_recipe,
    router=router,
)


# /api/recipes

@recipes_router.get("/{menu_id}", response_model=List[Dict])
async def get_recipe(menu_id: int, db: AsyncSession = Depends(get_async_session)):
    breakdown = await costing.cost_breakdown(db, menu_id)
    return breakdown["ingredients"]


@recipes_router.post("", response_model=Dict)
async def save_recipe(payload: RecipeSave, db: AsyncSession = Depends(get_async_session)):
    """Replace a menu item's recipe and update its stored cost."""
    breakdown = await costing.replace_recipe(db, payload.menu_id, payload.ingredients)
    await db.commit()
    return {"success": True, **breakdown}
