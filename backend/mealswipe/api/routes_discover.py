# mealswipe/api/routes_discover.py
# 스와이프용 랜덤 레시피 / 이름 검색 (TheMealDB 프록시)

from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, Query

from mealswipe.core.config import settings
from mealswipe.db.models.recipe import Recipe
from mealswipe.services.mealdb import MealDBClient, MealDBError, get_mealdb
from mealswipe.services.pagination import Page, paginate

router = APIRouter(prefix="/discover", tags=["discover"])

@router.get("/random", response_model=Recipe)
async def random_recipe(mealdb: MealDBClient = Depends(get_mealdb)):
    """스와이프 카드 1장"""
    try:
        return await mealdb.get_random_recipe()
    except MealDBError as e:
        raise HTTPException(status_code=502, detail=f"mealdb_error: {e}")

@router.get("/search", response_model=Page[Recipe])
async def search(
    q: str = Query("", description="레시피 이름 검색어"),
    page: int = Query(1, ge=1),
    perPage: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    mealdb: MealDBClient = Depends(get_mealdb),
):
    # 빈 검색어는 빈 결과
    try:
        recipes = await mealdb.search_recipes(q)
    except MealDBError as e:
        raise HTTPException(status_code=502, detail=f"mealdb_error: {e}")
    return paginate(recipes, page, perPage)
