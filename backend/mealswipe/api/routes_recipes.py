# mealswipe/api/routes_recipes.py
# 레시피 직접 작성 / 상세 조회 / 수정본 저장 / 원본 복원

from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, Query

from mealswipe.core.config import settings
from mealswipe.core.deps import get_notifier, get_user_id
from mealswipe.db.init import get_db
from mealswipe.db.models.recipe import Recipe
from mealswipe.db.models.schemas import ActionResult, RecipeIn
from mealswipe.services import custom
from mealswipe.services.mealdb import MealDBClient, MealDBError, get_mealdb
from mealswipe.services.notify import CollectingNotifier
from mealswipe.services.pagination import Page, paginate

router = APIRouter(prefix="/recipes", tags=["recipes"])

def _invalid(e: custom.InvalidRecipe) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"msg": str(e), "missingFields": e.missing_fields},
    )

@router.post("", response_model=ActionResult, status_code=201)
async def create_recipe(
    payload: RecipeIn,
    db=Depends(get_db),
    user_id: str = Depends(get_user_id),
    notifier: CollectingNotifier = Depends(get_notifier),
):
    """새 레시피 작성 → 찜 목록에 저장"""
    try:
        recipe = await custom.add_recipe(db, user_id, payload.to_doc())
    except custom.InvalidRecipe as e:
        raise _invalid(e)
    notifier.success(f'Saved "{recipe.strMeal}"')
    return ActionResult(recipe=recipe, notices=notifier.notices)

# 정적 경로 먼저 선언 (/customized → /{rid} 충돌 방지)
@router.get("/customized", response_model=Page[Recipe])
async def list_customized(
    page: int = Query(1, ge=1),
    perPage: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    db=Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    return paginate(await custom.list_customized(db, user_id), page, perPage)

@router.get("/{rid}", response_model=Recipe)
async def get_recipe(rid: str, db=Depends(get_db), user_id: str = Depends(get_user_id)):
    """상세: 수정본 우선"""
    try:
        return await custom.get_effective_recipe(db, user_id, rid)
    except custom.RecipeNotFound:
        raise HTTPException(status_code=404, detail="Recipe not found")
    except custom.InvalidRecipe as e:
        raise HTTPException(status_code=422, detail={"msg": "Invalid recipe data", "missingFields": e.missing_fields})

@router.put("/{rid}", response_model=ActionResult)
async def edit_recipe(
    rid: str,
    payload: RecipeIn,
    db=Depends(get_db),
    user_id: str = Depends(get_user_id),
    notifier: CollectingNotifier = Depends(get_notifier),
):
    try:
        recipe = await custom.save_customized(db, user_id, rid, payload.to_doc())
    except custom.InvalidRecipe as e:
        raise _invalid(e)
    notifier.success("Recipe updated successfully!")
    return ActionResult(recipe=recipe, notices=notifier.notices)

@router.post("/{rid}/restore", response_model=ActionResult)
async def restore_recipe(
    rid: str,
    db=Depends(get_db),
    user_id: str = Depends(get_user_id),
    mealdb: MealDBClient = Depends(get_mealdb),
    notifier: CollectingNotifier = Depends(get_notifier),
):
    """수정본 삭제 → 원본으로 되돌림"""
    try:
        recipe = await custom.restore_original(db, mealdb, user_id, rid)
    except (custom.RecipeNotFound, MealDBError):
        notifier.error("Failed to restore recipe")
        raise HTTPException(status_code=404, detail="Failed to fetch original recipe")
    notifier.success("Recipe restored to original version")
    return ActionResult(recipe=recipe, notices=notifier.notices)
