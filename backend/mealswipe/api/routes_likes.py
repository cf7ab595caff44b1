# mealswipe/api/routes_likes.py
# 찜 목록 조회/추가/삭제/토글 + 무효 문서 정리

from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, Query

from mealswipe.core.config import settings
from mealswipe.core.deps import get_notifier, get_user_id
from mealswipe.db.init import get_db
from mealswipe.db.models.recipe import Recipe
from mealswipe.db.models.schemas import ActionResult, CleanupReport
from mealswipe.services import likes
from mealswipe.services.cleanup import cleanup_invalid_recipes
from mealswipe.services.notify import CollectingNotifier
from mealswipe.services.pagination import Page, paginate

router = APIRouter(prefix="/likes", tags=["likes"])

@router.get("", response_model=Page[Recipe])
async def list_likes(
    page: int = Query(1, ge=1),
    perPage: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    db=Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    """찜 목록 (무효 문서는 제외, 최신순)"""
    recipes = await likes.list_liked(db, user_id)
    return paginate(recipes, page, perPage)

@router.get("/{rid}/status")
async def like_status(rid: str, db=Depends(get_db), user_id: str = Depends(get_user_id)):
    return {"id": rid, "liked": await likes.check_if_liked(db, user_id, rid)}

@router.post("", response_model=ActionResult)
async def like(
    recipe: Recipe,
    db=Depends(get_db),
    user_id: str = Depends(get_user_id),
    notifier: CollectingNotifier = Depends(get_notifier),
):
    """스와이프 오른쪽 → 찜 저장"""
    try:
        await likes.add_like(db, user_id, recipe)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    notifier.success(f'Added "{recipe.strMeal}" to favorites')
    return ActionResult(liked=True, notices=notifier.notices)

@router.delete("/{rid}", response_model=ActionResult)
async def unlike(
    rid: str,
    db=Depends(get_db),
    user_id: str = Depends(get_user_id),
    notifier: CollectingNotifier = Depends(get_notifier),
):
    if not await likes.remove_like(db, user_id, rid):
        raise HTTPException(status_code=404, detail="recipe not found")
    notifier.success("Removed from favorites")
    return ActionResult(liked=False, notices=notifier.notices)

@router.post("/toggle", response_model=ActionResult)
async def toggle(
    recipe: Recipe,
    db=Depends(get_db),
    user_id: str = Depends(get_user_id),
    notifier: CollectingNotifier = Depends(get_notifier),
):
    liked = await likes.toggle_like(db, user_id, recipe, notifier)
    return ActionResult(ok=liked is not None, liked=liked, notices=notifier.notices)

@router.post("/cleanup", response_model=CleanupReport)
async def cleanup(db=Depends(get_db), user_id: str = Depends(get_user_id)):
    """무효 찜 문서 복구/삭제"""
    return await cleanup_invalid_recipes(db, user_id)
