# mealswipe/api/routes_weekly.py
# 주간 식단 조회/재생성/하루 교체 + 장보기 목록 다운로드

from __future__ import annotations
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from mealswipe.core.deps import get_user_id
from mealswipe.db.init import get_db
from mealswipe.db.models.recipe import Recipe
from mealswipe.db.models.schemas import SwapIn, WeeklyDay, WeeklyPlanOut
from mealswipe.services import weekly
from mealswipe.services.likes import list_liked

router = APIRouter(prefix="/weekly", tags=["weekly"])

def _out(plan: List[Recipe], available: int) -> WeeklyPlanOut:
    return WeeklyPlanOut(
        days=[WeeklyDay(day=weekly.DAYS_OF_WEEK[i], recipe=r) for i, r in enumerate(plan)],
        available=available,
    )

@router.get("", response_model=WeeklyPlanOut)
async def get_plan(db=Depends(get_db), user_id: str = Depends(get_user_id)):
    available = await list_liked(db, user_id)
    plan = await weekly.load_plan(db, user_id, available)
    return _out(plan, len(available))

@router.post("/regenerate", response_model=WeeklyPlanOut)
async def regenerate(db=Depends(get_db), user_id: str = Depends(get_user_id)):
    available = await list_liked(db, user_id)
    plan = await weekly.regenerate_plan(db, user_id, available)
    return _out(plan, len(available))

@router.post("/swap", response_model=WeeklyPlanOut)
async def swap(body: SwapIn, db=Depends(get_db), user_id: str = Depends(get_user_id)):
    available = await list_liked(db, user_id)
    try:
        plan = await weekly.swap_day(db, user_id, body.index, available)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except weekly.NoAlternativeRecipe as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _out(plan, len(available))

@router.get("/shopping-list", response_class=PlainTextResponse)
async def shopping_list(db=Depends(get_db), user_id: str = Depends(get_user_id)):
    available = await list_liked(db, user_id)
    plan = await weekly.load_plan(db, user_id, available)
    return PlainTextResponse(
        weekly.shopping_list(plan),
        media_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="shopping_list.txt"'},
    )
