# mealswipe/services/weekly.py
# 주간 식단: 찜한 레시피 중 무작위 7개 선정, 하루 교체, 장보기 목록 텍스트
# 선정 결과는 weekly_plans에 recipeIds로만 저장하고, 읽을 때 찜 목록과 다시 맞춘다

from __future__ import annotations
import logging
import random
from typing import Dict, List, Optional, Sequence

from mealswipe.core.config import settings
from mealswipe.db.indexes import PLANS
from mealswipe.db.models.recipe import Recipe

log = logging.getLogger(__name__)

DAYS_OF_WEEK = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
SHOPPING_LIST_HEADER = "Weekly Meal Plan - Shopping List\n\n"
SEPARATOR = "-" * 40


class NoAlternativeRecipe(Exception):
    pass


def build_plan(recipes: Sequence[Recipe], rng: Optional[random.Random] = None, days: int = 7) -> List[Recipe]:
    rng = rng or random.Random()
    n = min(days, len(DAYS_OF_WEEK), len(recipes))
    return rng.sample(list(recipes), n)


def swap_recipe(
    plan: Sequence[Recipe],
    index: int,
    available: Sequence[Recipe],
    rng: Optional[random.Random] = None,
) -> List[Recipe]:
    """index 번째 날을 아직 식단에 없는 레시피로 교체 (원본 plan은 건드리지 않음)."""
    if not 0 <= index < len(plan):
        raise IndexError(f"no day at index {index}")
    rng = rng or random.Random()

    current = {r.id for r in plan}
    candidates = [r for r in available if r.id not in current]
    if not candidates:
        raise NoAlternativeRecipe("No more unique recipes available to swap!")

    updated = list(plan)
    updated[index] = rng.choice(candidates)
    return updated


def shopping_list(plan: Sequence[Recipe]) -> str:
    content = SHOPPING_LIST_HEADER
    for i, recipe in enumerate(plan):
        content += f"{DAYS_OF_WEEK[i]} - {recipe.strMeal}\n"
        content += f"{SEPARATOR}\n"
        for j, ingredient in enumerate(recipe.ingredients):
            if not ingredient or not ingredient.strip():
                continue
            # measures가 짧으면 빈 분량
            measure = recipe.measures[j] if j < len(recipe.measures) else ""
            content += f"• {measure} {ingredient}\n"
        content += "\n"
    return content


def _resolve(ids: List[str], available: Sequence[Recipe]) -> List[Recipe]:
    by_id: Dict[str, Recipe] = {r.id: r for r in available}
    return [by_id[i] for i in ids if i in by_id]


async def save_plan(db, user_id: str, plan: Sequence[Recipe]) -> None:
    await db[PLANS].replace_one(
        {"_id": user_id},
        {"_id": user_id, "userId": user_id, "recipeIds": [r.id for r in plan]},
        upsert=True,
    )


async def load_plan(
    db,
    user_id: str,
    available: Sequence[Recipe],
    rng: Optional[random.Random] = None,
) -> List[Recipe]:
    # 저장된 식단이 없거나 찜 해제로 비었으면 새로 뽑는다
    doc = await db[PLANS].find_one({"_id": user_id})
    plan = _resolve(list((doc or {}).get("recipeIds") or []), available)
    if not plan:
        plan = build_plan(available, rng, settings.WEEKLY_PLAN_DAYS)
        if plan:
            await save_plan(db, user_id, plan)
            log.info("weekly plan created user=%s days=%d", user_id, len(plan))
    return plan


async def regenerate_plan(
    db,
    user_id: str,
    available: Sequence[Recipe],
    rng: Optional[random.Random] = None,
) -> List[Recipe]:
    plan = build_plan(available, rng, settings.WEEKLY_PLAN_DAYS)
    await save_plan(db, user_id, plan)
    return plan


async def swap_day(
    db,
    user_id: str,
    index: int,
    available: Sequence[Recipe],
    rng: Optional[random.Random] = None,
) -> List[Recipe]:
    plan = await load_plan(db, user_id, available, rng)
    updated = swap_recipe(plan, index, available, rng)
    await save_plan(db, user_id, updated)
    return updated
