# mealswipe/services/custom.py
# 직접 작성한 레시피 저장 + 수정본(user_recipes) 저장/복원
# 읽기 우선순위: 수정본 > 원본(liked_recipes) > TheMealDB

from __future__ import annotations
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from mealswipe.core.config import settings
from mealswipe.db.indexes import CUSTOM, LIKED
from mealswipe.db.models.recipe import Recipe
from mealswipe.services.likes import like_key, sanitize_doc, valid_recipes
from mealswipe.services.mealdb import MealDBClient
from mealswipe.services.validator import to_iso

log = logging.getLogger(__name__)


class RecipeNotFound(Exception):
    pass


class InvalidRecipe(Exception):
    def __init__(self, missing_fields: List[str]) -> None:
        super().__init__(f"Missing required fields: {', '.join(missing_fields)}")
        self.missing_fields = missing_fields


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


async def add_recipe(
    db,
    user_id: str,
    payload: Mapping[str, Any],
    *,
    recipe_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Recipe:
    """폼으로 작성한 레시피를 찜 목록에 추가. 필수 필드 누락이면 InvalidRecipe."""
    rid = recipe_id or uuid.uuid4().hex
    data = dict(payload)
    # 이미지 안 넣으면 기본 이미지
    if not data.get("strMealThumb"):
        data["strMealThumb"] = settings.DEFAULT_RECIPE_IMAGE
    data["likedAt"] = to_iso(_now(now))

    res = sanitize_doc({**data, "id": rid})
    if not res.is_valid or res.sanitized_recipe is None:
        raise InvalidRecipe(res.missing_fields)

    recipe = res.sanitized_recipe
    await db[LIKED].insert_one({**recipe.model_dump(), "_id": like_key(user_id, rid), "userId": user_id})
    log.info("recipe created user=%s recipe=%s", user_id, rid)
    return recipe


async def save_customized(
    db,
    user_id: str,
    recipe_id: str,
    payload: Mapping[str, Any],
    *,
    now: Optional[datetime] = None,
) -> Recipe:
    """원본은 그대로 두고 수정본만 user_recipes에 저장."""
    updated_at = to_iso(_now(now))
    data = {
        **payload,
        "id": recipe_id,
        "userId": user_id,
        "isCustomized": True,
        "originalRecipeId": recipe_id,
        "updatedAt": updated_at,
    }
    res = sanitize_doc(data)
    if not res.is_valid or res.sanitized_recipe is None:
        raise InvalidRecipe(res.missing_fields)

    recipe = res.sanitized_recipe
    key = like_key(user_id, recipe_id)
    await db[CUSTOM].replace_one(
        {"_id": key},
        {
            **recipe.model_dump(),
            "_id": key,
            "userId": user_id,
            "originalRecipeId": recipe_id,
            "updatedAt": updated_at,
        },
        upsert=True,
    )
    log.info("recipe customized user=%s recipe=%s", user_id, recipe_id)
    return recipe


async def restore_original(db, mealdb: MealDBClient, user_id: str, recipe_id: str) -> Recipe:
    # 수정본 삭제 → 원본(찜) → 없으면 TheMealDB 원본
    await db[CUSTOM].delete_one({"_id": like_key(user_id, recipe_id)})

    liked = await db[LIKED].find_one({"_id": like_key(user_id, recipe_id)})
    if liked:
        res = sanitize_doc(liked)
        if res.sanitized_recipe is not None:
            return res.sanitized_recipe

    original = await mealdb.get_recipe_by_id(recipe_id)
    if original is None:
        raise RecipeNotFound(recipe_id)
    return original


async def get_effective_recipe(db, user_id: str, recipe_id: str) -> Recipe:
    """상세 조회: 수정본이 있으면 수정본, 없으면 원본. 무효 문서면 InvalidRecipe."""
    key = like_key(user_id, recipe_id)
    doc = await db[CUSTOM].find_one({"_id": key})
    if doc is None:
        doc = await db[LIKED].find_one({"_id": key})
    if doc is None:
        raise RecipeNotFound(recipe_id)

    res = sanitize_doc(doc)
    if not res.is_valid or res.sanitized_recipe is None:
        raise InvalidRecipe(res.missing_fields)
    return res.sanitized_recipe


async def list_customized(db, user_id: str) -> List[Recipe]:
    docs = await db[CUSTOM].find({"userId": user_id}).sort("updatedAt", -1).to_list(length=None)
    return valid_recipes(docs)
