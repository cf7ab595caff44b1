# mealswipe/services/mealdb.py
# TheMealDB 공개 API 클라이언트 (랜덤/검색/단건 조회)
# 의존: httpx
# 응답의 strIngredient1..20 / strMeasure1..20 을 ingredients/measures 배열로 펼친다

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

import httpx

from mealswipe.core.config import settings
from mealswipe.db.models.recipe import Recipe

log = logging.getLogger(__name__)

MAX_INGREDIENTS = 20


class MealDBError(Exception):
    # 외부 API 실패 (네트워크/HTTP/응답 형식)
    pass


def transform_meal(meal: Dict[str, Any]) -> Recipe:
    ingredients: List[str] = []
    measures: List[str] = []

    for i in range(1, MAX_INGREDIENTS + 1):
        ingredient = meal.get(f"strIngredient{i}")
        measure = meal.get(f"strMeasure{i}")
        if ingredient and ingredient.strip():
            ingredients.append(ingredient.strip())
            measures.append((measure or "").strip())

    return Recipe(
        id=str(meal.get("idMeal") or ""),
        idMeal=str(meal.get("idMeal") or ""),
        strMeal=meal.get("strMeal") or "",
        strCategory=meal.get("strCategory") or "",
        strInstructions=meal.get("strInstructions") or "",
        strMealThumb=meal.get("strMealThumb") or "",
        strArea=meal.get("strArea") or "Unknown",
        strSocialMediaLink=meal.get("strYoutube") or None,
        ingredients=ingredients,
        measures=measures,
    )


class MealDBClient:
    def __init__(self, *, client: httpx.AsyncClient | None = None, base_url: str | None = None) -> None:
        self.base_url = (base_url or settings.MEALDB_API_URL).rstrip("/")
        self.client = httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT) if client is None else client

    async def _meals(self, path: str, params: Optional[Dict[str, str]] = None) -> List[Dict[str, Any]]:
        url = f"{self.base_url}/{path}"
        try:
            r = await self.client.get(url, params=params)
            r.raise_for_status()
            data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            log.warning("mealdb request failed: %s %s", url, e)
            raise MealDBError(str(e)) from e

        # 결과 없으면 {"meals": null}
        meals = data.get("meals") if isinstance(data, dict) else None
        return [m for m in (meals or []) if isinstance(m, dict)]

    async def get_random_recipe(self) -> Recipe:
        meals = await self._meals("random.php")
        if not meals:
            raise MealDBError("random.php returned no meals")
        return transform_meal(meals[0])

    async def search_recipes(self, term: str) -> List[Recipe]:
        term = (term or "").strip()
        if not term:
            return []
        meals = await self._meals("search.php", {"s": term})
        return [transform_meal(m) for m in meals]

    async def get_recipe_by_id(self, recipe_id: str) -> Optional[Recipe]:
        meals = await self._meals("lookup.php", {"i": recipe_id})
        return transform_meal(meals[0]) if meals else None

    async def aclose(self) -> None:
        await self.client.aclose()


async def get_mealdb():
    # 라우터 의존성 (요청 끝나면 커넥션 정리, 테스트에서 override)
    cli = MealDBClient()
    try:
        yield cli
    finally:
        await cli.aclose()
