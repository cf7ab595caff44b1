# mealswipe/db/models/recipe.py
# 레시피 표준 스키마 (liked_recipes / user_recipes 문서 공통)
# 필드명은 TheMealDB 응답 키를 그대로 쓴다 (프론트와 완전 일치)
from __future__ import annotations
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Recipe(BaseModel):
    # 저장 시 userId/originalRecipeId 같은 부가 필드는 서비스 레이어에서 붙인다
    model_config = ConfigDict(extra="ignore")

    id: str
    idMeal: str = ""
    strMeal: str
    strCategory: str
    strInstructions: str
    strMealThumb: str
    strArea: str = "Unknown"
    strSocialMediaLink: Optional[str] = None
    ingredients: List[str] = Field(default_factory=list)   # measures와 같은 인덱스끼리 짝
    measures: List[str] = Field(default_factory=list)
    likedAt: Optional[str] = None                          # ISO-8601 (UTC, Z)
    isCustomized: bool = False


class ValidationResult(BaseModel):
    is_valid: bool
    missing_fields: List[str] = Field(default_factory=list)
    sanitized_recipe: Optional[Recipe] = None
