# mealswipe/db/models/schemas.py
# API 입출력 Pydantic 모델
# RecipeIn: 작성/수정 폼 (유연 필드, 대부분 optional → 검증은 validator가 담당)
from __future__ import annotations
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from mealswipe.db.models.recipe import Recipe
from mealswipe.services.notify import Notice


# 작성/수정 폼: 필수 여부는 여기서 강제하지 않는다 (누락 필드 목록을 돌려주기 위함)
class RecipeIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    strMeal: Optional[str] = None
    strCategory: Optional[str] = None
    strInstructions: Optional[str] = None
    strMealThumb: Optional[str] = None
    strArea: Optional[str] = None
    strSocialMediaLink: Optional[str] = None
    ingredients: List[str] = Field(default_factory=list)
    measures: List[str] = Field(default_factory=list)

    def to_doc(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


# # AI 생성 요청
class GenerateRecipeIn(BaseModel):
    recipeName: str = Field(..., min_length=1)
    dietaryPreferences: List[str] = Field(default_factory=list)
    cuisineType: Optional[str] = None
    shouldSave: bool = False


class CorrectNameIn(BaseModel):
    name: str = Field(..., min_length=1)


class CorrectNameOut(BaseModel):
    name: str
    corrected: str


# # AI 생성 결과 (저장 전이라 id 없음)
class GeneratedRecipe(BaseModel):
    id: Optional[str] = None
    strMeal: str
    strCategory: str = ""
    strArea: str = "Unknown"
    strInstructions: str = ""
    strMealThumb: str
    ingredients: List[str] = Field(default_factory=list)
    measures: List[str] = Field(default_factory=list)
    dietaryPreferences: List[str] = Field(default_factory=list)


# # 공통 액션 응답 (토스트 대신 notices 배열)
class ActionResult(BaseModel):
    ok: bool = True
    liked: Optional[bool] = None
    recipe: Optional[Recipe] = None
    missingFields: List[str] = Field(default_factory=list)
    notices: List[Notice] = Field(default_factory=list)


class CleanupReport(BaseModel):
    deleted: List[str] = Field(default_factory=list)
    fixed: List[str] = Field(default_factory=list)
    failed: List[str] = Field(default_factory=list)


class WeeklyDay(BaseModel):
    day: str
    recipe: Recipe


class WeeklyPlanOut(BaseModel):
    days: List[WeeklyDay] = Field(default_factory=list)
    available: int = 0
    notices: List[Notice] = Field(default_factory=list)


class SwapIn(BaseModel):
    index: int = Field(..., ge=0)


class ProfileStats(BaseModel):
    totalRecipes: int = 0
    favoriteCategory: str = ""
    lastAdded: str = ""
    recentRecipes: List[Recipe] = Field(default_factory=list)
