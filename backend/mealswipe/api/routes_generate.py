# mealswipe/api/routes_generate.py
# AI 레시피 생성 / 이름 교정

from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException

from mealswipe.core.deps import get_user_id
from mealswipe.db.init import get_db
from mealswipe.db.models.schemas import CorrectNameIn, CorrectNameOut, GeneratedRecipe, GenerateRecipeIn
from mealswipe.services.generator import (
    GenerationFailed,
    GeneratorNotReady,
    RecipeGenerator,
    get_generator,
    save_generated,
)

router = APIRouter(prefix="/generate", tags=["generate"])

@router.post("/recipe", response_model=GeneratedRecipe)
async def generate_recipe(
    body: GenerateRecipeIn,
    db=Depends(get_db),
    user_id: str = Depends(get_user_id),
    generator: RecipeGenerator = Depends(get_generator),
):
    try:
        recipe = await generator.generate_recipe(body.recipeName, body.dietaryPreferences, body.cuisineType)
    except GeneratorNotReady as e:
        raise HTTPException(status_code=503, detail=str(e))
    except GenerationFailed as e:
        raise HTTPException(status_code=502, detail=str(e))

    if body.shouldSave:
        recipe = await save_generated(db, user_id, recipe)
    return recipe

@router.post("/name", response_model=CorrectNameOut)
async def correct_name(body: CorrectNameIn, generator: RecipeGenerator = Depends(get_generator)):
    # 실패해도 원래 이름으로 응답
    return CorrectNameOut(name=body.name, corrected=await generator.correct_recipe_name(body.name))
