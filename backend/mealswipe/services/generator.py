# mealswipe/services/generator.py
# AI 레시피 생성 / 레시피 이름 교정
# - OpenAI SDK를 Gemini OpenAI 호환 엔드포인트에 붙여서 사용 (Chat Completions만)
# - 응답 JSON 파싱은 최대한 안전하게: 본문에서 {...} 블록만 뽑아 파싱

from __future__ import annotations
import json
import logging
import re
import uuid
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI, OpenAIError

from mealswipe.core.config import settings
from mealswipe.db.models.schemas import GeneratedRecipe
from mealswipe.services.likes import add_like

log = logging.getLogger(__name__)

PLACEHOLDER_IMAGE = "/recipe-placeholder.jpg"
MAX_NAME_WORDS = 10
JSON_BLOCK_RE = re.compile(r"\{[\s\S]*\}")


class GeneratorNotReady(Exception):
    # 생성 기능 준비 미완(키 없음)
    pass


class GenerationFailed(Exception):
    # 모델 호출 실패 / 응답 파싱 실패
    pass


CORRECT_NAME_PROMPT = """You are a culinary expert. Please correct the spelling and formatting of this recipe name: "{name}".
Consider:
1. Common recipe name misspellings (e.g., "futtucini" -> "fettuccine")
2. Proper capitalization (e.g., "pad thai" -> "Pad Thai")
3. Traditional spellings (e.g., "curry puff" -> "Karipap")
4. Regional variations (e.g., "expresso" -> "Espresso")

Return ONLY the corrected name, nothing else. If the name is already correct, return it as is."""

GENERATE_PROMPT = """Generate a detailed recipe for "{name}"{cuisine}{diets}.

Please provide the response in the following JSON format:
{{
  "strCategory": "Main category of the dish (e.g., Beef, Chicken, Vegetarian, Dessert)",
  "strArea": "Cuisine origin or area",
  "strInstructions": "Detailed step-by-step cooking instructions",
  "ingredients": ["List of ingredients"],
  "measures": ["List of measurements corresponding to ingredients"],
  "strMealThumb": "A URL to a real, existing, high-quality image of a similar dish from a major recipe website or food blog, in landscape orientation"
}}

Make sure:
1. The ingredients and measures arrays have matching lengths and correspond to each other
2. The image URL is from a reputable source and shows a similar dish
3. The image URL ends with a common image extension (e.g., .jpg, .jpeg, .png)
4. The instructions are clear and detailed"""


def build_generate_prompt(name: str, dietary_preferences: List[str], cuisine_type: Optional[str]) -> str:
    cuisine = f" in {cuisine_type} cuisine style" if cuisine_type else ""
    diets = f" that is suitable for {', '.join(dietary_preferences)} diets" if dietary_preferences else ""
    return GENERATE_PROMPT.format(name=name, cuisine=cuisine, diets=diets)


def extract_json(text: str) -> Dict[str, Any]:
    m = JSON_BLOCK_RE.search(text or "")
    if not m:
        raise GenerationFailed("Failed to parse generated recipe")
    try:
        obj = json.loads(m.group(0))
    except json.JSONDecodeError as e:
        raise GenerationFailed(f"Failed to parse generated recipe: {e}") from e
    if not isinstance(obj, dict):
        raise GenerationFailed("Failed to parse generated recipe")
    return obj


def _is_image_url(url: Any) -> bool:
    return (
        isinstance(url, str)
        and url.startswith("http")
        and url.endswith((".jpg", ".jpeg", ".png"))
    )


def _str_list(v: Any) -> List[str]:
    return [str(x) for x in v] if isinstance(v, list) else []


class RecipeGenerator:
    def __init__(self, *, client: AsyncOpenAI | None = None, model: str | None = None) -> None:
        self._client = client
        self.model = model or settings.GEMINI_MODEL

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not settings.GEMINI_API_KEY:
                raise GeneratorNotReady("GEMINI_API_KEY not set")
            self._client = AsyncOpenAI(api_key=settings.GEMINI_API_KEY, base_url=settings.GEMINI_BASE_URL)
        return self._client

    async def _complete(self, prompt: str, *, json_mode: bool = False) -> str:
        kwargs: Dict[str, Any] = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        chat = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            **kwargs,
        )
        return (chat.choices[0].message.content or "") if chat and chat.choices else ""

    async def correct_recipe_name(self, name: str) -> str:
        """이름 교정. 실패하거나 설명문이 길게 오면 입력 그대로."""
        try:
            corrected = (await self._complete(CORRECT_NAME_PROMPT.format(name=name))).strip()
        except GeneratorNotReady as e:
            log.warning("name correction skipped: %s", e)
            return name
        except OpenAIError:
            log.exception("name correction failed")
            return name

        if not corrected or len(corrected.split(" ")) > MAX_NAME_WORDS:
            return name
        return corrected

    async def generate_recipe(
        self,
        recipe_name: str,
        dietary_preferences: Optional[List[str]] = None,
        cuisine_type: Optional[str] = None,
    ) -> GeneratedRecipe:
        diets = list(dietary_preferences or [])
        prompt = build_generate_prompt(recipe_name, diets, cuisine_type)

        try:
            text = await self._complete(prompt, json_mode=True)
        except OpenAIError as e:
            log.exception("recipe generation failed")
            raise GenerationFailed("Failed to generate recipe") from e

        data = extract_json(text)
        image = data.get("strMealThumb")

        return GeneratedRecipe(
            strMeal=recipe_name,
            strCategory=str(data.get("strCategory") or ""),
            strArea=str(data.get("strArea") or cuisine_type or "Unknown"),
            strInstructions=str(data.get("strInstructions") or ""),
            ingredients=_str_list(data.get("ingredients")),
            measures=_str_list(data.get("measures")),
            strMealThumb=image if _is_image_url(image) else PLACEHOLDER_IMAGE,
            dietaryPreferences=diets,
        )


async def save_generated(db, user_id: str, recipe: GeneratedRecipe) -> GeneratedRecipe:
    # 생성 결과를 바로 찜 목록에 저장 (새 id 발급)
    rid = uuid.uuid4().hex
    await add_like(db, user_id, {**recipe.model_dump(exclude={"id"}), "id": rid})
    return recipe.model_copy(update={"id": rid})


def get_generator() -> RecipeGenerator:
    # 라우터 의존성 (테스트에서 override)
    return RecipeGenerator()
