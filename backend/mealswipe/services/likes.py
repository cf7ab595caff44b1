# mealswipe/services/likes.py
# 좋아요(찜) 저장/삭제/토글 + 찜 목록 조회
# 문서 키는 "{userId}_{recipeId}" 복합키 → 같은 레시피도 사용자별로 따로 저장

from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel

from mealswipe.core.config import settings
from mealswipe.db.indexes import LIKED
from mealswipe.db.models.recipe import Recipe, ValidationResult
from mealswipe.services.notify import Notifier
from mealswipe.services.validator import to_iso, validate_and_sanitize_recipe

log = logging.getLogger(__name__)


def like_key(user_id: str, recipe_id: str) -> str:
    return f"{user_id}_{recipe_id}"


def doc_recipe_id(doc: Mapping[str, Any]) -> str:
    return str(doc.get("id") or doc.get("_id") or "")


def sanitize_doc(doc: Mapping[str, Any]) -> ValidationResult:
    # DB 문서 → 검증/정규화 (허용 도메인/플레이스홀더는 설정값)
    return validate_and_sanitize_recipe(
        doc_recipe_id(doc),
        doc,
        allowed_domains=settings.ALLOWED_IMAGE_DOMAINS,
        placeholder=settings.PLACEHOLDER_IMAGE,
    )


def valid_recipes(docs: List[Dict[str, Any]]) -> List[Recipe]:
    """유효 문서만 정규화해서 반환. 무효 문서는 로그만 남기고 건너뜀 (id 중복 제거)."""
    out: Dict[str, Recipe] = {}
    invalid: List[str] = []
    for d in docs:
        res = sanitize_doc(d)
        if not res.is_valid or res.sanitized_recipe is None:
            invalid.append(doc_recipe_id(d))
            log.error("Recipe document %s is invalid: %s", doc_recipe_id(d), ", ".join(res.missing_fields))
            continue
        r = res.sanitized_recipe
        if r.id not in out:
            out[r.id] = r
    if invalid:
        log.warning("Found %d invalid recipe documents", len(invalid))
    return list(out.values())


async def check_if_liked(db, user_id: str, recipe_id: str) -> bool:
    doc = await db[LIKED].find_one({"_id": like_key(user_id, recipe_id)}, {"_id": 1})
    return doc is not None


async def add_like(
    db,
    user_id: str,
    recipe: Recipe | Mapping[str, Any],
    *,
    now: Optional[datetime] = None,
) -> str:
    data = recipe.model_dump() if isinstance(recipe, BaseModel) else dict(recipe)
    rid = str(data.pop("id", "") or "")
    if not rid:
        raise ValueError("recipe id is required to like a recipe")

    key = like_key(user_id, rid)
    doc = {
        **data,
        "_id": key,
        "id": rid,
        "userId": user_id,
        "likedAt": to_iso(now or datetime.now(timezone.utc)),
    }
    await db[LIKED].replace_one({"_id": key}, doc, upsert=True)
    log.info("like added user=%s recipe=%s", user_id, rid)
    return rid


async def remove_like(db, user_id: str, recipe_id: str) -> bool:
    res = await db[LIKED].delete_one({"_id": like_key(user_id, recipe_id)})
    log.info("like removed user=%s recipe=%s (deleted=%d)", user_id, recipe_id, res.deleted_count)
    return res.deleted_count > 0


async def toggle_like(db, user_id: str, recipe: Recipe, notifier: Notifier) -> Optional[bool]:
    """찜 토글. 결과 liked 여부, 실패 시 None (알림으로 오류 전달)."""
    try:
        if await check_if_liked(db, user_id, recipe.id):
            await remove_like(db, user_id, recipe.id)
            notifier.success(f'Removed "{recipe.strMeal}" from favorites')
            return False
        await add_like(db, user_id, recipe)
        notifier.success(f'Added "{recipe.strMeal}" to favorites')
        return True
    except Exception:
        log.exception("toggle_like failed user=%s recipe=%s", user_id, recipe.id)
        notifier.error("Failed to update favorites")
        return None


async def liked_docs(db, user_id: str) -> List[Dict[str, Any]]:
    # 최신 찜 순
    cur = db[LIKED].find({"userId": user_id}).sort("likedAt", -1)
    return await cur.to_list(length=None)


async def list_liked(db, user_id: str) -> List[Recipe]:
    return valid_recipes(await liked_docs(db, user_id))

