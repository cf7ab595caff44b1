# mealswipe/services/profile.py
# 프로필 통계: 찜 개수/최애 카테고리/최근 추가

from __future__ import annotations
from collections import Counter
from typing import Sequence

from mealswipe.db.models.recipe import Recipe
from mealswipe.db.models.schemas import ProfileStats


def profile_stats(recipes: Sequence[Recipe], recent: int = 3) -> ProfileStats:
    counts = Counter(r.strCategory for r in recipes)
    # ISO-8601(UTC, 고정 포맷)이라 문자열 비교로 충분
    last_added = max((r.likedAt for r in recipes if r.likedAt), default="")

    # 동률이면 먼저 나온 카테고리 (most_common은 삽입 순서 유지)
    favorite = counts.most_common(1)[0][0] if counts else ""
    newest = sorted(recipes, key=lambda r: r.likedAt or "", reverse=True)[:recent]

    return ProfileStats(
        totalRecipes=len(recipes),
        favoriteCategory=favorite,
        lastAdded=last_added,
        recentRecipes=newest,
    )
