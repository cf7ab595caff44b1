# mealswipe/api/routes_profile.py
# 프로필 통계

from fastapi import APIRouter, Depends

from mealswipe.core.deps import get_user_id
from mealswipe.db.init import get_db
from mealswipe.db.models.schemas import ProfileStats
from mealswipe.services.likes import list_liked
from mealswipe.services.profile import profile_stats

router = APIRouter(prefix="/profile", tags=["profile"])

@router.get("", response_model=ProfileStats)
async def get_profile(db=Depends(get_db), user_id: str = Depends(get_user_id)):
    """찜 개수/최애 카테고리/최근 추가"""
    return profile_stats(await list_liked(db, user_id))
