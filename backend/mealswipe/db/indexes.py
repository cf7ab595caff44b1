# mealswipe/db/indexes.py
# 컬렉션 인덱스 생성
# 앱 스타트업에서 한 번 ensure_indexes(db)를 await로 호출한다.

LIKED = "liked_recipes"       # 좋아요/직접 작성 레시피 (원본)
CUSTOM = "user_recipes"       # 사용자 수정본 (원본 위에 덮어 읽음)
PLANS = "weekly_plans"        # 주간 식단

async def ensure_indexes(db) -> None:
    await db[LIKED].create_index("userId")
    await db[LIKED].create_index([("userId", 1), ("likedAt", -1)])
    await db[LIKED].create_index([("userId", 1), ("id", 1)], unique=True, sparse=True)

    await db[CUSTOM].create_index("userId")
    await db[CUSTOM].create_index("originalRecipeId")

    await db[PLANS].create_index("userId", unique=True)
