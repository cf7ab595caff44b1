# mealswipe/main.py
# FastAPI 앱 초기화 및 라우터 설정
# 라우터는 각 기능별로 분리하여 관리

from __future__ import annotations

import logging
from asyncio import sleep
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mealswipe.api.routes_discover import router as discover_router   # 스와이프/검색
from mealswipe.api.routes_likes import router as likes_router         # 찜
from mealswipe.api.routes_recipes import router as recipes_router     # 작성/수정/복원
from mealswipe.api.routes_generate import router as generate_router   # AI 생성
from mealswipe.api.routes_weekly import router as weekly_router       # 주간 식단
from mealswipe.api.routes_profile import router as profile_router     # 프로필
from mealswipe.core.config import settings

# DB 초기화/인덱스
# init_db/close_db: 앱 시작/종료 시 커넥션 생성/정리
# get_db: 런타임에 DB 핸들 얻기
from mealswipe.db.init import get_db, init_db, close_db
from mealswipe.db.indexes import ensure_indexes

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
log = logging.getLogger(__name__)

DB_INIT_RETRIES = 20

app = FastAPI(title="MealSwipe - API", version="0.1.0")

# CORS: 프론트 origin 허용 + 쿠키 전달
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 앱 시작/종료 이벤트 핸들러
@app.on_event("startup")
async def on_startup() -> None:
    # 1) DB 먼저 붙는다 (최대 20회, 1초 간격)
    db = None
    for i in range(DB_INIT_RETRIES):
        try:
            db = await init_db()
            log.info("[startup] db ready")
            break
        except Exception as e:
            log.warning("[startup] db init retry %d: %s", i + 1, e)
            await sleep(1.0)
    if db is None:
        log.error("[startup] db init failed after retries")
        return

    # 2) 인덱스 보장
    try:
        await ensure_indexes(db)
        log.info("[startup] indexes ensured")
    except Exception:
        log.exception("[startup] ensure_indexes failed")

@app.on_event("shutdown")
async def on_shutdown() -> None:
    # 몽고db 커넥션 정리
    await close_db()

@app.get("/")
async def root():
    return {"status": "ok"}

@app.get("/health")
async def health():
    ok = {"status": "ok", "db": "skip"}
    try:
        db = get_db()
        await db.command("ping")
        ok["db"] = "ok"
    except Exception as e:
        ok["db"] = f"error: {e}"
    return ok

# 라우터 prefix는 각 파일 내에서 정의함 , 중복 prefix 금지
app.include_router(discover_router)
app.include_router(likes_router)
app.include_router(recipes_router)
app.include_router(generate_router)
app.include_router(weekly_router)
app.include_router(profile_router)
