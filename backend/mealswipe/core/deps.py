# 공용 의존성/헬퍼 (사용자 식별, 알림 포트)
# 인증 자체는 외부 ID 제공자 몫 → 게이트웨이가 넣어준 X-User-Id 헤더를 신뢰
# 헤더가 없으면 익명 쿠키를 발급해서 그 값을 사용자 id로 쓴다
import uuid
from fastapi import Request, Response

from mealswipe.services.notify import CollectingNotifier

COOKIE = "anon_id"
USER_HEADER = "x-user-id"
MAX_AGE = 60 * 60 * 24 * 365 * 2  # 2년

def get_or_set_anon_id(request: Request, response: Response) -> str:
    # 쿠키 없으면 발급, 있으면 그대로 사용
    v = request.cookies.get(COOKIE)
    if not v:
        v = uuid.uuid4().hex
        response.set_cookie(COOKIE, v, max_age=MAX_AGE, httponly=True, samesite="lax")
    return v

def get_user_id(request: Request, response: Response) -> str:
    uid = (request.headers.get(USER_HEADER) or "").strip()
    if uid:
        return uid
    return get_or_set_anon_id(request, response)

def get_notifier() -> CollectingNotifier:
    # 요청마다 새 버퍼 (응답의 notices로 내려감)
    return CollectingNotifier()
