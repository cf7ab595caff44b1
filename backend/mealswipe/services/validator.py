# mealswipe/services/validator.py
# DB에서 읽은 레시피 문서 검증/정규화
# - 필수 필드(제목/카테고리/조리법) 존재 여부를 원본 기준으로 먼저 판정
# - 판정과 무관하게 기본값을 채운 정규화 레시피를 만든다
# - 어떤 입력이 와도 예외를 밖으로 던지지 않는다 (결과 데이터로 반환)

from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional
from urllib.parse import parse_qsl, urlsplit

from mealswipe.db.models.recipe import Recipe, ValidationResult

REQUIRED_FIELDS = ("strMeal", "strCategory", "strInstructions")

INVALID_FORMAT = "Invalid data format"
PARSING_ERROR = "Data parsing error"

DEFAULT_TITLE = "Untitled Recipe"
DEFAULT_CATEGORY = "Uncategorized"
DEFAULT_INSTRUCTIONS = "No instructions available"
DEFAULT_AREA = "Unknown"

PLACEHOLDER_IMAGE = "/recipe-placeholder.jpg"
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")

# core.config.Settings.ALLOWED_IMAGE_DOMAINS 기본값과 같은 목록
ALLOWED_IMAGE_DOMAINS = (
    "www.themealdb.com",
    "images.unsplash.com",
    "placehold.co",
    "lh3.googleusercontent.com",
    "downshiftology.com",
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(dt: datetime) -> str:
    # 2024-01-01T09:30:00.000Z 형식 (밀리초까지)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def parse_date_string(value: Any, now: Optional[datetime] = None) -> str:
    """날짜 파싱. 없거나 깨진 값이면 현재 시각으로 대체."""
    fallback = to_iso(now or _utc_now())
    # epoch 숫자는 받지 않는다 (문자열/datetime만)
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        try:
            dt = datetime.fromisoformat(value.strip())
        except ValueError:
            return fallback
    else:
        return fallback
    try:
        return to_iso(dt)
    except (ValueError, OverflowError):
        # UTC 변환 시 범위 밖 (0001-01-01+14:00 등)
        return fallback


def _is_allowed_host(host: str, domains: Iterable[str]) -> bool:
    return any(host == d or host.endswith(f".{d}") for d in domains)


def sanitize_image_url(
    url: Any,
    allowed_domains: Optional[Iterable[str]] = None,
    placeholder: str = PLACEHOLDER_IMAGE,
) -> str:
    """허용 도메인 + 이미지 확장자 통과 시 원본 URL, 아니면 플레이스홀더."""
    domains = tuple(ALLOWED_IMAGE_DOMAINS if allowed_domains is None else allowed_domains)

    if not url or url.strip() == "":
        return placeholder
    if not url.lower().startswith("http"):
        return placeholder

    try:
        parts = urlsplit(url)
        host = parts.hostname or ""
    except ValueError:
        return placeholder

    if parts.scheme.lower() not in ("http", "https"):
        return placeholder
    if not _is_allowed_host(host, domains):
        return placeholder

    has_ext = parts.path.lower().endswith(IMAGE_EXTENSIONS)

    # 경로에 확장자가 없으면 쿼리 값에서 한 번 더 찾는다 (?url=...jpg 같은 프록시 URL)
    if parts.query and not has_ext:
        values = [v for _, v in parse_qsl(parts.query, keep_blank_values=True)]
        if any(v.lower().endswith(IMAGE_EXTENSIONS) for v in values):
            return url

    return url if has_ext else placeholder


def _text(value: Any) -> str:
    # 문자열이 아닌 값은 strip()에서 터진다 → 상위에서 파싱 오류로 처리
    return value.strip() if value else ""


def _link(value: Any) -> Optional[str]:
    # 부가 필드: 문자열이 아니면 버린다 (필수 필드처럼 파싱 오류로 만들지 않음)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _clean_list(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [x.strip() for x in value if x]


def validate_and_sanitize_recipe(
    doc_id: str,
    data: Any,
    *,
    allowed_domains: Optional[Iterable[str]] = None,
    placeholder: str = PLACEHOLDER_IMAGE,
    now: Optional[datetime] = None,
) -> ValidationResult:
    # 문서 형태 자체가 아니면 바로 무효 (정규화 결과 없음)
    if not isinstance(data, Mapping):
        return ValidationResult(is_valid=False, missing_fields=[INVALID_FORMAT])

    missing = [f for f in REQUIRED_FIELDS if not data.get(f)]

    try:
        recipe = Recipe(
            id=doc_id,
            idMeal=doc_id,
            strMeal=_text(data.get("strMeal")) or DEFAULT_TITLE,
            strCategory=_text(data.get("strCategory")) or DEFAULT_CATEGORY,
            strInstructions=_text(data.get("strInstructions")) or DEFAULT_INSTRUCTIONS,
            strMealThumb=sanitize_image_url(data.get("strMealThumb"), allowed_domains, placeholder),
            strArea=(data.get("strArea") or DEFAULT_AREA).strip(),
            strSocialMediaLink=_link(data.get("strSocialMediaLink")),
            # NOTE: ingredients/measures 길이 불일치는 보정하지 않는다 (각각 독립 필터)
            ingredients=_clean_list(data.get("ingredients")),
            measures=_clean_list(data.get("measures")),
            likedAt=parse_date_string(data.get("likedAt"), now),
            isCustomized=bool(data.get("isCustomized")),
        )
    except Exception:
        return ValidationResult(is_valid=False, missing_fields=[PARSING_ERROR])

    if missing:
        # 기본값으로 채운 레시피는 그대로 돌려준다 (호출부가 표시/복구 여부 결정)
        return ValidationResult(is_valid=False, missing_fields=missing, sanitized_recipe=recipe)

    return ValidationResult(is_valid=True, missing_fields=[], sanitized_recipe=recipe)
