# 환경변수 로딩 (.env)
# 이미지 허용 도메인은 여기 한 곳에서만 관리한다 (validator 기본값과 동일하게 유지)
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    MONGODB_URI: str = "mongodb://localhost:27017"  # 필요 시 prod/staging로 분리
    MONGODB_DB: str = "mealswipe"

    MEALDB_API_URL: str = "https://www.themealdb.com/api/json/v1/1"
    HTTP_TIMEOUT: float = 20.0

    # Gemini OpenAI 호환 엔드포인트
    GEMINI_API_KEY: str | None = None
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    GEMINI_MODEL: str = "gemini-1.5-flash-latest"

    ALLOWED_IMAGE_DOMAINS: List[str] = [
        "www.themealdb.com",
        "images.unsplash.com",
        "placehold.co",
        "lh3.googleusercontent.com",
        "downshiftology.com",
    ]
    PLACEHOLDER_IMAGE: str = "/recipe-placeholder.jpg"
    DEFAULT_RECIPE_IMAGE: str = "https://www.themealdb.com/images/media/meals/default.jpg"

    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    LOG_LEVEL: str = "INFO"

    DEFAULT_PAGE_SIZE: int = 12
    WEEKLY_PLAN_DAYS: int = 7

    class Config:
        env_file = ".env"


settings = Settings()
