# app/core/config.py

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
import os

# 프로젝트의 루트 디렉토리 경로를 계산합니다.
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class Settings(BaseSettings):
    """
    애플리케이션의 모든 설정을 정의하는 Pydantic BaseSettings 모델입니다.
    환경 변수 및 .env 파일에서 값을 자동으로 로드합니다.
    """

    # --- Pydantic Settings 설정 ---
    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, '.env'),  # 프로젝트 루트의 .env 파일
        env_file_encoding='utf-8',
        extra='ignore',                      # 모델에 없는 변수는 무시
        case_sensitive=True                  # 환경 변수 이름 대소문자 구분
    )

    # --- 애플리케이션 기본 설정 ---
    APP_NAME: str = "jpashop FastAPI API"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Shop sample API (members, items, orders)"
    APP_ENV: str = Field("development", description="Application environment (e.g., development, production, testing)")
    # 디버그 모드에서는 SQL 문을 로그로 출력합니다.
    DEBUG_MODE: bool = Field(False, description="Enable SQL echo and statement counting per fetch strategy")

    # --- 데이터베이스 설정 ---
    # 운영 환경에서는 postgresql+asyncpg://... 형식의 URL을 사용합니다.
    DATABASE_URL: SecretStr = Field(
        SecretStr("sqlite+aiosqlite:///./jpashop.db"),
        description="Async SQLAlchemy database connection URL",
    )
    CREATE_TABLES_ON_STARTUP: bool = Field(True, description="Run metadata.create_all in the app lifespan")

    # --- 조회 최적화 설정 ---
    # 컬렉션을 조인 없이 불러올 때 IN 절 하나에 묶을 부모 ID 개수 (100 ~ 1000 권장)
    BATCH_FETCH_SIZE: int = Field(100, ge=1, description="Parent ids per IN-clause when loading collections")
    ORDER_SEARCH_LIMIT: int = Field(1000, ge=1, description="Max rows returned by order search")


settings = Settings()
