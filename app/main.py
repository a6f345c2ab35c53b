# app/main.py

import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import FastAPI, Depends, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

# 핵심 설정 및 데이터베이스 모듈 임포트
from app.core.config import settings
from app.core.database import create_db_and_tables, engine, get_session
from app.core.exceptions import ShopError, shop_error_handler

from app import API_PREFIX

# 각 도메인의 라우터 임포트
from app.domains.member.routers import router as member_router
from app.domains.item.routers import router as item_router
from app.domains.order.routers import router as order_router

logger = logging.getLogger(__name__)


# -- 애플리케이션 수명 주기 이벤트 핸들러 --
# 애플리케이션 시작 및 종료 시 실행될 비동기 작업을 정의합니다.
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI 애플리케이션의 수명 주기 이벤트(데이터베이스 테이블 생성, 연결 풀 종료)를 처리합니다.
    """
    logger.info("FastAPI 애플리케이션 시작 중...")
    if settings.CREATE_TABLES_ON_STARTUP:
        await create_db_and_tables()

    yield  # 애플리케이션 실행

    logger.info("FastAPI 애플리케이션 종료 중...")
    await engine.dispose()
    logger.info("데이터베이스 연결 풀 종료 완료.")


# -- FastAPI 애플리케이션 인스턴스 생성 --
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs",       # Swagger UI
    redoc_url="/redoc",     # ReDoc
    lifespan=lifespan,
)

# -- 도메인 예외 핸들러 --
# 서비스/엔티티에서 발생한 ShopError를 status_code에 맞는 {"detail": ...} 응답으로 변환합니다.
app.add_exception_handler(ShopError, shop_error_handler)

# -- CORS (Cross-Origin Resource Sharing) 미들웨어 설정 --
# 프로덕션에서는 'allow_origins'를 실제 프론트엔드 도메인으로 제한해야 합니다.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -- 도메인 라우터 포함 --
# 버전(v1, v2, v3.1 ...)은 각 라우터의 경로에 들어 있습니다.
app.include_router(member_router, prefix=API_PREFIX)
app.include_router(item_router, prefix=API_PREFIX)
app.include_router(order_router, prefix=API_PREFIX)


# -- 루트 엔드포인트 --
@app.get("/", summary="API Root", response_description="Welcome message and documentation link.")
async def read_root():
    """
    API의 루트 엔드포인트입니다.
    API의 시작점을 알리고 문서 링크를 제공합니다.
    """
    return {"message": f"Welcome to {settings.APP_NAME}. Visit /docs for interactive API documentation."}


# -- 헬스 체크 엔드포인트 --
# 애플리케이션과 데이터베이스의 연결 상태를 확인하는 엔드포인트입니다.
@app.get("/health-check", summary="Health Check", response_description="Status of the application and database connection.")
async def health_check(session: AsyncSession = Depends(get_session)):
    """
    애플리케이션의 헬스 체크 엔드포인트입니다.
    데이터베이스 연결을 테스트하여 서비스의 정상 작동 여부를 확인합니다.
    """
    try:
        result = await session.execute(text("SELECT 1"))
        if result.scalar() == 1:
            return {"status": "ok", "database_connection": "successful"}
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database health check failed: No result from test query"
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Database health check failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Database connection error during health check: {e}"
        )


# -- Uvicorn 서버 직접 실행 (개발용) --
# if __name__ == "__main__":
#     import uvicorn
#     uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
