# app/core/dependencies.py

"""
FastAPI 애플리케이션의 의존성 주입(Dependency Injection)을 정의하는 모듈입니다.

- 데이터베이스 세션 관리 (get_db_session).
- 주문 서비스 계층 (get_order_service, get_order_query_service).
"""

from typing import AsyncGenerator

from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.core.database import get_session as get_main_app_session
from app.domains.order.services import OrderService, OrderQueryService


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI 의존성 주입을 위한 비동기 데이터베이스 세션 제너레이터입니다.
    app.core.database.get_session을 래핑하여 사용합니다.
    """
    async for session in get_main_app_session():
        yield session


def get_order_service(db: AsyncSession = Depends(get_db_session)) -> OrderService:
    """주문/취소 같은 핵심 비즈니스 로직을 담당하는 서비스입니다."""
    return OrderService(db)


def get_order_query_service(db: AsyncSession = Depends(get_db_session)) -> OrderQueryService:
    """API 응답 형태에 맞춘 조회 전용 서비스입니다."""
    return OrderQueryService(db, batch_fetch_size=settings.BATCH_FETCH_SIZE)
