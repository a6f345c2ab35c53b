# app/core/database.py

"""
애플리케이션의 데이터베이스 연결 및 세션 관리를 담당하는 모듈입니다.

- SQLModel의 비동기 엔진을 설정합니다.
- 요청 단위의 트랜잭션 경계(세션)를 제공하는 의존성 함수를 제공합니다.
- 애플리케이션 시작 시 데이터베이스 테이블을 생성하는 함수를 포함합니다 (개발용).
- 엔진에서 실행된 SQL 문 개수를 세는 QueryCounter를 제공합니다.
"""

import logging
from typing import Any, AsyncGenerator, Dict, List, Union
from contextlib import asynccontextmanager

from sqlalchemy import Engine, event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from sqlalchemy.orm import configure_mappers, sessionmaker

from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings

# =============================================================================
# 모든 도메인 모델 임포트
# =============================================================================
# 모든 SQLModel 클래스가 SQLModel.metadata에 등록되어야
# configure_mappers()와 create_all()이 관계와 테이블을 모두 인식합니다.
from app.domains.member import models  # noqa
from app.domains.item import models  # noqa
from app.domains.order import models  # noqa

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.DEBUG_MODE, "future": True}
    if url.startswith("postgresql"):
        options.update(
            pool_recycle=3600,  # 1시간마다 연결 재활용
            pool_size=10,
            max_overflow=20,
        )
    return options


_database_url = settings.DATABASE_URL.get_secret_value()

engine: AsyncEngine = create_async_engine(_database_url, **_engine_options(_database_url))

# 비동기 세션을 생성하는 '세션 공장'입니다.
AsyncSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

metadata = SQLModel.metadata

_mappers_configured = False


# =============================================================================
# 데이터베이스 초기화 및 테이블 생성 함수
# =============================================================================
async def create_db_and_tables(bind: AsyncEngine = engine) -> None:
    """
    데이터베이스 테이블을 생성합니다.
    기존 테이블은 삭제하지 않습니다.
    """
    global _mappers_configured

    if not _mappers_configured:
        configure_mappers()
        _mappers_configured = True

    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables created (or already present).")


# =============================================================================
# 비동기 데이터베이스 세션 의존성 주입
# =============================================================================
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI 의존성 주입을 위한 비동기 데이터베이스 세션 제너레이터입니다.
    요청마다 새로운 세션을 생성하고, 요청 처리 후 세션을 닫습니다.
    커밋되지 않은 트랜잭션은 세션이 닫힐 때 롤백됩니다.
    """
    async with AsyncSessionLocal() as session:
        yield session


@asynccontextmanager
async def get_async_session_context() -> AsyncGenerator[AsyncSession, None]:
    """
    요청 밖(스크립트, 초기 데이터 적재 등)에서 사용할 수 있는
    독립적인 비동기 DB 세션을 제공하는 컨텍스트 관리자입니다.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# =============================================================================
# SQL 실행 횟수 측정
# =============================================================================
class QueryCounter:
    """
    with 블록 안에서 엔진을 통해 실행된 SQL 문을 기록합니다.

    사용 예:
        with QueryCounter(engine) as counter:
            await service.find_orders_v5()
        counter.count  # 2
    """

    def __init__(self, bind: Union[AsyncEngine, Engine]):
        self._sync_engine = getattr(bind, "sync_engine", bind)
        self.statements: List[str] = []

    def _before_cursor_execute(self, conn, cursor, statement, parameters, context, executemany):
        self.statements.append(statement)

    def __enter__(self) -> "QueryCounter":
        event.listen(self._sync_engine, "before_cursor_execute", self._before_cursor_execute)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        event.remove(self._sync_engine, "before_cursor_execute", self._before_cursor_execute)

    @property
    def count(self) -> int:
        """실행된 SELECT 문 개수."""
        return sum(1 for s in self.statements if s.lstrip().upper().startswith("SELECT"))
