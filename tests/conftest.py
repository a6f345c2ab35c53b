# tests/conftest.py

import os
import tempfile
from typing import AsyncGenerator, Awaitable, Callable, List

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

# app.main을 임포트하여 FastAPI 앱 인스턴스에 접근합니다.
from app.main import app as main_app
from app.core import dependencies as deps
from app.core.database import QueryCounter, get_session

# --- 모든 모델 임포트 ---
#  SQLModel.metadata.create_all()이 모든 테이블을 인식하려면,
#  모든 모델 클래스가 한 번 이상 임포트되어야 합니다.
from app.domains.models import *    # noqa: F401, F403
from app.domains.item import models as item_models
from app.domains.member import models as member_models
from app.domains.order import models as order_models
from app.domains.shared.models import Address


# --- 테스트용 데이터베이스 설정 ---
# 실제 DB와 분리된 임시 SQLite 파일을 사용합니다.
# TEST_DATABASE_URL 환경 변수로 다른 DB(예: PostgreSQL)를 지정할 수 있습니다.
_TEST_DB_DIR = tempfile.mkdtemp(prefix="jpashop-test-")
TEST_DATABASE_URL = os.getenv(
    "TEST_DATABASE_URL",
    f"sqlite+aiosqlite:///{os.path.join(_TEST_DB_DIR, 'test_jpashop.db')}",
)
test_engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,             # 테스트 시 SQL 쿼리 출력하지 않음
    future=True,
    poolclass=NullPool,     # 각 연결이 독립적으로 사용되고 바로 닫히도록 함
)

# 테스트용 세션 팩토리 생성 (AsyncSession)
TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# --- 데이터베이스 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    각 테스트 함수마다 트랜잭션을 시작하고, 테스트 완료 후 롤백하여
    테스트 간의 격리를 보장하는 비동기 데이터베이스 세션을 제공합니다.
    코드 안의 commit()은 바깥 트랜잭션을 커밋하지 않습니다.
    """
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    connection = await test_engine.connect()
    transaction = await connection.begin()
    session = TestingSessionLocal(bind=connection)

    try:
        yield session
    finally:
        await session.close()
        await transaction.rollback()
        await connection.close()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    데이터베이스 세션 의존성을 테스트 세션으로 바꾼 AsyncClient를 반환합니다.
    """
    def override_get_session():
        yield db_session

    original_overrides = main_app.dependency_overrides.copy()
    try:
        main_app.dependency_overrides.update({
            get_session: override_get_session,
            deps.get_db_session: override_get_session,
        })
        transport = ASGITransport(app=main_app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        # 테스트가 끝난 후 원래 의존성 상태로 되돌립니다.
        main_app.dependency_overrides.clear()
        main_app.dependency_overrides.update(original_overrides)


@pytest.fixture(scope="function")
def statement_counter() -> Callable[[], QueryCounter]:
    """테스트 엔진에서 실행된 SELECT 문 수를 세는 QueryCounter를 만드는 함수를 반환합니다."""
    return lambda: QueryCounter(test_engine)


# --- 도메인 데이터 픽스처 ---
@pytest.fixture(scope="function")
def member_factory(db_session: AsyncSession) -> Callable[..., Awaitable[member_models.Member]]:
    """이름과 주소로 회원을 저장하는 팩토리 함수를 반환합니다."""
    async def _create_member(name: str, city: str = "서울", street: str = "강가", zipcode: str = "123-123") -> member_models.Member:
        member = member_models.Member(name=name)
        member.set_address(Address(city=city, street=street, zipcode=zipcode))
        db_session.add(member)
        await db_session.commit()
        await db_session.refresh(member)
        return member
    return _create_member


@pytest.fixture(scope="function")
def book_factory(db_session: AsyncSession) -> Callable[..., Awaitable[item_models.Item]]:
    """이름, 가격, 재고로 책(BOOK)을 저장하는 팩토리 함수를 반환합니다."""
    async def _create_book(name: str, price: int, stock_quantity: int) -> item_models.Item:
        book = item_models.Item(
            dtype=item_models.ItemType.BOOK,
            name=name,
            price=price,
            stock_quantity=stock_quantity,
            author="김영한",
            isbn="12345",
        )
        db_session.add(book)
        await db_session.commit()
        await db_session.refresh(book)
        return book
    return _create_book


@pytest_asyncio.fixture(scope="function")
async def test_member(member_factory) -> member_models.Member:
    return await member_factory("kim")


@pytest_asyncio.fixture(scope="function")
async def test_book(book_factory) -> item_models.Item:
    """가격 100, 재고 10인 책"""
    return await book_factory("book-1", 100, 10)


@pytest_asyncio.fixture(scope="function")
async def sample_orders(db_session: AsyncSession, member_factory, book_factory) -> List[int]:
    """
    주문 2건, 주문상품 4건을 저장하고 주문 id 목록을 반환합니다.
    - userA: JPA1 BOOK(10000) x 1, JPA2 BOOK(20000) x 2
    - userB: SPRING1 BOOK(20000) x 3, SPRING2 BOOK(40000) x 4

    저장 후 세션의 식별자 맵을 비워서, 이후 조회가 모두 DB에서 새로 읽히도록 합니다.
    """
    seeds = [
        ("userA", "서울", "1", "1111", [("JPA1 BOOK", 10000, 1), ("JPA2 BOOK", 20000, 2)]),
        ("userB", "진주", "2", "2222", [("SPRING1 BOOK", 20000, 3), ("SPRING2 BOOK", 40000, 4)]),
    ]
    order_ids = []
    for name, city, street, zipcode, books in seeds:
        member = await member_factory(name, city=city, street=street, zipcode=zipcode)
        order_items = []
        for book_name, price, count in books:
            book = await book_factory(book_name, price, 100)
            order_items.append(order_models.OrderItem.create_order_item(book, price, count))

        delivery = order_models.Delivery()
        delivery.set_address(member.address)
        order = order_models.Order.create_order(member, delivery, *order_items)
        db_session.add(order)
        await db_session.commit()
        order_ids.append(order.id)

    db_session.expunge_all()
    return order_ids
