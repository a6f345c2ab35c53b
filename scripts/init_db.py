# flake8: noqa
# scripts/init_db.py

import asyncio
import typer

from app.core.database import create_db_and_tables, engine, get_async_session_context
from app.domains.item import crud as item_crud
from app.domains.item import schemas as item_schemas
from app.domains.member import crud as member_crud
from app.domains.order.services import OrderService
from app.domains.shared.models import Address

cli = typer.Typer()

# (회원 이름, 주소, [(책 이름, 가격, 재고, 주문 수량), ...])
SAMPLE_ORDERS = [
    ("userA", Address(city="서울", street="1", zipcode="1111"), [("JPA1 BOOK", 10000, 100, 1), ("JPA2 BOOK", 20000, 100, 2)]),
    ("userB", Address(city="진주", street="2", zipcode="2222"), [("SPRING1 BOOK", 20000, 200, 3), ("SPRING2 BOOK", 40000, 300, 4)]),
]


async def seed_sample_orders() -> None:
    """
    샘플 회원, 상품, 주문을 저장합니다.
    회원마다 책 두 권을 각각 주문합니다.
    """
    async with get_async_session_context() as db:
        service = OrderService(db)
        for name, address, books in SAMPLE_ORDERS:
            if await member_crud.member.get_by_name(db, name=name):
                print(f"이미 존재하는 회원입니다. 건너뜁니다: {name}")
                continue

            member = await member_crud.member.join(db, name=name, address=address)
            for book_name, price, stock, count in books:
                book = await item_crud.item.create(
                    db,
                    obj_in=item_schemas.BookCreate(name=book_name, price=price, stock_quantity=stock),
                )
                order_id = await service.place_order(member.id, book.id, count)
                print(f"주문 생성: order_id={order_id} member={name} item={book_name} count={count}")


async def _run(seed: bool) -> None:
    try:
        await create_db_and_tables()
        print("테이블 생성 완료.")
        if seed:
            await seed_sample_orders()
    finally:
        await engine.dispose()


@cli.command()
def main(
    seed: bool = typer.Option(
        False, '--seed', '-s',
        help="샘플 회원/상품/주문 데이터를 함께 저장합니다."
    ),
):
    """
    jpashop 데이터베이스 테이블을 생성합니다. (DATABASE_URL 설정 사용)
    """
    asyncio.run(_run(seed))


if __name__ == "__main__":
    cli()
