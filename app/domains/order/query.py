# app/domains/order/query.py

"""
화면(API 응답)에 맞춘 조회 전용 리포지토리입니다.

엔티티를 거치지 않고 필요한 컬럼만 SELECT 해서 DTO로 바로 변환합니다.
엔티티 조회(crud.py)와 분리해 두어 API 스펙 변경이 엔티티 쪽으로 번지지 않게 합니다.
"""

from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.domains.item.models import Item
from app.domains.member.models import Member
from app.domains.shared.models import Address
from .models import Delivery, Order, OrderItem
from .schemas import OrderDto, OrderFlatDto, OrderItemDto, SimpleOrderDto


def _root_statement():
    """주문 + 회원 + 배송 (ToOne 조인, 주문당 한 행)"""
    return (
        select(
            Order.id,
            Member.name,
            Order.order_date,
            Order.status,
            Delivery.city,
            Delivery.street,
            Delivery.zipcode,
        )
        .join(Member, Member.id == Order.member_id)
        .join(Delivery, Delivery.id == Order.delivery_id)
        .order_by(Order.id)
    )


def _item_statement():
    return (
        select(
            OrderItem.order_id,
            Item.name.label("item_name"),
            OrderItem.order_price,
            OrderItem.count.label("quantity"),
        )
        .join(Item, Item.id == OrderItem.item_id)
    )


def _address(row) -> Address:
    return Address(city=row.city, street=row.street, zipcode=row.zipcode)


def _item_dto(row) -> OrderItemDto:
    return OrderItemDto(item_name=row.item_name, order_price=row.order_price, count=row.quantity)


def _order_dto(row, order_items: List[OrderItemDto]) -> OrderDto:
    return OrderDto(
        order_id=row.id,
        name=row.name,
        order_date=row.order_date,
        order_status=row.status,
        address=_address(row),
        order_items=order_items,
        total_price=sum(i.order_price * i.count for i in order_items),
    )


async def _find_roots(db: AsyncSession, offset: int, limit: Optional[int]) -> Sequence:
    result = await db.execute(_root_statement().offset(offset).limit(limit))
    return result.all()


async def find_order_simple_dtos(db: AsyncSession) -> List[SimpleOrderDto]:
    """간단 주문 조회를 DTO로 바로 가져옵니다. 쿼리 1회."""
    result = await db.execute(_root_statement())
    return [
        SimpleOrderDto(
            order_id=row.id,
            name=row.name,
            order_date=row.order_date,
            order_status=row.status,
            address=_address(row),
        )
        for row in result.all()
    ]


async def find_order_items(db: AsyncSession, order_id: int) -> List[OrderItemDto]:
    statement = _item_statement().where(OrderItem.order_id == order_id).order_by(OrderItem.id)
    result = await db.execute(statement)
    return [_item_dto(row) for row in result.all()]


async def find_order_query_dtos(
    db: AsyncSession, *, offset: int = 0, limit: Optional[int] = None
) -> List[OrderDto]:
    """
    루트 쿼리 1회 + 주문마다 주문상품 쿼리 1회 (1 + N).
    루트 쿼리에는 ToOne 관계만 조인하므로 페이징이 가능합니다.
    """
    roots = await _find_roots(db, offset, limit)
    return [_order_dto(row, await find_order_items(db, row.id)) for row in roots]


async def find_all_by_dto_optimization(
    db: AsyncSession, *, offset: int = 0, limit: Optional[int] = None
) -> List[OrderDto]:
    """
    루트 쿼리 1회 + 모든 주문의 주문상품을 IN 절 쿼리 1회로 가져와서
    메모리에서 주문 id별로 나눠 담습니다.
    """
    roots = await _find_roots(db, offset, limit)
    if not roots:
        return []

    order_ids = [row.id for row in roots]
    statement = (
        _item_statement()
        .where(OrderItem.order_id.in_(order_ids))
        .order_by(OrderItem.order_id, OrderItem.id)
    )
    result = await db.execute(statement)

    item_map: Dict[int, List[OrderItemDto]] = defaultdict(list)
    for row in result.all():
        item_map[row.order_id].append(_item_dto(row))

    return [_order_dto(row, item_map.get(row.id, [])) for row in roots]


async def find_all_by_dto_flat(db: AsyncSession) -> List[OrderFlatDto]:
    """주문, 회원, 배송, 주문상품, 상품을 모두 조인한 플랫 행. 쿼리 1회, 주문은 주문상품 수만큼 중복됩니다."""
    statement = (
        select(
            Order.id,
            Member.name,
            Order.order_date,
            Order.status,
            Delivery.city,
            Delivery.street,
            Delivery.zipcode,
            Item.name.label("item_name"),
            OrderItem.order_price,
            OrderItem.count.label("quantity"),
        )
        .join(Member, Member.id == Order.member_id)
        .join(Delivery, Delivery.id == Order.delivery_id)
        # 내부 조인: 주문은 주문상품을 최소 1건 가진 채로만 생성된다.
        .join(OrderItem, OrderItem.order_id == Order.id)
        .join(Item, Item.id == OrderItem.item_id)
        .order_by(Order.id, OrderItem.id)
    )
    result = await db.execute(statement)
    return [
        OrderFlatDto(
            order_id=row.id,
            name=row.name,
            order_date=row.order_date,
            order_status=row.status,
            address=_address(row),
            item_name=row.item_name,
            order_price=row.order_price,
            count=row.quantity,
        )
        for row in result.all()
    ]
