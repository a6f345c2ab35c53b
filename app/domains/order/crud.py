# app/domains/order/crud.py

"""
'order' 도메인의 엔티티 조회를 담당하는 모듈입니다.

관계가 모두 lazy="raise_on_sql"이므로 연관 객체는 여기서 명시적으로 로딩합니다.
- resolve_lazy: 연관마다 개별 쿼리 (지연 로딩과 같은 N+1 패턴)
- find_all_with_member_delivery: ToOne 관계만 페치 조인 (페이징 가능)
- find_all_with_item: 컬렉션까지 페치 조인 (행이 늘어나므로 페이징 불가)
- load_order_items_in_batches: 컬렉션을 IN 절로 묶어서 로딩
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.orm import joinedload, selectinload
from sqlalchemy.orm.attributes import set_committed_value
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.crud_base import CRUDBase
from app.core.exceptions import OrderNotFoundError
from app.domains.item.models import Item
from app.domains.member.models import Member
from . import models as order_models
from . import schemas as order_schemas

logger = logging.getLogger(__name__)

Order = order_models.Order
OrderItem = order_models.OrderItem
Delivery = order_models.Delivery


class CRUDOrder(CRUDBase[order_models.Order, order_schemas.OrderCreate, order_schemas.OrderCreate]):
    not_found_error = OrderNotFoundError

    def __init__(self):
        super().__init__(Order)

    def with_items_statement(self, order_id: int, *, for_update: bool = False):
        """
        배송, 주문상품, 상품을 함께 로딩하는 단건 조회문.
        for_update이면 주문 행을 잠급니다(SELECT ... FOR UPDATE OF orders).
        배송은 외부 조인이므로 잠금 대상을 orders 테이블로 한정합니다.
        """
        statement = (
            select(Order)
            .where(Order.id == order_id)
            .options(
                joinedload(Order.delivery),
                selectinload(Order.order_items).joinedload(OrderItem.item),
            )
            .execution_options(populate_existing=True)
        )
        if for_update:
            statement = statement.with_for_update(of=Order)
        return statement

    async def get_with_items(
        self, db: AsyncSession, order_id: int, *, for_update: bool = False
    ) -> order_models.Order:
        """취소 처리에 필요한 배송, 주문상품, 상품을 함께 로딩합니다."""
        result = await db.execute(self.with_items_statement(order_id, for_update=for_update))
        order = result.scalars().first()
        if order is None:
            raise self.not_found_error(order_id)
        return order

    async def find_all_by_search(
        self,
        db: AsyncSession,
        *,
        search: order_schemas.OrderSearch,
        limit: int,
    ) -> List[order_models.Order]:
        """
        검색 조건으로 주문을 조회합니다. 연관 객체는 로딩하지 않습니다.
        회원 이름은 부분 일치, 주문 상태는 일치 조건입니다.
        """
        statement = select(Order)
        if search.member_name:
            statement = statement.join(Member, Member.id == Order.member_id).where(
                Member.name.contains(search.member_name)
            )
        if search.order_status is not None:
            statement = statement.where(Order.status == search.order_status)
        statement = statement.order_by(Order.id).limit(limit)

        result = await db.execute(statement)
        return list(result.scalars().all())

    async def resolve_lazy(
        self, db: AsyncSession, order: order_models.Order, *, with_items: bool
    ) -> order_models.Order:
        """
        지연 로딩이 했을 일을 연관마다 한 번씩 쿼리로 수행합니다.
        회원 1회, 배송 1회, (with_items이면) 주문상품 1회, 상품은 주문상품마다 1회.
        """
        member = (await db.execute(select(Member).where(Member.id == order.member_id))).scalars().one()
        set_committed_value(order, "member", member)

        delivery = (await db.execute(select(Delivery).where(Delivery.id == order.delivery_id))).scalars().one()
        set_committed_value(order, "delivery", delivery)

        if with_items:
            statement = select(OrderItem).where(OrderItem.order_id == order.id).order_by(OrderItem.id)
            order_items = list((await db.execute(statement)).scalars().all())
            for order_item in order_items:
                item = (await db.execute(select(Item).where(Item.id == order_item.item_id))).scalars().one()
                set_committed_value(order_item, "item", item)
            set_committed_value(order, "order_items", order_items)
        return order

    async def find_all_with_member_delivery(
        self, db: AsyncSession, *, offset: int = 0, limit: Optional[int] = None
    ) -> List[order_models.Order]:
        """ToOne 관계(회원, 배송)만 조인해서 가져옵니다. 행이 늘어나지 않으므로 페이징이 가능합니다."""
        statement = (
            select(Order)
            .options(joinedload(Order.member), joinedload(Order.delivery))
            .order_by(Order.id)
            .offset(offset)
            .limit(limit)
        )
        result = await db.execute(statement)
        return list(result.scalars().all())

    async def find_all_with_item(self, db: AsyncSession) -> List[order_models.Order]:
        """
        회원, 배송, 주문상품, 상품을 한 번에 조인해서 가져옵니다.
        주문 한 건이 주문상품 수만큼 행으로 늘어나므로 unique()로 중복을 제거합니다.
        """
        statement = (
            select(Order)
            .options(
                joinedload(Order.member),
                joinedload(Order.delivery),
                joinedload(Order.order_items).joinedload(OrderItem.item),
            )
            .order_by(Order.id)
        )
        result = await db.execute(statement)
        return list(result.unique().scalars().all())

    async def count_rows_with_item(self, db: AsyncSession) -> int:
        """find_all_with_item 조인이 중복 제거 전에 만드는 행 수."""
        statement = (
            select(func.count())
            .select_from(Order)
            .join(OrderItem, OrderItem.order_id == Order.id)
        )
        result = await db.execute(statement)
        return result.scalar_one()

    async def load_order_items_in_batches(
        self,
        db: AsyncSession,
        orders: Sequence[order_models.Order],
        *,
        batch_size: int,
    ) -> None:
        """주문 id를 batch_size개씩 IN 절로 묶어서 주문상품(과 상품)을 로딩합니다."""
        order_ids = [order.id for order in orders]
        grouped: Dict[int, List[order_models.OrderItem]] = defaultdict(list)

        for start in range(0, len(order_ids), batch_size):
            chunk = order_ids[start:start + batch_size]
            statement = (
                select(OrderItem)
                .options(joinedload(OrderItem.item))
                .where(OrderItem.order_id.in_(chunk))
                .order_by(OrderItem.order_id, OrderItem.id)
            )
            result = await db.execute(statement)
            for order_item in result.scalars().all():
                grouped[order_item.order_id].append(order_item)

        for order in orders:
            set_committed_value(order, "order_items", grouped.get(order.id, []))

    async def find_by_member(self, db: AsyncSession, *, member_id: int) -> List[order_models.Order]:
        """회원의 주문 목록 (member_id 역참조)."""
        statement = (
            select(Order)
            .where(Order.member_id == member_id)
            .options(joinedload(Order.member), joinedload(Order.delivery))
            .order_by(Order.id)
        )
        result = await db.execute(statement)
        return list(result.scalars().all())


# CRUD 인스턴스 생성
order = CRUDOrder()
