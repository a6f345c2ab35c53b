# app/domains/order/services.py

"""
'order' 도메인의 서비스 계층입니다.

- OrderService: 주문, 주문 취소, 회원별 주문 조회 (트랜잭션 단위 비즈니스 로직)
- OrderQueryService: API 응답 모양에 맞춰 주문 애그리거트를 조회하는 전략들.
  전략마다 실행되는 쿼리 수, 행 중복, 페이징 가능 여부가 다릅니다.

  | 전략        | 쿼리 수 (주문 N, 주문상품 M) | 페이징 |
  |-------------|------------------------------|--------|
  | V1, V2      | 1 + 3N + M                   | O      |
  | V3          | 1                            | X      |
  | V3.1        | 1 + ceil(N / batch)          | O      |
  | V4          | 1 + N                        | O      |
  | V5          | 2                            | O      |
  | V6          | 1                            | X      |
"""

import functools
import logging
from collections import OrderedDict
from typing import List, Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.core.database import QueryCounter
from app.domains.item import crud as item_crud
from app.domains.member import crud as member_crud
from . import crud as order_crud
from . import query as order_query
from . import schemas as order_schemas
from .models import Delivery, Order, OrderItem

logger = logging.getLogger(__name__)


# =============================================================================
# 1. 주문 (command)
# =============================================================================
class OrderService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def place_order(self, member_id: int, item_id: int, count: int) -> int:
        """
        주문.
        회원 주소로 배송 정보를 만들고, 주문 당시 상품 가격으로 주문상품을 만들면서
        재고를 줄입니다. 주문을 저장하면 배송과 주문상품도 함께 저장됩니다.
        재고가 부족하면 아무것도 변경하지 않고 NotEnoughStockError가 발생합니다.
        """
        member = await member_crud.member.get_or_404(self.db, member_id)
        item = await item_crud.item.get_for_update(self.db, item_id)

        delivery = Delivery()
        delivery.set_address(member.address)

        order_item = OrderItem.create_order_item(item, item.price, count)
        order = Order.create_order(member, delivery, order_item)

        self.db.add(order)
        await self.db.commit()
        logger.info(
            "Order placed: id=%s member_id=%s item_id=%s count=%s",
            order.id, member_id, item_id, count,
        )
        return order.id

    async def cancel_order(self, order_id: int) -> Order:
        """
        주문 취소. 주문상품마다 재고를 원복합니다.
        주문 행과 상품 행을 잠근 뒤 최신 상태로 다시 읽어서 취소 규칙과 재고 원복을 적용합니다.
        """
        order = await order_crud.order.get_with_items(self.db, order_id, for_update=True)
        for order_item in order.order_items:
            await item_crud.item.get_for_update(self.db, order_item.item_id)
        order.cancel()
        await self.db.commit()
        logger.info("Order canceled: id=%s", order.id)
        return order

    async def find_orders_by_member(self, member_id: int) -> List[order_schemas.SimpleOrderDto]:
        await member_crud.member.get_or_404(self.db, member_id)
        orders = await order_crud.order.find_by_member(self.db, member_id=member_id)
        return [to_simple_order_dto(o) for o in orders]


# =============================================================================
# 2. 엔티티 -> DTO 변환
# =============================================================================
def to_simple_order_dto(order: Order) -> order_schemas.SimpleOrderDto:
    return order_schemas.SimpleOrderDto(
        order_id=order.id,
        name=order.member.name,
        order_date=order.order_date,
        order_status=order.status,
        address=order.delivery.address,
    )


def to_order_dto(order: Order) -> order_schemas.OrderDto:
    order_items = [
        order_schemas.OrderItemDto(
            item_name=order_item.item.name,
            order_price=order_item.order_price,
            count=order_item.count,
        )
        for order_item in order.order_items
    ]
    return order_schemas.OrderDto(
        order_id=order.id,
        name=order.member.name,
        order_date=order.order_date,
        order_status=order.status,
        address=order.delivery.address,
        order_items=order_items,
        total_price=order.total_price,
    )


def group_flat_rows(rows: List[order_schemas.OrderFlatDto]) -> List[order_schemas.OrderDto]:
    """
    플랫 행을 주문 id별로 묶습니다.
    같은 주문 안에서는 행 순서(주문상품 순서)를 유지하고, 결과는 주문 id 오름차순입니다.
    """
    grouped: "OrderedDict[int, order_schemas.OrderDto]" = OrderedDict()
    for row in rows:
        dto = grouped.get(row.order_id)
        if dto is None:
            dto = order_schemas.OrderDto(
                order_id=row.order_id,
                name=row.name,
                order_date=row.order_date,
                order_status=row.order_status,
                address=row.address,
            )
            grouped[row.order_id] = dto
        dto.order_items.append(
            order_schemas.OrderItemDto(
                item_name=row.item_name, order_price=row.order_price, count=row.count
            )
        )
        dto.total_price += row.order_price * row.count
    return [grouped[order_id] for order_id in sorted(grouped)]


# =============================================================================
# 3. 주문 조회 (query)
# =============================================================================
def _strategy(name: str):
    """
    조회 전략 실행 결과를 DEBUG 로그로 남깁니다. DEBUG_MODE에서는 실행된 쿼리 수도 함께 남깁니다.
    쿼리 수는 엔진 전체의 실행을 세므로, 동시에 처리 중인 다른 요청의 쿼리가 섞이면 근사치입니다.
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(self: "OrderQueryService", *args, **kwargs):
            if not settings.DEBUG_MODE:
                result = await func(self, *args, **kwargs)
                logger.debug("%s: %d orders", name, len(result))
                return result

            with QueryCounter(self.db.get_bind()) as counter:
                result = await func(self, *args, **kwargs)
            logger.debug("%s: %d orders, %d statements", name, len(result), counter.count)
            return result
        return wrapper
    return decorator


class OrderQueryService:
    def __init__(self, db: AsyncSession, batch_fetch_size: int = 100):
        self.db = db
        self.batch_fetch_size = batch_fetch_size

    async def _find_resolved(
        self, search: Optional[order_schemas.OrderSearch], *, with_items: bool
    ) -> List[Order]:
        orders = await order_crud.order.find_all_by_search(
            self.db,
            search=search or order_schemas.OrderSearch(),
            limit=settings.ORDER_SEARCH_LIMIT,
        )
        for order in orders:
            await order_crud.order.resolve_lazy(self.db, order, with_items=with_items)
        return orders

    # ---- 간단 주문 조회 (ToOne: 회원, 배송) ----
    @_strategy("simple-orders V1")
    async def simple_orders_v1(
        self, search: Optional[order_schemas.OrderSearch] = None
    ) -> List[order_schemas.SimpleOrderEntityRead]:
        """엔티티 직접 노출. 연관마다 쿼리가 나갑니다 (1 + 2N)."""
        orders = await self._find_resolved(search, with_items=False)
        return [order_schemas.SimpleOrderEntityRead.model_validate(o) for o in orders]

    @_strategy("simple-orders V2")
    async def simple_orders_v2(
        self, search: Optional[order_schemas.OrderSearch] = None
    ) -> List[order_schemas.SimpleOrderDto]:
        """엔티티를 DTO로 변환. 쿼리 수는 V1과 같습니다 (1 + 2N)."""
        orders = await self._find_resolved(search, with_items=False)
        return [to_simple_order_dto(o) for o in orders]

    @_strategy("simple-orders V3")
    async def simple_orders_v3(self) -> List[order_schemas.SimpleOrderDto]:
        """페치 조인. 쿼리 1회."""
        orders = await order_crud.order.find_all_with_member_delivery(self.db)
        return [to_simple_order_dto(o) for o in orders]

    @_strategy("simple-orders V4")
    async def simple_orders_v4(self) -> List[order_schemas.SimpleOrderDto]:
        """필요한 컬럼만 DTO로 바로 조회. 쿼리 1회."""
        return await order_query.find_order_simple_dtos(self.db)

    # ---- 주문 조회 (컬렉션: 주문상품, 상품 포함) ----
    @_strategy("orders V1")
    async def orders_v1(
        self, search: Optional[order_schemas.OrderSearch] = None
    ) -> List[order_schemas.OrderEntityRead]:
        orders = await self._find_resolved(search, with_items=True)
        return [order_schemas.OrderEntityRead.model_validate(o) for o in orders]

    @_strategy("orders V2")
    async def orders_v2(
        self, search: Optional[order_schemas.OrderSearch] = None
    ) -> List[order_schemas.OrderDto]:
        orders = await self._find_resolved(search, with_items=True)
        return [to_order_dto(o) for o in orders]

    @_strategy("orders V3")
    async def orders_v3(self) -> List[order_schemas.OrderDto]:
        """컬렉션까지 페치 조인. 쿼리 1회지만 페이징은 불가능합니다."""
        orders = await order_crud.order.find_all_with_item(self.db)
        return [to_order_dto(o) for o in orders]

    @_strategy("orders V3.1")
    async def orders_v3_1(self, offset: int = 0, limit: Optional[int] = 100) -> List[order_schemas.OrderDto]:
        """ToOne은 페치 조인 + 페이징, 컬렉션은 IN 절 배치 로딩."""
        orders = await order_crud.order.find_all_with_member_delivery(
            self.db, offset=offset, limit=limit
        )
        await order_crud.order.load_order_items_in_batches(
            self.db, orders, batch_size=self.batch_fetch_size
        )
        return [to_order_dto(o) for o in orders]

    @_strategy("orders V4")
    async def orders_v4(self, offset: int = 0, limit: Optional[int] = None) -> List[order_schemas.OrderDto]:
        return await order_query.find_order_query_dtos(self.db, offset=offset, limit=limit)

    @_strategy("orders V5")
    async def orders_v5(self, offset: int = 0, limit: Optional[int] = None) -> List[order_schemas.OrderDto]:
        return await order_query.find_all_by_dto_optimization(self.db, offset=offset, limit=limit)

    @_strategy("orders V6")
    async def orders_v6(self) -> List[order_schemas.OrderDto]:
        """플랫 조회 1회 후 메모리에서 주문 단위로 묶습니다. 페이징은 불가능합니다."""
        rows = await order_query.find_all_by_dto_flat(self.db)
        return group_flat_rows(rows)
