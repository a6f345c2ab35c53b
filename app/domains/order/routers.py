# app/domains/order/routers.py

"""
'order' 도메인과 관련된 API 엔드포인트를 정의하는 모듈입니다.

- 주문/취소: /v1/orders, /v1/orders/{order_id}/cancel
- 간단 주문 조회 (회원, 배송만): /v1 ~ /v4/simple-orders
- 주문 조회 (주문상품, 상품 포함): /v1 ~ /v6/orders, /v3.1/orders
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.core import dependencies as deps
from app.domains.shared.schemas import Result
from . import schemas as order_schemas
from .services import OrderQueryService, OrderService

router = APIRouter(
    tags=["Order (주문)"],
    responses={404: {"description": "Not found"}},
)


def _search(
    member_name: Optional[str] = Query(None, description="회원 이름 (부분 일치)"),
    order_status: Optional[order_schemas.OrderStatus] = Query(None, description="주문 상태"),
) -> order_schemas.OrderSearch:
    return order_schemas.OrderSearch(member_name=member_name, order_status=order_status)


# =============================================================================
# 1. 주문 / 취소
# =============================================================================
@router.post(
    "/v1/orders",
    response_model=order_schemas.CreateOrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="상품 주문",
)
async def place_order(
    order_in: order_schemas.OrderCreate,
    service: OrderService = Depends(deps.get_order_service),
):
    order_id = await service.place_order(order_in.member_id, order_in.item_id, order_in.count)
    return order_schemas.CreateOrderResponse(id=order_id)


@router.post(
    "/v1/orders/{order_id}/cancel",
    response_model=order_schemas.CancelOrderResponse,
    summary="주문 취소",
)
async def cancel_order(order_id: int, service: OrderService = Depends(deps.get_order_service)):
    order = await service.cancel_order(order_id)
    return order_schemas.CancelOrderResponse(id=order.id, status=order.status)


@router.get(
    "/v1/members/{member_id}/orders",
    response_model=Result[order_schemas.SimpleOrderDto],
    summary="회원별 주문 목록",
)
async def member_orders(member_id: int, service: OrderService = Depends(deps.get_order_service)):
    return Result(data=await service.find_orders_by_member(member_id))


# =============================================================================
# 2. 간단 주문 조회 (ToOne 관계만)
# =============================================================================
@router.get("/v1/simple-orders", response_model=List[order_schemas.SimpleOrderEntityRead])
async def simple_orders_v1(
    search: order_schemas.OrderSearch = Depends(_search),
    service: OrderQueryService = Depends(deps.get_order_query_service),
):
    """V1. 엔티티 직접 노출."""
    return await service.simple_orders_v1(search)


@router.get("/v2/simple-orders", response_model=Result[order_schemas.SimpleOrderDto])
async def simple_orders_v2(
    search: order_schemas.OrderSearch = Depends(_search),
    service: OrderQueryService = Depends(deps.get_order_query_service),
):
    """V2. 엔티티를 DTO로 변환 (1 + 2N 쿼리)."""
    return Result(data=await service.simple_orders_v2(search))


@router.get("/v3/simple-orders", response_model=Result[order_schemas.SimpleOrderDto])
async def simple_orders_v3(service: OrderQueryService = Depends(deps.get_order_query_service)):
    """V3. 페치 조인으로 쿼리 1회."""
    return Result(data=await service.simple_orders_v3())


@router.get("/v4/simple-orders", response_model=Result[order_schemas.SimpleOrderDto])
async def simple_orders_v4(service: OrderQueryService = Depends(deps.get_order_query_service)):
    """V4. DTO로 바로 조회."""
    return Result(data=await service.simple_orders_v4())


# =============================================================================
# 3. 주문 조회 (컬렉션 포함)
# =============================================================================
@router.get("/v1/orders", response_model=List[order_schemas.OrderEntityRead])
async def orders_v1(
    search: order_schemas.OrderSearch = Depends(_search),
    service: OrderQueryService = Depends(deps.get_order_query_service),
):
    """V1. 엔티티 직접 노출."""
    return await service.orders_v1(search)


@router.get("/v2/orders", response_model=Result[order_schemas.OrderDto])
async def orders_v2(
    search: order_schemas.OrderSearch = Depends(_search),
    service: OrderQueryService = Depends(deps.get_order_query_service),
):
    """V2. 엔티티를 DTO로 변환 (1 + 3N + M 쿼리)."""
    return Result(data=await service.orders_v2(search))


@router.get("/v3/orders", response_model=Result[order_schemas.OrderDto])
async def orders_v3(service: OrderQueryService = Depends(deps.get_order_query_service)):
    """V3. 컬렉션 페치 조인. 페이징 불가."""
    return Result(data=await service.orders_v3())


@router.get("/v3.1/orders", response_model=Result[order_schemas.OrderDto])
async def orders_v3_page(
    offset: int = Query(0, ge=0),
    limit: int = Query(100, ge=1),
    service: OrderQueryService = Depends(deps.get_order_query_service),
):
    """V3.1. ToOne 페치 조인 + 페이징, 컬렉션은 IN 절 배치 로딩."""
    return Result(data=await service.orders_v3_1(offset=offset, limit=limit))


@router.get("/v4/orders", response_model=Result[order_schemas.OrderDto])
async def orders_v4(
    offset: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    service: OrderQueryService = Depends(deps.get_order_query_service),
):
    """V4. DTO 직접 조회, 주문마다 주문상품 쿼리 (1 + N)."""
    return Result(data=await service.orders_v4(offset=offset, limit=limit))


@router.get("/v5/orders", response_model=Result[order_schemas.OrderDto])
async def orders_v5(
    offset: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    service: OrderQueryService = Depends(deps.get_order_query_service),
):
    """V5. DTO 직접 조회, 주문상품은 IN 절 한 번."""
    return Result(data=await service.orders_v5(offset=offset, limit=limit))


@router.get("/v6/orders", response_model=Result[order_schemas.OrderDto])
async def orders_v6(service: OrderQueryService = Depends(deps.get_order_query_service)):
    """V6. 플랫 조회 1회 후 메모리에서 주문 단위로 묶음. 페이징 불가."""
    return Result(data=await service.orders_v6())
