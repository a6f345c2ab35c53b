# app/domains/order/schemas.py

"""
'order' 도메인의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.

- 엔티티 모양 응답 (V1): SimpleOrderEntityRead, OrderEntityRead
- DTO 응답 (V2 이후): SimpleOrderDto, OrderDto, OrderItemDto
- 플랫 조회 결과 한 행 (V6): OrderFlatDto
"""

from datetime import datetime
from typing import List, Optional

from sqlmodel import SQLModel, Field

from app.domains.item.schemas import ItemRead
from app.domains.member.schemas import MemberRead
from app.domains.shared.models import Address
from .models import DeliveryStatus, OrderStatus


# =============================================================================
# 1. 주문/취소 요청과 응답
# =============================================================================
class OrderCreate(SQLModel):
    member_id: int = Field(..., description="주문 회원 ID")
    item_id: int = Field(..., description="주문 상품 ID")
    count: int = Field(..., gt=0, description="주문 수량")


class CreateOrderResponse(SQLModel):
    id: int


class CancelOrderResponse(SQLModel):
    id: int
    status: OrderStatus


class OrderSearch(SQLModel):
    """주문 검색 조건. 회원 이름은 부분 일치로 검색합니다."""
    member_name: Optional[str] = None
    order_status: Optional[OrderStatus] = None


# =============================================================================
# 2. 엔티티 모양 (V1)
# =============================================================================
class DeliveryRead(SQLModel):
    id: int
    address: Address
    status: DeliveryStatus


class OrderItemEntityRead(SQLModel):
    id: int
    item: ItemRead
    order_price: int
    count: int
    total_price: int


class SimpleOrderEntityRead(SQLModel):
    id: int
    member: MemberRead
    delivery: DeliveryRead
    order_date: datetime
    status: OrderStatus


class OrderEntityRead(SimpleOrderEntityRead):
    order_items: List[OrderItemEntityRead]
    total_price: int


# =============================================================================
# 3. DTO
# =============================================================================
class SimpleOrderDto(SQLModel):
    order_id: int
    name: str
    order_date: datetime
    order_status: OrderStatus
    address: Address


class OrderItemDto(SQLModel):
    item_name: str
    order_price: int
    count: int


class OrderDto(SimpleOrderDto):
    order_items: List[OrderItemDto] = []
    total_price: int = 0


class OrderFlatDto(SQLModel):
    """주문, 회원, 배송, 주문상품, 상품을 모두 조인한 한 행."""
    order_id: int
    name: str
    order_date: datetime
    order_status: OrderStatus
    address: Address
    item_name: str
    order_price: int
    count: int
