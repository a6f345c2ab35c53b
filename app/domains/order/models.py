# app/domains/order/models.py

"""
'order' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

Order가 애그리거트 루트이며 OrderItem, Delivery의 생성/저장/삭제는
Order를 통해서만 전파(cascade)됩니다. Member와 Item은 참조만 합니다.

모든 관계는 lazy="raise_on_sql"로 선언되어 있습니다.
명시적으로 로딩하지 않은 연관 객체에 접근하면 SQL을 실행하지 않고 예외가 발생합니다.
"""

from datetime import datetime, UTC
from enum import Enum
from typing import List, Optional

from sqlalchemy import TIMESTAMP
from sqlmodel import Column, Field, Relationship, SQLModel

from app.core.exceptions import (
    AlreadyDeliveredError,
    InvalidQuantityError,
    OrderAlreadyCanceledError,
)
from app.domains.item.models import Item
from app.domains.member.models import Member
from app.domains.shared.models import AddressColumns


class OrderStatus(str, Enum):
    """주문 상태 [ORDERED, CANCELED]"""
    ORDERED = "ORDERED"
    CANCELED = "CANCELED"


class DeliveryStatus(str, Enum):
    """배송 상태 [READY(준비), COMP(완료)]"""
    READY = "READY"
    COMP = "COMP"


# =============================================================================
# 1. deliveries 테이블 모델
# =============================================================================
class Delivery(AddressColumns, table=True):
    """배송 정보. 주문 시점 회원 주소를 복사해 둡니다."""
    __tablename__ = "deliveries"

    id: Optional[int] = Field(default=None, primary_key=True, description="배송 고유 ID")
    status: DeliveryStatus = Field(default=DeliveryStatus.READY, description="배송 상태")


# =============================================================================
# 2. order_items 테이블 모델
# =============================================================================
class OrderItem(SQLModel, table=True):
    """
    주문 상품 한 줄.
    order_price는 주문 당시 가격이며 이후 상품 가격이 바뀌어도 변하지 않습니다.
    """
    __tablename__ = "order_items"

    id: Optional[int] = Field(default=None, primary_key=True, description="주문상품 고유 ID")
    order_id: Optional[int] = Field(default=None, foreign_key="orders.id", index=True)
    item_id: int = Field(foreign_key="items.id", index=True)
    order_price: int = Field(description="주문 가격")
    count: int = Field(description="주문 수량")

    item: Optional[Item] = Relationship(sa_relationship_kwargs={"lazy": "raise_on_sql"})

    # ==생성 메서드== #
    @classmethod
    def create_order_item(cls, item: Item, order_price: int, count: int) -> "OrderItem":
        """주문 상품을 만들고 상품 재고를 count만큼 줄입니다."""
        if count <= 0:
            raise InvalidQuantityError(f"Order count must be positive. (count={count})")
        item.remove_stock(count)
        return cls(item=item, item_id=item.id, order_price=order_price, count=count)

    # ==비즈니스 로직== #
    def cancel(self) -> None:
        """재고 원복"""
        self.item.add_stock(self.count)

    @property
    def total_price(self) -> int:
        return self.order_price * self.count


# =============================================================================
# 3. orders 테이블 모델
# =============================================================================
class Order(SQLModel, table=True):
    """
    orders 테이블에 매핑되는 SQLModel ORM 클래스입니다.

    회원 -> 주문 방향의 컬렉션은 두지 않습니다. 회원의 주문 목록은
    member_id로 조회합니다 (crud.order.find_by_member).
    """
    __tablename__ = "orders"

    id: Optional[int] = Field(default=None, primary_key=True, description="주문 고유 ID")
    member_id: int = Field(foreign_key="members.id", index=True, description="주문 회원 ID")
    delivery_id: Optional[int] = Field(
        default=None, foreign_key="deliveries.id", unique=True, description="배송 ID"
    )
    order_date: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), nullable=False),
        description="주문 시간",
    )
    status: OrderStatus = Field(default=OrderStatus.ORDERED, index=True, description="주문 상태")

    member: Optional[Member] = Relationship(sa_relationship_kwargs={"lazy": "raise_on_sql"})
    delivery: Optional[Delivery] = Relationship(
        sa_relationship_kwargs={
            "lazy": "raise_on_sql",
            "cascade": "all",
            "single_parent": True,
        }
    )
    order_items: List[OrderItem] = Relationship(
        sa_relationship_kwargs={
            "lazy": "raise_on_sql",
            "cascade": "all, delete-orphan",
            "order_by": "OrderItem.id",
        }
    )

    # ==생성 메서드== #
    @classmethod
    def create_order(cls, member: Member, delivery: Delivery, *order_items: OrderItem) -> "Order":
        order = cls(member=member, member_id=member.id, delivery=delivery)
        order.order_items = list(order_items)
        order.status = OrderStatus.ORDERED
        order.order_date = datetime.now(UTC)
        return order

    # ==비즈니스 로직== #
    def cancel(self) -> None:
        """
        주문 취소.
        이미 취소된 주문이나 배송 완료된 주문은 취소할 수 없고, 상태는 바뀌지 않습니다.
        """
        if self.status == OrderStatus.CANCELED:
            raise OrderAlreadyCanceledError(f"Order is already canceled. (id={self.id})")
        if self.delivery.status == DeliveryStatus.COMP:
            raise AlreadyDeliveredError(f"Delivered orders cannot be canceled. (id={self.id})")

        self.status = OrderStatus.CANCELED
        for order_item in self.order_items:
            order_item.cancel()

    # ==조회 로직== #
    @property
    def total_price(self) -> int:
        """전체 주문 가격"""
        return sum(order_item.total_price for order_item in self.order_items)
