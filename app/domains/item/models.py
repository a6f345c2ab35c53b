# app/domains/item/models.py

"""
'item' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

상품은 종류(BOOK/ALBUM/MOVIE)와 상관없이 items 한 테이블에 저장하고,
dtype 컬럼으로 종류를 구분합니다. 종류별 컬럼은 nullable입니다.
재고 규칙(stock_quantity >= 0)은 엔티티 메서드가 보장합니다.
"""

from enum import Enum
from typing import List, Optional

from sqlmodel import Field, Relationship, SQLModel

from app.core.exceptions import InvalidQuantityError, NotEnoughStockError


class ItemType(str, Enum):
    """상품 종류 구분값 (dtype)."""
    BOOK = "BOOK"
    ALBUM = "ALBUM"
    MOVIE = "MOVIE"


# =============================================================================
# 1. items 테이블 모델
# =============================================================================
class Item(SQLModel, table=True):
    """
    items 테이블에 매핑되는 SQLModel ORM 클래스입니다.
    카테고리와의 다대다 관계는 Category.items 쪽에서만 관리합니다.
    """
    __tablename__ = "items"

    id: Optional[int] = Field(default=None, primary_key=True, description="상품 고유 ID")
    dtype: ItemType = Field(index=True, description="상품 종류 구분값")
    name: str = Field(max_length=200, description="상품명")
    price: int = Field(default=0, description="현재 판매 가격")
    stock_quantity: int = Field(default=0, description="재고 수량")

    # BOOK
    author: Optional[str] = Field(default=None, max_length=100)
    isbn: Optional[str] = Field(default=None, max_length=20)
    # ALBUM
    artist: Optional[str] = Field(default=None, max_length=100)
    etc: Optional[str] = Field(default=None, max_length=200)
    # MOVIE
    director: Optional[str] = Field(default=None, max_length=100)
    actor: Optional[str] = Field(default=None, max_length=100)

    # ==비즈니스 로직== #
    def add_stock(self, quantity: int) -> None:
        """재고 증가"""
        if quantity <= 0:
            raise InvalidQuantityError(f"Stock change must be positive. (quantity={quantity})")
        self.stock_quantity += quantity

    def remove_stock(self, quantity: int) -> None:
        """
        재고 감소.
        남은 재고가 음수가 되면 NotEnoughStockError를 발생시키고 재고는 그대로 둡니다.
        """
        if quantity <= 0:
            raise InvalidQuantityError(f"Stock change must be positive. (quantity={quantity})")
        rest_stock = self.stock_quantity - quantity
        if rest_stock < 0:
            raise NotEnoughStockError(
                f"Need more stock. (item_id={self.id}, requested={quantity}, available={self.stock_quantity})"
            )
        self.stock_quantity = rest_stock


# =============================================================================
# 2. category_items 테이블 모델 (다대다 연결 테이블)
# =============================================================================
class CategoryItem(SQLModel, table=True):
    """Category와 Item의 다대다 관계를 위한 연결 테이블 모델."""
    __tablename__ = "category_items"

    category_id: int = Field(foreign_key="categories.id", primary_key=True)
    item_id: int = Field(foreign_key="items.id", primary_key=True)


# =============================================================================
# 3. categories 테이블 모델
# =============================================================================
class Category(SQLModel, table=True):
    """
    categories 테이블에 매핑되는 SQLModel ORM 클래스입니다.

    부모 참조(parent_id)만 저장합니다. 자식 목록은 매핑된 컬렉션이 아니라
    crud.category.get_tree()가 id 인덱스 맵으로 다시 구성합니다.
    """
    __tablename__ = "categories"

    id: Optional[int] = Field(default=None, primary_key=True, description="카테고리 고유 ID")
    name: str = Field(max_length=100, description="카테고리명")
    parent_id: Optional[int] = Field(default=None, foreign_key="categories.id", index=True, description="상위 카테고리 ID")

    items: List[Item] = Relationship(
        link_model=CategoryItem,
        sa_relationship_kwargs={"lazy": "raise_on_sql", "order_by": "Item.id"},
    )
