# app/domains/item/schemas.py

"""
'item' 도메인의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.

상품 생성 요청은 dtype 값으로 종류를 구분하는 판별 유니온(ItemCreate)입니다.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field as PydanticField, ValidationInfo, field_validator
from sqlmodel import SQLModel, Field

from .models import ItemType


# =============================================================================
# 1. 상품 (Item) 스키마
# =============================================================================
class ItemBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=200)
    price: int = Field(..., ge=0)
    stock_quantity: int = Field(..., ge=0)


class BookCreate(ItemBase):
    dtype: Literal["BOOK"] = "BOOK"
    author: Optional[str] = Field(None, max_length=100)
    isbn: Optional[str] = Field(None, max_length=20)


class AlbumCreate(ItemBase):
    dtype: Literal["ALBUM"] = "ALBUM"
    artist: Optional[str] = Field(None, max_length=100)
    etc: Optional[str] = Field(None, max_length=200)


class MovieCreate(ItemBase):
    dtype: Literal["MOVIE"] = "MOVIE"
    director: Optional[str] = Field(None, max_length=100)
    actor: Optional[str] = Field(None, max_length=100)


ItemCreate = Annotated[
    Union[BookCreate, AlbumCreate, MovieCreate],
    PydanticField(discriminator="dtype"),
]


class ItemUpdate(SQLModel):
    """상품 수정. 요청에 포함된 필드만 변경합니다. 포함된 필드에 null은 허용하지 않습니다."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    price: Optional[int] = Field(None, ge=0)
    stock_quantity: Optional[int] = Field(None, ge=0)

    @field_validator("name", "price", "stock_quantity")
    @classmethod
    def reject_null(cls, value, info: ValidationInfo):
        if value is None:
            raise ValueError(f"{info.field_name} must not be null")
        return value


class ItemRead(SQLModel):
    id: int
    dtype: ItemType
    name: str
    price: int
    stock_quantity: int
    author: Optional[str] = None
    isbn: Optional[str] = None
    artist: Optional[str] = None
    etc: Optional[str] = None
    director: Optional[str] = None
    actor: Optional[str] = None


# =============================================================================
# 2. 카테고리 (Category) 스키마
# =============================================================================
class CategoryCreate(SQLModel):
    name: str = Field(..., min_length=1, max_length=100)
    parent_id: Optional[int] = None


class CategoryRead(SQLModel):
    id: int
    name: str
    parent_id: Optional[int] = None


class CategoryTree(CategoryRead):
    """하위 카테고리를 포함한 카테고리 트리 노드."""
    children: List["CategoryTree"] = []


CategoryTree.model_rebuild()
