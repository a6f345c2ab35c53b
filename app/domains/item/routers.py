# app/domains/item/routers.py

"""
'item' 도메인(상품, 카테고리)과 관련된 API 엔드포인트를 정의하는 모듈입니다.
"""

from typing import List

from fastapi import APIRouter, Body, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core import dependencies as deps
from app.domains.shared.schemas import Result
from . import crud as item_crud
from . import schemas as item_schemas

router = APIRouter(
    tags=["Item (상품)"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. 상품 (Item) 엔드포인트
# =============================================================================
@router.post(
    "/v1/items",
    response_model=item_schemas.ItemRead,
    status_code=status.HTTP_201_CREATED,
    summary="상품 등록",
)
async def create_item(
    item_in: item_schemas.ItemCreate = Body(...),
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    새로운 상품을 등록합니다.
    `dtype` 값(BOOK/ALBUM/MOVIE)에 따라 종류별 필드를 받습니다.
    """
    item = await item_crud.item.create(db, obj_in=item_in)
    return item_schemas.ItemRead.model_validate(item)


@router.get("/v1/items", response_model=Result[item_schemas.ItemRead], summary="상품 목록 조회")
async def read_items(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1),
    db: AsyncSession = Depends(deps.get_db_session),
):
    items = await item_crud.item.get_multi(db, skip=skip, limit=limit)
    return Result(data=[item_schemas.ItemRead.model_validate(i) for i in items])


@router.get("/v1/items/{item_id}", response_model=item_schemas.ItemRead, summary="상품 단건 조회")
async def read_item(item_id: int, db: AsyncSession = Depends(deps.get_db_session)):
    item = await item_crud.item.get_or_404(db, item_id)
    return item_schemas.ItemRead.model_validate(item)


@router.post("/v1/items/{item_id}", response_model=item_schemas.ItemRead, summary="상품 수정")
async def update_item(
    item_id: int,
    item_in: item_schemas.ItemUpdate,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """상품명, 가격, 재고 중 요청에 포함된 값만 변경합니다."""
    item = await item_crud.item.get_or_404(db, item_id)
    item = await item_crud.item.update(db, db_obj=item, obj_in=item_in)
    return item_schemas.ItemRead.model_validate(item)


# =============================================================================
# 2. 카테고리 (Category) 엔드포인트
# =============================================================================
@router.post(
    "/v1/categories",
    response_model=item_schemas.CategoryRead,
    status_code=status.HTTP_201_CREATED,
    summary="카테고리 생성",
)
async def create_category(
    category_in: item_schemas.CategoryCreate,
    db: AsyncSession = Depends(deps.get_db_session),
):
    category = await item_crud.category.create(db, obj_in=category_in)
    return item_schemas.CategoryRead.model_validate(category)


@router.get("/v1/categories", response_model=List[item_schemas.CategoryTree], summary="카테고리 트리 조회")
async def read_category_tree(db: AsyncSession = Depends(deps.get_db_session)):
    """최상위 카테고리 목록을 하위 카테고리와 함께 반환합니다."""
    return await item_crud.category.get_tree(db)


@router.post(
    "/v1/categories/{category_id}/children/{child_id}",
    response_model=item_schemas.CategoryRead,
    summary="하위 카테고리 연결",
)
async def add_child_category(
    category_id: int,
    child_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
):
    parent = await item_crud.category.get_or_404(db, category_id)
    child = await item_crud.category.get_or_404(db, child_id)
    child = await item_crud.category.add_child(db, parent=parent, child=child)
    return item_schemas.CategoryRead.model_validate(child)


@router.post(
    "/v1/categories/{category_id}/items/{item_id}",
    response_model=Result[item_schemas.ItemRead],
    summary="카테고리에 상품 연결",
)
async def add_category_item(
    category_id: int,
    item_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
):
    items = await item_crud.category.add_item(db, category_id=category_id, item_id=item_id)
    return Result(data=[item_schemas.ItemRead.model_validate(i) for i in items])


@router.get(
    "/v1/categories/{category_id}/items",
    response_model=Result[item_schemas.ItemRead],
    summary="카테고리의 상품 목록 조회",
)
async def read_category_items(category_id: int, db: AsyncSession = Depends(deps.get_db_session)):
    items = await item_crud.category.get_items(db, category_id=category_id)
    return Result(data=[item_schemas.ItemRead.model_validate(i) for i in items])
