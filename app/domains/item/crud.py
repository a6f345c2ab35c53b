# app/domains/item/crud.py

"""
'item' 도메인의 CRUD(Create, Read, Update, Delete) 작업을 담당하는 모듈입니다.

- 상품 등록/수정/조회, 주문 시 재고 변경을 위한 잠금 조회(get_for_update).
- 카테고리 계층 관리(add_child)와 상품 연결(add_item).
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.crud_base import CRUDBase
from app.core.exceptions import (
    CategoryHierarchyError,
    CategoryNotFoundError,
    ItemNotFoundError,
)
from . import models as item_models
from . import schemas as item_schemas

logger = logging.getLogger(__name__)


# =============================================================================
# 1. items 테이블 CRUD
# =============================================================================
class CRUDItem(CRUDBase[item_models.Item, item_schemas.ItemBase, item_schemas.ItemUpdate]):
    not_found_error = ItemNotFoundError

    def __init__(self):
        super().__init__(item_models.Item)

    async def create(self, db: AsyncSession, *, obj_in: item_schemas.ItemBase) -> item_models.Item:
        """종류(dtype)별 생성 요청으로 상품을 등록합니다."""
        db_obj = self.model.model_validate(obj_in.model_dump())
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        logger.info("Item saved: id=%s dtype=%s name=%s", db_obj.id, db_obj.dtype, db_obj.name)
        return db_obj

    async def get_for_update(self, db: AsyncSession, id: int) -> item_models.Item:
        """
        재고를 변경하기 위해 상품 행을 잠그고(SELECT ... FOR UPDATE) 조회합니다.
        동시 주문에 의한 재고 갱신 손실(lost update)을 막습니다.
        SQLite에서는 FOR UPDATE가 무시됩니다.
        """
        statement = (
            select(self.model)
            .where(self.model.id == id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await db.execute(statement)
        db_obj = result.scalars().first()
        if db_obj is None:
            raise self.not_found_error(id)
        return db_obj


# CRUD 인스턴스 생성
item = CRUDItem()


# =============================================================================
# 2. categories 테이블 CRUD
# =============================================================================
class CRUDCategory(CRUDBase[item_models.Category, item_schemas.CategoryCreate, item_schemas.CategoryCreate]):
    not_found_error = CategoryNotFoundError

    def __init__(self):
        super().__init__(item_models.Category)

    async def create(
        self, db: AsyncSession, *, obj_in: item_schemas.CategoryCreate
    ) -> item_models.Category:
        """카테고리를 생성합니다. parent_id가 있으면 add_child로 부모에 연결합니다."""
        parent: Optional[item_models.Category] = None
        if obj_in.parent_id is not None:
            parent = await self.get_or_404(db, obj_in.parent_id)

        category = item_models.Category(name=obj_in.name)
        db.add(category)
        if parent is None:
            await db.commit()
            await db.refresh(category)
            return category

        await db.flush()
        return await self.add_child(db, parent=parent, child=category)

    async def _parent_index(self, db: AsyncSession) -> Dict[int, Optional[int]]:
        """id -> parent_id 맵."""
        result = await db.execute(select(self.model.id, self.model.parent_id))
        return {row.id: row.parent_id for row in result.all()}

    async def add_child(
        self,
        db: AsyncSession,
        *,
        parent: item_models.Category,
        child: item_models.Category,
    ) -> item_models.Category:
        """
        child를 parent의 하위 카테고리로 연결합니다.
        부모 쪽 자식 목록과 자식 쪽 부모 참조가 모두 parent_id 하나로 표현되므로,
        이 메서드의 한 번의 커밋으로 양쪽이 함께 바뀝니다.
        자기 자신이나 자신의 하위 카테고리를 부모로 지정할 수 없습니다.
        """
        if parent.id == child.id:
            raise CategoryHierarchyError("A category cannot be its own parent.")

        parents = await self._parent_index(db)
        ancestor_id = parent.id
        while ancestor_id is not None:
            if ancestor_id == child.id:
                raise CategoryHierarchyError(
                    f"Category {child.id} is an ancestor of category {parent.id}."
                )
            ancestor_id = parents.get(ancestor_id)

        child.parent_id = parent.id
        db.add(child)
        await db.commit()
        await db.refresh(child)
        return child

    async def get_tree(self, db: AsyncSession) -> List[item_schemas.CategoryTree]:
        """모든 카테고리를 읽어 id 인덱스 맵으로 트리를 구성합니다. 루트 목록을 반환합니다."""
        result = await db.execute(select(self.model).order_by(self.model.id))
        categories = result.scalars().all()

        nodes = {
            c.id: item_schemas.CategoryTree(id=c.id, name=c.name, parent_id=c.parent_id)
            for c in categories
        }
        roots: List[item_schemas.CategoryTree] = []
        for node in nodes.values():
            if node.parent_id is None or node.parent_id not in nodes:
                roots.append(node)
            else:
                nodes[node.parent_id].children.append(node)
        return roots

    async def add_item(
        self, db: AsyncSession, *, category_id: int, item_id: int
    ) -> List[item_models.Item]:
        """카테고리에 상품을 연결하고, 카테고리의 상품 목록을 반환합니다."""
        statement = (
            select(self.model)
            .where(self.model.id == category_id)
            .options(selectinload(self.model.items))
        )
        result = await db.execute(statement)
        category = result.scalars().first()
        if category is None:
            raise self.not_found_error(category_id)

        db_item = await item.get_or_404(db, item_id)
        if all(i.id != db_item.id for i in category.items):
            category.items.append(db_item)
            db.add(category)
            await db.commit()
        return list(category.items)

    async def get_items(self, db: AsyncSession, *, category_id: int) -> List[item_models.Item]:
        """카테고리에 연결된 상품 목록을 조회합니다."""
        await self.get_or_404(db, category_id)
        statement = (
            select(item_models.Item)
            .join(item_models.CategoryItem, item_models.CategoryItem.item_id == item_models.Item.id)
            .where(item_models.CategoryItem.category_id == category_id)
            .order_by(item_models.Item.id)
        )
        result = await db.execute(statement)
        return list(result.scalars().all())


# CRUD 인스턴스 생성
category = CRUDCategory()
