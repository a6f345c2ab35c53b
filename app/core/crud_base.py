# app/core/crud_base.py

"""
공통 CRUD(Create, Read, Update, Delete) 작업을 위한 기본 클래스 모듈입니다.
모든 메서드는 비동기(async) 세션을 사용합니다.
생성은 도메인마다 규칙이 달라서 각 CRUD 클래스(join, create 등)가 직접 구현합니다.
"""

from typing import Generic, List, Type, TypeVar, Any

from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession
from pydantic import BaseModel

from app.core.exceptions import EntityNotFoundError

ModelType = TypeVar("ModelType", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    모든 CRUD 작업에 대한 기본 클래스를 정의합니다.
    `not_found_error`는 get_or_404에서 조회 실패 시 발생시킬 도메인 예외입니다.
    """
    not_found_error: Type[EntityNotFoundError] = EntityNotFoundError

    def __init__(self, model: Type[ModelType]):
        self.model = model

    async def get_or_404(self, db: AsyncSession, id: Any) -> ModelType:
        """ID로 조회하고, 없으면 not_found_error를 발생시킵니다."""
        db_obj = await db.get(self.model, id)
        if db_obj is None:
            raise self.not_found_error(id)
        return db_obj

    async def get_multi(
        self, db: AsyncSession, *, skip: int = 0, limit: int = 100
    ) -> List[ModelType]:
        """여러 레코드를 ID 오름차순으로 조회합니다."""
        query = select(self.model).order_by(self.model.id).offset(skip).limit(limit)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def update(
        self, db: AsyncSession, *, db_obj: ModelType, obj_in: UpdateSchemaType
    ) -> ModelType:
        """기존 레코드를 업데이트합니다. 요청에 포함된 필드만 변경합니다."""
        update_data = obj_in.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            setattr(db_obj, key, value)

        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj
