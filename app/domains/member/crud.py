# app/domains/member/crud.py

"""
'member' 도메인의 CRUD 작업을 담당하는 모듈입니다.

회원 가입 시 같은 이름의 회원이 이미 있으면 DuplicateMemberError를 발생시킵니다.
"""

import logging
from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.crud_base import CRUDBase
from app.core.exceptions import DuplicateMemberError, MemberNotFoundError
from app.domains.shared.models import Address
from . import models as member_models
from . import schemas as member_schemas

logger = logging.getLogger(__name__)


class CRUDMember(CRUDBase[member_models.Member, member_schemas.MemberCreate, member_schemas.UpdateMemberRequest]):
    not_found_error = MemberNotFoundError

    def __init__(self):
        super().__init__(member_models.Member)

    async def get_by_name(self, db: AsyncSession, *, name: str) -> List[member_models.Member]:
        """이름으로 회원 목록을 조회합니다."""
        statement = select(self.model).where(self.model.name == name)
        result = await db.execute(statement)
        return list(result.scalars().all())

    async def find_all(self, db: AsyncSession) -> List[member_models.Member]:
        statement = select(self.model).order_by(self.model.id)
        result = await db.execute(statement)
        return list(result.scalars().all())

    async def join(
        self, db: AsyncSession, *, name: str, address: Optional[Address] = None
    ) -> member_models.Member:
        """
        회원 가입.
        중복 회원을 검증한 뒤 저장하고, 저장된 회원을 반환합니다.
        """
        await self._validate_duplicate_member(db, name=name)

        member = member_models.Member(name=name)
        member.set_address(address)
        db.add(member)
        await db.commit()
        await db.refresh(member)
        logger.info("Member joined: id=%s name=%s", member.id, member.name)
        return member

    async def _validate_duplicate_member(self, db: AsyncSession, *, name: str) -> None:
        if await self.get_by_name(db, name=name):
            raise DuplicateMemberError(f"Member already exists. (name={name})")

    async def update_name(self, db: AsyncSession, *, id: int, name: str) -> member_models.Member:
        """
        회원 이름을 변경합니다.
        다른 회원이 이미 사용하는 이름으로는 변경할 수 없습니다.
        """
        member = await self.get_or_404(db, id)
        if member.name != name:
            await self._validate_duplicate_member(db, name=name)
        return await self.update(
            db, db_obj=member, obj_in=member_schemas.UpdateMemberRequest(name=name)
        )


# CRUD 인스턴스 생성
member = CRUDMember()
