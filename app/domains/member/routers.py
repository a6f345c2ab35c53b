# app/domains/member/routers.py

"""
'member' 도메인과 관련된 API 엔드포인트를 정의하는 모듈입니다.

- V1: 엔티티를 그대로 요청 바디/응답으로 사용합니다.
  엔티티가 바뀌면 API 스펙도 바뀌므로 권장하지 않습니다.
- V2: 요청/응답 전용 DTO를 사용하고, 컬렉션은 Result로 감쌉니다.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core import dependencies as deps
from app.domains.shared.schemas import Result
from . import crud as member_crud
from . import schemas as member_schemas

router = APIRouter(
    tags=["Member (회원)"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# V1: 엔티티 직접 노출
# =============================================================================
@router.get("/v1/members", response_model=List[member_schemas.MemberRead])
async def members_v1(db: AsyncSession = Depends(deps.get_db_session)):
    """회원 조회 V1: 엔티티의 모든 값이 그대로 노출됩니다."""
    members = await member_crud.member.find_all(db)
    return [member_schemas.MemberRead.model_validate(m) for m in members]


@router.post("/v1/members", response_model=member_schemas.CreateMemberResponse)
async def save_member_v1(
    member_in: member_schemas.MemberCreate,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """회원 등록 V1: 엔티티 모양의 바디를 그대로 받습니다."""
    member = await member_crud.member.join(db, name=member_in.name, address=member_in.address)
    return member_schemas.CreateMemberResponse(id=member.id)


# =============================================================================
# V2: 요청/응답 DTO
# =============================================================================
@router.get("/v2/members", response_model=Result[member_schemas.MemberDto])
async def members_v2(db: AsyncSession = Depends(deps.get_db_session)):
    """회원 조회 V2: 이름만 담은 DTO 목록을 Result로 감싸서 반환합니다."""
    members = await member_crud.member.find_all(db)
    return Result(data=[member_schemas.MemberDto(name=m.name) for m in members])


@router.post("/v2/members", response_model=member_schemas.CreateMemberResponse)
async def save_member_v2(
    request: member_schemas.CreateMemberRequest,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """회원 등록 V2: CreateMemberRequest를 바디로 받습니다."""
    member = await member_crud.member.join(db, name=request.name, address=request.address)
    return member_schemas.CreateMemberResponse(id=member.id)


@router.post("/v2/members/{member_id}", response_model=member_schemas.UpdateMemberResponse)
async def update_member_v2(
    member_id: int,
    request: member_schemas.UpdateMemberRequest,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    회원 이름 수정.
    부분 업데이트이므로 PUT 대신 POST를 사용합니다.
    수정(command)과 조회(query)를 분리합니다.
    """
    await member_crud.member.update_name(db, id=member_id, name=request.name)
    member = await member_crud.member.get_or_404(db, member_id)
    return member_schemas.UpdateMemberResponse(id=member.id, name=member.name)
