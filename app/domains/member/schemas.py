# app/domains/member/schemas.py

"""
'member' 도메인의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.

- V1: 엔티티 모양 그대로 요청/응답 (MemberCreate, MemberRead)
- V2: API 스펙에 맞춘 별도 DTO (CreateMemberRequest, MemberDto 등)
"""

from typing import Optional

from sqlmodel import SQLModel, Field

from app.domains.shared.models import Address


# =============================================================================
# V1: 엔티티 모양
# =============================================================================
class MemberCreate(SQLModel):
    name: str = Field(..., min_length=1, max_length=100)
    address: Optional[Address] = None


class MemberRead(SQLModel):
    id: int
    name: str
    address: Address


# =============================================================================
# V2: 요청/응답 DTO
# =============================================================================
class CreateMemberRequest(SQLModel):
    name: str = Field(..., min_length=1, max_length=100, description="회원 이름을 입력해 주세요.")
    address: Optional[Address] = None


class CreateMemberResponse(SQLModel):
    id: int


class UpdateMemberRequest(SQLModel):
    name: str = Field(..., min_length=1, max_length=100, description="회원 이름을 입력해 주세요.")


class UpdateMemberResponse(SQLModel):
    id: int
    name: str


class MemberDto(SQLModel):
    name: str
