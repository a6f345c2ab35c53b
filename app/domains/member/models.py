# app/domains/member/models.py

"""
'member' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.
"""

from typing import Optional
from sqlmodel import Field

from app.domains.shared.models import AddressColumns


# =============================================================================
# members 테이블 모델
# =============================================================================
class Member(AddressColumns, table=True):
    """
    members 테이블에 매핑되는 SQLModel ORM 클래스입니다.

    회원의 주문 목록은 컬렉션으로 매핑하지 않고 orders.member_id로 조회합니다.
    주소는 city/street/zipcode 컬럼으로 저장되며 `address` 속성으로 읽습니다.
    """
    __tablename__ = "members"

    id: Optional[int] = Field(default=None, primary_key=True, description="회원 고유 ID")
    name: str = Field(max_length=100, index=True, description="회원 이름")
