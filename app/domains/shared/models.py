# app/domains/shared/models.py

"""
여러 도메인이 공유하는 값 객체를 정의하는 모듈입니다.

Address는 별도 테이블이 없는 값 객체로, members/deliveries 테이블에
city, street, zipcode 세 컬럼으로 펼쳐서 저장됩니다.
"""

from typing import Optional
from sqlmodel import Field, SQLModel


class Address(SQLModel):
    """주소 값 객체. 테이블에 매핑되지 않습니다."""
    city: Optional[str] = Field(default=None, max_length=100, description="도시")
    street: Optional[str] = Field(default=None, max_length=200, description="거리")
    zipcode: Optional[str] = Field(default=None, max_length=20, description="우편번호")


class AddressColumns(SQLModel):
    """
    Address를 펼쳐서 저장하는 테이블들의 공통 컬럼입니다.
    (members, deliveries)
    """
    city: Optional[str] = Field(default=None, max_length=100)
    street: Optional[str] = Field(default=None, max_length=200)
    zipcode: Optional[str] = Field(default=None, max_length=20)

    @property
    def address(self) -> Address:
        return Address(city=self.city, street=self.street, zipcode=self.zipcode)

    def set_address(self, address: Optional[Address]) -> None:
        # 값 객체는 통째로 교체합니다.
        address = address or Address()
        self.city = address.city
        self.street = address.street
        self.zipcode = address.zipcode
