# app/domains/shared/schemas.py

"""
여러 도메인이 공유하는 API 응답 스키마를 정의하는 모듈입니다.
"""

from typing import Generic, List, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Result(BaseModel, Generic[T]):
    """
    컬렉션 응답을 감싸는 래퍼입니다.
    리스트를 최상위로 바로 반환하지 않으므로, 이후 count 같은 필드를 추가해도
    API 스펙이 깨지지 않습니다.
    """
    data: List[T]
