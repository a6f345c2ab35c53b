# app/core/exceptions.py

"""
도메인 예외를 정의하는 모듈입니다.

서비스/엔티티 계층은 비즈니스 규칙 위반 시 이 예외들을 발생시키고,
main.py에 등록된 예외 핸들러가 status_code에 맞는 HTTP 응답으로 변환합니다.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse


class ShopError(Exception):
    """모든 도메인 예외의 기본 클래스입니다."""
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# -----------------------------------------------------------------------------
# 404: 조회 실패
# -----------------------------------------------------------------------------
class EntityNotFoundError(ShopError):
    status_code = status.HTTP_404_NOT_FOUND
    entity_name = "Entity"

    def __init__(self, entity_id):
        super().__init__(f"{self.entity_name} not found. (id={entity_id})")
        self.entity_id = entity_id


class MemberNotFoundError(EntityNotFoundError):
    entity_name = "Member"


class ItemNotFoundError(EntityNotFoundError):
    entity_name = "Item"


class OrderNotFoundError(EntityNotFoundError):
    entity_name = "Order"


class CategoryNotFoundError(EntityNotFoundError):
    entity_name = "Category"


# -----------------------------------------------------------------------------
# 409: 상태 충돌
# -----------------------------------------------------------------------------
class DuplicateMemberError(ShopError):
    """같은 이름의 회원이 이미 존재합니다."""
    status_code = status.HTTP_409_CONFLICT


class NotEnoughStockError(ShopError):
    """재고가 부족합니다. 재고는 변경되지 않습니다."""
    status_code = status.HTTP_409_CONFLICT


class OrderAlreadyCanceledError(ShopError):
    status_code = status.HTTP_409_CONFLICT


class AlreadyDeliveredError(ShopError):
    """배송 완료된 주문은 취소할 수 없습니다."""
    status_code = status.HTTP_409_CONFLICT


# -----------------------------------------------------------------------------
# 400: 잘못된 요청 값
# -----------------------------------------------------------------------------
class InvalidQuantityError(ShopError):
    status_code = status.HTTP_400_BAD_REQUEST


class CategoryHierarchyError(ShopError):
    status_code = status.HTTP_400_BAD_REQUEST


async def shop_error_handler(request: Request, exc: ShopError) -> JSONResponse:
    """ShopError를 {"detail": message} 형태의 JSON 응답으로 변환합니다."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
