# app/domains/member/__init__.py

"""
FastAPI 애플리케이션의 'member' 도메인 패키지입니다.

회원(Member)의 가입, 조회, 이름 변경을 담당합니다.
회원 주소(Address)는 값 객체로, 배송(Delivery) 생성 시 그대로 복사됩니다.

주요 서브모듈:
- `models.py`: members 테이블에 매핑되는 SQLModel 정의와 Address 값 객체.
- `schemas.py`: 요청/응답 DTO (엔티티 노출용 V1, DTO 응답용 V2).
- `crud.py`: 회원 조회 및 중복 가입 검증을 포함한 가입 로직.
- `routers.py`: /api/v1, /api/v2 회원 API 엔드포인트.
"""

__title__ = "jpashop Member Domain"
__description__ = "Manages shop members."
__version__ = "0.1.0"
__all__ = []
