# app/domains/shared/__init__.py

"""
FastAPI 애플리케이션의 'shared' 도메인 패키지입니다.

여러 도메인에서 공통으로 사용하는 값 객체와 응답 래퍼를 정의합니다.

주요 서브모듈:
- `models.py`: Address 값 객체와, 주소를 펼쳐서 저장하는 공통 컬럼 믹스인.
- `schemas.py`: 컬렉션 응답을 감싸는 Result 래퍼.
"""

__title__ = "jpashop Shared Domain"
__description__ = "Shared value objects and response wrappers."
__version__ = "0.1.0"
__all__ = []
