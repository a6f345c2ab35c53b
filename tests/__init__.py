# tests/__init__.py

"""
jpashop API의 테스트 스위트 패키지입니다.

- `conftest.py`: 테스트용 DB 엔진, 트랜잭션 롤백 세션, 테스트 클라이언트,
                 회원/상품/주문 데이터 픽스처를 정의합니다.
- `test_main.py`: 루트, 헬스 체크, 도메인 예외 응답 테스트.
- `domains/`: 회원, 상품, 주문 도메인별 테스트.
"""

__title__ = "jpashop API Tests"
__description__ = "Test suite for jpashop FastAPI application."
__version__ = "0.1.0"
__all__ = []
