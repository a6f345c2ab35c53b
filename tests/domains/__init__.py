# tests/domains/__init__.py

"""
도메인별 테스트 모듈 패키지입니다.

- `test_member.py`: 회원 가입, 중복 검증, V1/V2 회원 API.
- `test_item.py`: 재고 규칙, 상품 종류별 등록, 카테고리 계층.
- `test_order.py`: 주문/취소 규칙과 주문 API 시나리오.
- `test_order_query.py`: 주문 조회 전략(V1 ~ V6)의 결과 동등성과 쿼리 수.
"""

__title__ = "jpashop Domain Tests"
__description__ = "Tests for the member, item and order domains."
__version__ = "0.1.0"
__all__ = []
