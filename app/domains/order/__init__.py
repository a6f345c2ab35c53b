# app/domains/order/__init__.py

"""
FastAPI 애플리케이션의 'order' 도메인 패키지입니다.

주문(Order) 애그리거트는 배송(Delivery)과 주문상품(OrderItem)을 소유하며,
회원(Member)과 상품(Item)은 참조만 합니다.

이 패키지의 핵심은 주문 애그리거트를 API 응답으로 내보내는 여러 조회 전략(V1 ~ V6)입니다.
- V1/V2: 연관관계를 주문마다 하나씩 불러오는 방식 (1 + N 쿼리)
- V3: 컬렉션까지 페치 조인 (1 쿼리, 페이징 불가)
- V3.1: ToOne만 페치 조인 + 컬렉션은 IN 절 배치 조회 (페이징 가능)
- V4/V5: DTO 직접 조회 (루트 1 + 컬렉션 N / 루트 1 + 컬렉션 1)
- V6: 플랫 조회 1번 후 애플리케이션에서 그룹핑 (페이징 불가)

주요 서브모듈:
- `models.py`: orders, order_items, deliveries 테이블 모델과 주문/취소 도메인 로직.
- `schemas.py`: 엔티티 노출용 스키마와 조회 전략별 DTO.
- `crud.py`: 엔티티 조회 쿼리 (검색, 페치 조인, 배치 로딩).
- `query.py`: DTO 직접 조회 쿼리 (V4, V5, V6).
- `services.py`: 주문/취소 서비스와 조회 전략 서비스.
- `routers.py`: 주문 API 엔드포인트.
"""

__title__ = "jpashop Order Domain"
__description__ = "Order aggregate, order lifecycle and order query-shaping strategies."
__version__ = "0.1.0"
__all__ = []
