# app/domains/item/__init__.py

"""
FastAPI 애플리케이션의 'item' 도메인 패키지입니다.

상품(Item)과 카테고리(Category)를 관리합니다.
상품은 단일 테이블에 dtype(BOOK/ALBUM/MOVIE) 구분 컬럼을 두는 방식으로 저장되며,
재고 증감(add_stock/remove_stock) 규칙을 엔티티가 직접 가지고 있습니다.
카테고리는 parent_id로 계층 구조를 이루고, 상품과 다대다로 연결됩니다.

주요 서브모듈:
- `models.py`: items, categories, category_items 테이블 모델.
- `schemas.py`: 상품 종류별 생성 요청(판별 유니온) 및 응답 DTO.
- `crud.py`: 상품 등록/수정, 카테고리 계층(add_child)과 상품 연결.
- `routers.py`: /api/v1/items, /api/v1/categories 엔드포인트.
"""

__title__ = "jpashop Item Domain"
__description__ = "Manages items, stock and categories."
__version__ = "0.1.0"
__all__ = []
