# app/__init__.py

"""
jpashop FastAPI 애플리케이션의 메인 패키지입니다.

FastAPI 애플리케이션의 진입점 (main.py)과
공통 설정, 데이터베이스 연결, 예외 정의를 담는 core 서브패키지,
그리고 회원/상품/주문 도메인을 대표하는 domains 서브패키지로 구성됩니다.
"""

APP_NAME = "jpashop FastAPI API"
APP_VERSION = "0.1.0"
API_PREFIX = "/api"  # 버전(v1, v2, v3.1 ...)은 각 라우터 경로에 포함됩니다.

__version__ = APP_VERSION
__title__ = APP_NAME
__description__ = "Shop sample API showing query-shaping strategies for order aggregates."
__license__ = "MIT"
__all__ = []
