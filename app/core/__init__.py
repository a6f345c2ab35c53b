# app/core/__init__.py

"""
FastAPI 애플리케이션의 핵심 구성 요소 패키지입니다.

- `config.py`: 애플리케이션의 설정 및 환경 변수 관리 (Pydantic Settings).
- `database.py`: 데이터베이스 엔진, 세션(트랜잭션 경계) 관리, SQL 실행 횟수 측정.
- `exceptions.py`: 도메인 예외와 HTTP 상태 코드 매핑.
- `crud_base.py`: 모든 도메인 CRUD 클래스의 공통 기반.
- `dependencies.py`: FastAPI 의존성 주입에서 사용될 공통 의존성 함수들.
"""

__title__ = "jpashop Core"
__description__ = "Core components for jpashop FastAPI application."
__version__ = "0.1.0"
__all__ = []
