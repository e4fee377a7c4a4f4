"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uv run uvicorn src.app.main:app --reload
- 프로덕션: uv run uvicorn src.app.main:app
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import yaml
from fastapi import FastAPI

from src.app.routes import snippets
from src.core.logging import configure_logging
from src.domain.errors import SnippetError
from src.snippets.config import SnippetConfig
from src.snippets.manager import SnippetManager

logger = logging.getLogger(__name__)

# =============================================================================
# Configuration
# =============================================================================


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드."""
    if config_path is None:
        # 프로젝트 루트의 default.yaml
        config_path = Path(__file__).parent.parent.parent / "default.yaml"

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] = yaml.safe_load(f) or {}
        return data


def create_manager(config: dict) -> SnippetManager:
    """설정으로 SnippetManager 구성."""
    return SnippetManager(SnippetConfig.from_dict(config.get("snippets")))


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: 스니펫 시작 순서 실행
    시작 순서 실패 시: 에러 로그 후 빈 store로 계속 서비스
    """
    # Startup
    manager: SnippetManager = app.state.snippet_manager
    try:
        app.state.load_summary = await manager.init()
    except SnippetError as e:
        logger.error(f"Snippet startup aborted: {e}")
        app.state.load_summary = None

    yield

    # Shutdown
    # (리소스 정리 필요 시 여기에 추가)


# =============================================================================
# App Factory
# =============================================================================


def create_app(config: dict | None = None) -> FastAPI:
    """
    FastAPI 앱 생성.

    Args:
        config: 설정 dict (None이면 default.yaml)
    """
    if config is None:
        config = load_config()
    configure_logging(config.get("logging"))

    application = FastAPI(
        title="Snippet Manager",
        description="디렉터리 기반 코드 스니펫 관리",
        version="0.1.0",
        lifespan=lifespan,
    )
    application.state.config = config
    application.state.snippet_manager = create_manager(config)

    # API 라우트
    application.include_router(
        snippets.api_router, prefix="/api/snippets", tags=["Snippets API"]
    )

    @application.get("/")
    async def root() -> dict[str, Any]:
        """엔드포인트 안내."""
        return {
            "message": "Snippet Manager",
            "endpoints": {
                "snippets": "/api/snippets",
                "health": "/health",
            },
        }

    @application.get("/health")
    async def health() -> dict[str, str]:
        """헬스 체크."""
        return {"status": "ok"}

    return application


app = create_app()


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
