"""
Snippets Routes: 스니펫 관리 API.

- GET    /api/snippets?q=           검색 (q 없으면 전체)
- POST   /api/snippets              생성
- GET    /api/snippets/{id}         조회
- PUT    /api/snippets/{id}         편집 (이름 변경 포함)
- DELETE /api/snippets/{id}?confirm=true   삭제 (파일 + store)
- DELETE /api/snippets?confirm=true        전체 비우기 (store만)

HTTP 요청 하나가 다이얼로그 한 번: 요청 본문이 제출값,
confirm 파라미터가 예/아니오 응답.
"""

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from src.domain.errors import ErrorCodes, SnippetError
from src.domain.schemas import Snippet, SnippetSubmission
from src.snippets.manager import SnippetDialog, SnippetManager

# Routers
api_router = APIRouter()  # API endpoints

# 에러 코드 → HTTP 상태
STATUS_BY_CODE = {
    ErrorCodes.NOT_FOUND: 404,
    ErrorCodes.SNIPPET_NOT_FOUND: 404,
    ErrorCodes.ALREADY_EXISTS: 409,
    ErrorCodes.INVALID_SNIPPET_NAME: 400,
    ErrorCodes.NOT_DIRECTORY_SNIPPET: 400,
    ErrorCodes.NOT_ABSOLUTE_PATH: 400,
    ErrorCodes.NOT_A_DIRECTORY: 400,
}


class SnippetPayload(BaseModel):
    """생성/편집 요청 본문."""
    name: str
    template: str = ""


class RequestDialog(SnippetDialog):
    """HTTP 요청을 다이얼로그로 보는 어댑터."""

    def __init__(self, submission: SnippetSubmission | None = None, confirmed: bool = False):
        self.submission = submission
        self.confirmed = confirmed
        self.completed = False

    async def ask_yes_no(self, title: str, message: str) -> bool:
        return self.confirmed

    async def present(self, snippet: Snippet | None) -> SnippetSubmission | None:
        return self.submission

    async def complete(self) -> None:
        self.completed = True


def _manager(request: Request) -> SnippetManager:
    return request.app.state.snippet_manager


def _http_error(e: SnippetError) -> HTTPException:
    status_code = STATUS_BY_CODE.get(e.code, 500)
    return HTTPException(status_code=status_code, detail={"code": e.code, "message": e.message})


def _get_or_404(manager: SnippetManager, snippet_id: int) -> Snippet:
    snippet = manager.store.find_by_id(snippet_id)
    if snippet is None:
        raise HTTPException(
            status_code=404,
            detail={"code": ErrorCodes.SNIPPET_NOT_FOUND, "message": f"Snippet {snippet_id} not found"},
        )
    return snippet


# =============================================================================
# API Routes
# =============================================================================

@api_router.get("")
async def list_snippets(request: Request, q: str | None = None) -> dict[str, Any]:
    """스니펫 목록/검색."""
    results = _manager(request).search(q)
    return {
        "snippets": [s.to_dict() for s in results],
        "total": len(results),
    }


@api_router.post("", status_code=201)
async def create_snippet(request: Request, payload: SnippetPayload) -> dict[str, Any]:
    """기본 디렉터리에 새 스니펫 생성."""
    dialog = RequestDialog(SnippetSubmission(name=payload.name, template=payload.template))
    try:
        snippet = await _manager(request).add_new_snippet_dialog(dialog=dialog)
    except SnippetError as e:
        raise _http_error(e) from e

    return {"success": True, "snippet": snippet.to_dict()}


@api_router.get("/{snippet_id}")
async def get_snippet(request: Request, snippet_id: int) -> dict[str, Any]:
    """스니펫 상세 조회."""
    return _get_or_404(_manager(request), snippet_id).to_dict()


@api_router.put("/{snippet_id}")
async def edit_snippet(request: Request, snippet_id: int, payload: SnippetPayload) -> dict[str, Any]:
    """스니펫 편집."""
    manager = _manager(request)
    snippet = _get_or_404(manager, snippet_id)

    dialog = RequestDialog(SnippetSubmission(name=payload.name, template=payload.template))
    try:
        updated = await manager.edit_snippet_dialog(snippet, dialog=dialog)
    except SnippetError as e:
        raise _http_error(e) from e

    return {"success": True, "snippet": updated.to_dict()}


@api_router.delete("/{snippet_id}")
async def delete_snippet(request: Request, snippet_id: int, confirm: bool = False) -> dict[str, Any]:
    """스니펫 삭제 (confirm=true 필요)."""
    manager = _manager(request)
    snippet = _get_or_404(manager, snippet_id)

    try:
        deleted = await manager.delete_snippet_dialog(snippet, dialog=RequestDialog(confirmed=confirm))
    except SnippetError as e:
        raise _http_error(e) from e

    return {"success": deleted, "snippet_id": snippet_id}


@api_router.delete("")
async def delete_all_snippets(request: Request, confirm: bool = False) -> dict[str, Any]:
    """store 전체 비우기 (파일은 유지, confirm=true 필요)."""
    cleared = await _manager(request).delete_all_snippets_dialog(
        dialog=RequestDialog(confirmed=confirm)
    )
    return {"success": cleared, "total": len(_manager(request).get_all())}
