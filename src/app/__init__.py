"""
App layer: API 서버 (FastAPI).

역할:
- 스니펫 목록/검색/생성/편집/삭제 API
- 시작 시 스니펫 시작 순서 실행 (lifespan)
- ⚠️ 스니펫 규칙 없음 (src/snippets, src/core에 위임)
"""
