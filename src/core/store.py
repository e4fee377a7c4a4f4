"""
Snippet Store: 메모리 내 스니펫 컬렉션.

규칙:
- name당 레코드는 최대 하나
- id는 삽입 시 발급, 1부터 단조 증가, 재사용 금지
- 모든 변경 후 name 기준 정렬 (대소문자 구분, ordinal)
- 우선순위: directory < gist < user
  - directory 스니펫은 항상 덮어쓰기 가능
  - user 스니펫은 user 스니펫만 덮어쓰기 가능
  - gist 스니펫은 user/gist 스니펫만 덮어쓰기 가능

동시성: asyncio 단일 스레드 전제. 모든 변경 메서드는 동기 함수라
await 사이에 끼어들 수 없다 (별도 락 없음).
"""

import logging
from collections.abc import Callable

from src.core.escaping import compile_search
from src.core.reporting import ErrorReporter
from src.domain.errors import ErrorCodes, SnippetError
from src.domain.schemas import LoadOutcome, Snippet, SnippetSource

logger = logging.getLogger(__name__)

IgnoredCallback = Callable[[Snippet, Snippet], None]

# 기존 출처 → 덮어쓰기를 허용하는 후보 출처
_REPLACEABLE_BY: dict[str, set[str]] = {
    SnippetSource.DIRECTORY.value: {s.value for s in SnippetSource},
    SnippetSource.USER.value: {SnippetSource.USER.value},
    SnippetSource.GIST.value: {SnippetSource.USER.value, SnippetSource.GIST.value},
}


def _source_value(source: SnippetSource | str | None) -> str | None:
    if isinstance(source, SnippetSource):
        return source.value
    return source


class SnippetStore:
    """
    스니펫 컬렉션 소유자.

    프로세스 전역 상태가 아니라 인스턴스 단위로 소유하므로
    테스트마다 독립된 store를 만들 수 있다.
    """

    def __init__(
        self,
        on_ignored: IgnoredCallback | None = None,
        reporter: ErrorReporter | None = None,
    ):
        """
        Args:
            on_ignored: 우선순위로 무시된 load 알림 (candidate, existing)
            reporter: 알 수 없는 출처 보고용
        """
        self._snippets: list[Snippet] = []
        self._last_id = 0
        self._on_ignored = on_ignored
        self._reporter = reporter

    def __len__(self) -> int:
        return len(self._snippets)

    def _sort(self) -> None:
        self._snippets.sort(key=lambda s: s.name)

    def _can_replace(self, existing: Snippet, candidate: Snippet) -> bool:
        existing_source = _source_value(existing.source)
        if not existing_source:
            return True

        allowed = _REPLACEABLE_BY.get(existing_source)
        if allowed is None:
            if self._reporter is not None:
                self._reporter.report(SnippetError(
                    ErrorCodes.UNKNOWN_SOURCE,
                    f"Unknown snippet source: {existing_source}",
                    name=existing.name,
                ))
            return True

        return _source_value(candidate.source) in allowed

    # =========================================================================
    # Mutations
    # =========================================================================

    def load(self, candidate: Snippet) -> LoadOutcome:
        """
        스니펫 삽입 또는 교체 (우선순위 규칙 적용).

        Args:
            candidate: 삽입할 스니펫 (수락 시 id가 발급됨)

        Returns:
            ACCEPTED 또는 IGNORED
        """
        existing = self.find_by_name(candidate.name)

        if existing is not None and not self._can_replace(existing, candidate):
            logger.info(
                f"Ignoring load of '{candidate.name}': snippet with the same name "
                f"of source '{_source_value(existing.source)}' is present"
            )
            if self._on_ignored is not None:
                self._on_ignored(candidate, existing)
            return LoadOutcome.IGNORED

        if existing is not None:
            self._snippets.remove(existing)

        self._last_id += 1
        candidate.id = self._last_id
        self._snippets.append(candidate)
        self._sort()
        return LoadOutcome.ACCEPTED

    def update(self, record: Snippet) -> Snippet:
        """
        id로 찾아 필드 덮어쓰기 (id 유지).

        Raises:
            SnippetError: SNIPPET_NOT_FOUND (전제조건 위반),
                          ALREADY_EXISTS (다른 레코드가 같은 name 사용)
        """
        current = self.find_by_id(record.id)
        if current is None:
            raise SnippetError(
                ErrorCodes.SNIPPET_NOT_FOUND,
                f"No snippet with id {record.id}",
                id=record.id,
            )

        other = self.find_by_name(record.name)
        if other is not None and other is not current:
            raise SnippetError(
                ErrorCodes.ALREADY_EXISTS,
                f"Snippet '{record.name}' already exists",
                name=record.name,
            )

        current.name = record.name
        current.template = record.template
        current.source = record.source
        current.file_path = record.file_path
        self._sort()
        return current

    def delete(self, record: Snippet) -> int:
        """
        id가 일치하는 레코드 전부 제거.

        Returns:
            제거된 개수 (없으면 0, store 변경 없음)
        """
        before = len(self._snippets)
        self._snippets[:] = [s for s in self._snippets if s.id != record.id]
        return before - len(self._snippets)

    def clear(self) -> None:
        self._snippets.clear()

    # =========================================================================
    # Read
    # =========================================================================

    def get_all(self) -> list[Snippet]:
        """정렬된 live 컬렉션 (복사본 아님)."""
        return self._snippets

    def search(self, query: str | None = None) -> list[Snippet]:
        """
        name 부분문자열 검색 (대소문자 무시, 정규식 특수문자는 리터럴).

        Args:
            query: 검색어 (비어 있으면 전체)
        """
        if not query:
            return self.get_all()

        pattern = compile_search(query)
        return [s for s in self._snippets if pattern.search(s.name)]

    def find_by_id(self, snippet_id: int) -> Snippet | None:
        return next((s for s in self._snippets if s.id == snippet_id), None)

    def find_by_name(self, name: str) -> Snippet | None:
        return next((s for s in self._snippets if s.name == name), None)
