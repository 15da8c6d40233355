"""검색 계열 요청 정의.

search / msearch / count / delete_by_query / validate_query / more_like_this.

SearchDefinition은 ES 요청 본문 형식(`from`, `_source`)으로 내용을 유지하고,
build() 시점에 파이썬 클라이언트 키워드(`from_`, `source`)로 변환합니다.
msearch는 본문 형식을 그대로 사용합니다.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .base import Definition, compact, join_indexes
from .queries import Query, as_query, bool_query, match_all

# 요청 본문 키 -> Elasticsearch.search() 키워드
_BODY_TO_KWARGS = {"from": "from_", "_source": "source"}


def _require_indexes(indexes: list[str], what: str) -> str:
    if not indexes:
        raise ValueError(f"{what} 대상 인덱스를 하나 이상 지정하세요.")
    return join_indexes(indexes)


class SearchDefinition(Definition):
    """검색 요청."""

    action = "search"

    def __init__(self, *indexes: str):
        self.indexes = list(indexes)
        self._query: Query | None = None
        self._filters: list[Query] = []
        self._size: int | None = None
        self._from: int | None = None
        self._sort: list[dict[str, Any]] = []
        self._source: list[str] | bool | None = None
        self._aggs: dict[str, Any] = {}
        self._highlight: dict[str, Any] | None = None
        self._min_score: float | None = None
        self._scroll: str | None = None
        self._routing: str | None = None

    def query(self, query: Query | str) -> SearchDefinition:
        """메인 쿼리 지정. 문자열은 query_string으로 처리."""
        self._query = as_query(query)
        return self

    def filter(self, query: Query) -> SearchDefinition:
        """점수에 영향 없는 필터 추가."""
        self._filters.append(query)
        return self

    def limit(self, size: int) -> SearchDefinition:
        self._size = size
        return self

    def start(self, offset: int) -> SearchDefinition:
        self._from = offset
        return self

    def sort(self, field: str, order: str = "asc") -> SearchDefinition:
        self._sort.append({field: {"order": order}})
        return self

    def source_includes(self, *fields: str) -> SearchDefinition:
        self._source = list(fields)
        return self

    def fetch_source(self, enabled: bool) -> SearchDefinition:
        self._source = enabled
        return self

    def aggregation(self, name: str, agg: dict[str, Any]) -> SearchDefinition:
        self._aggs[name] = agg
        return self

    def highlight(self, *fields: str) -> SearchDefinition:
        self._highlight = {"fields": {f: {} for f in fields}}
        return self

    def min_score(self, score: float) -> SearchDefinition:
        self._min_score = score
        return self

    def scroll(self, keep_alive: str = "1m") -> SearchDefinition:
        """scroll 검색으로 실행. 이후 페이지는 search_scroll로 조회."""
        self._scroll = keep_alive
        return self

    def routing(self, routing: str) -> SearchDefinition:
        self._routing = routing
        return self

    def _effective_query(self) -> Query | None:
        if not self._filters:
            return self._query
        # 필터가 있으면 bool 쿼리로 감쌈
        must = [self._query] if self._query is not None else [match_all()]
        return bool_query(must=must, filter=self._filters)

    def body(self) -> dict[str, Any]:
        """ES 요청 본문 형식."""
        return compact(
            {
                "query": self._effective_query(),
                "size": self._size,
                "from": self._from,
                "sort": list(self._sort) or None,
                "_source": self._source,
                "aggs": dict(self._aggs) or None,
                "highlight": self._highlight,
                "min_score": self._min_score,
            }
        )

    def header(self) -> dict[str, Any]:
        """msearch 헤더 라인."""
        return compact(
            {
                "index": _require_indexes(self.indexes, "검색"),
                "routing": self._routing,
            }
        )

    def build(self) -> dict[str, Any]:
        params: dict[str, Any] = {"index": _require_indexes(self.indexes, "검색")}
        for key, value in self.body().items():
            params[_BODY_TO_KWARGS.get(key, key)] = value
        params.update(compact({"scroll": self._scroll, "routing": self._routing}))
        return params


class MultiSearchDefinition(Definition):
    """여러 SearchDefinition을 하나의 msearch 요청으로 묶음."""

    action = "multi_search"

    def __init__(self, searches: Iterable[SearchDefinition]):
        self.searches = list(searches)

    def build(self) -> dict[str, Any]:
        if not self.searches:
            raise ValueError("msearch에 포함할 검색이 없습니다.")
        lines: list[dict[str, Any]] = []
        for s in self.searches:
            lines.append(s.header())
            lines.append(s.body())
        return {"searches": lines}


class CountDefinition(Definition):
    """쿼리에 일치하는 문서 수 조회."""

    action = "count"

    def __init__(self, *indexes: str):
        self.indexes = list(indexes)
        self._query: Query | None = None

    def query(self, query: Query | str) -> CountDefinition:
        self._query = as_query(query)
        return self

    def build(self) -> dict[str, Any]:
        return compact({"index": _require_indexes(self.indexes, "count"), "query": self._query})


class DeleteByQueryDefinition(Definition):
    """쿼리에 일치하는 문서 일괄 삭제."""

    action = "delete_by_query"

    def __init__(self, *indexes: str):
        self.indexes = list(indexes)
        self._query: Query | None = None
        self._refresh = False
        self._proceed_on_conflicts = False

    def where(self, query: Query | str) -> DeleteByQueryDefinition:
        self._query = as_query(query)
        return self

    def refresh(self, refresh: bool = True) -> DeleteByQueryDefinition:
        self._refresh = refresh
        return self

    def proceed_on_conflicts(self, enabled: bool = True) -> DeleteByQueryDefinition:
        self._proceed_on_conflicts = enabled
        return self

    def build(self) -> dict[str, Any]:
        if self._query is None:
            # 조건 없는 전체 삭제는 명시적으로 match_all을 지정해야 함
            raise ValueError("delete_by_query에 삭제 조건 쿼리가 필요합니다.")
        params: dict[str, Any] = {
            "index": _require_indexes(self.indexes, "delete_by_query"),
            "query": self._query,
        }
        # delete_by_query의 refresh는 bool만 허용
        if self._refresh:
            params["refresh"] = True
        if self._proceed_on_conflicts:
            params["conflicts"] = "proceed"
        return params


class ValidateDefinition(Definition):
    """쿼리 유효성 검사 (실행하지 않음)."""

    action = "validate"

    def __init__(self, *indexes: str):
        self.indexes = list(indexes)
        self._query: Query | None = None
        self._explain: bool | None = None
        self._rewrite: bool | None = None

    def query(self, query: Query | str) -> ValidateDefinition:
        self._query = as_query(query)
        return self

    def explain(self, enabled: bool = True) -> ValidateDefinition:
        self._explain = enabled
        return self

    def rewrite(self, enabled: bool = True) -> ValidateDefinition:
        self._rewrite = enabled
        return self

    def build(self) -> dict[str, Any]:
        if self._query is None:
            raise ValueError("검증할 쿼리를 지정하세요.")
        return compact(
            {
                "index": join_indexes(self.indexes) or None,
                "query": self._query,
                "explain": self._explain,
                "rewrite": self._rewrite,
            }
        )


class MoreLikeThisDefinition(Definition):
    """기존 문서와 유사한 문서 검색 (more_like_this 쿼리)."""

    action = "more_like_this"

    def __init__(self, doc_id: str | int, index: str | None = None):
        self._id = str(doc_id)
        self._index = index
        self._fields: list[str] = []
        self._min_term_freq: int | None = None
        self._min_doc_freq: int | None = None
        self._max_query_terms: int | None = None
        self._min_should_match: str | None = None
        self._include: bool | None = None
        self._size: int | None = None

    def in_index(self, index: str) -> MoreLikeThisDefinition:
        self._index = index
        return self

    def fields(self, *fields: str) -> MoreLikeThisDefinition:
        self._fields = list(fields)
        return self

    def min_term_freq(self, freq: int) -> MoreLikeThisDefinition:
        self._min_term_freq = freq
        return self

    def min_doc_freq(self, freq: int) -> MoreLikeThisDefinition:
        self._min_doc_freq = freq
        return self

    def max_query_terms(self, terms: int) -> MoreLikeThisDefinition:
        self._max_query_terms = terms
        return self

    def minimum_should_match(self, value: str) -> MoreLikeThisDefinition:
        self._min_should_match = value
        return self

    def include_source_doc(self, enabled: bool = True) -> MoreLikeThisDefinition:
        self._include = enabled
        return self

    def limit(self, size: int) -> MoreLikeThisDefinition:
        self._size = size
        return self

    def build(self) -> dict[str, Any]:
        if not self._index:
            raise ValueError(f"문서 '{self._id}'가 있는 인덱스명을 지정하세요.")
        mlt = compact(
            {
                "fields": list(self._fields) or None,
                "like": [{"_index": self._index, "_id": self._id}],
                "min_term_freq": self._min_term_freq,
                "min_doc_freq": self._min_doc_freq,
                "max_query_terms": self._max_query_terms,
                "minimum_should_match": self._min_should_match,
                "include": self._include,
            }
        )
        return compact(
            {
                "index": self._index,
                "query": {"more_like_this": mlt},
                "size": self._size,
            }
        )