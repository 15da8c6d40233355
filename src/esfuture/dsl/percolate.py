"""Percolator 요청 정의.

저장된 쿼리(register)에 대해 문서를 매칭(percolate)합니다.
대상 인덱스에는 `percolator` 타입 필드가 매핑되어 있어야 합니다.

Usage:
    >>> create_index("alerts").field("query", "percolator").field("title", "text")
    >>> register_query("dune-alert").into("alerts").query(match("title", "dune"))
    >>> percolate_in("alerts").doc(title="Dune Messiah")
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .base import Definition, refresh_value
from .queries import Query, as_query

DEFAULT_PERCOLATOR_FIELD = "query"


class RegisterDefinition(Definition):
    """Percolator 인덱스에 쿼리 문서를 등록."""

    action = "register"

    def __init__(self, name: str):
        self.name = name
        self._index: str | None = None
        self._field = DEFAULT_PERCOLATOR_FIELD
        self._query: Query | None = None
        self._extra: dict[str, Any] = {}
        self._refresh = False

    def into(self, index: str, field: str = DEFAULT_PERCOLATOR_FIELD) -> RegisterDefinition:
        self._index = index
        self._field = field
        return self

    def query(self, query: Query | str) -> RegisterDefinition:
        self._query = as_query(query)
        return self

    def fields(self, source: Mapping[str, Any] | None = None, **fields: Any) -> RegisterDefinition:
        """쿼리 문서에 함께 저장할 메타데이터 필드."""
        self._extra.update(source or {})
        self._extra.update(fields)
        return self

    def refresh(self, refresh: bool = True) -> RegisterDefinition:
        self._refresh = refresh
        return self

    def build(self) -> dict[str, Any]:
        if not self._index:
            raise ValueError(f"쿼리 '{self.name}'를 등록할 인덱스명을 지정하세요.")
        if self._query is None:
            raise ValueError(f"등록할 쿼리 '{self.name}'의 내용이 없습니다.")
        params: dict[str, Any] = {
            "index": self._index,
            "id": self.name,
            "document": {**self._extra, self._field: self._query},
        }
        if self._refresh:
            params["refresh"] = refresh_value(self._refresh)
        return params


class PercolateDefinition(Definition):
    """문서에 매칭되는 등록 쿼리 검색."""

    action = "percolate"

    def __init__(self, index: str):
        self.index = index
        self._field = DEFAULT_PERCOLATOR_FIELD
        self._documents: list[dict[str, Any]] = []
        self._filter: Query | None = None
        self._size: int | None = None

    def field(self, name: str) -> PercolateDefinition:
        self._field = name
        return self

    def doc(self, source: Mapping[str, Any] | None = None, **fields: Any) -> PercolateDefinition:
        """매칭할 문서 추가. 여러 번 호출하면 여러 문서를 한 번에 매칭."""
        self._documents.append({**(source or {}), **fields})
        return self

    def filter(self, query: Query) -> PercolateDefinition:
        """등록 쿼리 문서의 메타데이터로 후보 제한."""
        self._filter = query
        return self

    def limit(self, size: int) -> PercolateDefinition:
        self._size = size
        return self

    def build(self) -> dict[str, Any]:
        if not self._documents:
            raise ValueError("percolate할 문서를 하나 이상 지정하세요.")
        percolate: dict[str, Any] = {"field": self._field}
        if len(self._documents) == 1:
            percolate["document"] = self._documents[0]
        else:
            percolate["documents"] = list(self._documents)

        query: Query = {"percolate": percolate}
        if self._filter is not None:
            query = {"bool": {"must": [query], "filter": [self._filter]}}

        params: dict[str, Any] = {"index": self.index, "query": query}
        if self._size is not None:
            params["size"] = self._size
        return params
