"""문서 단위 요청 정의 (index / get / delete / update).

Usage:
    >>> index_into("books").id("1").fields(title="Dune", year=1965).refresh()
    >>> get_id("1").from_index("books").source_includes("title")
    >>> update_id("1").in_index("books").doc(year=1966).doc_as_upsert()
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .base import BulkCompatibleDefinition, Definition, compact, refresh_value


def _require(value: Any, message: str) -> Any:
    if value is None or value == "":
        raise ValueError(message)
    return value


class IndexDefinition(BulkCompatibleDefinition):
    """단일 문서 색인."""

    action = "index"

    def __init__(self, index: str):
        self._index = index
        self._id: str | None = None
        self._source: dict[str, Any] = {}
        self._routing: str | None = None
        self._op_type: str | None = None
        self._pipeline: str | None = None
        self._refresh = False

    def id(self, doc_id: str | int) -> IndexDefinition:
        self._id = str(doc_id)
        return self

    def fields(self, source: Mapping[str, Any] | None = None, **fields: Any) -> IndexDefinition:
        """문서 필드 추가. dict와 키워드 인자 모두 받음."""
        if source:
            self._source.update(source)
        self._source.update(fields)
        return self

    def routing(self, routing: str) -> IndexDefinition:
        self._routing = routing
        return self

    def create_only(self) -> IndexDefinition:
        """같은 ID 문서가 이미 있으면 실패하도록 op_type=create 지정."""
        self._op_type = "create"
        return self

    def pipeline(self, name: str) -> IndexDefinition:
        self._pipeline = name
        return self

    def refresh(self, refresh: bool = True) -> IndexDefinition:
        self._refresh = refresh
        return self

    def build(self) -> dict[str, Any]:
        _require(self._index, "색인할 인덱스명을 지정하세요.")
        params = compact(
            {
                "index": self._index,
                "id": self._id,
                "document": dict(self._source),
                "routing": self._routing,
                "op_type": self._op_type,
                "pipeline": self._pipeline,
            }
        )
        if self._refresh:
            params["refresh"] = refresh_value(self._refresh)
        return params

    def bulk_actions(self) -> list[dict[str, Any]]:
        _require(self._index, "색인할 인덱스명을 지정하세요.")
        op = self._op_type or "index"
        header = compact(
            {
                "_index": self._index,
                "_id": self._id,
                "routing": self._routing,
                "pipeline": self._pipeline,
            }
        )
        return [{op: header}, dict(self._source)]


class GetDefinition(Definition):
    """ID로 단일 문서 조회."""

    action = "get"

    def __init__(self, doc_id: str | int, index: str | None = None):
        self._id = str(doc_id)
        self._index = index
        self._routing: str | None = None
        self._source_includes: list[str] | None = None
        self._realtime: bool | None = None
        self._refresh: bool | None = None

    def from_index(self, index: str) -> GetDefinition:
        self._index = index
        return self

    def routing(self, routing: str) -> GetDefinition:
        self._routing = routing
        return self

    def source_includes(self, *fields: str) -> GetDefinition:
        self._source_includes = list(fields)
        return self

    def realtime(self, realtime: bool = True) -> GetDefinition:
        self._realtime = realtime
        return self

    def refresh(self, refresh: bool = True) -> GetDefinition:
        self._refresh = refresh
        return self

    def build(self) -> dict[str, Any]:
        _require(self._index, f"문서 '{self._id}'를 조회할 인덱스명을 지정하세요.")
        return compact(
            {
                "index": self._index,
                "id": self._id,
                "routing": self._routing,
                "source_includes": self._source_includes,
                "realtime": self._realtime,
                "refresh": self._refresh,
            }
        )

    def doc_spec(self) -> dict[str, Any]:
        """mget `docs` 항목 형식.

        realtime / refresh는 mget 요청 단위 옵션이라 문서별로 지정할 수 없음.
        MultiGetDefinition.realtime() / refresh()를 사용.
        """
        _require(self._index, f"문서 '{self._id}'를 조회할 인덱스명을 지정하세요.")
        if self._realtime is not None or self._refresh is not None:
            raise ValueError(
                f"문서 '{self._id}': realtime/refresh는 multi_get 정의에 지정하세요."
            )
        spec: dict[str, Any] = {"_index": self._index, "_id": self._id}
        if self._routing is not None:
            spec["routing"] = self._routing
        if self._source_includes is not None:
            spec["_source"] = {"includes": self._source_includes}
        return spec


class MultiGetDefinition(Definition):
    """여러 GetDefinition을 하나의 mget 요청으로 묶음."""

    action = "multi_get"

    def __init__(self, gets: list[GetDefinition]):
        self.gets = list(gets)
        self._realtime: bool | None = None
        self._refresh: bool | None = None

    def realtime(self, realtime: bool = True) -> MultiGetDefinition:
        self._realtime = realtime
        return self

    def refresh(self, refresh: bool = True) -> MultiGetDefinition:
        self._refresh = refresh
        return self

    def build(self) -> dict[str, Any]:
        if not self.gets:
            raise ValueError("mget에 포함할 문서가 없습니다.")
        return {
            "docs": [g.doc_spec() for g in self.gets],
            **compact({"realtime": self._realtime, "refresh": self._refresh}),
        }


class DeleteByIdDefinition(BulkCompatibleDefinition):
    """ID로 단일 문서 삭제."""

    action = "delete"

    def __init__(self, doc_id: str | int, index: str | None = None):
        self._id = str(doc_id)
        self._index = index
        self._routing: str | None = None
        self._refresh = False

    def from_index(self, index: str) -> DeleteByIdDefinition:
        self._index = index
        return self

    def routing(self, routing: str) -> DeleteByIdDefinition:
        self._routing = routing
        return self

    def refresh(self, refresh: bool = True) -> DeleteByIdDefinition:
        self._refresh = refresh
        return self

    def build(self) -> dict[str, Any]:
        _require(self._index, f"문서 '{self._id}'를 삭제할 인덱스명을 지정하세요.")
        params = compact({"index": self._index, "id": self._id, "routing": self._routing})
        if self._refresh:
            params["refresh"] = refresh_value(self._refresh)
        return params

    def bulk_actions(self) -> list[dict[str, Any]]:
        _require(self._index, f"문서 '{self._id}'를 삭제할 인덱스명을 지정하세요.")
        header = compact({"_index": self._index, "_id": self._id, "routing": self._routing})
        return [{"delete": header}]


class UpdateDefinition(BulkCompatibleDefinition):
    """부분 문서 또는 스크립트로 문서 갱신."""

    action = "update"

    def __init__(self, doc_id: str | int, index: str | None = None):
        self._id = str(doc_id)
        self._index = index
        self._doc: dict[str, Any] | None = None
        self._upsert: dict[str, Any] | None = None
        self._doc_as_upsert: bool | None = None
        self._script: dict[str, Any] | None = None
        self._retry_on_conflict: int | None = None
        self._routing: str | None = None
        self._refresh = False

    def in_index(self, index: str) -> UpdateDefinition:
        self._index = index
        return self

    def doc(self, source: Mapping[str, Any] | None = None, **fields: Any) -> UpdateDefinition:
        self._doc = {**(self._doc or {}), **(source or {}), **fields}
        return self

    def upsert(self, source: Mapping[str, Any] | None = None, **fields: Any) -> UpdateDefinition:
        self._upsert = {**(self._upsert or {}), **(source or {}), **fields}
        return self

    def doc_as_upsert(self, enabled: bool = True) -> UpdateDefinition:
        self._doc_as_upsert = enabled
        return self

    def script(
        self,
        source: str,
        params: Mapping[str, Any] | None = None,
        lang: str = "painless",
    ) -> UpdateDefinition:
        script: dict[str, Any] = {"source": source, "lang": lang}
        if params:
            script["params"] = dict(params)
        self._script = script
        return self

    def retry_on_conflict(self, retries: int) -> UpdateDefinition:
        self._retry_on_conflict = retries
        return self

    def routing(self, routing: str) -> UpdateDefinition:
        self._routing = routing
        return self

    def refresh(self, refresh: bool = True) -> UpdateDefinition:
        self._refresh = refresh
        return self

    def _body(self) -> dict[str, Any]:
        if self._doc is None and self._script is None:
            raise ValueError(f"문서 '{self._id}' 갱신에 doc 또는 script가 필요합니다.")
        return compact(
            {
                "doc": self._doc,
                "script": self._script,
                "upsert": self._upsert,
                "doc_as_upsert": self._doc_as_upsert,
            }
        )

    def build(self) -> dict[str, Any]:
        _require(self._index, f"문서 '{self._id}'를 갱신할 인덱스명을 지정하세요.")
        params = {
            "index": self._index,
            "id": self._id,
            **self._body(),
            **compact({"routing": self._routing, "retry_on_conflict": self._retry_on_conflict}),
        }
        if self._refresh:
            params["refresh"] = refresh_value(self._refresh)
        return params

    def bulk_actions(self) -> list[dict[str, Any]]:
        _require(self._index, f"문서 '{self._id}'를 갱신할 인덱스명을 지정하세요.")
        header = compact(
            {
                "_index": self._index,
                "_id": self._id,
                "routing": self._routing,
                "retry_on_conflict": self._retry_on_conflict,
            }
        )
        return [{"update": header}, self._body()]
