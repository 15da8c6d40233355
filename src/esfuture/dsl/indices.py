"""인덱스 관리 요청 정의 (create / delete / forcemerge).

Usage:
    >>> create_index("books").shards(1).replicas(0).field("title", "text").field("year", "integer")
    >>> optimize_index("books").max_segments(1)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .base import Definition, compact, join_indexes


class CreateIndexDefinition(Definition):
    """인덱스 생성 (settings + mappings + aliases)."""

    action = "create_index"

    def __init__(self, name: str):
        self.name = name
        self._settings: dict[str, Any] = {}
        self._properties: dict[str, Any] = {}
        self._aliases: dict[str, Any] = {}

    def shards(self, count: int) -> CreateIndexDefinition:
        self._settings["number_of_shards"] = count
        return self

    def replicas(self, count: int) -> CreateIndexDefinition:
        self._settings["number_of_replicas"] = count
        return self

    def setting(self, key: str, value: Any) -> CreateIndexDefinition:
        self._settings[key] = value
        return self

    def analysis(self, analysis: Mapping[str, Any]) -> CreateIndexDefinition:
        """analyzer / tokenizer / filter 설정."""
        self._settings["analysis"] = dict(analysis)
        return self

    def field(self, name: str, type: str, **options: Any) -> CreateIndexDefinition:
        """단일 필드 매핑 추가.

        Example:
            >>> create_index("books").field("title", "text", analyzer="standard")
            >>> create_index("kb").field("vector", "dense_vector", dims=768, index=True)
        """
        self._properties[name] = {"type": type, **options}
        return self

    def mappings(self, properties: Mapping[str, Any]) -> CreateIndexDefinition:
        """여러 필드 매핑을 한 번에 추가 (ES properties 형식)."""
        self._properties.update(properties)
        return self

    def alias(self, name: str, **options: Any) -> CreateIndexDefinition:
        self._aliases[name] = dict(options)
        return self

    def build(self) -> dict[str, Any]:
        if not self.name:
            raise ValueError("생성할 인덱스명을 지정하세요.")
        return compact(
            {
                "index": self.name,
                "settings": dict(self._settings) or None,
                "mappings": {"properties": dict(self._properties)} if self._properties else None,
                "aliases": dict(self._aliases) or None,
            }
        )


class DeleteIndexDefinition(Definition):
    """인덱스 삭제."""

    action = "delete_index"

    def __init__(self, *indexes: str):
        self.indexes = list(indexes)
        self._ignore_unavailable: bool | None = None

    def ignore_missing(self, enabled: bool = True) -> DeleteIndexDefinition:
        """없는 인덱스가 포함돼도 실패하지 않음."""
        self._ignore_unavailable = enabled
        return self

    def build(self) -> dict[str, Any]:
        if not self.indexes:
            raise ValueError("삭제할 인덱스명을 하나 이상 지정하세요.")
        return compact(
            {
                "index": join_indexes(self.indexes),
                "ignore_unavailable": self._ignore_unavailable,
            }
        )


class OptimizeDefinition(Definition):
    """세그먼트 병합 (forcemerge)."""

    action = "optimize"

    def __init__(self, *indexes: str):
        self.indexes = list(indexes)
        self._max_num_segments: int | None = None
        self._only_expunge_deletes: bool | None = None
        self._flush: bool | None = None

    def max_segments(self, count: int) -> OptimizeDefinition:
        self._max_num_segments = count
        return self

    def only_expunge_deletes(self, enabled: bool = True) -> OptimizeDefinition:
        self._only_expunge_deletes = enabled
        return self

    def flush(self, enabled: bool = True) -> OptimizeDefinition:
        self._flush = enabled
        return self

    def build(self) -> dict[str, Any]:
        if self._max_num_segments is not None and self._only_expunge_deletes:
            raise ValueError("max_segments와 only_expunge_deletes는 함께 지정할 수 없습니다.")
        # 인덱스를 지정하지 않으면 전체 인덱스 대상
        return compact(
            {
                "index": join_indexes(self.indexes) or None,
                "max_num_segments": self._max_num_segments,
                "only_expunge_deletes": self._only_expunge_deletes,
                "flush": self._flush,
            }
        )
