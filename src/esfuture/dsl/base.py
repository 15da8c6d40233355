"""Base classes for request definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, ClassVar, Literal

RefreshValue = Literal["wait_for"] | bool


def refresh_value(refresh: bool) -> RefreshValue:
    """refresh 플래그를 ES 파라미터 값으로 변환."""
    return "wait_for" if refresh else False


def join_indexes(indexes: Iterable[str]) -> str:
    """인덱스 목록을 ES 경로 형식(콤마 구분)으로 변환."""
    return ",".join(indexes)


def compact(params: dict[str, Any]) -> dict[str, Any]:
    """값이 None인 항목 제거."""
    return {k: v for k, v in params.items() if v is not None}


class Definition(ABC):
    """단일 벤더 호출을 만드는 DSL 빌더.

    서브클래스는 `action`에 이 정의를 처리할 ElasticClient 메서드 이름을
    지정하고, `build()`에서 벤더 메서드 키워드 인자를 반환해야 함.
    """

    action: ClassVar[str]

    @abstractmethod
    def build(self) -> dict[str, Any]:
        """벤더 호출 키워드 인자 생성."""
        ...


class BulkCompatibleDefinition(Definition):
    """bulk 요청에 포함될 수 있는 정의 (index / delete / update)."""

    @abstractmethod
    def bulk_actions(self) -> list[dict[str, Any]]:
        """bulk operations 라인 목록 (action 헤더 + 필요 시 source)."""
        ...
