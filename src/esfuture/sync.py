"""ElasticClient의 동기 버전.

각 호출은 ElasticClient의 Future를 duration초까지 기다립니다.
대기 시간이 지나면 concurrent.futures.TimeoutError가 발생하며,
이미 실행 중인 벤더 호출은 취소되지 않습니다.
"""

from __future__ import annotations

from collections.abc import Mapping
from concurrent.futures import Future
from typing import TYPE_CHECKING, Any

from .dsl import (
    BulkCompatibleDefinition,
    CountDefinition,
    CreateIndexDefinition,
    Definition,
    DeleteIndexDefinition,
    GetDefinition,
    IndexDefinition,
    MoreLikeThisDefinition,
    OptimizeDefinition,
    PercolateDefinition,
    RegisterDefinition,
    SearchDefinition,
    UpdateDefinition,
    ValidateDefinition,
)

if TYPE_CHECKING:
    from .client import ElasticClient, Request


class SyncClient:
    """Future 결과를 기다려 바로 반환하는 클라이언트.

    모든 메서드는 `duration` 키워드로 기본 대기 시간을 덮어쓸 수 있음.
    """

    def __init__(self, client: ElasticClient, duration: float):
        self.client = client
        self.duration = duration

    def _await(self, future: Future[Any], duration: float | None) -> Any:
        return future.result(timeout=self.duration if duration is None else duration)

    # Documents

    def index(
        self, request: IndexDefinition | Mapping[str, Any], *, duration: float | None = None
    ) -> Any:
        return self._await(self.client.index(request), duration)

    def get(self, request: Request, *more: GetDefinition, duration: float | None = None) -> Any:
        return self._await(self.client.get(request, *more), duration)

    def delete(self, request: Request, *, duration: float | None = None) -> Any:
        return self._await(self.client.delete(request), duration)

    def update(
        self, request: UpdateDefinition | Mapping[str, Any], *, duration: float | None = None
    ) -> Any:
        return self._await(self.client.update(request), duration)

    def bulk(
        self,
        *requests: BulkCompatibleDefinition | Mapping[str, Any],
        refresh: bool = False,
        duration: float | None = None,
    ) -> Any:
        return self._await(self.client.bulk(*requests, refresh=refresh), duration)

    # Search

    def search(
        self, request: Request, *more: SearchDefinition, duration: float | None = None
    ) -> Any:
        return self._await(self.client.search(request, *more), duration)

    def count(
        self, request: CountDefinition | Mapping[str, Any], *, duration: float | None = None
    ) -> Any:
        return self._await(self.client.count(request), duration)

    def validate(
        self, request: ValidateDefinition | Mapping[str, Any], *, duration: float | None = None
    ) -> Any:
        return self._await(self.client.validate(request), duration)

    def more_like_this(
        self, request: MoreLikeThisDefinition | Mapping[str, Any], *, duration: float | None = None
    ) -> Any:
        return self._await(self.client.more_like_this(request), duration)

    def search_scroll(
        self, scroll_id: str, keep_alive: str | None = None, *, duration: float | None = None
    ) -> Any:
        return self._await(self.client.search_scroll(scroll_id, keep_alive), duration)

    # Percolator

    def register(
        self, request: RegisterDefinition | Mapping[str, Any], *, duration: float | None = None
    ) -> Any:
        return self._await(self.client.register(request), duration)

    def percolate(
        self, request: PercolateDefinition | Mapping[str, Any], *, duration: float | None = None
    ) -> Any:
        return self._await(self.client.percolate(request), duration)

    # Indices

    def create_index(
        self, request: CreateIndexDefinition | Mapping[str, Any], *, duration: float | None = None
    ) -> Any:
        return self._await(self.client.create_index(request), duration)

    def delete_index(
        self, request: DeleteIndexDefinition | Mapping[str, Any], *, duration: float | None = None
    ) -> Any:
        return self._await(self.client.delete_index(request), duration)

    def optimize(
        self, request: OptimizeDefinition | Mapping[str, Any], *, duration: float | None = None
    ) -> Any:
        return self._await(self.client.optimize(request), duration)

    def exists(self, *indexes: str, duration: float | None = None) -> Any:
        return self._await(self.client.exists(*indexes), duration)

    # Dispatch

    def execute(
        self, request: Definition, *more: BulkCompatibleDefinition, duration: float | None = None
    ) -> Any:
        return self._await(self.client.execute(request, *more), duration)
