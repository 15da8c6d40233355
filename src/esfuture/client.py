"""Future 기반 Elasticsearch 클라이언트.

벤더 클라이언트의 블로킹 호출을 공용 스레드 풀에서 실행하고
`concurrent.futures.Future`로 반환합니다. 응답은 가공하지 않고,
벤더 예외도 그대로 future에 담깁니다.

Usage:
    >>> from esfuture import ElasticClient
    >>> from esfuture.dsl import index_into, search_in
    >>>
    >>> client = ElasticClient.local()
    >>> client.execute(index_into("books").id("1").fields(title="Dune")).result()
    >>> resp = client.search(search_in("books").query("dune")).result()
    >>>
    >>> # 동기 호출
    >>> client.sync().search(search_in("books").query("dune"))
"""

from __future__ import annotations

import logging
import threading
import warnings
from collections.abc import Mapping
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

from elastic_transport import NodeConfig
from elasticsearch import Elasticsearch

from .config import ESConfig
from .dsl import (
    BulkCompatibleDefinition,
    CountDefinition,
    CreateIndexDefinition,
    Definition,
    DeleteByIdDefinition,
    DeleteByQueryDefinition,
    DeleteIndexDefinition,
    GetDefinition,
    IndexDefinition,
    MoreLikeThisDefinition,
    MultiGetDefinition,
    MultiSearchDefinition,
    OptimizeDefinition,
    PercolateDefinition,
    RegisterDefinition,
    SearchDefinition,
    UpdateDefinition,
    ValidateDefinition,
)
from .dsl.base import refresh_value
from .transport import Address, create_es_client, create_node_client, create_remote_client

if TYPE_CHECKING:
    from .sync import SyncClient

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0
DEFAULT_SYNC_WAIT = 10.0

# DSL 정의 또는 벤더 메서드 키워드 인자(raw 요청)
Request = Definition | Mapping[str, Any]

_default_executor: ThreadPoolExecutor | None = None
_default_executor_lock = threading.Lock()


def default_executor() -> ThreadPoolExecutor:
    """모든 ElasticClient가 공유하는 스레드 풀 (최초 사용 시 생성)."""
    global _default_executor
    with _default_executor_lock:
        if _default_executor is None:
            _default_executor = ThreadPoolExecutor(
                max_workers=ESConfig().max_workers,
                thread_name_prefix="esfuture",
            )
        return _default_executor


def _as_params(request: Request, expected: type[Definition]) -> dict[str, Any]:
    """요청을 벤더 호출 키워드 인자로 변환."""
    if isinstance(request, expected):
        return request.build()
    if isinstance(request, Definition):
        raise TypeError(
            f"{type(request).__name__}는 {expected.__name__} 자리에 사용할 수 없습니다."
        )
    if isinstance(request, Mapping):
        return dict(request)
    raise TypeError(f"지원하지 않는 요청 타입입니다: {type(request).__name__}")


def _ensure_all(requests: tuple[Any, ...], expected: type[Definition]) -> None:
    for r in requests:
        if not isinstance(r, expected):
            raise TypeError(f"{expected.__name__}만 묶을 수 있습니다: {type(r).__name__}")


class ElasticClient:
    """벤더 클라이언트를 감싸 모든 호출을 Future로 반환하는 어댑터.

    Attributes:
        client: 벤더 Elasticsearch 클라이언트
        timeout: 호출 단위 타임아웃 (초). 호출 시점의 값이 적용됨.
        sync_wait: sync()로 만든 SyncClient의 기본 대기 시간 (초)
    """

    def __init__(
        self,
        client: Elasticsearch,
        timeout: float = DEFAULT_TIMEOUT,
        executor: Executor | None = None,
        sync_wait: float = DEFAULT_SYNC_WAIT,
    ):
        self.client = client
        self.timeout = timeout
        self.sync_wait = sync_wait
        self._executor = executor

    # =========================================================================
    # Factories
    # =========================================================================

    @classmethod
    def from_client(cls, client: Elasticsearch, timeout: float = DEFAULT_TIMEOUT) -> ElasticClient:
        """이미 생성된 벤더 클라이언트를 감쌈."""
        return cls(client, timeout)

    @classmethod
    def from_node(
        cls,
        node: NodeConfig,
        timeout: float = DEFAULT_TIMEOUT,
        settings: ESConfig | None = None,
    ) -> ElasticClient:
        """NodeConfig로 지정한 단일 노드에 접속."""
        return cls.from_client(create_node_client(node, settings), timeout)

    @classmethod
    def remote(
        cls,
        *addresses: Address | str | int,
        settings: ESConfig | None = None,
    ) -> ElasticClient:
        """(host, port) 주소 목록으로 접속.

        Example:
            >>> ElasticClient.remote("localhost", 9200)
            >>> ElasticClient.remote(("es1", 9200), ("es2", 9200))
        """
        if len(addresses) == 2 and isinstance(addresses[0], str) and isinstance(addresses[1], int):
            addresses = ((addresses[0], addresses[1]),)
        cfg = settings or ESConfig()
        es = create_remote_client(list(addresses), cfg)  # type: ignore[arg-type]
        return cls(es, cfg.call_timeout_s, sync_wait=cfg.sync_wait_s)

    @classmethod
    def local(cls, settings: ESConfig | None = None, timeout: float | None = None) -> ElasticClient:
        """설정(ES_URL, 기본 http://localhost:9200)의 노드에 접속."""
        cfg = settings or ESConfig()
        es = create_es_client(cfg)
        return cls(
            es,
            cfg.call_timeout_s if timeout is None else timeout,
            sync_wait=cfg.sync_wait_s,
        )

    # =========================================================================
    # Internals
    # =========================================================================

    @property
    def executor(self) -> Executor:
        return self._executor or default_executor()

    def _submit(self, api: str, params: dict[str, Any]) -> Future[Any]:
        return self.executor.submit(self._call, api, params, self.timeout)

    def _call(self, api: str, params: dict[str, Any], timeout: float) -> Any:
        """벤더 메서드 호출. api는 "search", "indices.create" 같은 경로."""
        target: Any = self.client.options(request_timeout=timeout)
        for name in api.split("."):
            target = getattr(target, name)
        logger.debug(f"{api} 호출 (timeout={timeout}s)")
        try:
            return target(**params)
        except Exception as e:
            logger.warning(f"{api} 호출 실패: {e}")
            raise

    # =========================================================================
    # Documents
    # =========================================================================

    def index(self, request: IndexDefinition | Mapping[str, Any]) -> Future[Any]:
        """문서 색인.

        Args:
            request: IndexDefinition 또는 Elasticsearch.index() 키워드 인자

        Returns:
            index 응답을 담은 Future
        """
        return self._submit("index", _as_params(request, IndexDefinition))

    def get(self, request: Request, *more: GetDefinition) -> Future[Any]:
        """문서 조회. 정의가 여러 개거나 MultiGetDefinition이면 mget으로 실행."""
        if more or isinstance(request, MultiGetDefinition):
            return self.multi_get(request, *more)  # type: ignore[arg-type]
        return self._submit("get", _as_params(request, GetDefinition))

    def multi_get(
        self, *gets: GetDefinition | MultiGetDefinition | Mapping[str, Any]
    ) -> Future[Any]:
        if len(gets) == 1 and isinstance(gets[0], (MultiGetDefinition, Mapping)):
            return self._submit("mget", _as_params(gets[0], MultiGetDefinition))
        _ensure_all(gets, GetDefinition)
        request = MultiGetDefinition(list(gets))  # type: ignore[arg-type]
        return self._submit("mget", request.build())

    def delete(self, request: Request) -> Future[Any]:
        """ID 기준 삭제. DeleteByQueryDefinition이면 delete_by_query로 실행."""
        if isinstance(request, DeleteByQueryDefinition):
            return self.delete_by_query(request)
        return self._submit("delete", _as_params(request, DeleteByIdDefinition))

    def delete_by_query(self, request: DeleteByQueryDefinition | Mapping[str, Any]) -> Future[Any]:
        return self._submit("delete_by_query", _as_params(request, DeleteByQueryDefinition))

    def update(self, request: UpdateDefinition | Mapping[str, Any]) -> Future[Any]:
        return self._submit("update", _as_params(request, UpdateDefinition))

    def bulk(
        self,
        *requests: BulkCompatibleDefinition | Mapping[str, Any],
        refresh: bool = False,
    ) -> Future[Any]:
        """index / delete / update 정의를 하나의 bulk 요청으로 실행.

        operations는 호출 스레드에서 미리 만들어지므로 정의 오류는
        Future가 아닌 이 호출에서 바로 발생함.
        """
        if len(requests) == 1 and isinstance(requests[0], Mapping):
            return self._submit("bulk", dict(requests[0]))
        if not requests:
            raise ValueError("bulk에 포함할 요청이 없습니다.")
        _ensure_all(requests, BulkCompatibleDefinition)

        operations: list[dict[str, Any]] = []
        for r in requests:
            operations.extend(r.bulk_actions())  # type: ignore[union-attr]
        params: dict[str, Any] = {"operations": operations}
        if refresh:
            params["refresh"] = refresh_value(refresh)
        return self._submit("bulk", params)

    # =========================================================================
    # Search
    # =========================================================================

    def search(self, request: Request, *more: SearchDefinition) -> Future[Any]:
        """검색. 정의가 여러 개거나 MultiSearchDefinition이면 msearch로 실행."""
        if more or isinstance(request, MultiSearchDefinition):
            return self.multi_search(request, *more)  # type: ignore[arg-type]
        return self._submit("search", _as_params(request, SearchDefinition))

    def multi_search(
        self, *searches: SearchDefinition | MultiSearchDefinition | Mapping[str, Any]
    ) -> Future[Any]:
        if len(searches) == 1 and isinstance(searches[0], (MultiSearchDefinition, Mapping)):
            return self._submit("msearch", _as_params(searches[0], MultiSearchDefinition))
        _ensure_all(searches, SearchDefinition)
        request = MultiSearchDefinition(searches)  # type: ignore[arg-type]
        return self._submit("msearch", request.build())

    def count(self, request: CountDefinition | Mapping[str, Any]) -> Future[Any]:
        return self._submit("count", _as_params(request, CountDefinition))

    def validate(self, request: ValidateDefinition | Mapping[str, Any]) -> Future[Any]:
        return self._submit("indices.validate_query", _as_params(request, ValidateDefinition))

    def more_like_this(self, request: MoreLikeThisDefinition | Mapping[str, Any]) -> Future[Any]:
        return self._submit("search", _as_params(request, MoreLikeThisDefinition))

    def search_scroll(self, scroll_id: str, keep_alive: str | None = None) -> Future[Any]:
        """scroll 검색의 다음 페이지 조회."""
        params: dict[str, Any] = {"scroll_id": scroll_id}
        if keep_alive is not None:
            params["scroll"] = keep_alive
        return self._submit("scroll", params)

    # =========================================================================
    # Percolator
    # =========================================================================

    def register(self, request: RegisterDefinition | Mapping[str, Any]) -> Future[Any]:
        """Percolator 쿼리 등록 (index 응답 반환)."""
        return self._submit("index", _as_params(request, RegisterDefinition))

    def percolate(self, request: PercolateDefinition | Mapping[str, Any]) -> Future[Any]:
        return self._submit("search", _as_params(request, PercolateDefinition))

    # =========================================================================
    # Indices
    # =========================================================================

    def create_index(self, request: CreateIndexDefinition | Mapping[str, Any]) -> Future[Any]:
        params = _as_params(request, CreateIndexDefinition)
        logger.debug(f"인덱스 생성 요청: {params}")
        return self._submit("indices.create", params)

    def delete_index(self, request: DeleteIndexDefinition | Mapping[str, Any]) -> Future[Any]:
        return self._submit("indices.delete", _as_params(request, DeleteIndexDefinition))

    def optimize(self, request: OptimizeDefinition | Mapping[str, Any]) -> Future[Any]:
        return self._submit("indices.forcemerge", _as_params(request, OptimizeDefinition))

    def exists(self, *indexes: str) -> Future[Any]:
        """인덱스 존재 여부. 응답(HeadApiResponse)은 bool로 평가 가능."""
        if not indexes:
            raise ValueError("확인할 인덱스명을 하나 이상 지정하세요.")
        return self._submit("indices.exists", {"index": list(indexes)})

    # =========================================================================
    # Dispatch
    # =========================================================================

    def execute(self, request: Definition, *more: BulkCompatibleDefinition) -> Future[Any]:
        """정의 종류에 맞는 연산으로 실행.

        정의가 여러 개면 bulk 요청으로 묶음 (index / delete / update만 허용).
        """
        if more:
            return self.bulk(request, *more)  # type: ignore[arg-type]
        if not isinstance(request, Definition):
            raise TypeError(f"execute()는 DSL 정의만 받습니다: {type(request).__name__}")
        operation = getattr(self, request.action)
        return operation(request)

    def result(self, *requests: Definition, duration: float = DEFAULT_SYNC_WAIT) -> Any:
        """execute() 후 결과를 기다림. sync()를 사용하세요."""
        warnings.warn(
            "ElasticClient.result()는 deprecated입니다. sync()를 사용하세요.",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.execute(*requests).result(timeout=duration)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def sync(self, duration: float | None = None) -> SyncClient:
        """각 호출을 duration초까지 기다리는 동기 클라이언트."""
        from .sync import SyncClient

        return SyncClient(self, self.sync_wait if duration is None else duration)

    @property
    def raw(self) -> Elasticsearch:
        """감싸고 있는 벤더 클라이언트."""
        return self.client

    @property
    def indices(self) -> Any:
        return self.client.indices

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> ElasticClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
