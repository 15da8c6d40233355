"""Elasticsearch 클라이언트의 Future 래퍼.

벤더 클라이언트 호출을 concurrent.futures.Future로 감싸고,
요청 정의 DSL과 동기 버전 클라이언트를 함께 제공합니다.

주요 컴포넌트:
    - ElasticClient: 모든 호출을 Future로 반환하는 어댑터
    - SyncClient: Future를 기다려 결과를 바로 반환하는 동기 버전
    - dsl: index / search / get / delete / update / bulk / percolate 등 요청 빌더
    - ESConfig: 환경변수 기반 연결 설정

Usage:
    >>> from esfuture import ElasticClient
    >>> from esfuture.dsl import index_into, search_in, term
    >>>
    >>> client = ElasticClient.remote("localhost", 9200)
    >>> future = client.execute(index_into("books").id("1").fields(title="Dune"))
    >>> future.result()["result"]
    'created'
    >>>
    >>> sync = client.sync(duration=10)
    >>> sync.search(search_in("books").filter(term("year", 1965)))
"""

from esfuture.client import DEFAULT_SYNC_WAIT, DEFAULT_TIMEOUT, ElasticClient, default_executor
from esfuture.config import ESConfig
from esfuture.sync import SyncClient
from esfuture.transport import (
    check_connection,
    create_es_client,
    create_node_client,
    create_remote_client,
)

__all__ = [
    # Config
    "ESConfig",
    # Vendor client
    "create_es_client",
    "create_remote_client",
    "create_node_client",
    "check_connection",
    # Futures
    "ElasticClient",
    "SyncClient",
    "default_executor",
    "DEFAULT_TIMEOUT",
    "DEFAULT_SYNC_WAIT",
]
