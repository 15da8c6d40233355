"""Elasticsearch 클라이언트 팩토리.

URL, (host, port) 주소 목록, NodeConfig 세 가지 방식으로
벤더 클라이언트를 생성합니다.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from elastic_transport import NodeConfig
from elasticsearch import Elasticsearch

from .config import ESConfig

logger = logging.getLogger(__name__)

Address = tuple[str, int]


def _client_kwargs(cfg: ESConfig) -> dict[str, Any]:
    """인증/타임아웃 공통 인자."""
    kwargs: dict[str, Any] = {
        "verify_certs": cfg.verify_certs,
        "request_timeout": cfg.request_timeout_s,
    }
    # Basic Auth 사용
    if cfg.has_basic_auth:
        kwargs["basic_auth"] = (cfg.es_username, cfg.es_password)
    return kwargs


def create_es_client(cfg: ESConfig | None = None) -> Elasticsearch:
    """ES_URL 단일 주소로 클라이언트 생성.

    ElasticClient.local()이 사용하는 경로. 주소 목록이 필요하면
    create_remote_client(), 노드 설정을 직접 넘기려면 create_node_client().

    Raises:
        ValueError: cfg.es_url이 비어 있는 경우.
    """
    if cfg is None:
        cfg = ESConfig()

    if not cfg.es_url:
        raise ValueError("ES_URL 환경변수를 설정하세요.")

    return Elasticsearch(hosts=[cfg.es_url], **_client_kwargs(cfg))


def create_remote_client(
    addresses: Sequence[Address],
    cfg: ESConfig | None = None,
) -> Elasticsearch:
    """(host, port) 주소 목록으로 클라이언트 생성.

    Args:
        addresses: 접속할 노드 주소 목록
        cfg: 인증/타임아웃/스킴 설정. None이면 기본 설정 사용.

    Raises:
        ValueError: 주소가 하나도 없는 경우.
    """
    if not addresses:
        raise ValueError("접속할 주소를 하나 이상 지정하세요.")
    if cfg is None:
        cfg = ESConfig()

    hosts = [{"scheme": cfg.scheme, "host": host, "port": int(port)} for host, port in addresses]
    return Elasticsearch(hosts=hosts, **_client_kwargs(cfg))


def create_node_client(node: NodeConfig, cfg: ESConfig | None = None) -> Elasticsearch:
    """이미 구성된 NodeConfig로 클라이언트 생성."""
    if cfg is None:
        cfg = ESConfig()
    return Elasticsearch(hosts=[node], **_client_kwargs(cfg))


def check_connection(es: Elasticsearch) -> bool:
    """ping 결과를 bool로 반환. 전송 오류도 연결 실패로 보고 경고 로그만 남김."""
    try:
        alive = es.ping()
    except Exception as e:
        logger.warning(f"ping 실패: {e}")
        return False
    if not alive:
        logger.warning("ping 응답 없음")
    return bool(alive)
