"""Elasticsearch 연결 및 호출 설정 관리.

환경변수로 설정을 관리합니다.
`.env` 파일이 있으면 import 시점에 로드합니다.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_optional_int(name: str) -> int | None:
    value = os.getenv(name)
    return int(value) if value else None


@dataclass(frozen=True)
class ESConfig:
    """Elasticsearch 연결 및 호출 설정.

    Attributes:
        es_url: Elasticsearch 서버 URL (예: http://localhost:9200)
        es_username: HTTP Basic Auth 사용자명 (선택)
        es_password: HTTP Basic Auth 비밀번호 (선택)
        verify_certs: SSL 인증서 검증 여부
        request_timeout_s: 트랜스포트 기본 요청 타임아웃 (초)
        scheme: (host, port) 주소로 접속할 때 사용할 스킴
        call_timeout_s: ElasticClient 호출 단위 타임아웃 (초)
        sync_wait_s: SyncClient가 future를 기다리는 최대 시간 (초)
        max_workers: 공용 스레드 풀 크기 (None이면 기본값)
    """

    # Connection
    es_url: str = field(default_factory=lambda: os.getenv("ES_URL", "http://localhost:9200"))
    es_username: str | None = field(default_factory=lambda: os.getenv("ES_USERNAME"))
    es_password: str | None = field(default_factory=lambda: os.getenv("ES_PASSWORD"))

    verify_certs: bool = field(default_factory=lambda: _env_flag("ES_VERIFY_CERTS", "true"))
    request_timeout_s: int = field(
        default_factory=lambda: int(os.getenv("ES_REQUEST_TIMEOUT_S", "30"))
    )
    scheme: str = field(default_factory=lambda: os.getenv("ES_SCHEME", "http"))

    # Futures
    call_timeout_s: float = field(
        default_factory=lambda: float(os.getenv("ES_CALL_TIMEOUT_S", "5"))
    )
    sync_wait_s: float = field(default_factory=lambda: float(os.getenv("ES_SYNC_WAIT_S", "10")))
    max_workers: int | None = field(default_factory=lambda: _env_optional_int("ES_MAX_WORKERS"))

    @property
    def has_basic_auth(self) -> bool:
        """Basic Auth 자격 증명이 모두 설정되었는지 여부."""
        return bool(self.es_username and self.es_password)
