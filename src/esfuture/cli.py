"""Elasticsearch 인덱스 관리 CLI.

Usage:
    esfuture ping
    esfuture exists books authors
    esfuture create books --shards 1 --replicas 0
    esfuture count books
    esfuture optimize books --max-segments 1
    esfuture drop books --confirm

환경변수:
    ES_URL, ES_USERNAME, ES_PASSWORD, ES_VERIFY_CERTS,
    ES_CALL_TIMEOUT_S, ES_SYNC_WAIT_S (esfuture.config 참고)
"""

from __future__ import annotations

import argparse
import logging
import sys

from .client import ElasticClient
from .config import ESConfig
from .dsl import count_from, create_index, delete_index, optimize_index
from .sync import SyncClient
from .transport import check_connection

logger = logging.getLogger(__name__)


# =============================================================================
# Commands
# =============================================================================


def cmd_ping(client: ElasticClient) -> int:
    """연결 상태 출력."""
    if check_connection(client.raw):
        print("✅ Elasticsearch 연결 성공")
        return 0
    print("❌ Elasticsearch 연결 실패")
    return 1


def cmd_exists(sync: SyncClient, indexes: list[str]) -> int:
    """인덱스별 존재 여부 출력. 하나라도 없으면 1."""
    missing = 0
    for name in indexes:
        found = bool(sync.exists(name))
        emoji = "✅" if found else "❌"
        print(f"   {emoji} {name}")
        missing += 0 if found else 1
    return 0 if missing == 0 else 1


def cmd_create(sync: SyncClient, name: str, shards: int | None, replicas: int | None) -> int:
    """인덱스 생성."""
    definition = create_index(name)
    if shards is not None:
        definition.shards(shards)
    if replicas is not None:
        definition.replicas(replicas)

    print(f"\n🔧 Creating index {name}...")
    resp = sync.create_index(definition)
    acknowledged = bool(resp.get("acknowledged"))
    print(f"   {'✅' if acknowledged else '❌'} {name}")
    return 0 if acknowledged else 1


def cmd_drop(sync: SyncClient, indexes: list[str], confirm: bool) -> int:
    """인덱스 삭제."""
    if not confirm:
        print("\n⚠️  --confirm 플래그를 추가해야 삭제됩니다.")
        print("   이 작업은 모든 데이터를 삭제합니다!")
        return 1

    print("\n🗑️  Dropping indices...")
    resp = sync.delete_index(delete_index(*indexes))
    acknowledged = bool(resp.get("acknowledged"))
    for name in indexes:
        print(f"   {'✅' if acknowledged else '❌'} {name}")
    return 0 if acknowledged else 1


def cmd_optimize(sync: SyncClient, indexes: list[str], max_segments: int | None) -> int:
    """세그먼트 병합."""
    definition = optimize_index(*indexes)
    if max_segments is not None:
        definition.max_segments(max_segments)

    resp = sync.optimize(definition)
    shards = resp.get("_shards", {})
    print(f"\n✨ forcemerge: {shards.get('successful', 0)}/{shards.get('total', 0)} shards")
    return 0 if not shards.get("failed") else 1


def cmd_count(sync: SyncClient, index: str) -> int:
    """문서 수 출력."""
    resp = sync.count(count_from(index))
    print(f"{index}: {resp['count']:,}")
    return 0


# =============================================================================
# Entry point
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="esfuture",
        description="Elasticsearch 인덱스 관리 도구",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
환경변수:
  ES_URL             Elasticsearch URL (기본: http://localhost:9200)
  ES_USERNAME        Basic Auth 사용자명
  ES_PASSWORD        Basic Auth 비밀번호
  ES_CALL_TIMEOUT_S  호출 단위 타임아웃 (기본: 5)
  ES_SYNC_WAIT_S     동기 호출 대기 시간 (기본: 10)
""",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="DEBUG 로그 출력")
    subparsers = parser.add_subparsers(dest="command", help="명령어")

    subparsers.add_parser("ping", help="연결 확인")

    exists_parser = subparsers.add_parser("exists", help="인덱스 존재 여부 확인")
    exists_parser.add_argument("indexes", nargs="+")

    create_parser = subparsers.add_parser("create", help="인덱스 생성")
    create_parser.add_argument("index")
    create_parser.add_argument("--shards", type=int, default=None)
    create_parser.add_argument("--replicas", type=int, default=None)

    drop_parser = subparsers.add_parser("drop", help="인덱스 삭제")
    drop_parser.add_argument("indexes", nargs="+")
    drop_parser.add_argument("--confirm", action="store_true", help="삭제 확인 (필수)")

    optimize_parser = subparsers.add_parser("optimize", help="세그먼트 병합 (forcemerge)")
    optimize_parser.add_argument("indexes", nargs="+")
    optimize_parser.add_argument("--max-segments", type=int, default=None)

    count_parser = subparsers.add_parser("count", help="문서 수 조회")
    count_parser.add_argument("index")

    return parser


def main(argv: list[str] | None = None, client: ElasticClient | None = None) -> int:
    """CLI 진입점."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    owns_client = client is None
    if client is None:
        cfg = ESConfig()
        client = ElasticClient.local(cfg)
        logger.info(f"Connecting to: {cfg.es_url}")

    sync = client.sync()
    try:
        if args.command == "ping":
            return cmd_ping(client)
        elif args.command == "exists":
            return cmd_exists(sync, args.indexes)
        elif args.command == "create":
            return cmd_create(sync, args.index, args.shards, args.replicas)
        elif args.command == "drop":
            return cmd_drop(sync, args.indexes, args.confirm)
        elif args.command == "optimize":
            return cmd_optimize(sync, args.indexes, args.max_segments)
        elif args.command == "count":
            return cmd_count(sync, args.index)
    except Exception as e:
        print(f"\n❌ Elasticsearch 요청 오류: {e}")
        return 1
    finally:
        # 호출자가 넘긴 클라이언트는 닫지 않음
        if owns_client:
            client.close()

    return 1


if __name__ == "__main__":
    sys.exit(main())
