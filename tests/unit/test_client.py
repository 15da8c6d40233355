"""Tests for the future-returning ElasticClient."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from functools import reduce
from unittest.mock import MagicMock, patch

import pytest
from elastic_transport import NodeConfig
from elasticsearch import ConnectionTimeout

from esfuture.client import DEFAULT_TIMEOUT, ElasticClient, default_executor
from esfuture.config import ESConfig
from esfuture.dsl import (
    count_from,
    create_index,
    delete_from,
    delete_id,
    delete_index,
    get_id,
    index_into,
    match,
    more_like_this,
    multi_get,
    multi_search,
    optimize_index,
    percolate_in,
    register_query,
    search_in,
    term,
    update_id,
    validate_in,
)
from esfuture.sync import SyncClient


def _vendor(es: MagicMock, path: str) -> MagicMock:
    return reduce(getattr, path.split("."), es)


# (client method, request, vendor method path)
PASS_THROUGH_CASES = [
    ("index", index_into("books").id("1").fields(title="Dune"), "index"),
    ("search", search_in("books").query(match("title", "dune")), "search"),
    ("count", count_from("books").query(term("year", 1965)), "count"),
    ("get", get_id("1", "books"), "get"),
    ("delete", delete_id("1", "books"), "delete"),
    ("delete_by_query", delete_from("books").where(term("year", 1965)), "delete_by_query"),
    ("update", update_id("1", "books").doc(year=1966), "update"),
    ("validate", validate_in("books").query("title:dune"), "indices.validate_query"),
    ("more_like_this", more_like_this("1", "books").fields("title"), "search"),
    ("register", register_query("q1").into("alerts").query(match("title", "dune")), "index"),
    ("percolate", percolate_in("alerts").doc(title="Dune"), "search"),
    ("create_index", create_index("books").shards(1), "indices.create"),
    ("delete_index", delete_index("books"), "indices.delete"),
    ("optimize", optimize_index("books").max_segments(1), "indices.forcemerge"),
]


class TestPassThrough:
    """Every operation forwards the built request and returns the vendor response."""

    @pytest.mark.parametrize(
        "method,request_def,vendor_path",
        PASS_THROUGH_CASES,
        ids=[c[0] for c in PASS_THROUGH_CASES],
    )
    def test_definition_forwarded(self, client, es, method, request_def, vendor_path):
        """Should call the vendor method with build() kwargs and return its result."""
        response = {"acknowledged": True, "op": method}
        _vendor(es, vendor_path).return_value = response

        future = getattr(client, method)(request_def)

        assert isinstance(future, Future)
        assert future.result(timeout=2) is response
        _vendor(es, vendor_path).assert_called_once_with(**request_def.build())

    @pytest.mark.parametrize(
        "method,request_def,vendor_path",
        PASS_THROUGH_CASES,
        ids=[c[0] for c in PASS_THROUGH_CASES],
    )
    def test_execute_dispatches_by_definition(self, client, es, method, request_def, vendor_path):
        """execute() should route each definition to the same vendor call."""
        response = {"op": method}
        _vendor(es, vendor_path).return_value = response

        assert client.execute(request_def).result(timeout=2) is response
        _vendor(es, vendor_path).assert_called_once_with(**request_def.build())

    def test_raw_request_forwarded_unchanged(self, client, es):
        """A mapping is treated as vendor kwargs."""
        raw = {"index": "books", "id": "1", "document": {"title": "Dune"}}
        es.index.return_value = {"result": "created"}

        assert client.index(raw).result(timeout=2) == {"result": "created"}
        es.index.assert_called_once_with(**raw)

    def test_timeout_applied_per_call(self, client, es):
        """The vendor call should run with the client's timeout."""
        client.index(index_into("books").fields(a=1)).result(timeout=2)

        es.options.assert_called_with(request_timeout=5.0)

    def test_timeout_change_applies_to_later_calls(self, client, es):
        client.timeout = 0.5

        client.count({"index": "books"}).result(timeout=2)

        es.options.assert_called_with(request_timeout=0.5)


class TestFailures:
    """Vendor errors surface unchanged through the future."""

    def test_vendor_error_propagates(self, client, es):
        error = RuntimeError("cluster_block_exception")
        es.search.side_effect = error

        future = client.search(search_in("books"))

        with pytest.raises(RuntimeError) as exc_info:
            future.result(timeout=2)
        assert exc_info.value is error

    def test_vendor_timeout_propagates(self, client, es):
        es.get.side_effect = ConnectionTimeout("Connection timed out")

        with pytest.raises(ConnectionTimeout):
            client.get(get_id("1", "books")).result(timeout=2)

    def test_failure_logged(self, client, es, caplog):
        es.delete.side_effect = RuntimeError("boom")

        with caplog.at_level(logging.WARNING, logger="esfuture.client"):
            with pytest.raises(RuntimeError):
                client.delete(delete_id("1", "books")).result(timeout=2)

        assert "delete" in caplog.text
        assert "boom" in caplog.text

    def test_incomplete_definition_raises_at_call(self, client, es):
        """build() errors are raised synchronously, before any vendor call."""
        with pytest.raises(ValueError):
            client.get(get_id("1"))
        es.get.assert_not_called()

    def test_wrong_definition_type(self, client):
        with pytest.raises(TypeError):
            client.index(search_in("books"))

    def test_unsupported_request_type(self, client):
        with pytest.raises(TypeError):
            client.count("books")  # type: ignore[arg-type]


class TestMultiDispatch:
    """Tests for single vs multi request selection."""

    def test_search_with_several_definitions_uses_msearch(self, client, es):
        es.msearch.return_value = {"responses": []}
        a = search_in("books").query("dune")
        b = search_in("authors").limit(3)

        assert client.search(a, b).result(timeout=2) == {"responses": []}
        es.msearch.assert_called_once_with(searches=[a.header(), a.body(), b.header(), b.body()])
        es.search.assert_not_called()

    def test_search_with_multi_definition(self, client, es):
        definition = multi_search(search_in("books"))

        client.search(definition).result(timeout=2)

        es.msearch.assert_called_once_with(**definition.build())

    def test_multi_search_rejects_other_definitions(self, client):
        with pytest.raises(TypeError):
            client.multi_search(search_in("books"), count_from("books"))

    def test_get_with_several_definitions_uses_mget(self, client, es):
        es.mget.return_value = {"docs": []}

        client.get(get_id("1", "books"), get_id("2", "books")).result(timeout=2)

        es.mget.assert_called_once_with(
            docs=[{"_index": "books", "_id": "1"}, {"_index": "books", "_id": "2"}]
        )

    def test_get_with_multi_get_definition(self, client, es):
        definition = multi_get(get_id("1", "books"))

        client.get(definition).result(timeout=2)

        es.mget.assert_called_once_with(**definition.build())
        es.get.assert_not_called()

    def test_get_several_rejects_per_document_realtime(self, client, es):
        with pytest.raises(ValueError):
            client.get(get_id("1", "books").realtime(False), get_id("2", "books"))
        es.mget.assert_not_called()

    def test_delete_with_query_definition(self, client, es):
        definition = delete_from("books").where(term("year", 1965))

        client.delete(definition).result(timeout=2)

        es.delete_by_query.assert_called_once_with(**definition.build())
        es.delete.assert_not_called()


class TestBulk:
    """Tests for bulk requests."""

    def test_bulk_operations(self, client, es):
        es.bulk.return_value = {"errors": False, "items": []}

        future = client.bulk(
            index_into("books").id("1").fields(title="Dune"),
            delete_id("2", "books"),
            update_id("3", "books").doc(year=1966),
        )

        assert future.result(timeout=2) == {"errors": False, "items": []}
        es.bulk.assert_called_once_with(
            operations=[
                {"index": {"_index": "books", "_id": "1"}},
                {"title": "Dune"},
                {"delete": {"_index": "books", "_id": "2"}},
                {"update": {"_index": "books", "_id": "3"}},
                {"doc": {"year": 1966}},
            ]
        )

    def test_bulk_sends_ingest_pipeline(self, client, es):
        client.bulk(
            index_into("books").id("1").pipeline("clean").fields(a=1),
            delete_id("2", "books"),
        ).result(timeout=2)

        _, kwargs = es.bulk.call_args
        assert kwargs["operations"][0] == {
            "index": {"_index": "books", "_id": "1", "pipeline": "clean"}
        }

    def test_bulk_refresh(self, client, es):
        client.bulk(delete_id("2", "books"), refresh=True).result(timeout=2)

        _, kwargs = es.bulk.call_args
        assert kwargs["refresh"] == "wait_for"

    def test_execute_with_several_definitions_is_bulk(self, client, es):
        client.execute(index_into("books").fields(a=1), delete_id("2", "books")).result(timeout=2)

        es.bulk.assert_called_once()
        es.index.assert_not_called()

    def test_bulk_rejects_non_bulk_definitions(self, client, es):
        with pytest.raises(TypeError):
            client.bulk(index_into("books").fields(a=1), search_in("books"))
        es.bulk.assert_not_called()

    def test_bulk_requires_requests(self, client):
        with pytest.raises(ValueError):
            client.bulk()

    def test_bulk_raw_request(self, client, es):
        raw = {"operations": [{"delete": {"_index": "books", "_id": "1"}}]}

        client.bulk(raw).result(timeout=2)

        es.bulk.assert_called_once_with(**raw)


class TestOtherOperations:
    """Tests for operations that take plain arguments."""

    def test_exists(self, client, es):
        es.indices.exists.return_value = True

        assert client.exists("books", "authors").result(timeout=2) is True
        es.indices.exists.assert_called_once_with(index=["books", "authors"])

    def test_exists_requires_index(self, client):
        with pytest.raises(ValueError):
            client.exists()

    def test_search_scroll(self, client, es):
        client.search_scroll("scroll-abc").result(timeout=2)

        es.scroll.assert_called_once_with(scroll_id="scroll-abc")

    def test_search_scroll_keep_alive(self, client, es):
        client.search_scroll("scroll-abc", keep_alive="2m").result(timeout=2)

        es.scroll.assert_called_once_with(scroll_id="scroll-abc", scroll="2m")

    def test_create_index_logs_request(self, client, es, caplog):
        with caplog.at_level(logging.DEBUG, logger="esfuture.client"):
            client.create_index(create_index("books").replicas(0)).result(timeout=2)

        assert "number_of_replicas" in caplog.text

    def test_execute_rejects_raw_request(self, client):
        with pytest.raises(TypeError):
            client.execute({"index": "books"})  # type: ignore[arg-type]

    def test_result_is_deprecated(self, client, es):
        es.count.return_value = {"count": 3}

        with pytest.warns(DeprecationWarning):
            resp = client.result(count_from("books"), duration=2)

        assert resp == {"count": 3}


class TestLifecycle:
    """Tests for client accessors, sync() and close()."""

    def test_raw_and_indices(self, client, es):
        assert client.raw is es
        assert client.indices is es.indices

    def test_sync_uses_default_wait(self, es, executor):
        c = ElasticClient(es, executor=executor, sync_wait=4.0)

        sync = c.sync()

        assert isinstance(sync, SyncClient)
        assert sync.duration == 4.0
        assert sync.client is c

    def test_sync_duration_override(self, client):
        assert client.sync(duration=1.5).duration == 1.5

    def test_close(self, client, es):
        client.close()

        es.close.assert_called_once()

    def test_context_manager_closes(self, es, executor):
        with ElasticClient(es, executor=executor) as c:
            assert c.raw is es

        es.close.assert_called_once()

    def test_shared_default_executor(self, es):
        a = ElasticClient(es)
        b = ElasticClient(es)

        assert a.executor is b.executor is default_executor()
        assert isinstance(a.executor, ThreadPoolExecutor)


class TestFactories:
    """Tests for the client constructors."""

    def test_from_client(self, es):
        c = ElasticClient.from_client(es)

        assert c.raw is es
        assert c.timeout == DEFAULT_TIMEOUT

    def test_from_client_timeout(self, es):
        assert ElasticClient.from_client(es, timeout=1.0).timeout == 1.0

    def test_from_node(self, es, config: ESConfig):
        node = NodeConfig("http", "localhost", 9200)

        with patch("esfuture.client.create_node_client", return_value=es) as factory:
            c = ElasticClient.from_node(node, settings=config)

        factory.assert_called_once_with(node, config)
        assert c.raw is es

    def test_remote_host_port(self, es, config: ESConfig):
        with patch("esfuture.client.create_remote_client", return_value=es) as factory:
            c = ElasticClient.remote("es1", 9200, settings=config)

        factory.assert_called_once_with([("es1", 9200)], config)
        assert c.timeout == config.call_timeout_s
        assert c.sync_wait == config.sync_wait_s

    def test_remote_address_list(self, es, config: ESConfig):
        with patch("esfuture.client.create_remote_client", return_value=es) as factory:
            ElasticClient.remote(("es1", 9200), ("es2", 9201), settings=config)

        factory.assert_called_once_with([("es1", 9200), ("es2", 9201)], config)

    def test_local(self, es, config: ESConfig):
        with patch("esfuture.client.create_es_client", return_value=es) as factory:
            c = ElasticClient.local(config)

        factory.assert_called_once_with(config)
        assert c.timeout == 3.0

    def test_local_timeout_override(self, es, config: ESConfig):
        with patch("esfuture.client.create_es_client", return_value=es):
            assert ElasticClient.local(config, timeout=9.0).timeout == 9.0
