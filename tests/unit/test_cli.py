"""Tests for the esfuture command line."""

from unittest.mock import patch

import pytest

from esfuture.cli import main


class TestCli:
    """Tests for CLI commands against a mock vendor client."""

    def test_no_command_prints_help(self, client, capsys):
        assert main([], client=client) == 1
        assert "usage" in capsys.readouterr().out

    def test_ping(self, client, es):
        es.ping.return_value = True

        assert main(["ping"], client=client) == 0

    def test_ping_failure(self, client, es):
        es.ping.return_value = False

        assert main(["ping"], client=client) == 1

    def test_exists(self, client, es, capsys):
        es.indices.exists.side_effect = lambda index: index == ["books"]

        assert main(["exists", "books", "missing"], client=client) == 1
        out = capsys.readouterr().out
        assert "✅ books" in out
        assert "❌ missing" in out

    def test_create(self, client, es):
        es.indices.create.return_value = {"acknowledged": True}

        assert main(["create", "books", "--shards", "1", "--replicas", "0"], client=client) == 0
        es.indices.create.assert_called_once_with(
            index="books",
            settings={"number_of_shards": 1, "number_of_replicas": 0},
        )

    def test_drop_requires_confirm(self, client, es):
        assert main(["drop", "books"], client=client) == 1
        es.indices.delete.assert_not_called()

    def test_drop(self, client, es):
        es.indices.delete.return_value = {"acknowledged": True}

        assert main(["drop", "books", "old", "--confirm"], client=client) == 0
        es.indices.delete.assert_called_once_with(index="books,old")

    def test_optimize(self, client, es, capsys):
        es.indices.forcemerge.return_value = {"_shards": {"total": 2, "successful": 2, "failed": 0}}

        assert main(["optimize", "books", "--max-segments", "1"], client=client) == 0
        es.indices.forcemerge.assert_called_once_with(index="books", max_num_segments=1)
        assert "2/2" in capsys.readouterr().out

    def test_count(self, client, es, capsys):
        es.count.return_value = {"count": 12345}

        assert main(["count", "books"], client=client) == 0
        assert "12,345" in capsys.readouterr().out

    def test_vendor_error_exit_code(self, client, es, capsys):
        es.count.side_effect = RuntimeError("index_not_found_exception")

        assert main(["count", "missing"], client=client) == 1
        assert "index_not_found_exception" in capsys.readouterr().out

    def test_optimize_requires_index(self, client, es):
        with pytest.raises(SystemExit) as exc_info:
            main(["optimize"], client=client)

        assert exc_info.value.code == 2
        es.indices.forcemerge.assert_not_called()

    def test_caller_client_stays_open(self, client, es):
        es.ping.return_value = True

        main(["ping"], client=client)
        es.close.assert_not_called()

    def test_own_client_closed(self, client, es):
        es.ping.return_value = True

        with patch("esfuture.cli.ElasticClient.local", return_value=client):
            assert main(["ping"]) == 0
        es.close.assert_called_once()

    def test_own_client_closed_on_error(self, client, es):
        es.count.side_effect = RuntimeError("boom")

        with patch("esfuture.cli.ElasticClient.local", return_value=client):
            assert main(["count", "books"]) == 1
        es.close.assert_called_once()
