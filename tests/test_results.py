import logging

from rowsync.services.indexing.context import RunStats
from rowsync.services.indexing.results import handle_response

from conftest import bulk_response_with_failures, ok_bulk_response


def _actions(*rows):
    return [({"index": {"_index": "posts"}}, row) for row in rows]


def _flat(actions):
    return [part for pair in actions for part in pair]


def test_clean_response_counts_whole_batch():
    stats = RunStats()
    actions = _actions({"id": 1}, {"id": 2})

    errors = handle_response(ok_bulk_response(_flat(actions)), actions, stats)

    assert errors == []
    assert stats.batches_indexed == 1
    assert stats.records_indexed == 2
    assert stats.index_errors == 0


def test_one_failure_among_three():
    stats = RunStats()
    actions = _actions({"id": 1}, {"id": "not-a-number"}, {"id": 3})

    errors = handle_response(bulk_response_with_failures(_flat(actions), {1}), actions, stats)

    assert stats.records_indexed == 2
    assert stats.index_errors == 1
    assert stats.batches_indexed == 0
    assert len(errors) == 1
    entry = errors[0]
    assert entry["status"] == 400
    assert entry["document"] == {"id": "not-a-number"}
    assert entry["operation"] == {"index": {"_index": "posts"}}
    assert entry["error"]["type"] == "mapper_parsing_exception"
    assert stats.errors == errors


def test_errors_accumulate_across_batches():
    stats = RunStats()
    first = _actions({"id": 1}, {"id": 2})
    second = _actions({"id": 3})

    handle_response(bulk_response_with_failures(_flat(first), {0}), first, stats)
    handle_response(bulk_response_with_failures(_flat(second), {0}), second, stats)

    assert stats.index_errors == 2
    assert stats.records_indexed == 1
    assert [e["document"]["id"] for e in stats.errors] == [1, 3]


def test_non_index_operations_are_read_too():
    stats = RunStats()
    actions = _actions({"id": 1})
    response = {"errors": True, "items": [{"create": {"status": 409, "error": {"type": "version_conflict"}}}]}

    errors = handle_response(response, actions, stats)

    assert errors[0]["status"] == 409
    assert stats.index_errors == 1


def test_failed_documents_are_written_to_the_log(caplog):
    stats = RunStats()
    actions = _actions({"id": 1}, {"id": "not-a-number", "title": "broken row"})

    with caplog.at_level(logging.WARNING, logger="rowsync.services.indexing.results"):
        handle_response(bulk_response_with_failures(_flat(actions), {1}), actions, stats)

    assert "1 document errors in a batch of 2" in caplog.text
    assert "broken row" in caplog.text
    assert "mapper_parsing_exception" in caplog.text
