import logging

from rowsync.services.indexing.context import RunStats
from rowsync.services.indexing.stats import display_stats
from rowsync.utils.time import monotonic


def _stats_with_failure() -> RunStats:
    stats = RunStats(batches_indexed=1, total_batches=2, records_indexed=3, index_errors=1)
    stats.created_indices.update({"posts-2024-01", "posts-2024-02"})
    stats.deleted_indices.add("posts-2024-01")
    stats.errors.append(
        {
            "status": 400,
            "error": {"type": "mapper_parsing_exception", "reason": "failed to parse field [id]"},
            "operation": {"index": {"_index": "posts-2024-02"}},
            "document": {"id": "not-a-number", "title": "broken row"},
        }
    )
    return stats


def test_summary_is_returned():
    summary = display_stats(_stats_with_failure(), monotonic())

    assert summary["records_indexed"] == 3
    assert summary["index_errors"] == 1
    assert summary["created_indices"] == ["posts-2024-01", "posts-2024-02"]
    assert summary["deleted_indices"] == ["posts-2024-01"]
    assert summary["elapsed_seconds"] >= 0


def test_summary_names_indices_in_the_log(caplog):
    with caplog.at_level(logging.INFO, logger="rowsync.services.indexing.stats"):
        display_stats(_stats_with_failure(), monotonic())

    assert "records indexed 3" in caplog.text
    assert "created indices posts-2024-01, posts-2024-02" in caplog.text
    assert "deleted indices posts-2024-01" in caplog.text


def test_failed_documents_are_listed_in_the_log(caplog):
    with caplog.at_level(logging.INFO, logger="rowsync.services.indexing.stats"):
        display_stats(_stats_with_failure(), monotonic())

    failure = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(failure) == 1
    message = failure[0].getMessage()
    assert "broken row" in message
    assert "mapper_parsing_exception" in message


def test_clean_run_logs_no_failure_list(caplog):
    with caplog.at_level(logging.INFO, logger="rowsync.services.indexing.stats"):
        display_stats(RunStats(batches_indexed=1, total_batches=1, records_indexed=2), monotonic())

    assert not [r for r in caplog.records if r.levelno == logging.WARNING]
    assert "created indices -" in caplog.text
