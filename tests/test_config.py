import pytest
from pydantic import ValidationError

from rowsync.config.indexer.models import IndexerConfig


def test_defaults():
    config = IndexerConfig(query="SELECT 1", index_name="posts")
    assert config.batch_size == 100
    assert config.cursor_field == "id"
    assert config.explicit_mapping is False
    assert config.reindex is False
    assert config.mappings == {}
    assert config.settings == {}
    assert config.collection is None
    assert config.document_mode is False


def test_cursor_index_pattern_covers_grouped_indices():
    config = IndexerConfig(query="SELECT 1", index_name="logs")
    assert config.cursor_index_pattern == "logs*"


@pytest.mark.parametrize("batch_size", [0, -5])
def test_batch_size_must_be_positive(batch_size):
    with pytest.raises(ValidationError):
        IndexerConfig(query="SELECT 1", index_name="posts", batch_size=batch_size)


def test_index_name_must_not_be_empty():
    with pytest.raises(ValidationError):
        IndexerConfig(query="SELECT 1", index_name="")


def test_config_is_immutable():
    config = IndexerConfig(query="SELECT 1", index_name="posts")
    with pytest.raises(ValidationError):
        config.batch_size = 5


def test_filter_document_query_selects_document_mode():
    config = IndexerConfig(query={"status": "published"}, collection="articles", index_name="articles")
    assert config.query == {"status": "published"}
    assert config.document_mode is True


def test_mappings_keep_declared_order():
    config = IndexerConfig(
        query="SELECT 1",
        index_name="posts",
        mappings={"title": {"type": "text"}, "id": {"type": "long"}, "body": {"type": "text"}},
    )
    assert list(config.mappings) == ["title", "id", "body"]
