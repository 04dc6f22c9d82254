"""
Destination index per row and the (action, document) pairs for the bulk request.
A grouper returns a suffix: rows land in "{index_name}-{suffix}", or in the base index for no suffix.
"""

from datetime import date, datetime, time, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Protocol

from rowsync.config.indexer.models import IndexerConfig
from rowsync.repositories.opensearch.bulk_repository import GroupedAction
from rowsync.services.sources.base import Row

DEFAULT_DATE_FORMAT = "%Y-%m-%d"


class RowClassifier(Protocol):
    """Returns the destination suffix for a row, or None for the base index."""

    def __call__(self, row: Row) -> str | None: ...


def destination_index(index_name: str, group_key: str | None) -> str:
    if not group_key:
        return index_name
    return f"{index_name}-{group_key}"


def project_to_mappings(row: Row, mappings: dict[str, Any]) -> Row:
    """Keep only the fields named in `mappings` that the row actually has."""
    return {field: row[field] for field in mappings if field in row}


def apply_group(
    rows: list[Row],
    grouper: RowClassifier | None,
    config: IndexerConfig,
    groups: set[str],
) -> tuple[set[str], list[GroupedAction]]:
    """
    Build one index action per row, in row order. Every destination is added to the run-wide
    `groups`; the returned set holds only this call's destinations.
    """
    batch_groups: set[str] = set()
    actions: list[GroupedAction] = []
    for row in rows:
        if config.explicit_mapping:
            row = project_to_mappings(row, config.mappings)
        group_key = grouper(row) if grouper is not None else None
        index_name = destination_index(config.index_name, group_key)
        batch_groups.add(index_name)
        actions.append(({"index": {"_index": index_name}}, row))
    groups.update(batch_groups)
    return batch_groups, actions


# Non-ISO layouts accepted for string dates, tried in order after ISO 8601
FALLBACK_DATE_FORMATS = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y-%m-%d %H:%M",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
)


def _parse_date_string(value: str) -> datetime:
    text = value.strip()
    # fromisoformat only accepts a trailing Z from 3.11 on
    iso = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass
    for fmt in FALLBACK_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Cannot read a date from string {value!r}") from e


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # epoch milliseconds
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, str):
        return _parse_date_string(value)
    raise ValueError(f"Cannot read a date from {type(value).__name__} value {value!r}")


def index_by_date(field: str, date_format: str = DEFAULT_DATE_FORMAT) -> RowClassifier:
    """
    Grouper bucketing rows by `row[field]` formatted with strftime `date_format`
    (e.g. "%Y-%m" for monthly indices). Rows without the field go to the base index.

    Accepted values: datetime and date objects, numbers as epoch milliseconds (UTC),
    ISO 8601 strings, RFC 2822 strings, and the layouts in FALLBACK_DATE_FORMATS
    such as "2024/01/05". Any other value raises ValueError.
    """

    def classify(row: Row) -> str | None:
        value = row.get(field)
        if value is None or value == "":
            return None
        return _to_datetime(value).strftime(date_format)

    return classify
