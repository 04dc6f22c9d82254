"""Exceptions raised by the indexing pipeline and its collaborators."""


class RowsyncError(Exception):
    """Base class for fatal pipeline errors. Keeps the underlying driver exception on `cause`."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class DataSourceError(RowsyncError):
    """Connecting to or querying the source database failed."""


class IndexLifecycleError(RowsyncError):
    """Creating or deleting a destination index failed for a reason other than already-exists/not-found."""

    def __init__(self, message: str, index_name: str, cause: Exception | None = None):
        super().__init__(message, cause=cause)
        self.index_name = index_name


class BulkWriteError(RowsyncError):
    """The bulk request itself failed (destination unreachable, rejected request)."""
