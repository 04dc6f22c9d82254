"""Split row collections into fixed-size batches."""

from typing import Sequence, TypeVar

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    """Consecutive slices of at most `size` items, in order. Last slice may be shorter."""
    if size <= 0:
        raise ValueError(f"Batch size must be positive, got {size}")
    return [list(items[i : i + size]) for i in range(0, len(items), size)]
