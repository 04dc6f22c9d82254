"""Row mutators applied to every extracted row before grouping."""

from typing import Protocol, Sequence

from rowsync.services.sources.base import Row


class RowTransformer(Protocol):
    """Mutates a row in place (returns None) or returns a replacement row."""

    def __call__(self, row: Row) -> Row | None: ...


def apply_mutations(rows: list[Row], mutators: Sequence[RowTransformer]) -> list[Row]:
    """
    Apply every mutator, in registration order, to every row. Row order is preserved.
    With no mutators the input list itself is returned. Mutator exceptions propagate.
    """
    if not mutators:
        return rows
    mutated: list[Row] = []
    for row in rows:
        for mutate in mutators:
            result = mutate(row)
            if result is not None:
                row = result
        mutated.append(row)
    return mutated
