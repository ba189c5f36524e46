from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence
from tortoise.queryset import QuerySet


@dataclass
class Table:
    """A tabular query result: ordered column names and rows in storage order."""
    columns: List[str]
    rows: List[Sequence[Any]] = field(default_factory=list)


class Projection:
    """
    Ordered mapping of output column names to ORM field paths.

    Projection(item_name="item__name") selects the joined item name and labels it
    ``item_name``; the keyword order is the column order of the result.
    """

    def __init__(self, **columns: str):
        self.columns = columns

    @property
    def names(self) -> List[str]:
        return list(self.columns)

    async def fetch(self, queryset: QuerySet) -> Table:
        rows = await queryset.values_list(*self.columns.values())
        return Table(columns=self.names, rows=list(rows))


def to_records(table: Table) -> List[Dict[str, Any]]:
    """One record per row, keyed by column name in column order."""
    return [dict(zip(table.columns, row)) for row in table.rows]
