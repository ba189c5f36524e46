import csv
import io
import logging
from enum import Enum
from typing import Callable, Dict, Iterable, NamedTuple, Optional
from tortoise.queryset import QuerySet
from app.core.exceptions import StorageFailure
from app.core.db import storage_errors
from app.models import Item, Inventory, Distributor, DistributorPrice
from app.services.result_serializer import Projection, Table

log = logging.getLogger("export.service")

INVALID_TABLE_CSV = "error,invalid_table\n"


class TableKind(str, Enum):
    ITEMS = "items"
    INVENTORY = "inventory"
    DISTRIBUTORS = "distributors"
    DISTRIBUTOR_PRICES = "distributor_prices"

    @classmethod
    def parse(cls, name: Optional[str]) -> Optional["TableKind"]:
        try:
            return cls(name)
        except ValueError:
            return None


class Export(NamedTuple):
    projection: Projection
    query: Callable[[], QuerySet]


# Relation tables are exported with names instead of raw foreign key ids
EXPORTS: Dict[TableKind, Export] = {
    TableKind.ITEMS: Export(
        Projection(id="id", name="name"),
        lambda: Item.all().order_by("id"),
    ),
    TableKind.INVENTORY: Export(
        Projection(
            inventory_id="id",
            item_name="item__name",
            amount_in_stock="stock",
            total_capacity="capacity",
        ),
        lambda: Inventory.all().order_by("id"),
    ),
    TableKind.DISTRIBUTORS: Export(
        Projection(id="id", name="name"),
        lambda: Distributor.all().order_by("id"),
    ),
    TableKind.DISTRIBUTOR_PRICES: Export(
        Projection(
            price_id="id",
            distributor_name="distributor__name",
            item_name="item__name",
            unit_cost="cost",
        ),
        lambda: DistributorPrice.all().order_by("id"),
    ),
}


def _write(rows: Iterable[Iterable]) -> str:
    # QUOTE_MINIMAL wraps cells holding a comma or quote and doubles inner quotes; None is written empty
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue()


def render_csv(table: Table) -> str:
    """Header row followed by one line per row."""
    return _write([table.columns, *table.rows])


async def export_table(name: Optional[str]) -> str:
    """
    Renders one of the exportable tables as CSV. Unknown table names and storage
    failures come back as an ``error,...`` CSV line rather than an exception.
    """
    kind = TableKind.parse(name)
    if kind is None:
        log.warning(f"Export requested for unknown table {name!r}.")
        return INVALID_TABLE_CSV

    export = EXPORTS[kind]
    try:
        with storage_errors():
            table = await export.projection.fetch(export.query())
    except StorageFailure as e:
        log.error(f"Error exporting {kind.value}: {e.message}")
        return _write([["error", e.message]])
    return render_csv(table)
