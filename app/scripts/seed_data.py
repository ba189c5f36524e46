# scripts/seed_data.py
import asyncio
from decimal import Decimal
from tortoise import Tortoise
from app.core.config import DB_URL, MODELS_MODULES
from app.models import Item, Inventory, Distributor, DistributorPrice

# Reference dataset restored by every reset. Tests depend on these literal values.
ITEMS = [
    (1, "Licorice"), (2, "Good & Plenty"), (3, "Smarties"), (4, "Tootsie Rolls"),
    (5, "Necco Wafers"), (6, "Wax Cola Bottles"), (7, "Circus Peanuts"), (8, "Candy Corn"),
    (9, "Twix"), (10, "Snickers"), (11, "M&Ms"), (12, "Skittles"), (13, "Starburst"),
    (14, "Butterfinger"), (15, "Peach Rings"), (16, "Gummy Bears"), (17, "Sour Patch Kids"),
]

# (item, stock, capacity)
INVENTORY = [
    (1, 22, 25), (2, 4, 20), (3, 15, 25), (4, 30, 50), (5, 14, 15), (6, 8, 10),
    (7, 10, 10), (8, 30, 40), (9, 17, 70), (10, 43, 65), (11, 32, 55), (12, 25, 45),
    (13, 8, 45), (14, 10, 60), (15, 20, 30), (16, 15, 35), (17, 14, 60),
]

DISTRIBUTORS = [(1, "Candy Corp"), (2, "The Sweet Suite"), (3, "Dentists Hate Us")]

# (distributor, item, cost)
PRICES = [
    (1, 1, "0.81"), (1, 2, "0.46"), (1, 3, "0.89"), (1, 4, "0.45"),
    (2, 2, "0.18"), (2, 3, "0.54"), (2, 4, "0.67"), (2, 5, "0.25"), (2, 6, "0.35"),
    (2, 7, "0.23"), (2, 8, "0.41"), (2, 9, "0.54"), (2, 10, "0.25"), (2, 11, "0.52"),
    (2, 12, "0.07"), (2, 13, "0.77"), (2, 14, "0.93"), (2, 15, "0.11"), (2, 16, "0.42"),
    (3, 10, "0.47"), (3, 11, "0.84"), (3, 12, "0.15"), (3, 13, "0.07"), (3, 14, "0.97"),
    (3, 15, "0.39"), (3, 16, "0.91"), (3, 17, "0.85"),
]


async def seed(conn=None):
    """Inserts the reference dataset into freshly created, empty tables."""
    await Item.bulk_create([Item(id=i, name=name) for i, name in ITEMS], using_db=conn)
    # Inventory and price rows take their ids from the insertion order
    await Inventory.bulk_create(
        [Inventory(item_id=item, stock=stock, capacity=capacity) for item, stock, capacity in INVENTORY],
        using_db=conn,
    )
    await Distributor.bulk_create([Distributor(id=i, name=name) for i, name in DISTRIBUTORS], using_db=conn)
    await DistributorPrice.bulk_create(
        [DistributorPrice(distributor_id=d, item_id=i, cost=Decimal(cost)) for d, i, cost in PRICES],
        using_db=conn,
    )


async def init():
    await Tortoise.init(db_url=DB_URL, modules={"models": MODELS_MODULES})
    await Tortoise.generate_schemas(safe=True)


async def main():
    await init()
    if await Item.exists():
        print("Database already holds data; call GET /reset to restore the reference dataset.")
    else:
        await seed()
        print(f"Seeded {len(ITEMS)} items, {len(INVENTORY)} inventory rows, "
              f"{len(DISTRIBUTORS)} distributors and {len(PRICES)} prices.")
    await Tortoise.close_connections()

if __name__ == "__main__":
    asyncio.run(main())
