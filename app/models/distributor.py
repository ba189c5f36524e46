from tortoise import fields, models


class Distributor(models.Model):
    id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=255, unique=True)

    class Meta:
        table = "distributors"


class DistributorPrice(models.Model):
    """
    One price offering of an item by a distributor. The (distributor, item)
    pair is not unique: a distributor may list several prices for one item.
    """
    id = fields.IntField(primary_key=True)
    distributor = fields.ForeignKeyField("models.Distributor", related_name="prices", on_delete=fields.CASCADE)
    item = fields.ForeignKeyField("models.Item", related_name="prices", on_delete=fields.CASCADE)
    cost = fields.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        table = "distributor_prices"
        indexes = [
            ("item_id",),                    # Offerings for an item, cheapest offer
            ("distributor_id", "item_id"),   # Composite: price updates by pair
        ]
