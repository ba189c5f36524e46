from tortoise import fields, models


class Inventory(models.Model):
    id = fields.IntField(primary_key=True)
    # One-to-one link to ensure a single inventory record per item
    item = fields.OneToOneField("models.Item", related_name="inventory", on_delete=fields.CASCADE)
    stock = fields.IntField()
    capacity = fields.IntField() # May be exceeded; overstock is reported, not rejected

    class Meta:
        table = "inventory"
