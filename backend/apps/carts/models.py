from decimal import Decimal

from django.conf import settings
from django.db import models


class Cart(models.Model):
    """One per user; cleared, never deleted."""

    id = models.AutoField(primary_key=True)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="cart"
    )
    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    # Bumped by exactly one on every successful save (compare-and-swap token)
    version = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "carts"

    def __str__(self):
        return f"Cart {self.id} for {self.user_id}"


class CartLine(models.Model):
    cart = models.ForeignKey(Cart, on_delete=models.CASCADE, related_name="lines")
    position = models.PositiveIntegerField()
    # Snapshot of the catalog entry at first addition, not a live reference
    product_id = models.IntegerField()
    product_name = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        db_table = "cart_lines"
        ordering = ["position"]
        constraints = [
            models.UniqueConstraint(
                fields=["cart", "product_id"], name="cart_line_unique_product"
            ),
        ]
