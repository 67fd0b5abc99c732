from django.db import models


class Product(models.Model):
    """Read-only from this service's point of view; maintained elsewhere."""

    id = models.AutoField(primary_key=True)
    title = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    description = models.TextField(blank=True, default="")

    def __str__(self):
        return self.title

    class Meta:
        indexes = [
            models.Index(fields=["title"], name="product_title_idx"),
        ]
