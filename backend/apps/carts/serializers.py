from rest_framework import serializers

from .pricing import MAX_QUANTITY


class CartLineSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    product_name = serializers.CharField()
    quantity = serializers.IntegerField()
    unit_price = serializers.DecimalField(max_digits=10, decimal_places=2)


class CartReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    user_id = serializers.IntegerField()
    items = CartLineSerializer(many=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    version = serializers.IntegerField()
    updated_at = serializers.DateTimeField(allow_null=True)


class CartItemWriteSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1)
    # Positivity is a business rule enforced by CartService
    quantity = serializers.IntegerField(max_value=MAX_QUANTITY)
