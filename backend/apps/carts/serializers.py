from rest_framework import serializers

from apps.catalog.serializers import ProductReadSerializer


class CartItemSerializer(serializers.Serializer):
    product = ProductReadSerializer()
    quantity = serializers.IntegerField()
    line_total = serializers.CharField()
    added_at = serializers.CharField(allow_null=True)


class CartReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    owner_id = serializers.IntegerField()
    created_at = serializers.CharField(allow_null=True)
    updated_at = serializers.CharField(allow_null=True)
    items = CartItemSerializer(many=True)
    total_items = serializers.IntegerField()
    total_price = serializers.CharField()


class CartSummarySerializer(serializers.Serializer):
    cart = CartReadSerializer()
    errors = serializers.ListField(child=serializers.CharField())


class CartInfoSerializer(serializers.Serializer):
    cartCount = serializers.IntegerField()
    cartTotal = serializers.CharField()
    isEmpty = serializers.BooleanField()


class CartAddSerializer(serializers.Serializer):
    # Values below one are coerced to one by the view
    quantity = serializers.IntegerField(required=False, default=1)


class CartUpdateSerializer(serializers.Serializer):
    # Zero removes the line
    quantity = serializers.IntegerField()


class CartMutationSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    cartCount = serializers.IntegerField()
    cartTotal = serializers.CharField()
    itemTotal = serializers.CharField(required=False)
