from rest_framework import serializers


class CategorySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    slug = serializers.CharField()
    description = serializers.CharField(allow_blank=True)


class ProductReadSerializer(serializers.Serializer):
    # Matches ProductDTO shapes used for responses
    id = serializers.IntegerField()
    name = serializers.CharField()
    description = serializers.CharField(allow_blank=True)
    price = serializers.CharField()
    stock = serializers.IntegerField()
    is_active = serializers.BooleanField()
    in_stock = serializers.SerializerMethodField()
    seller_id = serializers.IntegerField(allow_null=True)
    seller_name = serializers.CharField(allow_blank=True)
    created_at = serializers.CharField(allow_null=True)
    categories = CategorySerializer(many=True)

    def get_in_stock(self, obj) -> bool:
        return int(getattr(obj, "stock", 0) or 0) > 0


class ProductPageSerializer(serializers.Serializer):
    count = serializers.IntegerField()
    page = serializers.IntegerField()
    num_pages = serializers.IntegerField()
    results = ProductReadSerializer(many=True)


class ProductDetailSerializer(serializers.Serializer):
    product = ProductReadSerializer()
    related = ProductReadSerializer(many=True)


class CategoryListingSerializer(serializers.Serializer):
    category = CategorySerializer()
    products = ProductPageSerializer()


class SearchResultSerializer(ProductPageSerializer):
    query = serializers.CharField(allow_blank=True)


class HomeSerializer(serializers.Serializer):
    latest = ProductReadSerializer(many=True)
    premium = ProductReadSerializer(many=True)
    categories = CategorySerializer(many=True)
