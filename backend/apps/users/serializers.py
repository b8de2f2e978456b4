from rest_framework import serializers


class UserReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    email = serializers.EmailField()
    first_name = serializers.CharField(allow_blank=True)
    last_name = serializers.CharField(allow_blank=True)
    role = serializers.CharField()
    is_verified = serializers.BooleanField()
    company_name = serializers.CharField(allow_null=True, required=False)
    created_at = serializers.CharField(allow_null=True)
