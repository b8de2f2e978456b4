from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from apps.users.dtos import user_to_dto
from apps.users.serializers import UserReadSerializer


class RegisterRequestSerializer(serializers.Serializer):
    # Field rules live in RegistrationValidator so every problem is reported at once
    email = serializers.CharField(required=False, allow_blank=True, default="")
    password = serializers.CharField(
        write_only=True, required=False, allow_blank=True, trim_whitespace=False, default=""
    )
    confirm_password = serializers.CharField(
        write_only=True, required=False, allow_blank=True, trim_whitespace=False, default=""
    )
    first_name = serializers.CharField(required=False, allow_blank=True, default="")
    last_name = serializers.CharField(required=False, allow_blank=True, default="")
    account_type = serializers.CharField(required=False, allow_blank=True, default="client")
    company_name = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, default=""
    )


class LoginResponseSerializer(serializers.Serializer):
    access = serializers.CharField()
    refresh = serializers.CharField()
    user = UserReadSerializer()


class LogoutRequestSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class DetailResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()


class StorefrontTokenObtainPairSerializer(TokenObtainPairSerializer):
    """Token pair plus the profile of the account that logged in."""

    def validate(self, attrs):
        data = super().validate(attrs)
        data["user"] = UserReadSerializer(user_to_dto(self.user)).data
        return data
