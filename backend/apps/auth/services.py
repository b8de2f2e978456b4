from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple, Union

from django.db import IntegrityError, transaction
from django.utils.translation import gettext as _
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from apps.common import get_logger
from apps.users.dtos import UserDTO, user_to_dto
from apps.users.models import Role
from apps.users.protocols import UserRepositoryProtocol
from apps.users.validators import RegistrationValidator

logger = get_logger(__name__).bind(component="auth", layer="service")

ServiceError = Tuple[str, str, Optional[Dict[str, Any]]]

REGISTRATION_FIELDS = (
    "email",
    "password",
    "confirm_password",
    "first_name",
    "last_name",
    "account_type",
    "company_name",
)
# Passwords are compared as typed
UNTRIMMED_FIELDS = ("password", "confirm_password")


class RegistrationService:
    def __init__(self, users: UserRepositoryProtocol, validator: RegistrationValidator):
        self.users = users
        self.validator = validator
        self.logger = logger.bind(service="RegistrationService")

    @staticmethod
    def _clean(data: Mapping[str, Any]) -> Dict[str, str]:
        cleaned: Dict[str, str] = {}
        for name in REGISTRATION_FIELDS:
            value = data.get(name)
            value = "" if value is None else str(value)
            cleaned[name] = value if name in UNTRIMMED_FIELDS else value.strip()
        return cleaned

    def _invalid(self, errors) -> ServiceError:
        return ("VALIDATION_ERROR", "Invalid input", {"errors": list(errors)})

    def register(self, data: Mapping[str, Any]) -> Union[UserDTO, ServiceError]:
        cleaned = self._clean(data)
        email = cleaned["email"]
        self.logger.debug(
            "Received registration request",
            email=email,
            account_type=cleaned["account_type"],
        )
        errors = self.validator.validate(cleaned)
        if errors:
            self.logger.info(
                "Registration rejected by validation", email=email, count=len(errors)
            )
            return self._invalid(errors)
        is_pro = cleaned["account_type"] == "pro"
        try:
            with transaction.atomic():
                user = self.users.create_user(
                    email=email,
                    password=cleaned["password"],
                    first_name=cleaned["first_name"],
                    last_name=cleaned["last_name"],
                    role=Role.PRO if is_pro else Role.CLIENT,
                    company_name=cleaned["company_name"] if is_pro else None,
                    is_verified=True,
                )
        except IntegrityError:
            self.logger.warning("Registration lost email uniqueness race", email=email)
            return self._invalid([_("This email address is already in use.")])
        self.logger.info(
            "User registered successfully", user_id=user.id, role=str(user.role)
        )
        return user_to_dto(user)


class SessionService:
    def __init__(self):
        self.logger = logger.bind(service="SessionService")

    def logout(self, refresh_token: Optional[str], actor_id: Optional[int]) -> Optional[ServiceError]:
        """Blacklist the refresh token; returns an error tuple when it is unusable."""
        if not refresh_token:
            self.logger.warning("Logout rejected: missing refresh token", actor_id=actor_id)
            return ("VALIDATION_ERROR", "Invalid token", {"refresh": None})
        try:
            token = RefreshToken(refresh_token)
            token.blacklist()
        except TokenError as exc:
            self.logger.warning(
                "Logout failed: token error",
                actor_id=actor_id,
                error=str(exc),
            )
            return ("VALIDATION_ERROR", "Invalid token", {"error": str(exc)})
        self.logger.info("User logged out", actor_id=actor_id)
        return None
