from __future__ import annotations

from apps.users.repositories import UserRepository
from apps.users.validators import RegistrationValidator

from .services import RegistrationService, SessionService


def build_registration_service() -> RegistrationService:
    users = UserRepository()
    return RegistrationService(
        users=users, validator=RegistrationValidator(users.email_exists)
    )


def build_session_service() -> SessionService:
    return SessionService()
