import unittest
from unittest.mock import patch

from django.db import IntegrityError

from apps.auth.services import RegistrationService, SessionService
from apps.users.models import Role
from apps.users.validators import RegistrationValidator


class DummyAtomic:
    def __call__(self, *args, **kwargs):
        return self

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class FakeUser:
    def __init__(self, **attrs):
        attrs.pop("password", None)
        attrs.setdefault("created_at", None)
        self.__dict__.update(attrs)


class FakeUserRepository:
    def __init__(self):
        self._existing_emails = set()
        self._created_payloads = []

    def email_exists(self, email: str) -> bool:
        return email.lower() in self._existing_emails

    def create_user(self, **data):
        payload = dict(data)
        payload.setdefault("id", len(self._created_payloads) + 1)
        self._created_payloads.append(payload)
        self._existing_emails.add(payload["email"].lower())
        return FakeUser(**payload)


def registration(**overrides):
    data = {
        "email": "jean@example.com",
        "password": "secret1",
        "confirm_password": "secret1",
        "first_name": "Jean",
        "last_name": "Dupont",
        "account_type": "client",
        "company_name": "",
    }
    data.update(overrides)
    return data


class RegistrationServiceTests(unittest.TestCase):
    def setUp(self):
        self.repo = FakeUserRepository()
        self.service = RegistrationService(
            users=self.repo, validator=RegistrationValidator(self.repo.email_exists)
        )
        self.atomic_patcher = patch("apps.auth.services.transaction.atomic", DummyAtomic())
        self.atomic_patcher.start()

    def tearDown(self):
        self.atomic_patcher.stop()

    def test_register_client(self):
        result = self.service.register(registration(email="  jean@example.com "))
        self.assertEqual(result.email, "jean@example.com")
        self.assertEqual(result.role, Role.CLIENT)
        self.assertTrue(result.is_verified)
        self.assertIsNone(result.company_name)
        self.assertEqual(self.repo._created_payloads[0]["password"], "secret1")

    def test_register_pro_keeps_company(self):
        result = self.service.register(
            registration(account_type="pro", company_name=" Acme SARL ")
        )
        self.assertEqual(result.role, Role.PRO)
        self.assertEqual(result.company_name, "Acme SARL")

    def test_client_company_is_discarded(self):
        result = self.service.register(registration(company_name="Ignored"))
        self.assertIsNone(result.company_name)

    def test_password_is_not_trimmed(self):
        result = self.service.register(
            registration(password=" secret1", confirm_password="secret1")
        )
        code, _message, details = result
        self.assertEqual(code, "VALIDATION_ERROR")
        self.assertIn("Passwords do not match.", details["errors"])

    def test_duplicate_email(self):
        self.repo._existing_emails.add("jean@example.com")
        code, message, details = self.service.register(registration())
        self.assertEqual((code, message), ("VALIDATION_ERROR", "Invalid input"))
        self.assertEqual(details["errors"], ["This email address is already in use."])
        self.assertEqual(self.repo._created_payloads, [])

    def test_all_errors_reported_together(self):
        _code, _message, details = self.service.register(
            {"email": "bad", "password": "x", "account_type": "pro"}
        )
        self.assertEqual(
            details["errors"],
            [
                "Email address is not valid.",
                "Password must be at least 6 characters long.",
                "Passwords do not match.",
                "First name is required.",
                "Last name is required.",
                "Company name is required for a professional account.",
            ],
        )

    def test_integrity_error_reports_email_in_use(self):
        with patch.object(self.repo, "create_user", side_effect=IntegrityError("dup")):
            code, _message, details = self.service.register(registration())
        self.assertEqual(code, "VALIDATION_ERROR")
        self.assertEqual(details["errors"], ["This email address is already in use."])


class SessionServiceTests(unittest.TestCase):
    def test_logout_requires_token(self):
        error = SessionService().logout(None, 1)
        self.assertEqual(error[0], "VALIDATION_ERROR")
        self.assertEqual(error[1], "Invalid token")

    def test_logout_rejects_garbage_token(self):
        error = SessionService().logout("not-a-token", 1)
        self.assertEqual(error[0], "VALIDATION_ERROR")
        self.assertIn("error", error[2])
