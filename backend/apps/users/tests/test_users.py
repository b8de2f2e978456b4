from django.db import IntegrityError
from django.test import TestCase

from apps.users.dtos import user_to_dto
from apps.users.models import Role, User
from apps.users.repositories import UserRepository


class UserModelTests(TestCase):
    def test_create_user_defaults(self):
        user = User.objects.create_user(email="jean@EXAMPLE.com", password="secret1")
        self.assertEqual(user.email, "jean@example.com")
        self.assertEqual(user.role, Role.CLIENT)
        self.assertFalse(user.is_staff)
        self.assertFalse(user.is_verified)
        self.assertFalse(user.is_pro)
        self.assertTrue(user.check_password("secret1"))
        self.assertEqual(str(user), "jean@example.com")

    def test_create_user_requires_email(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email="", password="secret1")

    def test_create_superuser(self):
        admin = User.objects.create_superuser(email="admin@example.com", password="admin123")
        self.assertTrue(admin.is_staff)
        self.assertTrue(admin.is_superuser)
        self.assertEqual(admin.role, Role.ADMIN)
        self.assertTrue(admin.is_verified)

    def test_email_is_unique(self):
        User.objects.create_user(email="dup@example.com", password="secret1")
        with self.assertRaises(IntegrityError):
            User.objects.create_user(email="dup@example.com", password="secret1")


    def test_email_is_stored_lowercase_and_found_ignoring_case(self):
        user = User.objects.create_user(email="User@Example.com", password="secret1")
        self.assertEqual(user.email, "user@example.com")
        self.assertEqual(User.objects.get_by_natural_key("USER@example.COM"), user)


class UserRepositoryTests(TestCase):
    def test_email_exists_ignores_case(self):
        repo = UserRepository()
        repo.create_user(email="pro@techstore.com", password="x" * 8, role=Role.PRO)
        self.assertTrue(repo.email_exists("PRO@TechStore.com"))
        self.assertFalse(repo.email_exists("other@techstore.com"))

    def test_user_to_dto(self):
        user = User.objects.create_user(
            email="pro@techstore.com",
            password="secret1",
            role=Role.PRO,
            company_name="TechStore SARL",
            first_name="Pierre",
        )
        dto = user_to_dto(user)
        self.assertEqual(dto.role, "PRO")
        self.assertEqual(dto.company_name, "TechStore SARL")
        self.assertEqual(dto.created_at, user.created_at.isoformat())
        self.assertTrue(User.objects.get(pk=dto.id).is_pro)
