from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import Role, User


class TestAuth(APITestCase):
    def setUp(self):
        self.register_url = reverse("auth-register")
        self.login_url = reverse("auth-login")
        self.me_url = reverse("auth-me")
        self.refresh_url = reverse("auth-refresh")
        self.logout_url = reverse("auth-logout")
        self.user_data = {
            "email": "testuser@example.com",
            "password": "TestPass123",
            "confirm_password": "TestPass123",
            "first_name": "Test",
            "last_name": "User",
        }

    def _register_and_login(self):
        self.client.post(self.register_url, self.user_data, format="json")
        return self.client.post(
            self.login_url,
            {"email": "testuser@example.com", "password": "TestPass123"},
            format="json",
        )

    def test_register(self):
        response = self.client.post(self.register_url, self.user_data, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        user = User.objects.get(email="testuser@example.com")
        self.assertEqual(user.role, Role.CLIENT)
        self.assertTrue(user.is_verified)
        self.assertTrue(user.check_password("TestPass123"))

    def test_register_pro(self):
        data = dict(self.user_data, account_type="pro", company_name="Acme SARL")
        response = self.client.post(self.register_url, data, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["role"], "PRO")
        self.assertEqual(response.data["company_name"], "Acme SARL")

    def test_register_duplicate_email_case_insensitive(self):
        self.client.post(self.register_url, self.user_data, format="json")
        data = dict(self.user_data, email="TestUser@Example.com")
        response = self.client.post(self.register_url, data, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data["error"]["details"]["errors"],
            ["This email address is already in use."],
        )

    def test_register_reports_every_problem(self):
        response = self.client.post(self.register_url, {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        errors = response.data["error"]["details"]["errors"]
        self.assertIn("Email is required.", errors)
        self.assertIn("Password is required.", errors)
        self.assertIn("First name is required.", errors)
        self.assertIn("Last name is required.", errors)

    def test_login_returns_profile(self):
        response = self._register_and_login()
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.data)
        self.assertIn("refresh", response.data)
        self.assertEqual(response.data["user"]["email"], "testuser@example.com")

    def test_login_ignores_email_case(self):
        data = dict(self.user_data, email="Mixed.Case@Example.com")
        self.client.post(self.register_url, data, format="json")
        for email in ("mixed.case@example.com", "MIXED.CASE@EXAMPLE.COM"):
            response = self.client.post(
                self.login_url, {"email": email, "password": "TestPass123"}, format="json"
            )
            self.assertEqual(response.status_code, status.HTTP_200_OK)
            self.assertEqual(response.data["user"]["email"], "mixed.case@example.com")

    def test_login_wrong_password(self):
        self.client.post(self.register_url, self.user_data, format="json")
        response = self.client.post(
            self.login_url,
            {"email": "testuser@example.com", "password": "nope"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["error"]["code"], "UNAUTHORIZED")

    def test_me_authenticated(self):
        login = self._register_and_login()
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")
        response = self.client.get(self.me_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["first_name"], "Test")

    def test_me_unauthenticated(self):
        response = self.client.get(self.me_url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_refresh_token(self):
        login = self._register_and_login()
        response = self.client.post(
            self.refresh_url, {"refresh": login.data["refresh"]}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.data)

    def test_logout_blacklists_refresh(self):
        login = self._register_and_login()
        refresh = login.data["refresh"]
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")
        response = self.client.post(self.logout_url, {"refresh": refresh}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["detail"], "Logged out")
        again = self.client.post(self.refresh_url, {"refresh": refresh}, format="json")
        self.assertEqual(again.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_logout_invalid_token(self):
        login = self._register_and_login()
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")
        response = self.client.post(self.logout_url, {"refresh": "garbage"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["message"], "Invalid token")
