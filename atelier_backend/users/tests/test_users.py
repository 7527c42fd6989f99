from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

User = get_user_model()


class UserManagerTests(TestCase):
    def test_username_is_derived_from_email(self):
        user = User.objects.create_user(email="Ada@Example.com", password="pass")
        self.assertEqual(user.username, "ada")
        self.assertEqual(user.role, User.ROLE_ADMIN)

    def test_derived_username_is_unique(self):
        User.objects.create_user(email="ada@one.com", password="pass")
        second = User.objects.create_user(email="ada@two.com", password="pass")
        self.assertEqual(second.username, "ada2")

    def test_email_is_required(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email="", password="pass")

    def test_superuser_flags(self):
        user = User.objects.create_superuser(email="root@example.com", password="pass")
        self.assertTrue(user.is_staff)
        self.assertTrue(user.is_superuser)


class MeViewTests(TestCase):
    def test_me_returns_designer_profile(self):
        user = User.objects.create_user(
            email="ada@example.com", password="pass", business_name="Ada Couture"
        )
        api = APIClient()
        api.force_authenticate(user=user)

        response = api.get("/api/v1/auth/me/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["business_name"], "Ada Couture")
        self.assertEqual(response.data["email"], "ada@example.com")
