"""
Tests for the Django admin modifications, custom user model.
"""

from django.test import TestCase, Client
from django.contrib.auth import get_user_model
from django.urls import reverse


class AdminSiteCustomUserModelTests(TestCase):
    """Tests for Django Admin, custom user model."""

    def setUp(self):
        """Initial setup, create user and client."""
        self.client = Client()
        self.admin_user = get_user_model().objects.create_superuser(
            phone="01000000000",
            password="test_pass123",
        )
        self.client.force_login(self.admin_user)

        self.user = get_user_model().objects.create_user(
            phone="01011112222",
            password="testpass123",
            name="Test Worker",
        )

    def test_users_list(self):
        """Test that users are listed on the page."""
        url = reverse("admin:users_user_changelist")
        res = self.client.get(url)

        self.assertContains(res, self.user.name)
        self.assertContains(res, self.user.phone)

    def test_edit_user_page_displays_custom_fields(self):
        """Test that the edit user page shows the profile section."""
        url = reverse("admin:users_user_change", args=[self.user.id])
        res = self.client.get(url)

        self.assertEqual(res.status_code, 200)
        self.assertContains(res, "Profile")
        self.assertContains(res, "role")
        self.assertContains(res, "site_memberships-TOTAL_FORMS")

    def test_create_user_page(self):
        """Test the create user page works."""
        url = reverse("admin:users_user_add")
        res = self.client.get(url)

        self.assertEqual(res.status_code, 200)

    def test_readonly_fields_are_not_editable(self):
        """Test that a POST request cannot change a readonly field."""
        url = reverse("admin:users_user_change", args=[self.user.id])
        original_date_joined = self.user.date_joined

        payload = {
            "phone": "01033334444",
            "name": "New Name",
            "role": "SITE_ADMIN",
            "date_joined_0": "2020-01-01",
            "date_joined_1": "12:00:00",
            "is_active": "on",
            "is_staff": "",
            "is_superuser": "",
            "site_memberships-TOTAL_FORMS": "0",
            "site_memberships-INITIAL_FORMS": "0",
        }

        res = self.client.post(url, payload)

        self.assertEqual(res.status_code, 302)
        self.user.refresh_from_db()
        self.assertEqual(self.user.phone, "01033334444")
        self.assertEqual(self.user.role, "SITE_ADMIN")
        self.assertEqual(self.user.date_joined, original_date_joined)
