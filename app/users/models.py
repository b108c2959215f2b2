"""
Database models for custom user model.
"""

from django.db import models

from django.contrib.auth.models import (
    AbstractBaseUser,
    BaseUserManager,
    PermissionsMixin,
)


class UserManager(BaseUserManager):
    """Manager for users, keyed by phone number."""

    def create_user(self, phone, password=None, **extra_fields):
        if not phone:
            raise ValueError("The Phone field must be set")
        phone = self.normalize_phone(phone)
        user = self.model(phone=phone, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, phone, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", User.Role.SUPER_ADMIN)
        return self.create_user(phone, password, **extra_fields)

    @staticmethod
    def normalize_phone(phone):
        """Strips separators so '010-1234-5678' and '01012345678' match."""
        return "".join(ch for ch in str(phone) if ch.isdigit() or ch == "+")


class User(AbstractBaseUser, PermissionsMixin):
    """A worker or administrator of one or more construction sites."""

    class Role(models.TextChoices):
        WORKER = "WORKER", "Worker"
        SITE_ADMIN = "SITE_ADMIN", "Site Admin"
        SUPER_ADMIN = "SUPER_ADMIN", "Super Admin"
        SYSTEM = "SYSTEM", "System"

    phone = models.CharField(max_length=20, unique=True)
    name = models.CharField(max_length=100, blank=True, default="")
    role = models.CharField(
        max_length=20, choices=Role.choices, default=Role.WORKER
    )
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    date_joined = models.DateTimeField(auto_now_add=True)

    objects = UserManager()

    USERNAME_FIELD = "phone"
    REQUIRED_FIELDS = []

    def __str__(self):
        return self.name or self.phone

    @property
    def name_masked(self):
        """Name with the middle characters hidden, shown to other workers."""
        if not self.name:
            return ""
        if len(self.name) <= 2:
            return self.name[0] + "*"
        return self.name[0] + "*" * (len(self.name) - 2) + self.name[-1]

    @property
    def is_global_admin(self):
        return self.role in (self.Role.SUPER_ADMIN, self.Role.SYSTEM)
