"""
Accounts models - user profiles.
"""

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models


class UserManager(BaseUserManager):
    """Custom manager for User model."""

    def create_user(
        self,
        uid: str,
        email: str = "",
        **extra_fields,
    ) -> "User":
        """Create and return a user keyed by its Stytch member_id."""
        if not uid:
            raise ValueError("uid is required")

        user = self.model(uid=uid, email=self.normalize_email(email), **extra_fields)
        # No password - Stytch handles authentication
        user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(
        self,
        uid: str,
        email: str = "",
        **extra_fields,
    ) -> "User":
        """Create and return a superuser (for Django admin access)."""
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", User.Role.ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(uid, email, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Application user profile.

    This is AUTH_USER_MODEL. The primary key is the Stytch member_id of the
    principal, so the identity record and the profile share one identifier.
    Names are denormalized onto inspection records (see Inspection.inspector_name).
    """

    class Role(models.TextChoices):
        ADMIN = "admin", "Admin"
        SUPERVISOR = "supervisor", "Supervisor"
        INSPECTOR = "inspector", "Inspector"

    uid = models.CharField(
        max_length=255,
        primary_key=True,
        help_text="Stytch member_id, e.g. 'member-live-xxx'",
    )

    role = models.CharField(max_length=20, choices=Role.choices, default=Role.INSPECTOR)
    username = models.CharField(max_length=150, blank=True, db_index=True)
    email = models.EmailField(blank=True, db_index=True)
    first_name = models.CharField(max_length=150, blank=True)
    last_name = models.CharField(max_length=150, blank=True)
    full_name = models.CharField(max_length=255, blank=True)
    photo_url = models.URLField(max_length=500, blank=True)

    is_active = models.BooleanField(default=True)
    is_first_login = models.BooleanField(default=True)
    is_staff = models.BooleanField(
        default=False,
        help_text="Can access Django admin",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "uid"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["email"]

    class Meta:
        ordering = ["username"]

    def __str__(self) -> str:
        return self.username or self.email or self.uid

    @property
    def is_admin(self) -> bool:
        """Check if user has the admin role."""
        return self.role == self.Role.ADMIN

    @property
    def display_name(self) -> str:
        """Name written onto inspection records created by this user."""
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.full_name or self.username or self.email
