# clients/models/client.py

import uuid

from django.conf import settings
from django.db import models

User = settings.AUTH_USER_MODEL


class Client(models.Model):
    """
    A designer's customer.

    Ownership:
    - admin is the tenant root; clients are never shared between admins.
    """

    GENDER_MALE = "MALE"
    GENDER_FEMALE = "FEMALE"
    GENDER_OTHER = "OTHER"

    GENDER_CHOICES = [
        (GENDER_MALE, "Male"),
        (GENDER_FEMALE, "Female"),
        (GENDER_OTHER, "Other"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    admin = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="clients",
    )

    name = models.CharField(max_length=200)
    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=50, blank=True, default="")
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES, blank=True, default="")
    address = models.TextField(blank=True, default="")
    notes = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["admin", "created_at"], name="client_admin_created_idx"),
            models.Index(fields=["admin", "name"], name="client_admin_name_idx"),
        ]

    def __str__(self):
        return self.name
