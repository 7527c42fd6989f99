# clients/models/style_image.py

import uuid

from django.conf import settings
from django.db import models

User = settings.AUTH_USER_MODEL


class StyleImage(models.Model):
    """
    Gallery entry (style inspiration / reference photo).

    Files live in external object storage; this row only keeps the URL and
    the storage public_id.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    admin = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="style_images",
    )
    client = models.ForeignKey(
        "clients.Client",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="style_images",
    )

    image_url = models.URLField(max_length=500)
    public_id = models.CharField(max_length=255, blank=True, default="")
    category = models.CharField(max_length=100, blank=True, default="")
    description = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["admin", "created_at"], name="styleimg_admin_created_idx"),
        ]

    def __str__(self):
        return self.image_url
