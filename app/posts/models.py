"""
Post models.

Models:
    Post: An antenna build with its stored pictures and videos
"""

from __future__ import annotations

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.models import BaseModel, UUIDPrimaryKeyMixin

MAX_BRAND_LENGTH = 30
MAX_CABLE_LENGTH = 100
MAX_METERS_FROM_SEA = 10_000
MAX_BOOM_LENGTH_CM = 100_000
MIN_NUMBER_OF_ELEMENTS = 1
MAX_NUMBER_OF_ELEMENTS = 300
MAX_NUMBER_OF_ANTENNAS = 100


class Post(UUIDPrimaryKeyMixin, BaseModel):
    """
    A committed antenna post.

    ``pictures`` and ``videos`` hold the object store's view of each file
    (key, mime_type, size_bytes) as read when the post was created.
    """

    class Band(models.IntegerChoices):
        BAND_144 = 144, "144 MHz"
        BAND_432 = 432, "432 MHz"
        BAND_1200 = 1200, "1200 MHz"

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="posts",
        help_text="User who created this post",
    )
    description = models.TextField()
    band = models.PositiveIntegerField(choices=Band.choices)
    brand = models.CharField(max_length=MAX_BRAND_LENGTH, blank=True, default="")
    is_self_built = models.BooleanField(default=False)
    meters_from_sea = models.FloatField(
        validators=[MaxValueValidator(MAX_METERS_FROM_SEA)],
    )
    boom_length_cm = models.FloatField(
        validators=[MinValueValidator(0), MaxValueValidator(MAX_BOOM_LENGTH_CM)],
    )
    number_of_elements = models.PositiveIntegerField(
        validators=[
            MinValueValidator(MIN_NUMBER_OF_ELEMENTS),
            MaxValueValidator(MAX_NUMBER_OF_ELEMENTS),
        ],
    )
    number_of_antennas = models.PositiveIntegerField(
        validators=[MinValueValidator(0), MaxValueValidator(MAX_NUMBER_OF_ANTENNAS)],
    )
    cable = models.CharField(max_length=MAX_CABLE_LENGTH, blank=True, default="")
    pictures = models.JSONField(default=list, blank=True)
    videos = models.JSONField(default=list, blank=True)
    is_approved = models.BooleanField(
        default=False,
        db_index=True,
        help_text="Shown publicly once a moderator approves it",
    )

    class Meta(BaseModel.Meta):
        verbose_name = "post"
        verbose_name_plural = "posts"

    def __str__(self) -> str:
        return f"{self.brand or 'Post'} ({self.band} MHz) by {self.owner_id}"

    @property
    def stored_keys(self) -> list[str]:
        """Every object key this post references."""
        return [item["key"] for item in [*self.pictures, *self.videos]]
