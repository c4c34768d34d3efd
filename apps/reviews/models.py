"""Models for the review domain.

Defines the ``Review`` entity: a rating and comment a registered user
leaves for a hotel. A user keeps at most one active review per hotel, and
the hotel's ``rating``/``review_count`` always reflect its active reviews.
"""

from __future__ import annotations

from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Review(models.Model):
    """Represents a review left by a user for a hotel."""

    user = models.ForeignKey(
        'users.CustomUser', on_delete=models.CASCADE, related_name='reviews'
    )
    hotel = models.ForeignKey(
        'hotels.Hotel', on_delete=models.CASCADE, related_name='reviews'
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text='Rating from 1 to 5'
    )
    title = models.CharField(max_length=200, blank=True)
    comment = models.TextField(blank=True)
    pros = models.JSONField(default=list, blank=True)
    cons = models.JSONField(default=list, blank=True)

    is_verified = models.BooleanField(
        default=False,
        help_text=_('The author has a confirmed booking at this hotel')
    )
    is_active = models.BooleanField(default=True)

    # Reply from the hotel's partner or an administrator
    response = models.TextField(blank=True)
    response_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'hotel'],
                condition=models.Q(is_active=True),
                name='unique_active_review_per_user_hotel',
            ),
        ]
        indexes = [
            models.Index(fields=['hotel', '-created_at'], name='review_hotel_created_idx'),
            models.Index(fields=['rating'], name='review_rating_idx'),
        ]

    def __str__(self) -> str:
        return f"Review by {self.user_id} for hotel {self.hotel_id} (Rating: {self.rating})"
