"""Hotel rating bookkeeping."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from django.db.models import Avg, Count  # type: ignore

from .models import Review

logger = logging.getLogger(__name__)

ONE_DECIMAL = Decimal("0.1")


def rating_summary(hotel) -> dict:
    """Average (one decimal), count and 1-5 distribution of active reviews."""
    active = Review.objects.filter(hotel=hotel, is_active=True)
    totals = active.aggregate(average=Avg("rating"), count=Count("id"))
    distribution = {str(star): 0 for star in range(1, 6)}
    for row in active.values("rating").annotate(count=Count("id")):
        distribution[str(row["rating"])] = row["count"]

    average = totals["average"]
    rounded = (
        Decimal(str(average)).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)
        if average is not None
        else Decimal("0.0")
    )
    return {
        "average_rating": rounded,
        "total_reviews": totals["count"],
        "rating_distribution": distribution,
    }


def recompute_hotel_rating(hotel) -> None:
    summary = rating_summary(hotel)
    hotel.rating = summary["average_rating"]
    hotel.review_count = summary["total_reviews"]
    hotel.save(update_fields=["rating", "review_count", "updated_at"])
    logger.info(
        "Hotel %s rating recomputed: %s from %s reviews",
        hotel.pk,
        hotel.rating,
        hotel.review_count,
    )


def has_confirmed_stay(user, hotel) -> bool:
    from apps.bookings.models import Booking

    return Booking.objects.filter(
        user=user,
        hotel=hotel,
        status=Booking.Status.CONFIRMED,
    ).exists()
