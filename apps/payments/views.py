"""Payment API views: payment intent creation and the Stripe webhook."""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore
from django.http import JsonResponse  # type: ignore
from django.views.decorators.csrf import csrf_exempt  # type: ignore
from django.views.decorators.http import require_POST  # type: ignore
from rest_framework import permissions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.access import rules
from apps.bookings.models import Booking
from . import stripe_service, webhooks
from .serializers import CreatePaymentIntentSerializer

logger = logging.getLogger(__name__)


class CreatePaymentIntentView(APIView):
    """Create a Stripe payment intent for one of the caller's bookings."""

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):  # type: ignore
        serializer = CreatePaymentIntentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        # Only the guest (or an admin) can pay for a booking
        booking = Booking.objects.filter(pk=data["bookingId"]).first()
        if booking is None or not (
            booking.user_id == request.user.id or rules.has_role(request.user, rules.ADMIN)
        ):
            return Response({"detail": "Booking not found."}, status=status.HTTP_404_NOT_FOUND)
        if booking.payment_status == Booking.PaymentStatus.CONFIRMED:
            return Response(
                {"detail": "This booking is already paid."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        if booking.status == Booking.Status.CANCELLED:
            return Response(
                {"detail": "This booking is cancelled."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        if data["amount"] != booking.total:
            return Response(
                {"amount": [f"Amount does not match the booking total ({booking.total})."]},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            intent = stripe_service.create_payment_intent(
                amount=data["amount"],
                currency=data.get("currency") or settings.PAYMENT_DEFAULT_CURRENCY,
                booking_id=str(booking.pk),
                hotel_name=data.get("hotelName") or booking.hotel_name,
                guest_name=data.get("guestName") or booking.guest_name,
                guest_email=data["guestEmail"],
                check_in=data.get("checkIn") or booking.check_in.isoformat(),
                check_out=data.get("checkOut") or booking.check_out.isoformat(),
                rooms=data.get("rooms") or booking.rooms,
                guests=data.get("guests") or booking.adults + booking.children,
            )
        except stripe_service.PaymentProviderError as exc:
            return Response({"detail": exc.message}, status=exc.status_code)
        except Exception:
            logger.exception("Unexpected error creating payment intent for booking %s", booking.pk)
            return Response(
                {"detail": "An unexpected error occurred."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        booking.payment_intent_id = intent["id"]
        booking.save(update_fields=["payment_intent_id", "updated_at"])
        return Response(
            {"clientSecret": intent["client_secret"], "paymentIntentId": intent["id"]},
            status=status.HTTP_200_OK,
        )


@csrf_exempt
@require_POST
def stripe_webhook(request):
    """
    Stripe webhook endpoint.

    Verifies the Stripe-Signature header, then applies the event to the
    booking named in the payment intent metadata.
    """
    signature = request.headers.get("Stripe-Signature")
    if not signature:
        logger.error("Stripe webhook without Stripe-Signature header")
        return JsonResponse({"error": "Missing stripe-signature header"}, status=400)

    try:
        event = stripe_service.construct_event(request.body, signature)
    except stripe_service.WebhookVerificationError as exc:
        logger.error("Stripe webhook signature verification failed: %s", exc)
        return JsonResponse({"error": "Webhook signature verification failed"}, status=400)

    try:
        logger.info("Stripe webhook received: %s (%s)", event["type"], webhooks.field(event, "id"))
        webhooks.dispatch(event)
    except Exception:
        logger.exception("Stripe webhook handler failed")
        return JsonResponse({"error": "Webhook handler failed"}, status=500)

    return JsonResponse({"received": True})
