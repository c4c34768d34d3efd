"""Views exposing access decisions to clients."""

from __future__ import annotations

from django.http import JsonResponse  # type: ignore
from rest_framework import permissions  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from . import rules
from .serializers import AccessCheckQuerySerializer, AccessDecisionSerializer


class AccessCheckView(APIView):
    """Tells the client whether the current user may open a page route.

    Replaces the client-side guard: the frontend asks before rendering and
    follows ``redirect_to`` when access is denied.
    """

    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        query = AccessCheckQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        decision = rules.authorize(
            request.user,
            query.validated_data["path"],
            required_roles=query.validated_data.get("roles") or None,
        )
        payload = {
            "allowed": decision.allowed,
            "redirect_to": decision.redirect_to,
            "reason": decision.reason,
            "landing": rules.default_landing(request.user),
        }
        return Response(AccessDecisionSerializer(payload).data)


def unauthorized(request):
    user = getattr(request, "access_user", None)
    return JsonResponse(
        {
            "detail": "You do not have permission to access this page.",
            "landing": rules.default_landing(user),
        },
        status=403,
    )
