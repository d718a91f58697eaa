"""Authentication API views backed by the sealed session cookie."""

import logging

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.middleware import csrf
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import ensure_csrf_cookie
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from accounts import services as account_services
from accounts.session import seal_session
from api.v1.permissions import IsViewer
from api.v1.serializers import LoginSerializer, PasswordChangeSerializer, UserSerializer
from core.exceptions import ActionError

logger = logging.getLogger("pililokal")


class SafeScopedRateThrottle(ScopedRateThrottle):
    """Scoped throttle that falls back to a strict default if scope config is missing."""

    def get_rate(self):
        try:
            return super().get_rate()
        except ImproperlyConfigured:
            logger.warning("Throttle scope '%s' not configured, applying strict default 5/min.", self.scope)
            return "5/min"


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_TOKEN_COOKIE,
        value=token,
        max_age=int(settings.SESSION_TOKEN_MAX_AGE.total_seconds()),
        httponly=True,
        secure=settings.SESSION_TOKEN_COOKIE_SECURE,
        samesite=settings.SESSION_TOKEN_COOKIE_SAMESITE,
        path="/",
    )


def _clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        settings.SESSION_TOKEN_COOKIE,
        path="/",
        samesite=settings.SESSION_TOKEN_COOKIE_SAMESITE,
    )


class LoginAPIView(APIView):
    """Check credentials and set the sealed session cookie."""

    authentication_classes = []
    permission_classes = [permissions.AllowAny]
    throttle_classes = [SafeScopedRateThrottle]
    throttle_scope = "auth_burst"

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            raise ActionError("Email and password are required")
        user = account_services.authenticate_user(
            serializer.validated_data["email"],
            serializer.validated_data["password"],
        )
        if user is None:
            logger.info("Failed login for %s", serializer.validated_data["email"])
            raise ActionError("Invalid email or password")

        response = Response({"success": True, "user": UserSerializer(user).data}, status=status.HTTP_200_OK)
        _set_session_cookie(response, seal_session(user.pk))
        logger.info("User %s signed in", user.email)
        return response


class LogoutAPIView(APIView):
    """Clear the session cookie."""

    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        response = Response({"success": True}, status=status.HTTP_200_OK)
        _clear_session_cookie(response)
        return response


@method_decorator(ensure_csrf_cookie, name="dispatch")
class CSRFTokenAPIView(APIView):
    """Return a CSRF token and ensure CSRF cookie is set."""

    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        return Response({"success": True, "csrfToken": csrf.get_token(request)}, status=status.HTTP_200_OK)


class MeView(APIView):
    """GET /api/v1/auth/me/ - the signed-in user's profile."""

    permission_classes = [IsViewer]

    def get(self, request):
        return Response({"success": True, "user": UserSerializer(request.user).data})


class PasswordChangeAPIView(APIView):
    """POST /api/v1/auth/password/change/ - change own password."""

    permission_classes = [IsViewer]
    throttle_classes = [SafeScopedRateThrottle]
    throttle_scope = "auth_burst"

    def post(self, request):
        serializer = PasswordChangeSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        account_services.change_password(
            request.user,
            serializer.validated_data["current_password"],
            serializer.validated_data["new_password"],
        )
        return Response({"success": True})
