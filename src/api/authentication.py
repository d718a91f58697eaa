"""Sealed-session authentication for the API."""

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, CSRFCheck, get_authorization_header
from rest_framework.request import Request

from accounts.session import unseal_session

AUTH_HEADER_KEYWORD = b"session"


class SealedSessionAuthentication(BaseAuthentication):
    """Resolve the sealed session cookie (or ``Authorization: Session <token>``) to a user.

    - An unusable token means "no session": the request proceeds
      unauthenticated and the role gate answers 401.
    - Deactivated users are still returned so that the role gate can
      report them as unauthorized instead of anonymous.
    - CSRF is enforced when the session comes from the cookie.
    """

    def _enforce_csrf(self, request: Request) -> None:
        django_request = request._request
        csrf_check = CSRFCheck(lambda req: None)
        csrf_check.process_request(django_request)
        reason = csrf_check.process_view(django_request, None, (), {})
        if reason:
            raise exceptions.PermissionDenied(f"CSRF Failed: {reason}")

    def _get_user(self, user_id):
        User = get_user_model()
        try:
            return User.objects.get(pk=user_id)
        except (User.DoesNotExist, ValueError, ValidationError):
            return None

    def authenticate(self, request: Request):
        header = get_authorization_header(request).split()
        if header and header[0].lower() == AUTH_HEADER_KEYWORD:
            if len(header) != 2:
                return None
            user_id = unseal_session(header[1].decode("latin-1"))
            user = self._get_user(user_id) if user_id else None
            return (user, None) if user else None

        raw_cookie = request.COOKIES.get(settings.SESSION_TOKEN_COOKIE)
        if not raw_cookie:
            return None
        user_id = unseal_session(raw_cookie)
        user = self._get_user(user_id) if user_id else None
        if user is None:
            return None

        self._enforce_csrf(request)
        return user, None

    def authenticate_header(self, request):
        return "Session"
