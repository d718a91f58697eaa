"""Sealed session tokens.

A session is the user id signed into a short token with an embedded
expiry. The token is opaque to callers; :func:`unseal_session` fails
closed and never raises.
"""

from __future__ import annotations

import logging

from django.conf import settings
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken

logger = logging.getLogger("pililokal")

SESSION_TOKEN_TYPE = "session"


class SessionToken(AccessToken):
    token_type = SESSION_TOKEN_TYPE

    @property
    def lifetime(self):
        return settings.SESSION_TOKEN_MAX_AGE


def seal_session(user_id) -> str:
    """Return a signed token carrying *user_id* that expires after the session max age."""
    token = SessionToken()
    token["user_id"] = str(user_id)
    return str(token)


def unseal_session(token) -> str | None:
    """Return the user id sealed in *token*, or ``None`` if it is unusable."""
    if not token or not isinstance(token, str):
        return None
    try:
        validated = SessionToken(token)
    except TokenError:
        logger.debug("Rejected session token")
        return None
    user_id = validated.get("user_id")
    return str(user_id) if user_id else None
