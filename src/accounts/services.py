"""User administration and authentication services."""

from __future__ import annotations

import logging
import secrets
import string
from dataclasses import dataclass

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from core.email import send_templated_email
from core.exceptions import ActionError

from .models import User

logger = logging.getLogger("pililokal")

TEMP_PASSWORD_LENGTH = 16
_TEMP_PASSWORD_ALPHABET = string.ascii_letters + string.digits


@dataclass
class InviteResult:
    user: User
    temp_password: str
    email_error: str | None = None


def generate_temp_password(length: int = TEMP_PASSWORD_LENGTH) -> str:
    return "".join(secrets.choice(_TEMP_PASSWORD_ALPHABET) for _ in range(length))


def normalize_role(role) -> str:
    """Return *role* if it is a known role, else ``VIEWER``."""
    role = str(role or "").strip().upper()
    return role if role in User.Role.values else User.Role.VIEWER


def authenticate_user(email: str, password: str) -> User | None:
    """Check credentials and stamp the login time.

    Returns ``None`` for unknown emails, wrong passwords and deactivated
    accounts alike.
    """
    email = (email or "").strip().lower()
    if not email or not password:
        return None
    user = User.objects.filter(email__iexact=email).first()
    if user is None or not user.is_active or not user.check_password(password):
        return None
    user.last_login = timezone.now()
    user.save(update_fields=["last_login"])
    return user


def change_password(user: User, current_password: str, new_password: str) -> None:
    if not user.check_password(current_password or ""):
        raise ActionError("Current password is incorrect")
    user.set_password(new_password)
    user.save(update_fields=["password"])
    logger.info("Password changed for %s", user.email)


def send_invite_email(*, user: User, temp_password: str) -> None:
    send_templated_email(
        subject=f"You're invited to {settings.APP_NAME}",
        template_name="emails/user_invite",
        context={
            "name": user.name,
            "role": user.role,
            "temp_password": temp_password,
        },
        recipient_list=[user.email],
    )


def invite_user(*, name: str, email: str, role: str, invited_by: User) -> InviteResult:
    """Create an account with a temporary password and email it to the invitee.

    Email delivery failure does not undo the account; it is reported on
    the result as ``email_error``.
    """
    email = (email or "").strip().lower()
    name = (name or "").strip()
    if not email or not name:
        raise ActionError("Name and email are required")
    role = normalize_role(role)

    if User.objects.filter(email__iexact=email).exists():
        raise ActionError("A user with this email already exists")

    temp_password = generate_temp_password()
    with transaction.atomic():
        user = User.objects.create_user(
            email=email,
            password=temp_password,
            name=name,
            role=role,
            invited_by=invited_by,
        )
    logger.info("User %s invited as %s by %s", email, role, invited_by.email)

    result = InviteResult(user=user, temp_password=temp_password)
    try:
        send_invite_email(user=user, temp_password=temp_password)
    except Exception as exc:
        logger.warning("Invitation email to %s failed: %s", email, exc)
        result.email_error = str(exc) or "Failed to send email"
    return result


def get_user(user_id) -> User:
    try:
        return User.objects.get(pk=user_id)
    except (User.DoesNotExist, ValidationError, ValueError, TypeError):
        raise ActionError("User not found") from None


def update_user_role(user_id, role: str) -> User:
    user = get_user(user_id)
    user.role = normalize_role(role)
    user.save(update_fields=["role"])
    logger.info("Role of %s set to %s", user.email, user.role)
    return user


def toggle_user_active(user_id, *, acting_user: User) -> User:
    user = get_user(user_id)
    if user.pk == acting_user.pk:
        raise ActionError("You cannot deactivate your own account")
    user.is_active = not user.is_active
    user.save(update_fields=["is_active"])
    logger.info("User %s %s", user.email, "activated" if user.is_active else "deactivated")
    return user


def reset_user_password(user_id) -> tuple[User, str]:
    user = get_user(user_id)
    temp_password = generate_temp_password()
    user.set_password(temp_password)
    user.save(update_fields=["password"])
    logger.info("Password reset for %s", user.email)
    return user, temp_password
