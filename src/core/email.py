"""Outgoing mail rendered from paired ``.txt`` / ``.html`` templates."""

from __future__ import annotations

import logging
from typing import Sequence

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string

logger = logging.getLogger("pililokal")


def send_templated_email(
    *,
    subject: str,
    template_name: str,
    context: dict,
    recipient_list: Sequence[str],
    from_email: str | None = None,
) -> int:
    """Render *template_name* (no extension) and send it as multipart mail.

    ``app_name`` and ``app_url`` are injected into the template context.
    Delivery errors propagate to the caller. Returns the number of
    messages sent (0 or 1).
    """
    sender = from_email or settings.DEFAULT_FROM_EMAIL
    full_context = {
        "app_name": settings.APP_NAME,
        "app_url": settings.APP_URL,
        **context,
    }

    text_body = render_to_string(f"{template_name}.txt", full_context).strip()
    html_body = render_to_string(f"{template_name}.html", full_context)

    msg = EmailMultiAlternatives(
        subject=subject,
        body=text_body,
        from_email=sender,
        to=list(recipient_list),
    )
    msg.attach_alternative(html_body, "text/html")
    sent = msg.send(fail_silently=False)
    logger.info("Email '%s' sent to %s", template_name, ", ".join(recipient_list))
    return sent
