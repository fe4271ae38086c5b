"""
Email utilities for user account management.
Centralizes account email sending with consistent error handling: a
failed send is logged and reported as False, never raised.
"""
import logging

from django.conf import settings
from django.core.mail import send_mail
from django.template import TemplateDoesNotExist
from django.utils import timezone
from django.template.loader import render_to_string
from django.utils.encoding import force_bytes
from django.utils.http import urlsafe_base64_encode
from django.contrib.auth.tokens import PasswordResetTokenGenerator

logger = logging.getLogger(__name__)


def _display_name(user) -> str:
    profile = getattr(user, "profile", None)
    return (getattr(profile, "full_name", "") or user.first_name or user.email or "there")


def _send(template: str, subject: str, user, ctx: dict) -> bool:
    ctx = {
        "app_name": settings.APP_NAME,
        "name": _display_name(user),
        "email": user.email,
        "support_email": settings.DEFAULT_FROM_EMAIL,
        **ctx,
    }
    try:
        text_body = render_to_string(f"emails/{template}.txt", ctx)
        html_body = render_to_string(f"emails/{template}.html", ctx)
    except TemplateDoesNotExist as e:
        logger.error(f"Failed to render {template} email templates: {e}")
        return False

    try:
        send_mail(
            subject=subject,
            message=text_body,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[user.email],
            html_message=html_body,
            fail_silently=False,
        )
    except Exception as e:
        logger.error(f"Failed to send {template} email to {user.email}: {e}")
        return False
    logger.info(f"{template} email sent to {user.email}")
    return True


def build_reset_link(user) -> str:
    uid = urlsafe_base64_encode(force_bytes(user.pk))
    token = PasswordResetTokenGenerator().make_token(user)
    return f"{settings.FRONTEND_RESET_PASSWORD_URL}?uid={uid}&token={token}"


def send_welcome_email(user) -> bool:
    return _send(
        "welcome",
        f"Welcome to {settings.APP_NAME}",
        user,
        {"login_url": f"{settings.FRONTEND_URL.rstrip('/')}/login"},
    )


def send_password_reset_email(user) -> bool:
    return _send(
        "password_reset",
        "Reset your password",
        user,
        {
            "reset_link": build_reset_link(user),
            "expires_minutes": settings.PASSWORD_RESET_TIMEOUT // 60,
        },
    )


def send_password_changed_email(user) -> bool:
    return _send(
        "password_changed",
        f"Your {settings.APP_NAME} password was changed",
        user,
        {
            "changed_at": timezone.localtime(timezone.now()).strftime("%d %b %Y, %I:%M %p %Z"),
            "forgot_password_url": f"{settings.FRONTEND_URL.rstrip('/')}/forgot-password",
        },
    )
