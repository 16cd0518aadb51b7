# explorer/auth.py

import logging
from dataclasses import dataclass
from typing import Optional

from supabase import Client, create_client

from explorer.config import Settings, get_settings

SETUP_REQUIRED_MESSAGE = (
    "Authentication is not configured. Set SUPABASE_URL and SUPABASE_ANON_KEY "
    "in your environment (or .env file) and restart the app."
)
CONFIRM_EMAIL_MESSAGE = "Account created. Check your email to confirm it, then sign in."


class AuthError(Exception):
    """Authentication failed; the message comes from the provider and is shown to the user."""


@dataclass
class AuthResult:
    email: Optional[str]
    access_token: Optional[str]
    refresh_token: Optional[str] = None

    @property
    def signed_in(self) -> bool:
        return bool(self.access_token)


def is_configured(settings: Optional[Settings] = None) -> bool:
    settings = settings or get_settings()
    return bool(settings.supabase_url and settings.supabase_anon_key)


def get_supabase_client(settings: Optional[Settings] = None) -> Client:
    settings = settings or get_settings()
    if not is_configured(settings):
        raise AuthError(SETUP_REQUIRED_MESSAGE)
    return create_client(settings.supabase_url, settings.supabase_anon_key)


def _to_result(response, email: str) -> AuthResult:
    session = getattr(response, "session", None)
    user = getattr(response, "user", None)
    return AuthResult(
        email=getattr(user, "email", None) or email,
        access_token=getattr(session, "access_token", None),
        refresh_token=getattr(session, "refresh_token", None),
    )


def sign_in(client: Client, email: str, password: str) -> AuthResult:
    try:
        response = client.auth.sign_in_with_password({"email": email, "password": password})
    except Exception as e:
        logging.warning(f"Sign-in failed for {email}: {e}")
        raise AuthError(str(e)) from e

    logging.info(f"Signed in {email}")
    return _to_result(response, email)


def sign_up(client: Client, email: str, password: str) -> AuthResult:
    """Create an account. The result has no access token while email confirmation is pending."""
    try:
        response = client.auth.sign_up({"email": email, "password": password})
    except Exception as e:
        logging.warning(f"Sign-up failed for {email}: {e}")
        raise AuthError(str(e)) from e

    result = _to_result(response, email)
    logging.info(f"Signed up {email} (session={'yes' if result.signed_in else 'pending confirmation'})")
    return result


def sign_out(client: Client, auth: Optional[AuthResult]) -> None:
    """Revoke the session held in ``auth`` on the provider."""
    if auth is None or not auth.signed_in:
        return
    try:
        client.auth.admin.sign_out(auth.access_token)
    except Exception as e:
        raise AuthError(str(e)) from e
    logging.info(f"Signed out {auth.email}")
