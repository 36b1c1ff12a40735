"""
Supabase implementation of the auth provider capability.

Wraps `AsyncClient.auth` and converts Supabase sessions and errors into
the portal's own models and exceptions.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
from supabase import AsyncClient, AuthApiError, AuthError, AuthSessionMissingError

from shared.models import Session

from .exceptions import (
    AuthProviderError,
    EmailUnverifiedError,
    InvalidCredentialsError,
    NoSessionError,
)
from .interfaces import IAuthProvider, SessionChangeHandler
from .models import AuthChangeEvent, SessionChange, SignUpResult

logger = logging.getLogger(__name__)


def to_session(supabase_session: Any) -> Session:
    """Map a Supabase session (with its user) to the portal Session model."""
    user = supabase_session.user
    expires_at = None
    if supabase_session.expires_at:
        expires_at = datetime.fromtimestamp(supabase_session.expires_at, tz=timezone.utc)

    return Session(
        user_id=str(user.id),
        email=user.email,
        email_verified=user.email_confirmed_at is not None,
        full_name=(user.user_metadata or {}).get("full_name"),
        created_at=user.created_at,
        access_token=supabase_session.access_token,
        expires_at=expires_at,
    )


def translate_auth_error(error: Exception) -> Exception:
    """Map a Supabase/transport error to the portal's auth exceptions."""
    if isinstance(error, AuthSessionMissingError):
        return NoSessionError()

    if isinstance(error, AuthApiError):
        code = (getattr(error, "code", None) or "").lower()
        message = error.message or ""
        if code == "email_not_confirmed" or "email not confirmed" in message.lower():
            return EmailUnverifiedError()
        if code == "invalid_credentials" or "invalid login credentials" in message.lower():
            return InvalidCredentialsError(message or "Invalid login credentials")
        return AuthProviderError(message or "Authentication request failed", status=error.status)

    if isinstance(error, AuthError):
        return AuthProviderError(error.message or "Authentication request failed")

    return AuthProviderError(f"Could not reach the authentication service: {error}")


class SupabaseSubscription:
    """Idempotent wrapper around a Supabase auth-state subscription."""

    def __init__(self, subscription: Any) -> None:
        self._subscription = subscription
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if self._active:
            self._active = False
            self._subscription.unsubscribe()


class SupabaseAuthProvider(IAuthProvider):
    """Auth provider backed by Supabase Auth."""

    def __init__(self, client: AsyncClient):
        self._auth = client.auth

    async def get_current_session(self) -> Optional[Session]:
        """
        Get the current session.

        The stored session is re-verified against the server (the same
        check the web client makes with getUser), so a revoked session is
        reported as absent rather than trusted from local storage.
        """
        try:
            supabase_session = await self._auth.get_session()
            if supabase_session is None:
                return None
            response = await self._auth.get_user(supabase_session.access_token)
        except AuthSessionMissingError:
            return None
        except (AuthError, httpx.HTTPError) as e:
            raise translate_auth_error(e) from e

        if response is None or response.user is None:
            return None

        session = to_session(supabase_session)
        # Prefer the server's copy of the user over the cached one
        return session.model_copy(
            update={
                "email_verified": response.user.email_confirmed_at is not None,
                "full_name": (response.user.user_metadata or {}).get("full_name"),
            }
        )

    def subscribe_to_session_changes(self, handler: SessionChangeHandler) -> SupabaseSubscription:
        def _callback(event: str, supabase_session: Any) -> None:
            try:
                change_event = AuthChangeEvent(event)
            except ValueError:
                logger.debug(f"Ignoring unknown auth event: {event}")
                return
            session = to_session(supabase_session) if supabase_session else None
            handler(SessionChange(event=change_event, session=session))

        subscription = self._auth.on_auth_state_change(_callback)
        logger.debug("Subscribed to auth state changes")
        return SupabaseSubscription(subscription)

    async def sign_in_with_credentials(self, email: str, password: str) -> Session:
        try:
            response = await self._auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except (AuthError, httpx.HTTPError) as e:
            raise translate_auth_error(e) from e

        if response.session is None:
            raise AuthProviderError("Sign-in did not return a session")
        return to_session(response.session)

    async def sign_up(
        self,
        email: str,
        password: str,
        full_name: Optional[str],
        return_url: str,
    ) -> SignUpResult:
        options: dict[str, Any] = {"email_redirect_to": return_url}
        if full_name:
            options["data"] = {"full_name": full_name}

        try:
            response = await self._auth.sign_up(
                {"email": email, "password": password, "options": options}
            )
        except (AuthError, httpx.HTTPError) as e:
            raise translate_auth_error(e) from e

        confirmation_required = response.session is None
        return SignUpResult(
            user_id=str(response.user.id) if response.user else None,
            confirmation_required=confirmation_required,
            message=(
                "Registration successful! Please check your email to verify your account."
                if confirmation_required
                else "Registration successful! You can now sign in."
            ),
        )

    async def sign_out(self) -> None:
        try:
            await self._auth.sign_out()
        except (AuthError, httpx.HTTPError) as e:
            raise translate_auth_error(e) from e

    async def request_password_reset(self, email: str, return_url: str) -> None:
        try:
            await self._auth.reset_password_for_email(email, {"redirect_to": return_url})
        except (AuthError, httpx.HTTPError) as e:
            raise translate_auth_error(e) from e

    async def update_password(self, new_password: str) -> None:
        try:
            await self._auth.update_user({"password": new_password})
        except (AuthError, httpx.HTTPError) as e:
            raise translate_auth_error(e) from e

    async def exchange_code_for_session(self, auth_code: str) -> Session:
        try:
            response = await self._auth.exchange_code_for_session({"auth_code": auth_code})
        except (AuthError, httpx.HTTPError) as e:
            raise translate_auth_error(e) from e

        if response.session is None:
            raise NoSessionError("The link has expired or was already used")
        return to_session(response.session)
