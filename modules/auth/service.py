"""
Authentication flows.

Each flow validates its form input, calls the auth provider and returns
either a result or raises an exception whose message is ready to show on
the form. Nothing here touches the profile record: the profile is
bootstrapped by the profile synchronizer when a guarded view first loads.
"""

import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from shared.config import Settings, get_settings
from shared.exceptions import ValidationError

from .exceptions import PasswordMismatchError, WeakPasswordError
from .interfaces import IAuthProvider
from .models import Credentials, LoginResult, PasswordResetRequest, Registration, SignUpResult

logger = logging.getLogger(__name__)

DEFAULT_LANDING = "/dashboard"


def _form_error(error: PydanticValidationError) -> ValidationError:
    """Collapse a pydantic error into a single form message."""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "input"
    return ValidationError(f"Invalid {field}: {first['msg']}", code="INVALID_FORM")


class AuthService:
    """Login, registration and password flows over an IAuthProvider."""

    def __init__(self, provider: IAuthProvider, settings: Optional[Settings] = None):
        self._provider = provider
        self._settings = settings or get_settings()

    def _check_new_password(self, password: str, confirm_password: str) -> None:
        if len(password) < self._settings.min_password_length:
            raise WeakPasswordError(self._settings.min_password_length)
        if password != confirm_password:
            raise PasswordMismatchError()

    async def login(
        self,
        email: str,
        password: str,
        next_location: Optional[str] = None,
    ) -> LoginResult:
        """
        Sign in and work out where to send the viewer.

        Args:
            email: Account email
            password: Account password
            next_location: Location the viewer originally asked for, carried
                by the session guard's redirect

        Returns:
            LoginResult with the session and the next location

        Raises:
            InvalidCredentialsError, EmailUnverifiedError, AuthProviderError
        """
        try:
            credentials = Credentials(email=email, password=password)
        except PydanticValidationError as e:
            raise _form_error(e) from e

        session = await self._provider.sign_in_with_credentials(
            credentials.email, credentials.password
        )
        logger.info(f"Signed in user {session.user_id}")
        return LoginResult(session=session, next_location=next_location or DEFAULT_LANDING)

    async def register(
        self,
        email: str,
        password: str,
        confirm_password: str,
        full_name: Optional[str] = None,
    ) -> SignUpResult:
        """Create an account; the confirmation link lands on the auth callback."""
        try:
            registration = Registration(
                email=email,
                password=password,
                confirm_password=confirm_password,
                full_name=full_name.strip() if full_name else None,
            )
        except PydanticValidationError as e:
            raise _form_error(e) from e

        self._check_new_password(registration.password, registration.confirm_password)

        result = await self._provider.sign_up(
            registration.email,
            registration.password,
            registration.full_name,
            self._settings.auth_callback_url,
        )
        logger.info(f"Registered new account (confirmation required: {result.confirmation_required})")
        return result

    async def request_password_reset(self, email: str) -> str:
        """Send a reset link; returns the confirmation message."""
        try:
            request = PasswordResetRequest(email=email)
        except PydanticValidationError as e:
            raise _form_error(e) from e

        await self._provider.request_password_reset(
            request.email, self._settings.password_reset_url
        )
        return "Password reset link has been sent to your email!"

    async def change_password(self, new_password: str, confirm_password: str) -> str:
        """
        Set a new password for the signed-in user.

        Serves both the dashboard's change-password form and the reset page
        reached through a recovery link.
        """
        self._check_new_password(new_password, confirm_password)
        await self._provider.update_password(new_password)
        logger.info("Password updated")
        return "Password updated successfully!"

    async def complete_callback(self, auth_code: str) -> LoginResult:
        """Finish a confirmation or recovery redirect."""
        if not auth_code:
            raise ValidationError("Missing authorization code", code="INVALID_FORM")
        session = await self._provider.exchange_code_for_session(auth_code)
        logger.info(f"Completed auth callback for user {session.user_id}")
        return LoginResult(session=session, next_location=DEFAULT_LANDING)

    async def sign_out(self) -> None:
        await self._provider.sign_out()
