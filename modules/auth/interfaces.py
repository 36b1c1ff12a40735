"""
Authentication module interface.

Other modules depend on IAuthProvider, never on the Supabase client
directly. This keeps the session guard testable with an in-memory provider.
"""

from typing import Callable, Optional, Protocol, runtime_checkable

from shared.models import Session

from .models import SessionChange, SignUpResult


SessionChangeHandler = Callable[[SessionChange], None]


@runtime_checkable
class SessionSubscription(Protocol):
    """Handle for a registered session-change handler."""

    def unsubscribe(self) -> None:
        """Stop delivering notifications to the handler. Safe to call twice."""
        ...


@runtime_checkable
class IAuthProvider(Protocol):
    """
    Capabilities consumed from the remote auth provider.

    The provider owns credential checks, session tokens and refresh.
    Implementations translate provider failures into the auth exceptions.
    """

    async def get_current_session(self) -> Optional[Session]:
        """
        Get the current session, verified against the provider.

        Returns:
            The session, or None when nobody is signed in

        Raises:
            AuthProviderError: On transport or provider failure
        """
        ...

    def subscribe_to_session_changes(self, handler: SessionChangeHandler) -> SessionSubscription:
        """Register a handler for session-change notifications."""
        ...

    async def sign_in_with_credentials(self, email: str, password: str) -> Session:
        """
        Sign in with email and password.

        Raises:
            InvalidCredentialsError: If the credentials are rejected
            EmailUnverifiedError: If the email has not been confirmed
            AuthProviderError: On any other failure
        """
        ...

    async def sign_up(
        self,
        email: str,
        password: str,
        full_name: Optional[str],
        return_url: str,
    ) -> SignUpResult:
        """Register a new account; the confirmation link returns to return_url."""
        ...

    async def sign_out(self) -> None:
        """End the current session."""
        ...

    async def request_password_reset(self, email: str, return_url: str) -> None:
        """Email a password reset link that returns to return_url."""
        ...

    async def update_password(self, new_password: str) -> None:
        """Set a new password for the signed-in user."""
        ...

    async def exchange_code_for_session(self, auth_code: str) -> Session:
        """Complete a PKCE redirect (confirmation or recovery link)."""
        ...
