"""
Explicit session context handed to guarded views.

Views read the signed-in user from here instead of each asking the auth
provider on their own.
"""

import logging

from shared.models import Session

from modules.auth.interfaces import IAuthProvider

logger = logging.getLogger(__name__)


class SessionContext:
    """The signed-in user plus the sign-out action."""

    def __init__(self, session: Session, provider: IAuthProvider):
        self._session = session
        self._provider = provider
        self._signed_out = False

    @property
    def current_user(self) -> Session:
        return self._session

    @property
    def signed_out(self) -> bool:
        return self._signed_out

    async def sign_out(self) -> None:
        """
        End the session with the provider.

        Raises:
            AuthProviderError: If the provider rejects the request
        """
        await self._provider.sign_out()
        self._signed_out = True
        logger.info(f"Signed out user {self._session.user_id}")
