"""
Session guard.

Decides whether a guarded view may render, based on the auth provider's
current session and on every session-change notification delivered while
the view is mounted. An expired session counts as no session. Errors
during the check deny access (fail closed).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from shared.config import get_settings
from shared.exceptions import PortalError
from shared.models import Session

from modules.auth.interfaces import IAuthProvider, SessionSubscription
from modules.auth.models import SessionChange

from .models import AccessDecision, AccessStatus

logger = logging.getLogger(__name__)


class SessionGuard:
    """
    Access gate for one guarded view.

    Lifecycle: create, then `async with guard.mount(location):` for as long
    as the view is shown. Inside the block `guard.decision` always reflects
    the most recent information: the initial check, then each notification.
    """

    def __init__(self, provider: IAuthProvider, login_path: Optional[str] = None):
        self._provider = provider
        self._login_path = login_path or get_settings().login_path
        self._location: Optional[str] = None
        self._decision = AccessDecision(status=AccessStatus.PENDING)
        self._subscription: Optional[SessionSubscription] = None
        # Bumped on every notification so a slow initial check cannot
        # overwrite a newer notification.
        self._version = 0

    @property
    def decision(self) -> AccessDecision:
        return self._decision

    @property
    def login_path(self) -> str:
        return self._login_path

    @property
    def mounted(self) -> bool:
        return self._subscription is not None

    def _decide(self, session: Optional[Session]) -> AccessDecision:
        if session is None or session.is_expired():
            return AccessDecision(
                status=AccessStatus.DENIED,
                redirect_to=self._login_path,
                next_location=self._location,
            )
        return AccessDecision(status=AccessStatus.ALLOWED, session=session)

    def _on_session_change(self, change: SessionChange) -> None:
        if not self.mounted:
            logger.debug(f"Dropping {change.event.value} delivered after unmount")
            return
        self._version += 1
        self._decision = self._decide(change.session)
        logger.debug(f"Session change {change.event.value}: {self._decision.status.value}")

    def subscribe(self, location: Optional[str] = None) -> None:
        """Start listening for session changes for the view at `location`."""
        if self.mounted:
            return
        self._location = location
        self._subscription = self._provider.subscribe_to_session_changes(self._on_session_change)

    def unsubscribe(self) -> None:
        """Release the subscription. Later notifications are ignored."""
        if self._subscription is not None:
            subscription, self._subscription = self._subscription, None
            subscription.unsubscribe()

    async def check_access(self) -> AccessDecision:
        """
        Query the provider for the current session and update the decision.

        Any failure is treated exactly like "no session".
        """
        version = self._version
        try:
            session = await self._provider.get_current_session()
        except PortalError as e:
            logger.warning(f"Session check failed, denying access: {e.message}")
            session = None

        if version != self._version:
            # A notification arrived while the check was in flight; it is newer.
            return self._decision

        self._decision = self._decide(session)
        return self._decision

    @asynccontextmanager
    async def mount(self, location: Optional[str] = None) -> AsyncIterator["SessionGuard"]:
        """Subscribe, run the initial check, and always unsubscribe on exit."""
        self.subscribe(location)
        try:
            await self.check_access()
            yield self
        finally:
            self.unsubscribe()
