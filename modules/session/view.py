"""
Guarded-view wrapper.

Mounts a SessionGuard around a view's content: the content renders only
when access is allowed, otherwise the caller gets a Redirect to login that
remembers where the viewer was going.
"""

import logging
from typing import Awaitable, Callable, Optional, TypeVar, Union

from shared.exceptions import PortalError

from modules.auth.interfaces import IAuthProvider

from .context import SessionContext
from .guard import SessionGuard
from .models import Redirect

logger = logging.getLogger(__name__)

T = TypeVar("T")

ViewRenderer = Callable[[SessionContext], Awaitable[T]]


class GuardedView:
    """
    Render content for signed-in viewers only.

    Args:
        provider: Auth provider the guard checks against
        deny_on: Exception types raised by the content that should be
            treated as an unusable session (for example a profile that
            cannot be loaded) and turned into a redirect to login
    """

    def __init__(
        self,
        provider: IAuthProvider,
        deny_on: tuple[type[PortalError], ...] = (),
        login_path: Optional[str] = None,
    ):
        self._provider = provider
        self._deny_on = deny_on
        self._login_path = login_path

    async def render(self, location: str, content: ViewRenderer[T]) -> Union[T, Redirect]:
        guard = SessionGuard(self._provider, login_path=self._login_path)
        async with guard.mount(location):
            decision = guard.decision
            if not decision.allowed or decision.session is None:
                return Redirect(
                    to=decision.redirect_to or guard.login_path,
                    next_location=location,
                    reason="Please sign in to continue.",
                )

            context = SessionContext(decision.session, self._provider)
            try:
                return await content(context)
            except self._deny_on as e:
                logger.warning(f"Denying {location}: {e.message}")
                return Redirect(
                    to=guard.login_path,
                    next_location=location,
                    reason=e.message,
                )
