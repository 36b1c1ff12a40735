"""
Session module.

Guards authenticated-only views and hands them an explicit session context.

Public API:
- SessionGuard: Access decision kept current by session-change notifications
- GuardedView: Wrapper that renders content or returns a Redirect
- SessionContext: current_user and sign_out() for guarded views
"""

from .context import SessionContext
from .guard import SessionGuard
from .models import AccessDecision, AccessStatus, Redirect
from .view import GuardedView

__all__ = [
    "SessionGuard",
    "GuardedView",
    "SessionContext",
    "AccessDecision",
    "AccessStatus",
    "Redirect",
]
