"""
Page flows for the terminal client.

Each guarded page mounts a session guard for its whole run, loads the
profile through the synchronizer and returns either the resulting
ProfileState or a Redirect to login.
"""

from typing import Optional, Union

from modules.profiles.models import AvatarFile, ProfilePatch
from modules.profiles.state import ProfileState
from modules.session.context import SessionContext
from modules.session.models import Redirect

from .container import ServiceContainer

DASHBOARD = "/dashboard"
PROFILE = "/profile"

PageResult = Union[ProfileState, Redirect]


async def dashboard_page(container: ServiceContainer) -> PageResult:
    """Load the dashboard, bootstrapping the profile on first login."""

    async def content(context: SessionContext) -> ProfileState:
        return await ProfileState.load(container.profiles, context.current_user)

    return await container.guarded_view().render(DASHBOARD, content)


async def profile_page(
    container: ServiceContainer,
    patch: Optional[ProfilePatch] = None,
    avatar: Optional[AvatarFile] = None,
) -> PageResult:
    """
    Load the profile page and apply any edits.

    The avatar is uploaded before the field edits are saved. A failure is
    left on the returned state's `error` and skips the remaining edit.
    """

    async def content(context: SessionContext) -> ProfileState:
        state = await ProfileState.load(container.profiles, context.current_user)
        if avatar is not None:
            await state.save_avatar(avatar)
        if patch is not None and state.error is None:
            await state.save_fields(patch)
        return state

    return await container.guarded_view().render(PROFILE, content)


async def sign_out_page(container: ServiceContainer) -> Optional[Redirect]:
    """Sign out from a guarded page; returns the redirect if nobody was signed in."""

    async def content(context: SessionContext) -> None:
        await context.sign_out()

    result = await container.guarded_view().render(DASHBOARD, content)
    return result if isinstance(result, Redirect) else None
