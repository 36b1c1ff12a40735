"""
Service wiring for the terminal client.

Creates the Supabase-backed implementations behind each interface. Tests
swap in fakes by constructing the container with their own provider and
store.
"""

from typing import Optional

from modules.auth.interfaces import IAuthProvider
from modules.auth.service import AuthService
from modules.profiles.exceptions import RecordLoadError
from modules.profiles.interfaces import IProfileSynchronizer, IRecordStore
from modules.profiles.service import ProfileSynchronizer
from modules.session.view import GuardedView
from shared.config import Settings, get_settings


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached. Use
    `from_supabase()` for the real client.
    """

    def __init__(
        self,
        provider: IAuthProvider,
        store: IRecordStore,
        settings: Optional[Settings] = None,
    ) -> None:
        self._provider = provider
        self._store = store
        self._settings = settings or get_settings()
        self._auth_service: Optional[AuthService] = None
        self._profiles: Optional[IProfileSynchronizer] = None

    @classmethod
    async def from_supabase(cls) -> "ServiceContainer":
        """Build a container over the shared Supabase client."""
        from modules.auth.provider import SupabaseAuthProvider
        from modules.profiles.repository import ProfileRepository
        from shared.database import get_supabase_client

        client = await get_supabase_client()
        return cls(SupabaseAuthProvider(client), ProfileRepository(client))

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def provider(self) -> IAuthProvider:
        return self._provider

    @property
    def auth(self) -> AuthService:
        """Get the auth flows instance."""
        if self._auth_service is None:
            self._auth_service = AuthService(self._provider, self._settings)
        return self._auth_service

    @property
    def profiles(self) -> IProfileSynchronizer:
        """Get the profile synchronizer instance."""
        if self._profiles is None:
            self._profiles = ProfileSynchronizer(self._store)
        return self._profiles

    def guarded_view(self) -> GuardedView:
        """A guarded-view wrapper; an unloadable profile sends the viewer to login."""
        return GuardedView(
            self._provider,
            deny_on=(RecordLoadError,),
            login_path=self._settings.login_path,
        )
