"""
Shared test fixtures and utilities.

Provides in-memory stand-ins for the two remote capabilities (auth provider
and record store) so flows can be tested without a Supabase project.
"""

from datetime import datetime, timezone
from typing import Any, Optional

import pytest

from modules.auth.exceptions import AuthProviderError, InvalidCredentialsError
from modules.auth.models import AuthChangeEvent, SessionChange, SignUpResult
from modules.profiles.exceptions import (
    AvatarResolveError,
    AvatarUploadError,
    RecordLoadError,
    RecordWriteError,
)
from modules.profiles.models import ProfileRecord
from shared.config import Settings, get_settings
from shared.models import Session


def make_session(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    email_verified: bool = True,
    full_name: Optional[str] = None,
) -> Session:
    """Create a session as the auth provider would report it."""
    return Session(
        user_id=user_id,
        email=email,
        email_verified=email_verified,
        full_name=full_name,
        created_at=datetime(2024, 1, 2, tzinfo=timezone.utc),
        access_token=f"token-{user_id}",
    )


class FakeSubscription:
    def __init__(self, provider: "FakeAuthProvider", handler):
        self._provider = provider
        self.handler = handler
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._provider.handlers.remove(self.handler)


class FakeAuthProvider:
    """In-memory auth provider with a single account."""

    def __init__(self, session: Optional[Session] = None):
        self.session = session
        self.handlers: list = []
        self.accounts: dict[str, tuple[str, Session]] = {}
        self.fail_session_check = False
        self.sign_out_calls = 0
        self.reset_requests: list[tuple[str, str]] = []
        self.sign_ups: list[dict[str, Any]] = []
        self.passwords: list[str] = []

    def add_account(self, email: str, password: str, session: Session) -> None:
        self.accounts[email] = (password, session)

    def emit(self, session: Optional[Session], event: Optional[AuthChangeEvent] = None) -> None:
        """Deliver a session-change notification to every subscriber."""
        if event is None:
            event = AuthChangeEvent.SIGNED_IN if session else AuthChangeEvent.SIGNED_OUT
        self.session = session
        for handler in list(self.handlers):
            handler(SessionChange(event=event, session=session))

    async def get_current_session(self) -> Optional[Session]:
        if self.fail_session_check:
            raise AuthProviderError("Network unreachable")
        return self.session

    def subscribe_to_session_changes(self, handler) -> FakeSubscription:
        self.handlers.append(handler)
        return FakeSubscription(self, handler)

    async def sign_in_with_credentials(self, email: str, password: str) -> Session:
        account = self.accounts.get(email)
        if account is None or account[0] != password:
            raise InvalidCredentialsError()
        self.emit(account[1])
        return account[1]

    async def sign_up(self, email, password, full_name, return_url) -> SignUpResult:
        self.sign_ups.append(
            {"email": email, "password": password, "full_name": full_name, "return_url": return_url}
        )
        return SignUpResult(
            user_id="new-user",
            confirmation_required=True,
            message="Registration successful! Please check your email to verify your account.",
        )

    async def sign_out(self) -> None:
        self.sign_out_calls += 1
        self.emit(None)

    async def request_password_reset(self, email: str, return_url: str) -> None:
        self.reset_requests.append((email, return_url))

    async def update_password(self, new_password: str) -> None:
        self.passwords.append(new_password)

    async def exchange_code_for_session(self, auth_code: str) -> Session:
        # The confirmed user carries the name given at sign-up as metadata
        full_name = self.sign_ups[-1]["full_name"] if self.sign_ups else None
        session = make_session(full_name=full_name)
        self.emit(session)
        return session


class FakeRecordStore:
    """In-memory profile table and avatar bucket."""

    def __init__(self):
        self.records: dict[str, ProfileRecord] = {}
        self.blobs: dict[str, bytes] = {}
        self.upsert_calls = 0
        self.update_calls: list[tuple[str, dict[str, Any]]] = []
        self.fail_get = False
        self.fail_upload = False
        self.fail_update = False
        self.fail_resolve = False

    async def get_record(self, user_id: str) -> Optional[ProfileRecord]:
        if self.fail_get:
            raise RecordLoadError(user_id, "connection reset")
        return self.records.get(user_id)

    async def upsert_record(self, record: ProfileRecord) -> ProfileRecord:
        self.upsert_calls += 1
        stored = record.model_copy(
            update={"created_at": record.created_at or datetime(2024, 1, 2, tzinfo=timezone.utc)}
        )
        self.records[record.user_id] = stored
        return stored

    async def update_record(self, user_id: str, changes: dict[str, Any]) -> ProfileRecord:
        self.update_calls.append((user_id, changes))
        if self.fail_update:
            raise RecordWriteError(user_id, "permission denied")
        if user_id not in self.records:
            raise RecordWriteError(user_id, "profile not found")
        updated = self.records[user_id].model_copy(update=changes)
        self.records[user_id] = updated
        return updated

    async def upload_blob(self, key: str, content: bytes, content_type: str) -> None:
        if self.fail_upload:
            raise AvatarUploadError(key, "bucket quota exceeded")
        self.blobs[key] = content

    async def resolve_public_url(self, key: str) -> str:
        if self.fail_resolve:
            raise AvatarResolveError(key, "storage unavailable")
        return f"https://example.supabase.co/storage/v1/object/public/avatars/{key}"


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; start every test from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a test project."""
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_anon_key="test-anon-key",
        site_url="https://portal.example.com",
        base_path="/hrmis-web-beta",
        session_file=tmp_path / "session.json",
        _env_file=None,
    )


@pytest.fixture
def test_session() -> Session:
    return make_session()


@pytest.fixture
def auth_provider(test_session: Session) -> FakeAuthProvider:
    """A provider with the test user signed in."""
    return FakeAuthProvider(session=test_session)


@pytest.fixture
def record_store() -> FakeRecordStore:
    return FakeRecordStore()
