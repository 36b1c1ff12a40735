"""Tests for the view-facing profile state."""

import asyncio
from datetime import date, datetime, timezone

import pytest

from modules.profiles.models import AvatarFile, ProfilePatch, ProfileRecord, ProfileStatus
from modules.profiles.service import ProfileSynchronizer
from modules.profiles.state import ProfileState

NOW = datetime(2024, 6, 15, 10, 0, tzinfo=timezone.utc)


class GatedSynchronizer(ProfileSynchronizer):
    """Holds writes open until released, to observe in-flight status."""

    def __init__(self, store):
        super().__init__(store, clock=lambda: NOW)
        self.release = asyncio.Event()
        self.started = asyncio.Event()

    async def update_fields(self, user_id, patch):
        self.started.set()
        await self.release.wait()
        return await super().update_fields(user_id, patch)

    async def update_avatar(self, user_id, file_bytes, file_extension):
        self.started.set()
        await self.release.wait()
        return await super().update_avatar(user_id, file_bytes, file_extension)


@pytest.fixture
def synchronizer(record_store):
    return ProfileSynchronizer(record_store, clock=lambda: NOW)


class TestLoad:
    @pytest.mark.asyncio
    async def test_first_login_shows_placeholder(self, synchronizer, test_session):
        """A bootstrapped profile has no name, so the initials placeholder is '?'."""
        state = await ProfileState.load(synchronizer, test_session)

        assert state.profile.full_name is None
        assert state.initials == "?"
        assert state.avatar_url is None
        assert state.display_name == test_session.email
        assert state.status == ProfileStatus.IDLE

    @pytest.mark.asyncio
    async def test_resolves_existing_avatar(self, synchronizer, record_store, test_session):
        record_store.records[test_session.user_id] = ProfileRecord(
            user_id=test_session.user_id,
            full_name="Jane Doe",
            avatar_ref="a.png",
            updated_at=NOW,
        )

        state = await ProfileState.load(synchronizer, test_session)

        assert state.avatar_url.endswith("/avatars/a.png")
        assert state.initials == "JD"
        assert state.display_name == "Jane Doe"


class TestSaveFields:
    @pytest.mark.asyncio
    async def test_success(self, synchronizer, test_session):
        state = await ProfileState.load(synchronizer, test_session)

        ok = await state.save_fields(ProfilePatch(full_name="Jane Doe", birthday=date(1990, 6, 15)))

        assert ok is True
        assert state.message == "Profile updated successfully!"
        assert state.error is None
        assert state.profile.age == 34
        assert state.status == ProfileStatus.IDLE

    @pytest.mark.asyncio
    async def test_failure_keeps_last_known_good(self, synchronizer, record_store, test_session):
        """A rejected write leaves the profile as it was and reports the error."""
        state = await ProfileState.load(synchronizer, test_session)
        before = state.profile
        record_store.fail_update = True

        ok = await state.save_fields(ProfilePatch(full_name="Jane Doe"))

        assert ok is False
        assert state.error == "Error updating profile"
        assert state.message is None
        assert state.profile == before
        assert state.is_saving is False

    @pytest.mark.asyncio
    async def test_retry_after_failure(self, synchronizer, record_store, test_session):
        state = await ProfileState.load(synchronizer, test_session)
        record_store.fail_update = True
        await state.save_fields(ProfilePatch(full_name="Jane Doe"))

        record_store.fail_update = False
        assert await state.save_fields(ProfilePatch(full_name="Jane Doe")) is True
        assert state.error is None
        assert state.profile.full_name == "Jane Doe"

    @pytest.mark.asyncio
    async def test_second_save_refused_while_in_flight(self, record_store, test_session):
        synchronizer = GatedSynchronizer(record_store)
        state = await ProfileState.load(synchronizer, test_session)

        first = asyncio.create_task(state.save_fields(ProfilePatch(full_name="First")))
        await synchronizer.started.wait()
        assert state.status == ProfileStatus.SAVING
        assert state.is_saving is True

        assert await state.save_fields(ProfilePatch(full_name="Second")) is False
        assert "still in progress" in state.error

        synchronizer.release.set()
        assert await first is True
        assert state.profile.full_name == "First"
        assert state.status == ProfileStatus.IDLE


class TestSaveAvatar:
    @pytest.mark.asyncio
    async def test_success_updates_url(self, synchronizer, record_store, test_session):
        state = await ProfileState.load(synchronizer, test_session)

        ok = await state.save_avatar(AvatarFile(filename="me.png", content=b"\x89PNG"))

        assert ok is True
        assert state.message == "Avatar updated successfully!"
        assert state.avatar_url.endswith(f"/avatars/{state.profile.avatar_ref}")
        assert state.profile.avatar_ref in record_store.blobs

    @pytest.mark.asyncio
    async def test_failed_upload_keeps_old_avatar(self, synchronizer, record_store, test_session):
        state = await ProfileState.load(synchronizer, test_session)
        record_store.fail_upload = True

        ok = await state.save_avatar(AvatarFile(filename="me.png", content=b"\x89PNG"))

        assert ok is False
        assert state.error == "Error uploading avatar!"
        assert state.profile.avatar_ref is None
        assert state.avatar_url is None
        assert state.is_uploading is False

    @pytest.mark.asyncio
    async def test_invalid_file_reported(self, synchronizer, test_session):
        state = await ProfileState.load(synchronizer, test_session)
        assert await state.save_avatar(AvatarFile(filename="notes.txt", content=b"hi")) is False
        assert "Unsupported" in state.error

    @pytest.mark.asyncio
    async def test_upload_and_save_may_overlap(self, record_store, test_session):
        """One field save and one upload may be in flight together."""
        synchronizer = GatedSynchronizer(record_store)
        state = await ProfileState.load(synchronizer, test_session)

        upload = asyncio.create_task(
            state.save_avatar(AvatarFile(filename="me.png", content=b"\x89PNG"))
        )
        await synchronizer.started.wait()
        assert state.status == ProfileStatus.UPLOADING

        save = asyncio.create_task(state.save_fields(ProfilePatch(full_name="Jane")))
        await asyncio.sleep(0)
        # Both in flight: the summary reports the upload, the flags report both
        assert state.status == ProfileStatus.UPLOADING
        assert state.is_uploading is True
        assert state.is_saving is True

        synchronizer.release.set()
        assert await upload is True
        assert await save is True
        assert state.status == ProfileStatus.IDLE
