"""
Tests for the profile store: accounts, email index and profile merging.
"""

import asyncio
from datetime import date

import pytest

from app.core.exceptions import DuplicateIdentity, StoreError
from app.models import Gender, LifestyleUpdate, ProfileUpdate


class TestUsers:

    @pytest.mark.asyncio
    async def test_create_and_lookup(self, users):
        user = await users.create_user("Bob@Example.com", "hash")

        assert user["email"] == "bob@example.com"
        by_email = await users.get_user_by_email("BOB@example.com")
        assert by_email["user_id"] == user["user_id"]
        assert by_email["hashed_password"] == "hash"

    @pytest.mark.asyncio
    async def test_new_user_has_partial_profile(self, users):
        user = await users.create_user("bob@example.com", "hash")

        profile = await users.get_profile(user["user_id"])

        assert profile.birthdate is None
        assert profile.lifestyle.smoker is False

    @pytest.mark.asyncio
    async def test_duplicate_email(self, users):
        await users.create_user("bob@example.com", "hash")
        with pytest.raises(DuplicateIdentity):
            await users.create_user("BOB@example.com", "other")

    @pytest.mark.asyncio
    async def test_concurrent_registration_only_one_wins(self, users):
        results = await asyncio.gather(
            users.create_user("race@example.com", "a"),
            users.create_user("race@example.com", "b"),
            return_exceptions=True,
        )
        assert sum(isinstance(r, DuplicateIdentity) for r in results) == 1

    @pytest.mark.asyncio
    async def test_unknown_user(self, users):
        assert await users.get_user("missing") is None
        assert await users.get_user_by_email("nobody@example.com") is None
        assert await users.get_profile("missing") is None
        assert await users.put_profile("missing", ProfileUpdate()) is None


class TestProfileMerge:

    @pytest.mark.asyncio
    async def test_omitted_fields_keep_prior_values(self, users):
        user_id = (await users.create_user("bob@example.com", "hash"))["user_id"]

        await users.put_profile(user_id, ProfileUpdate(
            birthdate=date(1985, 6, 15),
            gender=Gender.MALE,
            lifestyle=LifestyleUpdate(smoker=True, regular_exercise=True),
        ))
        profile = await users.put_profile(user_id, ProfileUpdate(height=180))

        assert profile.birthdate == date(1985, 6, 15)
        assert profile.gender is Gender.MALE
        assert profile.height == 180
        assert profile.lifestyle.smoker is True
        assert profile.lifestyle.regular_exercise is True

    @pytest.mark.asyncio
    async def test_lifestyle_flags_merge_independently(self, users):
        user_id = (await users.create_user("bob@example.com", "hash"))["user_id"]

        await users.put_profile(user_id, ProfileUpdate(lifestyle=LifestyleUpdate(smoker=True)))
        await users.put_profile(user_id, ProfileUpdate(lifestyle=LifestyleUpdate(healthy_diet=True)))
        profile = await users.put_profile(user_id, ProfileUpdate(lifestyle=LifestyleUpdate(smoker=False)))

        assert profile.lifestyle.smoker is False
        assert profile.lifestyle.healthy_diet is True
        assert profile.lifestyle.drinker is False

    @pytest.mark.asyncio
    async def test_profile_survives_reload(self, users, storage):
        from app.storage import UserStorage

        user_id = (await users.create_user("bob@example.com", "hash"))["user_id"]
        await users.put_profile(user_id, ProfileUpdate(birthdate=date(2000, 2, 29), nationality="NZ"))

        reloaded = await UserStorage(storage).get_profile(user_id)

        assert reloaded.birthdate == date(2000, 2, 29)
        assert reloaded.nationality == "NZ"

    def test_camel_case_payload(self):
        update = ProfileUpdate.model_validate({
            "birthdate": "1990-01-01",
            "lifestyle": {"regularExercise": True, "healthyDiet": False},
        })
        assert update.lifestyle.regular_exercise is True
        assert update.lifestyle.healthy_diet is False
        assert update.lifestyle.smoker is None


class TestStorageFailures:

    @pytest.mark.asyncio
    async def test_corrupt_document(self, users, storage):
        user_id = (await users.create_user("bob@example.com", "hash"))["user_id"]
        await storage.save(f"users/{user_id}.json", "{not json")

        with pytest.raises(StoreError):
            await users.get_profile(user_id)

    @pytest.mark.asyncio
    async def test_path_traversal_rejected(self, storage):
        with pytest.raises(ValueError):
            await storage.load("../outside.json")

    @pytest.mark.asyncio
    async def test_save_load_delete(self, storage):
        await storage.save("a/b.txt", "hello")
        assert await storage.exists("a/b.txt")
        assert await storage.load("a/b.txt") == b"hello"
        assert await storage.delete("a/b.txt")
        assert await storage.load("a/b.txt") is None
        assert not await storage.delete("a/b.txt")
