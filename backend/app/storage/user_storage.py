"""
User Storage - Persistent accounts and profiles on top of StorageInterface.

One JSON document per user under ``users/`` plus an email index used for
login. Profile updates are merged and written back in full; concurrent
updates for the same user are last-write-wins.
"""

import asyncio
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, Optional

from ..core.exceptions import DuplicateIdentity, StoreError
from ..models import Profile, ProfileUpdate
from .interface import StorageInterface

logger = logging.getLogger(__name__)


class UserStorage:
    """
    Manages persistent storage of users and their profiles.
    """

    def __init__(self, storage: StorageInterface):
        """
        Args:
            storage: StorageInterface implementation (typically LocalStorage)
        """
        self.storage = storage
        self.users_dir = "users"
        self._email_index_path = f"{self.users_dir}/email_index.json"
        self._create_lock = asyncio.Lock()

    def _user_path(self, user_id: str) -> str:
        return f"{self.users_dir}/{user_id}.json"

    async def _load_json(self, path: str) -> Optional[Dict]:
        content = await self.storage.load(path)
        if content is None:
            return None
        try:
            return json.loads(content.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error(f"Corrupt document {path}: {e}")
            raise StoreError(f"Corrupt document {path}") from e

    async def _save_user(self, user: Dict) -> None:
        document = dict(user)
        document['created_at'] = user['created_at'].isoformat()
        document['updated_at'] = user['updated_at'].isoformat()
        content = json.dumps(document, indent=2, ensure_ascii=False)
        await self.storage.save(self._user_path(user['user_id']), content)

    async def _load_email_index(self) -> Dict[str, str]:
        return await self._load_json(self._email_index_path) or {}

    async def get_user(self, user_id: str) -> Optional[Dict]:
        """
        Get user by user_id.

        Returns:
            Optional[Dict]: User data (including ``hashed_password``) or None
        """
        user = await self._load_json(self._user_path(user_id))
        if user is None:
            return None

        user['created_at'] = datetime.fromisoformat(user['created_at'])
        user['updated_at'] = datetime.fromisoformat(user['updated_at'])
        user['profile'] = Profile.model_validate(user.get('profile') or {})
        return user

    async def get_user_by_email(self, email: str) -> Optional[Dict]:
        index = await self._load_email_index()
        user_id = index.get(email.lower())
        if user_id is None:
            return None
        return await self.get_user(user_id)

    async def create_user(self, email: str, hashed_password: str) -> Dict:
        """
        Create a new user with an empty profile.

        Raises:
            DuplicateIdentity: If the email is already registered
        """
        email = email.lower()
        async with self._create_lock:
            index = await self._load_email_index()
            if email in index:
                raise DuplicateIdentity()

            now = datetime.now(timezone.utc)
            user = {
                "user_id": str(uuid.uuid4()),
                "email": email,
                "hashed_password": hashed_password,
                "created_at": now,
                "updated_at": now,
                "is_active": True,
                "profile": Profile(),
            }
            await self._save_user({**user, "profile": user["profile"].model_dump(mode="json")})

            index[email] = user["user_id"]
            await self.storage.save(self._email_index_path, json.dumps(index, indent=2))

        logger.info(f"Created user {user['user_id']}")
        return user

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        user = await self.get_user(user_id)
        if user is None:
            return None
        return user['profile']

    async def put_profile(self, user_id: str, update: ProfileUpdate) -> Optional[Profile]:
        """
        Merge ``update`` into the stored profile and persist the result.

        Returns:
            Optional[Profile]: The new profile, or None if the user does not exist
        """
        user = await self.get_user(user_id)
        if user is None:
            return None

        profile = update.merge_into(user['profile'])
        user['profile'] = profile.model_dump(mode="json")
        user['updated_at'] = datetime.now(timezone.utc)
        await self._save_user(user)

        return profile


# Global user storage instance
_user_storage: Optional[UserStorage] = None


def init_user_storage(storage: StorageInterface) -> UserStorage:
    """Initialize the global user storage instance."""
    global _user_storage
    _user_storage = UserStorage(storage)
    return _user_storage


def get_user_storage() -> UserStorage:
    """
    Get the global user storage instance.

    Raises:
        RuntimeError: If user storage has not been initialized
    """
    if _user_storage is None:
        raise RuntimeError("User storage not initialized. Call init_user_storage() first.")
    return _user_storage
