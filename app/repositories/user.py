from __future__ import annotations

import logging
import os
from typing import Dict, Iterable, Optional

from passlib.context import CryptContext

from app.core.config import SeedUser, Settings
from app.core.security import build_password_context, dummy_verify, get_password_hash, verify_password
from app.db.models.user import UserRecord

logger = logging.getLogger("auth.users")


class CredentialStoreProtocol:
    def find_by_username_password(self, username: str, password: str) -> Optional[UserRecord]:
        raise NotImplementedError

    def find_by_id(self, user_id: int) -> Optional[UserRecord]:
        raise NotImplementedError


class MemoryCredentialStore(CredentialStoreProtocol):
    """Fixed identity directory held in process memory.

    Membership is immutable after construction. Lookups are pure; password
    checks go through the passlib context so they are salted and constant-time.
    """

    def __init__(self, users: Iterable[UserRecord], *, context: Optional[CryptContext] = None) -> None:
        self._context = context
        self._by_id: Dict[int, UserRecord] = {}
        self._by_username: Dict[str, UserRecord] = {}
        for user in users:
            if user.id in self._by_id or user.username in self._by_username:
                raise ValueError(f"duplicate user id/username: {user.id}/{user.username}")
            self._by_id[user.id] = user
            self._by_username[user.username] = user

    @classmethod
    def from_seed(cls, seed_users: Iterable[SeedUser], *, context: Optional[CryptContext] = None) -> "MemoryCredentialStore":
        users = []
        for seed in seed_users:
            if seed.password_hash:
                password_hash = seed.password_hash
            else:
                password_hash = get_password_hash(seed.password.get_secret_value(), context=context)
            users.append(UserRecord(id=seed.id, username=seed.username, password_hash=password_hash))
        logger.info("Loaded %d users into the credential store", len(users))
        return cls(users, context=context)

    def __len__(self) -> int:
        return len(self._by_id)

    def find_by_username_password(self, username: str, password: str) -> Optional[UserRecord]:
        user = self._by_username.get(username)
        if user is None:
            dummy_verify(context=self._context)
            return None
        if not verify_password(password, user.password_hash, context=self._context):
            return None
        return user

    def find_by_id(self, user_id: int) -> Optional[UserRecord]:
        return self._by_id.get(user_id)


def _import_string(path: str):
    module_path, _, class_name = path.partition(":")
    if not module_path or not class_name:
        raise ValueError("CREDENTIAL_STORE_IMPL must be 'module.sub:ClassName'")
    module = __import__(module_path, fromlist=[class_name])
    return getattr(module, class_name)


def build_credential_store(settings: Settings) -> CredentialStoreProtocol:
    """Build the credential store for an app instance.

    `CREDENTIAL_STORE_IMPL` may name an alternative class exposing the same
    `from_seed(seed_users, context=...)` constructor.
    """
    context = build_password_context(settings.password_hash_schemes_list)
    impl_path = os.environ.get("CREDENTIAL_STORE_IMPL")
    cls = _import_string(impl_path) if impl_path else MemoryCredentialStore
    return cls.from_seed(settings.SEED_USERS, context=context)
