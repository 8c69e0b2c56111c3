# tests/test_core/test_credential_store.py
import pytest

from app.core.config import SeedUser
from app.core.security import build_password_context, get_password_hash
from app.db.models.user import UserRecord
from app.repositories.user import MemoryCredentialStore, build_credential_store
from tests.fixtures.app import make_settings


@pytest.fixture
def context():
    return build_password_context(["pbkdf2_sha256"])


@pytest.fixture
def store(context) -> MemoryCredentialStore:
    seeds = [
        SeedUser(id=1, username="Ashwanth", password="kok123"),
        SeedUser(id=2, username="alice", password="123"),
    ]
    return MemoryCredentialStore.from_seed(seeds, context=context)


def test_seed_passwords_are_stored_hashed(store):
    user = store.find_by_id(1)
    assert user.password_hash != "kok123"
    assert user.password_hash.startswith("$pbkdf2-sha256$")


def test_lookup_by_username_and_password(store):
    assert store.find_by_username_password("alice", "123").id == 2
    assert store.find_by_username_password("alice", "wrong") is None
    assert store.find_by_username_password("nobody", "123") is None


def test_usernames_are_case_sensitive(store):
    assert store.find_by_username_password("ALICE", "123") is None


def test_lookup_by_id(store):
    assert store.find_by_id(1).username == "Ashwanth"
    assert store.find_by_id(999) is None
    assert len(store) == 2


def test_precomputed_hash_seeds(context):
    hashed = get_password_hash("s3cret", context=context)
    seeded = MemoryCredentialStore.from_seed(
        [SeedUser(id=9, username="ops", password_hash=hashed)], context=context
    )
    assert seeded.find_by_username_password("ops", "s3cret").id == 9


def test_unparseable_hash_never_authenticates(context):
    store = MemoryCredentialStore([UserRecord(id=1, username="x", password_hash="not-a-hash")], context=context)
    assert store.find_by_username_password("x", "not-a-hash") is None


def test_duplicate_identities_are_rejected():
    users = [
        UserRecord(id=1, username="a", password_hash="h"),
        UserRecord(id=1, username="b", password_hash="h"),
    ]
    with pytest.raises(ValueError):
        MemoryCredentialStore(users)


def test_build_honours_store_impl_override(monkeypatch):
    monkeypatch.setenv("CREDENTIAL_STORE_IMPL", "app.repositories.user:MemoryCredentialStore")
    store = build_credential_store(make_settings())
    assert isinstance(store, MemoryCredentialStore)

    monkeypatch.setenv("CREDENTIAL_STORE_IMPL", "no-colon-here")
    with pytest.raises(ValueError):
        build_credential_store(make_settings())
