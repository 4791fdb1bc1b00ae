import pytest

from app.constants.constants import UserRole
from app.core.errors import AlreadyExists, ValidationFailed
from app.core.security import hash_password, verify_password


async def test_register_then_login_case_insensitive(store):
    user = await store.auth.register("Citra", "Citra@Kampus.ac.id", "rahasia1", "rahasia1", UserRole.dosen)

    assert user.password_hash != "rahasia1"
    session = store.auth.login("citra@kampus.ac.id", "rahasia1")
    assert session is not None
    assert session.user_identifier == "Citra@Kampus.ac.id"
    assert session.role == UserRole.dosen


async def test_login_failure_is_indistinguishable(store):
    await store.auth.register("Citra", "citra", "rahasia1")

    assert store.auth.login("citra", "salah-sandi") is None
    assert store.auth.login("tidak-ada", "rahasia1") is None


async def test_reserved_admin_login(store):
    session = store.auth.login("admin1", "123456")

    assert session.is_admin
    assert session.name == "Admin Fasilkom"
    assert store.auth.login("admin1", "wrong") is None


async def test_register_duplicate_identifier_any_case(store):
    await store.auth.register("X", "X", "rahasia1")
    before = list(store.state.users)

    with pytest.raises(AlreadyExists):
        await store.auth.register("Lain", "x", "rahasia2")

    assert store.state.users == before


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "", "user_identifier": "a", "password": "rahasia1"},
        {"name": "A", "user_identifier": " ", "password": "rahasia1"},
        {"name": "A", "user_identifier": "a", "password": "12345"},
        {"name": "A", "user_identifier": "a", "password": "rahasia1", "confirm_password": "rahasia2"},
        {"name": "A", "user_identifier": "a", "password": "rahasia1", "role": UserRole.admin},
        {"name": "A", "user_identifier": "ADMIN1", "password": "rahasia1"},
    ],
)
async def test_register_validation_leaves_users_unchanged(store, kwargs):
    with pytest.raises(ValidationFailed):
        await store.auth.register(**kwargs)
    assert store.state.users == []


async def test_registered_users_are_persisted(store, kv):
    await store.auth.register("Budi", "budi", "rahasia1")

    saved = await kv.get("campusUsers")
    assert [u["user_identifier"] for u in saved] == ["budi"]
    assert "rahasia1" not in kv.raw("campusUsers")


def test_password_hash_roundtrip():
    hashed = hash_password("rahasia1")

    assert verify_password("rahasia1", hashed)
    assert not verify_password("rahasia2", hashed)
    assert not verify_password("rahasia1", "not-a-bcrypt-hash")
