import threading

import pytest

from src.core.errors import (
    AuthenticationError,
    BadRequestError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.core.security import verify_password
from src.models.store import InMemoryUserStore
from src.services.user_service import UserService, demo_users


def _new_user(**overrides):
    data = {
        "fullName": "Rory Williams",
        "email": "rory@example.com",
        "password": "centurion",
        "role": "employee",
    }
    data.update(overrides)
    return data


def test_authenticate_admin(user_service):
    admin = user_service.authenticate_admin("  ADMIN@youngwealth.com ", "admin123")
    assert admin.role == "admin"
    assert "password" not in admin.to_json()


@pytest.mark.parametrize(
    "email, password",
    [
        ("admin@youngwealth.com", "wrong-password"),
        ("nobody@example.com", "admin123"),
        ("john@student.com", "password123"),
    ],
)
def test_authenticate_admin_rejects(user_service, email, password):
    with pytest.raises(AuthenticationError, match="Invalid admin credentials"):
        user_service.authenticate_admin(email, password)


def test_authenticate_admin_requires_both_fields(user_service):
    with pytest.raises(BadRequestError, match="Email and password are required"):
        user_service.authenticate_admin("admin@youngwealth.com", "")


def test_seeded_users(user_service):
    users = user_service.list_users()
    assert {u.id for u in users} == {"1", "2", "admin"}


def test_create_user_hashes_password(user_service, user_store, password_context):
    user = user_service.create_user(_new_user())

    stored = user_store.get_by_id(user.id)
    assert stored.password != "centurion"
    assert verify_password("centurion", stored.password, password_context)
    assert stored.school_type is None


def test_create_user_duplicate_email(user_service):
    with pytest.raises(ConflictError):
        user_service.create_user(_new_user(email="JOHN@student.com"))


def test_create_user_validates(user_service):
    with pytest.raises(ValidationError) as exc_info:
        user_service.create_user(_new_user(role="instructor", password="123"))
    assert set(exc_info.value.errors) == {"role", "password"}


def test_update_user_partial(user_service):
    user = user_service.update_user("1", {"fullName": "Johnny Doe"})

    assert user.full_name == "Johnny Doe"
    assert user.email == "john@student.com"
    assert user.school_type == "government"


def test_update_user_rehashes_password(user_service, user_store, password_context):
    user_service.update_user("2", {"password": "new-secret"})
    stored = user_store.get_by_id("2")
    assert verify_password("new-secret", stored.password, password_context)


def test_update_user_email_conflict(user_service):
    with pytest.raises(ConflictError):
        user_service.update_user("1", {"email": "jane@college.com"})
    # Keeping one's own email is not a conflict
    assert user_service.update_user("1", {"email": "john@student.com"}).id == "1"


def test_update_user_validates(user_service):
    with pytest.raises(ValidationError) as exc_info:
        user_service.update_user("1", {"schoolType": "boarding"})
    assert exc_info.value.errors == {"schoolType": "Invalid school type"}


def test_update_missing_user(user_service):
    with pytest.raises(NotFoundError):
        user_service.update_user("missing", {"fullName": "Nobody Here"})


def test_delete_user_is_soft(user_service):
    user_service.delete_user("1")

    with pytest.raises(NotFoundError):
        user_service.get_user("1")
    assert "1" not in {u.id for u in user_service.list_users()}
    assert "1" in {u.id for u in user_service.list_users(include_inactive=True)}


def test_deleted_user_email_stays_reserved(user_service):
    user_service.delete_user("1")
    with pytest.raises(ConflictError):
        user_service.create_user(_new_user(email="john@student.com"))


class _RacingUserStore(InMemoryUserStore):
    """Holds each thread after its first email check until both have made one."""

    def __init__(self, users):
        super().__init__(users)
        self.barrier = threading.Barrier(2, timeout=5)
        self._local = threading.local()

    def email_taken(self, email, exclude_id=None):
        taken = super().email_taken(email, exclude_id)
        if not getattr(self._local, "checked", False):
            self._local.checked = True
            self.barrier.wait()
        return taken


def test_concurrent_email_changes_cannot_share_an_address(password_context):
    store = _RacingUserStore(demo_users(password_context))
    service = UserService(store, context=password_context)
    conflicts = []

    def change_email(user_id):
        try:
            service.update_user(user_id, {"email": "shared@example.com"})
        except ConflictError:
            conflicts.append(user_id)

    threads = [threading.Thread(target=change_email, args=(uid,)) for uid in ("1", "2")]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)

    owners = [u.id for u in store.list_all() if u.email == "shared@example.com"]
    assert len(conflicts) == 1
    assert len(owners) == 1
    assert owners[0] not in conflicts
