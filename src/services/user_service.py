from __future__ import annotations

from typing import Any, Iterable, List, Mapping

from passlib.context import CryptContext

from src.core import config
from src.core.errors import (
    AuthenticationError,
    BadRequestError,
    ConflictError,
    NotFoundError,
)
from src.core.logging import get_logger
from src.core.security import hash_password, pwd_context, verify_password
from src.models.entities import User
from src.models.schemas import UserCreate, UserUpdate, parse_payload, provided_fields
from src.models.store import UserStore

logger = get_logger("users")


def demo_users(
    context: CryptContext = pwd_context,
    admin_email: str = config.SEED_ADMIN_EMAIL,
    admin_password: str = config.SEED_ADMIN_PASSWORD,
    user_password: str = config.SEED_USER_PASSWORD,
) -> List[User]:
    student_hash = hash_password(user_password, context)
    return [
        User(
            id="1",
            full_name="John Doe",
            email="john@student.com",
            password=student_hash,
            role="school-student",
            school_type="government",
        ),
        User(
            id="2",
            full_name="Jane Smith",
            email="jane@college.com",
            password=student_hash,
            role="college-student",
        ),
        User(
            id="admin",
            full_name="Admin User",
            email=admin_email.strip().lower(),
            password=hash_password(admin_password, context),
            role="admin",
        ),
    ]


class UserService:
    def __init__(self, users: UserStore, context: CryptContext = pwd_context):
        self.users = users
        self.context = context

    def authenticate_admin(self, email: Any, password: Any) -> User:
        if not email or not password:
            raise BadRequestError("Email and password are required")
        if not isinstance(email, str) or not isinstance(password, str):
            raise AuthenticationError()

        user = self.users.get_by_email(email.lower().strip())
        if user is None or user.role != "admin":
            raise AuthenticationError()
        if not verify_password(password, user.password, self.context):
            logger.warning("Admin password mismatch", extra={"user_id": user.id})
            raise AuthenticationError()
        return user

    def list_users(self, include_inactive: bool = False) -> List[User]:
        if include_inactive:
            return self.users.list_all()
        return self.users.list_active()

    def get_user(self, user_id: str) -> User:
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def create_user(self, data: Mapping[str, Any]) -> User:
        payload = parse_payload(UserCreate, data)
        if self.users.email_taken(payload.email):
            raise ConflictError("User with this email already exists")

        user = User(
            full_name=payload.full_name,
            email=payload.email,
            password=hash_password(payload.password, self.context),
            role=payload.role,
            school_type=payload.school_type,
        )
        # The store re-checks the email under its lock.
        created = self.users.create(user)
        logger.info("User created", extra={"user_id": created.id})
        return created

    def update_user(self, user_id: str, data: Mapping[str, Any]) -> User:
        changes = provided_fields(parse_payload(UserUpdate, data))

        if "email" in changes and self.users.email_taken(
            changes["email"], exclude_id=user_id
        ):
            raise ConflictError("User with this email already exists")
        if "password" in changes:
            changes["password"] = hash_password(changes["password"], self.context)

        user = self.users.update(user_id, changes)
        if user is None:
            raise NotFoundError("User", user_id)
        logger.info(
            "User updated",
            extra={"user_id": user_id, "fields": sorted(changes)},
        )
        return user

    def delete_user(self, user_id: str) -> User:
        user = self.users.delete(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        logger.info("User deactivated", extra={"user_id": user_id})
        return user


def seed_users(store: UserStore, users: Iterable[User]) -> None:
    for user in users:
        if not store.email_taken(user.email):
            store.create(user)
