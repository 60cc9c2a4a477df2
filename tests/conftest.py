import os

os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_DEMO_USERS"] = "true"
os.environ["LOG_LEVEL"] = "CRITICAL"
os.environ["ENVIRONMENT"] = "test"

import pytest

from src.core.security import build_password_context
from src.models.store import InMemoryCourseStore, InMemoryUserStore
from src.services.catalog_service import CatalogService
from src.services.uploads import UploadManager
from src.services.user_service import UserService, demo_users
from tests.factories import make_file


@pytest.fixture
def password_context():
    return build_password_context(rounds=4)


@pytest.fixture
def upload_root(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def uploads(upload_root):
    manager = UploadManager(str(upload_root))
    manager.ensure_directories()
    return manager


@pytest.fixture
def course_store():
    return InMemoryCourseStore()


@pytest.fixture
def user_store(password_context):
    return InMemoryUserStore(demo_users(password_context))


@pytest.fixture
def catalog(course_store, uploads):
    return CatalogService(course_store, uploads)


@pytest.fixture
def user_service(user_store, password_context):
    return UserService(user_store, context=password_context)


@pytest.fixture
def video_file():
    return make_file()


@pytest.fixture
def image_file():
    return make_file("cover.png", "image/png")


