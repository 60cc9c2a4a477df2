from src.models.entities import Course, User, Video
from src.models.store import (
    CourseStore,
    InMemoryCourseStore,
    InMemoryUserStore,
    UserStore,
    create_stores,
    register_store_backend,
)

__all__ = [
    "Course",
    "CourseStore",
    "InMemoryCourseStore",
    "InMemoryUserStore",
    "User",
    "UserStore",
    "Video",
    "create_stores",
    "register_store_backend",
]
