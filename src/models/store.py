"""Store abstraction and registry for user and course persistence backends.

Every store operation is atomic with respect to the others on the same
store. Records handed out are copies; mutate through the store methods.
"""
from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from src.core.errors import ConflictError
from src.core.utils import utcnow
from src.models.entities import Course, User, Video

StoreFactory = Callable[..., Tuple["UserStore", "CourseStore"]]


class UserStore(ABC):
    """Users are soft-deleted: ``delete`` flips ``is_active`` only."""

    @abstractmethod
    def list_active(self) -> List[User]:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> List[User]:
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def email_taken(self, email: str, exclude_id: Optional[str] = None) -> bool:
        raise NotImplementedError

    @abstractmethod
    def create(self, user: User) -> User:
        raise NotImplementedError

    @abstractmethod
    def update(self, user_id: str, changes: Dict[str, Any]) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def delete(self, user_id: str) -> Optional[User]:
        raise NotImplementedError


class CourseStore(ABC):
    """Courses are hard-deleted; videos live and die inside their course."""

    @abstractmethod
    def list_all(self) -> List[Course]:
        raise NotImplementedError

    @abstractmethod
    def get(self, course_id: str) -> Optional[Course]:
        raise NotImplementedError

    @abstractmethod
    def create(self, course: Course) -> Course:
        raise NotImplementedError

    @abstractmethod
    def update(self, course_id: str, changes: Dict[str, Any]) -> Optional[Course]:
        raise NotImplementedError

    @abstractmethod
    def delete(self, course_id: str) -> Optional[Course]:
        raise NotImplementedError

    @abstractmethod
    def add_video(self, course_id: str, video: Video) -> Optional[Video]:
        raise NotImplementedError

    @abstractmethod
    def update_video(
        self, course_id: str, video_id: str, changes: Dict[str, Any]
    ) -> Optional[Video]:
        raise NotImplementedError

    @abstractmethod
    def delete_video(self, course_id: str, video_id: str) -> Optional[Video]:
        raise NotImplementedError

    def count(self) -> int:
        return len(self.list_all())


class InMemoryUserStore(UserStore):
    def __init__(self, users: Iterable[User] = ()):
        self._lock = threading.RLock()
        self._users: List[User] = [u.model_copy(deep=True) for u in users]

    def list_active(self) -> List[User]:
        with self._lock:
            return [u.model_copy(deep=True) for u in self._users if u.is_active]

    def list_all(self) -> List[User]:
        with self._lock:
            return [u.model_copy(deep=True) for u in self._users]

    def get_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            for user in self._users:
                if user.id == user_id and user.is_active:
                    return user.model_copy(deep=True)
            return None

    def get_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            for user in self._users:
                if user.email == email and user.is_active:
                    return user.model_copy(deep=True)
            return None

    def email_taken(self, email: str, exclude_id: Optional[str] = None) -> bool:
        with self._lock:
            return any(
                u.email == email and u.id != exclude_id for u in self._users
            )

    def create(self, user: User) -> User:
        with self._lock:
            # Inactive records still own their email.
            if self.email_taken(user.email):
                raise ConflictError("User with this email already exists")
            self._users.append(user.model_copy(deep=True))
            return user.model_copy(deep=True)

    def _index(self, user_id: str) -> int:
        for i, user in enumerate(self._users):
            if user.id == user_id:
                return i
        return -1

    def update(self, user_id: str, changes: Dict[str, Any]) -> Optional[User]:
        with self._lock:
            index = self._index(user_id)
            if index == -1:
                return None
            if "email" in changes and self.email_taken(
                changes["email"], exclude_id=user_id
            ):
                raise ConflictError("User with this email already exists")
            updated = self._users[index].model_copy(
                update={**changes, "updated_at": utcnow()}, deep=True
            )
            self._users[index] = updated
            return updated.model_copy(deep=True)

    def delete(self, user_id: str) -> Optional[User]:
        return self.update(user_id, {"is_active": False})


class InMemoryCourseStore(CourseStore):
    def __init__(self, courses: Iterable[Course] = ()):
        self._lock = threading.RLock()
        self._courses: Dict[str, Course] = {
            c.id: c.model_copy(deep=True) for c in courses
        }

    def list_all(self) -> List[Course]:
        with self._lock:
            return [c.model_copy(deep=True) for c in self._courses.values()]

    def count(self) -> int:
        with self._lock:
            return len(self._courses)

    def get(self, course_id: str) -> Optional[Course]:
        with self._lock:
            course = self._courses.get(course_id)
            return course.model_copy(deep=True) if course else None

    def create(self, course: Course) -> Course:
        with self._lock:
            self._courses[course.id] = course.model_copy(deep=True)
            return course.model_copy(deep=True)

    def update(self, course_id: str, changes: Dict[str, Any]) -> Optional[Course]:
        with self._lock:
            course = self._courses.get(course_id)
            if course is None:
                return None
            updated = course.model_copy(
                update={**changes, "updated_at": utcnow()}, deep=True
            )
            self._courses[course_id] = updated
            return updated.model_copy(deep=True)

    def delete(self, course_id: str) -> Optional[Course]:
        with self._lock:
            return self._courses.pop(course_id, None)

    def add_video(self, course_id: str, video: Video) -> Optional[Video]:
        with self._lock:
            course = self._courses.get(course_id)
            if course is None:
                return None
            course.videos.append(video.model_copy(deep=True))
            course.updated_at = utcnow()
            return video.model_copy(deep=True)

    def update_video(
        self, course_id: str, video_id: str, changes: Dict[str, Any]
    ) -> Optional[Video]:
        with self._lock:
            course = self._courses.get(course_id)
            if course is None:
                return None
            for i, video in enumerate(course.videos):
                if video.id == video_id:
                    updated = video.model_copy(
                        update={**changes, "updated_at": utcnow()}, deep=True
                    )
                    course.videos[i] = updated
                    return updated.model_copy(deep=True)
            return None

    def delete_video(self, course_id: str, video_id: str) -> Optional[Video]:
        with self._lock:
            course = self._courses.get(course_id)
            if course is None:
                return None
            for i, video in enumerate(course.videos):
                if video.id == video_id:
                    removed = course.videos.pop(i)
                    course.updated_at = utcnow()
                    return removed
            return None


_STORE_BACKENDS: Dict[str, StoreFactory] = {}


def register_store_backend(name: str, factory: StoreFactory) -> None:
    _STORE_BACKENDS[name] = factory


def _ensure_default_backends() -> None:
    if "memory" in _STORE_BACKENDS:
        return

    def _memory_factory(**kwargs) -> Tuple[UserStore, CourseStore]:
        return (
            InMemoryUserStore(kwargs.get("users") or ()),
            InMemoryCourseStore(kwargs.get("courses") or ()),
        )

    register_store_backend("memory", _memory_factory)


def create_stores(backend: str = "memory", **kwargs) -> Tuple[UserStore, CourseStore]:
    _ensure_default_backends()
    factory = _STORE_BACKENDS.get(backend)
    if not factory:
        raise ValueError(f"Unknown store backend: {backend}")
    return factory(**kwargs)
