import pytest

from src.core.errors import ConflictError
from src.models.entities import Course, User, Video
from src.models.store import (
    CourseStore,
    InMemoryCourseStore,
    InMemoryUserStore,
    create_stores,
    register_store_backend,
)


def _course(**overrides) -> Course:
    data = {
        "title": "Money Basics",
        "description": "Budgeting and saving for beginners",
        "category": "school",
        "level": "beginner",
        "price": 10.0,
        "duration": 60,
    }
    data.update(overrides)
    return Course(**data)


def _video(title="Intro video") -> Video:
    return Video(
        title=title,
        description="An introduction to the course",
        video_url="/uploads/videos/video-1.mp4",
        duration=5,
    )


def _user(email="amy@example.com", **overrides) -> User:
    data = {
        "full_name": "Amy Pond",
        "email": email,
        "password": "hash",
        "role": "employee",
    }
    data.update(overrides)
    return User(**data)


def test_course_store_returns_copies():
    store = InMemoryCourseStore()
    created = store.create(_course())
    created.title = "Changed outside"

    assert store.get(created.id).title == "Money Basics"


def test_course_update_merges_and_touches_updated_at():
    store = InMemoryCourseStore()
    created = store.create(_course())

    updated = store.update(created.id, {"title": "New Title"})

    assert updated.title == "New Title"
    assert updated.price == created.price
    assert updated.updated_at >= created.updated_at


def test_course_update_unknown_id_returns_none():
    store = InMemoryCourseStore()
    assert store.update("missing", {"title": "x"}) is None


def test_course_delete_is_hard_delete():
    store = InMemoryCourseStore()
    created = store.create(_course())

    assert store.delete(created.id).id == created.id
    assert store.get(created.id) is None
    assert store.count() == 0


def test_course_delete_unknown_leaves_store_unchanged():
    store = InMemoryCourseStore([_course(), _course()])

    assert store.delete("missing") is None
    assert store.count() == 2


def test_videos_are_appended_in_order():
    store = InMemoryCourseStore()
    course = store.create(_course())

    first = store.add_video(course.id, _video("First video"))
    second = store.add_video(course.id, _video("Second video"))

    videos = store.get(course.id).videos
    assert [v.id for v in videos] == [first.id, second.id]


def test_add_video_to_missing_course():
    store = InMemoryCourseStore()
    assert store.add_video("missing", _video()) is None


def test_update_and_delete_video():
    store = InMemoryCourseStore()
    course = store.create(_course())
    video = store.add_video(course.id, _video())

    updated = store.update_video(course.id, video.id, {"duration": 9})
    assert updated.duration == 9
    assert updated.title == video.title

    assert store.update_video(course.id, "missing", {"duration": 1}) is None
    assert store.delete_video(course.id, video.id).id == video.id
    assert store.get(course.id).videos == []
    assert store.delete_video(course.id, video.id) is None


def test_user_lookups_skip_inactive():
    store = InMemoryUserStore([_user()])
    user = store.list_all()[0]

    assert store.get_by_email("amy@example.com").id == user.id
    store.delete(user.id)

    assert store.get_by_id(user.id) is None
    assert store.get_by_email("amy@example.com") is None
    assert store.list_active() == []
    assert store.list_all()[0].is_active is False


def test_user_create_rejects_duplicate_email_even_when_inactive():
    store = InMemoryUserStore([_user(is_active=False)])

    with pytest.raises(ConflictError):
        store.create(_user())


def test_user_update_applies_to_inactive_records():
    store = InMemoryUserStore([_user(is_active=False)])
    user_id = store.list_all()[0].id

    updated = store.update(user_id, {"is_active": True})
    assert updated.is_active is True
    assert store.delete("missing") is None


def test_email_taken_can_exclude_owner():
    store = InMemoryUserStore([_user()])
    user_id = store.list_all()[0].id

    assert store.email_taken("amy@example.com")
    assert not store.email_taken("amy@example.com", exclude_id=user_id)


def test_default_backend_is_memory():
    users, courses = create_stores()
    assert isinstance(users, InMemoryUserStore)
    assert isinstance(courses, InMemoryCourseStore)


def test_custom_backend_registration():
    shared_courses = InMemoryCourseStore()
    register_store_backend(
        "shared", lambda **kwargs: (InMemoryUserStore(), shared_courses)
    )

    _, courses = create_stores(backend="shared")
    assert courses is shared_courses
    assert isinstance(courses, CourseStore)


def test_unknown_backend():
    with pytest.raises(ValueError, match="Unknown store backend"):
        create_stores(backend="nope")
