from typing import Iterable

from src.models.entities import Course, User
from src.models.schemas import DashboardStats


def compute_stats(courses: Iterable[Course], users: Iterable[User]) -> DashboardStats:
    """Aggregate counts for the admin dashboard; ``users`` should be active ones."""
    courses = list(courses)
    users = list(users)

    def with_role(role: str) -> int:
        return sum(1 for u in users if u.role == role)

    return DashboardStats(
        total_courses=len(courses),
        active_courses=sum(1 for c in courses if c.is_active),
        total_users=sum(1 for u in users if u.role != "admin"),
        school_students=with_role("school-student"),
        college_students=with_role("college-student"),
        employees=with_role("employee"),
        total_videos=sum(len(c.videos) for c in courses),
    )
