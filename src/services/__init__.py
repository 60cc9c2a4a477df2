"""Service layer wiring for the admin backend."""
from __future__ import annotations

from dataclasses import dataclass

from src.models.store import CourseStore, UserStore
from src.services.catalog_service import CatalogService
from src.services.dashboard import compute_stats
from src.services.uploads import UploadManager
from src.services.user_service import UserService


@dataclass
class AdminServices:
    catalog: CatalogService
    users: UserService
    uploads: UploadManager

    def stats(self):
        return compute_stats(
            self.catalog.list_courses(), self.users.list_users(include_inactive=False)
        )


def build_services(
    user_store: UserStore,
    course_store: CourseStore,
    uploads: UploadManager,
    **user_service_kwargs,
) -> AdminServices:
    return AdminServices(
        catalog=CatalogService(course_store, uploads),
        users=UserService(user_store, **user_service_kwargs),
        uploads=uploads,
    )
