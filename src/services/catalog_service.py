"""Validation and mutation pipeline for courses and their videos.

Create paths validate every field and report all failures together. Update
paths validate and merge only the fields present in the request, so an
explicit ``price=0`` is applied rather than skipped. Uploaded files are
written only after validation passes.
"""
from __future__ import annotations

from typing import Any, List, Mapping, Optional

from werkzeug.datastructures import FileStorage

from src.core.errors import NotFoundError
from src.core.logging import get_logger
from src.models.entities import Course, Video
from src.models.schemas import (
    CourseCreate,
    CourseUpdate,
    VideoCreate,
    VideoUpdate,
    parse_payload,
    provided_fields,
)
from src.models.store import CourseStore
from src.services.uploads import UploadManager

logger = get_logger("catalog")


class CatalogService:
    def __init__(self, courses: CourseStore, uploads: UploadManager):
        self.courses = courses
        self.uploads = uploads

    def list_courses(self) -> List[Course]:
        return self.courses.list_all()

    def get_course(self, course_id: str) -> Course:
        course = self.courses.get(course_id)
        if course is None:
            raise NotFoundError("Course", course_id)
        return course

    def create_course(
        self, data: Mapping[str, Any], thumbnail: Optional[FileStorage] = None
    ) -> Course:
        thumbnail = self.uploads.accept(thumbnail, "thumbnail")
        payload = parse_payload(CourseCreate, data)

        course = Course(
            title=payload.title,
            description=payload.description,
            category=payload.category,
            level=payload.level,
            price=payload.price,
            duration=payload.duration,
            thumbnail=self.uploads.save(thumbnail, "thumbnail") if thumbnail else None,
        )
        created = self.courses.create(course)
        logger.info("Course created", extra={"course_id": created.id})
        return created

    def update_course(
        self,
        course_id: str,
        data: Mapping[str, Any],
        thumbnail: Optional[FileStorage] = None,
    ) -> Course:
        thumbnail = self.uploads.accept(thumbnail, "thumbnail")
        changes = provided_fields(parse_payload(CourseUpdate, data))

        if self.courses.get(course_id) is None:
            raise NotFoundError("Course", course_id)
        if thumbnail:
            changes["thumbnail"] = self.uploads.save(thumbnail, "thumbnail")

        course = self.courses.update(course_id, changes)
        if course is None:
            if thumbnail:
                self.uploads.discard(changes["thumbnail"])
            raise NotFoundError("Course", course_id)
        logger.info(
            "Course updated",
            extra={"course_id": course_id, "fields": sorted(changes)},
        )
        return course

    def delete_course(self, course_id: str) -> Course:
        course = self.courses.delete(course_id)
        if course is None:
            raise NotFoundError("Course", course_id)
        logger.info("Course deleted", extra={"course_id": course_id})
        return course

    def add_video(
        self,
        course_id: str,
        data: Mapping[str, Any],
        video_file: Optional[FileStorage] = None,
    ) -> Video:
        video_file = self.uploads.accept(video_file, "video")
        missing_file = {} if video_file else {"video": "Video file is required"}
        payload = parse_payload(VideoCreate, data, extra_errors=missing_file)

        if self.courses.get(course_id) is None:
            raise NotFoundError("Course", course_id)

        video = Video(
            title=payload.title,
            description=payload.description,
            duration=payload.duration,
            video_url=self.uploads.save(video_file, "video"),
        )
        added = self.courses.add_video(course_id, video)
        if added is None:
            # Course vanished between the lookup and the insert.
            self.uploads.discard(video.video_url)
            raise NotFoundError("Course", course_id)
        logger.info(
            "Video added", extra={"course_id": course_id, "video_id": added.id}
        )
        return added

    def update_video(
        self,
        course_id: str,
        video_id: str,
        data: Mapping[str, Any],
        video_file: Optional[FileStorage] = None,
    ) -> Video:
        video_file = self.uploads.accept(video_file, "video")
        changes = provided_fields(parse_payload(VideoUpdate, data))

        course = self.courses.get(course_id)
        if course is None or course.find_video(video_id) is None:
            raise NotFoundError("Video", video_id)
        if video_file:
            changes["video_url"] = self.uploads.save(video_file, "video")

        video = self.courses.update_video(course_id, video_id, changes)
        if video is None:
            if video_file:
                self.uploads.discard(changes["video_url"])
            raise NotFoundError("Video", video_id)
        return video

    def delete_video(self, course_id: str, video_id: str) -> Video:
        video = self.courses.delete_video(course_id, video_id)
        if video is None:
            raise NotFoundError("Video", video_id)
        logger.info(
            "Video deleted", extra={"course_id": course_id, "video_id": video_id}
        )
        return video
