from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.core.utils import utcnow

CourseCategory = Literal["school", "college", "employee"]
CourseLevel = Literal["beginner", "intermediate", "advanced"]
UserRole = Literal["school-student", "college-student", "employee", "admin"]
SchoolType = Literal["government", "private"]


def new_id() -> str:
    return str(uuid4())


class Entity(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=new_id)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Video(Entity):
    title: str
    description: str
    video_url: str
    duration: int


class Course(Entity):
    title: str
    description: str
    category: CourseCategory
    level: CourseLevel
    price: float = 0.0
    duration: int
    thumbnail: Optional[str] = None
    is_active: bool = True
    videos: List[Video] = Field(default_factory=list)

    def find_video(self, video_id: str) -> Optional[Video]:
        return next((v for v in self.videos if v.id == video_id), None)


class User(Entity):
    full_name: str
    email: str
    password: str
    role: UserRole
    school_type: Optional[SchoolType] = None
    is_active: bool = True

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude={"password"})
