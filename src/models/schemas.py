import re
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from src.core.config import COURSE_CATEGORIES, COURSE_LEVELS, SCHOOL_TYPES, USER_ROLES
from src.core.errors import ValidationError
from src.core.utils import parse_flag, parse_float, parse_int
from src.models.entities import CourseCategory, CourseLevel, SchoolType, UserRole

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _min_text(value: Any, minimum: int, message: str) -> str:
    if not isinstance(value, str) or len(value.strip()) < minimum:
        raise ValueError(message)
    return value.strip()


def _choice(value: Any, choices: tuple, message: str) -> str:
    if not isinstance(value, str) or value not in choices:
        raise ValueError(message)
    return value


def _positive_int(value: Any) -> int:
    parsed = parse_int(value)
    if parsed is None or parsed <= 0:
        raise ValueError("Duration must be a positive number")
    return parsed


class RequestSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class CourseFields(RequestSchema):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[CourseCategory] = None
    level: Optional[CourseLevel] = None
    price: Optional[float] = None
    duration: Optional[int] = None

    @field_validator("title", mode="before")
    @classmethod
    def check_title(cls, v):
        return _min_text(v, 3, "Title must be at least 3 characters long")

    @field_validator("description", mode="before")
    @classmethod
    def check_description(cls, v):
        return _min_text(v, 10, "Description must be at least 10 characters long")

    @field_validator("category", mode="before")
    @classmethod
    def check_category(cls, v):
        return _choice(v, COURSE_CATEGORIES, "Invalid category")

    @field_validator("level", mode="before")
    @classmethod
    def check_level(cls, v):
        return _choice(v, COURSE_LEVELS, "Invalid level")

    @field_validator("price", mode="before")
    @classmethod
    def check_price(cls, v):
        parsed = parse_float(v)
        if parsed is None or parsed < 0:
            raise ValueError("Price must be a valid number")
        return parsed

    @field_validator("duration", mode="before")
    @classmethod
    def check_duration(cls, v):
        return _positive_int(v)


class CourseCreate(CourseFields):
    # Absent fields are validated too, so every missing field is reported.
    model_config = ConfigDict(validate_default=True)


class CourseUpdate(CourseFields):
    is_active: Optional[bool] = None

    @field_validator("is_active", mode="before")
    @classmethod
    def check_is_active(cls, v):
        return parse_flag(v)


class VideoFields(RequestSchema):
    title: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[int] = None

    @field_validator("title", mode="before")
    @classmethod
    def check_title(cls, v):
        return _min_text(v, 3, "Video title must be at least 3 characters long")

    @field_validator("description", mode="before")
    @classmethod
    def check_description(cls, v):
        return _min_text(
            v, 10, "Video description must be at least 10 characters long"
        )

    @field_validator("duration", mode="before")
    @classmethod
    def check_duration(cls, v):
        return _positive_int(v)


class VideoCreate(VideoFields):
    model_config = ConfigDict(validate_default=True)


class VideoUpdate(VideoFields):
    pass


class UserFields(RequestSchema):
    full_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[UserRole] = None
    school_type: Optional[SchoolType] = None

    @field_validator("full_name", mode="before")
    @classmethod
    def check_full_name(cls, v):
        return _min_text(v, 2, "Full name must be at least 2 characters long")

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v):
        if not isinstance(v, str) or not EMAIL_PATTERN.match(v.strip()):
            raise ValueError("Please provide a valid email")
        return v.strip().lower()

    @field_validator("password", mode="before")
    @classmethod
    def check_password(cls, v):
        if not isinstance(v, str) or len(v) < 6:
            raise ValueError("Password must be at least 6 characters long")
        return v

    @field_validator("role", mode="before")
    @classmethod
    def check_role(cls, v):
        return _choice(v, USER_ROLES, "Invalid role")

    @field_validator("school_type", mode="before")
    @classmethod
    def check_school_type(cls, v):
        if v is None or v == "":
            return None
        return _choice(v, SCHOOL_TYPES, "Invalid school type")


class UserCreate(UserFields):
    model_config = ConfigDict(validate_default=True)


class UserUpdate(UserFields):
    is_active: Optional[bool] = None

    @field_validator("is_active", mode="before")
    @classmethod
    def check_is_active(cls, v):
        return parse_flag(v)


class DashboardStats(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_courses: int = 0
    active_courses: int = 0
    total_users: int = 0
    school_students: int = 0
    college_students: int = 0
    employees: int = 0
    total_videos: int = 0


def field_errors(exc: PydanticValidationError) -> Dict[str, str]:
    """Flatten pydantic errors into ``{field: message}``, first message wins."""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "body"
        cause = (error.get("ctx") or {}).get("error")
        errors.setdefault(field, str(cause) if cause else error["msg"])
    return errors


def parse_payload(
    schema: Type[SchemaT],
    data: Mapping[str, Any],
    extra_errors: Optional[Dict[str, str]] = None,
) -> SchemaT:
    """Validate ``data`` against ``schema``.

    ``extra_errors`` are checks made outside the schema (a missing upload,
    say) and are reported together with the field errors.
    """
    errors = dict(extra_errors or {})
    result = None
    try:
        result = schema.model_validate(dict(data))
    except PydanticValidationError as e:
        errors = {**field_errors(e), **errors}
    if errors:
        raise ValidationError(errors)
    return result


def provided_fields(payload: BaseModel) -> Dict[str, Any]:
    """Fields present in the request, keyed by attribute name."""
    return payload.model_dump(exclude_unset=True)
