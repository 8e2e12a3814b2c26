from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime
from app.models.course import CourseLevel
from app.schemas.base import CamelModel

class CategoryBase(CamelModel):
    name: str
    slug: str
    description: Optional[str] = None

class CategoryCreate(CategoryBase):
    pass

class CategoryUpdate(CamelModel):
    name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None

    @field_validator("name", "slug")
    def required_not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

class CategoryResponse(CategoryBase):
    id: str
    created_at: datetime

class CourseBase(CamelModel):
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    level: CourseLevel = CourseLevel.BEGINNER
    price: int = Field(0, ge=0)
    thumbnail_url: Optional[str] = None
    is_published: bool = False

class CourseCreate(CourseBase):
    instructor_id: str

class CourseUpdate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    level: Optional[CourseLevel] = None
    price: Optional[int] = Field(None, ge=0)
    thumbnail_url: Optional[str] = None
    is_published: Optional[bool] = None
    instructor_id: Optional[str] = None

    @field_validator("title", "level", "price", "is_published", "instructor_id")
    def required_not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

class CourseResponse(CourseBase):
    id: str
    instructor_id: str
    enrollment_count: int = 0
    created_at: datetime
    updated_at: datetime
    lesson_count: int = 0
    instructor_name: Optional[str] = None
