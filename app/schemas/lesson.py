from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime
from app.schemas.base import CamelModel

class LessonBase(CamelModel):
    title: str
    content: Optional[str] = None
    video_url: Optional[str] = None
    duration: int = Field(0, ge=0)
    order: int = 0
    is_free: bool = False

class LessonCreate(LessonBase):
    course_id: str

class LessonUpdate(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None
    video_url: Optional[str] = None
    duration: Optional[int] = Field(None, ge=0)
    order: Optional[int] = None
    is_free: Optional[bool] = None

    @field_validator("title", "duration", "order", "is_free")
    def required_not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

class LessonResponse(LessonBase):
    id: str
    course_id: str
    created_at: datetime
    updated_at: datetime

class LessonDetailResponse(LessonResponse):
    content_html: Optional[str] = None
