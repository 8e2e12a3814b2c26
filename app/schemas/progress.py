from pydantic import Field
from typing import List, Optional
from datetime import datetime
from app.schemas.base import CamelModel
from app.schemas.lesson import LessonResponse

class LessonProgressItem(LessonResponse):
    completed: bool = False
    completed_at: Optional[datetime] = None
    time_spent: int = 0
    last_position: int = 0

class EnrollmentProgressResponse(CamelModel):
    enrollment_id: str
    course_id: str
    total_lessons: int
    completed_lessons: int
    progress_percentage: int
    total_time_spent: int
    lessons: List[LessonProgressItem]

class LessonProgressUpdate(CamelModel):
    completed: Optional[bool] = None
    time_spent: int = Field(0, ge=0)  # Прибавляется к накопленному
    last_position: Optional[int] = Field(None, ge=0)

class LessonProgressResponse(CamelModel):
    id: str
    enrollment_id: str
    lesson_id: str
    user_id: str
    completed_at: Optional[datetime] = None
    time_spent: int
    last_position: int
    updated_at: datetime
    enrollment_progress: int = 0
