from pydantic import Field
from typing import List, Optional
from datetime import datetime
from app.schemas.base import CamelModel

class ReviewCreate(CamelModel):
    user_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None

class ReviewResponse(CamelModel):
    id: str
    course_id: str
    user_id: str
    rating: int
    comment: Optional[str] = None
    created_at: datetime

class CourseReviewsResponse(CamelModel):
    course_id: str
    count: int
    average_rating: Optional[float] = None
    reviews: List[ReviewResponse]
