from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from app.database import get_db
from app.schemas.course import CourseCreate, CourseUpdate, CourseResponse
from app.schemas.review import ReviewCreate, ReviewResponse, CourseReviewsResponse
from app.crud import course as crud_course
from app.crud import review as crud_review
from app.crud import user as crud_user
from app.core.exceptions import ConflictException, CourseNotFoundException, UserNotFoundException
from app.models.course import CourseLevel
from app.services.enrollment_service import course_to_response

router = APIRouter()

@router.get("", response_model=List[CourseResponse])
def read_courses(
    skip: int = 0,
    limit: int = 100,
    category: Optional[str] = None,
    level: Optional[CourseLevel] = None,
    instructor_id: Optional[str] = Query(None, alias="instructorId"),
    published_only: bool = Query(False, alias="publishedOnly"),
    db: Session = Depends(get_db)
):
    """Получить список курсов"""
    courses = crud_course.get_courses(
        db,
        skip=skip,
        limit=limit,
        category=category,
        level=level,
        instructor_id=instructor_id,
        published_only=published_only
    )
    return [course_to_response(course) for course in courses]

@router.get("/{course_id}", response_model=CourseResponse)
def read_course(course_id: str, db: Session = Depends(get_db)):
    """Получить курс по ID"""
    course = crud_course.get_course_with_instructor(db, course_id=course_id)
    if not course:
        raise CourseNotFoundException(course_id)
    return course_to_response(course)

@router.post("", response_model=CourseResponse, status_code=201)
def create_course(course: CourseCreate, db: Session = Depends(get_db)):
    """Создать новый курс"""
    if not crud_user.get_user(db, course.instructor_id):
        raise UserNotFoundException(course.instructor_id)
    return course_to_response(crud_course.create_course(db=db, course=course))

@router.put("/{course_id}", response_model=CourseResponse)
def update_course(
    course_id: str,
    course_update: CourseUpdate,
    db: Session = Depends(get_db)
):
    """Обновить курс"""
    if course_update.instructor_id and not crud_user.get_user(db, course_update.instructor_id):
        raise UserNotFoundException(course_update.instructor_id)

    updated_course = crud_course.update_course(db, course_id=course_id, course_update=course_update)
    if not updated_course:
        raise CourseNotFoundException(course_id)
    return course_to_response(updated_course)

@router.delete("/{course_id}")
def delete_course(course_id: str, db: Session = Depends(get_db)):
    """Удалить курс вместе с уроками, записями и отзывами"""
    if not crud_course.delete_course(db, course_id=course_id):
        raise CourseNotFoundException(course_id)
    return {"message": "Course deleted successfully"}

# === Отзывы ===
@router.get("/{course_id}/reviews", response_model=CourseReviewsResponse)
def read_course_reviews(course_id: str, db: Session = Depends(get_db)):
    """Отзывы о курсе и средняя оценка"""
    if not crud_course.get_course(db, course_id=course_id):
        raise CourseNotFoundException(course_id)

    reviews = crud_review.get_course_reviews(db, course_id)
    return CourseReviewsResponse(
        course_id=course_id,
        count=len(reviews),
        average_rating=crud_review.get_average_rating(db, course_id),
        reviews=[ReviewResponse.model_validate(review) for review in reviews]
    )

@router.post("/{course_id}/reviews", response_model=ReviewResponse, status_code=201)
def create_course_review(
    course_id: str,
    review: ReviewCreate,
    db: Session = Depends(get_db)
):
    """Оставить отзыв (один на пользователя)"""
    if not crud_course.get_course(db, course_id=course_id):
        raise CourseNotFoundException(course_id)
    if not crud_user.get_user(db, review.user_id):
        raise UserNotFoundException(review.user_id)
    if crud_review.get_review_by_user_course(db, review.user_id, course_id):
        raise ConflictException("User has already reviewed this course")

    return crud_review.create_review(db, course_id, review)
