from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from app.database import get_db
from app.schemas.lesson import LessonCreate, LessonUpdate, LessonResponse, LessonDetailResponse
from app.crud import lesson as crud_lesson
from app.crud import course as crud_course
from app.core.exceptions import CourseNotFoundException, LessonNotFoundException
from app.services.markdown_service import MarkdownService

router = APIRouter()
markdown_service = MarkdownService()

@router.get("/course/{course_id}", response_model=List[LessonResponse])
def read_lessons(course_id: str, db: Session = Depends(get_db)):
    """Получить все уроки курса по порядку"""
    if not crud_course.get_course(db, course_id=course_id):
        raise CourseNotFoundException(course_id)
    return crud_lesson.get_lessons_by_course(db, course_id=course_id)

@router.get("/{lesson_id}", response_model=LessonDetailResponse)
def read_lesson(lesson_id: str, db: Session = Depends(get_db)):
    """Получить урок по ID (с HTML из Markdown)"""
    lesson = crud_lesson.get_lesson(db, lesson_id=lesson_id)
    if not lesson:
        raise LessonNotFoundException(lesson_id)

    response = LessonDetailResponse.model_validate(lesson)
    response.content_html = markdown_service.convert_to_html(lesson.content)
    return response

@router.post("", response_model=LessonResponse, status_code=201)
def create_lesson(lesson: LessonCreate, db: Session = Depends(get_db)):
    """Создать новый урок"""
    if not crud_course.get_course(db, course_id=lesson.course_id):
        raise CourseNotFoundException(lesson.course_id)
    return crud_lesson.create_lesson(db=db, lesson=lesson)

@router.put("/{lesson_id}", response_model=LessonResponse)
def update_lesson(
    lesson_id: str,
    lesson_update: LessonUpdate,
    db: Session = Depends(get_db)
):
    """Обновить урок"""
    updated_lesson = crud_lesson.update_lesson(db, lesson_id=lesson_id, lesson_update=lesson_update)
    if not updated_lesson:
        raise LessonNotFoundException(lesson_id)
    return updated_lesson

@router.delete("/{lesson_id}")
def delete_lesson(lesson_id: str, db: Session = Depends(get_db)):
    """Удалить урок"""
    if not crud_lesson.delete_lesson(db, lesson_id=lesson_id):
        raise LessonNotFoundException(lesson_id)
    return {"message": "Lesson deleted successfully"}
