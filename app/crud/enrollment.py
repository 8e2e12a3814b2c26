from sqlalchemy import and_
from sqlalchemy.orm import Session
from app.models.course import Course
from app.models.enrollment import Enrollment
from app.models.lesson import Lesson, LessonProgress
from app.models.user import User

# Функции этого модуля не делают commit: транзакцией управляет
# app.services.enrollment_service

def get_enrollment(db: Session, enrollment_id: str):
    return db.query(Enrollment).filter(Enrollment.id == enrollment_id).first()

def get_enrollment_by_user_course(db: Session, user_id: str, course_id: str):
    return db.query(Enrollment).filter(
        Enrollment.user_id == user_id,
        Enrollment.course_id == course_id
    ).first()

def get_user_enrollments(db: Session, user_id: str):
    """Записи пользователя вместе с курсом и именем преподавателя"""
    return db.query(Enrollment, Course, User.name).join(
        Course, Enrollment.course_id == Course.id
    ).join(
        User, Course.instructor_id == User.id
    ).filter(
        Enrollment.user_id == user_id
    ).order_by(Enrollment.enrolled_at).all()

def get_progress_rows(db: Session, enrollment_id: str, user_id: str):
    return db.query(LessonProgress).filter(
        LessonProgress.enrollment_id == enrollment_id,
        LessonProgress.user_id == user_id
    ).all()

def get_progress_row(db: Session, enrollment_id: str, lesson_id: str):
    return db.query(LessonProgress).filter(
        LessonProgress.enrollment_id == enrollment_id,
        LessonProgress.lesson_id == lesson_id
    ).first()

def get_lessons_with_progress(db: Session, enrollment_id: str, course_id: str):
    """Все уроки курса; прогресс может быть None (LEFT JOIN)"""
    return db.query(Lesson, LessonProgress).outerjoin(
        LessonProgress,
        and_(
            LessonProgress.lesson_id == Lesson.id,
            LessonProgress.enrollment_id == enrollment_id
        )
    ).filter(
        Lesson.course_id == course_id
    ).order_by(Lesson.order).all()

def add_enrollment(db: Session, user_id: str, course_id: str):
    enrollment = Enrollment(user_id=user_id, course_id=course_id)
    db.add(enrollment)
    return enrollment

def change_enrollment_count(db: Session, course_id: str, delta: int):
    # Атомарное выражение на стороне БД, а не read-modify-write
    db.query(Course).filter(Course.id == course_id).update(
        {Course.enrollment_count: Course.enrollment_count + delta},
        synchronize_session=False
    )
