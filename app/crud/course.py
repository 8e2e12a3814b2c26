from sqlalchemy.orm import Session, joinedload
from app.models.course import Course, CourseLevel
from app.schemas.course import CourseCreate, CourseUpdate
from typing import Optional

def get_course(db: Session, course_id: str):
    return db.query(Course).filter(Course.id == course_id).first()

def get_course_with_instructor(db: Session, course_id: str):
    return db.query(Course).options(
        joinedload(Course.instructor)
    ).filter(Course.id == course_id).first()

def get_courses(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    category: Optional[str] = None,
    level: Optional[CourseLevel] = None,
    instructor_id: Optional[str] = None,
    published_only: bool = False
):
    query = db.query(Course).options(joinedload(Course.instructor))

    if category:
        query = query.filter(Course.category == category)

    if level:
        query = query.filter(Course.level == level)

    if instructor_id:
        query = query.filter(Course.instructor_id == instructor_id)

    if published_only:
        query = query.filter(Course.is_published == True)

    return query.order_by(Course.created_at).offset(skip).limit(limit).all()

def create_course(db: Session, course: CourseCreate):
    db_course = Course(**course.model_dump())
    db.add(db_course)
    db.commit()
    db.refresh(db_course)
    return db_course

def update_course(db: Session, course_id: str, course_update: CourseUpdate):
    db_course = get_course(db, course_id)
    if not db_course:
        return None

    update_data = course_update.model_dump(exclude_unset=True)

    for field, value in update_data.items():
        setattr(db_course, field, value)

    db.commit()
    db.refresh(db_course)
    return db_course

def delete_course(db: Session, course_id: str):
    db_course = get_course(db, course_id)
    if db_course:
        db.delete(db_course)
        db.commit()
    return db_course
