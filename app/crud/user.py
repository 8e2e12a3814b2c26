from sqlalchemy.orm import Session
from app.models.user import User
from app.models.course import Course
from app.crud.enrollment import change_enrollment_count
from app.schemas.user import UserCreate, UserUpdate

def get_user(db: Session, user_id: str):
    return db.query(User).filter(User.id == user_id).first()

def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == email).first()

def get_users(db: Session, skip: int = 0, limit: int = 100):
    return db.query(User).order_by(User.created_at).offset(skip).limit(limit).all()

def create_user(db: Session, user: UserCreate):
    db_user = User(**user.model_dump())
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user

def update_user(db: Session, user_id: str, user_update: UserUpdate):
    db_user = get_user(db, user_id)
    if not db_user:
        return None

    update_data = user_update.model_dump(exclude_unset=True)

    for field, value in update_data.items():
        setattr(db_user, field, value)

    db.commit()
    db.refresh(db_user)
    return db_user

def delete_user(db: Session, user_id: str):
    db_user = get_user(db, user_id)
    if db_user:
        # Записи удаляются каскадом, счетчики курсов уменьшаем вручную
        for enrollment in db_user.enrollments:
            change_enrollment_count(db, enrollment.course_id, -1)
        db.delete(db_user)
        db.commit()
    return db_user

def count_courses_taught(db: Session, user_id: str) -> int:
    return db.query(Course).filter(Course.instructor_id == user_id).count()
