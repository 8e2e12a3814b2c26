from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from app.database import get_db
from app.schemas.user import UserCreate, UserResponse, UserUpdate
from app.crud import user as crud_user
from app.core.exceptions import BadRequestException, ConflictException, UserNotFoundException

router = APIRouter()

@router.get("", response_model=List[UserResponse])
def read_users(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db)
):
    """Получить список пользователей"""
    return crud_user.get_users(db, skip=skip, limit=limit)

@router.get("/{user_id}", response_model=UserResponse)
def read_user(user_id: str, db: Session = Depends(get_db)):
    """Получить пользователя по ID"""
    user = crud_user.get_user(db, user_id=user_id)
    if not user:
        raise UserNotFoundException(user_id)
    return user

@router.post("", response_model=UserResponse, status_code=201)
def create_user(user: UserCreate, db: Session = Depends(get_db)):
    """Создать пользователя"""
    if crud_user.get_user_by_email(db, email=user.email):
        raise ConflictException("Email already registered")
    return crud_user.create_user(db=db, user=user)

@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    user_update: UserUpdate,
    db: Session = Depends(get_db)
):
    """Обновить пользователя"""
    if user_update.email:
        existing = crud_user.get_user_by_email(db, email=user_update.email)
        if existing and existing.id != user_id:
            raise ConflictException("Email already registered")

    updated_user = crud_user.update_user(db, user_id=user_id, user_update=user_update)
    if not updated_user:
        raise UserNotFoundException(user_id)
    return updated_user

@router.delete("/{user_id}")
def delete_user(user_id: str, db: Session = Depends(get_db)):
    """Удалить пользователя вместе с его записями, отзывами и сертификатами"""
    if not crud_user.get_user(db, user_id=user_id):
        raise UserNotFoundException(user_id)

    # Сначала нужно передать или удалить курсы преподавателя
    if crud_user.count_courses_taught(db, user_id) > 0:
        raise BadRequestException("User is the instructor of existing courses")

    crud_user.delete_user(db, user_id=user_id)
    return {"message": "User deleted successfully"}
