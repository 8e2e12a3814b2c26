from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from app.database import get_db
from app.schemas.course import CategoryCreate, CategoryResponse, CategoryUpdate
from app.crud import category as crud_category
from app.core.exceptions import CategoryNotFoundException, ConflictException

router = APIRouter()

@router.get("", response_model=List[CategoryResponse])
def read_categories(db: Session = Depends(get_db)):
    """Список категорий"""
    return crud_category.get_categories(db)

@router.get("/{category_id}", response_model=CategoryResponse)
def read_category(category_id: str, db: Session = Depends(get_db)):
    category = crud_category.get_category(db, category_id)
    if not category:
        raise CategoryNotFoundException(category_id)
    return category

@router.post("", response_model=CategoryResponse, status_code=201)
def create_category(category: CategoryCreate, db: Session = Depends(get_db)):
    """Создать категорию"""
    if crud_category.find_duplicate(db, name=category.name, slug=category.slug):
        raise ConflictException("Category with this name or slug already exists")
    return crud_category.create_category(db, category)

@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    category_update: CategoryUpdate,
    db: Session = Depends(get_db)
):
    if crud_category.find_duplicate(db, name=category_update.name, slug=category_update.slug, exclude_id=category_id):
        raise ConflictException("Category with this name or slug already exists")

    category = crud_category.update_category(db, category_id, category_update)
    if not category:
        raise CategoryNotFoundException(category_id)
    return category

@router.delete("/{category_id}")
def delete_category(category_id: str, db: Session = Depends(get_db)):
    if not crud_category.delete_category(db, category_id):
        raise CategoryNotFoundException(category_id)
    return {"message": "Category deleted successfully"}
