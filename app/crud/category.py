from sqlalchemy import or_
from sqlalchemy.orm import Session
from app.models.course import Category
from app.schemas.course import CategoryCreate, CategoryUpdate

def get_category(db: Session, category_id: str):
    return db.query(Category).filter(Category.id == category_id).first()

def get_categories(db: Session):
    return db.query(Category).order_by(Category.name).all()

def find_duplicate(db: Session, name: str = None, slug: str = None, exclude_id: str = None):
    conditions = []
    if name:
        conditions.append(Category.name == name)
    if slug:
        conditions.append(Category.slug == slug)
    if not conditions:
        return None

    query = db.query(Category).filter(or_(*conditions))
    if exclude_id:
        query = query.filter(Category.id != exclude_id)
    return query.first()

def create_category(db: Session, category: CategoryCreate):
    db_category = Category(**category.model_dump())
    db.add(db_category)
    db.commit()
    db.refresh(db_category)
    return db_category

def update_category(db: Session, category_id: str, category_update: CategoryUpdate):
    db_category = get_category(db, category_id)
    if not db_category:
        return None

    for field, value in category_update.model_dump(exclude_unset=True).items():
        setattr(db_category, field, value)

    db.commit()
    db.refresh(db_category)
    return db_category

def delete_category(db: Session, category_id: str):
    db_category = get_category(db, category_id)
    if db_category:
        db.delete(db_category)
        db.commit()
    return db_category
