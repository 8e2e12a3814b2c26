from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.review import ReviewResponse
from app.crud import review as crud_review
from app.core.exceptions import ReviewNotFoundException

router = APIRouter()

@router.get("/{review_id}", response_model=ReviewResponse)
def read_review(review_id: str, db: Session = Depends(get_db)):
    review = crud_review.get_review(db, review_id)
    if not review:
        raise ReviewNotFoundException()
    return review

@router.delete("/{review_id}")
def delete_review(review_id: str, db: Session = Depends(get_db)):
    """Удалить отзыв"""
    if not crud_review.delete_review(db, review_id):
        raise ReviewNotFoundException()
    return {"message": "Review deleted successfully"}
