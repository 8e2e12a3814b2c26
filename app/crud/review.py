from sqlalchemy import func
from sqlalchemy.orm import Session
from app.models.review import Review
from app.schemas.review import ReviewCreate

def get_review(db: Session, review_id: str):
    return db.query(Review).filter(Review.id == review_id).first()

def get_review_by_user_course(db: Session, user_id: str, course_id: str):
    return db.query(Review).filter(
        Review.user_id == user_id,
        Review.course_id == course_id
    ).first()

def get_course_reviews(db: Session, course_id: str):
    return db.query(Review).filter(
        Review.course_id == course_id
    ).order_by(Review.created_at.desc()).all()

def get_average_rating(db: Session, course_id: str):
    value = db.query(func.avg(Review.rating)).filter(Review.course_id == course_id).scalar()
    return round(float(value), 2) if value is not None else None

def create_review(db: Session, course_id: str, review: ReviewCreate):
    db_review = Review(course_id=course_id, **review.model_dump())
    db.add(db_review)
    db.commit()
    db.refresh(db_review)
    return db_review

def delete_review(db: Session, review_id: str):
    db_review = get_review(db, review_id)
    if db_review:
        db.delete(db_review)
        db.commit()
    return db_review
