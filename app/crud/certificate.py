from sqlalchemy.orm import Session
from app.models.certificate import Certificate
from datetime import datetime
import uuid

def get_certificate(db: Session, certificate_id: str):
    return db.query(Certificate).filter(Certificate.id == certificate_id).first()

def get_certificate_by_enrollment(db: Session, enrollment_id: str):
    return db.query(Certificate).filter(Certificate.enrollment_id == enrollment_id).first()

def get_user_certificates(db: Session, user_id: str):
    return db.query(Certificate).filter(
        Certificate.user_id == user_id
    ).order_by(Certificate.issued_at).all()

def make_certificate_number(issued_at: datetime) -> str:
    return f"CERT-{issued_at:%Y%m%d}-{uuid.uuid4().hex[:8].upper()}"

def create_certificate(db: Session, user_id: str, course_id: str, enrollment_id: str):
    issued_at = datetime.utcnow()
    db_certificate = Certificate(
        user_id=user_id,
        course_id=course_id,
        enrollment_id=enrollment_id,
        certificate_number=make_certificate_number(issued_at),
        issued_at=issued_at
    )
    db.add(db_certificate)
    db.commit()
    db.refresh(db_certificate)
    return db_certificate
