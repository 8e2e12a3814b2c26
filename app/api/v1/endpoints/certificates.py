import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from app.database import get_db
from app.api.dependencies import get_enrollment_service
from app.schemas.certificate import CertificateCreate, CertificateResponse
from app.crud import certificate as crud_certificate
from app.core.exceptions import BadRequestException, CertificateNotFoundException
from app.services.enrollment_service import EnrollmentService

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("", response_model=CertificateResponse, status_code=201)
def issue_certificate(
    payload: CertificateCreate,
    db: Session = Depends(get_db),
    service: EnrollmentService = Depends(get_enrollment_service)
):
    """Выдать сертификат по завершенной записи (повторный вызов вернет тот же)"""
    enrollment = service.get_enrollment_or_404(payload.enrollment_id)

    existing = crud_certificate.get_certificate_by_enrollment(db, enrollment.id)
    if existing:
        return existing

    if service.refresh_progress(enrollment) < 100:
        raise BadRequestException("Course not completed")

    certificate = crud_certificate.create_certificate(
        db,
        user_id=enrollment.user_id,
        course_id=enrollment.course_id,
        enrollment_id=enrollment.id
    )
    logger.info("Issued certificate %s for enrollment %s", certificate.certificate_number, enrollment.id)
    return certificate

@router.get("/user/{user_id}", response_model=List[CertificateResponse])
def read_user_certificates(user_id: str, db: Session = Depends(get_db)):
    """Сертификаты пользователя"""
    return crud_certificate.get_user_certificates(db, user_id)

@router.get("/{certificate_id}", response_model=CertificateResponse)
def read_certificate(certificate_id: str, db: Session = Depends(get_db)):
    certificate = crud_certificate.get_certificate(db, certificate_id)
    if not certificate:
        raise CertificateNotFoundException()
    return certificate
