from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.tracing import Tracer, get_tracer
from app.database import get_db
from app.services.enrollment_service import EnrollmentService


def get_enrollment_service(
    db: Session = Depends(get_db),
    tracer: Tracer = Depends(get_tracer)
) -> EnrollmentService:
    return EnrollmentService(db, tracer)
