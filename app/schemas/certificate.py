from typing import Optional
from datetime import datetime
from app.schemas.base import CamelModel

class CertificateCreate(CamelModel):
    enrollment_id: str

class CertificateResponse(CamelModel):
    id: str
    user_id: str
    course_id: str
    enrollment_id: Optional[str] = None
    certificate_number: str
    issued_at: datetime
