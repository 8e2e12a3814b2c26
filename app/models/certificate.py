from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base, generate_id
from datetime import datetime

class Certificate(Base):
    __tablename__ = "certificates"

    id = Column(String(32), primary_key=True, default=generate_id)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    course_id = Column(String(32), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False)
    # После отписки сертификат остается, ссылка обнуляется
    enrollment_id = Column(String(32), ForeignKey("enrollments.id", ondelete="SET NULL"), unique=True, nullable=True)
    certificate_number = Column(String, unique=True, nullable=False)
    issued_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="certificates")
    course = relationship("Course", back_populates="certificates")
    enrollment = relationship("Enrollment", back_populates="certificate")
