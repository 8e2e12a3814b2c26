from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.database import Base, generate_id
from datetime import datetime

class Lesson(Base):
    __tablename__ = "lessons"

    id = Column(String(32), primary_key=True, default=generate_id)
    course_id = Column(String(32), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    content = Column(Text)  # Markdown контент
    video_url = Column(String)
    duration = Column(Integer, default=0)  # В секундах
    order = Column(Integer, default=0)  # Порядок в курсе
    is_free = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Отношения
    course = relationship("Course", back_populates="lessons")
    progress_records = relationship("LessonProgress", back_populates="lesson", cascade="all, delete-orphan")

class LessonProgress(Base):
    __tablename__ = "lesson_progress"
    __table_args__ = (
        UniqueConstraint("enrollment_id", "lesson_id", name="uq_lesson_progress_enrollment_lesson"),
    )

    id = Column(String(32), primary_key=True, default=generate_id)
    enrollment_id = Column(String(32), ForeignKey("enrollments.id", ondelete="CASCADE"), nullable=False, index=True)
    lesson_id = Column(String(32), ForeignKey("lessons.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False)
    completed_at = Column(DateTime, nullable=True)
    time_spent = Column(Integer, default=0, nullable=False)  # Секунды, накапливаются
    last_position = Column(Integer, default=0, nullable=False)  # Позиция для продолжения
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Отношения
    enrollment = relationship("Enrollment", back_populates="lesson_progress")
    lesson = relationship("Lesson", back_populates="progress_records")
