from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from app.database import Base, generate_id
from app.models.user import enum_values
from datetime import datetime
import enum

class CourseLevel(str, enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

class Category(Base):
    __tablename__ = "categories"

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String, unique=True, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)
    description = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)

class Course(Base):
    __tablename__ = "courses"

    id = Column(String(32), primary_key=True, default=generate_id)
    title = Column(String, nullable=False, index=True)
    description = Column(Text)
    category = Column(String, index=True)  # Имя категории
    level = Column(Enum(CourseLevel, name="course_level", values_callable=enum_values), default=CourseLevel.BEGINNER)
    instructor_id = Column(String(32), ForeignKey("users.id"), nullable=False)
    price = Column(Integer, default=0)  # В центах
    thumbnail_url = Column(String)
    is_published = Column(Boolean, default=False)
    enrollment_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Отношения
    instructor = relationship("User", back_populates="courses_taught", foreign_keys=[instructor_id])
    lessons = relationship("Lesson", back_populates="course", cascade="all, delete-orphan", order_by="Lesson.order")
    enrollments = relationship("Enrollment", back_populates="course", cascade="all, delete-orphan")
    reviews = relationship("Review", back_populates="course", cascade="all, delete-orphan")
    certificates = relationship("Certificate", back_populates="course", cascade="all, delete-orphan")
