"""Shared fixtures: in-memory database, API client and seed data."""
import os

# Must be set before the application settings are imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ["SENTRY_DSN"] = ""

from datetime import datetime
from typing import Any, Dict, Generator, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.tracing import Span, Tracer, get_tracer
from app.database import Base, get_db
from app.main import app
from app.models import (
    Course,
    CourseLevel,
    Enrollment,
    Lesson,
    LessonProgress,
    User,
    UserRole,
)


def make_test_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def engine():
    engine = make_test_engine()
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


class RecordingTracer(Tracer):
    """Tracer that keeps finished spans and captured exceptions in memory"""

    def __init__(self, enabled: bool = True):
        super().__init__(enabled=enabled)
        self.finished_spans: List[Span] = []
        self.captured: List[Dict[str, Any]] = []

    def on_span_finished(self, span: Span) -> None:
        super().on_span_finished(span)
        self.finished_spans.append(span)

    def capture_exception(
        self,
        exc: BaseException,
        tags: Optional[Dict[str, Any]] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().capture_exception(exc, tags=tags, extra=extra)
        self.captured.append({"exception": exc, "tags": tags or {}, "extra": extra or {}})

    def find_spans(self, name: str) -> List[Span]:
        return [span for span in self.finished_spans if span.name == name]


@pytest.fixture
def tracer() -> RecordingTracer:
    return RecordingTracer()


@pytest.fixture
def client(db_session, tracer) -> Generator[TestClient, None, None]:
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_tracer] = lambda: tracer

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def instructor(db_session) -> User:
    user = User(id="I1", name="Ada Lovelace", email="ada@school.org", role=UserRole.INSTRUCTOR)
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def student(db_session) -> User:
    user = User(id="U1", name="Grace Hopper", email="grace@school.org", role=UserRole.STUDENT)
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def course(db_session, instructor) -> Course:
    course = Course(
        id="C1",
        title="Python Basics",
        description="Intro course",
        category="Programming",
        level=CourseLevel.BEGINNER,
        instructor_id=instructor.id,
        enrollment_count=0,
        is_published=True,
    )
    db_session.add(course)
    db_session.commit()
    return course


@pytest.fixture
def lessons(db_session, course) -> List[Lesson]:
    # Inserted out of order on purpose; reads must sort by ``order``
    items = [
        Lesson(id=f"L{position}", course_id=course.id, title=f"Lesson {position}", order=position)
        for position in (3, 1, 4, 2)
    ]
    db_session.add_all(items)
    db_session.commit()
    return sorted(items, key=lambda lesson: lesson.order)


@pytest.fixture
def enrollment(db_session, student, course) -> Enrollment:
    enrollment = Enrollment(
        id="E1",
        user_id=student.id,
        course_id=course.id,
        progress=0,
        enrolled_at=datetime(2024, 1, 10, 9, 0),
    )
    db_session.add(enrollment)
    course.enrollment_count = 1
    db_session.commit()
    return enrollment


@pytest.fixture
def add_progress(db_session):
    """Factory for lesson progress rows of an enrollment."""

    def _add(
        enrollment: Enrollment,
        lesson_id: str,
        completed: bool = True,
        time_spent: int = 0,
        last_position: int = 0,
    ) -> LessonProgress:
        row = LessonProgress(
            enrollment_id=enrollment.id,
            lesson_id=lesson_id,
            user_id=enrollment.user_id,
            completed_at=datetime(2024, 1, 11) if completed else None,
            time_spent=time_spent,
            last_position=last_position,
        )
        db_session.add(row)
        db_session.commit()
        return row

    return _add
