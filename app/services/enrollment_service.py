import logging
from datetime import datetime
from typing import List, Tuple

from sqlalchemy.orm import Session

from app.core.exceptions import (
    BadRequestException,
    CourseNotFoundException,
    CustomHTTPException,
    EnrollmentNotFoundException,
    LessonNotFoundException,
    MissingFieldException,
    UserNotFoundException,
)
from app.core.tracing import Tracer
from app.crud import course as crud_course
from app.crud import enrollment as crud_enrollment
from app.crud import lesson as crud_lesson
from app.crud import user as crud_user
from app.models.course import Course
from app.models.enrollment import Enrollment
from app.models.lesson import LessonProgress
from app.schemas.course import CourseResponse
from app.schemas.enrollment import (
    EnrollmentDetailResponse,
    EnrollmentResponse,
    EnrollmentUpdate,
    EnrollmentWithCourse,
)
from app.schemas.lesson import LessonResponse
from app.schemas.progress import (
    EnrollmentProgressResponse,
    LessonProgressItem,
    LessonProgressResponse,
    LessonProgressUpdate,
)

logger = logging.getLogger(__name__)


def calculate_progress(completed: int, total: int) -> int:
    """Процент завершения с округлением половины вверх, всегда в [0, 100]"""
    if total <= 0:
        return 0
    completed = max(0, min(completed, total))
    return (200 * completed + total) // (2 * total)


def course_to_response(course: Course, instructor_name: str = None) -> CourseResponse:
    response = CourseResponse.model_validate(course)
    response.lesson_count = len(course.lessons)
    if instructor_name is None and course.instructor is not None:
        instructor_name = course.instructor.name
    response.instructor_name = instructor_name
    return response


class EnrollmentService:
    def __init__(self, db: Session, tracer: Tracer):
        self.db = db
        self.tracer = tracer

    # === Запись на курс ===
    def enroll(self, user_id: str, course_id: str) -> Tuple[Enrollment, bool]:
        """Проверяет запрос и создает запись; возвращает (запись, создана ли она)"""
        try:
            return self._enroll(user_id, course_id)
        except CustomHTTPException:
            raise
        except Exception as exc:
            self.db.rollback()
            self.tracer.capture_exception(
                exc,
                tags={
                    "operation": "enrollment.create.backend",
                    "course_id": course_id or "undefined",
                    "user_id": user_id or "undefined",
                },
                extra={"has_user_id": bool(user_id), "has_course_id": bool(course_id)},
            )
            logger.error(
                "Enrollment error for course %s, user %s: %s",
                course_id or "undefined", user_id or "undefined", exc,
            )
            raise

    def _enroll(self, user_id: str, course_id: str) -> Tuple[Enrollment, bool]:
        attributes = {
            "enrollment.course_id": course_id or "undefined",
            "enrollment.user_id": user_id or "undefined",
            "enrollment.user_id_provided": bool(user_id),
        }
        with self.tracer.start_span("enrollment.create.server", op="enrollment.process", attributes=attributes) as span:
            logger.info(
                "Processing enrollment request for course: %s, user: %s",
                course_id or "undefined", user_id or "undefined",
            )
            span.set_attributes({
                "enrollment.request.course_id_provided": bool(course_id),
                "enrollment.request.user_id_provided": bool(user_id),
            })

            # 1. Идентификатор курса обязателен
            if not course_id:
                span.set_attributes({
                    "enrollment.validation.course_id": "missing",
                    "enrollment.validation.result": "failed",
                    "enrollment.error": "course_id_required",
                })
                logger.warning("Course ID is missing")
                raise MissingFieldException("Course ID")

            # 2. Курс должен существовать
            logger.info("Verifying course exists: %s", course_id)
            course = crud_course.get_course(self.db, course_id)
            if course is None:
                span.set_attributes({
                    "enrollment.validation.course_exists": False,
                    "enrollment.validation.result": "failed",
                    "enrollment.error": "course_not_found",
                })
                logger.warning("Course not found: %s", course_id)
                raise CourseNotFoundException(course_id)

            span.set_attributes({
                "enrollment.validation.course_exists": True,
                "enrollment.course.title": course.title,
                "enrollment.course.category": course.category or "unknown",
                "enrollment.course.level": course.level.value if course.level else "unknown",
                "enrollment.course.instructor_id": course.instructor_id or "unknown",
            })
            logger.info('Course found: "%s" (%s)', course.title, course.category)

            # 3. Идентификатор пользователя обязателен
            if not user_id:
                span.set_attributes({
                    "enrollment.validation.user_id": "missing",
                    "enrollment.validation.result": "failed",
                    "enrollment.error": "user_id_missing",
                })
                logger.warning("User ID is missing")
                raise MissingFieldException("User ID")

            # 4. Пользователь должен существовать
            user = crud_user.get_user(self.db, user_id)
            if user is None:
                span.set_attributes({
                    "enrollment.validation.user_exists": False,
                    "enrollment.validation.result": "failed",
                    "enrollment.error": "user_not_found",
                })
                logger.warning("User not found: %s", user_id)
                raise UserNotFoundException(user_id)

            span.set_attributes({
                "enrollment.validation.user_id": "provided",
                "enrollment.validation.result": "passed",
            })

            enrollment = crud_enrollment.get_enrollment_by_user_course(self.db, user_id, course_id)
            created = enrollment is None
            if created:
                # Запись и счетчик курса в одной транзакции
                enrollment = crud_enrollment.add_enrollment(self.db, user_id, course_id)
                crud_enrollment.change_enrollment_count(self.db, course_id, 1)
                self.db.commit()
                self.db.refresh(enrollment)

            span.set_attributes({
                "enrollment.process.success": True,
                "enrollment.created": created,
                "enrollment.id": enrollment.id,
            })
            logger.info(
                'Enrollment validation successful for user %s in course "%s" (created=%s)',
                user_id, course.title, created,
            )
            return enrollment, created

    # === Чтение ===
    def get_user_enrollments(self, user_id: str) -> List[EnrollmentWithCourse]:
        """Записи пользователя с курсом и именем преподавателя, по дате записи"""
        logger.info("Getting enrollments for user: %s", user_id)
        rows = crud_enrollment.get_user_enrollments(self.db, user_id)

        result = []
        for enrollment, course, instructor_name in rows:
            item = EnrollmentWithCourse(
                **EnrollmentResponse.model_validate(enrollment).model_dump(),
                course=course_to_response(course, instructor_name=instructor_name),
            )
            result.append(item)

        logger.info("User enrollments found: %s", len(result))
        return result

    def get_enrollment_or_404(self, enrollment_id: str) -> Enrollment:
        enrollment = crud_enrollment.get_enrollment(self.db, enrollment_id)
        if enrollment is None:
            raise EnrollmentNotFoundException()
        return enrollment

    def get_enrollment_with_progress(self, enrollment_id: str) -> EnrollmentDetailResponse:
        """Запись с уроками курса; прогресс пересчитывается и сохраняется при расхождении"""
        enrollment = self.get_enrollment_or_404(enrollment_id)
        course = crud_course.get_course_with_instructor(self.db, enrollment.course_id)
        lessons = crud_lesson.get_lessons_by_course(self.db, enrollment.course_id)
        progress_rows = crud_enrollment.get_progress_rows(self.db, enrollment_id, enrollment.user_id)

        completed_ids = [row.lesson_id for row in progress_rows if row.completed_at is not None]
        progress = calculate_progress(len(completed_ids), len(lessons))

        if progress != enrollment.progress:
            logger.info(
                "Updating progress of enrollment %s: %s -> %s",
                enrollment_id, enrollment.progress, progress,
            )
            enrollment.progress = progress
            self.db.commit()

        return EnrollmentDetailResponse(
            **EnrollmentResponse.model_validate(enrollment).model_dump(),
            course=course_to_response(course),
            lessons=[LessonResponse.model_validate(lesson) for lesson in lessons],
            completed_lessons=completed_ids,
        )

    def get_progress_detail(self, enrollment_id: str) -> EnrollmentProgressResponse:
        """Сводка прогресса по всем урокам курса, включая непросмотренные"""
        enrollment = self.get_enrollment_or_404(enrollment_id)
        rows = crud_enrollment.get_lessons_with_progress(self.db, enrollment_id, enrollment.course_id)

        lessons = []
        completed = 0
        total_time_spent = 0
        for lesson, progress in rows:
            is_completed = progress is not None and progress.completed_at is not None
            if is_completed:
                completed += 1
            time_spent = (progress.time_spent or 0) if progress is not None else 0
            total_time_spent += time_spent
            lessons.append(LessonProgressItem(
                **LessonResponse.model_validate(lesson).model_dump(),
                completed=is_completed,
                completed_at=progress.completed_at if progress is not None else None,
                time_spent=time_spent,
                last_position=(progress.last_position or 0) if progress is not None else 0,
            ))

        return EnrollmentProgressResponse(
            enrollment_id=enrollment_id,
            course_id=enrollment.course_id,
            total_lessons=len(rows),
            completed_lessons=completed,
            progress_percentage=calculate_progress(completed, len(rows)),
            total_time_spent=total_time_spent,
            lessons=lessons,
        )

    # === Изменение ===
    def update_enrollment(self, enrollment_id: str, patch: EnrollmentUpdate) -> Enrollment:
        enrollment = self.get_enrollment_or_404(enrollment_id)

        for field, value in patch.model_dump(exclude_unset=True).items():
            setattr(enrollment, field, value)
        enrollment.last_accessed_at = datetime.utcnow()

        self.db.commit()
        self.db.refresh(enrollment)
        return enrollment

    def unenroll(self, enrollment_id: str) -> str:
        """Удаляет запись и уменьшает счетчик курса одной транзакцией"""
        logger.info("Deleting enrollment: %s", enrollment_id)
        enrollment = crud_enrollment.get_enrollment(self.db, enrollment_id)
        if enrollment is None:
            logger.warning("Enrollment not found: %s", enrollment_id)
            raise EnrollmentNotFoundException()

        course_id = enrollment.course_id
        try:
            self.db.delete(enrollment)
            self.db.flush()
            crud_enrollment.change_enrollment_count(self.db, course_id, -1)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Error during unenrollment of %s", enrollment_id)
            raise

        logger.info("Enrollment %s deleted, course %s enrollment count decremented", enrollment_id, course_id)
        return enrollment_id

    # === Прогресс по уроку ===
    def record_lesson_progress(
        self,
        enrollment_id: str,
        lesson_id: str,
        patch: LessonProgressUpdate,
    ) -> LessonProgressResponse:
        """Обновляет прогресс урока и пересчитывает прогресс записи"""
        enrollment = self.get_enrollment_or_404(enrollment_id)
        lesson = crud_lesson.get_lesson(self.db, lesson_id)
        if lesson is None:
            raise LessonNotFoundException(lesson_id)
        if lesson.course_id != enrollment.course_id:
            raise BadRequestException("Lesson does not belong to the enrolled course")

        now = datetime.utcnow()
        row = crud_enrollment.get_progress_row(self.db, enrollment_id, lesson_id)
        if row is None:
            row = LessonProgress(
                enrollment_id=enrollment_id,
                lesson_id=lesson_id,
                user_id=enrollment.user_id,
                time_spent=0,
                last_position=0,
            )
            self.db.add(row)

        row.time_spent = (row.time_spent or 0) + patch.time_spent
        if patch.last_position is not None:
            row.last_position = patch.last_position
        if patch.completed is True and row.completed_at is None:
            row.completed_at = now
        elif patch.completed is False:
            row.completed_at = None
        row.updated_at = now
        self.db.flush()

        progress = self._recalculate_progress(enrollment)
        enrollment.last_accessed_at = now
        if progress == 100 and enrollment.completed_at is None:
            enrollment.completed_at = now
        elif progress < 100:
            enrollment.completed_at = None

        self.db.commit()
        self.db.refresh(row)

        response = LessonProgressResponse.model_validate(row)
        response.enrollment_progress = progress
        return response

    def _recalculate_progress(self, enrollment: Enrollment) -> int:
        total = crud_lesson.count_lessons(self.db, enrollment.course_id)
        rows = crud_enrollment.get_progress_rows(self.db, enrollment.id, enrollment.user_id)
        completed = sum(1 for row in rows if row.completed_at is not None)
        enrollment.progress = calculate_progress(completed, total)
        return enrollment.progress

    def refresh_progress(self, enrollment: Enrollment) -> int:
        """Пересчитывает и сохраняет прогресс записи"""
        progress = self._recalculate_progress(enrollment)
        self.db.commit()
        return progress
