import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.tracing import tracer

logger = logging.getLogger(__name__)


class CustomHTTPException(HTTPException):
    def __init__(self, detail: str, status_code: int = 400):
        super().__init__(status_code=status_code, detail=detail)

class MissingFieldException(CustomHTTPException):
    def __init__(self, field_label: str):
        super().__init__(detail=f"{field_label} is required.", status_code=status.HTTP_400_BAD_REQUEST)

class BadRequestException(CustomHTTPException):
    def __init__(self, detail: str):
        super().__init__(detail=detail, status_code=status.HTTP_400_BAD_REQUEST)

class ConflictException(CustomHTTPException):
    def __init__(self, detail: str):
        super().__init__(detail=detail, status_code=status.HTTP_409_CONFLICT)

class UserNotFoundException(CustomHTTPException):
    def __init__(self, user_id: str = None):
        detail = f"User with id {user_id} not found" if user_id else "User not found"
        super().__init__(detail=detail, status_code=status.HTTP_404_NOT_FOUND)

class CourseNotFoundException(CustomHTTPException):
    def __init__(self, course_id: str = None):
        detail = f"Course with id {course_id} not found" if course_id else "Course not found"
        super().__init__(detail=detail, status_code=status.HTTP_404_NOT_FOUND)

class LessonNotFoundException(CustomHTTPException):
    def __init__(self, lesson_id: str = None):
        detail = f"Lesson with id {lesson_id} not found" if lesson_id else "Lesson not found"
        super().__init__(detail=detail, status_code=status.HTTP_404_NOT_FOUND)

class EnrollmentNotFoundException(CustomHTTPException):
    def __init__(self):
        super().__init__(detail="Enrollment not found", status_code=status.HTTP_404_NOT_FOUND)

class CategoryNotFoundException(CustomHTTPException):
    def __init__(self, category_id: str = None):
        detail = f"Category with id {category_id} not found" if category_id else "Category not found"
        super().__init__(detail=detail, status_code=status.HTTP_404_NOT_FOUND)

class ReviewNotFoundException(CustomHTTPException):
    def __init__(self):
        super().__init__(detail="Review not found", status_code=status.HTTP_404_NOT_FOUND)

class CertificateNotFoundException(CustomHTTPException):
    def __init__(self):
        super().__init__(detail="Certificate not found", status_code=status.HTTP_404_NOT_FOUND)


def register_exception_handlers(app: FastAPI) -> None:
    """Все ошибки API отдаются в виде {"error": "..."}"""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code >= 500:
            logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.detail)
        else:
            logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info("Validation error on %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"error": "Invalid request", "details": jsonable_errors(exc)},
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"error": str(exc.orig)})

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(exc)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        tracer.capture_exception(exc, tags={"path": request.url.path, "method": request.method})
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": "Internal server error"})


def jsonable_errors(exc: RequestValidationError) -> list:
    errors = []
    for error in exc.errors():
        errors.append({
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg"),
            "type": error.get("type"),
        })
    return errors
