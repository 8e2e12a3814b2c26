from .user import (
    UserBase,
    UserCreate,
    UserUpdate,
    UserResponse
)

from .course import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CourseBase,
    CourseCreate,
    CourseUpdate,
    CourseResponse
)

from .lesson import (
    LessonBase,
    LessonCreate,
    LessonUpdate,
    LessonResponse,
    LessonDetailResponse
)

from .enrollment import (
    EnrollmentCreate,
    EnrollmentCreateResponse,
    EnrollmentUpdate,
    EnrollmentResponse,
    EnrollmentWithCourse,
    EnrollmentDetailResponse,
    UnenrollResponse
)

from .progress import (
    LessonProgressItem,
    EnrollmentProgressResponse,
    LessonProgressUpdate,
    LessonProgressResponse
)

from .review import (
    ReviewCreate,
    ReviewResponse,
    CourseReviewsResponse
)

from .certificate import (
    CertificateCreate,
    CertificateResponse
)
