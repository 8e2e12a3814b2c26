from .user import (
    get_user,
    get_user_by_email,
    get_users,
    create_user,
    update_user,
    delete_user
)

from .category import (
    get_category,
    get_categories,
    create_category,
    update_category,
    delete_category
)

from .course import (
    get_course,
    get_courses,
    create_course,
    update_course,
    delete_course
)

from .lesson import (
    get_lesson,
    get_lessons_by_course,
    create_lesson,
    update_lesson,
    delete_lesson
)

from .enrollment import (
    get_enrollment,
    get_enrollment_by_user_course,
    get_user_enrollments,
    get_lessons_with_progress
)

from .review import (
    get_review,
    get_course_reviews,
    create_review,
    delete_review
)

from .certificate import (
    get_certificate,
    get_user_certificates,
    create_certificate
)
