from .user import User, UserRole
from .course import Category, Course, CourseLevel
from .lesson import Lesson, LessonProgress
from .enrollment import Enrollment
from .review import Review
from .certificate import Certificate
