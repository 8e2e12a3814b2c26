"""Tests for users, categories, courses, lessons, reviews and certificates."""
from fastapi.testclient import TestClient

from app.models import Course, Enrollment

API = "/api/v1"


# === Users ===

def test_create_and_read_user(client: TestClient):
    response = client.post(f"{API}/users", json={"name": "Alan Turing", "email": "alan@school.org"})

    assert response.status_code == 201
    created = response.json()
    assert created["role"] == "student"
    assert created["avatarUrl"] is None

    fetched = client.get(f"{API}/users/{created['id']}").json()
    assert fetched["email"] == "alan@school.org"


def test_create_user_duplicate_email(client: TestClient, student):
    response = client.post(f"{API}/users", json={"name": "Copy", "email": "grace@school.org"})
    assert response.status_code == 409
    assert response.json() == {"error": "Email already registered"}


def test_create_user_invalid_email(client: TestClient):
    response = client.post(f"{API}/users", json={"name": "Nobody", "email": "not-an-email"})
    assert response.status_code == 422


def test_update_user(client: TestClient, student):
    response = client.put(f"{API}/users/U1", json={"name": "Rear Admiral Hopper"})
    assert response.status_code == 200
    assert response.json()["name"] == "Rear Admiral Hopper"
    assert response.json()["email"] == "grace@school.org"


def test_update_user_rejects_null_name(client: TestClient, student):
    response = client.put(f"{API}/users/U1", json={"name": None})
    assert response.status_code == 422
    assert client.get(f"{API}/users/U1").json()["name"] == "Grace Hopper"


def test_delete_instructor_with_courses_is_rejected(client: TestClient, course):
    response = client.delete(f"{API}/users/I1")
    assert response.status_code == 400
    assert response.json() == {"error": "User is the instructor of existing courses"}


def test_delete_student_removes_enrollments(client: TestClient, db_session, enrollment):
    assert client.delete(f"{API}/users/U1").status_code == 200
    assert client.get(f"{API}/users/U1").status_code == 404
    db_session.expire_all()
    assert db_session.get(Enrollment, "E1") is None
    assert db_session.get(Course, "C1").enrollment_count == 0


# === Categories ===

def test_category_crud(client: TestClient):
    created = client.post(f"{API}/categories", json={"name": "Data", "slug": "data"})
    assert created.status_code == 201
    category_id = created.json()["id"]

    duplicate = client.post(f"{API}/categories", json={"name": "Other", "slug": "data"})
    assert duplicate.status_code == 409

    updated = client.put(f"{API}/categories/{category_id}", json={"description": "Tables and queries"})
    assert updated.json()["description"] == "Tables and queries"

    assert [c["slug"] for c in client.get(f"{API}/categories").json()] == ["data"]
    assert client.delete(f"{API}/categories/{category_id}").status_code == 200
    assert client.get(f"{API}/categories/{category_id}").status_code == 404


# === Courses ===

def test_create_course(client: TestClient, instructor):
    response = client.post(
        f"{API}/courses",
        json={"title": "Rust for Pythonistas", "instructorId": "I1", "level": "intermediate", "price": 49},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["enrollmentCount"] == 0
    assert data["lessonCount"] == 0
    assert data["instructorName"] == "Ada Lovelace"
    assert data["isPublished"] is False


def test_create_course_unknown_instructor(client: TestClient):
    response = client.post(f"{API}/courses", json={"title": "Orphan", "instructorId": "nobody"})
    assert response.status_code == 404
    assert response.json() == {"error": "User with id nobody not found"}


def test_list_courses_filters(client: TestClient, lessons):
    client.post(f"{API}/courses", json={"title": "Draft", "instructorId": "I1", "category": "Data"})

    everything = client.get(f"{API}/courses").json()
    assert {c["title"] for c in everything} == {"Python Basics", "Draft"}

    published = client.get(f"{API}/courses", params={"publishedOnly": "true"}).json()
    assert [c["title"] for c in published] == ["Python Basics"]
    assert published[0]["lessonCount"] == 4

    by_category = client.get(f"{API}/courses", params={"category": "Data"}).json()
    assert [c["title"] for c in by_category] == ["Draft"]

    assert client.get(f"{API}/courses", params={"instructorId": "U1"}).json() == []


def test_read_course_not_found(client: TestClient):
    response = client.get(f"{API}/courses/X")
    assert response.status_code == 404
    assert response.json() == {"error": "Course with id X not found"}


def test_update_course(client: TestClient, course):
    response = client.put(f"{API}/courses/C1", json={"price": 10, "level": "advanced"})
    assert response.status_code == 200
    assert response.json()["price"] == 10
    assert response.json()["level"] == "advanced"


def test_update_course_rejects_null_title(client: TestClient, course):
    response = client.put(f"{API}/courses/C1", json={"title": None, "price": 5})
    assert response.status_code == 422
    assert client.get(f"{API}/courses/C1").json()["price"] == 0


def test_delete_course_removes_lessons_and_enrollments(client: TestClient, db_session, lessons, enrollment):
    assert client.delete(f"{API}/courses/C1").status_code == 200
    assert client.get(f"{API}/lessons/L1").status_code == 404
    db_session.expire_all()
    assert db_session.get(Enrollment, "E1") is None


# === Lessons ===

def test_lessons_of_course_are_ordered(client: TestClient, lessons):
    response = client.get(f"{API}/lessons/course/C1")
    assert [lesson["id"] for lesson in response.json()] == ["L1", "L2", "L3", "L4"]


def test_lesson_detail_renders_markdown(client: TestClient, course):
    created = client.post(
        f"{API}/lessons",
        json={"courseId": "C1", "title": "Intro", "content": "# Welcome\n\nSome *text*", "order": 1},
    )
    assert created.status_code == 201

    detail = client.get(f"{API}/lessons/{created.json()['id']}").json()
    assert "<h1" in detail["contentHtml"]
    assert "<em>text</em>" in detail["contentHtml"]


def test_lesson_without_content_has_empty_html(client: TestClient, lessons):
    assert client.get(f"{API}/lessons/L1").json()["contentHtml"] == ""


def test_create_lesson_for_unknown_course(client: TestClient):
    response = client.post(f"{API}/lessons", json={"courseId": "X", "title": "Lost"})
    assert response.status_code == 404


def test_update_and_delete_lesson(client: TestClient, lessons):
    assert client.put(f"{API}/lessons/L2", json={"title": "Variables"}).json()["title"] == "Variables"
    assert client.put(f"{API}/lessons/L2", json={"order": None}).status_code == 422
    assert client.delete(f"{API}/lessons/L2").status_code == 200
    assert client.delete(f"{API}/lessons/L2").status_code == 404


# === Reviews ===

def test_reviews_and_average_rating(client: TestClient, student, instructor, course):
    first = client.post(f"{API}/courses/C1/reviews", json={"userId": "U1", "rating": 5, "comment": "Great"})
    assert first.status_code == 201
    client.post(f"{API}/courses/C1/reviews", json={"userId": "I1", "rating": 2})

    data = client.get(f"{API}/courses/C1/reviews").json()
    assert data["count"] == 2
    assert data["averageRating"] == 3.5

    review_id = first.json()["id"]
    assert client.get(f"{API}/reviews/{review_id}").json()["comment"] == "Great"
    assert client.delete(f"{API}/reviews/{review_id}").status_code == 200
    assert client.get(f"{API}/reviews/{review_id}").status_code == 404


def test_second_review_by_same_user_conflicts(client: TestClient, student, course):
    client.post(f"{API}/courses/C1/reviews", json={"userId": "U1", "rating": 4})
    response = client.post(f"{API}/courses/C1/reviews", json={"userId": "U1", "rating": 1})
    assert response.status_code == 409
    assert response.json() == {"error": "User has already reviewed this course"}


def test_review_rating_out_of_range(client: TestClient, student, course):
    response = client.post(f"{API}/courses/C1/reviews", json={"userId": "U1", "rating": 6})
    assert response.status_code == 422


def test_reviews_of_course_without_reviews(client: TestClient, course):
    data = client.get(f"{API}/courses/C1/reviews").json()
    assert data["count"] == 0
    assert data["averageRating"] is None


# === Certificates ===

def test_certificate_requires_completed_course(client: TestClient, lessons, enrollment, add_progress):
    add_progress(enrollment, "L1")

    response = client.post(f"{API}/certificates", json={"enrollmentId": "E1"})

    assert response.status_code == 400
    assert response.json() == {"error": "Course not completed"}


def test_certificate_issued_once(client: TestClient, lessons, enrollment, add_progress):
    for lesson in lessons:
        add_progress(enrollment, lesson.id)

    first = client.post(f"{API}/certificates", json={"enrollmentId": "E1"})
    second = client.post(f"{API}/certificates", json={"enrollmentId": "E1"})

    assert first.status_code == 201
    assert first.json()["certificateNumber"].startswith("CERT-")
    assert second.json()["id"] == first.json()["id"]

    owned = client.get(f"{API}/certificates/user/U1").json()
    assert [c["id"] for c in owned] == [first.json()["id"]]
    assert client.get(f"{API}/certificates/{first.json()['id']}").json()["courseId"] == "C1"


def test_certificate_for_unknown_enrollment(client: TestClient):
    response = client.post(f"{API}/certificates", json={"enrollmentId": "missing"})
    assert response.status_code == 404
    assert response.json() == {"error": "Enrollment not found"}


def test_certificate_survives_unenroll(client: TestClient, lessons, enrollment, add_progress):
    for lesson in lessons:
        add_progress(enrollment, lesson.id)
    certificate = client.post(f"{API}/certificates", json={"enrollmentId": "E1"}).json()

    assert client.delete(f"{API}/enrollments/E1").status_code == 200

    kept = client.get(f"{API}/certificates/{certificate['id']}").json()
    assert kept["enrollmentId"] is None
    assert kept["certificateNumber"] == certificate["certificateNumber"]
