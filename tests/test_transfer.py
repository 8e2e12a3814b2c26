"""Tests for JSON snapshot export/import and the course-db command."""
import json
from datetime import datetime

import pytest
from sqlalchemy.orm import sessionmaker

from app.cli import main
from app.database import Base
from app.models import Course, Enrollment, LessonProgress, User
from app.services.transfer_service import (
    METADATA_FILE,
    TABLE_ORDER,
    TransferError,
    export_database,
    import_database,
    read_metadata,
)
from tests.conftest import make_test_engine


@pytest.fixture
def fresh_session():
    engine = make_test_engine()
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()
    engine.dispose()


def test_export_writes_one_file_per_table(db_session, lessons, enrollment, add_progress, tmp_path):
    add_progress(enrollment, "L1", time_spent=30)

    counts = export_database(db_session, tmp_path)

    assert list(counts) == TABLE_ORDER
    assert counts["lessons"] == 4
    assert counts["lesson_progress"] == 1
    for name in TABLE_ORDER:
        assert (tmp_path / f"{name}.json").is_file()

    metadata = json.loads((tmp_path / METADATA_FILE).read_text())
    assert metadata["tables"]["users"] == 2
    assert "exportDate" in metadata

    users = json.loads((tmp_path / "users.json").read_text())
    assert {user["role"] for user in users} == {"student", "instructor"}


def test_import_restores_snapshot_and_is_idempotent(
    db_session, lessons, enrollment, add_progress, tmp_path, fresh_session
):
    add_progress(enrollment, "L2", time_spent=45)
    export_database(db_session, tmp_path)

    first = import_database(fresh_session, tmp_path)
    assert first["users"] == 2
    assert first["lessons"] == 4
    assert first["enrollments"] == 1

    restored = fresh_session.get(Enrollment, "E1")
    assert restored.enrolled_at.year == 2024
    assert fresh_session.get(Course, "C1").enrollment_count == 1
    assert fresh_session.query(LessonProgress).one().time_spent == 45

    second = import_database(fresh_session, tmp_path)
    assert all(count == 0 for count in second.values())
    assert fresh_session.query(User).count() == 2


def test_import_skips_missing_table_files(db_session, student, tmp_path, fresh_session):
    export_database(db_session, tmp_path)
    (tmp_path / "reviews.json").unlink()

    inserted = import_database(fresh_session, tmp_path)

    assert "reviews" not in inserted
    assert inserted["users"] == 1


def test_import_requires_export_directory(fresh_session, tmp_path):
    with pytest.raises(TransferError, match="Export directory not found"):
        import_database(fresh_session, tmp_path / "missing")


def test_import_requires_metadata(tmp_path):
    (tmp_path / "users.json").write_text("[]")
    with pytest.raises(TransferError, match="Metadata file not found"):
        read_metadata(tmp_path)


def test_import_rejects_non_array_table(fresh_session, tmp_path):
    (tmp_path / METADATA_FILE).write_text(json.dumps({"exportDate": "2024-01-01T00:00:00", "tables": {}}))
    (tmp_path / "users.json").write_text(json.dumps({"id": "U1"}))
    with pytest.raises(TransferError, match="JSON array"):
        import_database(fresh_session, tmp_path)


def write_snapshot(directory, tables):
    (directory / METADATA_FILE).write_text(json.dumps({
        "exportDate": "2024-03-01T12:00:00.000Z",
        "tables": {name: len(rows) for name, rows in tables.items()},
    }))
    for name, rows in tables.items():
        (directory / f"{name}.json").write_text(json.dumps(rows))


def test_import_accepts_camel_case_snapshot(fresh_session, tmp_path, caplog):
    write_snapshot(tmp_path, {
        "users": [{
            "id": "I1",
            "name": "Ada Lovelace",
            "email": "ada@school.org",
            "role": "instructor",
            "avatarUrl": "https://cdn.school.org/ada.png",
            "createdAt": "2024-01-05T08:30:00.000Z",
        }],
        "courses": [{
            "id": "C1",
            "title": "T",
            "instructorId": "I1",
            "enrollmentCount": 7,
            "isPublished": True,
            "legacyRating": 4.5,
        }],
    })

    inserted = import_database(fresh_session, tmp_path)

    assert inserted == {"users": 1, "courses": 1}
    course = fresh_session.get(Course, "C1")
    assert course.instructor_id == "I1"
    assert course.enrollment_count == 7
    assert course.is_published is True
    user = fresh_session.get(User, "I1")
    assert user.avatar_url == "https://cdn.school.org/ada.png"
    assert user.created_at == datetime(2024, 1, 5, 8, 30)
    assert "legacyRating" in caplog.text


def test_import_converts_offset_timestamps_to_utc(fresh_session, tmp_path):
    write_snapshot(tmp_path, {
        "users": [{
            "id": "U1",
            "name": "Grace Hopper",
            "email": "grace@school.org",
            "created_at": "2024-01-05T10:30:00+02:00",
        }],
    })

    import_database(fresh_session, tmp_path)

    assert fresh_session.get(User, "U1").created_at == datetime(2024, 1, 5, 8, 30)


# === course-db ===

def test_cli_without_command_fails():
    assert main(["--log-level", "ERROR"]) == 1


def test_cli_import_from_missing_directory_fails(tmp_path):
    url = f"sqlite:///{tmp_path / 'target.db'}"
    assert main(["--database-url", url, "--log-level", "ERROR", "import", "--dir", str(tmp_path / "none")]) == 1


def test_cli_export_then_import(tmp_path):
    source_url = f"sqlite:///{tmp_path / 'source.db'}"
    target_url = f"sqlite:///{tmp_path / 'target.db'}"
    snapshot = tmp_path / "snapshot"

    assert main(["--database-url", source_url, "--log-level", "ERROR", "export", "--dir", str(snapshot)]) == 0
    assert (snapshot / METADATA_FILE).is_file()

    assert main(["--database-url", target_url, "--log-level", "ERROR", "import", "--dir", str(snapshot)]) == 0
