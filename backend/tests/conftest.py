"""
Academic Records Platform - Test Configuration and Fixtures
"""
import os
from typing import Generator

import pytest
from faker import Faker

# Set testing environment before the app is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-jwt-secret-key-for-testing"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.main import app
from app.database import SessionLocal, create_tables, drop_tables, get_db
from app.models import Course, Institute, Result, Student, User
from app.security import create_access_token, get_password_hash

fake = Faker()


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Fresh schema and session for each test"""
    drop_tables()
    create_tables()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Test client whose requests share the test's session"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ── Factories ────────────────────────────────────────────────

@pytest.fixture
def make_user(db_session: Session):
    def _make(email=None, password="password123", role="student") -> User:
        user = User(email=email or fake.unique.email(), password=get_password_hash(password), role=role)
        db_session.add(user)
        db_session.commit()
        return user
    return _make


@pytest.fixture
def make_institute(db_session: Session):
    def _make(name=None, location=None) -> Institute:
        institute = Institute(name=name or fake.company(), location=location or fake.city())
        db_session.add(institute)
        db_session.commit()
        return institute
    return _make


@pytest.fixture
def make_student(db_session: Session, make_user, make_institute):
    def _make(name=None, institute=None, user=None) -> Student:
        institute = institute or make_institute()
        user = user or make_user()
        student = Student(name=name or fake.name(), email=user.email,
                          institute_id=institute.id, user_id=user.id)
        db_session.add(student)
        db_session.commit()
        return student
    return _make


@pytest.fixture
def make_course(db_session: Session):
    def _make(code=None, title=None, credits=3) -> Course:
        course = Course(code=code or fake.unique.bothify("??###").upper(),
                        title=title or fake.catch_phrase(), credits=credits)
        db_session.add(course)
        db_session.commit()
        return course
    return _make


@pytest.fixture
def make_result(db_session: Session):
    def _make(student, course, score=75.0, grade="B", year=2024) -> Result:
        result = Result(student_id=student.id, course_id=course.id,
                        score=score, grade=grade, year=year)
        db_session.add(result)
        db_session.commit()
        return result
    return _make


# ── Authentication ───────────────────────────────────────────

@pytest.fixture
def admin_user(make_user) -> User:
    return make_user(email="admin@example.com", password="adminpassword123", role="admin")


@pytest.fixture
def student_user(make_user) -> User:
    return make_user(email="learner@example.com", password="testpassword123", role="student")


def bearer(user: User) -> dict:
    return {"Authorization": "Bearer {}".format(create_access_token(user.id, user.email, user.role))}


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    return bearer(admin_user)


@pytest.fixture
def student_headers(student_user: User) -> dict:
    return bearer(student_user)


@pytest.fixture
def gql(client: TestClient):
    """POST a GraphQL document and return the decoded response body"""
    def _execute(query: str, variables: dict = None, headers: dict = None) -> dict:
        response = client.post("/graphql", json={"query": query, "variables": variables or {}},
                               headers=headers or {})
        assert response.status_code == 200, response.text
        return response.json()
    return _execute


def error_codes(body: dict) -> list:
    return [e.get("extensions", {}).get("code") for e in body.get("errors", [])]
