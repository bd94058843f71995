"""
Tests for the sign-up and sign-in service.
"""
import pytest
from sqlalchemy.exc import IntegrityError

from app.errors import Unauthenticated
from app.models import Student, User
from app.schemas import SignInInput, SignUpInput
from app.services import auth as auth_service


def sign_up_input(institute, **overrides):
    data = {"email": "ada@uni.edu", "password": "secret123", "name": "Ada",
            "institute_id": institute.id}
    data.update(overrides)
    return SignUpInput(**data)


class TestSignUp:

    def test_creates_user_and_student(self, db_session, make_institute):
        institute = make_institute()

        outcome = auth_service.sign_up(db_session, sign_up_input(institute))

        assert outcome.token
        assert outcome.user.role == "student"
        student = db_session.query(Student).one()
        assert student.user_id == outcome.user.id
        assert student.institute_id == institute.id

    def test_failed_student_insert_rolls_back_user(self, db_session, make_institute, monkeypatch):
        institute = make_institute()
        institute_id = institute.id

        def broken_student(**fields):
            return Student(**{**fields, "name": None})

        monkeypatch.setattr(auth_service, "Student", broken_student)

        with pytest.raises(IntegrityError):
            auth_service.sign_up(db_session, sign_up_input(institute))

        assert db_session.query(User).count() == 0
        assert db_session.query(Student).filter(Student.institute_id == institute_id).count() == 0


class TestPasswordWhitespace:

    def test_password_is_not_stripped(self):
        data = SignUpInput(email="ada@uni.edu", password="  secret123 ", name="  Ada ",
                           institute_id="x")

        assert data.password == "  secret123 "
        assert data.name == "Ada"
        assert SignInInput(email="ada@uni.edu", password=" pw ").password == " pw "

    def test_trailing_space_is_part_of_the_password(self, db_session, make_institute):
        auth_service.sign_up(db_session, sign_up_input(make_institute(), password="secret123 "))

        with pytest.raises(Unauthenticated):
            auth_service.sign_in(db_session, SignInInput(email="ada@uni.edu", password="secret123"))

        outcome = auth_service.sign_in(db_session, SignInInput(email="ada@uni.edu", password="secret123 "))
        assert outcome.user.email == "ada@uni.edu"


class TestSignIn:

    def test_unknown_email_and_wrong_password_share_one_message(self, db_session, make_user):
        make_user(email="ada@uni.edu", password="secret123")

        with pytest.raises(Unauthenticated) as wrong_password:
            auth_service.sign_in(db_session, SignInInput(email="ada@uni.edu", password="nope"))
        with pytest.raises(Unauthenticated) as unknown_email:
            auth_service.sign_in(db_session, SignInInput(email="ghost@uni.edu", password="secret123"))

        assert str(wrong_password.value) == str(unknown_email.value) == auth_service.INVALID_CREDENTIALS

    def test_email_lookup_ignores_case(self, db_session, make_user):
        make_user(email="ada@uni.edu", password="secret123")

        outcome = auth_service.sign_in(db_session, SignInInput(email=" ADA@uni.edu ", password="secret123"))

        assert outcome.user.email == "ada@uni.edu"
