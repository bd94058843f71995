"""
GraphQL input types.

Each input converts itself into the matching pydantic payload from
app.schemas via ``to_model()``; validation failures become BAD_USER_INPUT.
"""

import dataclasses
from typing import Optional

import strawberry

from app import schemas


def _validated(model, value):
    return schemas.validate_input(model, dataclasses.asdict(value))


@strawberry.input
class SignUpInput:
    email: str
    password: str
    name: str
    institute_id: strawberry.ID

    def to_model(self) -> schemas.SignUpInput:
        return _validated(schemas.SignUpInput, self)


@strawberry.input
class SignInInput:
    email: str
    password: str

    def to_model(self) -> schemas.SignInInput:
        return _validated(schemas.SignInInput, self)


@strawberry.input
class CreateInstituteInput:
    name: str
    location: str

    def to_model(self) -> schemas.CreateInstituteInput:
        return _validated(schemas.CreateInstituteInput, self)


@strawberry.input
class UpdateInstituteInput:
    name: Optional[str] = None
    location: Optional[str] = None

    def to_model(self) -> schemas.UpdateInstituteInput:
        return _validated(schemas.UpdateInstituteInput, self)


@strawberry.input
class CreateStudentInput:
    name: str
    email: str
    institute_id: strawberry.ID
    user_id: strawberry.ID

    def to_model(self) -> schemas.CreateStudentInput:
        return _validated(schemas.CreateStudentInput, self)


@strawberry.input
class UpdateStudentInput:
    name: Optional[str] = None
    email: Optional[str] = None
    institute_id: Optional[strawberry.ID] = None

    def to_model(self) -> schemas.UpdateStudentInput:
        return _validated(schemas.UpdateStudentInput, self)


@strawberry.input
class CreateCourseInput:
    title: str
    code: str
    credits: int = 3

    def to_model(self) -> schemas.CreateCourseInput:
        return _validated(schemas.CreateCourseInput, self)


@strawberry.input
class UpdateCourseInput:
    title: Optional[str] = None
    code: Optional[str] = None
    credits: Optional[int] = None

    def to_model(self) -> schemas.UpdateCourseInput:
        return _validated(schemas.UpdateCourseInput, self)


@strawberry.input
class CreateResultInput:
    student_id: strawberry.ID
    course_id: strawberry.ID
    score: float
    grade: str
    year: int

    def to_model(self) -> schemas.CreateResultInput:
        return _validated(schemas.CreateResultInput, self)


@strawberry.input
class UpdateResultInput:
    score: Optional[float] = None
    grade: Optional[str] = None
    year: Optional[int] = None

    def to_model(self) -> schemas.UpdateResultInput:
        return _validated(schemas.UpdateResultInput, self)
