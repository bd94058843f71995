"""
Typed request payloads for every mutation.

GraphQL inputs are converted into these pydantic models before they reach a
repository, so business code only ever sees validated values. Update models
are partial: ``changes()`` returns only the fields the caller supplied.
"""

from typing import Annotated, Any, Dict, Literal, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, ValidationError

from app.errors import BadUserInput
from app.models.result import MIN_YEAR, MAX_YEAR

Grade = Literal["A+", "A", "A-", "B+", "B", "B-", "C+", "C", "C-", "D+", "D", "F"]

ModelT = TypeVar("ModelT", bound=BaseModel)

# Passwords are compared byte for byte, so they are never stripped
Password = Annotated[str, StringConstraints(strip_whitespace=False)]
NewPassword = Annotated[str, StringConstraints(strip_whitespace=False, min_length=6, max_length=128)]


class InputModel(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    def changes(self) -> Dict[str, Any]:
        """Fields explicitly supplied by the caller (partial updates)."""
        return self.model_dump(exclude_unset=True)


# ── Authentication ───────────────────────────────────────────

class SignUpInput(InputModel):
    email: EmailStr
    password: NewPassword
    name: str = Field(..., min_length=1, max_length=255)
    institute_id: str


class SignInInput(InputModel):
    email: str
    password: Password


# ── Institutes ───────────────────────────────────────────────

class CreateInstituteInput(InputModel):
    name: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)


class UpdateInstituteInput(InputModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = Field(None, min_length=1, max_length=255)


# ── Students ─────────────────────────────────────────────────

class CreateStudentInput(InputModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    institute_id: str
    user_id: str


class UpdateStudentInput(InputModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    institute_id: Optional[str] = None


# ── Courses ──────────────────────────────────────────────────

class CreateCourseInput(InputModel):
    title: str = Field(..., min_length=1, max_length=255)
    code: str = Field(..., min_length=1, max_length=50)
    credits: int = Field(3, ge=1, le=6)


class UpdateCourseInput(InputModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    code: Optional[str] = Field(None, min_length=1, max_length=50)
    credits: Optional[int] = Field(None, ge=1, le=6)


# ── Results ──────────────────────────────────────────────────

class CreateResultInput(InputModel):
    student_id: str
    course_id: str
    score: float = Field(..., ge=0, le=100)
    grade: Grade
    year: int = Field(..., ge=MIN_YEAR, le=MAX_YEAR)


class UpdateResultInput(InputModel):
    score: Optional[float] = Field(None, ge=0, le=100)
    grade: Optional[Grade] = None
    year: Optional[int] = Field(None, ge=MIN_YEAR, le=MAX_YEAR)


def validate_input(model: Type[ModelT], data: Dict[str, Any]) -> ModelT:
    """
    Build ``model`` from raw input, raising BadUserInput on failure.

    Keys whose value is None are treated as not supplied, so GraphQL's
    optional fields map onto partial updates.
    """
    supplied = {k: v for k, v in data.items() if v is not None}
    try:
        return model.model_validate(supplied)
    except ValidationError as e:
        problems = "; ".join(
            "{}: {}".format(".".join(str(p) for p in err["loc"]) or "input", err["msg"])
            for err in e.errors()
        )
        raise BadUserInput("Invalid input - {}".format(problems)) from e
