"""
Analytics Service - aggregation queries over recorded results.

Provides three read-only rollups:
1. results_per_institute: every result of an institute's students, with the
   average score and student count (full nested data, capped at 10
   institutes when no id is given)
2. top_courses: courses ranked by number of results in a given year
3. top_students: students ranked by cumulative score across all years

top_courses and top_students group and sum in SQL, then fetch the winning
entities with a single IN query. Equal aggregates are ordered by entity id so
the ranking is deterministic.
"""

import time
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.errors import NotFound
from app.logging_config import get_logger, log_with_context
from app.models.course import Course
from app.models.institute import Institute
from app.models.result import Result
from app.models.student import Student
from app.repositories import courses as course_repo
from app.repositories import institutes as institute_repo
from app.repositories import students as student_repo
from app.services.pagination import DEFAULT_LIMIT, get_pagination_params

# Channel logger for analytics operations
logger = get_logger("analytics")

# Institutes rolled up when no specific institute is requested
ROLLUP_INSTITUTE_CAP = 10


@dataclass
class InstituteRollup:
    institute: Institute
    results: List[Result]
    average_score: float
    total_students: int


@dataclass
class TopCourse:
    course: Course
    enrollment_count: int
    year: int


@dataclass
class TopStudent:
    student: Student
    total_score: float
    average_score: float
    result_count: int


def _normalize_limit(limit: Optional[int]) -> int:
    limit, _ = get_pagination_params(limit)
    return limit


def rollup_institute(institute: Institute) -> InstituteRollup:
    """
    Flatten every result of every student of an (eagerly loaded) institute.

    The average is the plain mean of all flattened scores, 0 when there are
    none.
    """
    results = [result for student in institute.students for result in student.results]
    total_score = sum(float(result.score) for result in results)
    return InstituteRollup(
        institute=institute,
        results=results,
        average_score=total_score / len(results) if results else 0.0,
        total_students=len(institute.students),
    )


def results_per_institute(db: Session, institute_id: Optional[str] = None) -> List[InstituteRollup]:
    """
    Roll up one institute, or the first ROLLUP_INSTITUTE_CAP by name.

    Raises NotFound when a specific institute id does not exist.
    """
    start_time = time.time()

    if institute_id is not None:
        institutes = institute_repo.find_with_results(db, institute_id=institute_id)
        if not institutes:
            raise NotFound("Institute not found")
    else:
        institutes = institute_repo.find_with_results(db, cap=ROLLUP_INSTITUTE_CAP)

    rollups = [rollup_institute(institute) for institute in institutes]

    duration_ms = (time.time() - start_time) * 1000
    log_with_context(logger, "INFO",
        "Rolled up {} institutes".format(len(rollups)),
        context={"institute_id": institute_id} if institute_id else None,
        extra_data={
            "duration_ms": round(duration_ms, 2),
            "results": sum(len(r.results) for r in rollups)
        })
    return rollups


def top_courses(db: Session, year: int, limit: Optional[int] = DEFAULT_LIMIT) -> List[TopCourse]:
    """Courses with the most results recorded in ``year``, highest first."""
    start_time = time.time()
    limit = _normalize_limit(limit)

    enrollment_count = func.count(Result.id).label("enrollment_count")
    rows = (db.query(Result.course_id, enrollment_count)
            .filter(Result.year == year)
            .group_by(Result.course_id)
            .order_by(enrollment_count.desc(), Result.course_id.asc())
            .limit(limit)
            .all())

    courses_by_id = {c.id: c for c in course_repo.get_many(db, [row.course_id for row in rows])}
    ranked = [
        TopCourse(course=courses_by_id[row.course_id],
                  enrollment_count=int(row.enrollment_count),
                  year=year)
        for row in rows
        if row.course_id in courses_by_id
    ]

    duration_ms = (time.time() - start_time) * 1000
    log_with_context(logger, "INFO",
        "Top courses computed for {}: {} entries".format(year, len(ranked)),
        extra_data={"duration_ms": round(duration_ms, 2), "year": year, "limit": limit})
    return ranked


def top_students(db: Session, limit: Optional[int] = DEFAULT_LIMIT) -> List[TopStudent]:
    """Students ranked by the sum of all their scores, highest first."""
    start_time = time.time()
    limit = _normalize_limit(limit)

    total_score = func.sum(Result.score).label("total_score")
    average_score = func.avg(Result.score).label("average_score")
    result_count = func.count(Result.id).label("result_count")
    rows = (db.query(Result.student_id, total_score, average_score, result_count)
            .group_by(Result.student_id)
            .order_by(total_score.desc(), Result.student_id.asc())
            .limit(limit)
            .all())

    students_by_id = {
        s.id: s for s in student_repo.get_many_with_institute(db, [row.student_id for row in rows])
    }
    ranked = [
        TopStudent(student=students_by_id[row.student_id],
                   total_score=float(row.total_score),
                   average_score=float(row.average_score),
                   result_count=int(row.result_count))
        for row in rows
        if row.student_id in students_by_id
    ]

    duration_ms = (time.time() - start_time) * 1000
    log_with_context(logger, "INFO",
        "Top students computed: {} entries".format(len(ranked)),
        extra_data={"duration_ms": round(duration_ms, 2), "limit": limit})
    return ranked
