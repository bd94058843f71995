"""
Seeding Service - offline bulk data generation.

Fills the database with synthetic institutes, users + students, courses and
results. Independent entities are generated by a pool of worker threads,
each inserting one contiguous chunk through its own session. This runs as a
batch job (see seed_data.py) and is never used while serving requests.
"""

import random
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from faker import Faker
from sqlalchemy.orm import Session

from app.database import SessionLocal, transaction
from app.logging_config import get_logger, log_with_context
from app.models.course import Course
from app.models.institute import Institute
from app.models.result import GRADES, Result
from app.models.student import Student
from app.models.user import User
from app.security import get_password_hash

logger = get_logger("seed")

# Score band (inclusive) each grade is drawn from
GRADE_BANDS: Dict[str, Tuple[float, float]] = {
    "A+": (95.0, 100.0),
    "A": (90.0, 94.99),
    "A-": (85.0, 89.99),
    "B+": (80.0, 84.99),
    "B": (75.0, 79.99),
    "B-": (70.0, 74.99),
    "C+": (65.0, 69.99),
    "C": (60.0, 64.99),
    "C-": (55.0, 59.99),
    "D+": (50.0, 54.99),
    "D": (45.0, 49.99),
    "F": (0.0, 44.99),
}

DEFAULT_PASSWORD = "password123"
BATCH_SIZE = 5000


@dataclass
class SeedPlan:
    institutes: int = 1000
    students: int = 100000
    courses: int = 500
    results: int = 150000
    first_year: int = 2020
    last_year: int = 2024


def score_for_grade(grade: str, rng: random.Random) -> float:
    low, high = GRADE_BANDS[grade]
    return round(rng.uniform(low, high), 2)


def chunk_ranges(total: int, workers: int) -> List[Tuple[int, int]]:
    """Split ``total`` rows into at most ``workers`` (start, count) chunks."""
    if total <= 0:
        return []
    workers = max(1, workers)
    per_worker = -(-total // workers)
    return [(start, min(per_worker, total - start)) for start in range(0, total, per_worker)]


def _insert_in_batches(db: Session, rows: List[object]):
    for i in range(0, len(rows), BATCH_SIZE):
        with transaction(db):
            db.add_all(rows[i:i + BATCH_SIZE])


def make_institutes(start: int, count: int, fake: Faker) -> List[Institute]:
    return [
        Institute(name="{} Institute {}".format(fake.last_name(), start + i), location=fake.city())
        for i in range(count)
    ]


def make_courses(start: int, count: int, fake: Faker) -> List[Course]:
    rng = random.Random(start)
    return [
        Course(title=fake.catch_phrase()[:255], code="C{:05d}".format(start + i),
               credits=rng.randint(1, 6))
        for i in range(count)
    ]


def make_results(count: int, student_ids: List[str], course_ids: List[str],
                 plan: SeedPlan, rng: random.Random) -> List[Result]:
    rows = []
    for _ in range(count):
        grade = rng.choice(GRADES)
        rows.append(Result(
            student_id=rng.choice(student_ids),
            course_id=rng.choice(course_ids),
            grade=grade,
            score=score_for_grade(grade, rng),
            year=rng.randint(plan.first_year, plan.last_year),
        ))
    return rows


def _run_chunks(name: str, total: int, workers: int,
                work: Callable[[Session, int, int], int],
                session_factory: Callable[[], Session]) -> int:
    """Run ``work(db, start, count)`` over every chunk in a thread pool."""

    def run(chunk: Tuple[int, int]) -> int:
        start, count = chunk
        db = session_factory()
        try:
            return work(db, start, count)
        finally:
            db.close()

    chunks = chunk_ranges(total, workers)
    with ThreadPoolExecutor(max_workers=max(1, len(chunks))) as pool:
        inserted = sum(pool.map(run, chunks))

    log_with_context(logger, "INFO", "Seeded {} {}".format(inserted, name),
                     extra_data={"workers": len(chunks)})
    return inserted


def seed(plan: SeedPlan, workers: int = 4,
         session_factory: Callable[[], Session] = SessionLocal,
         admin_email: Optional[str] = None, admin_password: Optional[str] = None) -> Dict[str, int]:
    """
    Generate a full data set according to ``plan``.

    Institutes and courses are generated in parallel chunks; users and their
    student profiles are inserted in batches on one session because every
    student needs a fresh user id; results are generated in parallel once
    both id pools exist. Returns the number of rows inserted per table.
    """
    start_time = time.time()

    def institutes_work(db, start, count):
        _insert_in_batches(db, make_institutes(start, count, Faker()))
        return count

    def courses_work(db, start, count):
        _insert_in_batches(db, make_courses(start, count, Faker()))
        return count

    counts = {
        "institutes": _run_chunks("institutes", plan.institutes, workers, institutes_work, session_factory),
        "courses": _run_chunks("courses", plan.courses, workers, courses_work, session_factory),
    }

    db = session_factory()
    try:
        institute_ids = [row.id for row in db.query(Institute.id).all()]
        course_ids = [row.id for row in db.query(Course.id).all()]

        # One hash reused for every generated account
        password_hash = get_password_hash(DEFAULT_PASSWORD)
        rng = random.Random(0)
        fake = Faker()
        student_ids: List[str] = []
        for batch_start in range(0, plan.students if institute_ids else 0, BATCH_SIZE):
            batch = range(batch_start, min(batch_start + BATCH_SIZE, plan.students))
            with transaction(db):
                users = [User(email="student{}@example.com".format(i), password=password_hash,
                              role="student") for i in batch]
                db.add_all(users)
                db.flush()
                students = [
                    Student(name=fake.name(), email=user.email,
                            institute_id=rng.choice(institute_ids), user_id=user.id)
                    for user in users
                ]
                db.add_all(students)
                db.flush()
                student_ids.extend(s.id for s in students)
        counts["users"] = counts["students"] = len(student_ids)
        log_with_context(logger, "INFO", "Seeded {} users and students".format(len(student_ids)))

        if admin_email and admin_password:
            with transaction(db):
                db.add(User(email=admin_email.lower(), password=get_password_hash(admin_password),
                            role="admin"))
            counts["users"] += 1
            log_with_context(logger, "INFO", "Created admin account", context={"email": admin_email})
    finally:
        db.close()

    def results_work(db, start, count):
        _insert_in_batches(db, make_results(count, student_ids, course_ids, plan, random.Random(start)))
        return count

    if student_ids and course_ids:
        counts["results"] = _run_chunks("results", plan.results, workers, results_work, session_factory)
    else:
        counts["results"] = 0

    duration_ms = (time.time() - start_time) * 1000
    log_with_context(logger, "INFO", "Seeding complete",
                     extra_data={"duration_ms": round(duration_ms, 2), **counts})
    return counts
