"""
Tests for the offline seeder.
"""
import random

import threading

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.database import SessionLocal, create_tables
from app.models import Course, Institute, Result, Student, User
from app.security import verify_password
from app.services.seeding import (
    DEFAULT_PASSWORD, GRADE_BANDS, SeedPlan, chunk_ranges, score_for_grade, seed,
)
from seed_data import parse_args


class TestChunkRanges:

    def test_covers_every_row_once(self):
        chunks = chunk_ranges(10, 3)

        assert chunks == [(0, 4), (4, 4), (8, 2)]
        assert sum(count for _, count in chunks) == 10

    def test_more_workers_than_rows(self):
        assert chunk_ranges(2, 8) == [(0, 1), (1, 1)]

    def test_empty(self):
        assert chunk_ranges(0, 4) == []

    def test_zero_workers_means_one_chunk(self):
        assert chunk_ranges(5, 0) == [(0, 5)]


@pytest.mark.parametrize("grade", sorted(GRADE_BANDS))
def test_score_falls_in_grade_band(grade):
    rng = random.Random(7)
    low, high = GRADE_BANDS[grade]

    for _ in range(50):
        assert low <= score_for_grade(grade, rng) <= high


def test_seed_small_plan(db_session):
    plan = SeedPlan(institutes=3, students=12, courses=4, results=30,
                    first_year=2022, last_year=2023)

    counts = seed(plan, workers=1, session_factory=SessionLocal,
                  admin_email="Root@Uni.edu", admin_password="rootpass1")

    assert counts == {"institutes": 3, "courses": 4, "users": 13, "students": 12, "results": 30}
    assert db_session.query(Institute).count() == 3
    assert db_session.query(Course).count() == 4
    assert db_session.query(Student).count() == 12
    assert db_session.query(Result).count() == 30

    years = {r.year for r in db_session.query(Result).all()}
    assert years <= {2022, 2023}

    admin = db_session.query(User).filter(User.email == "root@uni.edu").one()
    assert admin.role == "admin"
    assert verify_password("rootpass1", admin.password)

    seeded = db_session.query(User).filter(User.role == "student").first()
    assert verify_password(DEFAULT_PASSWORD, seeded.password)


def test_seed_without_institutes_skips_students_and_results(db_session):
    counts = seed(SeedPlan(institutes=0, students=5, courses=2, results=10),
                  workers=1, session_factory=SessionLocal)

    assert counts["students"] == 0
    assert counts["results"] == 0
    assert db_session.query(Course).count() == 2


@pytest.fixture
def file_session_factory(tmp_path):
    """Sessions on a file database, so worker threads get their own connections"""
    engine = create_engine("sqlite:///{}".format(tmp_path / "seed.db"),
                           connect_args={"check_same_thread": False, "timeout": 30})
    create_tables(bind=engine)
    yield sessionmaker(bind=engine)
    engine.dispose()


def test_seed_with_several_workers(file_session_factory):
    opened_in = []

    def session_factory():
        opened_in.append(threading.current_thread().name)
        return file_session_factory()

    plan = SeedPlan(institutes=7, students=20, courses=5, results=50)

    counts = seed(plan, workers=3, session_factory=session_factory)

    assert counts == {"institutes": 7, "courses": 5, "users": 20, "students": 20, "results": 50}
    # 3 chunks each for institutes, courses and results, plus the student session
    assert len(opened_in) == 10
    caller = threading.current_thread().name
    assert opened_in[6] == caller
    assert caller not in opened_in[:6] + opened_in[7:]

    db = file_session_factory()
    try:
        assert db.query(Institute).count() == 7
        assert db.query(Course).count() == 5
        assert db.query(Result).count() == 50
        codes = sorted(c.code for c in db.query(Course).all())
        assert codes == ["C{:05d}".format(i) for i in range(5)]
    finally:
        db.close()


def test_cli_arguments():
    args = parse_args(["--institutes", "5", "--results", "100", "--workers", "2"])

    assert (args.institutes, args.results, args.workers) == (5, 100, 2)
    assert args.students == SeedPlan().students
