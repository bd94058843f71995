"""
Analytics tests: rollups per institute, top courses, top students.
"""
import pytest

from app.errors import NotFound
from app.services import analytics


class TestTopStudents:

    def test_ranked_by_cumulative_score(self, db_session, make_student, make_course, make_result):
        course_a, course_b = make_course(), make_course()
        s1, s2, s3 = make_student(name="S1"), make_student(name="S2"), make_student(name="S3")
        make_result(s1, course_a, score=90, grade="A", year=2023)
        make_result(s1, course_b, score=80, grade="B+", year=2024)
        make_result(s2, course_a, score=100, grade="A+", year=2024)
        make_result(s3, course_a, score=50, grade="D+", year=2024)

        ranked = analytics.top_students(db_session, limit=3)

        assert [r.student.name for r in ranked] == ["S1", "S2", "S3"]
        assert [r.total_score for r in ranked] == [170.0, 100.0, 50.0]
        assert ranked[0].average_score == pytest.approx(85.0)
        assert ranked[0].result_count == 2
        assert ranked[0].student.institute is not None

    def test_limit_applies(self, db_session, make_student, make_course, make_result):
        course = make_course()
        for score in (10, 20, 30, 40):
            make_result(make_student(), course, score=score, grade="F")

        assert len(analytics.top_students(db_session, limit=2)) == 2

    def test_ties_ordered_by_student_id(self, db_session, make_student, make_course, make_result):
        course = make_course()
        students = [make_student() for _ in range(3)]
        for student in students:
            make_result(student, course, score=70, grade="B-")

        ranked = analytics.top_students(db_session)

        assert [r.student.id for r in ranked] == sorted(s.id for s in students)


class TestTopCourses:

    def test_counts_only_requested_year(self, db_session, make_student, make_course, make_result):
        c1, c2, c3 = make_course(code="C1"), make_course(code="C2"), make_course(code="C3")
        student = make_student()
        for _ in range(5):
            make_result(student, c1, year=2024)
            make_result(student, c2, year=2024)
        for _ in range(2):
            make_result(student, c3, year=2024)
        for _ in range(9):
            make_result(student, c3, year=2023)

        ranked = analytics.top_courses(db_session, year=2024, limit=2)

        assert {r.course.code for r in ranked} == {"C1", "C2"}
        assert all(r.enrollment_count == 5 for r in ranked)
        assert all(r.year == 2024 for r in ranked)

    def test_year_without_results(self, db_session, make_course):
        make_course()

        assert analytics.top_courses(db_session, year=2030) == []


class TestResultsPerInstitute:

    def test_rollup_flattens_results(self, db_session, make_institute, make_student,
                                     make_course, make_result):
        institute = make_institute(name="Alpha")
        course = make_course()
        s1 = make_student(institute=institute)
        s2 = make_student(institute=institute)
        make_student(institute=institute)
        make_result(s1, course, score=80, grade="B+")
        make_result(s1, course, score=60, grade="C", year=2023)
        make_result(s2, course, score=100, grade="A+")

        [rollup] = analytics.results_per_institute(db_session, institute.id)

        assert rollup.institute.name == "Alpha"
        assert rollup.total_students == 3
        assert len(rollup.results) == 3
        assert rollup.average_score == pytest.approx(80.0)
        assert all(r.course is not None for r in rollup.results)

    def test_institute_without_results_averages_zero(self, db_session, make_institute):
        institute = make_institute()

        [rollup] = analytics.results_per_institute(db_session, institute.id)

        assert rollup.average_score == 0
        assert rollup.total_students == 0
        assert rollup.results == []

    def test_all_institutes_capped_and_ordered_by_name(self, db_session, make_institute):
        for i in range(12):
            make_institute(name="Institute {:02d}".format(11 - i))

        rollups = analytics.results_per_institute(db_session)

        names = [r.institute.name for r in rollups]
        assert len(names) == analytics.ROLLUP_INSTITUTE_CAP
        assert names == sorted(names)
        assert names[0] == "Institute 00"

    def test_unknown_institute(self, db_session):
        with pytest.raises(NotFound):
            analytics.results_per_institute(db_session, "missing")
