"""
Analytics queries. All of them require a signed-in user.
"""

from typing import List, Optional

import strawberry
from strawberry.types import Info

from app.repositories import institutes as institute_repo
from app.resolvers.context import blocking
from app.resolvers.types import Institute, InstituteResults, TopCourse, TopStudent
from app.services import analytics
from app.services.authorization import require_authenticated
from app.services.pagination import DEFAULT_LIMIT


@strawberry.type
class AnalyticsQuery:

    @strawberry.field
    @blocking
    def all_data(self, info: Info) -> List[Institute]:
        """Every institute with students, results and courses eagerly loaded."""
        require_authenticated(info.context.principal)
        return [Institute.from_model(i) for i in institute_repo.find_with_results(info.context.db)]

    @strawberry.field
    @blocking
    def results_per_institute(self, info: Info,
                              institute_id: Optional[strawberry.ID] = None) -> List[InstituteResults]:
        require_authenticated(info.context.principal)
        rollups = analytics.results_per_institute(info.context.db, institute_id)
        return [InstituteResults.from_rollup(r) for r in rollups]

    @strawberry.field
    @blocking
    def top_courses(self, info: Info, year: int, limit: Optional[int] = DEFAULT_LIMIT) -> List[TopCourse]:
        require_authenticated(info.context.principal)
        return [TopCourse.from_row(row) for row in analytics.top_courses(info.context.db, year, limit)]

    @strawberry.field
    @blocking
    def top_students(self, info: Info, limit: Optional[int] = DEFAULT_LIMIT) -> List[TopStudent]:
        require_authenticated(info.context.principal)
        return [TopStudent.from_row(row) for row in analytics.top_students(info.context.db, limit)]
