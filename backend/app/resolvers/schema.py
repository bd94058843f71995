"""
GraphQL schema assembly.

Merges the per-entity Query and Mutation types into the root types and logs
every error raised while executing an operation: classified request errors
(those carrying an extension code) at INFO, anything else at ERROR.
While an operation executes, every log entry is tagged with its name.
"""

import time
from typing import List, Optional

import strawberry
from graphql import GraphQLError
from strawberry.extensions import SchemaExtension
from strawberry.tools import merge_types
from strawberry.types import ExecutionContext

from app.errors import AcademicError
from app.logging_config import get_logger, log_with_context, operation_var
from app.resolvers.analytics import AnalyticsQuery
from app.resolvers.auth import AuthMutation, AuthQuery
from app.resolvers.courses import CourseMutation, CourseQuery
from app.resolvers.institutes import InstituteMutation, InstituteQuery
from app.resolvers.results import ResultMutation, ResultQuery
from app.resolvers.students import StudentMutation, StudentQuery

logger = get_logger("graphql")

Query = merge_types("Query", (
    AuthQuery,
    InstituteQuery,
    StudentQuery,
    CourseQuery,
    ResultQuery,
    AnalyticsQuery,
))

Mutation = merge_types("Mutation", (
    AuthMutation,
    InstituteMutation,
    StudentMutation,
    CourseMutation,
    ResultMutation,
))


class OperationLogging(SchemaExtension):
    """Tag log entries with the operation name and log how long execution took."""

    def on_execute(self):
        name = self.execution_context.operation_name or "anonymous"
        operation_var.set(name)
        start_time = time.time()
        try:
            yield
            duration_ms = (time.time() - start_time) * 1000
            log_with_context(logger, "INFO", "GraphQL operation executed: {}".format(name),
                             extra_data={"duration_ms": round(duration_ms, 2)})
        finally:
            operation_var.set("")


class AcademicSchema(strawberry.Schema):

    def process_errors(self, errors: List[GraphQLError],
                       execution_context: Optional[ExecutionContext] = None) -> None:
        operation = execution_context.operation_name if execution_context else None
        for error in errors:
            code = (error.extensions or {}).get("code")
            path = ".".join(str(p) for p in error.path or [])
            if isinstance(error.original_error, AcademicError) or code:
                log_with_context(logger, "INFO", "GraphQL error: {}".format(error.message),
                                 extra_data={"code": code, "path": path, "operation": operation})
            else:
                original = error.original_error
                log_with_context(logger, "ERROR", "Unhandled GraphQL error: {}".format(error.message),
                                 extra_data={"path": path, "operation": operation},
                                 exc_info=(type(original), original, original.__traceback__)
                                 if original else False)


schema = AcademicSchema(query=Query, mutation=Mutation, extensions=[OperationLogging])
