"""
Tests for structured logging and operation tagging.
"""
import json
import logging

from app.logging_config import StructuredJsonFormatter, get_logger, log_with_context, operation_var


def test_operation_name_is_added_to_context(caplog):
    logger = get_logger("analytics")
    caplog.set_level(logging.INFO, logger="app.analytics")

    token = operation_var.set("TopFive")
    try:
        log_with_context(logger, "INFO", "tagged", context={"institute_id": "i-1"})
    finally:
        operation_var.reset(token)
    log_with_context(logger, "INFO", "untagged")

    tagged, untagged = caplog.records[-2:]
    assert tagged.context == {"operation": "TopFive", "institute_id": "i-1"}
    assert untagged.context == {}


def test_formatter_emits_json_with_exception(caplog):
    logger = get_logger("graphql")
    caplog.set_level(logging.ERROR, logger="app.graphql")

    try:
        raise ValueError("boom")
    except ValueError:
        log_with_context(logger, "ERROR", "failed", extra_data={"path": "topStudents"}, exc_info=True)

    entry = json.loads(StructuredJsonFormatter().format(caplog.records[-1]))
    assert entry["channel"] == "graphql"
    assert entry["level"] == "ERROR"
    assert entry["extra"] == {"path": "topStudents"}
    assert "ValueError: boom" in entry["exception"]


def test_resolver_logs_carry_operation_name(client, student_headers, caplog):
    caplog.set_level(logging.INFO, logger="app.analytics")

    response = client.post("/graphql", json={
        "query": "query TopFive { topStudents(limit: 5) { totalScore } }",
        "operationName": "TopFive",
    }, headers=student_headers)

    assert response.status_code == 200
    records = [r for r in caplog.records if r.name == "app.analytics"]
    assert records
    assert all(r.context.get("operation") == "TopFive" for r in records)
