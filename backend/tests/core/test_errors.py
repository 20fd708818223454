"""Error Hierarchy — codes, HTTP statuses and the REST envelope."""

from task_controller.core.errors import (
    ConstraintViolationError, DatabaseError, ErrorCategory,
    ResourceNotFoundError, TaskControllerError, TransactionClosedError,
    TransactionError, ValidationFailureError,
)


def test_not_found_envelope():
    err = ResourceNotFoundError("Task", "abc")
    body = err.to_response()["error"]
    assert err.http_status == 404
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["message"] == "Task 'abc' not found"
    assert body["context"]["resource_type"] == "Task"
    assert body["context"]["resource_id"] == "abc"


def test_validation_failure_is_400():
    err = ValidationFailureError("title is required", field="title")
    assert err.http_status == 400
    assert err.category == ErrorCategory.VALIDATION


def test_constraint_violation_is_a_database_error():
    err = ConstraintViolationError("insert task_tag")
    assert isinstance(err, DatabaseError)
    assert err.http_status == 409
    assert err.code == "CONSTRAINT_VIOLATION"
    assert err.operation == "insert task_tag"
    assert err.to_response()["error"]["context"]["operation"] == "insert task_tag"


def test_database_error_message_names_operation():
    err = DatabaseError("Connection or operational error", "commit")
    assert err.message == "Database commit failed: Connection or operational error"
    assert err.http_status == 503


def test_transaction_error_keeps_both_errors():
    original = ValueError("insert failed")
    rollback = RuntimeError("socket closed")
    err = TransactionError(original, rollback)
    assert err.original is original
    assert err.rollback_error is rollback
    assert err.message == "transaction error: insert failed, rollback error: socket closed"


def test_transaction_error_names_errors_without_a_message():
    err = TransactionError(ValueError(), ConnectionError("socket closed"))
    assert err.message == "transaction error: ValueError, rollback error: socket closed"


def test_all_errors_share_the_base():
    for err in (
        ResourceNotFoundError("Tag", "x"),
        ValidationFailureError("bad", field="f"),
        DatabaseError("x", "y"),
        TransactionError(ValueError(), ValueError()),
        TransactionClosedError(),
    ):
        assert isinstance(err, TaskControllerError)
        assert set(err.to_response()["error"]) >= {"code", "message", "severity"}
