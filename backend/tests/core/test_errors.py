"""Error Hierarchy — verifies status codes, codes and the response envelope."""

import pytest

from supportdesk.core.errors import (
    AuthenticationError, AuthorizationError, DatabaseError, ErrorCategory,
    ErrorSeverity, InternalError, MailDeliveryError, ParticipantResolutionError,
    RequestValidationFailed, ResourceNotFoundError, SupportDeskError,
)


@pytest.mark.parametrize("error, status, code", [
    (AuthenticationError(), 401, "NOT_AUTHENTICATED"),
    (AuthorizationError(), 401, "UNAUTHORIZED"),
    (RequestValidationFailed("bad"), 400, "BAD_REQUEST"),
    (ResourceNotFoundError("Chat not found"), 404, "RESOURCE_NOT_FOUND"),
    (ParticipantResolutionError("two agents"), 409, "PARTICIPANTS_AMBIGUOUS"),
    (InternalError("Failed to create chat group"), 500, "INTERNAL_ERROR"),
    (DatabaseError("boom", "commit"), 500, "DATABASE_ERROR"),
    (MailDeliveryError("provider returned 401"), 500, "MAIL_DELIVERY_FAILED"),
])
def test_status_and_code(error, status, code):
    assert isinstance(error, SupportDeskError)
    assert error.http_status == status
    assert error.code == code


def test_to_response_omits_empty_details():
    assert ResourceNotFoundError("Chat not found").to_response() == {
        "status": 404,
        "message": "Chat not found",
        "code": "RESOURCE_NOT_FOUND",
    }


def test_to_response_includes_details():
    details = [{"field": "body.amount", "message": "required"}]
    body = RequestValidationFailed("Missing or invalid fields", details=details).to_response()
    assert body["details"] == details


def test_server_errors_are_critical():
    assert InternalError("x").severity == ErrorSeverity.CRITICAL
    assert DatabaseError("x", "flush").category == ErrorCategory.DATABASE
    assert DatabaseError("x", "flush").message == "Database flush failed: x"


def test_participant_error_records_chat_id():
    assert ParticipantResolutionError("x", chat_id=42).context.chat_id == 42
