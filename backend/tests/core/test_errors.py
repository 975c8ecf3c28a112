"""Error hierarchy — codes, HTTP statuses, and the JSON envelope.

Tests:
    - every concrete error maps to its documented code and status
    - ContractCallError stamps contract/method into the context
    - to_response() shape is stable
"""

import pytest

from portal.core.errors import (
    BookingConflictError, BusinessRuleError, CapacityExceededError,
    ChainUnavailableError, ContractCallError, DatabaseError,
    DuplicateRecordError, ErrorCategory, ErrorContext, IdentityRequiredError,
    InvalidCredentialsError, InvalidWalletError, NotCourseFacultyError,
    PortalError, ResourceNotFoundError,
)


@pytest.mark.parametrize("error, code, status", [
    (BusinessRuleError("x", "COURSE_ENDED"), "COURSE_ENDED", 400),
    (InvalidWalletError("0x12"), "INVALID_WALLET", 400),
    (InvalidCredentialsError(), "INVALID_CREDENTIALS", 401),
    (IdentityRequiredError("User", 3), "IDENTITY_REQUIRED", 403),
    (NotCourseFacultyError(1, 2), "NOT_COURSE_FACULTY", 403),
    (ResourceNotFoundError("Course", 9), "RESOURCE_NOT_FOUND", 404),
    (DuplicateRecordError("dup"), "DUPLICATE_RECORD", 409),
    (BookingConflictError(4), "BOOKING_CONFLICT", 409),
    (CapacityExceededError(5, 10), "CAPACITY_EXCEEDED", 409),
    (ContractCallError("reverted", "MyNFT", "mintNFT"), "CONTRACT_CALL_FAILED", 502),
    (DatabaseError("boom", "commit"), "DATABASE_ERROR", 503),
    (ChainUnavailableError("down"), "CHAIN_UNAVAILABLE", 503),
])
def test_error_code_and_status(error, code, status):
    assert isinstance(error, PortalError)
    assert error.code == code
    assert error.http_status == status


def test_contract_call_error_records_contract_and_method():
    ctx = ErrorContext(user_id=7)
    err = ContractCallError("reverted: paused", "CertificateNFT", "issueCertificate", ctx)

    assert err.context.user_id == 7
    assert err.context.contract == "CertificateNFT"
    assert err.context.method == "issueCertificate"
    assert err.category is ErrorCategory.BLOCKCHAIN
    assert "CertificateNFT.issueCertificate failed" in err.message


def test_to_response_envelope():
    body = DuplicateRecordError("Email taken").to_response()

    error = body["error"]
    assert error["code"] == "DUPLICATE_RECORD"
    assert error["message"] == "Email taken"
    assert error["category"] == "conflict"
    assert set(error["context"]) == {"user_id", "contract", "method", "tx_hash"}
    assert "timestamp" in error
