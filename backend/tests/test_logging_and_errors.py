import logging

import pytest

from portal.utils.exceptions import (
    AccessDeniedError,
    CertificateNotFoundError,
    ForbiddenException,
    InternalServerException,
    NotFoundException,
    PortalError,
    StorageError,
    create_error_response,
    to_http_exception,
)
from portal.utils.logger import setup_logger


def test_setup_logger_writes_to_file(tmp_path):
    log_file = tmp_path / "portal.log"
    logger = setup_logger("test-file-logger", level="debug", log_file=str(log_file))
    assert logger.level == logging.DEBUG
    logger.info("인증서 수락")
    for handler in logger.handlers:
        handler.flush()
    assert " - test-file-logger - INFO - 인증서 수락" in log_file.read_text(encoding="utf-8")

    # 두 번째 호출은 핸들러를 추가하지 않는다
    assert len(setup_logger("test-file-logger").handlers) == 2
    for handler in logger.handlers:
        handler.close()


@pytest.mark.parametrize("error, expected_type, status_code, message", [
    (AccessDeniedError("Access denied. Please accept the certificate first."), ForbiddenException, 403,
     "Access denied. Please accept the certificate first."),
    (CertificateNotFoundError("/tmp/missing.cer"), NotFoundException, 404, "Certificate not found"),
    (StorageError("disk full"), InternalServerException, 500, "Database error occurred: disk full"),
    (PortalError(), InternalServerException, 500, "Internal server error"),
])
def test_to_http_exception(error, expected_type, status_code, message):
    exc = to_http_exception(error)
    assert isinstance(exc, expected_type)
    assert exc.status_code == status_code
    assert exc.detail == message


def test_create_error_response():
    assert create_error_response(418, "teapot") == {
        "success": False,
        "error": {"code": "ERR_418", "message": "teapot"},
    }
