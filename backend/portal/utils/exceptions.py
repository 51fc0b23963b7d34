from fastapi import HTTPException, status
from typing import Any, Dict, Optional

# 서비스 계층 예외 (HTTP를 모름)
class PortalError(Exception):
    pass

class AccessDeniedError(PortalError):
    """세션에 사용자가 바인딩되지 않은 상태에서 보호된 작업을 호출함"""

class CertificateNotFoundError(PortalError):
    """인증서 파일이 없음"""

class StorageError(PortalError):
    """사용자 저장소 쓰기 실패"""


class AppException(HTTPException):
    """에러 코드를 함께 내려주는 HTTP 예외"""
    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code_default = "INTERNAL_ERROR"
    message_default = "Internal server error"

    def __init__(self, message: Optional[str] = None, error_code: Optional[str] = None):
        super().__init__(status_code=self.status_code_default, detail=message or self.message_default)
        self.error_code = error_code or self.error_code_default

def create_error_response(status_code: int, message: str, error_code: Optional[str] = None) -> Dict[str, Any]:
    """일관된 에러 응답 포맷 생성"""
    return {
        "success": False,
        "error": {
            "code": error_code or f"ERR_{status_code}",
            "message": message
        }
    }

class NotFoundException(AppException):
    status_code_default = status.HTTP_404_NOT_FOUND
    error_code_default = "NOT_FOUND"

    def __init__(self, resource: str, detail: Optional[str] = None):
        super().__init__(detail or f"{resource} not found")

class BadRequestException(AppException):
    status_code_default = status.HTTP_400_BAD_REQUEST
    error_code_default = "BAD_REQUEST"

class UnauthorizedException(AppException):
    status_code_default = status.HTTP_401_UNAUTHORIZED
    error_code_default = "UNAUTHORIZED"
    message_default = "Authentication required"

class ForbiddenException(AppException):
    status_code_default = status.HTTP_403_FORBIDDEN
    error_code_default = "FORBIDDEN"
    message_default = "Access denied. Please accept the certificate first."

class InternalServerException(AppException):
    pass


def to_http_exception(error: PortalError) -> AppException:
    """서비스 예외를 대응하는 HTTP 예외로 변환합니다."""
    if isinstance(error, AccessDeniedError):
        return ForbiddenException(str(error) or None)
    if isinstance(error, CertificateNotFoundError):
        return NotFoundException("Certificate", "Certificate not found")
    if isinstance(error, StorageError):
        return InternalServerException(f"Database error occurred: {error}")
    return InternalServerException()
