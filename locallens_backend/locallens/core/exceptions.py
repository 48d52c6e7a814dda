# locallens/core/exceptions.py
"""
서비스 계층에서 발생시키는 도메인 예외 모음.

각 예외는 HTTP 상태 코드와 error_code 를 가지고 있어서,
라우트나 전역 에러 핸들러가 그대로 JSON 응답으로 변환할 수 있습니다.
"""


class LocalLensError(Exception):
    status_code = 500
    error_code = "INTERNAL_SERVER_ERROR"
    default_message = "Server error"

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self) -> dict:
        return {"error_code": self.error_code, "msg": self.message}


class DuplicateIdentityError(LocalLensError):
    status_code = 400
    error_code = "DUPLICATE_IDENTITY"
    default_message = "User already exists"


class InvalidCredentialsError(LocalLensError):
    # 이메일이 없는 경우와 비밀번호가 틀린 경우를 구분하지 않습니다.
    status_code = 400
    error_code = "INVALID_CREDENTIALS"
    default_message = "Invalid Credentials"


class UnauthenticatedError(LocalLensError):
    status_code = 401
    error_code = "UNAUTHENTICATED"
    default_message = "No token, authorization denied"


class InvalidTokenError(LocalLensError):
    status_code = 401
    error_code = "INVALID_TOKEN"
    default_message = "Token is not valid"


class ForbiddenError(LocalLensError):
    status_code = 403
    error_code = "FORBIDDEN"
    default_message = "User not authorized"


class NotFoundError(LocalLensError):
    status_code = 404
    error_code = "NOT_FOUND"
    default_message = "Resource not found"


class StoreUnavailableError(LocalLensError):
    """저장소에 연결할 수 없거나 시간 초과된 경우. 재시도 가능한 오류입니다."""
    status_code = 500
    error_code = "STORE_UNAVAILABLE"
    default_message = "Server error"
