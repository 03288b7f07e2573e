from fastapi import status

from src.libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(
        self, base_error: Error, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    ):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


CLIENT_ERROR_STATUS = {
    # 400
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "MISSING_PARAMETER": status.HTTP_400_BAD_REQUEST,
    "INVALID_ROLE": status.HTTP_400_BAD_REQUEST,
    "INVALID_ACTION": status.HTTP_400_BAD_REQUEST,
    "INVALID_STATUS": status.HTTP_400_BAD_REQUEST,
    "REJECTION_REASON_REQUIRED": status.HTTP_400_BAD_REQUEST,
    "EMPTY_FILE": status.HTTP_400_BAD_REQUEST,
    "FILE_TOO_LARGE": status.HTTP_400_BAD_REQUEST,
    "INVALID_FILE_TYPE": status.HTTP_400_BAD_REQUEST,
    # 401
    "UNAUTHENTICATED": status.HTTP_401_UNAUTHORIZED,
    "NOT_CONNECTED": status.HTTP_401_UNAUTHORIZED,
    # 403
    "INSUFFICIENT_ROLE": status.HTTP_403_FORBIDDEN,
    "NO_COMPANY": status.HTTP_403_FORBIDDEN,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "EMAIL_MISMATCH": status.HTTP_403_FORBIDDEN,
    "EMAIL_NOT_VERIFIED": status.HTTP_403_FORBIDDEN,
    "USER_INACTIVE": status.HTTP_403_FORBIDDEN,
    "CANNOT_CHANGE_OWN_ROLE": status.HTTP_403_FORBIDDEN,
    "DOCUMENT_VERIFIED": status.HTTP_403_FORBIDDEN,
    # 404
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "COMPANY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVITATION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ONBOARDING_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "TASK_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "POLICY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "DOCUMENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "FILE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "TEXT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "UNKNOWN_PROVIDER": status.HTTP_404_NOT_FOUND,
    "UNKNOWN_RESOURCE": status.HTTP_404_NOT_FOUND,
    "RESOURCE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "PROJECT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "PAGE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    # 409
    "ALREADY_MEMBER": status.HTTP_409_CONFLICT,
    "ALREADY_IN_COMPANY": status.HTTP_409_CONFLICT,
    "INVITATION_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "INVITATION_ALREADY_ACCEPTED": status.HTTP_409_CONFLICT,
    "COMPANY_DOMAIN_TAKEN": status.HTTP_409_CONFLICT,
    # 410
    "INVITATION_EXPIRED": status.HTTP_410_GONE,
}

SERVER_ERROR_STATUS = {
    "UPSTREAM_FAILURE": status.HTTP_502_BAD_GATEWAY,
}


def http_error(error: Error) -> Exception:
    """Map a use case error to the exception the handlers render"""
    if error.code in CLIENT_ERROR_STATUS:
        return ClientError(error, status_code=CLIENT_ERROR_STATUS[error.code])
    return ServerError(
        error,
        status_code=SERVER_ERROR_STATUS.get(
            error.code, status.HTTP_500_INTERNAL_SERVER_ERROR
        ),
    )
