from typing import Optional

from fastapi import HTTPException, status


class AuthServiceError(HTTPException):
    """The managed backend rejected a sign-in, sign-up or sign-out."""

    def __init__(self, detail: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(status_code=status_code, detail=detail)


class DataOperationError(HTTPException):
    """A read or write against the hosted database failed."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


class RecordNotFoundError(HTTPException):
    def __init__(self, detail: str = "Record not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class InvalidTransitionError(HTTPException):
    def __init__(self, current: str, target: str, detail: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail or f"Cannot change status from '{current}' to '{target}'",
        )
