from typing import Optional, Dict, Any
from jose import JWTError, jwt
from fastapi import HTTPException, status
from fastapi.security import HTTPBearer
from pydantic import BaseModel, Field, ConfigDict
from enum import Enum

from .config import settings

# Bearer tokens are issued by the managed backend; missing headers are
# reported by get_current_identity rather than by the scheme itself.
security = HTTPBearer(auto_error=False)


class Role(str, Enum):
    DOCTOR = "doctor"
    PATIENT = "patient"
    NONE = "none"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Role":
        try:
            return cls(value)
        except ValueError:
            return cls.NONE


class TokenPayload(BaseModel):
    sub: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None  # backend's postgres role, e.g. "authenticated"
    exp: Optional[int] = None
    aud: Optional[str] = None
    user_metadata: Dict[str, Any] = Field(default_factory=dict)


class Identity(BaseModel):
    """The signed-in user as seen by every view for the current request."""

    id: str
    email: Optional[str] = None
    role: Role = Role.NONE

    model_config = ConfigDict(frozen=True)

    @property
    def is_doctor(self) -> bool:
        return self.role is Role.DOCTOR

    @property
    def is_patient(self) -> bool:
        return self.role is Role.PATIENT


# JWT utilities
def verify_token(token: str) -> Optional[TokenPayload]:
    """Verify and decode an access token issued by the managed backend."""
    try:
        payload = jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
        )
        return TokenPayload(**payload)

    except JWTError:
        return None


# Security exceptions
class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "Not enough permissions"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )
