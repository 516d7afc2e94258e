from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional

from ..core.database import get_db
from ..core.security import security, Identity, Role, AuthenticationError, AuthorizationError
from ..services.auth_service import AuthClient, IdentityProvider


def get_auth_client(request: Request) -> AuthClient:
    """The process-wide auth client created at start-up."""
    return request.app.state.auth_client


def get_identity_provider(
    client: AuthClient = Depends(get_auth_client),
    db: Session = Depends(get_db)
) -> IdentityProvider:
    return IdentityProvider(client, db)


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> str:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authenticated")
    return credentials.credentials


async def get_current_identity(
    token: str = Depends(get_bearer_token),
    provider: IdentityProvider = Depends(get_identity_provider)
) -> Identity:
    return provider.resolve_identity(token)


# Role-based access control dependencies
def require_role(role: Role):
    """Create a dependency that admits only identities holding ``role``."""
    async def role_checker(
        identity: Identity = Depends(get_current_identity)
    ) -> Identity:
        if identity.role is not role:
            raise AuthorizationError(f"Access denied. Required role: {role.value}")
        return identity

    return role_checker


async def get_doctor(identity: Identity = Depends(require_role(Role.DOCTOR))) -> Identity:
    return identity


async def get_patient(identity: Identity = Depends(require_role(Role.PATIENT))) -> Identity:
    return identity
