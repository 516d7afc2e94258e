from typing import Optional, Any, Dict
import logging

import httpx
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from ..core.config import settings
from ..core.errors import AuthServiceError, DataOperationError
from ..core.security import Identity, Role, verify_token, AuthenticationError
from ..models.user import UserRole
from ..schemas.auth import (
    SignIn, DoctorSignUp, PatientSignUp, SessionResponse, IdentityResponse,
    SignUpResponse
)

logger = logging.getLogger(__name__)

HOME_BY_ROLE = {
    Role.DOCTOR: "/dashboard",
    Role.PATIENT: "/patient-dashboard",
    Role.NONE: "/",
}


class AuthClient:
    """Thin async client for the managed backend's auth REST API."""

    def __init__(
        self,
        base_url: str = settings.SUPABASE_URL,
        api_key: str = settings.SUPABASE_ANON_KEY,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/auth/v1",
            headers={"apikey": api_key, "Content-Type": "application/json"},
            timeout=settings.AUTH_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def sign_up(self, email: str, password: str, metadata: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request(
            "POST", "/signup",
            params={"redirect_to": f"{settings.SITE_URL}/dashboard"},
            json={"email": email, "password": password, "data": metadata},
        )

    async def sign_in_with_password(self, email: str, password: str) -> Dict[str, Any]:
        return await self._request(
            "POST", "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )

    async def sign_out(self, access_token: str) -> None:
        await self._request(
            "POST", "/logout",
            headers={"Authorization": f"Bearer {access_token}"},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Auth service unreachable: {str(e)}")
            raise AuthServiceError(
                "Authentication service is unavailable",
                status_code=503,
            )

        if response.status_code >= 400:
            raise AuthServiceError(
                _error_message(response),
                status_code=response.status_code if response.status_code < 500 else 502,
            )

        if not response.content:
            return {}
        return response.json()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or "Authentication failed"
    for key in ("msg", "error_description", "message", "error"):
        if isinstance(body, dict) and body.get(key):
            return str(body[key])
    return "Authentication failed"


class IdentityProvider:
    """Sign-in, sign-up and sign-out against the managed backend, plus
    resolution of the request's bearer token into an ``Identity``."""

    def __init__(self, client: AuthClient, db: Session):
        self.client = client
        self.db = db

    async def sign_in(self, credentials: SignIn) -> SessionResponse:
        data = await self.client.sign_in_with_password(credentials.email, credentials.password)

        user = data.get("user") or {}
        if not data.get("access_token") or not user.get("id"):
            raise AuthServiceError("Failed to sign in")

        role = self.resolve_role(user["id"], user.get("user_metadata"))
        logger.info(f"Signed in {user['id']} as {role.value}")

        return SessionResponse(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            token_type=data.get("token_type", "bearer"),
            expires_in=data.get("expires_in"),
            user=IdentityResponse(id=user["id"], email=user.get("email"), role=role),
            redirect_to=HOME_BY_ROLE[role],
        )

    async def sign_up_doctor(self, form: DoctorSignUp) -> SignUpResponse:
        data = await self.client.sign_up(form.email, form.password, form.metadata())
        return self._signed_up(data, Role.DOCTOR)

    async def sign_up_patient(self, form: PatientSignUp) -> SignUpResponse:
        data = await self.client.sign_up(form.email, form.password, form.metadata())
        return self._signed_up(data, Role.PATIENT)

    async def sign_out(self, access_token: str) -> None:
        await self.client.sign_out(access_token)

    def resolve_identity(self, token: str) -> Identity:
        payload = verify_token(token)
        if not payload or not payload.sub:
            raise AuthenticationError("Invalid or expired token")

        return Identity(
            id=payload.sub,
            email=payload.email,
            role=self.resolve_role(payload.sub, payload.user_metadata),
        )

    def resolve_role(self, user_id: str, metadata: Optional[Dict[str, Any]] = None) -> Role:
        """Role from the backend's role table, else the sign-up metadata."""
        try:
            row = self.db.query(UserRole).filter(
                UserRole.user_id == user_id
            ).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error resolving role for {user_id}: {str(e)}")
            raise DataOperationError("Failed to load account role")

        if row:
            return Role.parse(row.role)
        return Role.parse((metadata or {}).get("role"))

    def _signed_up(self, data: Dict[str, Any], role: Role) -> SignUpResponse:
        # Depending on confirmation settings the backend answers with the
        # user object or a session wrapping it.
        user = data.get("user") or data
        user_id = user.get("id")
        logger.info(f"Registered {role.value} account {user_id}")
        return SignUpResponse(
            message="Account created successfully! Please sign in.",
            user_id=user_id,
            role=role.value,
        )
