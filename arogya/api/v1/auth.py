from fastapi import APIRouter, Depends
import logging

from ...api.deps import get_identity_provider, get_bearer_token, get_current_identity
from ...core.security import Identity
from ...services.auth_service import IdentityProvider
from ...schemas.auth import (
    SignIn, DoctorSignUp, PatientSignUp, SessionResponse, SignUpResponse, IdentityResponse
)
from ...schemas.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/sign-in", response_model=SessionResponse)
async def sign_in(
    credentials: SignIn,
    provider: IdentityProvider = Depends(get_identity_provider)
):
    """Exchange email and password for a backend session."""
    return await provider.sign_in(credentials)


@router.post("/sign-up/doctor", response_model=SignUpResponse, status_code=201)
async def sign_up_doctor(
    form: DoctorSignUp,
    provider: IdentityProvider = Depends(get_identity_provider)
):
    """Register a doctor account with the backend."""
    return await provider.sign_up_doctor(form)


@router.post("/sign-up/patient", response_model=SignUpResponse, status_code=201)
async def sign_up_patient(
    form: PatientSignUp,
    provider: IdentityProvider = Depends(get_identity_provider)
):
    """Register a patient account with the backend."""
    return await provider.sign_up_patient(form)


@router.post("/sign-out", response_model=MessageResponse)
async def sign_out(
    identity: Identity = Depends(get_current_identity),
    token: str = Depends(get_bearer_token),
    provider: IdentityProvider = Depends(get_identity_provider)
):
    """End the backend session; the client returns to the role selection."""
    await provider.sign_out(token)
    logger.info(f"Signed out {identity.id}")
    return MessageResponse(message="Signed out successfully")


@router.get("/me", response_model=IdentityResponse)
async def me(identity: Identity = Depends(get_current_identity)):
    """Get the signed-in identity and its role."""
    return IdentityResponse(id=identity.id, email=identity.email, role=identity.role)
