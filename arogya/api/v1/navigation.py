from fastapi import APIRouter, Depends

from ...api.deps import get_current_identity
from ...core.security import Identity
from ...schemas.navigation import NavigationResponse
from ...services.navigation import navigation_for

router = APIRouter(tags=["Navigation"])


@router.get("/navigation", response_model=NavigationResponse)
async def navigation(identity: Identity = Depends(get_current_identity)):
    """Menu for the signed-in role; an identity without a role gets none."""
    return navigation_for(identity)
