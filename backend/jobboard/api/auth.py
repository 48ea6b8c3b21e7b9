from fastapi import APIRouter, Request
from jobboard.schemas import CurrentUserResponse
from jobboard.auth import get_token_claims, ADMIN_ROLE

router = APIRouter()


@router.get("/me", response_model=CurrentUserResponse)
async def current_user(request: Request):
    claims = get_token_claims(request)
    if not claims:
        return CurrentUserResponse(authenticated=False)
    return CurrentUserResponse(
        authenticated=True,
        user_id=claims["sub"],
        is_admin=claims.get("role") == ADMIN_ROLE,
    )
