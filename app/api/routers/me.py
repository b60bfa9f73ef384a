from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.deps import get_current_user, get_get_me_use_case
from app.api.schemas.me import MeResponse, MeUserResponse
from app.application.use_cases.get_me import GetMeUseCase
from app.domain.entities.user import User


router = APIRouter()


@router.get("/v1/me", response_model=MeResponse)
def get_me(
    current_user: User = Depends(get_current_user),
    use_case: GetMeUseCase = Depends(get_get_me_use_case),
):
    output = use_case.execute(user=current_user)
    return MeResponse(
        user=MeUserResponse(
            id=output.user_id,
            email=output.email,
            role=output.role,
            subscription_status=output.subscription_status,
            subscription_id=output.subscription_id,
            has_active_subscription=output.has_active_subscription,
        )
    )
