from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.deps import get_list_users_use_case, require_admin
from app.api.schemas.me import AdminUserResponse, AdminUsersResponse
from app.application.use_cases.list_users import ListUsersUseCase
from app.domain.entities.user import User


router = APIRouter()


@router.get("/v1/admin/users", response_model=AdminUsersResponse)
def list_users(
    _admin: User = Depends(require_admin),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
):
    users = use_case.execute()
    return AdminUsersResponse(
        users=[
            AdminUserResponse(
                id=user.id,
                email=user.email,
                role=user.role,
                subscription_status=user.subscription_status,
                subscription_id=user.subscription_id,
                created_at=user.created_at,
            )
            for user in users
        ]
    )
