from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_login_local_use_case, get_register_user_use_case
from app.api.schemas.auth import (
    AuthUserResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from app.application.dto.auth import AuthUserOutput, LoginLocalInput, RegisterUserInput
from app.application.use_cases.login_local import LoginLocalUseCase
from app.application.use_cases.register_user import RegisterUserUseCase
from app.domain.exceptions import EmailAlreadyExistsError, InvalidCredentialsError, InvalidInputError


router = APIRouter()


def _user_response(user: AuthUserOutput) -> AuthUserResponse:
    return AuthUserResponse(
        id=user.id,
        email=user.email,
        role=user.role,
        subscription_status=user.subscription_status,
    )


@router.post("/v1/auth/register", response_model=RegisterResponse, status_code=201)
def register_user(
    req: RegisterRequest,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    try:
        output = use_case.execute(RegisterUserInput(email=req.email, password=req.password))
    except EmailAlreadyExistsError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return RegisterResponse(user=_user_response(output.user))


@router.post("/v1/auth/login", response_model=LoginResponse)
def login_local(
    req: LoginRequest,
    use_case: LoginLocalUseCase = Depends(get_login_local_use_case),
):
    try:
        output = use_case.execute(LoginLocalInput(email=req.email, password=req.password))
    except InvalidCredentialsError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    return LoginResponse(
        access_token=output.access_token.token,
        expires_at=output.access_token.expires_at,
        user=_user_response(output.user),
    )
