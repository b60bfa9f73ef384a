from __future__ import annotations

import logging

from app.application.dto.auth import LoginLocalInput, LoginLocalOutput
from app.application.ports.accounts_port import AccountsPort
from app.application.ports.password_hasher_port import PasswordHasherPort
from app.application.ports.token_port import TokenPort
from app.domain.exceptions import InvalidCredentialsError

from .common import build_auth_user_output, normalize_email, utcnow


logger = logging.getLogger(__name__)


class LoginLocalUseCase:
    def __init__(
        self,
        *,
        accounts_port: AccountsPort,
        password_hasher: PasswordHasherPort,
        token_port: TokenPort,
    ):
        self._accounts_port = accounts_port
        self._password_hasher = password_hasher
        self._token_port = token_port

    def execute(self, command: LoginLocalInput) -> LoginLocalOutput:
        email = normalize_email(command.email)
        user = self._accounts_port.get_user_by_email(email=email)
        if user is None or not self._password_hasher.verify_password(command.password, user.password_hash):
            logger.info("login: rejected email=%s", email)
            raise InvalidCredentialsError("Invalid credentials.")

        return LoginLocalOutput(
            user=build_auth_user_output(user),
            access_token=self._token_port.issue_access_token(user_id=user.id, now=utcnow()),
        )
