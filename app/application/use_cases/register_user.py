from __future__ import annotations

from uuid import uuid4

from app.application.dto.auth import RegisterUserInput, RegisterUserOutput
from app.application.ports.accounts_port import AccountsPort
from app.application.ports.password_hasher_port import PasswordHasherPort
from app.domain.entities.user import UserRole
from app.domain.exceptions import EmailAlreadyExistsError, InvalidInputError

from .common import build_auth_user_output, normalize_email, utcnow


MIN_PASSWORD_LENGTH = 8


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        accounts_port: AccountsPort,
        password_hasher: PasswordHasherPort,
    ):
        self._accounts_port = accounts_port
        self._password_hasher = password_hasher

    def execute(self, command: RegisterUserInput, *, role: UserRole = "USER") -> RegisterUserOutput:
        email = normalize_email(command.email)
        password = command.password

        if not email or "@" not in email:
            raise InvalidInputError("A valid email is required.")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidInputError(f"password must have at least {MIN_PASSWORD_LENGTH} characters.")

        if self._accounts_port.get_user_by_email(email=email) is not None:
            raise EmailAlreadyExistsError("Email already in use.")

        user = self._accounts_port.create_user(
            user_id=str(uuid4()),
            email=email,
            password_hash=self._password_hasher.hash_password(password),
            role=role,
            created_at=utcnow(),
        )
        return RegisterUserOutput(user=build_auth_user_output(user))
