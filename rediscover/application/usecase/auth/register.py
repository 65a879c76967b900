"""Password registration use case."""

import logfire
from pydantic import BaseModel

from rediscover.domain.error import DomainError, EmailTakenError, InvalidInviteError
from rediscover.domain.service import (
    CredentialService,
    InviteService,
    JWTService,
    UserService,
)


class RegisterRequest(BaseModel):
    """Register request."""

    email: str
    password: str
    code: str  # Invite code, any case


class SessionUser(BaseModel):
    """User summary returned alongside a session token."""

    id: str
    email: str


class RegisterResponse(BaseModel):
    """Register response."""

    token: str
    user: SessionUser


class RegisterUseCase:
    """Use case for invite-gated email/password registration.

    Checks run in a fixed order: an already-registered email is reported
    as EmailTakenError before the invite is looked at, so a request with
    both a taken email and a bad code always gets EmailTakenError.
    """

    def __init__(
        self,
        user_service: UserService,
        invite_service: InviteService,
        credential_service: CredentialService,
        jwt_service: JWTService,
    ) -> None:
        """Initialize register use case.

        Args:
            user_service: User domain service
            invite_service: Invite domain service
            credential_service: Password hashing service
            jwt_service: JWT token domain service
        """
        self.user_service = user_service
        self.invite_service = invite_service
        self.credential_service = credential_service
        self.jwt_service = jwt_service

    async def execute(self, request: RegisterRequest) -> RegisterResponse:
        """Register a new user.

        Steps:
        1. Reject an email that already belongs to a user
        2. Validate the invite for this email (code is case-insensitive)
        3. Hash the password
        4. Insert the user; a unique violation is EmailTakenError too
        5. Consume the invite (failures are logged, never raised)
        6. Issue a session token

        Args:
            request: Registration details

        Returns:
            Session token and the created user

        Raises:
            EmailTakenError: If the email is already registered
            InvalidInviteError: If no live invite matches (email, code)
        """
        with logfire.span("register.execute", email=request.email):
            if await self.user_service.get_user_by_email(request.email):
                logfire.info("Registration rejected, email taken", email=request.email)
                raise EmailTakenError(request.email)

            if not await self.invite_service.validate_invite(
                request.email, request.code
            ):
                logfire.info(
                    "Registration rejected, invalid invite", email=request.email
                )
                raise InvalidInviteError()

            password_hash = self.credential_service.hash_password(request.password)
            user = await self.user_service.create_user(request.email, password_hash)

            try:
                await self.invite_service.consume_invite(request.email)
            except DomainError as e:
                # The account exists; a leftover invite row is harmless
                logfire.warn(
                    "Failed to consume invite after registration",
                    email=request.email,
                    error=str(e),
                )

            token = self.jwt_service.create_token(str(user.id), user.email)
            logfire.info("User registered", user_id=str(user.id))
            return RegisterResponse(
                token=token, user=SessionUser(id=str(user.id), email=user.email)
            )
