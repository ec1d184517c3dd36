from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class UserStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class RoleSlug(str, Enum):
    SUPER_ADMIN = "super-admin"
    APPLICATION_ADMIN = "application-admin"
    HOST = "host"
    ATTENDEE = "attendee"


ROLE_DISPLAY_NAMES = {
    RoleSlug.SUPER_ADMIN: "super administrators",
    RoleSlug.APPLICATION_ADMIN: "application administrators",
    RoleSlug.HOST: "hosts",
    RoleSlug.ATTENDEE: "attendees",
}


class RoleGroups:
    """Role combinations shared by the access checks."""

    # Can create, update, delete events and manage guests
    EVENT_MANAGERS = (RoleSlug.HOST, RoleSlug.SUPER_ADMIN, RoleSlug.APPLICATION_ADMIN)
    SYSTEM_ADMINS = (RoleSlug.SUPER_ADMIN, RoleSlug.APPLICATION_ADMIN)
    SUPER_ADMINS = (RoleSlug.SUPER_ADMIN,)


class EmailAlreadyRegisteredError(Exception):
    """Raised when signing up with an email that belongs to an active account."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("Email is already registered.")


class NoDefaultRoleError(Exception):
    """Raised when no role can be assigned to a new account."""

    def __init__(self) -> None:
        super().__init__("No suitable role found. Unable to create a new user.")


class InvalidTokenError(Exception):
    """Raised when a session or verification token cannot be decoded."""


class UserNotFoundError(Exception):
    def __init__(self, message: str = "User not found. Please register first.") -> None:
        super().__init__(message)


class InvalidCredentialsError(Exception):
    def __init__(self) -> None:
        super().__init__("Invalid credentials. Incorrect password.")


class AccountNotActiveError(Exception):
    def __init__(self) -> None:
        super().__init__("Account not activated. Please verify your email.")


@dataclass(frozen=True)
class SessionUser:
    """Identity and role claims carried by a session token."""

    id: UUID
    email: str
    name: str
    status: UserStatus
    role_id: UUID | None = None
    role_slug: str | None = None
    role_name: str | None = None
    # Epoch seconds of the last time these claims were read from the database
    last_fetch: float = 0.0

    @property
    def is_admin(self) -> bool:
        return self.role_slug in {role.value for role in RoleGroups.SYSTEM_ADMINS}

    def has_role(self, roles: tuple[RoleSlug, ...]) -> bool:
        return self.role_slug in {role.value for role in roles}

    def to_claims(self) -> dict:
        claims = asdict(self)
        claims["sub"] = str(claims.pop("id"))
        claims["status"] = self.status.value
        claims["role_id"] = str(self.role_id) if self.role_id else None
        return claims

    @classmethod
    def from_claims(cls, claims: dict) -> "SessionUser":
        role_id = claims.get("role_id")
        return cls(
            id=UUID(claims["sub"]),
            email=claims["email"],
            name=claims.get("name") or "Anonymous",
            status=UserStatus(claims["status"]),
            role_id=UUID(role_id) if role_id else None,
            role_slug=claims.get("role_slug"),
            role_name=claims.get("role_name"),
            last_fetch=float(claims.get("last_fetch") or 0.0),
        )


@dataclass(frozen=True)
class SignupResultDTO:
    message: str
    verification_resent: bool = False


@dataclass(frozen=True)
class UserProfileDTO:
    id: UUID
    email: str
    name: str | None
    avatar: str | None
    timezone: str | None
    status: UserStatus
    role_slug: str | None = None
    email_verified_at: datetime | None = None
    last_sign_in_at: datetime | None = None
