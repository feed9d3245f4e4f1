# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models sit on either side of the user service boundary:
# - UserRecord: what the user service returns (may carry extra fields)
# - UserData: the minimal shape returned to API clients
# - UserCreatePayload: what we send to the user service on registration
# - AuthRecord: result of a password sign-in
#
# UserData is only ever built from a UserRecord via UserData.from_record(),
# which copies a fixed set of fields and nothing else.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class UserRecord(BaseModel):
    """
    A user as stored by the external user service.

    This is a superset record: the service may attach any number of
    additional fields (visibility flags, token hashes, provider data).
    They are kept on the model but never exposed to clients.

    Example:
        {
            "id": "8f6c1d0e-...",
            "username": "jane-doe-48213377",
            "name": "Jane Doe",
            "email": "jane@example.com",
            "avatar": null,
            "is_banned": false,
            "remember_token": null,
            "created": "2024-01-15T10:30:00+00:00",
            "updated": "2024-01-15T10:30:00+00:00",
            "email_visibility": true
        }
    """

    model_config = ConfigDict(extra="allow")

    id: str
    username: str
    name: str
    email: str
    avatar: str | None = None
    is_banned: bool = False
    remember_token: str | None = None
    created: str
    updated: str


class UserData(BaseModel):
    """
    User returned by POST /auth and GET /auth.

    Built fresh for every request and never mutated.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., description="Stable user identifier assigned by the user service")
    username: str = Field(..., description="Unique, URL-safe handle", examples=["jane-doe-48213377"])
    name: str = Field(..., description="Display name", examples=["Jane Doe"])
    email: str
    avatar: str | None = Field(default=None, description="Avatar file reference")
    is_banned: bool = False
    remember_token: str | None = None
    created: str
    updated: str

    @classmethod
    def from_record(cls, record: UserRecord) -> "UserData":
        """
        Project a user service record onto the public fields.

        Pure and total: the same record always yields the same UserData,
        and fields outside UserData (including any extras) are dropped.
        """
        return cls(
            id=record.id,
            username=record.username,
            name=record.name,
            email=record.email,
            avatar=record.avatar,
            is_banned=record.is_banned,
            remember_token=record.remember_token,
            created=record.created,
            updated=record.updated,
        )


class UserCreatePayload(BaseModel):
    """Registration payload sent to the user service."""

    model_config = ConfigDict(populate_by_name=True)

    username: str
    email: str
    email_visibility: bool = Field(default=True, alias="emailVisibility")
    password: str = Field(..., repr=False)
    password_confirm: str = Field(..., alias="passwordConfirm", repr=False)
    name: str
    is_banned: bool = False
    remember_token: str | None = None

    def profile_fields(self) -> dict:
        """
        Fields stored as user-editable profile metadata.

        Credentials, email and ban status are left out; ban status is
        managed by the user service, not by the user.
        """
        return self.model_dump(exclude={"email", "password", "password_confirm", "is_banned"})


class AuthRecord(BaseModel):
    """Result of authenticating with email and password."""

    record: UserRecord
    token: str | None = Field(default=None, repr=False)
