"""
User and Credential Models

The web app stores three loosely-typed blobs: the user directory,
the credential directory, and the active session. Here each is an explicit
record with a defined JSON shape.

CRITICAL: Passwords are stored in plaintext. This mirrors the existing
client-only behavior and is NOT suitable for a real deployment.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class User(BaseModel):
    """A registered user profile."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(
        ...,
        min_length=1,
        description="Unique user ID"
    )
    email: str = Field(
        ...,
        description="Login email (unique, compared case-sensitively)"
    )
    name: str = Field(
        ...,
        description="Display name"
    )
    created_at: datetime = Field(
        ...,
        description="When the user signed up"
    )


class Credential(BaseModel):
    """
    Login secret for a user.

    Kept apart from User so the user directory and the credential
    directory can be stored independently.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    email: str
    password: str
    user_id: str = Field(
        ...,
        min_length=1,
        description="ID of the User this credential belongs to"
    )

    def matches(self, email: str, password: str) -> bool:
        """Exact match on both email and password."""
        return self.email == email and self.password == password


class Session(BaseModel):
    """
    The currently authenticated user, if any.

    Owned by the credential store instance rather than held globally.
    """

    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def user_id(self) -> Optional[str]:
        return self.user.id if self.user else None
