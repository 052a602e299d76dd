"""Application users and the acting principal."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.core.entities.common import new_id, utc_now


class Role(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class AppUser(BaseModel):
    """A person who has logged in at least once."""

    id: str = Field(default_factory=new_id)
    email: str
    name: str
    role: Role = Role.USER
    created_at: datetime = Field(default_factory=utc_now)


class Actor(BaseModel):
    """
    Identity performing an operation.

    Passed explicitly into every mutating service call so that permission
    checks never depend on request-scoped globals.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @classmethod
    def from_user(cls, user: AppUser) -> "Actor":
        return cls(id=user.id, email=user.email, role=user.role)
