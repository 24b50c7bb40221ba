# server/models/user.py

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


# -------------------------------
# User Model
# -------------------------------

class UserRole(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class UserOut(BaseModel):
    """
    Public view of an application user.
    Serialized with the camelCase keys used by the user collection.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str
    username: str
    email: str
    role: UserRole
    is_active: bool = Field(True, alias="isActive")
    created_at: str = Field(alias="createdAt")


class User(UserOut):
    """
    Stored user entity, including the credential hash.
    """
    password_hash: str = Field("", alias="passwordHash")

    def to_public(self) -> UserOut:
        return UserOut(**self.model_dump(exclude={"password_hash"}))
