from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserResponse(BaseModel):
    id: UUID
    name: str | None
    email: str | None
    image: str | None

    model_config = {"from_attributes": True}


class SessionResponse(BaseModel):
    user: UserResponse
    expires: datetime


class AdminUserCounts(BaseModel):
    groceries: int = 0
    sessions: int = 0
    accounts: int = 0


class AdminUserResponse(BaseModel):
    """Serialized as ``{id, name, email, image, createdAt, updatedAt, _count}``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID
    name: str | None
    email: str | None
    image: str | None
    created_at: datetime
    updated_at: datetime
    counts: AdminUserCounts = Field(alias="_count")
