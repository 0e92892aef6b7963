"""User data models for cadastro-usuarios."""

from typing import Optional
from pydantic import BaseModel, Field

# Signed 64-bit range of the store's INTEGER columns
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class UserIn(BaseModel):
    """Request body for creating or replacing a user.

    All three fields are required; update replaces them as a whole.
    """

    email: str = Field(..., description="Email do usuário")
    name: str = Field(..., description="Nome do usuário")
    age: int = Field(..., ge=INT64_MIN, le=INT64_MAX, description="Idade do usuário")


class User(UserIn):
    """A persisted user row."""

    id: int = Field(..., ge=INT64_MIN, le=INT64_MAX, description="ID do usuário")


class UserFilter(BaseModel):
    """Optional exact-match filters for listing users."""

    name: Optional[str] = None
    email: Optional[str] = None
    age: Optional[int] = Field(None, ge=INT64_MIN, le=INT64_MAX)

    def as_criteria(self) -> dict:
        """Return only the filters that were supplied."""
        return {key: value for key, value in self.model_dump().items() if value is not None}


class MessageResponse(BaseModel):
    message: str
