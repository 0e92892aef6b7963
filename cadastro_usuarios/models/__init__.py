"""Data models for cadastro-usuarios."""

from cadastro_usuarios.models.user import User, UserIn, UserFilter, MessageResponse

__all__ = [
    "User",
    "UserIn",
    "UserFilter",
    "MessageResponse",
]
