"""
Modelo de Usuario y Administrador

Las versiones `Stored*` son las que se persisten: llevan el hash
del password. Las públicas (User, AdminUser) nunca lo exponen.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from safr.models.common import new_id, utcnow_iso

AdminRole = Literal["admin", "super-admin"]


class User(BaseModel):
    """Usuario visitante con sus casas favoritas."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: new_id("user"))
    email: EmailStr
    name: str = Field(..., min_length=1)
    favorites: list[str] = Field(
        default_factory=list, description="IDs de casas marcadas como favoritas"
    )

    def to_db_dict(self) -> dict:
        return self.model_dump(mode="json")


class StoredUser(User):
    """Registro persistido en el bucket `users`."""

    password_hash: str = Field(..., description="PBKDF2 con salt, nunca el password")
    created_at: str = Field(default_factory=utcnow_iso)

    def to_public(self) -> User:
        """Versión sin credenciales, la que se guarda como sesión."""
        return User.model_validate(self.model_dump(exclude={"password_hash", "created_at"}))


class AdminUser(BaseModel):
    """Administrador del panel."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: new_id("admin"))
    username: str = Field(..., min_length=1)
    email: EmailStr
    role: AdminRole = "admin"

    def to_db_dict(self) -> dict:
        return self.model_dump(mode="json")


class StoredAdmin(AdminUser):
    """Registro persistido en el bucket `admins`."""

    password_hash: str

    def to_public(self) -> AdminUser:
        return AdminUser.model_validate(self.model_dump(exclude={"password_hash"}))
