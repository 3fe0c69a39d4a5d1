"""
Schémas Pydantic pour l'authentification et le profil utilisateur.
Le hash du mot de passe n'apparaît dans aucune réponse.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, field_validator

from app.models.user import UserRole
from app.schemas.common import CamelModel

PASSWORD_MIN_LENGTH = 6


class UserRegister(CamelModel):
    email: EmailStr
    password: str
    first_name: str
    last_name: str
    role: UserRole = UserRole.STUDENT

    @field_validator("password")
    @classmethod
    def password_long_enough(cls, v: str) -> str:
        if len(v) < PASSWORD_MIN_LENGTH:
            raise ValueError(
                f"Le mot de passe doit contenir au moins {PASSWORD_MIN_LENGTH} caractères."
            )
        return v

    @field_validator("first_name", "last_name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom et le prénom ne peuvent pas être vides.")
        return v.strip()


class UserLogin(CamelModel):
    """Les deux champs sont vérifiés par le service pour renvoyer un message explicite."""
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class ProfileUpdate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @field_validator("first_name", "last_name")
    @classmethod
    def name_not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Le nom et le prénom ne peuvent pas être vides.")
        return v.strip() if v else v


class UserResponse(CamelModel):
    id: uuid.UUID
    email: str
    first_name: str
    last_name: str
    role: UserRole
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserSummary(CamelModel):
    """Résumé d'un participant intégré dans un projet."""
    id: uuid.UUID
    first_name: str
    last_name: str
    email: str


class UserData(CamelModel):
    user: UserResponse


class UserEnvelope(CamelModel):
    success: bool = True
    data: UserData


class AuthResponse(CamelModel):
    """Réponse d'inscription / connexion : token porteur + utilisateur."""
    success: bool = True
    token: str
    data: UserData
