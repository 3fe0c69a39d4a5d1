"""
Modèle SQLAlchemy pour les utilisateurs et leurs rôles.
"""

import enum
import uuid

from sqlalchemy import Boolean, Column, DateTime, Enum, String, Uuid, func

from app.database import Base


class UserRole(str, enum.Enum):
    """Rôles possibles ; la valeur est celle échangée avec le frontend."""
    STUDENT = "etudiant"
    COMPANY_SUPERVISOR = "encadrant_entreprise"
    ACADEMIC_SUPERVISOR = "encadrant_universitaire"


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(
        Enum(
            UserRole,
            name="user_role",
            native_enum=False,
            length=50,
            values_callable=lambda roles: [r.value for r in roles],
        ),
        nullable=False,
        default=UserRole.STUDENT,
    )
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
