"""
Service métier pour l'inscription, la connexion et le profil.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.errors import AuthenticationError, ValidationError
from app.models.user import User
from app.schemas.user import ProfileUpdate, UserLogin, UserRegister
from app.security import PasswordHasher

logger = logging.getLogger(__name__)


def register(db: Session, data: UserRegister, hasher: PasswordHasher) -> User:
    """
    Crée un compte actif.
    Lève ValidationError si l'email est déjà utilisé (comparaison sensible à la casse).
    """
    existing = db.execute(select(User).where(User.email == data.email)).scalar_one_or_none()
    if existing is not None:
        raise ValidationError("Un utilisateur avec cet email existe déjà")

    user = User(
        email=data.email,
        password_hash=hasher.hash(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        role=data.role,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("Utilisateur inscrit : %s (%s)", user.id, user.role.value)
    return user


def login(db: Session, data: UserLogin, hasher: PasswordHasher) -> User:
    """
    Vérifie les identifiants et retourne l'utilisateur.
    Un compte désactivé est refusé même si le mot de passe est correct.
    """
    if not data.email or not data.password:
        raise ValidationError("Veuillez fournir email et mot de passe")

    user = db.execute(select(User).where(User.email == data.email)).scalar_one_or_none()
    if user is None or not hasher.verify(data.password, user.password_hash):
        raise AuthenticationError("Email ou mot de passe incorrect")

    if not user.is_active:
        raise AuthenticationError("Compte désactivé")

    return user


def update_profile(db: Session, user: User, data: ProfileUpdate) -> User:
    """Met à jour le prénom et/ou le nom. Seuls les champs fournis sont modifiés."""
    update_data = data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(user, field, value)

    db.commit()
    db.refresh(user)
    return user
