"""
Dépendances FastAPI : utilisateur authentifié, filtres par rôle, accès projet.
"""

import uuid

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.database import get_db
from app.errors import AuthenticationError
from app.models.project import Project
from app.models.user import User, UserRole
from app.security import PasswordHasher, TokenService
from app.services import authorization

# auto_error=False : l'absence de token passe par AuthenticationError (401 + enveloppe JSON)
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> User:
    """Charge l'utilisateur désigné par le token porteur de la requête."""
    if credentials is None:
        raise AuthenticationError("Accès non autorisé. Token manquant")

    user_id = tokens.verify(credentials.credentials)
    user = db.get(User, user_id)
    if user is None:
        raise AuthenticationError("Utilisateur introuvable")
    if not user.is_active:
        raise AuthenticationError("Compte désactivé")
    return user


def restrict_to(*roles: UserRole):
    """Fabrique une dépendance qui n'accepte que les rôles donnés."""
    allowed = frozenset(roles)

    def dependency(current_user: User = Depends(get_current_user)) -> User:
        authorization.require_role(current_user, allowed)
        return current_user

    return dependency


student_only = restrict_to(UserRole.STUDENT)
all_roles = restrict_to(*UserRole)


def get_accessible_project(
    project_id: uuid.UUID,
    current_user: User = Depends(all_roles),
    db: Session = Depends(get_db),
) -> Project:
    """Projet du chemin, si l'utilisateur courant en est participant."""
    return authorization.resolve_project_access(db, project_id, current_user)
