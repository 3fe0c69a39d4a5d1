"""
Router pour l'authentification : inscription, connexion, profil.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user, get_password_hasher, get_token_service
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.user import (
    AuthResponse,
    ProfileUpdate,
    UserData,
    UserEnvelope,
    UserLogin,
    UserRegister,
    UserResponse,
)
from app.security import PasswordHasher, TokenService
from app.services import auth_service

router = APIRouter(prefix="/api/auth", tags=["Authentification"])


def _token_response(user: User, tokens: TokenService) -> AuthResponse:
    return AuthResponse(
        token=tokens.sign(user.id),
        data=UserData(user=UserResponse.model_validate(user)),
    )


@router.post("/register", response_model=AuthResponse, status_code=201, summary="Créer un compte")
def register(
    data: UserRegister,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Inscrit un utilisateur (étudiant, encadrant entreprise ou encadrant universitaire)
    et retourne directement un token. Le mot de passe n'est jamais renvoyé.
    Retourne 400 si l'email est déjà utilisé.
    """
    user = auth_service.register(db, data, hasher)
    return _token_response(user, tokens)


@router.post("/login", response_model=AuthResponse, summary="Se connecter")
def login(
    data: UserLogin,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Retourne 400 si email ou mot de passe manquant,
    401 si les identifiants sont faux ou si le compte est désactivé.
    """
    user = auth_service.login(db, data, hasher)
    return _token_response(user, tokens)


@router.get("/me", response_model=UserEnvelope, summary="Utilisateur courant")
def get_me(current_user: User = Depends(get_current_user)):
    return UserEnvelope(data=UserData(user=UserResponse.model_validate(current_user)))


@router.put("/profile", response_model=UserEnvelope, summary="Modifier son profil")
def update_profile(
    data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Seuls le prénom et le nom sont modifiables."""
    user = auth_service.update_profile(db, current_user, data)
    return UserEnvelope(data=UserData(user=UserResponse.model_validate(user)))


@router.post("/logout", response_model=MessageResponse, summary="Se déconnecter")
def logout(current_user: User = Depends(get_current_user)):
    """Les tokens ne sont pas révocables : le client supprime simplement le sien."""
    return MessageResponse(message="Déconnexion réussie")
