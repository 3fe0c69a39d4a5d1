"""
Hachage des mots de passe (bcrypt) et tokens d'accès JWT.
Les deux collaborateurs sont construits à partir de la configuration au démarrage.
"""

import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from app.config import Settings
from app.errors import AuthenticationError


class PasswordHasher:
    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        # bcrypt ignore tout au-delà de 72 octets
        password_bytes = password.encode("utf-8")[:72]
        return bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        password_bytes = password.encode("utf-8")[:72]
        return bcrypt.checkpw(password_bytes, password_hash.encode("utf-8"))


class TokenService:
    """Émet et vérifie les tokens porteurs ; le sujet est l'ID de l'utilisateur."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def sign(self, subject: uuid.UUID) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(subject),
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> uuid.UUID:
        """
        Décode le token et retourne l'ID du sujet.
        Lève AuthenticationError si le token est expiré, mal signé ou sans sujet valide.
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationError("Token expiré") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationError("Token invalide") from exc

        try:
            return uuid.UUID(payload.get("sub", ""))
        except (TypeError, ValueError) as exc:
            raise AuthenticationError("Token invalide") from exc

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        )
