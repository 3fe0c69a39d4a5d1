"""
Connexion à la base de données (PostgreSQL en production, SQLite en test).
Le moteur est construit à partir d'une URL explicite au démarrage de l'application
et libéré à l'arrêt.
"""

import logging

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """Moteur SQLAlchemy et fabrique de sessions pour une URL donnée."""

    def __init__(self, url: str):
        engine_kwargs = {}
        if url.startswith("sqlite"):
            # Les endpoints synchrones tournent dans un threadpool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # Une seule connexion partagée, sinon chaque session voit une base vide
                engine_kwargs["poolclass"] = StaticPool

        self.engine = create_engine(url, **engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        import app.models  # noqa: F401 (enregistre les tables dans Base.metadata)

        Base.metadata.create_all(bind=self.engine)
        logger.info("Schéma vérifié : %s", ", ".join(sorted(Base.metadata.tables)))

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Connexion base de données fermée.")


def get_db(request: Request):
    """Dépendance FastAPI : fournit une session BDD et la ferme après usage."""
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
