"""
Contrôle d'accès aux projets et à leurs sprints.

Deux niveaux :
- un filtre par rôle, sans accès base, appliqué dès la route ;
- un filtre par projet (participant / étudiant propriétaire), appliqué une fois
  le projet chargé.

L'appelant est toujours l'utilisateur chargé à partir d'un token vérifié.
"""

import logging
import uuid
from typing import AbstractSet, Optional

from sqlalchemy.orm import Session

from app.errors import AccessDenied, NotFound
from app.models.project import Project
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)


def require_role(caller: User, allowed_roles: AbstractSet[UserRole]) -> None:
    """Lève AccessDenied si le rôle de l'appelant n'est pas dans allowed_roles."""
    try:
        role = UserRole(caller.role)
    except ValueError:
        # Rôle inconnu en base : jamais autorisé
        logger.warning("Rôle inconnu pour l'utilisateur %s : %r", caller.id, caller.role)
        role = None

    if role not in allowed_roles:
        required = " ou ".join(r.value for r in UserRole if r in allowed_roles)
        raise AccessDenied(f"Accès refusé. Rôle requis: {required}")


def is_participant(project: Project, caller: User) -> bool:
    return caller.id in (
        project.student_id,
        project.company_supervisor_id,
        project.academic_supervisor_id,
    )


def resolve_project_access(db: Session, project_id: uuid.UUID, caller: User) -> Project:
    """
    Charge le projet et vérifie que l'appelant y participe
    (étudiant, encadrant entreprise ou encadrant universitaire).

    Lève NotFound si le projet n'existe pas, AccessDenied sinon.
    """
    project = db.get(Project, project_id)
    if project is None:
        raise NotFound("Projet non trouvé")
    if not is_participant(project, caller):
        logger.info("Accès refusé au projet %s pour l'utilisateur %s", project_id, caller.id)
        raise AccessDenied("Accès refusé à ce projet")
    return project


def require_ownership(project: Project, caller: User, message: Optional[str] = None) -> None:
    """Seul l'étudiant propriétaire peut modifier le projet et ses sprints."""
    if project.student_id != caller.id:
        raise AccessDenied(message or "Seul l'étudiant propriétaire peut effectuer cette action")
