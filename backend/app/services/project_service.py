"""
Service métier pour les projets de fin d'études.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.errors import ValidationError
from app.models.project import Project, ProjectStatus
from app.models.user import User, UserRole
from app.schemas.project import ProjectCreate, ProjectResponse
from app.services.authorization import require_role

logger = logging.getLogger(__name__)


def create_project(db: Session, creator: User, data: ProjectCreate) -> ProjectResponse:
    """
    Crée un projet dont le créateur est l'étudiant propriétaire.

    Les deux encadrants doivent exister, être actifs et avoir le rôle attendu ;
    sinon ValidationError indique lequel est invalide.
    """
    require_role(creator, {UserRole.STUDENT})

    if _find_active_user(db, data.company_supervisor, UserRole.COMPANY_SUPERVISOR) is None:
        raise ValidationError("Encadrant entreprise invalide")
    if _find_active_user(db, data.academic_supervisor, UserRole.ACADEMIC_SUPERVISOR) is None:
        raise ValidationError("Encadrant universitaire invalide")

    project = Project(
        title=data.title,
        description=data.description,
        student_id=creator.id,
        company_supervisor_id=data.company_supervisor,
        academic_supervisor_id=data.academic_supervisor,
        start_date=data.start_date,
        end_date=data.end_date,
        soutenance_date=data.soutenance_date,
        status=ProjectStatus.ACTIVE,
    )
    db.add(project)
    db.commit()
    db.refresh(project)

    logger.info("Projet créé : %s (%s) par l'étudiant %s", project.title, project.id, creator.id)
    return to_response(project)


def get_projects(db: Session, caller: User) -> list[ProjectResponse]:
    """Projets où l'appelant est participant, du plus récent au plus ancien."""
    projects = db.execute(
        select(Project)
        .where(
            or_(
                Project.student_id == caller.id,
                Project.company_supervisor_id == caller.id,
                Project.academic_supervisor_id == caller.id,
            )
        )
        .order_by(Project.created_at.desc())
    ).scalars().all()

    return [to_response(p) for p in projects]


def to_response(project: Project) -> ProjectResponse:
    """Projet avec le résumé des trois participants."""
    return ProjectResponse.model_validate(project)


def _find_active_user(db: Session, user_id: uuid.UUID, role: UserRole) -> Optional[User]:
    return db.execute(
        select(User).where(
            User.id == user_id,
            User.role == role,
            User.is_active.is_(True),
        )
    ).scalar_one_or_none()
