"""
Service métier pour les sprints d'un projet.

Le numéro de sprint vaut (nombre de sprints du projet + 1). Deux créations
concurrentes peuvent calculer le même numéro : la contrainte unique
(project_id, sprint_number) rejette la seconde, qui recalcule et réessaie.
"""

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.errors import NotFound
from app.models.project import Project
from app.models.sprint import Sprint, SprintStatus
from app.models.user import User
from app.schemas.sprint import SprintCreate, SprintResponse, SprintStatusUpdate
from app.services.authorization import require_ownership, resolve_project_access

logger = logging.getLogger(__name__)


def create_sprint(
    db: Session,
    caller: User,
    data: SprintCreate,
    max_attempts: int = 3,
) -> SprintResponse:
    """
    Crée un sprint en statut planned dans le projet data.project_id.

    Lève NotFound si le projet n'existe pas, AccessDenied si l'appelant n'en est
    pas l'étudiant propriétaire. Si le numéro reste en conflit après
    max_attempts tentatives, l'IntegrityError est propagée.
    """
    project = resolve_project_access(db, data.project_id, caller)
    require_ownership(project, caller, "Seul l'étudiant propriétaire peut créer des sprints")
    project_id = project.id
    max_attempts = max(1, max_attempts)

    for attempt in range(1, max_attempts + 1):
        sprint_number = current_sprint_count(db, project_id) + 1
        sprint = Sprint(
            title=data.title,
            description=data.description,
            project_id=project_id,
            sprint_number=sprint_number,
            start_date=data.start_date,
            end_date=data.end_date,
            status=SprintStatus.PLANNED,
            goals=list(data.goals),
        )
        db.add(sprint)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            if attempt == max_attempts:
                logger.error(
                    "Numéro de sprint toujours en conflit pour le projet %s après %d tentatives",
                    project_id, attempt,
                )
                raise
            logger.warning(
                "Sprint n°%d déjà pris pour le projet %s, nouvelle tentative (%d/%d)",
                sprint_number, project_id, attempt, max_attempts,
            )
            continue

        db.refresh(sprint)
        logger.info("Sprint n°%d créé : %s (%s)", sprint_number, sprint.title, sprint.id)
        return SprintResponse.model_validate(sprint)


def current_sprint_count(db: Session, project_id: uuid.UUID) -> int:
    return db.execute(
        select(func.count())
        .select_from(Sprint)
        .where(Sprint.project_id == project_id)
    ).scalar() or 0


def get_sprints(db: Session, project: Project) -> list[SprintResponse]:
    """Sprints du projet, dans l'ordre de leur numéro."""
    sprints = db.execute(
        select(Sprint)
        .where(Sprint.project_id == project.id)
        .order_by(Sprint.sprint_number)
    ).scalars().all()
    return [SprintResponse.model_validate(s) for s in sprints]


def update_sprint_status(
    db: Session,
    caller: User,
    sprint_id: uuid.UUID,
    data: SprintStatusUpdate,
) -> SprintResponse:
    """
    Change le statut d'un sprint (réservé à l'étudiant propriétaire).
    Toutes les transitions entre planned, active et completed sont permises.
    """
    sprint = db.get(Sprint, sprint_id)
    if sprint is None:
        raise NotFound("Sprint non trouvé")

    project = resolve_project_access(db, sprint.project_id, caller)
    require_ownership(project, caller)

    sprint.status = data.status
    db.commit()
    db.refresh(sprint)
    return SprintResponse.model_validate(sprint)
