"""
Router pour les sprints d'un projet.
"""

import uuid

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import all_roles, get_accessible_project
from app.models.project import Project
from app.models.user import User
from app.schemas.sprint import (
    SprintCreate,
    SprintData,
    SprintEnvelope,
    SprintListData,
    SprintListEnvelope,
    SprintStatusUpdate,
)
from app.services import sprint_service

router = APIRouter(prefix="/api/sprints", tags=["Sprints"])


@router.post("", response_model=SprintEnvelope, status_code=201, summary="Créer un sprint")
def create_sprint(
    data: SprintCreate,
    request: Request,
    current_user: User = Depends(all_roles),
    db: Session = Depends(get_db),
):
    """
    Ajoute un sprint au projet `projectId`. Le numéro est attribué automatiquement.
    404 si le projet n'existe pas, 403 si l'utilisateur n'en est pas l'étudiant propriétaire.
    """
    sprint = sprint_service.create_sprint(
        db,
        current_user,
        data,
        max_attempts=request.app.state.settings.SPRINT_NUMBER_MAX_ATTEMPTS,
    )
    return SprintEnvelope(data=SprintData(sprint=sprint))


@router.get("/project/{project_id}", response_model=SprintListEnvelope, summary="Sprints d'un projet")
def list_sprints(
    project: Project = Depends(get_accessible_project),
    db: Session = Depends(get_db),
):
    """Sprints triés par numéro ; accessible aux trois participants du projet."""
    sprints = sprint_service.get_sprints(db, project)
    return SprintListEnvelope(data=SprintListData(sprints=sprints, count=len(sprints)))


@router.put("/{sprint_id}/status", response_model=SprintEnvelope, summary="Changer le statut d'un sprint")
def update_sprint_status(
    sprint_id: uuid.UUID,
    data: SprintStatusUpdate,
    current_user: User = Depends(all_roles),
    db: Session = Depends(get_db),
):
    sprint = sprint_service.update_sprint_status(db, current_user, sprint_id, data)
    return SprintEnvelope(data=SprintData(sprint=sprint))
