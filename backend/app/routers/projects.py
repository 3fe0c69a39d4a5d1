"""
Router pour les projets de fin d'études.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import all_roles, get_accessible_project, student_only
from app.models.project import Project
from app.models.user import User
from app.schemas.project import (
    ProjectCreate,
    ProjectData,
    ProjectEnvelope,
    ProjectListData,
    ProjectListEnvelope,
)
from app.services import project_service

router = APIRouter(prefix="/api/projects", tags=["Projets"])


@router.post("", response_model=ProjectEnvelope, status_code=201, summary="Créer un projet")
def create_project(
    data: ProjectCreate,
    current_user: User = Depends(student_only),
    db: Session = Depends(get_db),
):
    """
    Crée un projet dont l'étudiant connecté est propriétaire.
    Les encadrants doivent être des comptes actifs du bon rôle (sinon 400).
    """
    project = project_service.create_project(db, current_user, data)
    return ProjectEnvelope(data=ProjectData(project=project))


@router.get("", response_model=ProjectListEnvelope, summary="Mes projets")
def list_projects(
    current_user: User = Depends(all_roles),
    db: Session = Depends(get_db),
):
    """Projets où l'utilisateur est étudiant ou encadrant."""
    projects = project_service.get_projects(db, current_user)
    return ProjectListEnvelope(data=ProjectListData(projects=projects, count=len(projects)))


@router.get("/{project_id}", response_model=ProjectEnvelope, summary="Détail d'un projet")
def get_project(project: Project = Depends(get_accessible_project)):
    """404 si le projet n'existe pas, 403 si l'utilisateur n'y participe pas."""
    return ProjectEnvelope(data=ProjectData(project=project_service.to_response(project)))
