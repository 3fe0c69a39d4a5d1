"""
Schémas Pydantic pour les sprints.
Le numéro de sprint n'est jamais fourni par le client : il est attribué à la création.
"""

import uuid
from datetime import date, datetime
from typing import List, Optional

from pydantic import field_validator, model_validator

from app.models.sprint import SprintStatus
from app.schemas.common import CamelModel


class SprintCreate(CamelModel):
    title: str
    description: Optional[str] = None
    project_id: uuid.UUID
    start_date: date
    end_date: date
    goals: List[str] = []

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le titre du sprint ne peut pas être vide.")
        return v.strip()

    @field_validator("goals")
    @classmethod
    def drop_blank_goals(cls, v: List[str]) -> List[str]:
        return [goal.strip() for goal in v if goal.strip()]

    @model_validator(mode="after")
    def end_after_start(self) -> "SprintCreate":
        if self.end_date < self.start_date:
            raise ValueError("La date de fin doit être postérieure à la date de début.")
        return self


class SprintStatusUpdate(CamelModel):
    status: SprintStatus


class ProjectTitle(CamelModel):
    """Projection lecture seule du projet parent (titre pour l'affichage)."""
    id: uuid.UUID
    title: str


class SprintResponse(CamelModel):
    id: uuid.UUID
    title: str
    description: Optional[str] = None
    project: ProjectTitle
    sprint_number: int
    start_date: date
    end_date: date
    status: SprintStatus
    goals: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SprintData(CamelModel):
    sprint: SprintResponse


class SprintEnvelope(CamelModel):
    success: bool = True
    data: SprintData


class SprintListData(CamelModel):
    sprints: List[SprintResponse]
    count: int


class SprintListEnvelope(CamelModel):
    success: bool = True
    data: SprintListData
