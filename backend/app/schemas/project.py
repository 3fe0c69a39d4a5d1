"""
Schémas Pydantic pour les projets de fin d'études.
"""

import uuid
from datetime import date, datetime
from typing import List, Optional

from pydantic import field_validator, model_validator

from app.models.project import ProjectStatus
from app.schemas.common import CamelModel
from app.schemas.user import UserSummary


class ProjectCreate(CamelModel):
    title: str
    description: str
    company_supervisor: uuid.UUID
    academic_supervisor: uuid.UUID
    start_date: date
    end_date: date
    soutenance_date: Optional[date] = None

    @field_validator("title", "description")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le titre et la description ne peuvent pas être vides.")
        return v.strip()

    @model_validator(mode="after")
    def end_after_start(self) -> "ProjectCreate":
        if self.end_date < self.start_date:
            raise ValueError("La date de fin doit être postérieure à la date de début.")
        return self


class ProjectResponse(CamelModel):
    id: uuid.UUID
    title: str
    description: str
    student: UserSummary
    company_supervisor: UserSummary
    academic_supervisor: UserSummary
    start_date: date
    end_date: date
    soutenance_date: Optional[date] = None
    status: ProjectStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProjectData(CamelModel):
    project: ProjectResponse


class ProjectEnvelope(CamelModel):
    success: bool = True
    data: ProjectData


class ProjectListData(CamelModel):
    projects: List[ProjectResponse]
    count: int


class ProjectListEnvelope(CamelModel):
    success: bool = True
    data: ProjectListData
