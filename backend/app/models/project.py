"""
Modèle SQLAlchemy pour les projets de fin d'études.
Un projet lie un étudiant (propriétaire) à ses deux encadrants.
"""

import enum
import uuid

from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, String, Text, Uuid, func
from sqlalchemy.orm import relationship

from app.database import Base


class ProjectStatus(str, enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    SUSPENDED = "suspended"


class Project(Base):
    __tablename__ = "projects"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)

    # Fixé au créateur, jamais modifié ensuite
    student_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    company_supervisor_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    academic_supervisor_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    soutenance_date = Column(Date, nullable=True)
    status = Column(
        Enum(
            ProjectStatus,
            name="project_status",
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=ProjectStatus.ACTIVE,
    )
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    student = relationship("User", foreign_keys=[student_id])
    company_supervisor = relationship("User", foreign_keys=[company_supervisor_id])
    academic_supervisor = relationship("User", foreign_keys=[academic_supervisor_id])
