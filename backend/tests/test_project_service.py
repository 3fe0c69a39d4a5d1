"""
Tests unitaires pour le service projets.
Couverture : create_project, get_projects, validation ProjectCreate.
"""

import uuid
from datetime import date
from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError as SchemaValidationError

from app.errors import AccessDenied, ValidationError
from app.models.project import Project, ProjectStatus
from app.models.user import User, UserRole
from app.schemas.project import ProjectCreate
from app.services.project_service import create_project, get_projects


# ----------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------

def make_user(role=UserRole.STUDENT):
    u = MagicMock(spec=User)
    u.id = uuid.uuid4()
    u.role = role
    u.is_active = True
    return u


def project_data(company_id=None, academic_id=None, **kwargs):
    values = {
        "title": "Plateforme de suivi PFE",
        "description": "Application web de suivi des stages",
        "companySupervisor": str(company_id or uuid.uuid4()),
        "academicSupervisor": str(academic_id or uuid.uuid4()),
        "startDate": "2026-02-01",
        "endDate": "2026-06-30",
    }
    values.update(kwargs)
    return ProjectCreate(**values)


def make_db(company=None, academic=None):
    """Les deux recherches d'encadrants renvoient company puis academic."""
    db = MagicMock()
    db.execute.return_value.scalar_one_or_none.side_effect = [company, academic]
    return db


# ----------------------------------------------------------------
# Validation du schéma
# ----------------------------------------------------------------

class TestProjectCreateSchema:
    def test_titre_vide_rejete(self):
        with pytest.raises(SchemaValidationError):
            project_data(title="   ")

    def test_fin_avant_debut_rejetee(self):
        with pytest.raises(SchemaValidationError, match="date de fin"):
            project_data(startDate="2026-06-30", endDate="2026-02-01")

    def test_encadrant_non_uuid_rejete(self):
        with pytest.raises(SchemaValidationError):
            project_data(companySupervisor="abc")

    def test_date_de_soutenance_optionnelle(self):
        data = project_data(soutenanceDate="2026-07-10")
        assert data.soutenance_date == date(2026, 7, 10)
        assert project_data().soutenance_date is None


# ----------------------------------------------------------------
# create_project
# ----------------------------------------------------------------

class TestCreateProject:
    def test_createur_non_etudiant_refuse(self):
        db = make_db()
        with pytest.raises(AccessDenied):
            create_project(db, make_user(UserRole.COMPANY_SUPERVISOR), project_data())
        db.add.assert_not_called()

    def test_encadrant_entreprise_invalide(self):
        db = make_db(company=None, academic=make_user(UserRole.ACADEMIC_SUPERVISOR))

        with pytest.raises(ValidationError, match="Encadrant entreprise invalide"):
            create_project(db, make_user(), project_data())

        db.add.assert_not_called()

    def test_encadrant_universitaire_invalide(self):
        db = make_db(company=make_user(UserRole.COMPANY_SUPERVISOR), academic=None)

        with pytest.raises(ValidationError, match="Encadrant universitaire invalide"):
            create_project(db, make_user(), project_data())

        db.add.assert_not_called()

    def test_creation_reussie(self):
        student = make_user()
        company = make_user(UserRole.COMPANY_SUPERVISOR)
        academic = make_user(UserRole.ACADEMIC_SUPERVISOR)
        db = make_db(company=company, academic=academic)

        with patch("app.services.project_service.to_response") as mock_resp:
            mock_resp.return_value = MagicMock()
            result = create_project(db, student, project_data(company.id, academic.id))

        assert result is mock_resp.return_value
        db.add.assert_called_once()
        db.commit.assert_called_once()

        project = db.add.call_args[0][0]
        assert isinstance(project, Project)
        assert project.student_id == student.id
        assert project.company_supervisor_id == company.id
        assert project.academic_supervisor_id == academic.id
        assert project.status == ProjectStatus.ACTIVE


# ----------------------------------------------------------------
# get_projects
# ----------------------------------------------------------------

def test_get_projects_retourne_les_projets_du_participant():
    db = MagicMock()
    db.execute.return_value.scalars.return_value.all.return_value = [MagicMock(), MagicMock()]

    with patch("app.services.project_service.to_response") as mock_resp:
        mock_resp.side_effect = lambda p: p
        result = get_projects(db, make_user(UserRole.ACADEMIC_SUPERVISOR))

    assert len(result) == 2


def test_get_projects_aucun_projet():
    db = MagicMock()
    db.execute.return_value.scalars.return_value.all.return_value = []
    assert get_projects(db, make_user()) == []
