# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre les clés étrangères inter-modèles
# (projects.student_id → users.id, sprints.project_id → projects.id).

from app.models.user import User, UserRole  # noqa: F401 (doit précéder project)
from app.models.project import Project, ProjectStatus  # noqa: F401
from app.models.sprint import Sprint, SprintStatus  # noqa: F401
