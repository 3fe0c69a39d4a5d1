"""
Routes d'information : accueil, description de l'API, santé.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from app.models.user import UserRole

router = APIRouter(tags=["Santé"])

API_ENDPOINTS = {
    "auth": {
        "register": "POST /api/auth/register",
        "login": "POST /api/auth/login",
        "profile": "GET /api/auth/me",
        "updateProfile": "PUT /api/auth/profile",
        "logout": "POST /api/auth/logout",
    },
    "projects": {
        "create": "POST /api/projects",
        "list": "GET /api/projects",
        "detail": "GET /api/projects/{projectId}",
    },
    "sprints": {
        "create": "POST /api/sprints",
        "listByProject": "GET /api/sprints/project/{projectId}",
        "updateStatus": "PUT /api/sprints/{sprintId}/status",
    },
    "health": "GET /health",
    "documentation": "GET /api",
}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/", summary="Accueil")
def root(request: Request):
    return {
        "message": "Bienvenue sur l'application de gestion de PFE",
        "description": "Système de gestion des projets de fin d'études",
        "version": request.app.state.settings.APP_VERSION,
        "timestamp": _now(),
        "documentation": "/api",
        "health": "/health",
    }


@router.get("/api", summary="Description de l'API")
def api_info(request: Request):
    return {
        "message": "PFE Tracker API",
        "version": request.app.state.settings.APP_VERSION,
        "endpoints": API_ENDPOINTS,
        "availableRoles": [role.value for role in UserRole],
    }


@router.get("/health", summary="Vérifie que l'API est opérationnelle")
def health_check(request: Request):
    return {
        "success": True,
        "message": "PFE Tracker API is running",
        "timestamp": _now(),
        "version": request.app.state.settings.APP_VERSION,
    }
