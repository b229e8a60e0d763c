"""
Shared dependencies for the application.

Provides dependency injection functions used across routers.
"""

from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from .database import get_db
from .repositories.project_repository import ProjectRepository
from .services.project_service import ProjectService
from .services.user_service import UserService

# Set by the application lifespan once the signing key is loaded
_user_service: Optional[UserService] = None


def set_user_service(service: Optional[UserService]) -> None:
    """
    Set the user service instance.

    Called by the app during startup and cleared on shutdown.
    """
    global _user_service
    _user_service = service


def get_user_service() -> UserService:
    """Get the user service for dependency injection."""
    if _user_service is None:
        raise RuntimeError("User service not initialized")
    return _user_service


def get_project_service(db: Session = Depends(get_db)) -> ProjectService:
    """Request-scoped project service bound to the request's session."""
    return ProjectService(ProjectRepository(db))
