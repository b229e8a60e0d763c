"""
SQLAlchemy implementation of project persistence.
"""

from typing import Any, Dict, List, Optional, Tuple

import structlog
from sqlalchemy.orm import Session

from ..models import Project

logger = structlog.get_logger(__name__)

UPDATABLE_FIELDS = (
    "sale_start",
    "sale_end",
    "registration_time_starts",
    "registration_time_ends",
    "tge",
    "unlock_time",
    "vesting_portions_unlock_time",
    "vesting_percent_per_portion",
)


class ProjectRepository:
    """Project data access on a request-scoped session."""

    def __init__(self, db: Session):
        """
        Initialize repository.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def _ordered(self):
        return self.db.query(Project).order_by(Project.create_time.desc(), Project.id.desc())

    def find_by_id(self, project_id: int) -> Optional[Project]:
        """Find a project by primary key."""
        return self.db.query(Project).filter(Project.id == project_id).first()

    def find_all(self) -> List[Project]:
        """All projects, newest first."""
        return self._ordered().all()

    def create(self, data: Dict[str, Any]) -> Project:
        """Insert a project built from a field dictionary."""
        project = Project(**{k: v for k, v in data.items() if k in UPDATABLE_FIELDS})
        return self.save(project)

    def update(self, project_id: int, data: Dict[str, Any]) -> Optional[Project]:
        """
        Apply field changes to an existing project.

        Returns:
            The updated project, or None when it does not exist
        """
        project = self.find_by_id(project_id)
        if project is None:
            return None

        for key, value in data.items():
            if key in UPDATABLE_FIELDS:
                setattr(project, key, value)

        return self.save(project)

    def save(self, project: Project) -> Project:
        """Persist a project and refresh server-generated columns."""
        try:
            self.db.add(project)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.error("Failed to save project", project_id=project.id, exc_info=True)
            raise
        self.db.refresh(project)
        return project

    def delete(self, project_id: int) -> bool:
        """Delete a project; True when a row was removed."""
        project = self.find_by_id(project_id)
        if project is None:
            return False

        self.db.delete(project)
        self.db.commit()
        return True

    def count(self) -> int:
        """Total number of projects."""
        return self.db.query(Project).count()

    def find_with_pagination(self, skip: int, take: int) -> Tuple[List[Project], int]:
        """
        One slice of projects, newest first, plus the total count.

        Args:
            skip: Number of rows to skip
            take: Maximum number of rows to return
        """
        rows = self._ordered().offset(skip).limit(take).all()
        return rows, self.count()
