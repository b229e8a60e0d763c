"""
Project use cases: lookup, paginated listing, create and update.
"""

from typing import Any, Dict, Optional

import structlog

from ..domain.exceptions import InvalidPageParam
from ..domain.pagination import Page, PageParam, calculate_offset, create_page, is_valid_page_param
from ..models import Project
from ..repositories.project_repository import ProjectRepository

logger = structlog.get_logger(__name__)


class ProjectService:
    """Business logic around project records."""

    def __init__(self, project_repo: ProjectRepository):
        self.project_repo = project_repo

    def get_by_id(self, project_id: int) -> Optional[Project]:
        return self.project_repo.find_by_id(project_id)

    def list(self, page_param: PageParam) -> Page[Project]:
        """
        List projects one page at a time.

        Raises:
            InvalidPageParam: If page_index < 1 or page_size is outside 1-100
        """
        if not is_valid_page_param(page_param):
            raise InvalidPageParam(page_param.page_index, page_param.page_size)

        projects, total = self.project_repo.find_with_pagination(
            calculate_offset(page_param.page_index, page_param.page_size),
            page_param.page_size,
        )
        return create_page(page_param, total, projects)

    def create(self, data: Dict[str, Any]) -> Project:
        project = self.project_repo.create(data)
        logger.info("Project created", project_id=project.id)
        return project

    def update(self, project_id: int, data: Dict[str, Any]) -> Optional[Project]:
        """Update a project; None when it does not exist."""
        project = self.project_repo.update(project_id, data)
        if project is None:
            logger.info("Project not found for update", project_id=project_id)
        else:
            logger.info("Project updated", project_id=project_id, fields=sorted(data))
        return project
