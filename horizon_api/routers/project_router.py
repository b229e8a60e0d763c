"""
Project CRUD router.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..dependencies import get_project_service
from ..domain.exceptions import ExceptionFactory
from ..domain.pagination import PageParam, create_default_page_param
from ..services.project_service import ProjectService
from ..validators import (
    ErrorResponse,
    ProjectCreate,
    ProjectMutationResponse,
    ProjectPageResponse,
    ProjectResponse,
    ProjectUpdate,
)

router = APIRouter(
    prefix="/api/v1/projects",
    tags=["projects"],
    responses={400: {"model": ErrorResponse}},
)


def _validate_project_id(project_id: int) -> None:
    if project_id < 1:
        raise ExceptionFactory.invalid_parameters("Invalid project ID")


@router.get("", response_model=ProjectPageResponse, summary="List projects")
def list_projects(
    page_index: Optional[int] = Query(None, alias="pageIndex"),
    page_size: Optional[int] = Query(None, alias="pageSize"),
    service: ProjectService = Depends(get_project_service),
):
    """
    List projects newest first.

    pageIndex is 1-based and defaults to 1; pageSize defaults to 20 and
    must be between 1 and 100.
    """
    default = create_default_page_param()
    page_param = PageParam(
        page_index=default.page_index if page_index is None else page_index,
        page_size=default.page_size if page_size is None else page_size,
    )
    page = service.list(page_param)

    return ProjectPageResponse(
        page_index=page.page_index,
        page_size=page.page_size,
        page_count=page.page_count,
        data_count=page.data_count,
        data=[ProjectResponse.model_validate(project) for project in page.data],
    )


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    responses={404: {"description": "Project not found"}},
    summary="Get project",
)
def get_project(project_id: int, service: ProjectService = Depends(get_project_service)):
    _validate_project_id(project_id)

    project = service.get_by_id(project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

    return ProjectResponse.model_validate(project)


@router.post(
    "",
    response_model=ProjectMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
)
def create_project(
    project_data: ProjectCreate,
    service: ProjectService = Depends(get_project_service),
):
    project = service.create(project_data.model_dump())
    return ProjectMutationResponse(
        message="Project created successfully",
        data=ProjectResponse.model_validate(project),
    )


@router.put(
    "/{project_id}",
    response_model=ProjectMutationResponse,
    responses={404: {"description": "Project not found"}},
    summary="Update project",
)
def update_project(
    project_id: int,
    project_data: ProjectUpdate,
    service: ProjectService = Depends(get_project_service),
):
    """
    Partially update a project.

    Only fields present in the body are changed. A body id, when given,
    must match the path id.
    """
    _validate_project_id(project_id)
    if project_data.id is not None and project_data.id != project_id:
        raise ExceptionFactory.invalid_parameters("Project ID mismatch")

    changes = project_data.model_dump(exclude_unset=True, exclude_none=True, exclude={"id"})
    project = service.update(project_id, changes)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

    return ProjectMutationResponse(
        message="Project updated successfully",
        data=ProjectResponse.model_validate(project),
    )
