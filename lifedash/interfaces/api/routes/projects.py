"""Project and project-task endpoints."""

from fastapi import APIRouter, Query

from lifedash.interfaces.api.deps import ServicesDep, UserDep
from lifedash.interfaces.api.errors import unwrap
from lifedash.models import (
    ProjectCreate,
    ProjectRead,
    ProjectTaskCreate,
    ProjectTaskRead,
    ProjectTaskUpdate,
    ProjectUpdate,
)

router = APIRouter(tags=["projects"])


# =============================================================================
# Projects
# =============================================================================


@router.get("/projects", response_model=list[ProjectRead])
def list_projects(
    services: ServicesDep,
    ctx: UserDep,
    show_archived: bool = Query(default=False, alias="showArchived"),
):
    """List the caller's projects; archived ones only on request."""
    return services.projects.list_projects(ctx, show_archived=show_archived)


@router.post("/projects", response_model=ProjectRead, status_code=201)
def create_project(data: ProjectCreate, services: ServicesDep, ctx: UserDep):
    return unwrap(services.projects.create_project(ctx, data))


@router.get("/projects/{project_id}", response_model=ProjectRead)
def get_project(project_id: int, services: ServicesDep, ctx: UserDep):
    return unwrap(services.projects.get_project(ctx, project_id))


@router.patch("/projects/{project_id}", response_model=ProjectRead)
def update_project(project_id: int, data: ProjectUpdate, services: ServicesDep, ctx: UserDep):
    """Partial update. ``valueIds`` / ``dreamIds`` replace the relation sets when sent."""
    return unwrap(services.projects.update_project(ctx, project_id, data))


@router.delete("/projects/{project_id}", status_code=204)
def delete_project(project_id: int, services: ServicesDep, ctx: UserDep):
    unwrap(services.projects.delete_project(ctx, project_id))


@router.post("/projects/{project_id}/priority", response_model=ProjectRead)
def set_priority_project(project_id: int, services: ServicesDep, ctx: UserDep):
    """Make this the caller's single priority project."""
    return unwrap(services.projects.set_priority(ctx, project_id))


@router.post("/projects/{project_id}/archive", response_model=ProjectRead)
def toggle_archive(project_id: int, services: ServicesDep, ctx: UserDep):
    return unwrap(services.projects.toggle_archive(ctx, project_id))


# =============================================================================
# Project tasks
# =============================================================================


@router.get("/projects/{project_id}/tasks", response_model=list[ProjectTaskRead])
def list_project_tasks(project_id: int, services: ServicesDep, ctx: UserDep):
    return unwrap(services.projects.list_tasks(ctx, project_id))


@router.post("/projects/{project_id}/tasks", response_model=ProjectTaskRead, status_code=201)
def add_project_task(project_id: int, data: ProjectTaskCreate, services: ServicesDep, ctx: UserDep):
    return unwrap(services.projects.add_task(ctx, project_id, data))


@router.get("/project-tasks/{task_id}", response_model=ProjectTaskRead)
def get_project_task(task_id: int, services: ServicesDep, ctx: UserDep):
    return unwrap(services.projects.get_task(ctx, task_id))


@router.patch("/project-tasks/{task_id}", response_model=ProjectTaskRead)
def update_project_task(task_id: int, data: ProjectTaskUpdate, services: ServicesDep, ctx: UserDep):
    return unwrap(services.projects.update_task(ctx, task_id, data))


@router.delete("/project-tasks/{task_id}", status_code=204)
def delete_project_task(task_id: int, services: ServicesDep, ctx: UserDep):
    unwrap(services.projects.delete_task(ctx, task_id))


@router.post("/project-tasks/{task_id}/toggle", response_model=ProjectTaskRead)
def toggle_project_task(task_id: int, services: ServicesDep, ctx: UserDep):
    return unwrap(services.projects.toggle_task(ctx, task_id))
