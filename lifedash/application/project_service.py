"""Project application service.

Projects, their tasks and their value / dream relations. Progress is derived
from task completion after every task change, inside the same unit of work
as the change itself.
"""

import logging

from lifedash.application.context import UserContext
from lifedash.application.events import EventBus
from lifedash.domain.project import (
    PriorityProjectChanged,
    ProjectProgressRecalculated,
    normalize_ids,
    should_replace,
    snapshot,
    unknown_ids,
)
from lifedash.domain.shared import DomainError, DomainEvent, Err, Ok, Result, invalid, not_found
from lifedash.infrastructure.storage import Database, ProjectRepository
from lifedash.infrastructure.storage.tables import Project, ProjectTask
from lifedash.models import (
    ProjectCreate,
    ProjectRead,
    ProjectTaskCreate,
    ProjectTaskRead,
    ProjectTaskUpdate,
    ProjectUpdate,
)

logger = logging.getLogger(__name__)

PROJECT = "Project"
PROJECT_TASK = "Project task"


class ProjectService:
    """Project and project-task operations for one database."""

    def __init__(self, db: Database, bus: EventBus) -> None:
        self.db = db
        self.bus = bus

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _read(repo: ProjectRepository, project: Project) -> ProjectRead:
        assert project.id is not None
        return ProjectRead.model_validate(project).model_copy(
            update={
                "value_ids": repo.value_ids(project.id),
                "dream_ids": repo.dream_ids(project.id),
            }
        )

    @staticmethod
    def _check_relations(
        repo: ProjectRepository,
        ctx: UserContext,
        value_ids: list[int] | None,
        dream_ids: list[int] | None,
    ) -> Result[None, DomainError]:
        """Fail when a supplied value or dream id is not owned by the caller."""
        if value_ids:
            missing = unknown_ids(value_ids, repo.owned_value_ids(ctx.user_id, value_ids))
            if missing:
                return Err(invalid(f"Unknown value ids: {missing}"))
        if dream_ids:
            missing = unknown_ids(dream_ids, repo.owned_dream_ids(ctx.user_id, dream_ids))
            if missing:
                return Err(invalid(f"Unknown dream ids: {missing}"))
        return Ok(None)

    @staticmethod
    def _sync_relations(
        repo: ProjectRepository,
        project_id: int,
        value_ids: list[int] | None,
        dream_ids: list[int] | None,
    ) -> None:
        """Replace the relation sets that were supplied; leave the others alone."""
        if should_replace(value_ids):
            repo.replace_values(project_id, value_ids or [])
        if should_replace(dream_ids):
            repo.replace_dreams(project_id, dream_ids or [])

    @staticmethod
    def _claim_priority(
        repo: ProjectRepository,
        ctx: UserContext,
        project: Project,
    ) -> PriorityProjectChanged | None:
        """Make ``project`` the caller's only priority project."""
        assert project.id is not None
        previous = [p for p in repo.priority_projects(ctx.user_id) if p.id != project.id]
        for other in previous:
            other.is_priority = False
            repo.session.add(other)
        was_priority = project.is_priority
        project.is_priority = True
        repo.session.add(project)
        repo.session.flush()
        if was_priority and not previous:
            return None
        return PriorityProjectChanged(
            user_id=ctx.user_id,
            project_id=project.id,
            previous_project_id=previous[0].id if previous else None,
        )

    @staticmethod
    def _recalculate(
        repo: ProjectRepository,
        ctx: UserContext,
        project: Project,
    ) -> ProjectProgressRecalculated:
        """Derive progress from the project's tasks and store it."""
        assert project.id is not None
        snap = snapshot(repo.completion_flags(project.id))
        previous = project.progress
        project.progress = snap.progress
        repo.session.add(project)
        repo.session.flush()
        logger.debug(
            "Project %s progress %s -> %s (%s/%s)",
            project.id,
            previous,
            snap.progress,
            snap.completed,
            snap.total,
        )
        return ProjectProgressRecalculated(
            user_id=ctx.user_id,
            project_id=project.id,
            previous=previous,
            progress=snap.progress,
            total_tasks=snap.total,
            completed_tasks=snap.completed,
        )

    # =========================================================================
    # Projects
    # =========================================================================

    def list_projects(self, ctx: UserContext, *, show_archived: bool = False) -> list[ProjectRead]:
        """Caller's projects; archived ones only when ``show_archived``."""
        with self.db.session() as session:
            repo = ProjectRepository(session)
            rows = repo.list_visible(ctx.user_id, include_archived=show_archived)
            return [self._read(repo, row) for row in rows]

    def get_project(self, ctx: UserContext, project_id: int) -> Result[ProjectRead, DomainError]:
        with self.db.session() as session:
            repo = ProjectRepository(session)
            project = repo.get(ctx.user_id, project_id)
            if project is None:
                return Err(not_found(PROJECT))
            return Ok(self._read(repo, project))

    def create_project(self, ctx: UserContext, data: ProjectCreate) -> Result[ProjectRead, DomainError]:
        """Create a project with its initial value / dream relations.

        Args:
            ctx: Caller context; sets the owner.
            data: Fields of the new project. ``progress`` is a manual value
                and stays until the first task is added.

        Returns:
            Ok(ProjectRead), or Err when a relation id is unknown.
        """
        value_ids = normalize_ids(data.value_ids) if data.value_ids is not None else None
        dream_ids = normalize_ids(data.dream_ids) if data.dream_ids is not None else None
        events: list[DomainEvent] = []

        with self.db.unit_of_work() as session:
            repo = ProjectRepository(session)
            checked = self._check_relations(repo, ctx, value_ids, dream_ids)
            if isinstance(checked, Err):
                return checked

            fields = data.model_dump(exclude={"value_ids", "dream_ids", "is_priority", "progress"})
            project = repo.add(Project(user_id=ctx.user_id, progress=data.progress or 0, **fields))
            assert project.id is not None
            self._sync_relations(repo, project.id, value_ids, dream_ids)
            if data.is_priority:
                event = self._claim_priority(repo, ctx, project)
                if event is not None:
                    events.append(event)
            result = self._read(repo, project)

        logger.info("Created project %s for user %s", result.id, ctx.user_id)
        self.bus.publish_all(events)
        return Ok(result)

    def update_project(
        self,
        ctx: UserContext,
        project_id: int,
        changes: ProjectUpdate,
    ) -> Result[ProjectRead, DomainError]:
        """Apply a partial update.

        Relation sets are replaced only when supplied; an empty list clears
        them. A manual ``progress`` is rejected once the project has tasks.
        """
        values = changes.changes(exclude={"value_ids", "dream_ids"})
        sent = changes.model_fields_set
        value_ids = normalize_ids(changes.value_ids or []) if "value_ids" in sent else None
        dream_ids = normalize_ids(changes.dream_ids or []) if "dream_ids" in sent else None
        events: list[DomainEvent] = []

        with self.db.unit_of_work() as session:
            repo = ProjectRepository(session)
            project = repo.get(ctx.user_id, project_id)
            if project is None:
                return Err(not_found(PROJECT))
            assert project.id is not None

            if "progress" in values and repo.completion_flags(project.id):
                return Err(invalid("Progress is derived from tasks once a project has tasks"))
            checked = self._check_relations(repo, ctx, value_ids, dream_ids)
            if isinstance(checked, Err):
                return checked

            claim = values.pop("is_priority", None)
            for name, value in values.items():
                setattr(project, name, value)
            session.add(project)
            if claim is True:
                event = self._claim_priority(repo, ctx, project)
                if event is not None:
                    events.append(event)
            elif claim is False:
                project.is_priority = False
            self._sync_relations(repo, project.id, value_ids, dream_ids)
            session.flush()
            result = self._read(repo, project)

        self.bus.publish_all(events)
        return Ok(result)

    def delete_project(self, ctx: UserContext, project_id: int) -> Result[None, DomainError]:
        """Delete a project together with its tasks and relation rows."""
        with self.db.unit_of_work() as session:
            repo = ProjectRepository(session)
            project = repo.get(ctx.user_id, project_id)
            if project is None:
                return Err(not_found(PROJECT))
            repo.delete_project(project)
        logger.info("Deleted project %s for user %s", project_id, ctx.user_id)
        return Ok(None)

    def set_priority(self, ctx: UserContext, project_id: int) -> Result[ProjectRead, DomainError]:
        """Make the project the caller's single priority project."""
        with self.db.unit_of_work() as session:
            repo = ProjectRepository(session)
            project = repo.get(ctx.user_id, project_id)
            if project is None:
                return Err(not_found(PROJECT))
            event = self._claim_priority(repo, ctx, project)
            result = self._read(repo, project)

        if event is not None:
            self.bus.publish(event)
        return Ok(result)

    def toggle_archive(self, ctx: UserContext, project_id: int) -> Result[ProjectRead, DomainError]:
        """Flip the archived flag."""
        with self.db.unit_of_work() as session:
            repo = ProjectRepository(session)
            project = repo.get(ctx.user_id, project_id)
            if project is None:
                return Err(not_found(PROJECT))
            project.is_archived = not project.is_archived
            session.add(project)
            session.flush()
            logger.info(
                "Project %s %s",
                project_id,
                "archived" if project.is_archived else "restored",
            )
            return Ok(self._read(repo, project))

    # =========================================================================
    # Project tasks
    # =========================================================================

    def list_tasks(self, ctx: UserContext, project_id: int) -> Result[list[ProjectTaskRead], DomainError]:
        with self.db.session() as session:
            repo = ProjectRepository(session)
            project = repo.get(ctx.user_id, project_id)
            if project is None:
                return Err(not_found(PROJECT))
            return Ok([ProjectTaskRead.model_validate(task) for task in repo.tasks(project_id)])

    def get_task(self, ctx: UserContext, task_id: int) -> Result[ProjectTaskRead, DomainError]:
        with self.db.session() as session:
            found = ProjectRepository(session).get_task(ctx.user_id, task_id)
            if found is None:
                return Err(not_found(PROJECT_TASK))
            return Ok(ProjectTaskRead.model_validate(found[0]))

    def add_task(
        self,
        ctx: UserContext,
        project_id: int,
        data: ProjectTaskCreate,
    ) -> Result[ProjectTaskRead, DomainError]:
        """Add a task and recalculate the project's progress."""
        with self.db.unit_of_work() as session:
            repo = ProjectRepository(session)
            project = repo.get(ctx.user_id, project_id)
            if project is None:
                return Err(not_found(PROJECT))
            task = ProjectTask(project_id=project_id, **data.model_dump())
            session.add(task)
            session.flush()
            session.refresh(task)
            event = self._recalculate(repo, ctx, project)
            result = ProjectTaskRead.model_validate(task)

        self.bus.publish(event)
        return Ok(result)

    def update_task(
        self,
        ctx: UserContext,
        task_id: int,
        changes: ProjectTaskUpdate,
    ) -> Result[ProjectTaskRead, DomainError]:
        """Update a task's title or completion, then recalculate progress."""
        with self.db.unit_of_work() as session:
            repo = ProjectRepository(session)
            found = repo.get_task(ctx.user_id, task_id)
            if found is None:
                return Err(not_found(PROJECT_TASK))
            task, project = found
            for name, value in changes.changes().items():
                setattr(task, name, value)
            session.add(task)
            session.flush()
            event = self._recalculate(repo, ctx, project)
            result = ProjectTaskRead.model_validate(task)

        self.bus.publish(event)
        return Ok(result)

    def toggle_task(self, ctx: UserContext, task_id: int) -> Result[ProjectTaskRead, DomainError]:
        """Flip a task's completion, then recalculate progress."""
        with self.db.unit_of_work() as session:
            repo = ProjectRepository(session)
            found = repo.get_task(ctx.user_id, task_id)
            if found is None:
                return Err(not_found(PROJECT_TASK))
            task, project = found
            task.is_completed = not task.is_completed
            session.add(task)
            session.flush()
            event = self._recalculate(repo, ctx, project)
            result = ProjectTaskRead.model_validate(task)

        self.bus.publish(event)
        return Ok(result)

    def delete_task(self, ctx: UserContext, task_id: int) -> Result[None, DomainError]:
        """Delete a task, then recalculate progress (0 once no tasks remain)."""
        with self.db.unit_of_work() as session:
            repo = ProjectRepository(session)
            found = repo.get_task(ctx.user_id, task_id)
            if found is None:
                return Err(not_found(PROJECT_TASK))
            task, project = found
            session.delete(task)
            session.flush()
            event = self._recalculate(repo, ctx, project)

        self.bus.publish(event)
        return Ok(None)
