# tests/test_project_service.py

from sqlmodel import select

from lifedash.application import Services, UserContext
from lifedash.domain.project import PriorityProjectChanged, ProjectProgressRecalculated
from lifedash.domain.shared import Err, ErrorKind, expect_ok
from lifedash.infrastructure.storage.tables import ProjectDream, ProjectTask, ProjectValue
from lifedash.models import (
    DreamCreate,
    ProjectCreate,
    ProjectTaskCreate,
    ProjectTaskUpdate,
    ProjectUpdate,
    ValueCreate,
)


def make_project(services: Services, ctx: UserContext, title: str = "Write a book", **fields):
    return expect_ok(services.projects.create_project(ctx, ProjectCreate(title=title, **fields)))


def make_value(services: Services, ctx: UserContext, title: str = "Integrity") -> int:
    return expect_ok(services.values.create(ctx, ValueCreate(title=title))).id


def progress_of(services: Services, ctx: UserContext, project_id: int) -> int:
    return expect_ok(services.projects.get_project(ctx, project_id)).progress


def test_progress_follows_task_changes(services: Services, ctx: UserContext) -> None:
    project = make_project(services, ctx)
    tasks = [
        expect_ok(services.projects.add_task(ctx, project.id, ProjectTaskCreate(title=f"Chapter {n}")))
        for n in range(4)
    ]
    assert progress_of(services, ctx, project.id) == 0

    expect_ok(services.projects.toggle_task(ctx, tasks[0].id))
    assert progress_of(services, ctx, project.id) == 25

    expect_ok(services.projects.update_task(ctx, tasks[1].id, ProjectTaskUpdate(is_completed=True)))
    assert progress_of(services, ctx, project.id) == 50

    expect_ok(services.projects.delete_task(ctx, tasks[3].id))
    assert progress_of(services, ctx, project.id) == 67


def test_progress_event_published(services: Services, ctx: UserContext, events) -> None:
    project = make_project(services, ctx)
    expect_ok(services.projects.add_task(ctx, project.id, ProjectTaskCreate(title="a", is_completed=True)))

    recalculated = [e for e in events if isinstance(e, ProjectProgressRecalculated)]
    assert len(recalculated) == 1
    assert recalculated[0].progress == 100
    assert recalculated[0].total_tasks == 1
    assert recalculated[0].user_id == ctx.user_id


def test_manual_progress_only_without_tasks(services: Services, ctx: UserContext) -> None:
    project = make_project(services, ctx, progress=40)
    assert project.progress == 40

    updated = expect_ok(services.projects.update_project(ctx, project.id, ProjectUpdate(progress=55)))
    assert updated.progress == 55

    task = expect_ok(services.projects.add_task(ctx, project.id, ProjectTaskCreate(title="only")))
    assert progress_of(services, ctx, project.id) == 0

    result = services.projects.update_project(ctx, project.id, ProjectUpdate(progress=90))
    assert isinstance(result, Err)
    assert result.error.kind is ErrorKind.VALIDATION

    expect_ok(services.projects.toggle_task(ctx, task.id))
    assert progress_of(services, ctx, project.id) == 100
    expect_ok(services.projects.delete_task(ctx, task.id))
    assert progress_of(services, ctx, project.id) == 0


def test_delete_project_removes_tasks_and_links(services: Services, ctx: UserContext) -> None:
    value_id = make_value(services, ctx)
    dream = expect_ok(services.dreams.create(ctx, DreamCreate(title="Run a marathon")))
    project = make_project(services, ctx, value_ids=[value_id], dream_ids=[dream.id])
    expect_ok(services.projects.add_task(ctx, project.id, ProjectTaskCreate(title="Train")))

    expect_ok(services.projects.delete_project(ctx, project.id))

    with services.db.session() as session:
        assert session.exec(select(ProjectTask)).all() == []
        assert session.exec(select(ProjectValue)).all() == []
        assert session.exec(select(ProjectDream)).all() == []
    assert services.projects.get_project(ctx, project.id).error.kind is ErrorKind.NOT_FOUND
    # The value itself survives.
    expect_ok(services.values.get(ctx, value_id))


def test_relation_sync_absent_keeps_empty_clears(services: Services, ctx: UserContext) -> None:
    first = make_value(services, ctx, "Integrity")
    second = make_value(services, ctx, "Growth")
    project = make_project(services, ctx, value_ids=[second, first, second])
    assert project.value_ids == [second, first]

    kept = expect_ok(services.projects.update_project(ctx, project.id, ProjectUpdate(title="Renamed")))
    assert kept.value_ids == [second, first]
    assert kept.title == "Renamed"

    replaced = expect_ok(
        services.projects.update_project(ctx, project.id, ProjectUpdate(value_ids=[first]))
    )
    assert replaced.value_ids == [first]

    cleared = expect_ok(services.projects.update_project(ctx, project.id, ProjectUpdate(value_ids=[])))
    assert cleared.value_ids == []


def test_unknown_relation_ids_rejected_without_changes(
    services: Services,
    ctx: UserContext,
    other_ctx: UserContext,
) -> None:
    mine = make_value(services, ctx)
    theirs = make_value(services, other_ctx)
    project = make_project(services, ctx, value_ids=[mine])

    result = services.projects.update_project(
        ctx, project.id, ProjectUpdate(title="Changed", value_ids=[mine, theirs])
    )
    assert isinstance(result, Err)
    assert result.error.kind is ErrorKind.VALIDATION

    unchanged = expect_ok(services.projects.get_project(ctx, project.id))
    assert unchanged.title == "Write a book"
    assert unchanged.value_ids == [mine]

    created = services.projects.create_project(ctx, ProjectCreate(title="x", dream_ids=[404]))
    assert isinstance(created, Err)
    assert len(services.projects.list_projects(ctx)) == 1


def test_single_priority_project(services: Services, ctx: UserContext, events) -> None:
    first = make_project(services, ctx, "First", is_priority=True)
    second = make_project(services, ctx, "Second")

    expect_ok(services.projects.set_priority(ctx, second.id))

    flags = {p.id: p.is_priority for p in services.projects.list_projects(ctx)}
    assert flags == {first.id: False, second.id: True}
    changed = [e for e in events if isinstance(e, PriorityProjectChanged)]
    assert changed[-1].project_id == second.id
    assert changed[-1].previous_project_id == first.id

    expect_ok(services.projects.update_project(ctx, first.id, ProjectUpdate(is_priority=True)))
    flags = {p.id: p.is_priority for p in services.projects.list_projects(ctx)}
    assert flags == {first.id: True, second.id: False}


def test_priority_is_per_user(services: Services, ctx: UserContext, other_ctx: UserContext) -> None:
    mine = make_project(services, ctx, is_priority=True)
    make_project(services, other_ctx, is_priority=True)
    assert expect_ok(services.projects.get_project(ctx, mine.id)).is_priority


def test_archive_hides_project(services: Services, ctx: UserContext) -> None:
    project = make_project(services, ctx)
    archived = expect_ok(services.projects.toggle_archive(ctx, project.id))
    assert archived.is_archived

    assert services.projects.list_projects(ctx) == []
    assert [p.id for p in services.projects.list_projects(ctx, show_archived=True)] == [project.id]

    restored = expect_ok(services.projects.toggle_archive(ctx, project.id))
    assert not restored.is_archived


def test_foreign_project_is_not_found(
    services: Services,
    ctx: UserContext,
    other_ctx: UserContext,
) -> None:
    project = make_project(services, ctx)
    task = expect_ok(services.projects.add_task(ctx, project.id, ProjectTaskCreate(title="t")))

    assert services.projects.get_project(other_ctx, project.id).error.kind is ErrorKind.NOT_FOUND
    assert services.projects.delete_project(other_ctx, project.id).error.kind is ErrorKind.NOT_FOUND
    toggled = services.projects.toggle_task(other_ctx, task.id)
    assert isinstance(toggled, Err)
    assert toggled.error.message == "Project task not found"
    assert services.projects.list_tasks(other_ctx, project.id).error.message == "Project not found"
