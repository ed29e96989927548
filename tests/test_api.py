# tests/test_api.py

from fastapi.testclient import TestClient

from lifedash import __version__
from lifedash.application import Services
from lifedash.config import Settings
from lifedash.interfaces.api import create_app

DAY = "2025-06-10"


def test_root_and_health(client: TestClient) -> None:
    assert client.get("/").json() == {"name": "lifedash", "version": __version__}
    assert client.get("/api/health").json() == {"status": "ok", "version": __version__}


def test_unknown_route_uses_message_body(client: TestClient) -> None:
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}


# =============================================================================
# Projects
# =============================================================================


def test_project_lifecycle(client: TestClient) -> None:
    response = client.post("/api/projects", json={"title": "Garden", "impact": "High"})
    assert response.status_code == 201
    project = response.json()
    assert project["title"] == "Garden"
    assert project["progress"] == 0
    assert project["isPriority"] is False
    assert project["valueIds"] == []
    assert "createdAt" in project
    project_id = project["id"]

    for title in ["dig", "plant"]:
        assert client.post(f"/api/projects/{project_id}/tasks", json={"title": title}).status_code == 201
    tasks = client.get(f"/api/projects/{project_id}/tasks").json()
    assert [task["title"] for task in tasks] == ["dig", "plant"]

    toggled = client.post(f"/api/project-tasks/{tasks[0]['id']}/toggle").json()
    assert toggled["isCompleted"] is True
    assert client.get(f"/api/projects/{project_id}").json()["progress"] == 50

    locked = client.patch(f"/api/projects/{project_id}", json={"progress": 90})
    assert locked.status_code == 400
    assert locked.json() == {"message": "Progress is derived from tasks once a project has tasks"}

    assert client.delete(f"/api/project-tasks/{tasks[1]['id']}").status_code == 204
    assert client.get(f"/api/projects/{project_id}").json()["progress"] == 100

    assert client.delete(f"/api/projects/{project_id}").status_code == 204
    missing = client.get(f"/api/projects/{project_id}")
    assert missing.status_code == 404
    assert missing.json() == {"message": "Project not found"}
    assert client.get(f"/api/project-tasks/{tasks[0]['id']}").status_code == 404


def test_project_relations_and_archive(client: TestClient) -> None:
    value_id = client.post("/api/values", json={"title": "Health"}).json()["id"]
    dream_id = client.post("/api/dreams", json={"title": "Marathon"}).json()["id"]

    project = client.post(
        "/api/projects",
        json={"title": "Run", "valueIds": [value_id, value_id], "dreamIds": [dream_id]},
    ).json()
    assert project["valueIds"] == [value_id]
    assert project["dreamIds"] == [dream_id]

    unknown = client.patch(f"/api/projects/{project['id']}", json={"valueIds": [999]})
    assert unknown.status_code == 400
    assert "999" in unknown.json()["message"]

    cleared = client.patch(f"/api/projects/{project['id']}", json={"dreamIds": []}).json()
    assert cleared["dreamIds"] == []
    assert cleared["valueIds"] == [value_id]

    archived = client.post(f"/api/projects/{project['id']}/archive").json()
    assert archived["isArchived"] is True
    assert client.get("/api/projects").json() == []
    assert len(client.get("/api/projects", params={"showArchived": "true"}).json()) == 1


def test_single_priority_project(client: TestClient) -> None:
    first = client.post("/api/projects", json={"title": "a", "isPriority": True}).json()
    second = client.post("/api/projects", json={"title": "b"}).json()

    assert client.post(f"/api/projects/{second['id']}/priority").json()["isPriority"] is True
    assert client.get(f"/api/projects/{first['id']}").json()["isPriority"] is False


def test_request_validation_maps_to_400(client: TestClient) -> None:
    response = client.post("/api/projects", json={})
    assert response.status_code == 400
    assert "title" in response.json()["message"]

    assert client.post("/api/projects", json={"title": "x", "progress": 150}).status_code == 400
    assert client.patch("/api/projects/1", json={"title": None}).status_code == 400
    assert client.get("/api/projects/abc").status_code == 400


def test_user_header_isolates_data(client: TestClient) -> None:
    mine = client.post("/api/projects", json={"title": "mine"}).json()
    assert mine["userId"] == 1

    headers = {"X-User-Id": "2"}
    assert client.get("/api/projects", headers=headers).json() == []
    assert client.get(f"/api/projects/{mine['id']}", headers=headers).status_code == 404
    assert client.delete(f"/api/projects/{mine['id']}", headers=headers).status_code == 404

    theirs = client.post("/api/projects", json={"title": "theirs"}, headers=headers).json()
    assert theirs["userId"] == 2
    assert client.get("/api/projects", headers={"X-User-Id": "abc"}).status_code == 400


# =============================================================================
# Today tasks
# =============================================================================


def add_today(client: TestClient, title: str, **fields) -> dict:
    response = client.post("/api/today-tasks", json={"title": title, "date": DAY, **fields})
    assert response.status_code == 201, response.text
    return response.json()


def test_today_tasks_priority_cap(client: TestClient) -> None:
    for title in ["a", "b", "c"]:
        add_today(client, title, isPriority=True)

    response = client.post("/api/today-tasks", json={"title": "d", "date": DAY, "isPriority": True})
    assert response.status_code == 400
    assert response.json() == {"message": "At most 3 priority tasks are allowed per day"}

    regular = add_today(client, "d")
    moved = client.post(f"/api/today-tasks/{regular['id']}/priority", json={"isPriority": True})
    assert moved.status_code == 400

    listed = client.get("/api/today-tasks", params={"date": DAY}).json()
    assert [(t["title"], t["isPriority"], t["position"]) for t in listed] == [
        ("a", True, 0),
        ("b", True, 1),
        ("c", True, 2),
        ("d", False, 0),
    ]


def test_today_tasks_reorder(client: TestClient) -> None:
    a, b, c = (add_today(client, title) for title in ["a", "b", "c"])
    other_day = client.post("/api/today-tasks", json={"title": "x", "date": "2025-06-11"}).json()

    response = client.post("/api/today-tasks/reorder", json={"taskIds": [c["id"], a["id"], b["id"]]})
    assert response.status_code == 200
    assert [(t["title"], t["position"]) for t in response.json()] == [("c", 0), ("a", 1), ("b", 2)]

    mixed = client.post("/api/today-tasks/reorder", json={"taskIds": [a["id"], other_day["id"]]})
    assert mixed.status_code == 400
    assert client.post("/api/today-tasks/reorder", json={"taskIds": []}).status_code == 400
    assert client.post("/api/today-tasks/reorder", json={"taskIds": [a["id"], 999]}).status_code == 404

    listed = client.get("/api/today-tasks", params={"date": DAY}).json()
    assert [t["title"] for t in listed] == ["c", "a", "b"]


def test_today_task_update_toggle_delete(client: TestClient) -> None:
    a, b = add_today(client, "a"), add_today(client, "b")

    patched = client.patch(f"/api/today-tasks/{a['id']}", json={"notes": "soon", "isPriority": True}).json()
    assert (patched["notes"], patched["isPriority"], patched["position"]) == ("soon", True, 0)
    assert client.get(f"/api/today-tasks/{b['id']}").json()["position"] == 0

    assert client.post(f"/api/today-tasks/{b['id']}/toggle").json()["isCompleted"] is True
    assert client.delete(f"/api/today-tasks/{b['id']}").status_code == 204
    assert client.get(f"/api/today-tasks/{b['id']}").json() == {"message": "Today task not found"}


# =============================================================================
# Error handling and startup
# =============================================================================


def test_unexpected_error_returns_500(services: Services, monkeypatch) -> None:
    def boom(ctx):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(services.quotes, "list", boom)
    client = TestClient(create_app(services=services), raise_server_exceptions=False)

    response = client.get("/api/quotes")
    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}


def test_startup_creates_tables_and_seeds(tmp_path) -> None:
    settings = Settings(database_url=f"sqlite:///{tmp_path / 'app.db'}", seed_defaults=True)
    app = create_app(settings)

    with TestClient(app) as client:
        assert len(client.get("/api/values").json()) == 5
        assert len(client.get("/api/dreams").json()) == 3
        assert client.get("/api/values", headers={"X-User-Id": "7"}).json() == []

    app.state.services.db.dispose()


def test_health_metrics_crud(client: TestClient) -> None:
    created = client.post("/api/health-metrics", json={"name": "Resting HR", "value": "58 bpm"})
    assert created.status_code == 201
    metric = created.json()
    assert (metric["icon"], metric["change"], metric["userId"]) == ("heart-pulse", None, 1)

    patched = client.patch(f"/api/health-metrics/{metric['id']}", json={"change": "-2 bpm"}).json()
    assert (patched["value"], patched["change"]) == ("58 bpm", "-2 bpm")
    assert client.patch(f"/api/health-metrics/{metric['id']}", json={"value": None}).status_code == 400
    assert client.post("/api/health-metrics", json={"name": "Weight"}).status_code == 400

    assert client.get("/api/health-metrics", headers={"X-User-Id": "2"}).json() == []
    assert client.delete(f"/api/health-metrics/{metric['id']}").status_code == 204
    missing = client.get(f"/api/health-metrics/{metric['id']}")
    assert missing.json() == {"message": "Health metric not found"}


def test_openapi_documents_error_body(client: TestClient) -> None:
    schema = client.get("/openapi.json").json()
    responses = schema["paths"]["/api/projects/{project_id}"]["get"]["responses"]
    for status in ("400", "404"):
        ref = responses[status]["content"]["application/json"]["schema"]["$ref"]
        assert ref.endswith("/ErrorResponse")
    assert schema["components"]["schemas"]["ErrorResponse"]["required"] == ["message"]
