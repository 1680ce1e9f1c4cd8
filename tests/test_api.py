"""HTTP contract tests for the task endpoints."""

from datetime import datetime, timedelta
from uuid import uuid4

from fastapi.testclient import TestClient

from task_tracker.main import create_app
from task_tracker.models import Task
from task_tracker.routers.tasks import get_task_repository


def _create(client, **fields):
    payload = {"title": "Buy milk", "description": "2% milk"}
    payload.update(fields)
    response = client.post("/api/tasks", json=payload)
    assert response.status_code == 201
    return response.json()


def test_root_welcome(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to Task Tracker API"}


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_create_task(client):
    response = client.post("/api/tasks", json={"title": "Buy milk", "description": "2% milk"})
    assert response.status_code == 201
    body = response.json()
    assert body["title"] == "Buy milk"
    assert body["description"] == "2% milk"
    assert body["details"] is None
    assert body["id"]
    assert body["createdAt"]
    assert "created_at" not in body


def test_create_missing_title(client):
    response = client.post("/api/tasks", json={"description": "2% milk"})
    assert response.status_code == 400
    assert response.json() == {"error": ["title is required"]}


def test_create_blank_fields(client):
    response = client.post("/api/tasks", json={"title": " ", "description": ""})
    assert response.status_code == 400
    assert response.json() == {"error": ["title is required", "description is required"]}


def test_create_invalid_json(client):
    response = client.post(
        "/api/tasks",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert isinstance(response.json()["error"], list)


def test_list_tasks(client):
    assert client.get("/api/tasks").json() == []
    created = _create(client)
    response = client.get("/api/tasks")
    assert response.status_code == 200
    assert [t["id"] for t in response.json()] == [created["id"]]


def test_get_task(client):
    created = _create(client, details="  corner shop ")
    response = client.get(f"/api/tasks/{created['id']}")
    assert response.status_code == 200
    assert response.json() == created
    assert created["details"] == "corner shop"


def test_get_unknown_task(client):
    response = client.get(f"/api/tasks/{uuid4()}")
    assert response.status_code == 404
    assert response.json() == {"error": "Task not found"}


def test_get_malformed_id(client):
    response = client.get("/api/tasks/not-a-valid-id")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid ID format"}


def test_update_task(client):
    created = _create(client)
    response = client.put(f"/api/tasks/{created['id']}", json={"description": "oat milk", "id": "forged"})
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == created["id"]
    assert body["title"] == "Buy milk"
    assert body["description"] == "oat milk"
    assert body["createdAt"] == created["createdAt"]


def test_update_unknown_task(client):
    response = client.put(f"/api/tasks/{uuid4()}", json={"title": "x"})
    assert response.status_code == 404
    assert response.json() == {"error": "Task not found"}


def test_update_malformed_id(client):
    response = client.put("/api/tasks/not-a-valid-id", json={"title": "x"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid ID format"}


def test_update_rejects_blank_title(client):
    created = _create(client)
    response = client.put(f"/api/tasks/{created['id']}", json={"title": "   "})
    assert response.status_code == 400
    assert response.json() == {"error": ["title is required"]}


def test_update_rejects_null_title(client):
    created = _create(client)
    response = client.put(f"/api/tasks/{created['id']}", json={"title": None})
    assert response.status_code == 400
    assert response.json() == {"error": ["title is required"]}
    assert client.get(f"/api/tasks/{created['id']}").json()["title"] == "Buy milk"


def test_delete_task(client):
    created = _create(client)
    response = client.delete(f"/api/tasks/{created['id']}")
    assert response.status_code == 200
    assert response.json() == {"message": "Task deleted successfully"}
    assert client.get(f"/api/tasks/{created['id']}").status_code == 404


def test_delete_unknown_task(client):
    response = client.delete(f"/api/tasks/{uuid4()}")
    assert response.status_code == 404
    assert response.json() == {"error": "Task not found"}


def test_delete_malformed_id(client):
    response = client.delete("/api/tasks/nope")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid ID format"}


def test_created_at_is_utc(client):
    created = _create(client)
    created_at = datetime.fromisoformat(created["createdAt"].replace("Z", "+00:00"))
    assert created_at.utcoffset() == timedelta(0)


class _AlwaysFoundRepository:
    """Repository whose lookups never raise, though nothing is stored."""

    def __init__(self):
        self.calls = []

    def find_by_id(self, task_id):
        return None

    def get_by_id(self, task_id):
        self.calls.append(("get_by_id", task_id))
        return Task(id=task_id, title="ghost", description="ghost")

    def update(self, task_id, changes):
        self.calls.append(("update", task_id))
        return Task(id=task_id, title="ghost", description="ghost")

    def delete_by_id(self, task_id):
        self.calls.append(("delete_by_id", task_id))
        return {"message": "Task deleted successfully"}


def test_handlers_decide_not_found_themselves(client):
    fake = _AlwaysFoundRepository()
    client.app.dependency_overrides[get_task_repository] = lambda: fake
    try:
        task_id = str(uuid4())
        responses = [
            client.get(f"/api/tasks/{task_id}"),
            client.put(f"/api/tasks/{task_id}", json={"title": "x"}),
            client.delete(f"/api/tasks/{task_id}"),
        ]
    finally:
        client.app.dependency_overrides.clear()

    for response in responses:
        assert response.status_code == 404
        assert response.json() == {"error": "Task not found"}
    assert fake.calls == []


def test_store_failure_returns_generic_error(database_url):
    app = create_app(database_url)
    with TestClient(app, raise_server_exceptions=False) as c:
        Task.__table__.drop(app.state.database.engine)
        response = c.get("/api/tasks")
    assert response.status_code == 500
    assert response.json() == {"error": "Something went wrong!"}
