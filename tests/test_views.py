from datetime import date

from checkmate.models.task import Task
from checkmate.routers.views import format_date


def test_format_date():
    assert format_date(None) == ""
    assert format_date(date(2026, 1, 9)) == "2026-01-09"


def test_index_page(client, make_task):
    make_task(title="Arroser les plantes", due_date="2026-12-01")
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "<html" in response.text
    assert "Arroser les plantes" in response.text
    assert "2026-12-01" in response.text


def test_list_fragment_filters(client, make_task):
    make_task(title="En cours", status="in_progress")
    make_task(title="Terminée", status="done")

    response = client.get("/ui/tasks?status=done")
    assert response.status_code == 200
    assert 'id="task-list"' in response.text
    assert "<html" not in response.text
    assert "Terminée" in response.text
    assert "En cours" not in response.text


def test_create_fragment(client, db):
    response = client.post(
        "/ui/tasks",
        data={"title": "Depuis le formulaire", "description": "", "due_date": "2026-02-03", "status": ""},
    )
    assert response.status_code == 201
    assert "Depuis le formulaire" in response.text

    task = db.query(Task).one()
    assert task.status == "pending"
    assert task.due_date == date(2026, 2, 3)
    assert task.description is None


def test_create_fragment_empty_title(client, db):
    response = client.post("/ui/tasks", data={"title": ""})
    assert response.status_code == 400
    assert 'class="error"' in response.text
    assert db.query(Task).count() == 0


def test_create_fragment_invalid_status(client, db):
    response = client.post("/ui/tasks", data={"title": "X", "status": "bogus"})
    assert response.status_code == 400
    assert "invalid status" in response.text
    assert db.query(Task).count() == 0


def test_complete_fragment(client, make_task):
    task = make_task(title="À finir")
    response = client.post(f"/ui/tasks/{task['id']}/complete")
    assert response.status_code == 200
    assert "[done]" in response.text
    assert client.get(f"/tasks/{task['id']}").json()["status"] == "done"


def test_complete_fragment_not_found(client):
    response = client.post("/ui/tasks/99/complete")
    assert response.status_code == 404
    assert "task not found" in response.text


def test_delete_fragment(client, make_task):
    keep = make_task(title="Garder")
    drop = make_task(title="Jeter")
    response = client.post(f"/ui/tasks/{drop['id']}/delete")
    assert response.status_code == 200
    assert "Jeter" not in response.text
    assert "Garder" in response.text
    assert client.get(f"/tasks/{keep['id']}").status_code == 200


def test_delete_fragment_not_found(client):
    response = client.post("/ui/tasks/99/delete")
    assert response.status_code == 404


def test_classic_add_redirects(client, db):
    response = client.post(
        "/add",
        data={"title": "Classique", "description": "sans JS", "due_date": "pas une date"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/"

    task = db.query(Task).one()
    assert task.title == "Classique"
    assert task.status == "pending"
    assert task.due_date is None


def test_classic_add_empty_title(client, db):
    response = client.post("/add", data={"title": ""}, follow_redirects=False)
    assert response.status_code == 400
    assert "title is required" in response.text
    assert db.query(Task).count() == 0


def test_fragments_huge_task_id_not_found(client):
    huge = "99999999999999999999"
    assert client.post(f"/ui/tasks/{huge}/complete").status_code == 404
    assert client.post(f"/ui/tasks/{huge}/delete").status_code == 404
