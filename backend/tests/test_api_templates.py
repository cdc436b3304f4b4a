def _create(client, name="Push", description=None):
    r = client.post("/templates", json={"name": name, "description": description})
    assert r.status_code == 201, r.text
    return r.json()


def test_template_crud(client):
    created = _create(client, " Push ", "chest")
    assert created["name"] == "Push"
    tid = created["id"]

    assert client.get(f"/templates/{tid}").json() == created

    r = client.put(f"/templates/{tid}", json={"name": "Push Heavy", "description": None})
    assert r.status_code == 200
    assert r.json() == {"id": tid, "name": "Push Heavy", "description": None}

    assert client.delete(f"/templates/{tid}").status_code == 204
    assert client.get(f"/templates/{tid}").status_code == 404
    assert client.delete(f"/templates/{tid}").status_code == 404


def test_template_name_validation_422(client):
    assert client.post("/templates", json={"name": ""}).status_code == 422
    assert client.post("/templates", json={"name": "x" * 51}).status_code == 422


def test_list_and_search_templates(client):
    for name in ("Push", "Pull", "Legs"):
        _create(client, name)
    assert [t["name"] for t in client.get("/templates").json()] == ["Legs", "Pull", "Push"]
    assert [t["name"] for t in client.get("/templates", params={"q": "pu"}).json()] == ["Pull", "Push"]


def test_template_exercises(client):
    tid = _create(client)["id"]
    body = {"exercise_name": "Bench Press", "default_sets": 5, "default_reps": 5, "default_weight": 100}
    r = client.post(f"/templates/{tid}/exercises", json=body)
    assert r.status_code == 201, r.text
    assert r.json() == {
        "template_id": tid,
        "exercise_name": "Bench Press",
        "default_sets": 5,
        "default_reps": 5,
        "default_weight": 100.0,
        "order_position": 0,
    }

    r = client.post(f"/templates/{tid}/exercises", json={**body, "default_weight": 50})
    assert r.status_code == 400

    client.post(f"/templates/{tid}/exercises", json={"exercise_name": "Dips", "default_weight": 10})
    entries = client.get(f"/templates/{tid}/exercises").json()
    assert [(e["exercise_name"], e["order_position"]) for e in entries] == [("Bench Press", 0), ("Dips", 1)]
    assert entries[0]["default_weight"] == 100.0

    r = client.patch(f"/templates/{tid}/exercises/Dips", json={"default_reps": 15})
    assert r.status_code == 200
    assert r.json()["default_reps"] == 15
    assert r.json()["default_weight"] == 10.0

    assert client.delete(f"/templates/{tid}/exercises/Dips").status_code == 204
    assert client.delete(f"/templates/{tid}/exercises/Dips").status_code == 404
    assert client.patch(f"/templates/{tid}/exercises/Dips", json={"default_reps": 1}).status_code == 404


def test_template_exercise_requires_positive_weight(client):
    tid = _create(client)["id"]
    r = client.post(f"/templates/{tid}/exercises", json={"exercise_name": "Squat", "default_weight": 0})
    assert r.status_code == 422
    r = client.post(f"/templates/{tid}/exercises", json={"exercise_name": "Squat"})
    assert r.status_code == 422


def test_exercises_of_missing_template_404(client):
    assert client.get("/templates/999/exercises").status_code == 404
    r = client.post("/templates/999/exercises", json={"exercise_name": "Squat", "default_weight": 20})
    assert r.status_code == 404


def test_delete_template_removes_its_exercises(client, container):
    tid = _create(client)["id"]
    client.post(f"/templates/{tid}/exercises", json={"exercise_name": "Squat", "default_weight": 20})
    client.delete(f"/templates/{tid}")
    assert container.template_exercises.count_for_template(tid) == 0
