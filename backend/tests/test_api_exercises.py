def test_list_exercises(client):
    r = client.get("/exercises")
    assert r.status_code == 200
    names = [e["name"] for e in r.json()]
    assert names == sorted(names)
    assert "Bench Press" in names


def test_add_custom_exercise_and_filter(client):
    r = client.post("/exercises", json={"name": "  Zercher Squat  "})
    assert r.status_code == 201, r.text
    assert r.json() == {"name": "Zercher Squat", "is_custom": True}

    custom = client.get("/exercises", params={"custom": "true"}).json()
    assert [e["name"] for e in custom] == ["Zercher Squat"]
    builtin = client.get("/exercises", params={"custom": "false"}).json()
    assert all(not e["is_custom"] for e in builtin)
    assert "Zercher Squat" not in {e["name"] for e in builtin}


def test_add_duplicate_exercise_400(client):
    r = client.post("/exercises", json={"name": "Bench Press"})
    assert r.status_code == 400
    assert r.json()["detail"] == "exercise already exists"


def test_add_exercise_name_validation_422(client):
    assert client.post("/exercises", json={"name": "   "}).status_code == 422
    assert client.post("/exercises", json={"name": "x" * 51}).status_code == 422


def test_get_exercise(client):
    assert client.get("/exercises/Squat").json() == {"name": "Squat", "is_custom": False}
    assert client.get("/exercises/Nope").status_code == 404


def test_exercise_history_newest_first(client):
    older = client.post("/workouts", json={"date": 1_000}).json()["id"]
    newer = client.post("/workouts", json={"date": 2_000}).json()["id"]
    client.post(f"/workouts/{older}/exercises", json={"exercise_name": "Squat"})
    client.post(f"/workouts/{newer}/exercises", json={"exercise_name": "Squat"})
    client.post(f"/workouts/{newer}/exercises", json={"exercise_name": "Deadlift"})

    history = client.get("/exercises/Squat/history").json()
    assert [h["workout_id"] for h in history] == [newer, older]
