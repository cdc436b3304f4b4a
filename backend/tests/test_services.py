from gainfunction.schemas.template import TemplateCreate


# ExerciseService

def test_add_custom_exercise_on_empty_store(empty_container):
    service = empty_container.exercise_service
    assert service.add_custom_exercise("Bench Press") is True
    assert service.get_exercise("Bench Press").is_custom is True

def test_add_custom_exercise_duplicate_is_rejected_without_write(container):
    service = container.exercise_service
    before = container.exercise_definitions.list_all()
    assert service.add_custom_exercise("Bench Press") is False
    assert container.exercise_definitions.list_all() == before
    assert service.get_exercise("Bench Press").is_custom is False

def test_add_custom_exercise_trims_and_is_case_sensitive(container):
    service = container.exercise_service
    assert service.add_custom_exercise("  bench press  ") is True
    assert service.get_exercise("bench press").is_custom is True
    assert service.add_custom_exercise("bench press ") is False


# TemplateService

def test_create_get_update_template(empty_container):
    service = empty_container.template_service
    tid = service.create_template("Push", "chest day")
    template = service.get_template_by_id(tid)
    assert (template.name, template.description) == ("Push", "chest day")

    service.update_template(template.model_copy(update={"name": "Push A", "description": None}))
    assert service.get_template_by_id(tid).name == "Push A"
    assert service.get_template_by_id(tid).description is None

def test_add_exercise_pair_twice_keeps_first(empty_container):
    service = empty_container.template_service
    tid = service.create_template("Legs")
    assert service.add_exercise_to_template(tid, "Squat", 3, 8, 100.0) is True
    assert service.add_exercise_to_template(tid, "Squat", 5, 5, 140.0) is False

    entry = service.template_exercises.get(tid, "Squat")
    assert (entry.default_sets, entry.default_reps, entry.default_weight) == (3, 8, 100.0)

def test_same_exercise_allowed_in_different_templates(empty_container):
    service = empty_container.template_service
    a = service.create_template("A")
    b = service.create_template("B")
    assert service.add_exercise_to_template(a, "Squat", 3, 8, 100.0)
    assert service.add_exercise_to_template(b, "Squat", 3, 8, 100.0)

def test_added_exercises_are_appended_in_order(empty_container):
    service = empty_container.template_service
    tid = service.create_template("Full Body")
    for name in ("Squat", "Bench Press", "Deadlift"):
        service.add_exercise_to_template(tid, name, 3, 5, 80.0)
    entries = service.template_exercises.list_for_template(tid)
    assert [(e.exercise_name, e.order_position) for e in entries] == [
        ("Squat", 0), ("Bench Press", 1), ("Deadlift", 2),
    ]

def test_move_exercise(empty_container):
    service = empty_container.template_service
    tid = service.create_template("Full Body")
    for name in ("Squat", "Bench Press"):
        service.add_exercise_to_template(tid, name, 3, 5, 80.0)
    service.move_exercise(tid, "Bench Press", -1)
    assert service.template_exercises.list_for_template(tid)[0].exercise_name == "Bench Press"

def test_remove_and_update_template_exercise(empty_container):
    service = empty_container.template_service
    tid = service.create_template("Legs")
    service.add_exercise_to_template(tid, "Squat", 3, 8, 100.0)
    service.add_exercise_to_template(tid, "Lunge", 3, 12, 20.0)

    entry = service.template_exercises.get(tid, "Lunge")
    service.update_template_exercise(entry.model_copy(update={"default_reps": 10}))
    assert service.template_exercises.get(tid, "Lunge").default_reps == 10

    assert service.remove_exercise_from_template(tid, "Squat") is True
    assert service.remove_exercise_from_template(tid, "Squat") is False
    assert [e.exercise_name for e in service.template_exercises.list_for_template(tid)] == ["Lunge"]

def test_delete_template_removes_entries(empty_container):
    service = empty_container.template_service
    tid = service.create_template("Legs")
    service.add_exercise_to_template(tid, "Squat", 3, 8, 100.0)
    service.delete_template(service.get_template_by_id(tid))
    assert service.get_template_by_id(tid) is None
    assert service.template_exercises.count_for_template(tid) == 0

def test_search_templates(empty_container):
    c = empty_container
    c.templates.insert_many([TemplateCreate(name="Push Day"), TemplateCreate(name="Pull Day")])
    assert [t.name for t in c.template_service.search_templates("push")] == ["Push Day"]
