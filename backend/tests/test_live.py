import asyncio
from contextlib import aclosing

import pytest
from sqlalchemy.exc import IntegrityError

from gainfunction.db import init_database, make_engine, make_session_factory
from gainfunction.live import observer_for
from gainfunction.repositories.template_repo import TemplateRepository
from gainfunction.schemas.exercise_log import ExerciseLogCreate
from gainfunction.schemas.set_entry import SetEntryCreate
from gainfunction.schemas.template import TemplateCreate
from gainfunction.schemas.workout import WorkoutCreate

async def test_first_snapshot_is_immediate(empty_container):
    empty_container.workouts.insert(WorkoutCreate(date=5))
    async with aclosing(empty_container.workouts.observe_all()) as stream:
        first = await asyncio.wait_for(anext(stream), 1)
    assert [w.date for w in first] == [5]


async def test_commit_pushes_fresh_ordered_snapshot(empty_container):
    repo = empty_container.workouts
    async with aclosing(repo.observe_all()) as stream:
        assert await anext(stream) == []
        repo.insert_many([WorkoutCreate(date=3), WorkoutCreate(date=1), WorkoutCreate(date=2)])
        snapshot = await asyncio.wait_for(anext(stream), 1)
    assert [w.date for w in snapshot] == [3, 2, 1]


async def test_parent_delete_wakes_cascaded_children(empty_container):
    c = empty_container
    wid = c.workouts.insert(WorkoutCreate(date=1))
    log_id = c.exercise_logs.insert(ExerciseLogCreate(workout_id=wid, exercise_name="Squat"))
    c.set_entries.insert(SetEntryCreate(exercise_log_id=log_id, set_number=1, reps=5, weight=60.0))

    async with aclosing(c.set_entries.observe_for_exercise_log(log_id)) as stream:
        assert len(await anext(stream)) == 1
        c.workouts.delete(c.workouts.get(wid))
        assert await asyncio.wait_for(anext(stream), 1) == []


async def test_bulk_delete_notifies(empty_container):
    c = empty_container
    wid = c.workouts.insert(WorkoutCreate(date=1))
    log_id = c.exercise_logs.insert(ExerciseLogCreate(workout_id=wid, exercise_name="Squat"))
    c.set_entries.insert(SetEntryCreate(exercise_log_id=log_id, set_number=1, reps=5, weight=60.0))

    async with aclosing(c.set_entries.observe_for_exercise_log(log_id)) as stream:
        await anext(stream)
        c.set_entries.delete_all_for_exercise_log(log_id)
        assert await asyncio.wait_for(anext(stream), 1) == []


async def test_closing_stream_unsubscribes(empty_container):
    observer = observer_for(empty_container.db)
    stream = empty_container.workouts.observe_all()
    await anext(stream)
    assert observer.subscriber_count == 1
    await stream.aclose()
    assert observer.subscriber_count == 0


def test_cascade_map_follows_foreign_keys(empty_container):
    observer = observer_for(empty_container.db)
    assert observer.expand({"workouts"}) == {"workouts", "exercise_logs", "set_entries"}
    assert observer.expand({"templates"}) == {"templates", "template_exercises"}
    assert observer.expand({"exercise_definitions"}) == {"exercise_definitions"}


async def _counting_subscriber(observer, *tables):
    calls = []

    async def consume():
        async for _ in observer.observe(lambda: calls.append(1), *tables):
            pass

    task = asyncio.create_task(consume())
    await asyncio.sleep(0.01)
    return calls, task


async def test_unrelated_table_does_not_wake_subscriber(empty_container):
    c = empty_container
    calls, task = await _counting_subscriber(observer_for(c.db), "workouts")
    try:
        c.templates.insert(TemplateCreate(name="Legs"))
        await asyncio.sleep(0.02)
        assert len(calls) == 1
        c.workouts.insert(WorkoutCreate(date=1))
        await asyncio.sleep(0.02)
        assert len(calls) == 2
    finally:
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)


async def test_rolled_back_write_does_not_notify(empty_container):
    c = empty_container
    calls, task = await _counting_subscriber(observer_for(c.db), "exercise_logs")
    try:
        with pytest.raises(IntegrityError):
            c.exercise_logs.insert(ExerciseLogCreate(workout_id=1, exercise_name="Squat"))
        await asyncio.sleep(0.02)
        assert len(calls) == 1
    finally:
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)


async def test_burst_of_commits_is_conflated(empty_container):
    c = empty_container
    calls, task = await _counting_subscriber(observer_for(c.db), "workouts")
    try:
        for d in range(5):
            c.workouts.insert(WorkoutCreate(date=d))
        await asyncio.sleep(0.02)
        assert len(calls) == 2
    finally:
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)


async def test_engines_on_same_file_share_notifications(tmp_path):
    url = f"sqlite:///{tmp_path / 'shared.db'}"
    reader_engine, writer_engine = make_engine(url), make_engine(url)
    reader_factory = make_session_factory(reader_engine)
    writer_factory = make_session_factory(writer_engine)
    init_database(reader_engine, reader_factory, schema_version=1, seed=False)
    reader, writer = reader_factory(), writer_factory()
    try:
        assert observer_for(reader) is observer_for(writer)
        async with aclosing(TemplateRepository(reader).observe_all()) as stream:
            assert await anext(stream) == []
            TemplateRepository(writer).insert(TemplateCreate(name="Legs"))
            snapshot = await asyncio.wait_for(anext(stream), 1)
        assert [t.name for t in snapshot] == ["Legs"]
    finally:
        reader.close()
        writer.close()
        reader_engine.dispose()
        writer_engine.dispose()


def test_in_memory_engines_get_separate_observers():
    first = make_session_factory(make_engine("sqlite://"))
    second = make_session_factory(make_engine("sqlite://"))
    assert observer_for(first()) is not observer_for(second())
