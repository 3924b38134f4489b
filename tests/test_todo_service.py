import logging
from datetime import datetime, timezone

import pytest

from todos.adapters.memory.todo_storage import InMemoryTodoStorage
from todos.domain.enums import TaskStatus
from todos.domain.errors import DomainError, InvalidStatusError, TaskNotFoundError
from todos.domain.task import Task, TaskId
from todos.services.todo_service import TodoService


class FakeClock:
    def __init__(self, fixed: datetime | None = None):
        # jeśli nie podamy fixed, zwróci zawsze ten sam „teraz”
        self.fixed = fixed or datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    def now(self) -> datetime:
        return self.fixed


@pytest.fixture
def storage():
    return InMemoryTodoStorage()


@pytest.fixture
def service(storage):
    return TodoService(storage, FakeClock())


def test_add_task_persists(service, storage):
    # Act
    task = service.add_task("Kup mleko", assigned_to="ola")

    # Assert
    assert task.task_id == 1
    assert storage.saves == 1
    assert storage.records == [
        {"id": 1, "task": "Kup mleko", "status": "Not Started", "priority": "Low", "assignedTo": "ola"}
    ]


def test_ids_survive_round_trips(service):
    t1 = service.add_task("A")
    t2 = service.add_task("B")
    service.delete_task(t1.task_id)
    t3 = service.add_task("C")

    assert (t1.task_id, t2.task_id, t3.task_id) == (1, 2, 3)
    items, _ = service.list_tasks()
    assert [t.task_id for t in items] == [2, 3]


def test_update_status_parses_raw_text_and_uses_clock(service):
    t = service.add_task("A")

    done = service.update_status(t.task_id, "✅ Completed")

    assert done.status == TaskStatus.COMPLETED
    assert done.completed_at == service.clock.fixed
    task, _ = service.get_task(t.task_id)
    assert task.completed_at == service.clock.fixed


def test_reopening_clears_completed_at(service):
    t = service.add_task("A")
    service.update_status(t.task_id, TaskStatus.COMPLETED)

    reopened = service.update_status(t.task_id, "not started")

    assert reopened.completed_at is None
    task, _ = service.get_task(t.task_id)
    assert task.completed_at is None


def test_invalid_status_does_not_touch_storage(service, storage):
    t = service.add_task("A")

    with pytest.raises(InvalidStatusError):
        service.update_status(t.task_id, "frobnicate")

    assert storage.saves == 1


def test_missing_id_raises_and_does_not_save(service, storage):
    service.add_task("A")
    snapshot = storage.records

    with pytest.raises(TaskNotFoundError):
        service.edit_title(TaskId(9), "x")
    with pytest.raises(TaskNotFoundError):
        service.update_status(TaskId(9), "done")
    with pytest.raises(TaskNotFoundError):
        service.delete_task(TaskId(9))
    with pytest.raises(TaskNotFoundError):
        service.get_task(TaskId(9))

    assert storage.saves == 1
    assert storage.records == snapshot


def test_edit_title(service):
    t = service.add_task("A")
    service.edit_title(t.task_id, "B: with colon")

    task, _ = service.get_task(t.task_id)
    assert task.title == "B: with colon"


def test_mutation_without_save_is_lost(storage):
    # load → mutacja bez save → ponowny load nie widzi zmiany
    todos = storage.load()
    todos.add("lost")
    assert len(storage.load()) == 0


def test_list_tasks_filters():
    storage = InMemoryTodoStorage([
        Task(task_id=TaskId(1), title="a"),
        Task(task_id=TaskId(2), title="b", depends_on=[TaskId(1)]),
        Task(task_id=TaskId(3), title="c", status=TaskStatus.IN_PROGRESS),
    ])
    service = TodoService(storage, FakeClock())

    items, todos = service.list_tasks(status="in progress")
    assert [t.task_id for t in items] == [3]
    assert len(todos) == 3

    items, _ = service.list_tasks(ready_only=True)
    assert [t.task_id for t in items] == [1, 3]

    items, _ = service.list_tasks(status="todo", ready_only=True)
    assert [t.task_id for t in items] == [1]

    with pytest.raises(InvalidStatusError):
        service.list_tasks(status="whatever")

    assert storage.saves == 0


def test_scenario(service):
    assert service.add_task("Write spec").task_id == 1
    assert service.add_task("Review spec").task_id == 2

    task = service.update_status(TaskId(2), "in progress")
    assert task.status == TaskStatus.IN_PROGRESS
    assert task.completed_at is None

    service.delete_task(TaskId(1))
    items, _ = service.list_tasks()
    assert [t.task_id for t in items] == [2]
    with pytest.raises(TaskNotFoundError):
        service.get_task(TaskId(1))


@pytest.mark.parametrize(
    "call",
    [
        lambda svc: svc.update_status(TaskId(1), "frobnicate"),
        lambda svc: svc.update_status(TaskId(9), "done"),
        lambda svc: svc.get_task(TaskId(9)),
        lambda svc: svc.list_tasks(status="whatever"),
        lambda svc: svc.edit_title(TaskId(9), "x"),
        lambda svc: svc.delete_task(TaskId(9)),
    ],
)
def test_failures_are_logged_as_warnings(service, caplog, call):
    service.add_task("A")

    with caplog.at_level(logging.WARNING, logger="todos.services.todo_service"):
        with pytest.raises(DomainError):
            call(service)

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert warnings[0].name == "todos.services.todo_service"
