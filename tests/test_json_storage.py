import json
from datetime import date, datetime, timedelta, timezone

import pytest

from todos.adapters.jsonfile.todo_storage import JsonTodoStorage
from todos.domain.enums import TaskPriority, TaskStatus
from todos.domain.errors import TaskValidationError
from todos.domain.task import Task, TaskId
from todos.domain.todo_list import TodoList


@pytest.fixture
def tmp_storage(tmp_path):
    """Magazyn na świeżym pliku w katalogu tymczasowym."""
    return JsonTodoStorage(tmp_path / "data" / "todos.json")


def full_task() -> Task:
    return Task(
        task_id=TaskId(4),
        title="Zażółć gęślą jaźń",
        status=TaskStatus.COMPLETED,
        priority=TaskPriority.HIGH,
        assigned_to="ola",
        due_date=date(2025, 3, 1),
        estimated_time=timedelta(hours=1, minutes=30),
        time_spent=timedelta(minutes=45),
        completed_at=datetime(2025, 2, 28, 18, 0, tzinfo=timezone.utc),
        depends_on=[TaskId(1), TaskId(2)],
    )


def test_missing_file_loads_empty(tmp_storage):
    todos = tmp_storage.load()
    assert len(todos) == 0
    assert not tmp_storage.path.exists()


def test_save_then_load_keeps_order_and_fields(tmp_storage):
    # Arrange
    todos = TodoList([Task(task_id=TaskId(9), title="last id first"), full_task()])
    todos.add("plain")

    # Act
    tmp_storage.save(todos)
    loaded = tmp_storage.load()

    # Assert
    assert list(loaded) == list(todos)
    assert [t.task_id for t in loaded] == [9, 4, 10]


def test_optional_keys_are_omitted_not_null(tmp_storage):
    todos = TodoList()
    todos.add("plain")
    tmp_storage.save(todos)

    document = json.loads(tmp_storage.path.read_text(encoding="utf-8"))

    assert document == [
        {"id": 1, "task": "plain", "status": "Not Started", "priority": "Low", "assignedTo": ""}
    ]


def test_document_shape_for_full_task(tmp_storage):
    tmp_storage.save(TodoList([full_task()]))

    record = json.loads(tmp_storage.path.read_text(encoding="utf-8"))[0]

    assert record["dueDate"] == "2025-03-01"
    assert record["estimatedTime"] == 5400
    assert record["timeSpent"] == 2700
    assert record["completedAt"] == "2025-02-28T18:00:00Z"
    assert record["dependsOn"] == [1, 2]
    assert record["task"] == "Zażółć gęślą jaźń"


def test_save_is_atomic_and_leaves_no_swap_file(tmp_storage):
    tmp_storage.save(TodoList([full_task()]))
    swap = tmp_storage.path.with_suffix(tmp_storage.path.suffix + ".swap")
    assert tmp_storage.path.exists()
    assert not swap.exists()


def test_invalid_json_raises_validation_error(tmp_storage):
    tmp_storage.path.write_text("[{not json", encoding="utf-8")
    with pytest.raises(TaskValidationError):
        tmp_storage.load()


def test_duplicate_ids_are_rejected(tmp_storage):
    rec = {"id": 1, "task": "a", "status": "Not Started", "priority": "Low", "assignedTo": ""}
    tmp_storage.path.write_text(json.dumps([rec, rec]), encoding="utf-8")
    with pytest.raises(TaskValidationError):
        tmp_storage.load()


@pytest.mark.parametrize(
    "record",
    [
        {"id": 1, "task": "a", "status": "Completed", "priority": "Low", "assignedTo": ""},
        {"id": 1, "task": "a", "status": "Not Started", "priority": "Low", "assignedTo": "",
         "completedAt": "2025-01-01T00:00:00Z"},
        {"id": 1, "task": "a", "status": "Frobnicated", "priority": "Low", "assignedTo": ""},
        {"task": "no id", "status": "Not Started"},
        {"id": 0, "task": "zero", "status": "Not Started"},
    ],
)
def test_broken_records_are_rejected(tmp_storage, record):
    tmp_storage.path.write_text(json.dumps([record]), encoding="utf-8")
    with pytest.raises(TaskValidationError):
        tmp_storage.load()


def test_non_array_document_is_rejected(tmp_storage):
    tmp_storage.path.write_text(json.dumps({"todos": []}), encoding="utf-8")
    with pytest.raises(TaskValidationError):
        tmp_storage.load()
