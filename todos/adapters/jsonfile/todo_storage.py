import json
import logging
import os
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from todos.domain.enums import TaskPriority, TaskStatus
from todos.domain.errors import StorageError, TaskValidationError
from todos.domain.task import Task, TaskId
from todos.domain.todo_list import TodoList
from todos.ports.todo_storage import TodoStorage

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path("todos.json")


def encode_task(task: Task) -> dict[str, Any]:
    """Task -> dict w kształcie dokumentu; klucze opcjonalne pomijane, gdy puste."""
    rec: dict[str, Any] = {
        "id": int(task.task_id),
        "task": task.title,
        "status": task.status.value,
        "priority": task.priority.value,
        "assignedTo": task.assigned_to,
    }
    if task.due_date is not None:
        rec["dueDate"] = task.due_date.isoformat()
    if task.estimated_time is not None:
        rec["estimatedTime"] = int(task.estimated_time.total_seconds())
    if task.time_spent is not None:
        rec["timeSpent"] = int(task.time_spent.total_seconds())
    if task.completed_at is not None:
        rec["completedAt"] = _encode_utc_z(task.completed_at)
    if task.depends_on:
        rec["dependsOn"] = [int(d) for d in task.depends_on]
    return rec


def decode_task(rec: dict[str, Any]) -> Task:
    """dict -> Task. Rzuca KeyError/ValueError/TypeError przy uszkodzonym rekordzie."""
    status = TaskStatus(rec["status"])
    completed_at = _parse_utc_z(rec["completedAt"]) if "completedAt" in rec else None
    if (status == TaskStatus.COMPLETED) != (completed_at is not None):
        raise ValueError("completedAt must be present if and only if status is Completed")

    return Task(
        task_id=TaskId(int(rec["id"])),
        title=rec["task"],
        status=status,
        priority=TaskPriority(rec.get("priority", TaskPriority.LOW.value)),
        assigned_to=rec.get("assignedTo", ""),
        due_date=date.fromisoformat(rec["dueDate"]) if "dueDate" in rec else None,
        estimated_time=timedelta(seconds=rec["estimatedTime"]) if "estimatedTime" in rec else None,
        time_spent=timedelta(seconds=rec["timeSpent"]) if "timeSpent" in rec else None,
        completed_at=completed_at,
        depends_on=[TaskId(int(d)) for d in rec.get("dependsOn", [])],
    )


def decode_records(records: Any, source: str) -> TodoList:
    """Lista rekordów -> TodoList z walidacją unikalności id."""
    if not isinstance(records, list):
        raise TaskValidationError("document", f"{source}: expected a JSON array")

    tasks: list[Task] = []
    seen: set[int] = set()
    for index, rec in enumerate(records):
        try:
            task = decode_task(rec)
        except (KeyError, ValueError, TypeError) as e:
            raise TaskValidationError("record", f"{source}[{index}]: {e}")
        if task.task_id in seen:
            raise TaskValidationError("record", f"{source}[{index}]: duplicate id {task.task_id}")
        if task.task_id < 1:
            raise TaskValidationError("id", f"{source}[{index}]: id must be positive")
        seen.add(task.task_id)
        tasks.append(task)
    return TodoList(tasks)


def _encode_utc_z(dt: datetime) -> str:
    # ISO 8601 w UTC z sufiksem 'Z'
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _parse_utc_z(s: str) -> datetime:
    """Parsuje datę w formacie ISO8601 zakończoną literą 'Z' (UTC)."""
    if not isinstance(s, str) or not s.endswith("Z"):
        raise ValueError("completedAt must be ISO8601 UTC with 'Z'")
    return datetime.fromisoformat(s.replace("Z", "+00:00")).astimezone(timezone.utc)


class JsonTodoStorage(TodoStorage):
    def __init__(self, path: Path = DEFAULT_PATH) -> None:
        """Inicjalizuje magazyn JSON.
        Tworzy katalog nadrzędny dla pliku, jeśli nie istnieje."""
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def load(self) -> TodoList:
        """Wczytuje dokument (tablicę JSON). Brak pliku → pusta lista."""
        try:
            with self.path.open("r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            logger.debug("no storage file at %s, starting empty", self.path)
            return TodoList()
        except OSError as e:
            raise StorageError(str(e))

        if not raw.strip():
            return TodoList()
        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            raise TaskValidationError("document", f"{self.path.name}: invalid JSON: {e}")

        todos = decode_records(records, self.path.name)
        logger.debug("loaded %d task(s) from %s", len(todos), self.path)
        return todos

    def save(self, todos: TodoList) -> None:
        """Zapis atomowy: plik .swap → fsync → os.replace."""
        tmp = self.path.with_suffix(self.path.suffix + ".swap")
        try:
            with tmp.open("w", encoding="utf-8", newline="\n") as f:
                json.dump([encode_task(t) for t in todos], f, ensure_ascii=False, indent=4)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except OSError as e:
            try:
                if tmp.exists():
                    tmp.unlink()
            except OSError:
                logger.warning("could not remove temporary file %s", tmp)
            raise StorageError(str(e))
        logger.debug("saved %d task(s) to %s", len(todos), self.path)
