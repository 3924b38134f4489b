from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import sqlalchemy as db
from sqlalchemy.exc import SQLAlchemyError

from todos.domain.enums import TaskPriority, TaskStatus
from todos.domain.errors import StorageError, TaskValidationError
from todos.domain.task import Task, TaskId
from todos.domain.todo_list import TodoList
from todos.ports.todo_storage import TodoStorage

logger = logging.getLogger(__name__)


class SqlTodoStorage(TodoStorage):
    def __init__(self, url: str | Path) -> None:
        """
        url: np. 'sqlite:///data/todos.db' lub Path do pliku (zostanie zrobiony URL)
        """
        if isinstance(url, Path):
            url.parent.mkdir(parents=True, exist_ok=True)
            db_url = f"sqlite:///{url}"
        else:
            db_url = url

        self.engine = db.create_engine(db_url, future=True)
        self.meta = db.MetaData()

        # `position` trzyma kolejność dodawania; id nie musi z nią iść w parze
        self.todos = db.Table(
            "todos",
            self.meta,
            db.Column("id", db.Integer, primary_key=True, autoincrement=False),
            db.Column("position", db.Integer, nullable=False),
            db.Column("task", db.String, nullable=False),
            db.Column("status", db.String, nullable=False),
            db.Column("priority", db.String, nullable=False),
            db.Column("assigned_to", db.String, nullable=False, default=""),
            db.Column("due_date", db.String, nullable=True),        # YYYY-MM-DD
            db.Column("estimated_time", db.Integer, nullable=True),  # sekundy
            db.Column("time_spent", db.Integer, nullable=True),      # sekundy
            db.Column("completed_at", db.String, nullable=True),    # ISO8601 '...Z'
            db.Column("depends_on", db.String, nullable=True),      # "2,3"
        )

        try:
            self.meta.create_all(self.engine)
        except SQLAlchemyError as e:
            raise StorageError(str(e))

    def _encode_dt(self, dt: datetime) -> str:
        # ISO 8601 w UTC z sufiksem 'Z'
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")

    def _decode_dt(self, s: str) -> datetime:
        # '...Z' -> aware UTC
        return datetime.fromisoformat(s.replace("Z", "+00:00")).astimezone(timezone.utc)

    def _to_row(self, task: Task, position: int) -> dict:
        return {
            "id": int(task.task_id),
            "position": position,
            "task": task.title,
            "status": task.status.value,
            "priority": task.priority.value,
            "assigned_to": task.assigned_to,
            "due_date": task.due_date.isoformat() if task.due_date else None,
            "estimated_time": int(task.estimated_time.total_seconds()) if task.estimated_time is not None else None,
            "time_spent": int(task.time_spent.total_seconds()) if task.time_spent is not None else None,
            "completed_at": self._encode_dt(task.completed_at) if task.completed_at else None,
            "depends_on": ",".join(str(d) for d in task.depends_on) or None,
        }

    def _from_row(self, row) -> Task:
        status = TaskStatus(row["status"])
        completed_at = self._decode_dt(row["completed_at"]) if row["completed_at"] else None
        if (status == TaskStatus.COMPLETED) != (completed_at is not None):
            raise ValueError("completed_at must be set if and only if status is Completed")

        return Task(
            task_id=TaskId(row["id"]),
            title=row["task"],
            status=status,
            priority=TaskPriority(row["priority"]),
            assigned_to=row["assigned_to"] or "",
            due_date=date.fromisoformat(row["due_date"]) if row["due_date"] else None,
            estimated_time=timedelta(seconds=row["estimated_time"]) if row["estimated_time"] is not None else None,
            time_spent=timedelta(seconds=row["time_spent"]) if row["time_spent"] is not None else None,
            completed_at=completed_at,
            depends_on=[TaskId(int(d)) for d in row["depends_on"].split(",")] if row["depends_on"] else [],
        )

    def load(self) -> TodoList:
        stmt = db.select(self.todos).order_by(self.todos.c.position.asc())
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(stmt).mappings().all()
        except SQLAlchemyError as e:
            raise StorageError(str(e))

        tasks = []
        for row in rows:
            try:
                tasks.append(self._from_row(row))
            except (KeyError, ValueError) as e:
                raise TaskValidationError("record", f"todos.id={row['id']}: {e}")
        logger.debug("loaded %d task(s) from %s", len(tasks), self.engine.url)
        return TodoList(tasks)

    def save(self, todos: TodoList) -> None:
        """Podmienia całą tabelę w jednej transakcji."""
        rows = [self._to_row(t, position) for position, t in enumerate(todos)]
        try:
            with self.engine.begin() as conn:
                conn.execute(db.delete(self.todos))
                if rows:
                    conn.execute(db.insert(self.todos), rows)
        except SQLAlchemyError as e:
            raise StorageError(str(e))
        logger.debug("saved %d task(s) to %s", len(rows), self.engine.url)
