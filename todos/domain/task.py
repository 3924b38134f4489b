from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import TYPE_CHECKING, NewType, Optional

from todos.domain.enums import TaskPriority, TaskStatus

if TYPE_CHECKING:
    from todos.domain.todo_list import TodoList

TaskId = NewType("TaskId", int)


@dataclass
class Task:
    """
    Model domenowy pojedynczego zadania.

    Pola opcjonalne (`due_date`, `estimated_time`, `time_spent`, `completed_at`)
    mają wartość `None`, gdy są nieustawione: nigdy "zerowe" wartości zastępcze.
    `completed_at` jest ustawione wtedy i tylko wtedy, gdy `status == COMPLETED`.
    """
    task_id: TaskId
    title: str
    status: TaskStatus = TaskStatus.NOT_STARTED
    priority: TaskPriority = TaskPriority.LOW
    assigned_to: str = ""
    due_date: Optional[date] = None
    estimated_time: Optional[timedelta] = None
    time_spent: Optional[timedelta] = None
    completed_at: Optional[datetime] = None
    depends_on: list[TaskId] = field(default_factory=list)

    def is_complete(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    def can_start(self, todos: TodoList) -> bool:
        """
            Czy wszystkie zależności zadania są ukończone.

            - Brak zależności → True.
            - Id, którego nie ma w kolekcji, traktujemy jako niespełnione (False),
            a nie jako błąd: gotowość jest tylko podpowiedzią.
            - Zadanie zależne od samego siebie nigdy nie wystartuje, dopóki nie jest ukończone.
        """
        for dep_id in self.depends_on:
            dep = todos.get(dep_id)
            if dep is None or not dep.is_complete():
                return False
        return True

    def mark_complete(self, now: datetime | None = None) -> None:
        """Ustawia status Completed i znacznik czasu ukończenia (zawsze odświeżany)."""
        self.status = TaskStatus.COMPLETED
        self.completed_at = now or datetime.now(timezone.utc)
