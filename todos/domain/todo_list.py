from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Iterator, Optional

from todos.domain.enums import TaskPriority, TaskStatus
from todos.domain.errors import TaskNotFoundError
from todos.domain.task import Task, TaskId


### COMMENTS
# ==========================================================
# Kolekcja zadań (domain/todo_list.py).
# ==========================================================
# - Uporządkowana lista `Task` w kolejności dodawania.
# - Jedyne miejsce, które nadaje identyfikatory: max(id) + 1 (albo 1 dla pustej listy).
# - Wyszukiwanie po id to zwykły skan liniowy: listy są małe, osobiste.
# - Każda operacja modyfikuje najwyżej jedno zadanie; tylko `delete` przesuwa pozycje.
# - Brak zadania → TaskNotFoundError, a kolekcja zostaje nietknięta.
# - Zależności (`depends_on`) nie są sprzątane przy usuwaniu: "wiszące" id
#   obsługuje tolerancyjnie `Task.can_start`.


class TodoList:
    """
        Uporządkowana kolekcja zadań.

        :param tasks: Opcjonalne zadania startowe (np. wczytane z pliku).
        Kolejność iteracji = kolejność w `tasks`.
    """
    def __init__(self, tasks: Iterable[Task] | None = None) -> None:
        self._tasks: list[Task] = list(tasks or [])

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __getitem__(self, index: int) -> Task:
        return self._tasks[index]

    def __repr__(self) -> str:
        return f"TodoList({self._tasks!r})"

    def get(self, task_id: TaskId) -> Optional[Task]:
        """Zwraca zadanie o podanym id albo `None` (bez błędu)."""
        for task in self._tasks:
            if task.task_id == task_id:
                return task
        return None

    def find_by_id(self, task_id: TaskId) -> Task:
        """
            Zwraca zadanie o podanym identyfikatorze.

            :raises TaskNotFoundError: Gdy nie ma zadania z tym id.
        """
        task = self.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def find_index_by_id(self, task_id: TaskId) -> int:
        """
            Zwraca pozycję zadania w kolekcji.

            :raises TaskNotFoundError: Gdy nie ma zadania z tym id.
        """
        for index, task in enumerate(self._tasks):
            if task.task_id == task_id:
                return index
        raise TaskNotFoundError(task_id)

    def next_id(self) -> TaskId:
        return TaskId(max((t.task_id for t in self._tasks), default=0) + 1)

    def add(self, title: str, assigned_to: str = "") -> Task:
        """
            Dodaje nowe zadanie na końcu listy.

            - Id = największe istniejące id + 1 (1 dla pustej listy).
            - Status startowy: Not Started, priorytet: Low, pola opcjonalne puste.
            - Pusty tytuł jest dozwolony; operacja nie ma ścieżki błędu.

            :return: Utworzony obiekt `Task`.
        """
        task = Task(
            task_id=self.next_id(),
            title=title,
            status=TaskStatus.NOT_STARTED,
            priority=TaskPriority.LOW,
            assigned_to=assigned_to,
        )
        self._tasks.append(task)
        return task

    def delete(self, task_id: TaskId) -> Task:
        """
            Usuwa dokładnie jedno zadanie; kolejność pozostałych się nie zmienia.

            :raises TaskNotFoundError: Gdy nie ma zadania z tym id (lista bez zmian).
            :return: Usunięty obiekt `Task`.
        """
        index = self.find_index_by_id(task_id)
        return self._tasks.pop(index)

    def edit_title(self, task_id: TaskId, title: str) -> Task:
        """Podmienia tytuł; pozostałe pola bez zmian."""
        task = self._tasks[self.find_index_by_id(task_id)]
        task.title = title
        return task

    def update_status(self, task_id: TaskId, status: TaskStatus, now: datetime | None = None) -> Task:
        """
            Zmienia status zadania, pilnując niezmiennika `completed_at`.

            - Wejście w Completed: `completed_at = now`.
            - Completed → Completed: poprzedni znacznik zostaje (uzupełniany tylko, gdy go brak).
            - Wyjście z Completed: `completed_at = None`.

            :raises TaskNotFoundError: Gdy nie ma zadania z tym id.
            :return: Zaktualizowany obiekt `Task`.
        """
        task = self._tasks[self.find_index_by_id(task_id)]
        if status == TaskStatus.COMPLETED:
            if not task.is_complete() or task.completed_at is None:
                task.completed_at = now or datetime.now(timezone.utc)
        else:
            task.completed_at = None
        task.status = status
        return task

    def filter_by_status(self, status: TaskStatus) -> list[Task]:
        return [t for t in self._tasks if t.status == status]

    def ready(self) -> list[Task]:
        """Zadania nieukończone, których wszystkie zależności są już ukończone."""
        return [t for t in self._tasks if not t.is_complete() and t.can_start(self)]
