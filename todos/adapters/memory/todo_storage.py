import copy
from typing import Any, Iterable

from todos.adapters.jsonfile.todo_storage import decode_records, encode_task
from todos.domain.task import Task
from todos.domain.todo_list import TodoList
from todos.ports.todo_storage import TodoStorage

### COMMENTS
# ==========================================================
# Adapter pamięciowy (adapters/memory/todo_storage.py).
# ==========================================================
# - Do testów i komendy `demo` (brak trwałości między uruchomieniami).
# - Trzyma ZAKODOWANĄ migawkę (lista dictów w kształcie dokumentu JSON),
#   więc `load()` zawsze zwraca świeże obiekty: mutacja bez `save()` przepada,
#   tak samo jak przy pliku.


class InMemoryTodoStorage(TodoStorage):
    """
        :param initial: Opcjonalne zadania startowe (seed).
    """
    def __init__(self, initial: Iterable[Task] | None = None) -> None:
        self._records: list[dict[str, Any]] = [encode_task(t) for t in (initial or [])]
        self.saves = 0

    def load(self) -> TodoList:
        return decode_records(copy.deepcopy(self._records), "memory")

    def save(self, todos: TodoList) -> None:
        self._records = [encode_task(t) for t in todos]
        self.saves += 1

    @property
    def records(self) -> list[dict[str, Any]]:
        """Surowa migawka: przydatna w testach kształtu dokumentu."""
        return copy.deepcopy(self._records)
