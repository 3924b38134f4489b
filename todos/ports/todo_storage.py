from typing import Protocol
from todos.domain.todo_list import TodoList


### COMMENTS
# ==========================================================
# Kontrakt trwałości kolekcji (ports/todo_storage.py).
# ==========================================================
# - Jeden przebieg procesu = load → (najwyżej jedna mutacja) → save.
# - Adapter zapisuje i odczytuje CAŁĄ kolekcję naraz, z zachowaniem kolejności.
# - Pola opcjonalne: nieobecne przed zapisem = nieobecne po odczycie.
# - Błędy techniczne adapter mapuje na StorageError / TaskValidationError.


class TodoStorage(Protocol):
    """Interfejs trwałości dla `TodoList`."""

    def load(self) -> TodoList:
        """Wczytuje kolekcję.

        Zwraca:
            TodoList: Zadania w zapisanej kolejności; pusta lista, gdy magazyn nie istnieje.

        Wyjątki domenowe:
            TaskValidationError: Uszkodzony rekord (brak klucza, duplikat id, zły niezmiennik).
            StorageError: Błąd I/O.
        """

    def save(self, todos: TodoList) -> None:
        """Zapisuje pełną kolekcję (podmiana całego stanu).

        Uwagi:
            Operacja powinna być atomowa: po błędzie stary stan zostaje nietknięty.
        """
