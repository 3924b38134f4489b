import logging

from todos.domain.enums import TaskStatus
from todos.domain.errors import DomainError
from todos.domain.status import parse_status
from todos.domain.task import Task, TaskId
from todos.domain.todo_list import TodoList
from todos.ports.clock import Clock
from todos.ports.todo_storage import TodoStorage

logger = logging.getLogger(__name__)


### COMMENTS
# ==========================================================
# Warstwa serwisowa (services/todo_service.py): przypadki użycia.
# ==========================================================
# Rola:
# - Jeden przypadek użycia = load → (najwyżej jedna mutacja) → save.
# - Zapis tylko po udanej mutacji; odczyty nigdy nie zapisują.
# - Logika domenowa (id, niezmiennik completed_at, gotowość) siedzi w TodoList/Task.
#
# Zasady:
# - Serwis korzysta wyłącznie z portów (TodoStorage, Clock); nie dotyka adapterów.
# - Błędy domenowe przechodzą dalej bez zmian: decyzję o wyjściu z procesu podejmuje CLI.


class TodoService:
    """
    Serwis przypadków użycia dla listy zadań.

    :param storage: Implementacja portu TodoStorage.
    :param clock: Źródło czasu (znacznik ukończenia).
    """
    def __init__(self, storage: TodoStorage, clock: Clock) -> None:
        self.storage = storage
        self.clock = clock

    def add_task(self, title: str, assigned_to: str = "") -> Task:
        """
            Tworzy nowe zadanie (id = max + 1) i zapisuje kolekcję.

            :param title: Tytuł zadania (pusty dozwolony).
            :param assigned_to: Osoba przypisana (może być pusta).
            :return: Utworzony obiekt `Task`.
        """
        todos = self.storage.load()
        task = todos.add(title, assigned_to)
        self.storage.save(todos)
        logger.info("added task %d: %r", task.task_id, task.title)
        return task

    def edit_title(self, task_id: TaskId, title: str) -> Task:
        """
            Zmienia tytuł zadania.

            :raises TaskNotFoundError: Gdy nie znaleziono zadania.
        """
        todos = self.storage.load()
        try:
            task = todos.edit_title(task_id, title)
        except DomainError as e:
            logger.warning("edit_title failed: %s", e)
            raise
        self.storage.save(todos)
        logger.info("renamed task %d to %r", task.task_id, title)
        return task

    def update_status(self, task_id: TaskId, status: str | TaskStatus) -> Task:
        """
            Zmienia status zadania.

            - Surowy tekst przechodzi przez `parse_status` ("✅ done", "in progress", ...).
            - Niezmiennik `completed_at` pilnuje `TodoList.update_status`.

            :raises InvalidStatusError: Gdy tekst nie jest znanym statusem.
            :raises TaskNotFoundError: Gdy nie znaleziono zadania.
        """
        todos = self.storage.load()
        try:
            parsed = status if isinstance(status, TaskStatus) else parse_status(status)
            task = todos.update_status(task_id, parsed, now=self.clock.now())
        except DomainError as e:
            logger.warning("update_status failed: %s", e)
            raise
        self.storage.save(todos)
        logger.info("task %d is now %s", task.task_id, task.status)
        return task

    def delete_task(self, task_id: TaskId) -> Task:
        """
            Usuwa zadanie; zależności innych zadań wskazujące na nie zostają "wiszące".

            :raises TaskNotFoundError: Gdy nie znaleziono zadania.
            :return: Usunięty obiekt `Task`.
        """
        todos = self.storage.load()
        try:
            task = todos.delete(task_id)
        except DomainError as e:
            logger.warning("delete failed: %s", e)
            raise
        self.storage.save(todos)
        logger.info("deleted task %d", task.task_id)
        return task

    def get_task(self, task_id: TaskId) -> tuple[Task, TodoList]:
        """Zwraca zadanie razem z kolekcją (do oceny gotowości)."""
        todos = self.storage.load()
        try:
            task = todos.find_by_id(task_id)
        except DomainError as e:
            logger.warning("get_task failed: %s", e)
            raise
        return task, todos

    def list_tasks(
        self,
        status: str | TaskStatus | None = None,
        ready_only: bool = False,
    ) -> tuple[list[Task], TodoList]:
        """
            Zwraca zadania do wyświetlenia oraz pełną kolekcję.

            - `status`: filtr (surowy tekst przechodzi przez `parse_status`).
            - `ready_only`: tylko zadania, które można zacząć (zależności ukończone).

            :raises InvalidStatusError: Gdy filtr nie jest znanym statusem.
        """
        parsed = None
        if status is not None:
            try:
                parsed = status if isinstance(status, TaskStatus) else parse_status(status)
            except DomainError as e:
                logger.warning("list_tasks failed: %s", e)
                raise

        todos = self.storage.load()
        if ready_only:
            items = [t for t in todos.ready() if parsed is None or t.status == parsed]
        elif parsed is not None:
            items = todos.filter_by_status(parsed)
        else:
            items = list(todos)
        return items, todos
