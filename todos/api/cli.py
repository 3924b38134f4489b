import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from typer import Argument, Exit, Option, Typer

from todos.adapters.jsonfile.todo_storage import JsonTodoStorage
from todos.adapters.memory.todo_storage import InMemoryTodoStorage
from todos.adapters.sql.todo_storage import SqlTodoStorage
from todos.adapters.system.clock_system import SystemClock
from todos.api.render import color_status, describe_task, render_list
from todos.config import Settings
from todos.domain.errors import (
    DomainError,
    InvalidFormatError,
    InvalidStatusError,
    TaskNotFoundError,
)
from todos.domain.task import TaskId
from todos.logging_setup import setup_logging
from todos.ports.todo_storage import TodoStorage
from todos.services.todo_service import TodoService


### COMMENTS
# ==========================================================
# CLI (Typer + Rich): dyspozytor komend dla listy zadań.
# ==========================================================
# Rola:
# - Rozbija argumenty (`id:tytuł`, `id:status`) i woła JEDNĄ operację TodoService.
# - Wyświetla wyniki (tabela, panele, kolory).
# - Łapie DomainError, drukuje czerwony panel i kończy proces kodem 1.
#
# Zasady:
# - Zero logiki biznesowej: deleguj do TodoService.
# - Jednorazowy bootstrap zależności (storage + service) w callbacku.


logger = logging.getLogger(__name__)

app = Typer(help="Todos CLI: lista zadań ze statusami i zależnościami")
console = Console()

service: TodoService | None = None  # ustawimy w callbacku

EDIT_HINT = "todos edit 'id:nowy tytuł'"
STATUS_HINT = "todos status 'id:nowy status'"


def build_service(file: Path, db: Optional[Path] = None) -> TodoService:
    """Tworzy serwis na bazie wybranego adaptera.
    - Podana baza -> SQLite (SQLAlchemy)
    - W przeciwnym razie -> plik JSON
    """
    storage: TodoStorage
    if db:
        storage = SqlTodoStorage(db)
    else:
        storage = JsonTodoStorage(file)
    logger.debug("using storage %s", type(storage).__name__)
    return TodoService(storage, SystemClock())


def split_id_value(raw: str, field: str, hint: str = "") -> tuple[TaskId, str]:
    """
        Rozbija argument `id:wartość` na pierwszym dwukropku.

        :raises InvalidFormatError: Brak dwukropka albo id nie jest liczbą całkowitą.
        :return: (id, wartość): wartość może zawierać kolejne dwukropki.
    """
    parts = raw.split(":", 1)
    if len(parts) != 2:
        raise InvalidFormatError(field, raw, hint)
    try:
        task_id = int(parts[0].strip())
    except ValueError:
        raise InvalidFormatError(field, raw, hint) from None
    return TaskId(task_id), parts[1]


def _fail(e: DomainError, title: str, hint: str = "") -> None:
    body = f"❌ {escape(str(e))}"
    if hint:
        body += f"\n[dim]{hint}[/]"
    console.print(Panel.fit(body, title=title, border_style="red"))
    raise Exit(code=1)


def _handle(e: DomainError) -> None:
    """Mapuje błąd domenowy na panel + kod wyjścia 1."""
    if isinstance(e, TaskNotFoundError):
        _fail(e, "Nie znaleziono", "Użyj 'todos list', żeby znaleźć poprawne ID")
    elif isinstance(e, InvalidStatusError):
        _fail(e, "Błędny status", "Dozwolone: not started, in progress, completed, rejected")
    elif isinstance(e, InvalidFormatError):
        _fail(e, "Błędny format")
    else:
        _fail(e, "Błąd domenowy")


@app.callback()
def main(
    file: Optional[Path] = Option(
        None,
        "--file",
        "-f",
        help="Ścieżka do pliku JSON (domyślnie todos.json lub $TODOS_FILE)",
    ),
    db: Optional[Path] = Option(
        None,
        "--db",
        help="Ścieżka do bazy SQLite (zamiast pliku JSON; lub $TODOS_DB)",
    ),
    verbose: bool = Option(False, "--verbose", "-v", help="Logi DEBUG na stderr"),
) -> None:
    """Bootstrap zależności na starcie procesu CLI."""
    global service
    settings = Settings.from_env()
    setup_logging(logging.DEBUG if verbose else settings.log_level)
    service = build_service(file or settings.todos_file, db or settings.db_path)


@app.command("add")
def add(
    title: str,
    assign: str = Option("", "--assign", "-a", help="Osoba przypisana do zadania"),
) -> None:
    """Dodaje nowe zadanie (status Not Started, priorytet Low)."""
    try:
        task = service.add_task(title, assigned_to=assign)
    except DomainError as e:
        _handle(e)
        return
    console.print(Panel.fit(
        f"✅ Dodano zadanie\n"
        f"[cyan]ID:[/cyan] {task.task_id}\n"
        f"[dim]Task:[/dim] {escape(task.title)}"
        + (f"\n[dim]Assigned To:[/dim] {escape('@' + task.assigned_to)}" if task.assigned_to else ""),
        title="Sukces",
        border_style="green",
    ))


@app.command("edit")
def edit(spec: str = Argument(..., metavar="ID:NEW_TITLE")) -> None:
    """Zmienia tytuł zadania. Format: id:nowy_tytuł"""
    try:
        task_id, title = split_id_value(spec, "edit", EDIT_HINT)
        task = service.edit_title(task_id, title)
    except DomainError as e:
        _handle(e)
        return
    console.print(Panel.fit(
        f"✏️ Zmieniono tytuł\nID: {task.task_id}\n[dim]Task:[/dim] {escape(task.title)}",
        title="Sukces",
        border_style="green",
    ))


@app.command("status")
@app.command("update-status", hidden=True)
def update_status(spec: str = Argument(..., metavar="ID:NEW_STATUS")) -> None:
    """Zmienia status zadania. Format: id:status (np. '2:in progress', '3:✅ done')"""
    try:
        task_id, raw_status = split_id_value(spec, "status", STATUS_HINT)
        task = service.update_status(task_id, raw_status)
    except DomainError as e:
        _handle(e)
        return
    console.print(Panel.fit(
        f"✅ Sukces! ID: {task.task_id}\n[dim]Task:[/dim] {escape(task.title)}\nStatus: {color_status(task.status)}",
        title="Sukces",
        border_style="green",
    ))


@app.command("del")
@app.command("rm", hidden=True)
def delete(task_id: int) -> None:
    """Usuwa zadanie (zależności innych zadań nie są czyszczone)."""
    try:
        task = service.delete_task(TaskId(task_id))
    except DomainError as e:
        _handle(e)
        return
    console.print(Panel.fit(
        f"🟡 Zadanie usunięte\nID: {task.task_id}\n[dim]{escape(task.title)}[/]",
        title="Usunięto",
        border_style="yellow",
    ))


@app.command("list")
def list_cmd(
    status: Optional[str] = Option(None, "--status", "-s", help="Filtr statusu, np. 'done', 'in progress'"),
    ready: bool = Option(False, "--ready", help="Tylko zadania gotowe do rozpoczęcia"),
) -> None:
    """Listuje zadania w kolejności dodania."""
    try:
        items, todos = service.list_tasks(status=status, ready_only=ready)
    except DomainError as e:
        _handle(e)
        return
    render_list(console, items, todos)


@app.command("show")
def show(task_id: int) -> None:
    """Pokazuje szczegóły pojedynczego zadania."""
    try:
        task, todos = service.get_task(TaskId(task_id))
    except DomainError as e:
        _handle(e)
        return
    console.print(Panel.fit(
        describe_task(task, todos),
        title="Szczegóły zadania",
        border_style="cyan",
    ))


@app.command("demo")
def demo() -> None:
    """
    Pokazowy przebieg w jednym procesie (InMemory, bez zapisu na dysk).

    - Tworzy 3 zadania, z czego trzecie zależy od dwóch pierwszych.
    - Zmienia statusy i pokazuje, kiedy trzecie staje się gotowe.
    - Usuwa jedno zadanie.
    """
    svc = TodoService(InMemoryTodoStorage(), SystemClock())

    console.print(Panel.fit("🚀 Start demonstracji", border_style="cyan"))

    # 1️⃣ Tworzymy zadania
    t1 = svc.add_task("Write spec")
    t2 = svc.add_task("Review spec", assigned_to="reviewer")
    t3 = svc.add_task("Ship it")

    todos = svc.storage.load()
    todos.find_by_id(t3.task_id).depends_on = [t1.task_id, t2.task_id]
    svc.storage.save(todos)

    items, todos = svc.list_tasks()
    console.print("\n📋 Lista po utworzeniu:")
    render_list(console, items, todos)

    # 2️⃣ Statusy
    svc.update_status(t1.task_id, "✅ done")
    svc.update_status(t2.task_id, "in progress")
    items, todos = svc.list_tasks(ready_only=True)
    console.print("\n🟢 Gotowe do rozpoczęcia:")
    render_list(console, items, todos)

    svc.update_status(t2.task_id, "completed")

    # 3️⃣ Usuwamy jedno zadanie
    svc.delete_task(t1.task_id)
    console.print(Panel.fit(f"🗑️ Usunięto zadanie: {t1.task_id} ({t1.title})", border_style="red"))

    items, todos = svc.list_tasks()
    console.print("\n📋 Lista po zmianach:")
    render_list(console, items, todos)

    console.print(Panel.fit("🏁 Demo zakończone", border_style="cyan"))


if __name__ == "__main__":
    app()
