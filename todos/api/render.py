from datetime import timedelta
from typing import Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from todos.api.colors import TaskColor
from todos.domain.enums import STATUS_EMOJI, TaskPriority, TaskStatus
from todos.domain.task import Task
from todos.domain.todo_list import TodoList


def color_status(status: TaskStatus) -> str:
    """Zwraca status (glif + nazwa) w Rich-markup z kolorem."""
    label = f"{STATUS_EMOJI[status]} {status.value}"
    match status:
        case TaskStatus.NOT_STARTED:
            return f"{TaskColor.YELLOW}{label}{TaskColor.RESET}"
        case TaskStatus.IN_PROGRESS:
            return f"{TaskColor.BLUE}{label}{TaskColor.RESET}"
        case TaskStatus.COMPLETED:
            return f"{TaskColor.GREEN}{label}{TaskColor.RESET}"
        case TaskStatus.REJECTED:
            return f"{TaskColor.RED}{label}{TaskColor.RESET}"
        case _:
            return str(status)


def color_priority(priority: TaskPriority) -> str:
    match priority:
        case TaskPriority.HIGH:
            return f"{TaskColor.RED}{priority.value}{TaskColor.RESET}"
        case TaskPriority.MEDIUM:
            return f"{TaskColor.YELLOW}{priority.value}{TaskColor.RESET}"
        case _:
            return f"{TaskColor.DIM}{priority.value}{TaskColor.RESET}"


def format_duration(value: timedelta | None) -> str:
    if value is None:
        return ""
    total = int(value.total_seconds())
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if seconds or not parts:
        parts.append(f"{seconds}s")
    return "".join(parts)


def format_assignee(name: str) -> str:
    """Zwraca `@nazwa` gotowe do wstawienia w Rich-markup (escapowane)."""
    return escape(f"@{name}") if name else ""


def format_depends_on(task: Task) -> str:
    return ", ".join(str(d) for d in task.depends_on)


def build_table(items: Iterable[Task], todos: TodoList) -> Table:
    """Tabela Rich z pełnym zestawem pól zadania + kolumną gotowości."""
    table = Table(show_lines=False, header_style="bold")
    table.add_column("Id", no_wrap=True, style="cyan", justify="right")
    table.add_column("Task")
    table.add_column("Status", no_wrap=True)
    table.add_column("Priority", no_wrap=True)
    table.add_column("Assigned To", no_wrap=True)
    table.add_column("Due Date", no_wrap=True, style="dim")
    table.add_column("Estimated Time", no_wrap=True)
    table.add_column("Time Spent", no_wrap=True)
    table.add_column("Completed At", no_wrap=True, style="dim")
    table.add_column("Depends On", no_wrap=True)
    table.add_column("Ready", no_wrap=True, justify="center")

    for t in items:
        ready = "" if t.is_complete() else ("✔" if t.can_start(todos) else "✗")
        table.add_row(
            str(t.task_id),
            escape(t.title),
            color_status(t.status),
            color_priority(t.priority),
            format_assignee(t.assigned_to),
            t.due_date.isoformat() if t.due_date else "",
            format_duration(t.estimated_time),
            format_duration(t.time_spent),
            t.completed_at.date().isoformat() if t.completed_at else "",
            format_depends_on(t),
            ready,
        )
    return table


def render_list(console: Console, items: list[Task], todos: TodoList) -> None:
    """Renderuje tabelę oraz stopkę z licznikami."""
    console.print(build_table(items, todos))
    done = sum(1 for t in todos if t.is_complete())
    console.print(f"[dim]Pokazano: {len(items)} • Razem: {len(todos)} • Ukończone: {done}[/dim]")


def describe_task(task: Task, todos: TodoList) -> str:
    """Tekst panelu `show`: jedno pole na linię."""
    lines = [
        f"ID: {task.task_id}",
        f"Task: {escape(task.title)}",
        f"Status: {color_status(task.status)}",
        f"Priority: {color_priority(task.priority)}",
        f"Assigned To: {format_assignee(task.assigned_to) or '[dim]brak[/]'}",
        f"Due Date: {task.due_date.isoformat() if task.due_date else '[dim]brak[/]'}",
        f"Estimated Time: {format_duration(task.estimated_time) or '[dim]brak[/]'}",
        f"Time Spent: {format_duration(task.time_spent) or '[dim]brak[/]'}",
        f"Completed At: {task.completed_at.isoformat() if task.completed_at else '[dim]brak[/]'}",
        f"Depends On: {format_depends_on(task) or '[dim]brak[/]'}",
        f"Can Start: {'tak' if task.can_start(todos) else 'nie'}",
    ]
    return "\n".join(lines)
