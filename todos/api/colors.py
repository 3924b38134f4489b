from enum import Enum

class TaskColor(Enum):
    RED = "[red]"
    BLUE = "[blue]"
    GREEN = "[green]"
    YELLOW = "[yellow]"
    DIM = "[dim]"
    RESET = "[/]"

    def __str__(self):
        return self.value
