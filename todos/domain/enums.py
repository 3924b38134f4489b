from enum import Enum

class TaskStatus(str, Enum):
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    REJECTED = "Rejected"

    def __str__(self):
        return self.value


class TaskPriority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    def __str__(self):
        return self.value


# tylko do prezentacji (tabela, panele)
STATUS_EMOJI = {
    TaskStatus.NOT_STARTED: "⏳",
    TaskStatus.IN_PROGRESS: "🚧",
    TaskStatus.COMPLETED: "✅",
    TaskStatus.REJECTED: "❌",
}
