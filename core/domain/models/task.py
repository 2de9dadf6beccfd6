from dataclasses import dataclass
from enum import Enum


class TaskStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"

    def toggled(self) -> "TaskStatus":
        if self is TaskStatus.PENDING:
            return TaskStatus.COMPLETED
        return TaskStatus.PENDING


class TaskFilter(Enum):
    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"


@dataclass(slots=True)
class Task:
    id: str
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING

    @property
    def editable(self) -> bool:
        return self.status is TaskStatus.PENDING


@dataclass(slots=True)
class TaskDraft:
    """Campos editables de una tarea, tal como los recoge el formulario."""

    title: str = ""
    description: str | None = ""
    status: TaskStatus = TaskStatus.PENDING
