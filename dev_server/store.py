from typing import Any
from uuid import uuid4

from core.domain.models.task import Task, TaskStatus


class InMemoryTaskCollection:
    """
    Colección remota de desarrollo: guarda las tareas en memoria, en orden
    de creación. Se pierde al reiniciar el proceso.
    """

    def __init__(self) -> None:
        self._data: dict[str, Task] = {}

    def list(self, status: TaskStatus | None = None) -> list[Task]:
        tasks = self._data.values()
        if status is None:
            return [*tasks]
        return [task for task in tasks if task.status is status]

    def create(self, title: str, description: str | None, status: TaskStatus) -> Task:
        task = Task(id=uuid4().hex, title=title, description=description, status=status)
        self._data[task.id] = task
        return task

    def update(self, task_id: str, changes: dict[str, Any]) -> Task:
        task = self._data.get(task_id)
        if task is None:
            raise ValueError(f"Tarea con id {task_id} no encontrada")

        if "title" in changes:
            task.title = changes["title"]
        if "description" in changes:
            task.description = changes["description"]
        if "status" in changes:
            task.status = TaskStatus(changes["status"])
        return task

    def delete(self, task_id: str) -> None:
        if self._data.pop(task_id, None) is None:
            raise ValueError(f"Tarea con id {task_id} no encontrada")
