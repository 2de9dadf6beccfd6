from abc import ABC, abstractmethod
from typing import Any

from core.domain.models.task import Task, TaskFilter


class TaskGateway(ABC):
    """
    Acceso a la colección remota de tareas.

    Toda implementación lanza RemoteCallError ante cualquier fallo.
    """

    @abstractmethod
    async def list(self, task_filter: TaskFilter) -> list[Task]:
        raise NotImplementedError

    @abstractmethod
    async def create(self, data: dict[str, Any]) -> Task:
        raise NotImplementedError

    @abstractmethod
    async def update(self, task_id: str, changes: dict[str, Any]) -> Task:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, task_id: str) -> None:
        raise NotImplementedError
