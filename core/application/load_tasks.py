from dataclasses import dataclass

from core.domain.models.task import Task, TaskFilter
from core.domain.ports.task_gateway import TaskGateway


@dataclass(slots=True)
class LoadTasksCommand:
    filter: TaskFilter = TaskFilter.ALL


class LoadTasksUseCase:
    def __init__(self, gateway: TaskGateway) -> None:
        self._gateway = gateway

    async def execute(self, cmd: LoadTasksCommand) -> list[Task]:
        return await self._gateway.list(cmd.filter)
