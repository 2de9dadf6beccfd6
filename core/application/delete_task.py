from dataclasses import dataclass

from core.application.state import AppState
from core.domain.ports.task_gateway import TaskGateway


@dataclass(slots=True)
class DeleteTaskCommand:
    id: str


class DeleteTaskUseCase:
    def __init__(self, gateway: TaskGateway) -> None:
        self._gateway = gateway

    async def execute(self, state: AppState, cmd: DeleteTaskCommand) -> None:
        await self._gateway.delete(cmd.id)
        state.tasks = [task for task in state.tasks if task.id != cmd.id]
