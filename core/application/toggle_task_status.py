from core.application.state import AppState
from core.application.update_task import UpdateTaskCommand, UpdateTaskUseCase
from core.domain.models.task import Task
from core.domain.ports.task_gateway import TaskGateway


class ToggleTaskStatusUseCase:
    def __init__(self, gateway: TaskGateway) -> None:
        self._update = UpdateTaskUseCase(gateway)

    async def execute(self, state: AppState, task: Task) -> Task:
        # Solo se envía el estado invertido, nunca el resto de campos.
        cmd = UpdateTaskCommand(status=task.status.toggled())
        return await self._update.execute(state, task.id, cmd)
