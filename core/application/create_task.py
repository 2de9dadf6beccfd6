from dataclasses import dataclass

from core.application.state import AppState
from core.domain.models.task import Task, TaskDraft, TaskStatus
from core.domain.ports.task_gateway import TaskGateway


@dataclass(slots=True)
class CreateTaskCommand:
    title: str = ""
    description: str | None = ""
    status: TaskStatus = TaskStatus.PENDING

    @classmethod
    def from_draft(cls, draft: TaskDraft) -> "CreateTaskCommand":
        return cls(
            title=draft.title,
            description=draft.description,
            status=draft.status,
        )


class CreateTaskUseCase:
    def __init__(self, gateway: TaskGateway) -> None:
        self._gateway = gateway

    async def execute(self, state: AppState, cmd: CreateTaskCommand) -> Task:
        task = await self._gateway.create(
            {
                "title": cmd.title,
                "description": cmd.description,
                "status": cmd.status.value,
            }
        )
        # Se añade a la lista vigente cuando llega la respuesta, no a la
        # que había al enviar la petición.
        state.tasks = [*state.tasks, task]
        return task
