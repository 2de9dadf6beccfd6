from dataclasses import dataclass
from typing import Any

from core.application.state import AppState
from core.domain.models.task import Task, TaskDraft, TaskStatus
from core.domain.ports.task_gateway import TaskGateway


@dataclass(slots=True)
class UpdateTaskCommand:
    """Cambios a enviar; los campos en None no se envían."""

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None

    @classmethod
    def from_draft(cls, draft: TaskDraft) -> "UpdateTaskCommand":
        return cls(
            title=draft.title,
            description=draft.description,
            status=draft.status,
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.title is not None:
            payload["title"] = self.title
        if self.description is not None:
            payload["description"] = self.description
        if self.status is not None:
            payload["status"] = self.status.value
        return payload


def replace_task(tasks: list[Task], updated: Task) -> list[Task]:
    """Sustituye la entrada con el mismo id conservando su posición."""
    return [updated if task.id == updated.id else task for task in tasks]


class UpdateTaskUseCase:
    def __init__(self, gateway: TaskGateway) -> None:
        self._gateway = gateway

    async def execute(
        self, state: AppState, task_id: str, cmd: UpdateTaskCommand
    ) -> Task:
        task = await self._gateway.update(task_id, cmd.to_payload())
        state.tasks = replace_task(state.tasks, task)
        return task
