from typing import Any

from pydantic import BaseModel, Field, field_validator

from core.domain.models.task import Task, TaskStatus


class TaskPayload(BaseModel):
    """
    Tarea tal como viaja por la API REST.
    El id llega como `_id`; también se acepta `id`.
    """

    id: str = Field(alias="_id")
    title: str = ""
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING

    model_config = {"populate_by_name": True}

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("title", mode="before")
    @classmethod
    def _title_none_as_empty(cls, value: Any) -> Any:
        # El título no se valida aquí: un null se muestra como vacío.
        return "" if value is None else value

    def to_domain(self) -> Task:
        """
        Convierte el payload al modelo de dominio.

        Retorna:
            Task: La entidad de dominio.
        """
        return Task(
            id=self.id,
            title=self.title,
            description=self.description,
            status=self.status,
        )

    @classmethod
    def from_domain(cls, task: Task) -> "TaskPayload":
        """
        Crea un payload a partir de una entidad de dominio.

        Argumentos:
            task (Task): La entidad de dominio.
        """
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
        )


class TaskListResponse(BaseModel):
    tasks: list[TaskPayload]


class TaskResponse(BaseModel):
    task: TaskPayload
