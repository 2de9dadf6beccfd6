from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from core.domain.models.task import TaskStatus
from dev_server.api.deps import task_collection
from dev_server.store import InMemoryTaskCollection
from infrastructure.http.models.task import TaskListResponse, TaskPayload, TaskResponse

router = APIRouter(prefix="/tasks", tags=["tasks"])


class CreateTaskBody(BaseModel):
    title: str = ""
    description: str | None = ""
    status: TaskStatus = TaskStatus.PENDING


class UpdateTaskBody(BaseModel):
    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None


def _as_list_response(tasks) -> TaskListResponse:
    return TaskListResponse(tasks=[TaskPayload.from_domain(task) for task in tasks])


@router.get(
    "",
    response_model=TaskListResponse,
    summary="List all tasks",
)
def list_tasks(
    collection: InMemoryTaskCollection = Depends(task_collection),
) -> TaskListResponse:
    return _as_list_response(collection.list())


@router.get(
    "/status/{task_status}",
    response_model=TaskListResponse,
    summary="List tasks by status",
)
def list_tasks_by_status(
    task_status: TaskStatus,
    collection: InMemoryTaskCollection = Depends(task_collection),
) -> TaskListResponse:
    """
    - **task_status**: `pending` o `completed`.
    """
    return _as_list_response(collection.list(task_status))


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
)
def create_task(
    body: CreateTaskBody,
    collection: InMemoryTaskCollection = Depends(task_collection),
) -> TaskResponse:
    """
    Crea una tarea; el id lo asigna la colección.

    - **title**: Título de la tarea.
    - **description**: Descripción opcional.
    - **status**: Estado inicial (por defecto `pending`).
    """
    task = collection.create(body.title, body.description, body.status)
    return TaskResponse(task=TaskPayload.from_domain(task))


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Update a task",
)
def update_task(
    task_id: str,
    body: UpdateTaskBody,
    collection: InMemoryTaskCollection = Depends(task_collection),
) -> TaskResponse:
    """
    Modifica solo los campos presentes en el cuerpo.
    """
    try:
        task = collection.update(task_id, body.model_dump(exclude_none=True))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return TaskResponse(task=TaskPayload.from_domain(task))


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
)
def delete_task(
    task_id: str,
    collection: InMemoryTaskCollection = Depends(task_collection),
) -> None:
    try:
        collection.delete(task_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
