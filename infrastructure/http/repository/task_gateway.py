import logging
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from core.domain.errors import RemoteCallError
from core.domain.models.task import Task, TaskFilter
from core.domain.ports.task_gateway import TaskGateway
from infrastructure.http.models.task import TaskListResponse, TaskResponse
from infrastructure.http.session.client import get_client

logger = logging.getLogger(__name__)

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


def _task_path(task_id: str) -> str:
    # El id es opaco: se codifica entero como un único segmento.
    return f"/tasks/{quote(task_id, safe='')}"


class HttpTaskGateway(TaskGateway):
    """
    Implementación de TaskGateway sobre la API REST (httpx, asíncrono).

    Cualquier fallo (red, timeout, status no-2xx, cuerpo inválido) se
    traduce a RemoteCallError.
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._client = client or get_client()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        logger.debug(f"➡️ {method} {path}")
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise RemoteCallError(f"{method} {path} falló: {e}") from e
        return response

    @staticmethod
    def _parse(response: httpx.Response, model: type[ResponseModel]) -> ResponseModel:
        try:
            return model.model_validate(response.json())
        except ValueError as e:
            raise RemoteCallError(
                f"Respuesta inválida de {response.request.method} "
                f"{response.request.url.path}: {e}"
            ) from e

    async def list(self, task_filter: TaskFilter) -> list[Task]:
        """
        Lista las tareas del filtro indicado.

        Argumentos:
            task_filter (TaskFilter): `all` pide toda la colección.
        """
        if task_filter is TaskFilter.ALL:
            path = "/tasks"
        else:
            path = f"/tasks/status/{task_filter.value}"
        response = await self._request("GET", path)
        body = self._parse(response, TaskListResponse)
        return [payload.to_domain() for payload in body.tasks]

    async def create(self, data: dict[str, Any]) -> Task:
        response = await self._request("POST", "/tasks", json=data)
        return self._parse(response, TaskResponse).task.to_domain()

    async def update(self, task_id: str, changes: dict[str, Any]) -> Task:
        response = await self._request("PUT", _task_path(task_id), json=changes)
        return self._parse(response, TaskResponse).task.to_domain()

    async def delete(self, task_id: str) -> None:
        # El cuerpo de la respuesta se ignora.
        await self._request("DELETE", _task_path(task_id))
