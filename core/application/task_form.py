import inspect
import logging
from dataclasses import replace
from typing import Any, Awaitable, Callable

from core.domain.models.task import Task, TaskDraft, TaskStatus

logger = logging.getLogger(__name__)

SaveCallback = Callable[[str | None, TaskDraft], Awaitable[Any] | Any]
CloseCallback = Callable[[], None]

_FIELDS = ("title", "description", "status")


class TaskFormPresenter:
    """
    Formulario del modal de tareas.

    Se vuelve a sembrar cada vez que cambia la tarea recibida o el modal pasa
    a abierto, de modo que nunca arrastra valores de una edición anterior.
    No hace llamadas remotas: al enviar entrega (id | None, datos) al
    controlador y se cierra.
    """

    def __init__(self, on_save: SaveCallback, on_close: CloseCallback) -> None:
        self._on_save = on_save
        self._on_close = on_close

        self.is_open = False
        self.task: Task | None = None
        self.data = TaskDraft()

    def sync(self, is_open: bool, task: Task | None) -> None:
        opening = is_open and not self.is_open
        task_changed = task is not self.task

        self.is_open = is_open
        self.task = task
        if opening or task_changed:
            self._seed()

    def _seed(self) -> None:
        task = self.task
        if task is None:
            self.data = TaskDraft()
            return
        self.data = TaskDraft(
            title=task.title or "",
            description=task.description or "",
            status=task.status or TaskStatus.PENDING,
        )

    def open(self, task: Task | None = None) -> None:
        self.sync(True, task)

    @property
    def heading(self) -> str:
        return "Edit Task" if self.task is not None else "Create Task"

    @property
    def submit_label(self) -> str:
        return "Save Changes" if self.task is not None else "Create Task"

    def change(self, field: str, value: Any) -> None:
        if field not in _FIELDS:
            raise ValueError(f"Campo desconocido en el formulario: {field}")
        if field == "status":
            value = TaskStatus(value)
        setattr(self.data, field, value)

    async def submit(self) -> None:
        if not self.is_open:
            logger.warning("⚠️ submit() con el formulario cerrado; se ignora")
            return

        task_id = self.task.id if self.task is not None else None
        data = replace(self.data)

        result = self._on_save(task_id, data)
        self.close()
        if inspect.isawaitable(result):
            await result

    def close(self) -> None:
        self.is_open = False
        self.task = None
        self.data = TaskDraft()
        self._on_close()
