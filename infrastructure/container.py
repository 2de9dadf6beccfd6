from contextlib import asynccontextmanager
from typing import AsyncIterator

from core.application.task_form import TaskFormPresenter
from core.application.task_store import TaskStoreController
from core.domain.ports.task_gateway import TaskGateway
from infrastructure.config import get_settings
from infrastructure.http.repository.task_gateway import HttpTaskGateway
from infrastructure.http.session.client import close_client


def get_task_gateway() -> TaskGateway:
    return HttpTaskGateway()


def get_task_store(gateway: TaskGateway | None = None) -> TaskStoreController:
    settings = get_settings()
    return TaskStoreController(
        gateway=gateway or get_task_gateway(),
        notify_mutation_errors=settings.notify_mutation_errors,
    )


def get_task_form(store: TaskStoreController) -> TaskFormPresenter:
    """Formulario conectado al controlador: se resiembra en cada cambio de estado."""
    form = TaskFormPresenter(on_save=store.save_task, on_close=store.close_modal)
    store.subscribe(lambda state: form.sync(state.modal_open, state.current_task))
    return form


@asynccontextmanager
async def task_store_session() -> AsyncIterator[TaskStoreController]:
    """
    Controlador listo para usar durante la vida de la vista.

    Al salir cierra el cliente HTTP compartido, también si hubo error.
    """
    store = get_task_store()
    try:
        yield store
    finally:
        await close_client()
