"""
Controlador del almacén de tareas.

Única fuente de verdad para la lista visible y el filtro activo. Todas las
lecturas y escrituras remotas pasan por aquí y el resultado se reconcilia
con el estado local (AppState).

Política de errores:
    - Fallo al cargar    → log + aviso al usuario, la lista anterior se conserva.
    - Fallo al mutar     → log; aviso al usuario solo si notify_mutation_errors.
    - Nada se reintenta y ningún fallo es fatal.

Cargas solapadas: cada carga recibe un número de generación. La respuesta de
una carga superada por otra posterior se descarta, así que un filtro lento
nunca pisa la lista del filtro actual.
"""

import logging
from typing import Callable

from core.application.create_task import CreateTaskCommand, CreateTaskUseCase
from core.application.delete_task import DeleteTaskCommand, DeleteTaskUseCase
from core.application.load_tasks import LoadTasksCommand, LoadTasksUseCase
from core.application.state import AppState
from core.application.toggle_task_status import ToggleTaskStatusUseCase
from core.application.update_task import UpdateTaskCommand, UpdateTaskUseCase
from core.domain.errors import RemoteCallError
from core.domain.models.task import Task, TaskDraft, TaskFilter
from core.domain.ports.task_gateway import TaskGateway

logger = logging.getLogger(__name__)

LOAD_ERROR_NOTICE = "Error fetching tasks. Please try again later."
CREATE_ERROR_NOTICE = "Error creating task."
UPDATE_ERROR_NOTICE = "Error updating task."
DELETE_ERROR_NOTICE = "Error deleting task."

Listener = Callable[[AppState], None]


class TaskStoreController:
    """
    Mantiene AppState sincronizado con la colección remota.

    Args:
        gateway:                Acceso a la colección remota.
        state:                  Estado inicial. Si es None se crea uno vacío.
        notify_mutation_errors: Si True, los fallos de crear/editar/borrar
                                también generan un aviso al usuario.
    """

    def __init__(
        self,
        gateway: TaskGateway,
        state: AppState | None = None,
        *,
        notify_mutation_errors: bool = True,
    ) -> None:
        self.state = state if state is not None else AppState()
        self._notify_mutation_errors = notify_mutation_errors

        self._load_tasks = LoadTasksUseCase(gateway)
        self._create_task = CreateTaskUseCase(gateway)
        self._update_task = UpdateTaskUseCase(gateway)
        self._toggle_status = ToggleTaskStatusUseCase(gateway)
        self._delete_task = DeleteTaskUseCase(gateway)

        self._listeners: list[Listener] = []
        self._load_generation = 0

    # ──────────────────────────────────────────────────────────────────────────
    # Suscripción a cambios de estado
    # ──────────────────────────────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Registra una vista que se recalcula en cada cambio de estado.

        Returns:
            Función que cancela la suscripción.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)

    # ──────────────────────────────────────────────────────────────────────────
    # Lectura
    # ──────────────────────────────────────────────────────────────────────────

    async def load_tasks(self, task_filter: TaskFilter | str | None = None) -> bool:
        """
        Reemplaza la lista local por la respuesta del servidor para el filtro.

        Args:
            task_filter: Filtro a cargar (enum o su valor, p. ej. "completed").
                         Si es None se usa el filtro actual.

        Returns:
            True si la respuesta se aplicó, False si falló o quedó superada.

        Raises:
            ValueError: Si el filtro no es válido. El estado no se modifica.
        """
        task_filter = TaskFilter(task_filter or self.state.filter)
        self._load_generation += 1
        generation = self._load_generation

        self.state.filter = task_filter
        self.state.loading = True
        self._emit()

        try:
            try:
                tasks = await self._load_tasks.execute(LoadTasksCommand(filter=task_filter))
            except RemoteCallError as e:
                if generation != self._load_generation:
                    logger.debug(
                        f"Carga {generation} ({task_filter.value}) superada; "
                        f"se ignora su error: {e}"
                    )
                    return False
                logger.error(f"❌ Error cargando tareas ({task_filter.value}): {e}")
                self.state.notices.append(LOAD_ERROR_NOTICE)
                return False

            if generation != self._load_generation:
                logger.debug(
                    f"🔄 Carga {generation} ({task_filter.value}) superada por la "
                    f"carga {self._load_generation}; respuesta descartada"
                )
                return False

            self.state.tasks = list(tasks)
            logger.info(f"📋 {len(tasks)} tareas cargadas (filtro={task_filter.value})")
            return True
        finally:
            # Solo la carga más reciente apaga el indicador, también ante
            # errores inesperados.
            if generation == self._load_generation:
                self.state.loading = False
                self._emit()

    async def set_filter(self, task_filter: TaskFilter | str) -> bool:
        """Cambia el filtro y recarga siempre desde el servidor."""
        return await self.load_tasks(task_filter)

    # ──────────────────────────────────────────────────────────────────────────
    # Escritura
    # ──────────────────────────────────────────────────────────────────────────

    def _mutation_failed(self, action: str, notice: str, error: RemoteCallError) -> None:
        logger.error(f"❌ Error {action}: {error}")
        if self._notify_mutation_errors:
            self.state.notices.append(notice)
            self._emit()

    async def create_task(self, draft: TaskDraft) -> Task | None:
        """Crea la tarea en remoto y la añade al final de la lista local."""
        try:
            task = await self._create_task.execute(
                self.state, CreateTaskCommand.from_draft(draft)
            )
        except RemoteCallError as e:
            self._mutation_failed("creando tarea", CREATE_ERROR_NOTICE, e)
            return None

        logger.info(f"✅ Tarea {task.id} creada")
        self._emit()
        return task

    async def update_task(
        self, task_id: str, changes: TaskDraft | UpdateTaskCommand
    ) -> Task | None:
        """
        Envía un registro parcial o completo y sustituye la entrada local.

        Args:
            task_id: Id de la tarea a modificar.
            changes: Borrador completo del formulario o cambios parciales.
        """
        if isinstance(changes, TaskDraft):
            changes = UpdateTaskCommand.from_draft(changes)

        try:
            task = await self._update_task.execute(self.state, task_id, changes)
        except RemoteCallError as e:
            self._mutation_failed(f"actualizando tarea {task_id}", UPDATE_ERROR_NOTICE, e)
            return None

        logger.info(f"✅ Tarea {task_id} actualizada")
        self._emit()
        return task

    async def toggle_status(self, task: Task) -> Task | None:
        """Pide al servidor el estado inverso (pending ↔ completed)."""
        try:
            updated = await self._toggle_status.execute(self.state, task)
        except RemoteCallError as e:
            self._mutation_failed(f"actualizando tarea {task.id}", UPDATE_ERROR_NOTICE, e)
            return None

        logger.info(f"✅ Tarea {task.id}: {task.status.value} → {updated.status.value}")
        self._emit()
        return updated

    async def delete_task(self, task_id: str) -> bool:
        """Borra en remoto y, si tiene éxito, quita la entrada local."""
        try:
            await self._delete_task.execute(self.state, DeleteTaskCommand(id=task_id))
        except RemoteCallError as e:
            self._mutation_failed(f"eliminando tarea {task_id}", DELETE_ERROR_NOTICE, e)
            return False

        logger.info(f"🗑️ Tarea {task_id} eliminada")
        self._emit()
        return True

    async def save_task(self, task_id: str | None, draft: TaskDraft) -> Task | None:
        """
        Destino del envío del formulario.

        Sin id → crear. Con id → actualizar. Nunca ambas.
        """
        if task_id:
            return await self.update_task(task_id, draft)
        return await self.create_task(draft)

    # ──────────────────────────────────────────────────────────────────────────
    # Estado del modal y avisos
    # ──────────────────────────────────────────────────────────────────────────

    def open_create(self) -> None:
        self.state.current_task = None
        self.state.modal_open = True
        self._emit()

    def open_edit(self, task: Task) -> bool:
        """Abre el modal sobre una tarea. Solo las pendientes son editables."""
        if not task.editable:
            logger.warning(f"⚠️ Tarea {task.id} completada: no se puede editar")
            return False
        self.state.current_task = task
        self.state.modal_open = True
        self._emit()
        return True

    def close_modal(self) -> None:
        self.state.modal_open = False
        self.state.current_task = None
        self._emit()

    def dismiss_notices(self) -> None:
        self.state.notices.clear()
        self._emit()
