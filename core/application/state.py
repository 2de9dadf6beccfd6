from dataclasses import dataclass, field

from core.domain.models.task import Task, TaskFilter


@dataclass(slots=True)
class AppState:
    """
    Estado de la interfaz: lista visible, filtro activo, modal y avisos.

    `loading` empieza en True porque la vista muestra "cargando" hasta que
    termina la primera carga.
    """

    tasks: list[Task] = field(default_factory=list)
    filter: TaskFilter = TaskFilter.ALL
    loading: bool = True
    modal_open: bool = False
    current_task: Task | None = None
    notices: list[str] = field(default_factory=list)
