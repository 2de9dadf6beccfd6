"""
Tests para TaskStoreController.
Verifica la reconciliación del estado local, la política de errores y el
descarte de cargas superadas.
"""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from core.application.state import AppState
from core.application.task_store import (
    CREATE_ERROR_NOTICE,
    DELETE_ERROR_NOTICE,
    LOAD_ERROR_NOTICE,
    UPDATE_ERROR_NOTICE,
    TaskStoreController,
)
from core.application.update_task import UpdateTaskCommand
from core.domain.errors import RemoteCallError
from core.domain.models.task import Task, TaskDraft, TaskFilter, TaskStatus
from core.domain.ports.task_gateway import TaskGateway


def run(coro):
    return asyncio.run(coro)


class TestTaskStoreController:
    """Suite de tests para el controlador del almacén de tareas."""

    @pytest.fixture
    def gateway(self):
        """Mock de la colección remota."""
        return AsyncMock(spec=TaskGateway)

    @pytest.fixture
    def store(self, gateway):
        return TaskStoreController(gateway)

    @pytest.fixture
    def pending_task(self):
        return Task(id="1", title="Escribir", description="d", status=TaskStatus.PENDING)

    # ── Carga ─────────────────────────────────────────────────────────────────

    @pytest.mark.parametrize("task_filter", list(TaskFilter))
    def test_load_replaces_list_with_server_response(self, store, gateway, task_filter):
        """Tras cargar, la lista es exactamente la respuesta (sin residuos)."""
        store.state.tasks = [Task(id="viejo", title="de otro filtro")]
        response = [Task(id="a", title="A"), Task(id="b", title="B")]
        gateway.list.return_value = response

        assert run(store.load_tasks(task_filter)) is True

        gateway.list.assert_awaited_once_with(task_filter)
        assert store.state.tasks == response
        assert store.state.filter is task_filter
        assert store.state.loading is False

    def test_load_uses_current_filter_by_default(self, store, gateway):
        store.state.filter = TaskFilter.PENDING
        gateway.list.return_value = []

        run(store.load_tasks())

        gateway.list.assert_awaited_once_with(TaskFilter.PENDING)

    def test_loading_flag_is_true_during_the_call(self, store, gateway):
        seen = []

        async def list_tasks(task_filter):
            seen.append(store.state.loading)
            return []

        gateway.list.side_effect = list_tasks

        run(store.load_tasks(TaskFilter.ALL))

        assert seen == [True]
        assert store.state.loading is False

    def test_load_failure_keeps_previous_list_and_notifies(self, store, gateway, pending_task):
        """Carga fallida: lista previa intacta, aviso al usuario, loading a False."""
        store.state.tasks = [pending_task]
        gateway.list.side_effect = RemoteCallError("500")

        assert run(store.load_tasks(TaskFilter.COMPLETED)) is False

        assert store.state.tasks == [pending_task]
        assert store.state.notices == [LOAD_ERROR_NOTICE]
        assert store.state.loading is False

    @pytest.mark.parametrize("raw", ["all", "pending", "completed"])
    def test_set_filter_accepts_select_string_values(self, store, gateway, raw):
        """El valor de un <select> se convierte al enum antes de cargar."""
        gateway.list.return_value = []

        assert run(store.set_filter(raw)) is True

        gateway.list.assert_awaited_once_with(TaskFilter(raw))
        assert store.state.filter is TaskFilter(raw)
        assert store.state.loading is False

    def test_invalid_filter_is_rejected_before_touching_state(self, store, gateway):
        listener = Mock()
        store.subscribe(listener)

        with pytest.raises(ValueError):
            run(store.set_filter("archived"))

        gateway.list.assert_not_called()
        listener.assert_not_called()
        assert store.state.filter is TaskFilter.ALL
        assert store.state.loading is True

    def test_unexpected_error_still_clears_loading(self, store, gateway):
        store.state.loading = False
        gateway.list.side_effect = AttributeError("bug en el adaptador")

        with pytest.raises(AttributeError):
            run(store.load_tasks(TaskFilter.PENDING))

        assert store.state.loading is False
        assert store.state.notices == []

    def test_set_filter_always_refetches(self, store, gateway):
        gateway.list.return_value = []

        run(store.set_filter(TaskFilter.PENDING))
        run(store.set_filter(TaskFilter.PENDING))

        assert gateway.list.await_count == 2

    def test_superseded_load_does_not_overwrite_newer_filter(self, store, gateway):
        """Una respuesta lenta del filtro anterior se descarta."""
        slow_response = [Task(id="p", title="pendiente")]
        fast_response = [Task(id="c", title="completada", status=TaskStatus.COMPLETED)]

        async def scenario():
            release_slow = asyncio.Event()

            async def list_tasks(task_filter):
                if task_filter is TaskFilter.PENDING:
                    await release_slow.wait()
                    return slow_response
                return fast_response

            gateway.list.side_effect = list_tasks

            slow = asyncio.create_task(store.load_tasks(TaskFilter.PENDING))
            await asyncio.sleep(0)
            fast_applied = await store.load_tasks(TaskFilter.COMPLETED)
            release_slow.set()
            slow_applied = await slow
            return fast_applied, slow_applied

        fast_applied, slow_applied = run(scenario())

        assert fast_applied is True
        assert slow_applied is False
        assert store.state.tasks == fast_response
        assert store.state.filter is TaskFilter.COMPLETED
        assert store.state.loading is False

    def test_superseded_load_failure_is_not_surfaced(self, store, gateway):
        async def scenario():
            release_slow = asyncio.Event()

            async def list_tasks(task_filter):
                if task_filter is TaskFilter.PENDING:
                    await release_slow.wait()
                    raise RemoteCallError("timeout")
                return []

            gateway.list.side_effect = list_tasks

            slow = asyncio.create_task(store.load_tasks(TaskFilter.PENDING))
            await asyncio.sleep(0)
            await store.load_tasks(TaskFilter.ALL)
            release_slow.set()
            await slow

        run(scenario())

        assert store.state.notices == []
        assert store.state.loading is False

    # ── Creación ─────────────────────────────────────────────────────────────

    def test_create_appends_server_record_once_at_the_end(self, store, gateway, pending_task):
        store.state.tasks = [pending_task]
        created = Task(id="nuevo", title="Nueva", description="", status=TaskStatus.PENDING)
        gateway.create.return_value = created

        result = run(store.create_task(TaskDraft(title="Nueva")))

        assert result == created
        assert store.state.tasks[-1] == created
        assert [t.id for t in store.state.tasks].count("nuevo") == 1
        gateway.create.assert_awaited_once_with(
            {"title": "Nueva", "description": "", "status": "pending"}
        )

    def test_create_failure_leaves_list_unchanged(self, store, gateway, pending_task):
        store.state.tasks = [pending_task]
        gateway.create.side_effect = RemoteCallError("500")

        assert run(store.create_task(TaskDraft(title="x"))) is None

        assert store.state.tasks == [pending_task]
        assert store.state.notices == [CREATE_ERROR_NOTICE]

    # ── Actualización y toggle ───────────────────────────────────────────────

    def test_update_replaces_entry_in_place(self, store, gateway):
        store.state.tasks = [Task(id="1", title="a"), Task(id="2", title="b"), Task(id="3", title="c")]
        gateway.update.return_value = Task(id="2", title="B!")

        run(store.update_task("2", UpdateTaskCommand(title="B!")))

        gateway.update.assert_awaited_once_with("2", {"title": "B!"})
        assert [t.title for t in store.state.tasks] == ["a", "B!", "c"]

    def test_update_with_draft_sends_full_record(self, store, gateway, pending_task):
        store.state.tasks = [pending_task]
        gateway.update.return_value = pending_task

        run(store.update_task("1", TaskDraft(title="t", description="d", status=TaskStatus.COMPLETED)))

        gateway.update.assert_awaited_once_with(
            "1", {"title": "t", "description": "d", "status": "completed"}
        )

    @pytest.mark.parametrize(
        "current, requested",
        [
            (TaskStatus.PENDING, "completed"),
            (TaskStatus.COMPLETED, "pending"),
        ],
    )
    def test_toggle_requests_inverse_status(self, store, gateway, current, requested):
        task = Task(id="1", title="t", status=current)
        store.state.tasks = [task]
        gateway.update.return_value = Task(id="1", title="t", status=TaskStatus(requested))

        run(store.toggle_status(task))

        gateway.update.assert_awaited_once_with("1", {"status": requested})
        assert store.state.tasks[0].status is TaskStatus(requested)

    def test_toggle_example_scenario(self, store, gateway):
        """[{id:1,pending}] + toggle → servidor responde completed → lista actualizada."""
        task = Task(id="1", title="", status=TaskStatus.PENDING)
        store.state.tasks = [task]
        gateway.update.return_value = Task(id="1", title="", status=TaskStatus.COMPLETED)

        run(store.toggle_status(task))

        assert store.state.tasks == [Task(id="1", title="", status=TaskStatus.COMPLETED)]

    def test_toggle_failure_keeps_entry(self, store, gateway, pending_task):
        store.state.tasks = [pending_task]
        gateway.update.side_effect = RemoteCallError("boom")

        assert run(store.toggle_status(pending_task)) is None

        assert store.state.tasks == [pending_task]
        assert store.state.notices == [UPDATE_ERROR_NOTICE]

    # ── Borrado ──────────────────────────────────────────────────────────────

    def test_delete_removes_exactly_one_entry(self, store, gateway):
        store.state.tasks = [Task(id="1", title="a"), Task(id="2", title="b")]
        gateway.delete.return_value = None

        assert run(store.delete_task("1")) is True

        assert [t.id for t in store.state.tasks] == ["2"]

    def test_delete_failure_keeps_entry(self, store, gateway, pending_task):
        store.state.tasks = [pending_task]
        gateway.delete.side_effect = RemoteCallError("404")

        assert run(store.delete_task("1")) is False

        assert store.state.tasks == [pending_task]
        assert store.state.notices == [DELETE_ERROR_NOTICE]

    def test_mutation_applies_to_list_current_at_response_time(self, store, gateway):
        """Un borrado no resucita entradas eliminadas mientras estaba en vuelo."""
        store.state.tasks = [Task(id="1", title="a"), Task(id="2", title="b")]

        async def scenario():
            release = asyncio.Event()

            async def slow_delete(task_id):
                await release.wait()

            gateway.delete.side_effect = slow_delete
            gateway.update.return_value = Task(id="2", title="B")

            pending_delete = asyncio.create_task(store.delete_task("1"))
            await asyncio.sleep(0)
            await store.update_task("2", UpdateTaskCommand(title="B"))
            release.set()
            await pending_delete

        run(scenario())

        assert store.state.tasks == [Task(id="2", title="B")]

    # ── Política de errores en modo compatible ──────────────────────────────

    def test_mutation_errors_only_logged_when_notifications_disabled(self, gateway, caplog):
        store = TaskStoreController(gateway, notify_mutation_errors=False)
        gateway.create.side_effect = RemoteCallError("500")
        gateway.delete.side_effect = RemoteCallError("500")

        run(store.create_task(TaskDraft(title="x")))
        run(store.delete_task("1"))

        assert store.state.notices == []
        assert "Error creando tarea" in caplog.text
        assert "Error eliminando tarea 1" in caplog.text

    def test_load_errors_notified_even_when_mutation_notifications_disabled(self, gateway):
        store = TaskStoreController(gateway, notify_mutation_errors=False)
        gateway.list.side_effect = RemoteCallError("500")

        run(store.load_tasks(TaskFilter.COMPLETED))

        assert store.state.notices == [LOAD_ERROR_NOTICE]

    # ── Envío del formulario ─────────────────────────────────────────────────

    def test_save_without_id_creates(self, store, gateway):
        gateway.create.return_value = Task(id="n", title="x")

        run(store.save_task(None, TaskDraft(title="x")))

        gateway.create.assert_awaited_once()
        gateway.update.assert_not_called()

    def test_save_with_id_updates(self, store, gateway, pending_task):
        store.state.tasks = [pending_task]
        gateway.update.return_value = pending_task

        run(store.save_task("1", TaskDraft(title="x")))

        gateway.update.assert_awaited_once()
        gateway.create.assert_not_called()

    # ── Modal, avisos y suscripción ──────────────────────────────────────────

    def test_open_edit_refuses_completed_task(self, store):
        done = Task(id="1", title="t", status=TaskStatus.COMPLETED)

        assert store.open_edit(done) is False
        assert store.state.modal_open is False

    def test_open_edit_and_close_modal(self, store, pending_task):
        assert store.open_edit(pending_task) is True
        assert store.state.modal_open is True
        assert store.state.current_task is pending_task

        store.close_modal()

        assert store.state.modal_open is False
        assert store.state.current_task is None

    def test_open_create_clears_current_task(self, store, pending_task):
        store.open_edit(pending_task)
        store.open_create()

        assert store.state.modal_open is True
        assert store.state.current_task is None

    def test_subscribers_receive_state_and_can_unsubscribe(self, store, gateway):
        listener = Mock()
        unsubscribe = store.subscribe(listener)
        gateway.list.return_value = []

        run(store.load_tasks(TaskFilter.ALL))
        calls_after_load = listener.call_count
        unsubscribe()
        store.open_create()

        assert calls_after_load == 2  # loading=True y resultado
        assert listener.call_count == calls_after_load
        listener.assert_called_with(store.state)

    def test_dismiss_notices(self, store):
        store.state.notices.append(LOAD_ERROR_NOTICE)

        store.dismiss_notices()

        assert store.state.notices == []

    def test_initial_state(self, gateway):
        store = TaskStoreController(gateway, AppState(filter=TaskFilter.PENDING))

        assert store.state.loading is True
        assert store.state.filter is TaskFilter.PENDING
        assert store.state.tasks == []
