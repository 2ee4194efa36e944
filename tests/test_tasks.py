# tests/test_tasks.py

from __future__ import annotations

import logging

from bizdesk.schema import TaskPriority, TaskStatus
from bizdesk.tasks import CardVariant, TaskAction, TaskStore, available_actions

from .conftest import ANA, BRUNO, CARLA
from .fakes import FakeSupabase


def _seed_tasks(backend: FakeSupabase) -> None:
    backend.seed(
        "tasks",
        {"id": "t-old", "title": "Inventário", "created_by": ANA, "assigned_to": BRUNO},
        {"id": "t-new", "title": "Relatório mensal", "created_by": BRUNO, "status": "in_progress"},
    )


def test_fetch_all_orders_newest_first_and_annotates_profiles(backend, task_store):
    _seed_tasks(backend)

    result = task_store.fetch_all()

    assert result.ok
    assert [t.id for t in task_store.items] == ["t-new", "t-old"]
    old = task_store.get("t-old")
    assert old.assigned_profile.full_name == "Bruno Lima"
    assert old.creator_profile.full_name == "Ana Souza"
    assert task_store.get("t-new").assigned_profile is None
    assert task_store.loading is False


def test_fetch_failure_keeps_previous_items_and_clears_loading(backend, task_store):
    _seed_tasks(backend)
    task_store.fetch_all()
    backend.fail("tasks", "select")

    result = task_store.fetch_all()

    assert not result.ok
    assert result.error == "Erro ao carregar tarefas"
    assert task_store.error == "Erro ao carregar tarefas"
    assert [t.id for t in task_store.items] == ["t-new", "t-old"]
    assert task_store.loading is False


def test_profile_directory_failure_still_loads_tasks(backend, task_store):
    _seed_tasks(backend)
    backend.fail("profiles", "select")

    result = task_store.fetch_all()

    assert result.ok
    assert task_store.error is None
    assert [t.id for t in task_store.items] == ["t-new", "t-old"]
    assert task_store.get("t-old").assigned_profile is None
    assert task_store.get("t-old").creator_profile is None


def test_profile_directory_failure_keeps_previous_names(backend, task_store):
    _seed_tasks(backend)
    task_store.fetch_all()
    backend.fail("profiles", "select")

    assert task_store.fetch_all().ok
    assert task_store.get("t-old").assigned_profile.full_name == "Bruno Lima"


def test_create_inserts_for_current_user_and_refetches(backend, task_store):
    result = task_store.create({
        "title": "  Ligar para fornecedor ",
        "priority": "high",
        "assigned_to": BRUNO,
        "description": "",
    })

    assert result.ok
    task = result.data
    assert task.title == "Ligar para fornecedor"
    assert task.priority == TaskPriority.HIGH
    assert task.status == TaskStatus.PENDING
    assert task.created_by == ANA
    assert task.description is None
    assert task.assigned_profile.full_name == "Bruno Lima"
    assert [t.id for t in task_store.items] == [task.id]

    insert = next(c for c in backend.calls if c.op == "insert")
    assert insert.payload["created_by"] == ANA
    assert "status" not in insert.payload
    # Insert is followed by a refetch of profiles and tasks
    assert backend.ops()[-2:] == ["select", "select"]


def test_create_without_title_never_calls_backend(backend, task_store):
    result = task_store.create({"title": "   ", "priority": "low"})

    assert result.error == "Preencha todos os campos obrigatórios"
    assert backend.calls == []


def test_update_is_sparse_and_visible_without_manual_refresh(backend, task_store):
    _seed_tasks(backend)
    task_store.fetch_all()

    result = task_store.update("t-old", {"description": "Contar estoque", "id": "hijack"})

    assert result.ok
    patch = next(c for c in backend.calls if c.op == "update")
    assert patch.payload == {"description": "Contar estoque"}
    assert patch.filters == (("id", "t-old"),)
    assert task_store.get("t-old").description == "Contar estoque"
    assert task_store.get("t-old").title == "Inventário"


def test_reassignment_is_reflected_on_next_read(backend, task_store):
    _seed_tasks(backend)
    task_store.fetch_all()

    result = task_store.update("t-old", {"assigned_to": ANA})

    assert result.data.assigned_profile.full_name == "Ana Souza"
    assert task_store.get("t-old").assigned_profile.full_name == "Ana Souza"


def test_profile_rename_is_picked_up_on_next_fetch(backend, task_store):
    _seed_tasks(backend)
    task_store.fetch_all()
    backend.tables["profiles"][1]["full_name"] = "Bruno L."

    task_store.fetch_all()

    assert task_store.get("t-old").assigned_profile.full_name == "Bruno L."


def test_update_of_missing_row_reports_not_found(backend, task_store):
    result = task_store.update("nope", {"title": "x"})

    assert result.error == "Tarefa não encontrada"


def test_empty_patch_returns_cached_record_or_not_found(backend, task_store):
    _seed_tasks(backend)
    task_store.fetch_all()
    backend.calls.clear()

    assert task_store.update("t-old", {"created_by": "x"}).data.id == "t-old"
    assert task_store.update("nope", {}).error == "Tarefa não encontrada"
    assert backend.calls == []


def test_overdue_can_not_be_stored(backend, task_store):
    _seed_tasks(backend)
    task_store.fetch_all()
    backend.calls.clear()

    result = task_store.update("t-old", {"status": "overdue"})

    assert not result.ok
    assert "Atrasada" in result.error
    assert backend.calls == []


def test_unknown_priority_is_a_form_error(backend, task_store):
    result = task_store.create({"title": "x", "priority": "urgent"})

    assert result.error == "Verifique os campos: priority"
    assert backend.calls == []


def test_delete_removes_and_refetches(backend, task_store):
    _seed_tasks(backend)
    task_store.fetch_all()

    result = task_store.delete("t-new")

    assert result.ok
    assert result.data == "t-new"
    assert [t.id for t in task_store.items] == ["t-old"]


def test_backend_error_on_mutation_is_a_display_string(backend, task_store):
    backend.fail("tasks", "insert")

    result = task_store.create({"title": "x"})

    assert result.error == "Erro ao criar tarefa"
    assert task_store.items == []


def test_every_operation_refuses_without_user(backend, anonymous):
    store = TaskStore(backend, anonymous)

    results = [
        store.fetch_all(),
        store.create({"title": "x"}),
        store.update("t-1", {"title": "y"}),
        store.delete("t-1"),
        store.transition("t-1", TaskAction.START),
    ]

    assert all(r.error == "Usuário não autenticado" for r in results)
    assert backend.calls == []


# ========================================
# LIFECYCLE
# ========================================

def test_kanban_menu_offers_adjacent_actions(backend, task_store):
    backend.seed(
        "tasks",
        {"id": "a", "title": "A", "created_by": ANA, "status": "pending"},
        {"id": "b", "title": "B", "created_by": ANA, "status": "in_progress"},
        {"id": "c", "title": "C", "created_by": ANA, "status": "completed"},
    )
    task_store.fetch_all()

    assert available_actions(task_store.get("a")) == [TaskAction.START]
    assert available_actions(task_store.get("b")) == [TaskAction.COMPLETE]
    assert available_actions(task_store.get("c")) == [TaskAction.REOPEN]
    assert available_actions(task_store.get("a"), CardVariant.LIST) == [TaskAction.MARK_COMPLETED]
    assert available_actions(task_store.get("c"), CardVariant.LIST) == []


def test_start_complete_reopen(backend, task_store):
    backend.seed("tasks", {"id": "a", "title": "A", "created_by": CARLA})
    task_store.fetch_all()

    assert task_store.start("a").data.status == TaskStatus.IN_PROGRESS
    assert task_store.complete("a").data.status == TaskStatus.COMPLETED
    assert task_store.reopen("a").data.status == TaskStatus.IN_PROGRESS
    assert task_store.get("a").status == TaskStatus.IN_PROGRESS


def test_action_not_offered_is_refused_without_backend_call(backend, task_store, caplog):
    backend.seed("tasks", {"id": "a", "title": "A", "created_by": ANA})
    task_store.fetch_all()
    backend.calls.clear()

    with caplog.at_level(logging.WARNING, logger="bizdesk.store"):
        result = task_store.complete("a")

    assert result.error == 'Ação "Concluir" indisponível para tarefas com status "Pendente"'
    assert "transition on tasks refused" in caplog.text
    assert backend.calls == []


def test_action_on_unknown_task_is_not_found(backend, task_store):
    assert task_store.start("nope").error == "Tarefa não encontrada"


def test_list_shortcut_completes_any_open_task(backend, task_store):
    backend.seed("tasks", {"id": "a", "title": "A", "created_by": ANA})
    task_store.fetch_all()

    result = task_store.transition("a", TaskAction.MARK_COMPLETED, CardVariant.LIST)

    assert result.data.status == TaskStatus.COMPLETED


def test_direct_edit_may_set_any_stored_status(backend, task_store):
    backend.seed("tasks", {"id": "a", "title": "A", "created_by": ANA})
    task_store.fetch_all()

    result = task_store.update("a", {"status": "completed"})

    assert result.data.status == TaskStatus.COMPLETED
