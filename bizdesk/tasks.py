"""
BIZDESK - Task Store
====================
Task collection with profile annotation and the card menu lifecycle:

    pending --Iniciar--> in_progress --Concluir--> completed
                              ^                         |
                              +--------Reabrir----------+

"overdue" is not a state here; see views.display_status.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from .auth import AuthContext
from .backend import TASKS_TABLE
from .errors import ActionNotOffered, BizdeskError
from .i18n import task_status_label, tr
from .schema import (
    TASK_REQUIRED_FIELDS,
    TASK_WRITABLE_FIELDS,
    CurrentUser,
    DisplayStatus,
    Result,
    Task,
    TaskPriority,
    TaskStatus,
)
from .store import (
    BACKEND_ERRORS,
    EditableStore,
    ProfileDirectory,
    coerce_choice,
    describe_backend_error,
)

logger = logging.getLogger("bizdesk.tasks")


class TaskAction(str, Enum):
    """Status actions offered on task cards"""
    START = "start"
    COMPLETE = "complete"
    REOPEN = "reopen"
    MARK_COMPLETED = "mark_completed"   # list view shortcut


class CardVariant(str, Enum):
    KANBAN = "kanban"
    LIST = "list"


ACTION_TARGETS = {
    TaskAction.START: TaskStatus.IN_PROGRESS,
    TaskAction.COMPLETE: TaskStatus.COMPLETED,
    TaskAction.REOPEN: TaskStatus.IN_PROGRESS,
    TaskAction.MARK_COMPLETED: TaskStatus.COMPLETED,
}

KANBAN_MENU = {
    TaskStatus.PENDING: [TaskAction.START],
    TaskStatus.IN_PROGRESS: [TaskAction.COMPLETE],
    TaskStatus.COMPLETED: [TaskAction.REOPEN],
}


def available_actions(task: Task, variant: CardVariant = CardVariant.KANBAN) -> List[TaskAction]:
    """Status actions the card menu offers for this task"""
    if CardVariant(variant) == CardVariant.LIST:
        return [] if task.status == TaskStatus.COMPLETED else [TaskAction.MARK_COMPLETED]
    return list(KANBAN_MENU.get(task.status, []))


def action_label(action: TaskAction) -> str:
    return tr(f"tasks.action.{TaskAction(action).value}")


class TaskStore(EditableStore[Task]):
    """
    The `tasks` table.

    Every fetch also refreshes the profile directory, so a task whose
    `assigned_to` changed shows the new assignee on the next read.
    """

    table = TASKS_TABLE
    model = Task
    message_prefix = "tasks"
    required_fields = TASK_REQUIRED_FIELDS
    writable_fields = TASK_WRITABLE_FIELDS

    def __init__(
        self,
        client: Any,
        auth: AuthContext,
        profiles: Optional[ProfileDirectory] = None,
    ):
        super().__init__(client, auth)
        self.profiles = profiles or ProfileDirectory(client, auth)

    # ========================================
    # LIFECYCLE
    # ========================================

    def transition(
        self,
        task_id: str,
        action: TaskAction,
        variant: CardVariant = CardVariant.KANBAN,
    ) -> Result:
        """Run a card menu action, refusing actions the card would not offer"""
        return self._run("transition", self._transition, task_id, TaskAction(action), variant)

    def start(self, task_id: str) -> Result:
        return self.transition(task_id, TaskAction.START)

    def complete(self, task_id: str) -> Result:
        return self.transition(task_id, TaskAction.COMPLETE)

    def reopen(self, task_id: str) -> Result:
        return self.transition(task_id, TaskAction.REOPEN)

    def _transition(self, task_id: str, action: TaskAction, variant: CardVariant) -> Task:
        self.auth.require_user()

        task = self.get(task_id)
        if task is None:
            raise BizdeskError(tr("tasks.error.not_found"))

        if action not in available_actions(task, variant):
            raise ActionNotOffered(tr(
                "tasks.error.action_not_offered",
                action=action_label(action),
                status=task_status_label(task.status),
            ))

        logger.info(f"▶️ {action_label(action)}: {task.title} ({task_id})")
        return self._update(task_id, {"status": ACTION_TARGETS[action]})

    # ========================================
    # STORE HOOKS
    # ========================================

    def _before_fetch(self) -> None:
        # Tasks still load when the directory does not; they just lose their names
        try:
            self.profiles.refresh()
        except BACKEND_ERRORS as e:
            logger.warning(f"⚠️ Profile directory unavailable: {describe_backend_error(e)}")

    def _hydrate(self, rows: List[Dict[str, Any]]) -> List[Task]:
        tasks = super()._hydrate(rows)
        for task in tasks:
            task.assigned_profile = self.profiles.lookup(task.assigned_to)
            task.creator_profile = self.profiles.lookup(task.created_by)
        return tasks

    def _prepare(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if coerce_choice(data, "status", DisplayStatus) == DisplayStatus.OVERDUE:
            raise BizdeskError(tr("tasks.error.overdue_not_stored"))
        coerce_choice(data, "priority", TaskPriority)
        if isinstance(data.get("title"), str):
            data["title"] = data["title"].strip()
        return data

    def _insert_row(self, data: Dict[str, Any], user: CurrentUser) -> Dict[str, Any]:
        row = {
            "title": data["title"],
            "description": data.get("description"),
            "priority": data.get("priority") or TaskPriority.MEDIUM,
            "due_date": data.get("due_date"),
            "assigned_to": data.get("assigned_to"),
            "created_by": user.id,
        }
        # New tasks start as pending on the backend unless told otherwise
        if data.get("status") is not None:
            row["status"] = TaskStatus(data["status"].value)
        return row
