"""
BIZDESK - Derived Views
=======================
Pure functions over the in-memory collections. Nothing here is stored;
everything is recomputed from (records, now) on every render.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from .schema import DisplayStatus, Sale, SaleStatus, Task, TaskStatus, as_utc, utcnow


def is_overdue(task: Task, now: Optional[datetime] = None) -> bool:
    """Due date in the past and not completed"""
    if task.due_date is None or task.status == TaskStatus.COMPLETED:
        return False
    return task.due_date < (as_utc(now) or utcnow())


def display_status(task: Task, now: Optional[datetime] = None) -> DisplayStatus:
    if is_overdue(task, now):
        return DisplayStatus.OVERDUE
    return DisplayStatus(task.status.value)


class TaskBoard(BaseModel):
    """
    Kanban columns. The first three follow the stored status, so an overdue
    pending task shows up under both "pending" and "overdue".
    """
    pending: List[Task] = Field(default_factory=list)
    in_progress: List[Task] = Field(default_factory=list)
    completed: List[Task] = Field(default_factory=list)
    overdue: List[Task] = Field(default_factory=list)

    @property
    def counts(self) -> Dict[str, int]:
        return {
            DisplayStatus.PENDING.value: len(self.pending),
            DisplayStatus.IN_PROGRESS.value: len(self.in_progress),
            DisplayStatus.COMPLETED.value: len(self.completed),
            DisplayStatus.OVERDUE.value: len(self.overdue),
        }

    def columns(self) -> List[tuple]:
        return [
            (DisplayStatus.PENDING, self.pending),
            (DisplayStatus.IN_PROGRESS, self.in_progress),
            (DisplayStatus.COMPLETED, self.completed),
            (DisplayStatus.OVERDUE, self.overdue),
        ]


def task_board(tasks: Iterable[Task], now: Optional[datetime] = None) -> TaskBoard:
    now = now or utcnow()
    board = TaskBoard()
    for task in tasks:
        if task.status == TaskStatus.PENDING:
            board.pending.append(task)
        elif task.status == TaskStatus.IN_PROGRESS:
            board.in_progress.append(task)
        elif task.status == TaskStatus.COMPLETED:
            board.completed.append(task)
        if is_overdue(task, now):
            board.overdue.append(task)
    return board


def task_counts(tasks: Iterable[Task], now: Optional[datetime] = None) -> Dict[str, int]:
    return task_board(tasks, now).counts


def overdue_count(tasks: Iterable[Task], now: Optional[datetime] = None) -> int:
    now = now or utcnow()
    return sum(1 for task in tasks if is_overdue(task, now))


def revenue_total(sales: Iterable[Sale]) -> Decimal:
    """Sum of amounts over every sale, whatever its status"""
    return sum((sale.amount for sale in sales), Decimal("0"))


def sale_counts(sales: Iterable[Sale]) -> Dict[str, int]:
    summary = {status.value: 0 for status in SaleStatus}
    for sale in sales:
        summary[sale.status.value] += 1
    return summary


class SalesSummary(BaseModel):
    total_revenue: Decimal = Decimal("0")
    total_count: int = 0
    by_status: Dict[str, int] = Field(default_factory=dict)

    @property
    def completed_count(self) -> int:
        return self.by_status.get(SaleStatus.COMPLETED.value, 0)

    @property
    def pending_count(self) -> int:
        return self.by_status.get(SaleStatus.PENDING.value, 0)


def sales_summary(sales: Iterable[Sale]) -> SalesSummary:
    sales = list(sales)
    return SalesSummary(
        total_revenue=revenue_total(sales),
        total_count=len(sales),
        by_status=sale_counts(sales),
    )
