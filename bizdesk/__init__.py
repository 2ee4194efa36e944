"""
BIZDESK - Team Tasks and Sales
==============================

Task and sales record keeping on top of Supabase, with a profile
directory for assignees and live counters.

Usage:
    from bizdesk import AuthContext, TaskStore, SaleStore, create_backend, revenue_total

    client = create_backend()
    auth = AuthContext(client)
    auth.sign_in("ana@example.com", "secret")

    tasks = TaskStore(client, auth)
    tasks.fetch_all()
    result = tasks.create({"title": "Ligar para fornecedor", "priority": "high"})
    tasks.start(result.data.id)

    sales = SaleStore(client, auth)
    sales.create({"customer_name": "Ana", "product": "Plano anual", "amount": "1200"})
    print(revenue_total(sales.items))
"""

from .schema import (
    Task,
    TaskStatus,
    TaskPriority,
    DisplayStatus,
    Sale,
    SaleStatus,
    Profile,
    ProfileRole,
    CurrentUser,
    Result,
)

from .auth import AuthContext
from .backend import create_backend
from .store import ProfileDirectory
from .tasks import TaskStore, TaskAction, CardVariant, available_actions
from .sales import SaleStore
from .views import (
    is_overdue,
    display_status,
    task_board,
    task_counts,
    overdue_count,
    revenue_total,
    sale_counts,
    sales_summary,
)

__version__ = "1.0.0"
__all__ = [
    "AuthContext",
    "create_backend",
    "TaskStore",
    "SaleStore",
    "ProfileDirectory",
    "Task",
    "TaskStatus",
    "TaskPriority",
    "TaskAction",
    "CardVariant",
    "DisplayStatus",
    "Sale",
    "SaleStatus",
    "Profile",
    "ProfileRole",
    "CurrentUser",
    "Result",
    "available_actions",
    "is_overdue",
    "display_status",
    "task_board",
    "task_counts",
    "overdue_count",
    "revenue_total",
    "sale_counts",
    "sales_summary",
]
