"""
BIZDESK - Text Rendering
========================
Cards, boards and pages as plain text for the terminal.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from .i18n import (
    PRIORITY_COLORS,
    SALE_STATUS_COLORS,
    SALE_STATUS_ICONS,
    TASK_STATUS_COLORS,
    TASK_STATUS_ICONS,
    format_currency,
    format_date,
    priority_label,
    sale_status_label,
    task_status_label,
    tr,
)
from .schema import CurrentUser, Profile, Sale, Task
from .tasks import CardVariant, action_label, available_actions
from .views import SalesSummary, display_status, is_overdue, task_board

RULE = "-" * 60

ANSI_CODES = {
    "gray": "90",
    "red": "31",
    "green": "32",
    "yellow": "33",
    "blue": "34",
}


def badge(text: str, colour: str, color: bool = False) -> str:
    """Label in its badge colour when writing to a terminal"""
    if not color:
        return text
    return f"\033[{ANSI_CODES.get(colour, '0')}m{text}\033[0m"


def profile_name(profile: Optional[Profile]) -> str:
    if profile is None:
        return tr("tasks.unassigned")
    return profile.full_name or tr("tasks.unnamed_user")


def render_task_card(
    task: Task,
    variant: CardVariant = CardVariant.KANBAN,
    now: Optional[datetime] = None,
    color: bool = False,
) -> str:
    """One task, with its labels and the menu actions it offers"""
    status = display_status(task, now)
    icon = TASK_STATUS_ICONS[status]
    actions = [action_label(a) for a in available_actions(task, variant)]
    menu = " | ".join([tr("tasks.action.edit"), *actions, tr("tasks.action.delete")])
    priority = badge(priority_label(task.priority), PRIORITY_COLORS[task.priority], color)
    status_text = badge(task_status_label(status), TASK_STATUS_COLORS[status], color)

    if CardVariant(variant) == CardVariant.LIST:
        header = f"{icon} [{task.id}] {task.title} ({priority} · {status_text})"
    else:
        header = f"{icon} [{task.id}] {task.title} ({priority})"
        if is_overdue(task, now):
            header += f" ⚠️ {status_text}"

    lines = [header]
    if task.description:
        lines.append(f"    {task.description}")

    details = []
    if task.assigned_profile is not None:
        details.append(f"👤 {profile_name(task.assigned_profile)}")
    if task.due_date is not None:
        details.append(f"📅 {format_date(task.due_date)}")
    if details:
        lines.append("    " + "  ".join(details))

    lines.append(f"    » {menu}")
    return "\n".join(lines)


def render_task_board(
    tasks: Iterable[Task],
    variant: CardVariant = CardVariant.KANBAN,
    now: Optional[datetime] = None,
    color: bool = False,
) -> str:
    """Counters followed by kanban columns or a flat list"""
    tasks = list(tasks)
    board = task_board(tasks, now)

    lines = [
        f"📋 {tr('tasks.title')}",
        tr("tasks.subtitle"),
        "",
        "  ".join(
            f"{tr(f'task.bucket.{status.value}')}: {len(column)}"
            for status, column in board.columns()
        ),
        RULE,
    ]

    if not tasks:
        lines.append(tr("tasks.empty"))
        return "\n".join(lines)

    if CardVariant(variant) == CardVariant.LIST:
        for task in tasks:
            lines.append(render_task_card(task, CardVariant.LIST, now, color))
        return "\n".join(lines)

    for status, column in board.columns():
        lines.append(f"{tr(f'task.bucket.{status.value}')} ({len(column)})")
        for task in column:
            lines.append(render_task_card(task, CardVariant.KANBAN, now, color))
        lines.append("")
    return "\n".join(lines).rstrip()


def render_sale_card(sale: Sale, color: bool = False) -> str:
    icon = SALE_STATUS_ICONS[sale.status]
    status = badge(sale_status_label(sale.status), SALE_STATUS_COLORS[sale.status], color)
    lines = [f"{icon} [{sale.id}] {sale.customer_name} · {status}"]
    if sale.customer_email:
        lines.append(f"    ✉️ {sale.customer_email}")
    lines.append(f"    {tr('sales.field.product')}: {sale.product}")
    lines.append(f"    {tr('sales.field.amount')}: {format_currency(sale.amount)}")
    if sale.sale_date is not None:
        lines.append(f"    📅 {format_date(sale.sale_date)}")
    return "\n".join(lines)


def render_sales_page(sales: Iterable[Sale], summary: SalesSummary, color: bool = False) -> str:
    sales = list(sales)
    lines = [
        f"💰 {tr('sales.title')}",
        tr("sales.subtitle"),
        "",
        f"{tr('sales.total_revenue')}: {format_currency(summary.total_revenue)}",
        f"{tr('sales.completed')}: {summary.completed_count}",
        f"{tr('sales.pending')}: {summary.pending_count}",
        f"{tr('sales.count')}: {summary.total_count}",
        RULE,
    ]
    if not sales:
        lines.append(tr("sales.empty"))
        lines.append(tr("sales.empty_hint"))
    else:
        lines.extend(render_sale_card(sale, color) for sale in sales)
    return "\n".join(lines)


def render_profiles(profiles: Iterable[Profile]) -> str:
    lines = [f"👥 {tr('profiles.title')}", RULE]
    for profile in profiles:
        role = tr(f"profile.role.{profile.role.value}")
        lines.append(f"  [{profile.user_id}] {profile_name(profile)} ({role})")
    return "\n".join(lines)


def render_home(user: CurrentUser) -> str:
    """Landing page with the module cards"""
    lines: List[str] = [
        tr("home.welcome", name=user.display_name),
        RULE,
        f"📋 {tr('home.tasks.title')}: {tr('home.tasks.description')}",
        f"    » {tr('home.tasks.open')}: bizdesk tasks list",
        f"💰 {tr('home.sales.title')}: {tr('home.sales.description')}",
        "    » bizdesk sales list",
        f"📁 {tr('home.folders.title')}: {tr('home.folders.description')}",
        f"    » {tr('home.soon')}",
        RULE,
    ]
    return "\n".join(lines)
