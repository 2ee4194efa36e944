#!/usr/bin/env python3
"""
BIZDESK - CLI Interface
=======================
Command-line front end for the task and sales modules.

Usage:
    bizdesk home
    bizdesk tasks list --view list
    bizdesk tasks create "Ligar para fornecedor" --priority high --due 2026-11-03
    bizdesk tasks start <id>
    bizdesk sales create --customer "Ana" --product "Plano anual" --amount 1200
    bizdesk sales list --json

Credentials and the Supabase project come from BIZDESK_* environment
variables or a .env file.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from pydantic_core import to_jsonable_python

from .auth import AuthContext
from .backend import create_backend
from .config import get_settings
from .errors import BizdeskError
from .forms import Notice, submit_sale_form, submit_task_form
from .i18n import tr
from .logging_setup import setup_logging
from .render import (
    render_home,
    render_profiles,
    render_sales_page,
    render_task_board,
)
from .sales import SaleStore
from .schema import SaleStatus, TaskPriority, TaskStatus
from .store import ProfileDirectory
from .tasks import CardVariant, TaskAction, TaskStore
from .views import sales_summary, task_counts

logger = logging.getLogger("bizdesk.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bizdesk",
        description="bizdesk - tarefas e vendas da equipe",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bizdesk home                                  Welcome page
  bizdesk tasks list                            Kanban board
  bizdesk tasks list --view list                Flat list
  bizdesk tasks create "Title" -p high          New task
  bizdesk tasks edit <id> --assign <user_id>    Edit a task
  bizdesk tasks start|complete|reopen <id>      Card menu actions
  bizdesk tasks delete <id>                     Delete a task
  bizdesk sales create --customer Ana --product X --amount 10.50
  bizdesk sales list                            Revenue and sales
  bizdesk profiles                              Team directory
        """
    )
    parser.add_argument("--log-level", help="Override BIZDESK_LOG_LEVEL")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # HOME command
    subparsers.add_parser("home", help="Show the welcome page")

    # PROFILES command
    profiles_parser = subparsers.add_parser("profiles", help="List the team directory")
    profiles_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # TASKS commands
    tasks_parser = subparsers.add_parser("tasks", help="Task management")
    tasks_sub = tasks_parser.add_subparsers(dest="action", help="Task commands")

    list_parser = tasks_sub.add_parser("list", help="Show the task board")
    list_parser.add_argument("--view", choices=[v.value for v in CardVariant], default="kanban")
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")

    create_parser = tasks_sub.add_parser("create", help="Create a task")
    create_parser.add_argument("title", help="Task title")
    _add_task_fields(create_parser)

    edit_parser = tasks_sub.add_parser("edit", help="Edit a task")
    edit_parser.add_argument("task_id", help="Task ID")
    edit_parser.add_argument("-t", "--title", help="New title")
    edit_parser.add_argument("-s", "--status", choices=[s.value for s in TaskStatus])
    _add_task_fields(edit_parser)

    for action in TaskAction:
        action_parser = tasks_sub.add_parser(
            action.value.replace("_", "-"), help=f"Card action: {action.value}"
        )
        action_parser.add_argument("task_id", help="Task ID")

    delete_parser = tasks_sub.add_parser("delete", help="Delete a task")
    delete_parser.add_argument("task_id", help="Task ID")

    # SALES commands
    sales_parser = subparsers.add_parser("sales", help="Sales management")
    sales_sub = sales_parser.add_subparsers(dest="action", help="Sale commands")

    sales_list = sales_sub.add_parser("list", help="Show sales and revenue")
    sales_list.add_argument("--json", action="store_true", help="Output as JSON")

    sale_create = sales_sub.add_parser("create", help="Create a sale")
    _add_sale_fields(sale_create)

    sale_edit = sales_sub.add_parser("edit", help="Edit a sale")
    sale_edit.add_argument("sale_id", help="Sale ID")
    _add_sale_fields(sale_edit)

    sale_delete = sales_sub.add_parser("delete", help="Delete a sale")
    sale_delete.add_argument("sale_id", help="Sale ID")

    return parser


def _add_task_fields(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-d", "--description", help="Description ('' clears it)")
    parser.add_argument("-p", "--priority", choices=[p.value for p in TaskPriority])
    parser.add_argument("--due", dest="due_date", help="Due date (YYYY-MM-DD, '' clears it)")
    parser.add_argument("--assign", dest="assigned_to", help="Assignee user_id ('' unassigns)")


def _add_sale_fields(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--customer", dest="customer_name", help="Customer name")
    parser.add_argument("--email", dest="customer_email", help="Customer e-mail")
    parser.add_argument("--product", help="Product")
    parser.add_argument("--amount", help="Amount (e.g. 1234.56)")
    parser.add_argument("--status", choices=[s.value for s in SaleStatus])
    parser.add_argument("--date", dest="sale_date", help="Sale date (YYYY-MM-DD)")


def _form_input(args: argparse.Namespace, names: List[str]) -> Dict[str, Any]:
    """Flags the user actually passed, as raw form input"""
    return {
        name: getattr(args, name)
        for name in names
        if getattr(args, name, None) is not None
    }


def _print_notice(notice: Notice) -> int:
    if notice.is_error:
        print(f"❌ {notice.title}: {notice.description}")
        return 1
    print(f"✅ {notice.description}")
    return 0


def _print_json(data: Any) -> None:
    print(json.dumps(to_jsonable_python(data), indent=2, ensure_ascii=False))


# ========================================
# COMMANDS
# ========================================

def run_tasks(args: argparse.Namespace, store: TaskStore) -> int:
    result = store.fetch_all()
    if not result.ok:
        print(f"❌ {result.error}")
        return 1

    if args.action in (None, "list"):
        view = getattr(args, "view", "kanban")
        if getattr(args, "json", False):
            _print_json({
                "counts": task_counts(store.items),
                "tasks": [task.model_dump(mode="json") for task in store.items],
            })
        else:
            print(render_task_board(store.items, CardVariant(view), color=sys.stdout.isatty()))
        return 0

    if args.action == "create":
        raw = _form_input(args, ["title", "description", "priority", "due_date", "assigned_to"])
        return _print_notice(submit_task_form(store, raw))

    if args.action == "edit":
        task = store.get(args.task_id)
        if task is None:
            return _print_notice(Notice.error(f"{tr('tasks.error.not_found')}: {args.task_id}"))
        raw = _form_input(
            args, ["title", "description", "priority", "due_date", "assigned_to", "status"]
        )
        return _print_notice(submit_task_form(store, raw, editing=task))

    if args.action == "delete":
        result = store.delete(args.task_id)
        if not result.ok:
            return _print_notice(Notice.error(result.error))
        return _print_notice(Notice.success(tr("tasks.deleted")))

    action = TaskAction(args.action.replace("-", "_"))
    variant = CardVariant.LIST if action == TaskAction.MARK_COMPLETED else CardVariant.KANBAN
    result = store.transition(args.task_id, action, variant)
    if not result.ok:
        return _print_notice(Notice.error(result.error))
    task = result.data
    print(f"▶️ {task.title}: {task.status.value}")
    return 0


def run_sales(args: argparse.Namespace, store: SaleStore) -> int:
    result = store.fetch_all()
    if not result.ok:
        print(f"❌ {result.error}")
        return 1

    fields = ["customer_name", "customer_email", "product", "amount", "status", "sale_date"]

    if args.action in (None, "list"):
        summary = sales_summary(store.items)
        if getattr(args, "json", False):
            _print_json({
                "summary": summary.model_dump(mode="json"),
                "sales": [sale.model_dump(mode="json") for sale in store.items],
            })
        else:
            print(render_sales_page(store.items, summary, color=sys.stdout.isatty()))
        return 0

    if args.action == "create":
        return _print_notice(submit_sale_form(store, _form_input(args, fields)))

    if args.action == "edit":
        sale = store.get(args.sale_id)
        if sale is None:
            return _print_notice(Notice.error(f"{tr('sales.error.not_found')}: {args.sale_id}"))
        return _print_notice(submit_sale_form(store, _form_input(args, fields), editing=sale))

    if args.action == "delete":
        result = store.delete(args.sale_id)
        if not result.ok:
            return _print_notice(Notice.error(result.error))
        return _print_notice(Notice.success(tr("sales.deleted")))

    return 1


def run_profiles(args: argparse.Namespace, directory: ProfileDirectory) -> int:
    result = directory.fetch_all()
    if not result.ok:
        print(f"❌ {result.error}")
        return 1
    if args.json:
        _print_json([profile.model_dump(mode="json") for profile in directory.items])
    else:
        print(render_profiles(directory.items))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    settings = get_settings()
    setup_logging(args.log_level or settings.log_level, settings.log_file)

    try:
        settings.require_credentials()
        client = create_backend(settings)
        auth = AuthContext(client)
        auth.sign_in(settings.email, settings.password)
    except BizdeskError as e:
        print(f"❌ {e.message}")
        return 1

    try:
        logger.debug(f"Running {args.command} {getattr(args, 'action', None) or ''}".rstrip())
        if args.command == "home":
            print(render_home(auth.user))
            return 0
        if args.command == "profiles":
            return run_profiles(args, ProfileDirectory(client, auth))
        if args.command == "tasks":
            return run_tasks(args, TaskStore(client, auth))
        if args.command == "sales":
            return run_sales(args, SaleStore(client, auth))
        return 1
    finally:
        auth.sign_out()


if __name__ == "__main__":
    sys.exit(main())
