"""
BIZDESK - Labels and Locale
===========================
All user-facing text, currency and date formatting. The application is
fixed to Brazilian Portuguese; there is no language switch.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from .schema import DisplayStatus, SaleStatus, TaskPriority

CURRENCY_SYMBOL = "R$"
DATE_FORMAT = "%d/%m/%Y"

TRANSLATIONS = {
    # Home
    "home.welcome": "Bem-vindo, {name}!",
    "home.tasks.title": "Tarefas",
    "home.tasks.description": "Crie, atribua e acompanhe tarefas da equipe",
    "home.tasks.open": "Acessar Tarefas",
    "home.sales.title": "Vendas",
    "home.sales.description": "Centralize informações de vendas e gere relatórios",
    "home.folders.title": "Pastas",
    "home.folders.description": "Organize tarefas e vendas por pastas/categorias",
    "home.soon": "Em breve",

    # Tasks page
    "tasks.title": "Gestão de Tarefas",
    "tasks.subtitle": "Organize e acompanhe o progresso da equipe",
    "tasks.new": "Nova Tarefa",
    "tasks.edit": "Editar Tarefa",
    "tasks.empty": "Nenhuma tarefa encontrada",
    "tasks.unnamed_user": "Usuário sem nome",
    "tasks.unassigned": "Não atribuída",
    "tasks.created": "Tarefa criada com sucesso",
    "tasks.updated": "Tarefa atualizada com sucesso",
    "tasks.deleted": "Tarefa excluída com sucesso",
    "tasks.error.fetch": "Erro ao carregar tarefas",
    "tasks.error.create": "Erro ao criar tarefa",
    "tasks.error.update": "Erro ao atualizar tarefa",
    "tasks.error.delete": "Erro ao deletar tarefa",
    "tasks.error.not_found": "Tarefa não encontrada",
    "tasks.error.overdue_not_stored": "O status \"Atrasada\" é calculado e não pode ser salvo",
    "tasks.error.action_not_offered": "Ação \"{action}\" indisponível para tarefas com status \"{status}\"",

    # Task menu actions
    "tasks.action.edit": "Editar",
    "tasks.action.start": "Iniciar",
    "tasks.action.complete": "Concluir",
    "tasks.action.reopen": "Reabrir",
    "tasks.action.mark_completed": "Marcar como Concluída",
    "tasks.action.delete": "Excluir",

    # Task status / priority
    "task.status.pending": "Pendente",
    "task.status.in_progress": "Em Andamento",
    "task.status.completed": "Concluída",
    "task.status.overdue": "Atrasada",
    "task.bucket.pending": "Pendentes",
    "task.bucket.in_progress": "Em Andamento",
    "task.bucket.completed": "Concluídas",
    "task.bucket.overdue": "Atrasadas",
    "task.priority.low": "Baixa",
    "task.priority.medium": "Média",
    "task.priority.high": "Alta",

    # Sales page
    "sales.title": "Vendas",
    "sales.subtitle": "Gerencie suas vendas e acompanhe o desempenho",
    "sales.new": "Nova Venda",
    "sales.edit": "Editar Venda",
    "sales.empty": "Nenhuma venda encontrada",
    "sales.empty_hint": "Comece criando sua primeira venda clicando no botão \"Nova Venda\"",
    "sales.total_revenue": "Receita Total",
    "sales.completed": "Vendas Concluídas",
    "sales.pending": "Vendas Pendentes",
    "sales.count": "Total de Vendas",
    "sales.created": "Venda criada com sucesso",
    "sales.updated": "Venda atualizada com sucesso",
    "sales.deleted": "Venda excluída com sucesso",
    "sales.error.fetch": "Erro ao carregar vendas",
    "sales.error.create": "Erro ao criar venda",
    "sales.error.update": "Erro ao atualizar venda",
    "sales.error.delete": "Erro ao deletar venda",
    "sales.error.not_found": "Venda não encontrada",

    # Sale fields
    "sales.field.product": "Produto",
    "sales.field.amount": "Valor",

    # Sale status
    "sale.status.pending": "Pendente",
    "sale.status.processing": "Processando",
    "sale.status.completed": "Concluída",
    "sale.status.cancelled": "Cancelada",

    # Profiles
    "profiles.title": "Equipe",
    "profiles.error.fetch": "Erro ao carregar perfis",
    "profile.role.admin": "Administrador",
    "profile.role.manager": "Gerente",
    "profile.role.member": "Membro",

    # Shared
    "common.success": "Sucesso",
    "common.error": "Erro",
    "common.required": "Preencha todos os campos obrigatórios",
    "common.invalid": "Verifique os campos: {fields}",
    "common.unauthenticated": "Usuário não autenticado",
    "common.sign_in_failed": "Falha ao entrar: {reason}",
    "common.missing_config": "Configuração ausente: {names}",
}


def tr(key: str, **kwargs) -> str:
    """
    Get the display string for the given key.

    Args:
        key: Translation key (e.g., 'tasks.new')
        **kwargs: Format arguments for string interpolation

    Returns:
        Translated string, or the key itself if not found.
    """
    text = TRANSLATIONS.get(key, key)
    if kwargs:
        try:
            text = text.format(**kwargs)
        except (KeyError, ValueError):
            pass
    return text


# ============================================================
# STATUS / PRIORITY TABLES
# ============================================================

TASK_STATUS_ICONS = {
    DisplayStatus.PENDING: "⬜",
    DisplayStatus.IN_PROGRESS: "🔵",
    DisplayStatus.COMPLETED: "✅",
    DisplayStatus.OVERDUE: "⏰",
}

# Badge colours
TASK_STATUS_COLORS = {
    DisplayStatus.PENDING: "gray",
    DisplayStatus.IN_PROGRESS: "blue",
    DisplayStatus.COMPLETED: "green",
    DisplayStatus.OVERDUE: "red",
}

PRIORITY_COLORS = {
    TaskPriority.LOW: "green",
    TaskPriority.MEDIUM: "yellow",
    TaskPriority.HIGH: "red",
}

SALE_STATUS_COLORS = {
    SaleStatus.PENDING: "yellow",
    SaleStatus.PROCESSING: "blue",
    SaleStatus.COMPLETED: "green",
    SaleStatus.CANCELLED: "red",
}

SALE_STATUS_ICONS = {
    SaleStatus.PENDING: "🟡",
    SaleStatus.PROCESSING: "🔵",
    SaleStatus.COMPLETED: "✅",
    SaleStatus.CANCELLED: "❌",
}


def task_status_label(status: Union[DisplayStatus, str]) -> str:
    return tr(f"task.status.{DisplayStatus(getattr(status, 'value', status)).value}")


def priority_label(priority: Union[TaskPriority, str]) -> str:
    return tr(f"task.priority.{TaskPriority(priority).value}")


def sale_status_label(status: Union[SaleStatus, str]) -> str:
    return tr(f"sale.status.{SaleStatus(status).value}")


# ============================================================
# FORMATTING
# ============================================================

def format_currency(amount: Union[Decimal, int, float, str]) -> str:
    """R$ 1.234,56"""
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    grouped = f"{abs(value):,.2f}"  # 1,234.56
    swapped = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    sign = "-" if value < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL} {swapped}"


def format_date(value: Optional[datetime]) -> str:
    """dd/mm/yyyy, or an empty string"""
    if value is None:
        return ""
    return value.strftime(DATE_FORMAT)
