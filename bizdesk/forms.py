"""
BIZDESK - Forms and Dialogs
===========================
One form per entity, reused for create and edit. Submitting validates the
form before any backend call and answers with a Notice (toast) for the user.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError, field_validator

from .errors import FormValidationError
from .i18n import tr
from .sales import SaleStore, parse_amount
from .schema import (
    SALE_REQUIRED_FIELDS,
    TASK_REQUIRED_FIELDS,
    Sale,
    SaleStatus,
    Task,
    TaskPriority,
    TaskStatus,
    as_utc,
    coerce_timestamp,
    missing_fields,
    utcnow,
)
from .tasks import TaskStore

logger = logging.getLogger("bizdesk.forms")


class Notice(BaseModel):
    """Transient notification shown after a submit"""
    title: str
    description: str
    variant: str = "default"   # "default" or "destructive"

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"

    @classmethod
    def success(cls, description: str) -> "Notice":
        return cls(title=tr("common.success"), description=description)

    @classmethod
    def error(cls, description: str) -> "Notice":
        return cls(title=tr("common.error"), description=description, variant="destructive")


def _invalid(error: ValidationError) -> FormValidationError:
    fields = sorted({str(item["loc"][0]) for item in error.errors() if item.get("loc")})
    return FormValidationError(tr("common.invalid", fields=", ".join(fields)), fields=fields)


def changed_fields(payload: Dict[str, Any], record: BaseModel) -> Dict[str, Any]:
    """Keep only the payload entries that differ from the record being edited"""
    return {
        key: value
        for key, value in payload.items()
        if value != getattr(record, key, None)
    }


# ============================================================
# TASKS
# ============================================================

class TaskForm(BaseModel):
    title: str = ""
    description: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    assigned_to: str = ""
    due_date: Optional[datetime] = None   # typed dates become UTC midnight
    status: TaskStatus = TaskStatus.PENDING

    @field_validator("due_date", mode="before")
    @classmethod
    def _due_date(cls, value: Any) -> Any:
        return coerce_timestamp(value)

    @field_validator("due_date")
    @classmethod
    def _due_date_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    @classmethod
    def blank(cls) -> "TaskForm":
        return cls()

    @classmethod
    def from_task(cls, task: Task) -> "TaskForm":
        return cls(
            title=task.title,
            description=task.description or "",
            priority=task.priority,
            assigned_to=task.assigned_to or "",
            due_date=task.due_date,
            status=task.status,
        )

    @classmethod
    def parse(cls, raw: Dict[str, Any], base: Optional["TaskForm"] = None) -> "TaskForm":
        """Overlay raw input on `base` (or a blank form) and validate it"""
        values = (base or cls.blank()).model_dump()
        values.update({key: value for key, value in raw.items() if key in cls.model_fields})
        if values.get("due_date") == "":
            values["due_date"] = None

        missing = missing_fields(values, TASK_REQUIRED_FIELDS)
        if missing:
            raise FormValidationError(tr("common.required"), fields=missing)
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise _invalid(e) from e

    def payload(self, editing: bool = False) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "title": self.title.strip(),
            "description": self.description or None,
            "priority": self.priority,
            "assigned_to": self.assigned_to or None,
            "due_date": self.due_date,
        }
        # Status is only part of the edit dialog
        if editing:
            data["status"] = self.status
        return data


def task_dialog_title(editing: Optional[Task]) -> str:
    return tr("tasks.edit") if editing else tr("tasks.new")


def submit_task_form(store: TaskStore, raw: Dict[str, Any], editing: Optional[Task] = None) -> Notice:
    """Validate the task dialog and create or update through the store"""
    base = TaskForm.from_task(editing) if editing else None
    try:
        form = TaskForm.parse(raw, base=base)
    except FormValidationError as e:
        logger.warning(f"Task form rejected: {e.fields}")
        return Notice.error(e.message)

    if editing:
        result = store.update(editing.id, changed_fields(form.payload(editing=True), editing))
    else:
        result = store.create(form.payload())

    if not result.ok:
        return Notice.error(result.error)
    return Notice.success(tr("tasks.updated") if editing else tr("tasks.created"))


# ============================================================
# SALES
# ============================================================

class SaleForm(BaseModel):
    customer_name: str = ""
    customer_email: str = ""
    product: str = ""
    amount: str = ""
    status: SaleStatus = SaleStatus.PENDING
    sale_date: Optional[datetime] = None

    @field_validator("sale_date", mode="before")
    @classmethod
    def _sale_date(cls, value: Any) -> Any:
        return coerce_timestamp(value)

    @field_validator("sale_date")
    @classmethod
    def _sale_date_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    @classmethod
    def blank(cls) -> "SaleForm":
        return cls(sale_date=utcnow().date())

    @classmethod
    def from_sale(cls, sale: Sale) -> "SaleForm":
        return cls(
            customer_name=sale.customer_name,
            customer_email=sale.customer_email or "",
            product=sale.product,
            amount=str(sale.amount),
            status=sale.status,
            sale_date=sale.sale_date,
        )

    @classmethod
    def parse(cls, raw: Dict[str, Any], base: Optional["SaleForm"] = None) -> "SaleForm":
        values = (base or cls.blank()).model_dump()
        values.update({key: value for key, value in raw.items() if key in cls.model_fields})
        if values.get("sale_date") == "":
            values["sale_date"] = None
        if values.get("amount") is not None:
            values["amount"] = str(values["amount"])

        missing = missing_fields(values, SALE_REQUIRED_FIELDS)
        if missing:
            raise FormValidationError(tr("common.required"), fields=missing)
        try:
            form = cls.model_validate(values)
        except ValidationError as e:
            raise _invalid(e) from e

        # Same constraint as the amount input: a number, at least zero
        if form.parsed_amount < 0:
            raise FormValidationError(tr("common.invalid", fields="amount"), fields=["amount"])
        return form

    @property
    def parsed_amount(self) -> Decimal:
        return parse_amount(self.amount)

    def payload(self) -> Dict[str, Any]:
        return {
            "customer_name": self.customer_name.strip(),
            "customer_email": self.customer_email or None,
            "product": self.product.strip(),
            "amount": self.parsed_amount,
            "status": self.status,
            "sale_date": self.sale_date,
        }


def sale_dialog_title(editing: Optional[Sale]) -> str:
    return tr("sales.edit") if editing else tr("sales.new")


def submit_sale_form(store: SaleStore, raw: Dict[str, Any], editing: Optional[Sale] = None) -> Notice:
    """Validate the sale dialog and create or update through the store"""
    base = SaleForm.from_sale(editing) if editing else None
    try:
        form = SaleForm.parse(raw, base=base)
    except FormValidationError as e:
        logger.warning(f"Sale form rejected: {e.fields}")
        return Notice.error(e.message)

    if editing:
        result = store.update(editing.id, changed_fields(form.payload(), editing))
    else:
        result = store.create(form.payload())

    if not result.ok:
        return Notice.error(result.error)
    return Notice.success(tr("sales.updated") if editing else tr("sales.created"))
