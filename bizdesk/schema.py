"""
BIZDESK - Record Schema Definition
==================================
Tasks, sales and the profile directory as stored in Supabase.

Author: bizdesk maintainers
"""

from datetime import date, datetime, time, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, field_validator


class TaskStatus(str, Enum):
    """Stored task states"""
    PENDING = "pending"           # Not started
    IN_PROGRESS = "in_progress"   # Someone is on it
    COMPLETED = "completed"       # Done


class DisplayStatus(str, Enum):
    """Task status as shown to users. OVERDUE is never stored."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class TaskPriority(str, Enum):
    """Task priority levels"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SaleStatus(str, Enum):
    """Sale states, no enforced transitions"""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ProfileRole(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    MEMBER = "member"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def coerce_timestamp(value: Any) -> Any:
    """Turn bare dates ("2026-01-28" or date objects) into midnight datetimes."""
    if value is None or value == "":
        return None
    if isinstance(value, str) and len(value) == 10:
        value = date.fromisoformat(value)
    if isinstance(value, date) and not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    return value


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive timestamps from the backend are UTC"""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Record(BaseModel):
    """Common columns of every backend row"""
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _timestamps(cls, value: Any) -> Any:
        return coerce_timestamp(value)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _timestamps_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class Profile(BaseModel):
    """Directory entry for an application user"""
    id: str
    user_id: str
    full_name: Optional[str] = None
    role: ProfileRole = ProfileRole.MEMBER


class Task(Record):
    """Task row, annotated with directory profiles on read"""
    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[datetime] = None
    assigned_to: Optional[str] = None   # auth user id
    created_by: str

    # Filled in by TaskStore, never written back
    assigned_profile: Optional[Profile] = None
    creator_profile: Optional[Profile] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def _due_date(cls, value: Any) -> Any:
        return coerce_timestamp(value)

    @field_validator("due_date")
    @classmethod
    def _due_date_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class Sale(Record):
    """Sale row"""
    customer_name: str
    customer_email: Optional[str] = None
    product: str
    amount: Decimal = Decimal("0")
    status: SaleStatus = SaleStatus.PENDING
    sale_date: Optional[datetime] = None
    created_by: str

    @field_validator("sale_date", mode="before")
    @classmethod
    def _sale_date(cls, value: Any) -> Any:
        return coerce_timestamp(value)

    @field_validator("sale_date")
    @classmethod
    def _sale_date_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class CurrentUser(BaseModel):
    """Authenticated account, as handed out by the auth context"""
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.email or self.id


class Result(BaseModel):
    """Outcome of a store operation: a record or a display error"""
    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, message: str) -> "Result":
        return cls(error=message)


# Columns the forms are allowed to write
TASK_WRITABLE_FIELDS = ("title", "description", "status", "priority", "due_date", "assigned_to")
SALE_WRITABLE_FIELDS = ("customer_name", "customer_email", "product", "amount", "status", "sale_date")

TASK_REQUIRED_FIELDS = ("title",)
SALE_REQUIRED_FIELDS = ("customer_name", "product", "amount")

# Fields where "" from a form means "clear it"
NULLABLE_FIELDS = ("description", "due_date", "assigned_to", "customer_email")


def empty_to_none(data: dict) -> dict:
    """Map blank optional inputs to None, as the forms submit them."""
    return {
        key: (None if key in NULLABLE_FIELDS and value == "" else value)
        for key, value in data.items()
    }


def missing_fields(data: dict, required: tuple) -> list:
    """Required keys that are absent, None or blank"""
    missing = []
    for key in required:
        value = data.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(key)
    return missing
