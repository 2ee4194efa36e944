"""
BIZDESK - Record Stores
=======================
Client-side stores over Supabase tables.

Each store keeps the last fetched collection in `items`. Invalidation rule:
every successful mutation refetches the whole collection, so `items` always
mirrors the backend after a write.

Operations never raise for expected failures; they return a Result whose
`error` is a display string.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError
from pydantic_core import to_jsonable_python
from supabase import PostgrestAPIError

from .auth import AuthContext
from .backend import PROFILES_TABLE
from .errors import BizdeskError, FormValidationError
from .i18n import tr
from .schema import CurrentUser, Profile, Result, empty_to_none, missing_fields

logger = logging.getLogger("bizdesk.store")

RecordT = TypeVar("RecordT", bound=BaseModel)

# Failures of the backend round-trip, as opposed to our own BizdeskError
BACKEND_ERRORS = (PostgrestAPIError, httpx.HTTPError, ValidationError)


def coerce_choice(data: Dict[str, Any], field: str, choices: Type[Enum]) -> Optional[Enum]:
    """Replace data[field] with its enum member; unknown values are a form error"""
    value = data.get(field)
    if value is None:
        return None
    try:
        data[field] = choices(getattr(value, "value", value))
    except ValueError:
        raise FormValidationError(tr("common.invalid", fields=field), fields=[field])
    return data[field]


def describe_backend_error(error: Exception) -> str:
    """One-line description of a backend failure, for the log"""
    if isinstance(error, PostgrestAPIError):
        return f"{error.code}: {error.message}"
    return str(error)


class RecordStore(Generic[RecordT]):
    """Read side: fetch a table into memory and look records up by id"""

    table: str = ""
    model: Type[BaseModel] = BaseModel
    message_prefix: str = ""        # translation namespace, e.g. "tasks"
    order_by: str = "created_at"
    descending: bool = True

    def __init__(self, client: Any, auth: AuthContext):
        self.client = client
        self.auth = auth
        self.items: List[RecordT] = []
        self.loading = False
        self.error: Optional[str] = None

    # ========================================
    # READS
    # ========================================

    def fetch_all(self) -> Result:
        """
        Refresh `items` from the backend.

        On failure the previous `items` are kept, `error` holds the display
        message and `loading` is cleared either way.
        """
        try:
            self.auth.require_user()
        except BizdeskError as e:
            self.error = e.message
            return Result.failure(e.message)

        self.loading = True
        self.error = None
        try:
            self._before_fetch()
            response = (
                self.client.table(self.table)
                .select("*")
                .order(self.order_by, desc=self.descending)
                .execute()
            )
            items = self._hydrate(response.data or [])
        except BACKEND_ERRORS as e:
            logger.error(f"❌ Fetching {self.table} failed: {describe_backend_error(e)}")
            self.error = self._message("fetch")
            return Result.failure(self.error)
        finally:
            self.loading = False

        self.items = items
        logger.debug(f"📂 Loaded {len(items)} rows from {self.table}")
        return Result(data=items)

    def get(self, record_id: str) -> Optional[RecordT]:
        """Get a record from the last fetch by id"""
        for record in self.items:
            if record.id == record_id:
                return record
        return None

    # ========================================
    # HOOKS
    # ========================================

    def _before_fetch(self) -> None:
        """Called inside the fetch error boundary, before the select"""

    def _hydrate(self, rows: List[Dict[str, Any]]) -> List[RecordT]:
        return [self.model.model_validate(row) for row in rows]

    def _message(self, operation: str) -> str:
        return tr(f"{self.message_prefix}.error.{operation}")


class EditableStore(RecordStore[RecordT]):
    """Read side plus create / update / delete"""

    required_fields: tuple = ()
    writable_fields: tuple = ()

    # ========================================
    # MUTATIONS
    # ========================================

    def create(self, data: Dict[str, Any]) -> Result:
        """Insert a record owned by the current user, then refetch"""
        return self._run("create", self._create, data)

    def update(self, record_id: str, fields: Dict[str, Any]) -> Result:
        """Apply a sparse patch to one record, then refetch"""
        return self._run("update", self._update, record_id, fields)

    def delete(self, record_id: str) -> Result:
        """Delete one record by id, then refetch"""
        return self._run("delete", self._delete, record_id)

    def invalidate(self) -> Result:
        """Drop the cached collection state by refetching it"""
        return self.fetch_all()

    # ========================================
    # IMPLEMENTATION
    # ========================================

    def _run(self, operation: str, func: Callable[..., Any], *args: Any) -> Result:
        try:
            return Result(data=func(*args))
        except BizdeskError as e:
            logger.warning(f"⛔ {operation} on {self.table} refused: {e.message}")
            return Result.failure(e.message)
        except BACKEND_ERRORS as e:
            logger.error(f"❌ {operation} on {self.table} failed: {describe_backend_error(e)}")
            return Result.failure(self._message(operation))

    def _create(self, data: Dict[str, Any]) -> RecordT:
        user = self.auth.require_user()
        data = self._prepare(empty_to_none(data))

        missing = missing_fields(data, self.required_fields)
        if missing:
            raise FormValidationError(tr("common.required"), fields=missing)

        row = self._insert_row(data, user)
        response = self.client.table(self.table).insert(to_jsonable_python(row)).execute()
        if not response.data:
            raise BizdeskError(self._message("create"))
        created = self._hydrate(response.data)[0]
        logger.info(f"✅ Created {self.table} row {created.id}")

        self.invalidate()
        return self.get(created.id) or created

    def _update(self, record_id: str, fields: Dict[str, Any]) -> Optional[RecordT]:
        self.auth.require_user()

        unknown = sorted(set(fields) - set(self.writable_fields))
        if unknown:
            logger.debug(f"Ignoring non-writable fields on {self.table}: {unknown}")
        patch = {key: value for key, value in fields.items() if key in self.writable_fields}
        patch = self._prepare(empty_to_none(patch))

        # Only required fields that are part of the patch must be non-blank
        present = tuple(name for name in self.required_fields if name in patch)
        missing = missing_fields(patch, present)
        if missing:
            raise FormValidationError(tr("common.required"), fields=missing)

        if not patch:
            record = self.get(record_id)
            if record is None:
                raise BizdeskError(self._message("not_found"))
            return record

        response = (
            self.client.table(self.table)
            .update(to_jsonable_python(patch))
            .eq("id", record_id)
            .execute()
        )
        if not response.data:
            raise BizdeskError(self._message("not_found"))
        logger.info(f"💾 Updated {self.table} row {record_id}: {sorted(patch)}")

        self.invalidate()
        return self.get(record_id) or self._hydrate(response.data)[0]

    def _delete(self, record_id: str) -> str:
        self.auth.require_user()
        self.client.table(self.table).delete().eq("id", record_id).execute()
        logger.info(f"🗑️ Deleted {self.table} row {record_id}")

        self.invalidate()
        return record_id

    def _prepare(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Normalise field values before they are checked and written"""
        return data

    def _insert_row(self, data: Dict[str, Any], user: CurrentUser) -> Dict[str, Any]:
        raise NotImplementedError


class ProfileDirectory(RecordStore[Profile]):
    """
    The `profiles` table, indexed by user_id.

    Task stores refresh it on every task fetch and annotate tasks through
    `lookup`, which is a dict hit rather than a scan.
    """

    table = PROFILES_TABLE
    model = Profile
    message_prefix = "profiles"
    order_by = "full_name"
    descending = False

    def __init__(self, client: Any, auth: AuthContext):
        super().__init__(client, auth)
        self._by_user_id: Dict[str, Profile] = {}

    def refresh(self) -> List[Profile]:
        """Reload the directory; backend errors propagate to the caller"""
        response = (
            self.client.table(self.table)
            .select("*")
            .order(self.order_by, desc=self.descending)
            .execute()
        )
        self.items = self._hydrate(response.data or [])
        return self.items

    def lookup(self, user_id: Optional[str]) -> Optional[Profile]:
        if not user_id:
            return None
        return self._by_user_id.get(user_id)

    def _hydrate(self, rows: List[Dict[str, Any]]) -> List[Profile]:
        profiles = super()._hydrate(rows)
        self._by_user_id = {profile.user_id: profile for profile in profiles}
        return profiles
