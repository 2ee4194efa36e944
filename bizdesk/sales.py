"""
BIZDESK - Sale Store
====================
The `sales` table. Any status may follow any other.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict

from .backend import SALES_TABLE
from .errors import FormValidationError
from .i18n import tr
from .schema import (
    SALE_REQUIRED_FIELDS,
    SALE_WRITABLE_FIELDS,
    CurrentUser,
    Sale,
    SaleStatus,
    utcnow,
)
from .store import EditableStore, coerce_choice

logger = logging.getLogger("bizdesk.sales")


def parse_amount(value: Any) -> Decimal:
    """Decimal from a form or API value; a comma is accepted as separator"""
    if isinstance(value, Decimal):
        return value
    text = str(value).strip().replace(",", ".")
    try:
        amount = Decimal(text)
    except InvalidOperation:
        amount = None
    if amount is None or not amount.is_finite():
        logger.warning(f"Amount rejected: {value!r}")
        raise FormValidationError(tr("common.invalid", fields="amount"), fields=["amount"])
    return amount


class SaleStore(EditableStore[Sale]):
    table = SALES_TABLE
    model = Sale
    message_prefix = "sales"
    required_fields = SALE_REQUIRED_FIELDS
    writable_fields = SALE_WRITABLE_FIELDS

    def _prepare(self, data: Dict[str, Any]) -> Dict[str, Any]:
        coerce_choice(data, "status", SaleStatus)
        amount = data.get("amount")
        if amount is not None and not (isinstance(amount, str) and not amount.strip()):
            data["amount"] = parse_amount(amount)
        for key in ("customer_name", "product"):
            if isinstance(data.get(key), str):
                data[key] = data[key].strip()
        return data

    def _insert_row(self, data: Dict[str, Any], user: CurrentUser) -> Dict[str, Any]:
        return {
            "customer_name": data["customer_name"],
            "customer_email": data.get("customer_email"),
            "product": data["product"],
            "amount": data["amount"],
            "status": data.get("status") or SaleStatus.PENDING,
            "sale_date": data.get("sale_date") or utcnow(),
            "created_by": user.id,
        }
