# tests/test_sales.py

from __future__ import annotations

import logging
from decimal import Decimal

import httpx
import pytest

from bizdesk.errors import FormValidationError
from bizdesk.sales import SaleStore, parse_amount
from bizdesk.schema import SaleStatus
from bizdesk.views import revenue_total

from .conftest import ANA


def _seed_sales(backend) -> None:
    backend.seed(
        "sales",
        {"id": "s-1", "customer_name": "Loja A", "product": "Mesa", "amount": "150.5",
         "created_by": ANA, "sale_date": "2026-03-01", "status": "completed"},
        {"id": "s-2", "customer_name": "Loja B", "product": "Cadeira", "amount": "49.50",
         "created_by": ANA, "sale_date": "2026-03-02T10:00:00"},
    )


@pytest.mark.parametrize("field", ["customer_name", "product", "amount"])
def test_create_without_required_field_never_calls_backend(backend, sale_store, field):
    data = {"customer_name": "Loja A", "product": "Mesa", "amount": "10"}
    data[field] = ""

    result = sale_store.create(data)

    assert result.error == "Preencha todos os campos obrigatórios"
    assert backend.calls == []


def test_create_defaults_and_refetch(backend, sale_store):
    result = sale_store.create({"customer_name": "Loja A", "product": "Mesa", "amount": "99,90"})

    assert result.ok
    sale = result.data
    assert sale.amount == Decimal("99.90")
    assert sale.status == SaleStatus.PENDING
    assert sale.created_by == ANA
    assert sale.sale_date is not None
    assert sale.customer_email is None
    assert [s.id for s in sale_store.items] == [sale.id]

    insert = next(c for c in backend.calls if c.op == "insert")
    assert insert.payload["amount"] == "99.90"
    assert insert.payload["status"] == "pending"


def test_fetch_parses_numbers_and_dates(backend, sale_store):
    _seed_sales(backend)

    sale_store.fetch_all()

    assert [s.id for s in sale_store.items] == ["s-2", "s-1"]
    first = sale_store.get("s-1")
    assert first.amount == Decimal("150.5")
    assert first.sale_date.tzinfo is not None
    assert first.sale_date.day == 1


def test_status_only_update_leaves_revenue_unchanged(backend, sale_store):
    _seed_sales(backend)
    sale_store.fetch_all()
    before = revenue_total(sale_store.items)

    result = sale_store.update("s-2", {"status": "cancelled"})

    assert result.ok
    assert sale_store.get("s-2").status == SaleStatus.CANCELLED
    assert revenue_total(sale_store.items) == before == Decimal("200.0")


def test_amount_update_changes_revenue(backend, sale_store):
    _seed_sales(backend)
    sale_store.fetch_all()

    sale_store.update("s-2", {"amount": "100"})

    assert revenue_total(sale_store.items) == Decimal("250.5")


def test_any_status_may_follow_any_other(backend, sale_store):
    _seed_sales(backend)
    sale_store.fetch_all()

    for status in ("cancelled", "pending", "processing", "completed", "pending"):
        assert sale_store.update("s-1", {"status": status}).ok

    assert sale_store.get("s-1").status == SaleStatus.PENDING


def test_update_with_blank_required_field_is_refused(backend, sale_store):
    _seed_sales(backend)
    sale_store.fetch_all()
    backend.calls.clear()

    result = sale_store.update("s-1", {"product": " "})

    assert result.error == "Preencha todos os campos obrigatórios"
    assert backend.calls == []


def test_delete_then_collection_reflects_it(backend, sale_store):
    _seed_sales(backend)
    sale_store.fetch_all()

    assert sale_store.delete("s-1").ok
    assert [s.id for s in sale_store.items] == ["s-2"]


def test_transport_error_is_localized(backend, sale_store):
    _seed_sales(backend)
    sale_store.fetch_all()
    backend.fail("sales", "select", httpx.ConnectError("offline"))

    result = sale_store.fetch_all()

    assert result.error == "Erro ao carregar vendas"
    assert len(sale_store.items) == 2
    assert sale_store.loading is False


def test_mutations_without_user_never_call_backend(backend, anonymous):
    store = SaleStore(backend, anonymous)

    assert store.create({"customer_name": "A", "product": "B", "amount": "1"}).error == "Usuário não autenticado"
    assert store.update("s-1", {"status": "completed"}).error == "Usuário não autenticado"
    assert store.delete("s-1").error == "Usuário não autenticado"
    assert backend.calls == []


def test_parse_amount():
    assert parse_amount("1234.56") == Decimal("1234.56")
    assert parse_amount("10,5") == Decimal("10.5")
    assert parse_amount(3) == Decimal("3")
    with pytest.raises(FormValidationError):
        parse_amount("dez")
    with pytest.raises(FormValidationError):
        parse_amount("NaN")


def test_rejected_amount_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="bizdesk.sales"):
        with pytest.raises(FormValidationError):
            parse_amount("dez")

    assert "Amount rejected: 'dez'" in caplog.text
