# tests/conftest.py

from __future__ import annotations

import pytest

from bizdesk.auth import AuthContext
from bizdesk.sales import SaleStore
from bizdesk.schema import CurrentUser
from bizdesk.tasks import TaskStore

from .fakes import FakeSupabase

ANA = "user-ana"
BRUNO = "user-bruno"
CARLA = "user-carla"


@pytest.fixture()
def backend() -> FakeSupabase:
    """Fake Supabase with a small team directory"""
    fake = FakeSupabase()
    fake.seed(
        "profiles",
        {"id": "p-1", "user_id": ANA, "full_name": "Ana Souza", "role": "manager"},
        {"id": "p-2", "user_id": BRUNO, "full_name": "Bruno Lima", "role": "member"},
        {"id": "p-3", "user_id": CARLA, "full_name": None, "role": "admin"},
    )
    fake.auth.add_account("ana@example.com", "secret", ANA, "Ana Souza")
    return fake


@pytest.fixture()
def user() -> CurrentUser:
    return CurrentUser(id=ANA, email="ana@example.com", full_name="Ana Souza")


@pytest.fixture()
def auth(backend: FakeSupabase, user: CurrentUser) -> AuthContext:
    return AuthContext(backend, user=user)


@pytest.fixture()
def anonymous(backend: FakeSupabase) -> AuthContext:
    return AuthContext(backend)


@pytest.fixture()
def task_store(backend: FakeSupabase, auth: AuthContext) -> TaskStore:
    return TaskStore(backend, auth)


@pytest.fixture()
def sale_store(backend: FakeSupabase, auth: AuthContext) -> SaleStore:
    return SaleStore(backend, auth)
