# tests/test_auth.py

from __future__ import annotations

import pytest

from bizdesk.auth import AuthContext
from bizdesk.errors import AuthenticationFailed, NotAuthenticated

from .conftest import ANA


def test_sign_in_sets_current_user(backend):
    auth = AuthContext(backend)

    user = auth.sign_in("ana@example.com", "secret")

    assert user.id == ANA
    assert user.display_name == "Ana Souza"
    assert auth.is_authenticated
    assert auth.require_user() is user


def test_sign_in_with_bad_password_raises(backend):
    auth = AuthContext(backend)

    with pytest.raises(AuthenticationFailed) as excinfo:
        auth.sign_in("ana@example.com", "wrong")

    assert excinfo.value.message.startswith("Falha ao entrar")
    assert auth.user is None


def test_require_user_without_session(backend):
    with pytest.raises(NotAuthenticated) as excinfo:
        AuthContext(backend).require_user()

    assert excinfo.value.message == "Usuário não autenticado"


def test_sign_out_clears_user(backend):
    auth = AuthContext(backend)
    auth.sign_in("ana@example.com", "secret")

    auth.sign_out()

    assert auth.user is None
    assert backend.auth.signed_out == 1


def test_sign_out_without_session_is_noop(backend):
    AuthContext(backend).sign_out()

    assert backend.auth.signed_out == 0


def test_display_name_falls_back_to_email(backend):
    backend.auth.add_account("bia@example.com", "pw", "user-bia", None)
    auth = AuthContext(backend)

    assert auth.sign_in("bia@example.com", "pw").display_name == "bia@example.com"
