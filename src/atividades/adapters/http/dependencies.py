"""Dependências compartilhadas pelos controllers."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request

from atividades.adapters.http.credentials import CredentialStore, credencial_da_requisicao
from atividades.adapters.http.errors import LoginRequired
from atividades.container import ApplicationContainer
from atividades.core.models import Session
from atividades.core.services import AccountService, SessionManager, TodoService, is_gate_open


def get_container(request: Request) -> ApplicationContainer:
    """
    Obtém o container de injeção de dependências.

    Raises:
        RuntimeError: Se o container não foi inicializado
    """
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise RuntimeError("Container de dependências não foi inicializado")
    return container


def get_credential_store(request: Request) -> CredentialStore:
    store = getattr(request.app.state, "credentials", None)
    if store is None:
        raise RuntimeError("Armazenamento de credenciais não foi inicializado")
    return store


def get_session_manager(container: ApplicationContainer = Depends(get_container)) -> SessionManager:
    return container.session_manager()


def get_account_service(container: ApplicationContainer = Depends(get_container)) -> AccountService:
    return container.account_service()


def get_todo_service(container: ApplicationContainer = Depends(get_container)) -> TodoService:
    return container.todo_service()


async def get_request_session(
    request: Request,
    manager: SessionManager = Depends(get_session_manager),
    store: CredentialStore = Depends(get_credential_store),
) -> Optional[Session]:
    """
    Sessão do processo, desde que a requisição traga a credencial emitida
    para o mesmo usuário.

    Token vencido é renovado antes; se a renovação falhar a sessão é
    encerrada e a requisição segue deslogada.
    """
    session = await manager.current_valid()
    if not is_gate_open(manager) or not store.validar(credencial_da_requisicao(request), session):
        return None
    return session


def require_session(
    request: Request,
    session: Optional[Session] = Depends(get_request_session),
) -> Session:
    """Libera a rota apenas com sessão presente; caso contrário redireciona para o login."""
    if session is None:
        raise LoginRequired(request.url.path)
    return session
