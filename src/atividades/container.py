"""
Sistema de injeção de dependências do Atividades.

Gerencia as dependências da aplicação usando dependency-injector.
Sem configuração do Supabase, o container monta os backends em memória,
o que permite rodar a aplicação localmente sem rede.
"""

from __future__ import annotations

from dependency_injector import containers, providers

from atividades.adapters.auth import InMemoryAuthBackend, SupabaseAuthBackend
from atividades.adapters.repositories import (
    FileSessionStorage,
    InMemorySessionStorage,
    InMemoryTodoRepository,
    SupabaseTodoRepository,
)
from atividades.config import AppConfig, get_config
from atividades.core.services import AccountService, SessionManager, TodoService
from atividades.infrastructure.logging import configurar_logging


def _criar_storage(config: AppConfig):
    if config.session.persist_session:
        return FileSessionStorage(config.session.storage_file)
    return InMemorySessionStorage()


def _criar_auth_backend(config: AppConfig, storage, logger):
    if not config.api.has_supabase:
        logger.aviso("Supabase não configurado; usando backend de autenticação em memória.")
        return InMemoryAuthBackend()
    return SupabaseAuthBackend(
        config.api.supabase_url,
        config.api.supabase_key,
        service_key=config.api.supabase_service_key or None,
        storage=storage,
        persist_session=config.session.persist_session,
        auto_refresh_token=config.session.auto_refresh_token,
        logger=logger.com_contexto(componente="supabase_auth"),
    )


def _criar_todo_repository(config: AppConfig, backend, logger):
    if isinstance(backend, SupabaseAuthBackend):
        return SupabaseTodoRepository(
            backend,
            table_name=config.activities.todos_table,
            page_size=config.activities.page_size,
            logger=logger.com_contexto(componente="todos"),
        )
    return InMemoryTodoRepository(page_size=config.activities.page_size)


class ApplicationContainer(containers.DeclarativeContainer):
    """
    Container de injeção de dependências da aplicação.

    Um único ``SessionManager`` por processo: todas as views e comandos
    leem a sessão pela mesma instância.
    """

    # Configuração da aplicação
    config = providers.Singleton(get_config)

    # Logging
    logger = providers.Singleton(
        lambda config: configurar_logging(config.logging),
        config=config,
    )

    # Persistência das credenciais
    session_storage = providers.Singleton(_criar_storage, config=config)

    # Backend de autenticação
    auth_backend = providers.Singleton(
        _criar_auth_backend,
        config=config,
        storage=session_storage,
        logger=logger,
    )

    # Sessão
    session_manager = providers.Singleton(
        lambda backend, logger: SessionManager(backend, logger=logger.com_contexto(componente="sessao")),
        backend=auth_backend,
        logger=logger,
    )

    account_service = providers.Singleton(
        lambda manager, logger: AccountService(manager, logger=logger.com_contexto(componente="conta")),
        manager=session_manager,
        logger=logger,
    )

    # Atividades
    todo_repository = providers.Singleton(
        _criar_todo_repository,
        config=config,
        backend=auth_backend,
        logger=logger,
    )

    todo_service = providers.Singleton(
        lambda repository, logger: TodoService(repository, logger=logger.com_contexto(componente="todos")),
        repository=todo_repository,
        logger=logger,
    )


# Container global (singleton)
_container: ApplicationContainer | None = None


def get_container() -> ApplicationContainer:
    """
    Obtém o container global da aplicação.

    Returns:
        ApplicationContainer: Instância singleton do container
    """
    global _container
    if _container is None:
        _container = ApplicationContainer()
    return _container


def override_config(config: AppConfig) -> None:
    """
    Sobrescreve a configuração do container global.

    Args:
        config: Nova configuração da aplicação
    """
    container = get_container()
    container.config.override(providers.Object(config))


def reset_container() -> None:
    """Reseta o container global e suas dependências."""
    global _container
    if _container is not None:
        _container.reset_singletons()
        _container = None


__all__ = [
    "ApplicationContainer",
    "get_container",
    "override_config",
    "reset_container",
]
