"""Ponto de entrada FastAPI da aplicação Atividades."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from atividades import __version__
from atividades.adapters.http.controllers import auth_router, home_router, todos_router
from atividades.adapters.http.credentials import CredentialStore
from atividades.adapters.http.errors import register_exception_handlers
from atividades.container import ApplicationContainer, get_container


def create_app(container: Optional[ApplicationContainer] = None) -> FastAPI:
    """
    Cria a aplicação FastAPI.

    Args:
        container: Container a usar; por padrão o container global

    Returns:
        FastAPI: Aplicação com rotas e handlers registrados
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Resolve a sessão persistida ao iniciar e libera tudo ao encerrar."""
        app_container = container or get_container()
        app.state.container = app_container
        logger = app_container.logger()
        manager = app_container.session_manager()

        await manager.start()
        vinculo = manager.subscribe(app.state.credentials.sincronizar)
        logger.info("API iniciada", estado_sessao=manager.state.value)
        try:
            yield
        finally:
            vinculo.unsubscribe()
            await manager.close()
            logger.info("API encerrada")

    app = FastAPI(
        title="Atividades",
        description="Aplicação pessoal de múltiplas atividades com sessão Supabase.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.credentials = CredentialStore()
    register_exception_handlers(app)

    app.include_router(home_router)
    app.include_router(auth_router)
    app.include_router(todos_router)
    return app


__all__ = ["create_app"]
