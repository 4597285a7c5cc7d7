"""Tradução das exceções do domínio em respostas HTTP."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from atividades.config.constants import LOGIN_PATH
from atividades.core.exceptions import (
    AtividadesBaseException,
    AuthTransportError,
    ConfirmationRequiredException,
    DuplicateAccountError,
    InvalidCredentialsError,
    RepositoryException,
    SessionNotInitializedException,
    UnconfirmedAccountError,
    ValidationException,
)
from atividades.infrastructure.logging import get_logger


class LoginRequired(Exception):
    """Levantada por rotas protegidas quando não há sessão presente."""

    def __init__(self, path: str = "") -> None:
        super().__init__(f"Sessão ausente em {path}")
        self.path = path


# Ordem importa: a primeira classe compatível define o status
ERROR_MAPPING = [
    (InvalidCredentialsError, 401),
    (UnconfirmedAccountError, 403),
    (DuplicateAccountError, 409),
    (AuthTransportError, 503),
    (SessionNotInitializedException, 401),
    (ConfirmationRequiredException, 400),
    (ValidationException, 422),
    (RepositoryException, 502),
]


def status_para(exc: AtividadesBaseException) -> int:
    for classe, status_code in ERROR_MAPPING:
        if isinstance(exc, classe):
            return status_code
    return 400


async def _login_required_handler(request: Request, exc: LoginRequired) -> RedirectResponse:
    get_logger().debug("Rota protegida sem sessão; redirecionando", rota=exc.path)
    return RedirectResponse(url=LOGIN_PATH, status_code=303)


async def _domain_error_handler(request: Request, exc: AtividadesBaseException) -> JSONResponse:
    status_code = status_para(exc)
    logger = get_logger()
    if status_code >= 500:
        logger.erro("Erro ao processar requisição", rota=request.url.path, erro=str(exc))
    else:
        logger.aviso("Requisição rejeitada", rota=request.url.path, erro=exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error": type(exc).__name__},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LoginRequired, _login_required_handler)
    app.add_exception_handler(AtividadesBaseException, _domain_error_handler)
