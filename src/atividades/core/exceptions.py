"""Sistema centralizado de exceções customizadas do Atividades."""

from __future__ import annotations

from typing import Any, Optional


class AtividadesBaseException(Exception):
    """Exceção base para todas as exceções customizadas do Atividades."""

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        base = self.message
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            base = f"{base} ({details_str})"
        if self.cause:
            base = f"{base} | Causa: {self.cause}"
        return base

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# ==================== Exceções de Autenticação ====================

class AuthError(AtividadesBaseException):
    """
    Erro em operações de credencial (login, cadastro, logout).

    Sempre recuperável: deve ser exibido ao usuário e nunca derrubar o processo.
    """
    pass


class InvalidCredentialsError(AuthError):
    """Credenciais rejeitadas pelo backend ou malformadas."""
    pass


class DuplicateAccountError(AuthError):
    """Já existe conta cadastrada com o email informado."""
    pass


class UnconfirmedAccountError(AuthError):
    """Conta ainda aguarda confirmação por email."""
    pass


class AuthTransportError(AuthError):
    """Falha de rede/transporte ao falar com o backend de autenticação."""
    pass


# ==================== Exceções de Sessão ====================

class SessionException(AtividadesBaseException):
    """Exceção base para erros de sessão."""
    pass


class SessionNotInitializedException(SessionException):
    """Operação exige usuário autenticado, mas não há sessão ativa."""
    pass


class ConfirmationRequiredException(SessionException):
    """Operação destrutiva exige confirmação explícita do usuário."""
    pass


# ==================== Exceções de Configuração ====================

class ConfigurationException(AtividadesBaseException):
    """Exceção base para erros de configuração."""
    pass


class InvalidConfigException(ConfigurationException):
    """Configuração inválida."""
    pass


# ==================== Exceções de Repositório ====================

class RepositoryException(AtividadesBaseException):
    """Exceção base para erros de repositório."""
    pass


class DatabaseException(RepositoryException):
    """Exceção para erros de banco de dados."""
    pass


# ==================== Exceções de Validação ====================

class ValidationException(AtividadesBaseException):
    """Exceção base para erros de validação."""
    pass


class MissingRequiredFieldException(ValidationException):
    """Campo obrigatório ausente."""
    pass


# ==================== Helpers ====================

def wrap_exception(exc: Exception, wrapper_class: type[AtividadesBaseException], message: str, **details: Any) -> AtividadesBaseException:
    """
    Envolve uma exceção existente em uma exceção customizada.

    Args:
        exc: Exceção original
        wrapper_class: Classe da exceção customizada
        message: Mensagem descritiva
        **details: Detalhes adicionais

    Returns:
        Instância da exceção customizada
    """
    return wrapper_class(message, details=details, cause=exc)


__all__ = [
    # Base
    "AtividadesBaseException",
    # Authentication
    "AuthError",
    "InvalidCredentialsError",
    "DuplicateAccountError",
    "UnconfirmedAccountError",
    "AuthTransportError",
    # Session
    "SessionException",
    "SessionNotInitializedException",
    "ConfirmationRequiredException",
    # Configuration
    "ConfigurationException",
    "InvalidConfigException",
    # Repository
    "RepositoryException",
    "DatabaseException",
    # Validation
    "ValidationException",
    "MissingRequiredFieldException",
    # Helpers
    "wrap_exception",
]
