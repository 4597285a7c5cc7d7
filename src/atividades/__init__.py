"""
Atividades - aplicação pessoal de múltiplas atividades sobre o Supabase

Organização:
- core/models: Entidades (Session, Identity, Todo)
- core/services: Regras (SessionManager, GatedView, AccountService, TodoService)
- core/exceptions: Hierarquia de exceções
- adapters/auth: Backends de autenticação (Supabase, memória)
- adapters/repositories: Persistência de sessão e tarefas
- adapters/http: API FastAPI
- infrastructure: Logging e utilitários de ambiente
"""

from atividades.core.models import (
    AuthEvent,
    AuthState,
    Identity,
    Session,
    Todo,
)

from atividades.core.exceptions import (
    AtividadesBaseException,
    AuthError,
    InvalidCredentialsError,
    DuplicateAccountError,
    UnconfirmedAccountError,
    AuthTransportError,
)

__version__ = "1.0.0"

__all__ = [
    # Domain
    "AuthEvent",
    "AuthState",
    "Identity",
    "Session",
    "Todo",
    # Exceptions
    "AtividadesBaseException",
    "AuthError",
    "InvalidCredentialsError",
    "DuplicateAccountError",
    "UnconfirmedAccountError",
    "AuthTransportError",
    # Version
    "__version__",
]
