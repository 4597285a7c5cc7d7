"""
Serviços de domínio do Atividades.
"""

from .account_service import AccountService
from .credentials import is_valid_email, normalize_credentials, validar_credenciais
from .gate import GatedView, is_gate_open, resolve_gate
from .session_manager import SessionListener, SessionManager, Subscription
from .todo_service import TodoService

__all__ = [
    "AccountService",
    "GatedView",
    "SessionListener",
    "SessionManager",
    "Subscription",
    "TodoService",
    "is_gate_open",
    "is_valid_email",
    "normalize_credentials",
    "resolve_gate",
    "validar_credenciais",
]
