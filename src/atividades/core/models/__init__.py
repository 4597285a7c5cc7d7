"""
Pacote de Modelos (Entidades) do Domínio.
"""

from .session import AuthEvent, AuthState, Identity, Session
from .todo import Todo

__all__ = [
    "AuthEvent",
    "AuthState",
    "Identity",
    "Session",
    "Todo",
]
