"""
Entidades de Estado da Sessão.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AuthState(str, Enum):
    """Estados do ciclo de vida da autenticação."""

    UNRESOLVED = "unresolved"
    SIGNED_OUT = "signed_out"
    SIGNED_IN = "signed_in"


class AuthEvent(str, Enum):
    """Eventos de mudança emitidos pelo backend de autenticação."""

    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    TOKEN_REFRESH_FAILED = "TOKEN_REFRESH_FAILED"
    USER_UPDATED = "USER_UPDATED"

    @property
    def is_terminal(self) -> bool:
        """Eventos que sempre encerram a sessão, independente do payload."""
        return self in (AuthEvent.SIGNED_OUT, AuthEvent.TOKEN_REFRESH_FAILED)


@dataclass(frozen=True)
class Identity:
    """Usuário autenticado (Imutável)."""

    id: str
    email: str

    @property
    def display_name(self) -> str:
        """Parte local do email, usada na saudação."""
        return self.email.split("@", 1)[0] if self.email else self.id


@dataclass(frozen=True)
class Session:
    """
    Sessão autenticada do processo.

    Substituída por inteiro a cada mudança; nunca alterada campo a campo.
    A ausência de sessão é representada por ``None``.
    """

    user: Identity
    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def email(self) -> str:
        return self.user.email

    def is_expired(self, now: Optional[float] = None) -> bool:
        """Indica se o token já passou do prazo definido pelo servidor."""
        if self.expires_at is None:
            return False
        return (now if now is not None else time.time()) >= self.expires_at

    def __repr__(self) -> str:
        # Tokens nunca aparecem em logs
        return f"Session(user={self.user!r}, expires_at={self.expires_at!r})"
