"""
Interfaces do Núcleo (Core Interfaces).

Define os contratos (Ports) que os Adapters devem implementar.
Segue o princípio de Inversão de Dependência (DIP).
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Protocol

from atividades.core.exceptions import AuthError
from atividades.core.models import AuthEvent, Session, Todo

BackendListener = Callable[[AuthEvent, Optional[Session]], None]


class BackendSubscription(Protocol):
    """Handle devolvido por ``AuthBackend.on_change``."""

    def unsubscribe(self) -> None: ...


class AuthBackend(ABC):
    """
    Fronteira com o serviço de autenticação.

    Toda mudança de sessão (login, logout, refresh, expiração) deve ser
    entregue aos listeners de ``on_change``, na ordem em que ocorreu.
    """

    async def connect(self) -> None:
        """Prepara o cliente do backend (opcional)."""
        return None

    async def close(self) -> None:
        """Libera recursos do backend (opcional)."""
        return None

    @abstractmethod
    async def get_current_session(self) -> Optional[Session]:
        """Consulta única das credenciais persistidas."""
        ...

    @abstractmethod
    def on_change(self, listener: BackendListener) -> BackendSubscription:
        """Registra listener chamado a cada transição do backend."""
        ...

    @abstractmethod
    async def password_sign_in(self, email: str, password: str) -> None:
        """Envia credenciais. Levanta AuthError se rejeitadas."""
        ...

    @abstractmethod
    async def password_sign_up(self, email: str, password: str) -> Optional[Session]:
        """Cria conta. Retorna None quando a confirmação por email é exigida."""
        ...

    @abstractmethod
    async def sign_out(self) -> None:
        """Invalida a credencial atual."""
        ...

    @abstractmethod
    async def refresh_session(self) -> Optional[Session]:
        """Renova o token. Levanta AuthError se a renovação falhar."""
        ...

    async def delete_user(self, user_id: str) -> None:
        """Remove a conta do usuário."""
        raise AuthError(
            "Exclusão de conta não suportada por este backend",
            details={"backend": type(self).__name__},
        )


class SessionStorage(ABC):
    """
    Armazenamento das credenciais persistidas entre reinícios.

    Mesma assinatura assíncrona esperada pelo cliente de auth do Supabase.
    """

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        ...


class TodoRepository(ABC):
    """Interface para persistência das tarefas de um usuário."""

    @abstractmethod
    async def listar(self, user_id: str) -> List[Todo]:
        """Lista as tarefas do usuário, mais recentes primeiro."""
        ...

    @abstractmethod
    async def obter(self, user_id: str, todo_id: str) -> Optional[Todo]:
        """Busca uma tarefa pelo id; tarefa de outro usuário conta como inexistente."""
        ...

    @abstractmethod
    async def adicionar(self, user_id: str, title: str) -> None:
        ...

    @abstractmethod
    async def definir_conclusao(self, user_id: str, todo_id: str, is_complete: bool) -> None:
        ...

    @abstractmethod
    async def remover(self, user_id: str, todo_id: str) -> None:
        ...
