"""
Views protegidas por sessão.

Uma view protegida recebe o gerenciador de sessão explicitamente e decide,
a cada notificação, entre renderizar o conteúdo ou redirecionar ao login.
"""

from __future__ import annotations

from typing import Callable, Generic, Optional, TypeVar

from atividades.core.models import AuthState, Session
from atividades.core.services.session_manager import SessionManager, Subscription

T = TypeVar("T")


def resolve_gate(
    session: Optional[Session],
    render: Callable[[Session], T],
    redirect: Callable[[], T],
) -> T:
    """Renderiza com a sessão presente ou redireciona quando ausente."""
    if session is None:
        return redirect()
    return render(session)


class GatedView(Generic[T]):
    """
    Tela que só mostra conteúdo com sessão presente.

    A saída é recalculada de forma síncrona dentro da notificação do
    gerenciador, então nunca existe um quadro renderizado com sessão antiga.
    Enquanto o estado não foi resolvido, ``output`` permanece ``None``.
    """

    def __init__(
        self,
        manager: SessionManager,
        render: Callable[[Session], T],
        redirect: Callable[[], T],
    ) -> None:
        self._manager = manager
        self._render = render
        self._redirect = redirect
        self._subscription: Optional[Subscription] = None
        self._output: Optional[T] = None
        self.renders = 0

    @property
    def mounted(self) -> bool:
        return self._subscription is not None and self._subscription.active

    @property
    def output(self) -> Optional[T]:
        return self._output

    def mount(self) -> GatedView[T]:
        if not self.mounted:
            self._subscription = self._manager.subscribe(self._on_session)
        return self

    def unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_session(self, session: Optional[Session]) -> None:
        self._output = resolve_gate(session, self._render, self._redirect)
        self.renders += 1

    def __enter__(self) -> GatedView[T]:
        return self.mount()

    def __exit__(self, *exc_info) -> None:
        self.unmount()


def is_gate_open(manager: SessionManager) -> bool:
    """Sessão não resolvida ou com token vencido conta como ausente."""
    session = manager.current()
    return manager.state is AuthState.SIGNED_IN and session is not None and not session.is_expired()
