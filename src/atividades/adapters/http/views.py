"""
Views da aplicação: barra de navegação e página inicial.

Funções puras sobre a sessão recebida explicitamente.
"""

from __future__ import annotations

from typing import Optional

from atividades.adapters.http.schemas import HomeResponse, NavbarResponse, NavLink
from atividades.config.constants import ACTIVITIES, PUBLIC_PATHS
from atividades.core.models import Session

HOME_DESCRIPTION = (
    "Use the navigation bar to explore different activities like your To-Do List, "
    "Drive, Food Reviews, Pokémon Reviews, and Markdown Notes."
)


def build_navbar(session: Optional[Session], path: str, *, embedded: bool = False) -> NavbarResponse:
    """
    Monta a barra de navegação.

    Args:
        session: Sessão atual (None quando ausente)
        path: Rota em exibição; rotas públicas não mostram a barra
        embedded: Barra desenhada pela própria página, ignorando a regra de rota

    Returns:
        NavbarResponse com links e ações conforme a sessão
    """
    rota = path.rstrip("/") or "/"
    visible = session is not None and (embedded or rota not in PUBLIC_PATHS)

    if session is None:
        return NavbarResponse(visible=visible, links=[NavLink(label="Login", href="/")])

    return NavbarResponse(
        visible=visible,
        links=[NavLink(label=label, href=href) for label, href in ACTIVITIES],
        user_email=session.email,
        actions=["logout", "delete"],
    )


def build_home(session: Optional[Session]) -> HomeResponse:
    """Boas-vindas com sessão; convite para login ou cadastro sem ela."""
    if session is None:
        return HomeResponse(
            signed_in=False,
            title="Login / Signup",
            message="Sign in with your email and password, or create a new account.",
        )
    return HomeResponse(
        signed_in=True,
        title=f"Welcome, {session.user.display_name} 👋",
        message=HOME_DESCRIPTION,
        navbar=build_navbar(session, "/", embedded=True),
    )
