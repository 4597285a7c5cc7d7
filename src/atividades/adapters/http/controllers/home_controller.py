"""Página inicial e barra de navegação."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends

from atividades.adapters.http.base import BaseController
from atividades.adapters.http.dependencies import get_request_session
from atividades.adapters.http.schemas import HomeResponse, NavbarResponse
from atividades.adapters.http.views import build_home, build_navbar
from atividades.core.models import Session


class HomeController(BaseController):
    tags = ["Home"]

    def _register_routes(self) -> None:
        self.router.add_api_route("/", self.home, methods=["GET"], response_model=HomeResponse)
        self.router.add_api_route("/navbar", self.navbar, methods=["GET"], response_model=NavbarResponse)

    async def home(self, session: Optional[Session] = Depends(get_request_session)) -> HomeResponse:
        return build_home(session)

    async def navbar(
        self,
        path: str = "/",
        session: Optional[Session] = Depends(get_request_session),
    ) -> NavbarResponse:
        """Barra de navegação para a rota informada em ``?path=``."""
        return build_navbar(session, path)


controller = HomeController()
router = controller.router

__all__ = ["router", "HomeController"]
