"""Endpoints da atividade de tarefas (rotas protegidas)."""

from __future__ import annotations

from fastapi import Depends

from atividades.adapters.http.base import BaseController
from atividades.adapters.http.dependencies import get_todo_service, require_session
from atividades.adapters.http.schemas import TodoCreateRequest, TodoListResponse
from atividades.core.models import Session
from atividades.core.services import TodoService


class TodosController(BaseController):
    """Cada rota devolve a lista rebuscada após a operação."""

    prefix = "/activities/todos"
    tags = ["Todos"]

    def _register_routes(self) -> None:
        self.router.add_api_route("", self.listar, methods=["GET"], response_model=TodoListResponse)
        self.router.add_api_route(
            "", self.adicionar, methods=["POST"], response_model=TodoListResponse, status_code=201
        )
        self.router.add_api_route(
            "/{todo_id}/toggle", self.alternar, methods=["PATCH"], response_model=TodoListResponse
        )
        self.router.add_api_route("/{todo_id}", self.remover, methods=["DELETE"], response_model=TodoListResponse)

    async def listar(
        self,
        session: Session = Depends(require_session),
        service: TodoService = Depends(get_todo_service),
    ) -> TodoListResponse:
        return TodoListResponse.from_todos(await service.listar(session.user_id))

    async def adicionar(
        self,
        payload: TodoCreateRequest,
        session: Session = Depends(require_session),
        service: TodoService = Depends(get_todo_service),
    ) -> TodoListResponse:
        self.log_request("adicionar", {"usuario": session.user_id})
        return TodoListResponse.from_todos(await service.adicionar(session.user_id, payload.title))

    async def alternar(
        self,
        todo_id: str,
        session: Session = Depends(require_session),
        service: TodoService = Depends(get_todo_service),
    ) -> TodoListResponse:
        return TodoListResponse.from_todos(await service.alternar(session.user_id, todo_id))

    async def remover(
        self,
        todo_id: str,
        session: Session = Depends(require_session),
        service: TodoService = Depends(get_todo_service),
    ) -> TodoListResponse:
        return TodoListResponse.from_todos(await service.remover(session.user_id, todo_id))


controller = TodosController()
router = controller.router

__all__ = ["router", "TodosController"]
